"""Tests for %{name} variable substitution."""

import pytest

from extlookup.exceptions import SubstitutionLimitError, UnresolvedVariableError
from extlookup.variables import (
    ChainResolver,
    MappingResolver,
    VariableSubstitutor,
    environment_variables,
    substitute_variables,
)


class TestVariableSubstitutor:
    """Test substitution over scalars, lists and mappings."""

    def setup_method(self):
        """Set up test fixtures."""
        self.resolver = MappingResolver({
            'foobar': 'myfoobar',
            'domain': 'example.com',
            'fqdn': 'web1.%{domain}',
            'loop': 'again %{loop}',
        })
        self.substitutor = VariableSubstitutor(self.resolver)

    def test_scalar_substitution(self):
        """Placeholders anywhere in a string are replaced."""
        assert self.substitutor.substitute('%{foobar}') == 'myfoobar'
        assert self.substitutor.substitute('val%{foobar}ue') == 'valmyfoobarue'

    def test_repeated_placeholder_replaced_everywhere(self):
        """Every occurrence of the same placeholder is replaced."""
        result = self.substitutor.substitute('%{foobar}/%{foobar}')
        assert result == 'myfoobar/myfoobar'

    def test_substituted_value_is_expanded_again(self):
        """A substituted value holding a placeholder is resolved too."""
        assert self.substitutor.substitute('host=%{fqdn}') == 'host=web1.example.com'

    def test_list_substitution_preserves_order(self):
        """Lists are substituted element-wise."""
        result = self.substitutor.substitute(['before', '%{foobar}', 'after'])
        assert result == ['before', 'myfoobar', 'after']

    def test_map_substitution_leaves_keys_alone(self):
        """Mapping values are substituted; keys are not."""
        value = {'%{foobar}': 'x', 'v1': '%{foobar}', 'v2': ['%{domain}']}
        result = self.substitutor.substitute(value)
        assert result == {'%{foobar}': 'x', 'v1': 'myfoobar', 'v2': ['example.com']}
        assert list(result) == ['%{foobar}', 'v1', 'v2']

    def test_input_is_not_mutated(self):
        """Containers are rebuilt rather than modified."""
        value = {'v1': ['%{foobar}']}
        self.substitutor.substitute(value)
        assert value == {'v1': ['%{foobar}']}

    def test_other_values_pass_through(self):
        """Numbers, booleans and None are returned unchanged."""
        assert self.substitutor.substitute(42) == 42
        assert self.substitutor.substitute(True) is True
        assert self.substitutor.substitute(None) is None

    def test_escaped_placeholder_is_unescaped_first(self):
        """Escaped placeholder openers are interpolated."""
        assert self.substitutor.substitute('\\x25{foobar}') == 'myfoobar'
        assert self.substitutor.substitute('\\%{foobar}') == 'myfoobar'

    def test_unknown_variable_raises(self):
        """An unknown variable fails the whole substitution."""
        with pytest.raises(UnresolvedVariableError) as exc_info:
            self.substitutor.substitute(['ok', 'bad %{missing}'])

        assert exc_info.value.name == 'missing'
        assert exc_info.value.exit_code == 2

    def test_self_referential_value_is_stopped(self):
        """A value that expands into itself fails instead of looping."""
        with pytest.raises(SubstitutionLimitError) as exc_info:
            self.substitutor.substitute('%{loop}')

        assert exc_info.value.chain == ('loop', 'loop')

    def test_indirect_cycle_is_stopped(self):
        substitutor = VariableSubstitutor(MappingResolver({'a': '%{b}', 'b': 'x%{a}'}))
        with pytest.raises(SubstitutionLimitError) as exc_info:
            substitutor.substitute('%{a}')

        assert exc_info.value.chain == ('a', 'b', 'a')

    def test_many_distinct_variables_in_one_string(self):
        """The depth limit does not cap how many placeholders a string holds."""
        count = VariableSubstitutor.DEFAULT_MAX_DEPTH + 8
        substitutor = VariableSubstitutor(MappingResolver({f'v{i}': str(i) for i in range(count)}))
        text = ''.join(f'%{{v{i}}}' for i in range(count))

        assert substitutor.substitute(text) == ''.join(str(i) for i in range(count))

    def test_nesting_deeper_than_limit_is_stopped(self):
        variables = {f'v{i}': f'%{{v{i + 1}}}' for i in range(5)}
        variables['v5'] = 'end'
        resolver = MappingResolver(variables)

        assert VariableSubstitutor(resolver, max_depth=6).substitute('%{v0}') == 'end'
        with pytest.raises(SubstitutionLimitError):
            VariableSubstitutor(resolver, max_depth=5).substitute('%{v0}')

    def test_non_string_variable_values_are_rendered(self):
        """Booleans render as true/false, other values via str()."""
        substitutor = VariableSubstitutor(MappingResolver({'flag': True, 'port': 8080}))
        assert substitutor.substitute('%{flag}:%{port}') == 'true:8080'

    def test_substitute_variables_helper(self):
        """The module-level helper matches the class behaviour."""
        assert substitute_variables(['%{foobar}'], self.resolver) == ['myfoobar']


class TestResolvers:
    """Test the bundled resolver implementations."""

    def test_mapping_resolver_accepts_top_scope_prefix(self):
        """'::name' resolves the same as 'name'."""
        resolver = MappingResolver({'fqdn': 'myfqdn'})
        assert resolver('::fqdn') == 'myfqdn'
        assert resolver('fqdn') == 'myfqdn'

    def test_mapping_resolver_unknown_name(self):
        """Unknown names raise UnresolvedVariableError."""
        with pytest.raises(UnresolvedVariableError):
            MappingResolver({})('nope')

    def test_chain_resolver_order(self):
        """Earlier resolvers win; later ones fill gaps."""
        resolver = ChainResolver(
            MappingResolver({'a': 'first'}),
            MappingResolver({'a': 'second', 'b': 'fallback'}),
        )
        assert resolver('a') == 'first'
        assert resolver('b') == 'fallback'
        with pytest.raises(UnresolvedVariableError):
            resolver('c')

    def test_environment_variables(self):
        """EXTLOOKUP_VAR_* entries become lower-cased variables."""
        environ = {
            'EXTLOOKUP_VAR_FQDN': 'web1.example.com',
            'EXTLOOKUP_VAR_': 'ignored',
            'PATH': '/usr/bin',
        }
        assert environment_variables(environ) == {'fqdn': 'web1.example.com'}
