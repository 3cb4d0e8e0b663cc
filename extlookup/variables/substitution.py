"""
Variable substitution implementation.
Handles %{name} placeholders in strings, lists and mappings, resolving
each name through a caller-supplied resolver.
"""

import logging
import os
import re
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from ..exceptions import SubstitutionLimitError, UnresolvedVariableError
from ..values import value_kind


logger = logging.getLogger(__name__)

Resolver = Callable[[str], Any]

ENV_PREFIX = 'EXTLOOKUP_VAR_'


class VariableSubstitutor:
    """
    Handles variable substitution in strings and data structures.

    Scalars are rewritten until no placeholder remains, so a substituted
    value may itself contain another placeholder. Containers are rebuilt,
    never modified in place, and mapping keys are left alone.
    """

    # Leftmost %{name} placeholder
    VAR_PATTERN = re.compile(r'%\{(.+?)\}')
    # Escaped forms of the placeholder opener: \x25{ and \%{
    ESCAPE_PATTERN = re.compile(r'\\(?:x25|%)\{')

    DEFAULT_MAX_DEPTH = 32

    def __init__(self, resolver: Resolver, max_depth: int = DEFAULT_MAX_DEPTH):
        """
        Initialize the substitutor.

        Args:
            resolver: Callable returning the value of a variable name,
                raising UnresolvedVariableError when it is unknown
            max_depth: How deeply a substituted value may itself expand
                into further placeholders
        """
        self.resolver = resolver
        self.max_depth = max_depth

    def substitute(self, value: Union[str, List, Dict, Any]) -> Union[str, List, Dict, Any]:
        """
        Substitute variables in a value (string, list, or dict).

        Args:
            value: The value to substitute variables in

        Returns:
            Value with variables substituted

        Raises:
            UnresolvedVariableError: If a placeholder names an unknown variable
            SubstitutionLimitError: If a variable expands into itself or
                nests deeper than max_depth
        """
        kind = value_kind(value)
        if kind == "scalar":
            return self._substitute_string(self.unescape(value), ())
        elif kind == "list":
            return [self.substitute(item) for item in value]
        elif kind == "map":
            return {k: self.substitute(v) for k, v in value.items()}
        else:
            # Numbers, booleans and None pass through unchanged
            return value

    def unescape(self, text: str) -> str:
        """Turn escaped placeholder openers into interpolatable ones."""
        return self.ESCAPE_PATTERN.sub('%{', text)

    def _substitute_string(self, text: str, chain: Tuple[str, ...]) -> str:
        """
        Substitute variables in a string.

        Placeholders are resolved left to right. Each resolved value is
        expanded in turn, with the names already being expanded in chain.

        Args:
            text: String containing %{name} references
            chain: Names whose values are being expanded, outermost first

        Returns:
            String with variables substituted
        """
        def replace_var(match):
            name = match.group(1)
            if name in chain or len(chain) >= self.max_depth:
                raise SubstitutionLimitError(chain + (name,))
            value = self._render(self.resolver(name))
            return self._substitute_string(value, chain + (name,))

        return self.VAR_PATTERN.sub(replace_var, text)

    def _render(self, value: Any) -> str:
        if isinstance(value, bool):
            return 'true' if value else 'false'
        if value is None:
            return ''
        return str(value)


def substitute_variables(value: Any, resolver: Resolver) -> Any:
    """Substitute %{name} placeholders in value using resolver."""
    return VariableSubstitutor(resolver).substitute(value)


class MappingResolver:
    """
    Resolver over a plain mapping of variable names to values.

    Top-scope references such as ``::fqdn`` resolve the same as ``fqdn``.
    """

    def __init__(self, variables: Optional[Mapping[str, Any]] = None):
        self.variables = dict(variables or {})

    def __call__(self, name: str) -> Any:
        key = name[2:] if name.startswith('::') else name
        if key not in self.variables:
            raise UnresolvedVariableError(name)
        return self.variables[key]


class ChainResolver:
    """Resolver trying several resolvers in order until one knows the name."""

    def __init__(self, *resolvers: Resolver):
        self.resolvers = resolvers

    def __call__(self, name: str) -> Any:
        for resolver in self.resolvers:
            try:
                return resolver(name)
            except UnresolvedVariableError:
                continue
        raise UnresolvedVariableError(name)


def environment_variables(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Collect variables from EXTLOOKUP_VAR_<NAME> environment entries.

    Args:
        environ: Environment to read (defaults to os.environ)

    Returns:
        Mapping of lower-cased variable names to values
    """
    environ = os.environ if environ is None else environ
    variables = {}
    for key, value in environ.items():
        if key.startswith(ENV_PREFIX) and len(key) > len(ENV_PREFIX):
            variables[key[len(ENV_PREFIX):].lower()] = value
    if variables:
        logger.debug(f"Loaded {len(variables)} variables from environment")
    return variables
