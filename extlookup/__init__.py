"""
Precedence-ordered external data lookup.

Resolves a key to a scalar, list or mapping by searching YAML and CSV data
files in precedence order, interpolating %{name} placeholders, and caching
results per session.
"""

from .exceptions import (
    ArityError,
    DataFileParseError,
    ExtlookupError,
    NotFoundError,
    SubstitutionLimitError,
    UnresolvedVariableError,
)
from .lookup import CacheRegistry, LookupCache, LookupEngine, extlookup, lookup_in_file
from .variables import MappingResolver, VariableSubstitutor, substitute_variables

__all__ = [
    'ArityError',
    'CacheRegistry',
    'DataFileParseError',
    'ExtlookupError',
    'LookupCache',
    'LookupEngine',
    'MappingResolver',
    'NotFoundError',
    'SubstitutionLimitError',
    'UnresolvedVariableError',
    'VariableSubstitutor',
    'extlookup',
    'lookup_in_file',
    'substitute_variables',
]
