"""
Variable substitution module.
Resolves %{name} placeholders in lookup values and precedence entries.
"""

from .substitution import (
    ChainResolver,
    MappingResolver,
    VariableSubstitutor,
    environment_variables,
    substitute_variables,
)

__all__ = [
    'ChainResolver',
    'MappingResolver',
    'VariableSubstitutor',
    'environment_variables',
    'substitute_variables',
]
