"""Extlookup exceptions."""

from typing import List, Tuple
from dataclasses import dataclass


class ExtlookupError(Exception):
    """Base class for every error raised while resolving a key.

    Each subclass carries the exit code the CLI maps it to.
    """

    exit_code = 1


class ArityError(ExtlookupError):
    """Raised when a lookup is called with the wrong number of arguments."""

    exit_code = 2

    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"extlookup(): wrong number of arguments ({count}; must be 1 to 3)"
        )


class UnresolvedVariableError(ExtlookupError):
    """Raised when a %{name} placeholder names an unknown variable."""

    exit_code = 2

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Undefined variable: '{name}'")


class SubstitutionLimitError(ExtlookupError):
    """Raised when a variable expands into itself or nests too deeply."""

    exit_code = 2

    def __init__(self, chain: Tuple[str, ...]):
        self.chain = chain
        super().__init__(
            f"Variable substitution does not settle: {' -> '.join(chain)}"
        )


class DataFileParseError(ExtlookupError):
    """Raised when a data file cannot be parsed."""

    exit_code = 3

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse data file {path}: {reason}")


class NotFoundError(ExtlookupError):
    """Raised when no data file holds the key and no default was given."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(
            f"No match found for '{key}' in any data file during extlookup()"
        )


@dataclass
class ValidationError:
    """Single configuration validation error."""
    message: str
    path: str = ""


class ConfigValidationError(ExtlookupError):
    """Raised when configuration validation fails.

    The loader collects every problem first so the CLI can report them
    together and map them to one exit code.
    """

    exit_code = 2

    def __init__(self, errors: List[ValidationError]):
        self.errors = errors

        messages = []
        for error in errors:
            if error.path:
                messages.append(f"Validation error at {error.path}: {error.message}")
            else:
                messages.append(f"Validation error: {error.message}")

        super().__init__("\n".join(messages))
