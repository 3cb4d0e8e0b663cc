"""Lookup configuration loading and strict validation."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from extlookup.exceptions import ConfigValidationError, ValidationError


DATADIR_ENV = 'EXTLOOKUP_DATADIR'


@dataclass
class LookupConfig:
    """Where to look and what variables are in scope."""
    datadir: str = ""
    precedence: List[str] = field(default_factory=list)
    variables: Dict[str, str] = field(default_factory=dict)
    session: str = "default"


class ConfigLoader:
    """Loads and validates lookup configuration YAML."""

    KNOWN_FIELDS = {'datadir', 'precedence', 'variables', 'session'}

    def __init__(self):
        self.errors: List[ValidationError] = []

    def load(self, config_path: Optional[Path] = None) -> LookupConfig:
        """Load and validate a configuration file.

        Without a path, an empty configuration is returned. A missing
        ``datadir`` falls back to the EXTLOOKUP_DATADIR environment variable.
        """
        self.errors = []
        document: Dict[str, Any] = {}

        if config_path is not None:
            try:
                with open(config_path, 'r') as f:
                    loaded = yaml.load(f, Loader=yaml.SafeLoader)
            except (OSError, yaml.YAMLError) as e:
                self._add_error(f"Failed to load config: {e}")
                self._raise_validation_errors()

            if loaded is not None and not isinstance(loaded, dict):
                self._add_error("Config must be a YAML object/dictionary")
                self._raise_validation_errors()
            document = loaded or {}

        config = self.validate(document)
        if not config.datadir:
            config.datadir = os.environ.get(DATADIR_ENV, "")
        return config

    def validate(self, document: Dict[str, Any]) -> LookupConfig:
        """Validate a parsed configuration mapping."""
        self.errors = []

        for key in document:
            if key not in self.KNOWN_FIELDS:
                self._add_error(f"Unknown field '{key}'", str(key))

        config = LookupConfig()

        datadir = document.get('datadir')
        if datadir is not None:
            if isinstance(datadir, str):
                config.datadir = datadir
            else:
                self._add_error(f"'datadir' must be a string, got {type(datadir).__name__}", 'datadir')

        config.precedence = self._validate_precedence(document.get('precedence'))
        config.variables = self._validate_variables(document.get('variables'))

        session = document.get('session')
        if session is not None:
            if isinstance(session, str) and session:
                config.session = session
            else:
                self._add_error("'session' must be a non-empty string", 'session')

        if self.errors:
            self._raise_validation_errors()

        return config

    def _validate_precedence(self, precedence: Any) -> List[str]:
        if precedence is None:
            return []
        if not isinstance(precedence, list):
            self._add_error("'precedence' must be a list of path templates", 'precedence')
            return []

        entries = []
        for i, entry in enumerate(precedence):
            if not isinstance(entry, str):
                self._add_error("entry must be a string", f"precedence[{i}]")
            elif not entry:
                self._add_error("entry cannot be empty", f"precedence[{i}]")
            else:
                entries.append(entry)
        return entries

    def _validate_variables(self, variables: Any) -> Dict[str, str]:
        if variables is None:
            return {}
        if not isinstance(variables, dict):
            self._add_error("'variables' must be a dictionary", 'variables')
            return {}

        result = {}
        for name, value in variables.items():
            if isinstance(value, (dict, list)):
                self._add_error("variable values must be scalars", f"variables.{name}")
            elif isinstance(value, bool):
                result[str(name)] = 'true' if value else 'false'
            else:
                result[str(name)] = '' if value is None else str(value)
        return result

    def _add_error(self, message: str, path: str = ""):
        self.errors.append(ValidationError(message=message, path=path))

    def _raise_validation_errors(self):
        raise ConfigValidationError(self.errors)
