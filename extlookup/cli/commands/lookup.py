"""Lookup and file listing command implementations."""

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any, Dict

import yaml

from extlookup.exceptions import ConfigValidationError, ExtlookupError
from extlookup.loader import ConfigLoader, LookupConfig
from extlookup.lookup import CacheRegistry, LookupEngine
from extlookup.variables import ChainResolver, MappingResolver, environment_variables


logger = logging.getLogger(__name__)


def parse_variables(args: Namespace) -> Dict[str, str]:
    """Parse variables from command line arguments."""
    variables = {}

    # Parse variables from JSON file
    if args.var_file:
        var_file = Path(args.var_file)
        if not var_file.exists():
            raise FileNotFoundError(f"Variable file not found: {var_file}")

        with open(var_file, 'r') as f:
            file_variables = json.load(f)
            if not isinstance(file_variables, dict):
                raise ValueError(f"Variable file must contain a JSON object, got {type(file_variables).__name__}")

            # Convert all values to strings
            for key, value in file_variables.items():
                variables[str(key)] = str(value)

    # key=value pairs win over the file
    if args.var:
        for item in args.var:
            if '=' not in item:
                raise ValueError(f"Invalid variable format: {item}. Expected KEY=VALUE")
            key, value = item.split('=', 1)
            variables[key] = value

    return variables


def setup_logging(args: Namespace) -> None:
    """Configure logging from --log-level, --debug and --quiet."""
    log_level = logging.WARNING if args.log_level == 'warn' else getattr(logging, args.log_level.upper())
    if args.debug:
        log_level = logging.DEBUG
    elif args.quiet:
        log_level = logging.ERROR

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )


def load_config(args: Namespace) -> LookupConfig:
    """Load the config file and apply command line overrides."""
    config = ConfigLoader().load(Path(args.config) if args.config else None)
    if args.datadir:
        config.datadir = args.datadir
    if args.precedence:
        config.precedence = list(args.precedence)
    if args.session:
        config.session = args.session
    return config


def build_engine(args: Namespace, registry: CacheRegistry) -> LookupEngine:
    """Build an engine for the configured session.

    Variables resolve from --var/--var-file first, then the config file,
    then EXTLOOKUP_VAR_* environment entries.
    """
    config = load_config(args)
    resolver = ChainResolver(
        MappingResolver(parse_variables(args)),
        MappingResolver(config.variables),
        MappingResolver(environment_variables()),
    )
    logger.debug(f"Using datadir {config.datadir!r} with precedence {config.precedence}")
    return LookupEngine(
        config.datadir,
        config.precedence,
        resolver,
        cache=registry.cache(config.session),
    )


def format_value(value: Any, output_format: str) -> str:
    """Render a resolved value for printing."""
    if output_format == 'json':
        return json.dumps(value, indent=2)
    if output_format == 'yaml':
        return yaml.safe_dump(value, default_flow_style=False, sort_keys=False).rstrip('\n')
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return '\n'.join(str(item) for item in value)
    return yaml.safe_dump(value, default_flow_style=False, sort_keys=False).rstrip('\n')


def lookup_key(args: Namespace) -> int:
    """Resolve a key and print its value."""
    setup_logging(args)

    try:
        engine = build_engine(args, CacheRegistry())
        value = engine.resolve(*args.args)
    except ConfigValidationError as e:
        for error in e.errors:
            logger.error(f"Validation error: {error.message}")
        return e.exit_code
    except ExtlookupError as e:
        logger.error(str(e))
        return e.exit_code
    except (OSError, ValueError) as e:
        logger.error(str(e))
        return 1

    print(format_value(value, args.format))
    return 0


def list_files(args: Namespace) -> int:
    """Print the data files a lookup would search, in order."""
    setup_logging(args)

    try:
        engine = build_engine(args, CacheRegistry())
        datafiles = engine.files(args.datafile)
    except ConfigValidationError as e:
        for error in e.errors:
            logger.error(f"Validation error: {error.message}")
        return e.exit_code
    except ExtlookupError as e:
        logger.error(str(e))
        return e.exit_code
    except (OSError, ValueError) as e:
        logger.error(str(e))
        return 1

    for path in datafiles:
        print(path)
    return 0
