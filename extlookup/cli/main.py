"""Main CLI entry point for extlookup."""

import argparse
import sys
from typing import Optional

from .commands import list_files, lookup_key


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Options shared by every subcommand."""
    parser.add_argument(
        '--config',
        type=str,
        help='Path to YAML config file (datadir, precedence, variables)'
    )
    parser.add_argument(
        '--datadir',
        type=str,
        help='Override the data directory'
    )
    parser.add_argument(
        '--precedence',
        action='append',
        metavar='TEMPLATE',
        help='Precedence entry (can be specified multiple times, replaces config)'
    )
    parser.add_argument(
        '--var',
        action='append',
        metavar='KEY=VALUE',
        help='Variables (can be specified multiple times)'
    )
    parser.add_argument(
        '--var-file',
        type=str,
        help='Path to JSON file containing variables'
    )
    parser.add_argument(
        '--session',
        type=str,
        help='Cache session identifier'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress non-error output'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default='warn',
        help='Set log level'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the extlookup CLI."""
    parser = argparse.ArgumentParser(
        prog='extlookup',
        description='Precedence-ordered external data lookup'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    lookup_parser = subparsers.add_parser('lookup', help='Resolve a key')
    lookup_parser.add_argument(
        'args',
        nargs='+',
        metavar='ARG',
        help='KEY, then optional DEFAULT and DATAFILE'
    )
    lookup_parser.add_argument(
        '--format',
        choices=['raw', 'yaml', 'json'],
        default='raw',
        help='Output format'
    )
    add_common_arguments(lookup_parser)

    files_parser = subparsers.add_parser('files', help='List data files in search order')
    files_parser.add_argument(
        'datafile',
        nargs='?',
        help='Extra data file searched first'
    )
    add_common_arguments(files_parser)

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    if parsed_args.command == 'lookup':
        return lookup_key(parsed_args)
    elif parsed_args.command == 'files':
        return list_files(parsed_args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
