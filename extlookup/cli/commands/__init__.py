"""CLI command handlers."""

from .lookup import list_files, lookup_key

__all__ = ['list_files', 'lookup_key']
