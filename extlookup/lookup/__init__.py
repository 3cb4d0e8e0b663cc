"""
Lookup modules: data file store, precedence expansion, caches and engine.
"""

from .cache import CacheRegistry, LookupCache
from .engine import LookupEngine, extlookup, lookup_in_file
from .precedence import PrecedenceResolver
from .store import DataFileStore, DataFormat

__all__ = [
    "CacheRegistry",
    "DataFileStore",
    "DataFormat",
    "LookupCache",
    "LookupEngine",
    "PrecedenceResolver",
    "extlookup",
    "lookup_in_file",
]
