"""
Key resolution across the precedence-ordered data files.

A lookup walks the candidate files in order, takes the value from the
first file holding the key, interpolates it, and caches the result for
the session. When no file holds the key the caller's default is used,
and without a default the lookup fails.
"""

import logging
from typing import Any, List, Optional, Sequence

from ..exceptions import ArityError, NotFoundError
from ..values import Value
from ..variables.substitution import Resolver, VariableSubstitutor
from .cache import LookupCache
from .precedence import PrecedenceResolver
from .store import DataFileStore, DataFormat

logger = logging.getLogger(__name__)

MAX_ARGUMENTS = 3


class LookupEngine:
    """Resolves keys for one session against its data directory."""

    def __init__(
        self,
        datadir: str,
        precedence: Sequence[str],
        resolver: Resolver,
        cache: Optional[LookupCache] = None,
    ):
        """
        Initialize the engine.

        Args:
            datadir: Directory holding the data files
            precedence: Ordered path templates, searched first to last
            resolver: Variable resolver for %{name} placeholders
            cache: Session cache; a private one is created when omitted
        """
        self.datadir = datadir
        self.precedence = precedence
        self.cache = cache if cache is not None else LookupCache()
        self.substitutor = VariableSubstitutor(resolver)
        self.store = DataFileStore(self.cache.files)
        self.precedence_resolver = PrecedenceResolver(datadir, precedence, self.substitutor)

    def files(self, extra_file: Optional[str] = None) -> List[str]:
        """Data files a lookup would search, highest priority first."""
        return self.precedence_resolver.resolve(extra_file)

    def resolve(self, *args: Any) -> Value:
        """
        Resolve a key from the raw lookup arguments.

        Args:
            *args: ``key``, then optionally ``default`` and ``extra_file``.
                A None default means no default; a None or empty
                extra_file is ignored.

        Returns:
            The matched value shaped and interpolated, or the default

        Raises:
            ArityError: If called with no arguments or more than three
            NotFoundError: If no file holds the key and no default is given
            UnresolvedVariableError: If a placeholder cannot be resolved
            DataFileParseError: If a candidate file is malformed
        """
        if not args or len(args) > MAX_ARGUMENTS:
            raise ArityError(len(args))

        key = args[0]
        default = args[1] if len(args) > 1 else None
        extra_file = args[2] if len(args) > 2 else None

        with self.cache.lock:
            if key in self.cache.resolved:
                logger.debug(f"Cache hit for key '{key}' in session {self.cache.session_id}")
                return self.cache.resolved[key]

            value = self._search(key, extra_file)
            if value is None:
                if default is None:
                    raise NotFoundError(key)
                logger.debug(f"No data file matched '{key}', using default")
                value = default

            self.cache.resolved[key] = value
            return value

    def _search(self, key: str, extra_file: Optional[str]) -> Optional[Value]:
        """Return the interpolated value from the first file holding key."""
        for path in self.files(extra_file):
            if DataFormat.from_path(path) is None:
                logger.warning(f"Skipping data file with unsupported extension: {path}")
                continue

            raw = self.store.load(path).get(key)
            if raw is not None:
                logger.info(f"Found '{key}' in {path}")
                return self.substitutor.substitute(raw)

        return None


def extlookup(
    *args: Any,
    datadir: str,
    precedence: Sequence[str],
    resolver: Resolver,
    cache: Optional[LookupCache] = None,
) -> Value:
    """Resolve a key in one call; see LookupEngine.resolve."""
    return LookupEngine(datadir, precedence, resolver, cache).resolve(*args)


def lookup_in_file(key: str, path: str, resolver: Resolver,
                   store: Optional[DataFileStore] = None) -> Optional[Value]:
    """
    Look a key up in a single data file.

    Args:
        key: Key to find
        path: .yaml or .csv data file to search
        resolver: Variable resolver for %{name} placeholders
        store: Store to parse through (a throwaway one when omitted)

    Returns:
        The shaped, interpolated value, or None if the file lacks the key
    """
    store = store if store is not None else DataFileStore()
    raw = store.load(path).get(key)
    if raw is None:
        return None
    return VariableSubstitutor(resolver).substitute(raw)
