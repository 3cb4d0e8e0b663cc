"""
Session-scoped caches for parsed data files and resolved keys.
"""

import logging
import threading
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class LookupCache:
    """
    Two-tier cache for one session.

    ``files`` maps an absolute data file path to its parsed content and
    ``resolved`` maps a key to its final value. ``lock`` guards every
    check-then-populate on either tier.
    """

    def __init__(self, session_id: str = "default"):
        self.session_id = session_id
        self.files: Dict[str, Dict[str, Any]] = {}
        self.resolved: Dict[str, Any] = {}
        self.lock = threading.RLock()

    def clear(self) -> None:
        """Drop both tiers."""
        with self.lock:
            self.files.clear()
            self.resolved.clear()

    def stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self.lock:
            return {
                "session": self.session_id,
                "files": len(self.files),
                "resolved_keys": len(self.resolved),
            }


class CacheRegistry:
    """Owns the caches of every live session, keyed by session id."""

    def __init__(self):
        self._caches: Dict[str, LookupCache] = {}
        self._lock = threading.Lock()

    def cache(self, session_id: str) -> LookupCache:
        """
        Get the cache for a session, creating it on first access.

        Args:
            session_id: Opaque session identifier, e.g. a host name

        Returns:
            The session's LookupCache
        """
        with self._lock:
            cache = self._caches.get(session_id)
            if cache is None:
                cache = LookupCache(session_id)
                self._caches[session_id] = cache
                logger.debug(f"Created lookup cache for session: {session_id}")
            return cache

    def discard(self, session_id: str) -> bool:
        """
        Drop both cache tiers of a session.

        Returns:
            True if the session had a cache, False otherwise
        """
        with self._lock:
            cache = self._caches.pop(session_id, None)
        if cache is None:
            return False
        cache.clear()
        logger.debug(f"Discarded lookup cache for session: {session_id}")
        return True

    def sessions(self) -> List[str]:
        """Session ids with a live cache."""
        with self._lock:
            return list(self._caches)

    def stats(self) -> Dict[str, Any]:
        """Get statistics for every live session."""
        with self._lock:
            caches = list(self._caches.values())
        return {
            "total_sessions": len(caches),
            "sessions": [cache.stats() for cache in caches],
        }
