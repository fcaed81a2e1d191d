"""
Per-audience cache of signed assertions.

Each audience maps to at most one CachedAssertion. Entries are replaced
whole when a new token is signed and are never evicted in the background.
"""

import time
import logging
import threading
from dataclasses import dataclass
from typing import Dict, Optional

from jwt_access.config import EXPIRY_SKEW_SECONDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CachedAssertion:
    """A signed token bound to one audience."""

    audience: str
    token: str
    expires_at: int

    def is_expired(self, now: Optional[float] = None, skew: int = EXPIRY_SKEW_SECONDS) -> bool:
        """True once ``now`` is within ``skew`` seconds of the exp claim."""
        if now is None:
            now = time.time()
        return now >= self.expires_at - skew


class AssertionCache:
    """
    In-memory audience -> CachedAssertion map.

    Example:
        >>> cache = AssertionCache()
        >>> cache.set(CachedAssertion('https://svc.example.com/', token, exp))
        >>> entry = cache.get('https://svc.example.com/')
    """

    def __init__(self, skew: int = EXPIRY_SKEW_SECONDS):
        """
        Initialize the cache.

        Args:
            skew: Seconds before expiry at which an entry stops being served.
        """
        self._entries: Dict[str, CachedAssertion] = {}
        self._skew = skew
        self._lock = threading.Lock()
        self._stats = {"hits": 0, "misses": 0}

    def get(self, audience: str, now: Optional[float] = None) -> Optional[CachedAssertion]:
        """Return the live entry for audience, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(audience)
            if entry is None or entry.is_expired(now, self._skew):
                self._stats["misses"] += 1
                return None

            self._stats["hits"] += 1
            return entry

    def set(self, entry: CachedAssertion) -> None:
        """Store entry, replacing any previous one for the same audience."""
        with self._lock:
            if entry.audience in self._entries:
                logger.debug(f"Replacing cached token for {entry.audience}")
            self._entries[entry.audience] = entry

    def clear(self) -> None:
        """Drop all entries."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, audience: str) -> bool:
        return audience in self._entries

    @property
    def stats(self) -> Dict[str, int]:
        """Return cache statistics."""
        return {**self._stats, "size": len(self._entries)}
