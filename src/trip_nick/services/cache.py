# src/trip_nick/services/cache.py
"""In-process cache for post listing pages."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Hashable
from typing import Any

logger = logging.getLogger(__name__)

__all__ = ["PostListingCache"]


class PostListingCache:
    """Time-bounded cache of rendered post listings.

    Entries expire ``ttl_seconds`` after they were stored. Any write to the
    post tables must call :meth:`invalidate`, which drops every entry and
    records when that happened.
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Create an empty cache.

        Args:
            ttl_seconds: Lifetime of a stored entry. Zero or less disables caching.
            clock: Monotonic time source, injectable for tests.
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[Hashable, tuple[float, Any]] = {}
        self.last_invalidated: float | None = None

    def get(self, key: Hashable) -> Any | None:
        """Return the cached value for ``key`` or ``None`` when absent or stale."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            del self._entries[key]
            return None
        return value

    def set(self, key: Hashable, value: Any) -> None:
        if self.ttl_seconds <= 0:
            return
        self._entries[key] = (self._clock(), value)

    def invalidate(self) -> None:
        """Drop every cached listing."""
        if self._entries:
            logger.debug("Invalidating %d cached post listings", len(self._entries))
        self._entries.clear()
        self.last_invalidated = self._clock()

    def __len__(self) -> int:
        return len(self._entries)
