"""
In-memory cache of parse results keyed by endpoint URL.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from ai_txt.models import ParseResult


@dataclass(slots=True)
class CacheEntry:
    """Cached result plus the validator needed to revalidate it."""

    result: ParseResult
    etag: Optional[str]
    expires_at: float


class PolicyCache:
    """TTL cache with a size cap; the oldest entry is evicted first.

    Expired entries stay around so their ETag can be sent with the next
    request and a ``304 Not Modified`` can revive them.
    """

    def __init__(
        self,
        ttl: float,
        max_size: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self.max_size = max_size
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    @property
    def enabled(self) -> bool:
        return self.ttl > 0

    def __len__(self) -> int:
        return len(self._entries)

    def entry(self, key: str) -> Optional[CacheEntry]:
        """Raw entry, fresh or not."""
        return self._entries.get(key)

    def get_fresh(self, key: str) -> Optional[ParseResult]:
        if not self.enabled:
            return None
        entry = self._entries.get(key)
        if entry is None or self._clock() >= entry.expires_at:
            return None
        return entry.result

    def put(self, key: str, result: ParseResult, etag: Optional[str] = None, ttl: Optional[float] = None) -> None:
        """Store *result*; *ttl* overrides the default lifetime (e.g. from Cache-Control)."""
        if not self.enabled:
            return
        if key not in self._entries and len(self._entries) >= self.max_size:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
        self._entries[key] = CacheEntry(result, etag, self._clock() + (self.ttl if ttl is None else ttl))

    def refresh(self, key: str) -> Optional[ParseResult]:
        """Extend an entry's lifetime after a successful revalidation."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        entry.expires_at = self._clock() + self.ttl
        return entry.result

    def clear(self) -> None:
        self._entries.clear()
