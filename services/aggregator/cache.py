"""
In-memory TTL cache for aggregated results.

Entries are replaced wholesale once they are older than the TTL. There is no
per-record expiry and no eviction beyond the TTL check, so the map grows with
the number of distinct keys for the life of the process.

The clock is injectable so tests can control time.
"""

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Optional

from services.common.models import CanonicalRecord
from services.normalizer.text import fold

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 10 * 60
ALL = "all"
NONE = "none"
KEY_SEPARATOR = "|"


def _key_part(value: Optional[str], default: str) -> str:
    folded = fold(value)
    return folded if folded else default


def build_cache_key(
    query: Optional[str] = None,
    location: Optional[str] = None,
    job_type: Optional[str] = None,
    tag_filters: Optional[Iterable[str]] = None,
) -> str:
    """
    Build a stable composite cache key.

    Each part is whitespace-normalized and lower-cased; absent parts become
    "all" (query, location, type) or "none" (filters). Filters are
    de-duplicated and sorted so their order does not matter.

    Examples:
        >>> build_cache_key("Data  Entry", None)
        'data entry|all|all|none'
        >>> build_cache_key(None, None, "remote", ["remote", "flexible-hours"])
        'all|all|remote|flexible-hours,remote'
    """
    filters = sorted({fold(f) for f in (tag_filters or ()) if fold(f)})
    return KEY_SEPARATOR.join(
        [
            _key_part(query, ALL),
            _key_part(location, ALL),
            _key_part(job_type, ALL),
            ",".join(filters) if filters else NONE,
        ]
    )


@dataclass(frozen=True)
class CacheEntry:
    """One cached aggregation result (always the unfiltered union)."""

    key: str
    payload: tuple[CanonicalRecord, ...]
    stored_at: float


class TTLCache:
    """
    Process-local cache mapping keys to CacheEntry.

    An entry is fresh while `clock() - stored_at < ttl_seconds`.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def now(self) -> float:
        return self._clock()

    def is_fresh(self, entry: CacheEntry) -> bool:
        return self.now() - entry.stored_at < self.ttl_seconds

    def get(self, key: str) -> Optional[CacheEntry]:
        """Return the entry for `key` if present and fresh, else None."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not self.is_fresh(entry):
            logger.debug("Cache entry stale", extra={"cache_key": key})
            return None
        return entry

    def peek(self, key: str) -> Optional[CacheEntry]:
        """Return the stored entry regardless of age."""
        return self._entries.get(key)

    def set(self, key: str, payload: Iterable[CanonicalRecord]) -> CacheEntry:
        """Store `payload` under `key`, replacing any previous entry."""
        entry = CacheEntry(key=key, payload=tuple(payload), stored_at=self.now())
        self._entries[key] = entry
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
