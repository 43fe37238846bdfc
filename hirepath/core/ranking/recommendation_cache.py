"""
Caller-owned cache for recommendation results.

The ranker never caches on its own. A caller that wants to absorb repeated
requests owns one of these explicitly and keys it by the version of the
job snapshot it ranked against, so a catalog change always misses.
"""

import threading
import time
from typing import Callable, Hashable, Iterable, Optional

from hirepath.core.matching import MatchResult
from hirepath.utils.config import get_settings
from hirepath.utils.logger import get_logger

logger = get_logger(__name__)

CacheKey = tuple[Hashable, str, int]


class RecommendationCache:
    """TTL cache keyed by (job set version, candidate id, limit)."""

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds is None:
            ttl_seconds = get_settings().matching.cache_ttl_seconds
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[CacheKey, tuple[float, tuple[MatchResult, ...]]] = {}
        self._lock = threading.Lock()

    def get(self, job_set_version: Hashable, candidate_id: str, limit: int) -> Optional[list[MatchResult]]:
        """Cached results, or None when missing or expired."""
        key = (job_set_version, candidate_id, limit)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, results = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
        return list(results)

    def put(
        self,
        job_set_version: Hashable,
        candidate_id: str,
        limit: int,
        results: Iterable[MatchResult],
    ) -> list[MatchResult]:
        stored = tuple(results)
        with self._lock:
            self._entries[(job_set_version, candidate_id, limit)] = (
                self._clock() + self.ttl_seconds,
                stored,
            )
        return list(stored)

    def get_or_compute(
        self,
        job_set_version: Hashable,
        candidate_id: str,
        limit: int,
        compute: Callable[[], Iterable[MatchResult]],
    ) -> list[MatchResult]:
        """Return cached results or materialize ``compute()`` and store it."""
        cached = self.get(job_set_version, candidate_id, limit)
        if cached is not None:
            return cached
        logger.debug(f"Recommendation cache miss for candidate {candidate_id}")
        return self.put(job_set_version, candidate_id, limit, compute())

    def invalidate(self, candidate_id: Optional[str] = None) -> int:
        """Drop entries for one candidate, or everything; returns the count."""
        with self._lock:
            if candidate_id is None:
                dropped = len(self._entries)
                self._entries.clear()
                return dropped
            keys = [k for k in self._entries if k[1] == candidate_id]
            for key in keys:
                del self._entries[key]
            return len(keys)

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]
            for key in expired:
                del self._entries[key]
            return len(expired)

    def __len__(self) -> int:
        return len(self._entries)
