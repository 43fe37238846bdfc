"""Per-(job, candidate) single-writer locks."""

import threading
from contextlib import contextmanager
from typing import Iterator

from hirepath.core.errors import StorageUnavailable


class _PairLock:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class PairLockRegistry:
    """
    Hands out one lock per (job_id, candidate_id) pair.

    A pair's lock exists only while some caller holds or waits on it, so the
    registry stays as small as the number of pairs in flight.
    """

    def __init__(self, timeout: float = 5.0) -> None:
        self.timeout = timeout
        self._locks: dict[tuple[str, str], _PairLock] = {}
        self._guard = threading.Lock()

    def _checkout(self, pair: tuple[str, str]) -> _PairLock:
        with self._guard:
            entry = self._locks.get(pair)
            if entry is None:
                entry = self._locks[pair] = _PairLock()
            entry.users += 1
            return entry

    def _checkin(self, pair: tuple[str, str], entry: _PairLock) -> None:
        with self._guard:
            entry.users -= 1
            if entry.users == 0:
                del self._locks[pair]

    @contextmanager
    def hold(self, pair: tuple[str, str]) -> Iterator[None]:
        """Hold the pair lock, raising StorageUnavailable on timeout."""
        entry = self._checkout(pair)
        try:
            if not entry.lock.acquire(timeout=self.timeout):
                job_id, candidate_id = pair
                raise StorageUnavailable(
                    f"Timed out after {self.timeout}s waiting for application lock",
                    job_id=job_id,
                    candidate_id=candidate_id,
                )
            try:
                yield
            finally:
                entry.lock.release()
        finally:
            self._checkin(pair, entry)

    def __len__(self) -> int:
        """Number of pairs currently held or awaited."""
        with self._guard:
            return len(self._locks)
