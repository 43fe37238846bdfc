"""
In-process implementations of the storage contracts.

Used when the core is embedded without MongoDB and throughout the test
suite. The application ledger guards every operation with a single lock,
which makes ``save`` atomic with respect to the uniqueness invariant.
"""

import threading
from datetime import datetime
from typing import Iterable, Iterator, Optional

from bson import ObjectId

from hirepath.core.errors import (
    ConcurrentModification,
    DuplicateApplication,
    StorageUnavailable,
)
from hirepath.data.models import Application, CandidateProfile, JobPosting, utcnow
from hirepath.utils.constants import ApplicationStatus

from .ledger import ApplicationLedger, CandidateDirectory, JobCatalog


class InMemoryApplicationLedger(ApplicationLedger):
    """Thread-safe application ledger kept in a dictionary."""

    def __init__(self, lock_timeout: float = 5.0) -> None:
        self._documents: dict[str, Application] = {}
        self._lock = threading.RLock()
        self._lock_timeout = lock_timeout

    def _acquire(self, operation: str) -> None:
        if not self._lock.acquire(timeout=self._lock_timeout):
            raise StorageUnavailable(f"Ledger lock timed out during {operation}")

    def find(self, job_id: str, candidate_id: str) -> Optional[Application]:
        self._acquire("find")
        try:
            matches = [
                a for a in self._documents.values()
                if a.job_id == job_id and a.candidate_id == candidate_id
            ]
        finally:
            self._lock.release()
        if not matches:
            return None
        # Live first, then newest
        matches.sort(key=lambda a: (a.is_withdrawn, -a.created_at.timestamp()))
        return matches[0].model_copy(deep=True)

    def get_by_id(self, application_id: str) -> Optional[Application]:
        self._acquire("get_by_id")
        try:
            application = self._documents.get(str(application_id))
        finally:
            self._lock.release()
        return application.model_copy(deep=True) if application else None

    def save(self, application: Application) -> Application:
        self._acquire("save")
        try:
            if application.id is None:
                return self._insert(application)
            return self._replace(application)
        finally:
            self._lock.release()

    def _live_for_pair(self, job_id: str, candidate_id: str) -> Optional[Application]:
        for stored in self._documents.values():
            if (
                stored.job_id == job_id
                and stored.candidate_id == candidate_id
                and not stored.is_withdrawn
            ):
                return stored
        return None

    def _insert(self, application: Application) -> Application:
        existing = self._live_for_pair(application.job_id, application.candidate_id)
        if existing is not None and not application.is_withdrawn:
            raise DuplicateApplication(
                f"Candidate {application.candidate_id} already has an active "
                f"application for job {application.job_id}",
                application_id=str(existing.id),
                job_id=application.job_id,
                candidate_id=application.candidate_id,
                attempted_status=ApplicationStatus.SUBMITTED.value,
            )

        now = utcnow()
        stored = application.model_copy(
            update={"id": ObjectId(), "version": 1, "created_at": now, "updated_at": now},
            deep=True,
        )
        self._documents[str(stored.id)] = stored
        return stored.model_copy(deep=True)

    def _replace(self, application: Application) -> Application:
        key = str(application.id)
        current = self._documents.get(key)
        if current is None or current.version != application.version:
            raise ConcurrentModification(
                f"Application {key} changed since version {application.version}",
                application_id=key,
                job_id=application.job_id,
                candidate_id=application.candidate_id,
            )

        stored = application.model_copy(
            update={"version": application.version + 1, "updated_at": utcnow()},
            deep=True,
        )
        self._documents[key] = stored
        return stored.model_copy(deep=True)

    def _select(self, predicate, skip: int, limit: int) -> list[Application]:
        self._acquire("list")
        try:
            selected = [a for a in self._documents.values() if predicate(a)]
        finally:
            self._lock.release()
        selected.sort(key=lambda a: a.created_at, reverse=True)
        return [a.model_copy(deep=True) for a in selected[skip:skip + limit]]

    def list_by_candidate(
        self,
        candidate_id: str,
        skip: int = 0,
        limit: int = 100,
        include_withdrawn: bool = True,
    ) -> list[Application]:
        return self._select(
            lambda a: a.candidate_id == candidate_id and (include_withdrawn or not a.is_withdrawn),
            skip,
            limit,
        )

    def list_by_job(
        self,
        job_id: str,
        skip: int = 0,
        limit: int = 100,
        status: Optional[ApplicationStatus] = None,
    ) -> list[Application]:
        wanted = ApplicationStatus(status) if status is not None else None
        return self._select(
            lambda a: a.job_id == job_id and (wanted is None or a.current_status == wanted),
            skip,
            limit,
        )

    def __len__(self) -> int:
        return len(self._documents)


class InMemoryJobCatalog(JobCatalog):
    """Job catalog backed by a dictionary of immutable postings."""

    def __init__(self, jobs: Iterable[JobPosting] = ()) -> None:
        self._jobs: dict[str, JobPosting] = {}
        self.version = 0
        for job in jobs:
            self.put(job)

    def put(self, job: JobPosting) -> None:
        """Add or replace a posting; bumps the catalog version."""
        self._jobs[job.id] = job
        self.version += 1

    def get(self, job_id: str) -> Optional[JobPosting]:
        return self._jobs.get(job_id)

    def iter_open(self, now: datetime) -> Iterator[JobPosting]:
        for job in sorted(self._jobs.values(), key=lambda j: (j.posted_at, j.id)):
            if job.is_open_at(now):
                yield job


class InMemoryCandidateDirectory(CandidateDirectory):
    """Candidate directory backed by a dictionary."""

    def __init__(self, candidates: Iterable[CandidateProfile] = ()) -> None:
        self._candidates = {c.id: c for c in candidates}

    def put(self, candidate: CandidateProfile) -> None:
        self._candidates[candidate.id] = candidate

    def get(self, candidate_id: str) -> Optional[CandidateProfile]:
        return self._candidates.get(candidate_id)
