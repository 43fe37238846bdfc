"""
Storage contracts the lifecycle core writes and reads through.

The application ledger is the only writer of application documents. Job
and candidate snapshots come from collaborators the core does not own,
so their contracts are read-only.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterator, Optional

from hirepath.data.models import Application, CandidateProfile, JobPosting
from hirepath.utils.constants import ApplicationStatus


class ApplicationLedger(ABC):
    """
    Persistence abstraction for applications.

    ``save`` must be atomic with respect to the uniqueness invariant: two
    live applications for the same (job, candidate) pair can never both be
    committed. Saving an existing application succeeds only when the stored
    version still equals ``application.version``; the committed copy comes
    back with the version incremented.
    """

    PAGE_SIZE = 100

    @abstractmethod
    def find(self, job_id: str, candidate_id: str) -> Optional[Application]:
        """Live application for the pair, else the most recent withdrawn one."""

    @abstractmethod
    def get_by_id(self, application_id: str) -> Optional[Application]:
        """Application by id, or None."""

    @abstractmethod
    def save(self, application: Application) -> Application:
        """
        Commit an application and return the stored copy.

        Raises:
            DuplicateApplication: a live application already exists for the pair
            ConcurrentModification: the stored version moved on since it was read
            StorageUnavailable: the backing store failed or timed out
        """

    @abstractmethod
    def list_by_candidate(
        self,
        candidate_id: str,
        skip: int = 0,
        limit: int = 100,
        include_withdrawn: bool = True,
    ) -> list[Application]:
        """Applications of a candidate, newest first."""

    @abstractmethod
    def list_by_job(
        self,
        job_id: str,
        skip: int = 0,
        limit: int = 100,
        status: Optional[ApplicationStatus] = None,
    ) -> list[Application]:
        """Applications for a job, newest first."""

    def active_job_ids(self, candidate_id: str) -> set[str]:
        """Job ids the candidate holds a non-withdrawn application for."""
        job_ids: set[str] = set()
        skip = 0
        while True:
            page = self.list_by_candidate(
                candidate_id, skip=skip, limit=self.PAGE_SIZE, include_withdrawn=False
            )
            job_ids.update(a.job_id for a in page)
            if len(page) < self.PAGE_SIZE:
                return job_ids
            skip += self.PAGE_SIZE


class JobCatalog(ABC):
    """Read-only view of the job catalog."""

    @abstractmethod
    def get(self, job_id: str) -> Optional[JobPosting]:
        """Posting by id, or None."""

    @abstractmethod
    def iter_open(self, now: datetime) -> Iterator[JobPosting]:
        """Postings that are active and not past their deadline at ``now``."""


class CandidateDirectory(ABC):
    """Read-only view of candidate profiles."""

    @abstractmethod
    def get(self, candidate_id: str) -> Optional[CandidateProfile]:
        """Profile by id, or None."""
