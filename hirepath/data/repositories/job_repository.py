"""
Job repository for HirePath.

Read-only access to the job catalog's postings. Open postings are
streamed from a cursor so large catalogs are never materialized at once.
"""

from datetime import datetime
from typing import Iterator, Optional

from hirepath.data.database import JOBS_COLLECTION
from hirepath.data.models import JobPosting, to_naive_utc
from hirepath.utils.logger import get_logger

from .base import BaseRepository, storage_guard
from .ledger import JobCatalog

logger = get_logger(__name__)


class JobRepository(BaseRepository[JobPosting], JobCatalog):
    """Repository for job posting snapshots."""

    @property
    def collection_name(self) -> str:
        return JOBS_COLLECTION

    @property
    def model_class(self) -> type[JobPosting]:
        return JobPosting

    def get(self, job_id: str) -> Optional[JobPosting]:
        return self.get_by_id(job_id)

    def iter_open(self, now: datetime) -> Iterator[JobPosting]:
        now = to_naive_utc(now)
        query = {
            "is_active": True,
            "$or": [{"deadline": None}, {"deadline": {"$gt": now}}],
        }
        cursor = self.collection.find(query).sort("posted_at", 1)

        with storage_guard("jobs.iter_open"):
            for document in cursor:
                yield self._to_model(document)


# Singleton instance
_job_repository: Optional[JobRepository] = None


def get_job_repository() -> JobRepository:
    """Get the job repository singleton instance."""
    global _job_repository
    if _job_repository is None:
        _job_repository = JobRepository()
    return _job_repository
