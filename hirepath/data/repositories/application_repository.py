"""
Application repository for HirePath.

MongoDB-backed application ledger. Uniqueness of the live application per
(job, candidate) is enforced by a partial unique index, and updates are
guarded by the document version so concurrent writers never lose changes.
"""

from typing import Any, Optional

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from hirepath.core.errors import ConcurrentModification, DuplicateApplication
from hirepath.data.database import APPLICATIONS_COLLECTION
from hirepath.data.models import Application, utcnow
from hirepath.utils.constants import ApplicationStatus
from hirepath.utils.logger import get_logger

from .base import BaseRepository, storage_guard
from .ledger import ApplicationLedger

logger = get_logger(__name__)


class ApplicationRepository(BaseRepository[Application], ApplicationLedger):
    """Repository for application document operations."""

    @property
    def collection_name(self) -> str:
        return APPLICATIONS_COLLECTION

    @property
    def model_class(self) -> type[Application]:
        return Application

    # -------------------------------------------------------------------------
    # Query Operations
    # -------------------------------------------------------------------------

    def find(
        self,
        job_id: str,
        candidate_id: str,
    ) -> Optional[Application]:
        """Live application for the pair, else the most recent withdrawn one."""
        return self.find_one(
            {"job_id": job_id, "candidate_id": candidate_id},
            sort=[("withdrawn", 1), ("created_at", -1)],
        )

    def get_by_id(self, application_id: str | ObjectId) -> Optional[Application]:
        if not isinstance(application_id, ObjectId) and not ObjectId.is_valid(application_id):
            return None
        return super().get_by_id(application_id)

    def list_by_candidate(
        self,
        candidate_id: str,
        skip: int = 0,
        limit: int = 100,
        include_withdrawn: bool = True,
    ) -> list[Application]:
        query: dict[str, Any] = {"candidate_id": candidate_id}
        if not include_withdrawn:
            query["withdrawn"] = False
        return self.find_many(query, sort=[("created_at", -1)], skip=skip, limit=limit)

    def list_by_job(
        self,
        job_id: str,
        skip: int = 0,
        limit: int = 100,
        status: Optional[ApplicationStatus] = None,
    ) -> list[Application]:
        query: dict[str, Any] = {"job_id": job_id}
        if status is not None:
            query["status"] = ApplicationStatus(status).value
        return self.find_many(query, sort=[("created_at", -1)], skip=skip, limit=limit)

    def active_job_ids(self, candidate_id: str) -> set[str]:
        collection = self.collection
        with storage_guard("applications.distinct", candidate_id=candidate_id):
            job_ids = collection.distinct(
                "job_id", {"candidate_id": candidate_id, "withdrawn": False}
            )
        return set(job_ids)

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    def save(self, application: Application) -> Application:
        if application.id is None:
            return self._insert(application)
        return self._replace(application)

    def _insert(self, application: Application) -> Application:
        collection = self.collection
        now = utcnow()
        stored = application.model_copy(
            update={"id": ObjectId(), "version": 1, "created_at": now, "updated_at": now}
        )
        context = {"job_id": application.job_id, "candidate_id": application.candidate_id}

        try:
            with storage_guard("applications.insert", **context):
                collection.insert_one(stored.model_dump_mongo())
        except DuplicateKeyError as e:
            raise DuplicateApplication(
                f"Candidate {application.candidate_id} already has an active "
                f"application for job {application.job_id}",
                attempted_status=ApplicationStatus.SUBMITTED.value,
                **context,
            ) from e

        logger.debug(f"Created application document: {stored.id}")
        return stored

    def _replace(self, application: Application) -> Application:
        collection = self.collection
        stored = application.model_copy(
            update={"version": application.version + 1, "updated_at": utcnow()}
        )
        document = stored.model_dump_mongo()
        document.pop("_id", None)
        context = {
            "application_id": str(application.id),
            "job_id": application.job_id,
            "candidate_id": application.candidate_id,
            "attempted_status": ApplicationStatus(application.status).value,
        }

        try:
            with storage_guard("applications.replace", **context):
                result = collection.replace_one(
                    {"_id": application.id, "version": application.version},
                    document,
                )
        except DuplicateKeyError as e:
            raise DuplicateApplication(
                "Another active application exists for this job and candidate",
                **context,
            ) from e

        if result.matched_count == 0:
            raise ConcurrentModification(
                f"Application {application.id} changed since version {application.version}",
                **context,
            )

        logger.debug(f"Updated application {application.id} to version {stored.version}")
        return stored


# Singleton instance
_application_repository: Optional[ApplicationRepository] = None


def get_application_repository() -> ApplicationRepository:
    """Get the application repository singleton instance."""
    global _application_repository
    if _application_repository is None:
        _application_repository = ApplicationRepository()
    return _application_repository
