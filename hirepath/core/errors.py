"""
Error taxonomy for the application lifecycle.

Every error carries the context a caller needs to present a precise
message. The workflow entry points hand errors back inside an
``ApplicationResult`` instead of raising them.
"""

from dataclasses import dataclass
from typing import Any, Optional

from hirepath.data.models import Application


class ApplicationError(Exception):
    """Base class for recoverable lifecycle errors."""

    code = "application_error"

    def __init__(
        self,
        message: str,
        *,
        application_id: Optional[str] = None,
        job_id: Optional[str] = None,
        candidate_id: Optional[str] = None,
        attempted_status: Optional[str] = None,
        actor_id: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.application_id = application_id
        self.job_id = job_id
        self.candidate_id = candidate_id
        self.attempted_status = attempted_status
        self.actor_id = actor_id

    def to_dict(self) -> dict[str, Any]:
        """Context for logging and presentation."""
        return {
            "code": self.code,
            "message": self.message,
            "application_id": self.application_id,
            "job_id": self.job_id,
            "candidate_id": self.candidate_id,
            "attempted_status": self.attempted_status,
            "actor_id": self.actor_id,
        }


class DuplicateApplication(ApplicationError):
    """A non-withdrawn application already exists for the job and candidate."""

    code = "duplicate_application"


class JobClosed(ApplicationError):
    """The job is unknown, inactive, or past its deadline."""

    code = "job_closed"


class InvalidRequest(ApplicationError):
    """A submission with a blank identifier or resume reference."""

    code = "invalid_request"


class InvalidTransition(ApplicationError):
    """Illegal status change, or the actor may not perform it."""

    code = "invalid_transition"


class StorageUnavailable(ApplicationError):
    """The storage collaborator failed or timed out; retry with backoff."""

    code = "storage_unavailable"


class ApplicationNotFound(ApplicationError):
    """No application exists with the given id."""

    code = "application_not_found"


class CandidateNotFound(ApplicationError):
    """The identity collaborator has no profile for the candidate."""

    code = "candidate_not_found"


class ConcurrentModification(ApplicationError):
    """The stored application changed since it was read."""

    code = "concurrent_modification"


@dataclass(frozen=True)
class ApplicationResult:
    """Outcome of a submit or transition call."""

    application: Optional[Application] = None
    error: Optional[ApplicationError] = None

    @property
    def success(self) -> bool:
        return self.error is None

    def unwrap(self) -> Application:
        """Return the application, raising the carried error on failure."""
        if self.error is not None:
            raise self.error
        assert self.application is not None
        return self.application

    @classmethod
    def ok(cls, application: Application) -> "ApplicationResult":
        return cls(application=application)

    @classmethod
    def fail(cls, error: ApplicationError) -> "ApplicationResult":
        return cls(error=error)
