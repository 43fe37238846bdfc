"""
Application data models for HirePath.

An application is created on submission and afterwards changes only
through lifecycle transitions. It is never deleted: withdrawal is a
terminal status, and every accepted change is appended to its history.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from hirepath.utils.constants import ActorRole, ApplicationStatus

from .base import BaseDocument, EmbeddedModel, utcnow


class StatusChange(EmbeddedModel):
    """One entry of an application's audit history."""

    status: ApplicationStatus
    timestamp: datetime = Field(default_factory=utcnow)
    actor_id: str
    actor_role: ActorRole
    notes: Optional[str] = None


class Application(BaseDocument):
    """
    Main application document linking a candidate to a job posting.

    ``version`` increases with every saved change and guards against lost
    updates between concurrent writers.
    """

    # References (owned by external collaborators)
    job_id: str
    candidate_id: str
    resume_ref: str

    cover_letter: Optional[str] = None

    # Lifecycle
    status: ApplicationStatus = ApplicationStatus.SUBMITTED
    notes: Optional[str] = None
    history: list[StatusChange] = Field(default_factory=list)

    version: int = Field(default=0, ge=0)

    @property
    def current_status(self) -> ApplicationStatus:
        """Status as an enum member regardless of how it was loaded."""
        return ApplicationStatus(self.status)

    @property
    def is_terminal(self) -> bool:
        """Check if no further transition is permitted."""
        return self.current_status.is_terminal

    @property
    def is_withdrawn(self) -> bool:
        """Withdrawn applications do not block a new submission."""
        return self.current_status == ApplicationStatus.WITHDRAWN

    @property
    def pair_key(self) -> tuple[str, str]:
        """The (job, candidate) pair this application belongs to."""
        return self.job_id, self.candidate_id

    @property
    def last_change(self) -> Optional[StatusChange]:
        """Most recent history entry."""
        return self.history[-1] if self.history else None

    def model_dump_mongo(self) -> dict[str, Any]:
        """Include the flag the partial unique index filters on."""
        data = super().model_dump_mongo()
        data["withdrawn"] = self.is_withdrawn
        return data


class ApplicationSubmit(BaseModel):
    """Schema for a candidate's submission request."""

    job_id: str = Field(..., min_length=1)
    candidate_id: str = Field(..., min_length=1)
    resume_ref: str = Field(..., min_length=1)
    cover_letter: Optional[str] = None


class ApplicationTransition(BaseModel):
    """Schema for a lifecycle transition request."""

    application_id: str = Field(..., min_length=1)
    actor_id: str = Field(..., min_length=1)
    actor_role: ActorRole
    target_status: ApplicationStatus
    notes: Optional[str] = None
