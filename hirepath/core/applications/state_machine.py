"""
Application lifecycle state machine.

Primary review sequence:
    submitted -> under_review -> shortlisted -> interview_scheduled
    -> interviewed -> {offered, rejected}

Administrators may move an application forward, skipping intermediate
steps, and may reject it from any non-terminal status. Only the owning
candidate may withdraw. Nothing leaves offered, rejected or withdrawn.
"""

from datetime import datetime
from typing import Optional

from hirepath.core.errors import InvalidTransition
from hirepath.data.models import Application, StatusChange, utcnow
from hirepath.utils.constants import STATUS_ORDER, ActorRole, ApplicationStatus


class ApplicationStateMachine:
    """Validates and applies status transitions; holds no state of its own."""

    def check(
        self,
        application: Application,
        actor_id: str,
        actor_role: ActorRole,
        target: ApplicationStatus,
    ) -> None:
        """
        Validate a transition request.

        Raises:
            InvalidTransition: if the move is illegal or the actor may not make it
        """
        current = application.current_status
        target = ApplicationStatus(target)
        role = ActorRole(actor_role)

        def deny(reason: str) -> InvalidTransition:
            return InvalidTransition(
                f"Cannot move application from {current.value} to {target.value}: {reason}",
                application_id=str(application.id) if application.id else None,
                job_id=application.job_id,
                candidate_id=application.candidate_id,
                attempted_status=target.value,
                actor_id=actor_id,
            )

        if current.is_terminal:
            raise deny(f"{current.value} is a terminal status")

        if target == ApplicationStatus.WITHDRAWN:
            if role != ActorRole.CANDIDATE or actor_id != application.candidate_id:
                raise deny("only the owning candidate may withdraw")
            return

        if role != ActorRole.ADMINISTRATOR:
            raise deny("only an administrator may advance an application")

        if target == ApplicationStatus.REJECTED:
            return

        if STATUS_ORDER[target.value] <= STATUS_ORDER[current.value]:
            raise deny("backward and same-status moves are not allowed")

    def apply(
        self,
        application: Application,
        actor_id: str,
        actor_role: ActorRole,
        target: ApplicationStatus,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Application:
        """Validate and return an updated copy; the input is left untouched."""
        self.check(application, actor_id, actor_role, target)

        now = now or utcnow()
        cleaned = notes.strip() if notes else ""
        change = StatusChange(
            status=ApplicationStatus(target),
            timestamp=now,
            actor_id=actor_id,
            actor_role=ActorRole(actor_role),
            notes=cleaned or None,
        )

        update = {
            "status": ApplicationStatus(target).value,
            "history": [*application.history, change],
            "updated_at": now,
        }
        # Notes are only ever overwritten, never cleared
        if cleaned:
            update["notes"] = cleaned

        return application.model_copy(update=update, deep=True)
