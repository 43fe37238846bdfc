"""
Application workflow service.

Entry point for submitting applications and moving them through their
lifecycle. Every call on the same (job, candidate) pair is serialized by a
pair lock, and every outcome comes back as an ``ApplicationResult``; the
lifecycle errors are never raised to the caller.
"""

from datetime import datetime
from typing import Any, Callable, Optional

from pydantic import ValidationError

from hirepath.core.errors import (
    ApplicationError,
    ApplicationNotFound,
    ApplicationResult,
    ConcurrentModification,
    DuplicateApplication,
    InvalidRequest,
    InvalidTransition,
    JobClosed,
    StorageUnavailable,
)
from hirepath.data.models import (
    Application,
    ApplicationSubmit,
    ApplicationTransition,
    StatusChange,
    utcnow,
)
from hirepath.data.repositories import ApplicationLedger, JobCatalog
from hirepath.utils.config import get_settings
from hirepath.utils.constants import ActorRole, ApplicationStatus, AuditAction
from hirepath.utils.logger import LoggerMixin, audit_log

from .locks import PairLockRegistry
from .state_machine import ApplicationStateMachine


class ApplicationService(LoggerMixin):
    """Submission and transition workflow over an application ledger."""

    def __init__(
        self,
        ledger: ApplicationLedger,
        jobs: JobCatalog,
        state_machine: Optional[ApplicationStateMachine] = None,
        locks: Optional[PairLockRegistry] = None,
        max_conflict_retries: Optional[int] = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        settings = get_settings().workflow
        self.ledger = ledger
        self.jobs = jobs
        self.state_machine = state_machine or ApplicationStateMachine()
        self.locks = locks or PairLockRegistry(timeout=settings.lock_timeout_seconds)
        self.max_conflict_retries = (
            settings.max_conflict_retries if max_conflict_retries is None else max_conflict_retries
        )
        self._clock = clock

    # ── submission ───────────────────────────────────────────────────────

    def submit(
        self,
        job_id: str,
        candidate_id: str,
        resume_ref: str,
        cover_letter: Optional[str] = None,
    ) -> ApplicationResult:
        """
        Submit an application for a job.

        Returns:
            ApplicationResult holding the new SUBMITTED application, or one of
            InvalidRequest, JobClosed, DuplicateApplication or StorageUnavailable
        """
        try:
            request = self._parse_submit(job_id, candidate_id, resume_ref, cover_letter)
            application = self._submit(request)
        except ApplicationError as e:
            self._deny(AuditAction.SUBMISSION_DENIED, e)
            return ApplicationResult.fail(e)

        audit_log(
            AuditAction.APPLICATION_SUBMITTED.value,
            {
                "application_id": str(application.id),
                "job_id": job_id,
                "candidate_id": candidate_id,
                "cover_letter": cover_letter,
            },
            audit_type="SUBMISSION",
        )
        return ApplicationResult.ok(application)

    @staticmethod
    def _parse_submit(
        job_id: Any, candidate_id: Any, resume_ref: Any, cover_letter: Any
    ) -> ApplicationSubmit:
        try:
            return ApplicationSubmit(
                job_id=job_id,
                candidate_id=candidate_id,
                resume_ref=resume_ref,
                cover_letter=cover_letter,
            )
        except ValidationError as e:
            raise InvalidRequest(
                f"Invalid submission: {_first_problem(e)}",
                job_id=_as_text(job_id),
                candidate_id=_as_text(candidate_id),
                attempted_status=ApplicationStatus.SUBMITTED.value,
                actor_id=_as_text(candidate_id),
            ) from e

    def _submit(self, request: ApplicationSubmit) -> Application:
        job_id, candidate_id = request.job_id, request.candidate_id
        now = self._clock()
        job = self.jobs.get(job_id)
        if job is None or not job.is_open_at(now):
            raise JobClosed(
                f"Job {job_id} is not accepting applications",
                job_id=job_id,
                candidate_id=candidate_id,
                attempted_status=ApplicationStatus.SUBMITTED.value,
                actor_id=candidate_id,
            )

        with self.locks.hold((job_id, candidate_id)):
            existing = self.ledger.find(job_id, candidate_id)
            if existing is not None and not existing.is_withdrawn:
                raise DuplicateApplication(
                    f"Candidate {candidate_id} already applied to job {job_id} "
                    f"(status: {existing.current_status.value})",
                    application_id=str(existing.id),
                    job_id=job_id,
                    candidate_id=candidate_id,
                    attempted_status=ApplicationStatus.SUBMITTED.value,
                    actor_id=candidate_id,
                )

            application = Application(
                job_id=job_id,
                candidate_id=candidate_id,
                resume_ref=request.resume_ref,
                cover_letter=request.cover_letter,
                status=ApplicationStatus.SUBMITTED,
                history=[
                    StatusChange(
                        status=ApplicationStatus.SUBMITTED,
                        timestamp=now,
                        actor_id=candidate_id,
                        actor_role=ActorRole.CANDIDATE,
                    )
                ],
                created_at=now,
                updated_at=now,
            )
            return self.ledger.save(application)

    # ── transitions ──────────────────────────────────────────────────────

    def transition(
        self,
        application_id: str,
        actor_id: str,
        actor_role: ActorRole | str,
        target_status: ApplicationStatus | str,
        notes: Optional[str] = None,
    ) -> ApplicationResult:
        """
        Move an application to a new status.

        Role and status may be passed as enum members or their string values.

        Returns:
            ApplicationResult holding the updated application, or one of
            ApplicationNotFound, InvalidTransition or StorageUnavailable
        """
        try:
            request = self._parse_transition(application_id, actor_id, actor_role, target_status, notes)
            application = self._transition(request)
        except ApplicationError as e:
            self._deny(AuditAction.TRANSITION_DENIED, e)
            return ApplicationResult.fail(e)

        action = (
            AuditAction.APPLICATION_WITHDRAWN
            if request.target_status == ApplicationStatus.WITHDRAWN
            else AuditAction.APPLICATION_TRANSITIONED
        )
        audit_log(
            action.value,
            {
                "application_id": request.application_id,
                "job_id": application.job_id,
                "candidate_id": application.candidate_id,
                "status": request.target_status.value,
                "actor_id": request.actor_id,
                "actor_role": request.actor_role.value,
            },
            audit_type="TRANSITION",
        )
        return ApplicationResult.ok(application)

    @staticmethod
    def _parse_transition(
        application_id: Any,
        actor_id: Any,
        actor_role: Any,
        target_status: Any,
        notes: Any,
    ) -> ApplicationTransition:
        try:
            return ApplicationTransition(
                application_id=application_id,
                actor_id=actor_id,
                actor_role=actor_role,
                target_status=target_status,
                notes=notes,
            )
        except ValidationError as e:
            raise InvalidTransition(
                f"Invalid transition request: {_first_problem(e)}",
                application_id=_as_text(application_id),
                attempted_status=_as_text(target_status),
                actor_id=_as_text(actor_id),
            ) from e

    def _transition(self, request: ApplicationTransition) -> Application:
        application_id = request.application_id
        application = self._require(application_id)

        with self.locks.hold(application.pair_key):
            for attempt in range(self.max_conflict_retries + 1):
                # Re-read under the lock so validation sees the committed state
                current = self._require(application_id)
                updated = self.state_machine.apply(
                    current,
                    request.actor_id,
                    request.actor_role,
                    request.target_status,
                    request.notes,
                    now=self._clock(),
                )
                try:
                    return self.ledger.save(updated)
                except ConcurrentModification:
                    self.logger.warning(
                        f"Application {application_id} changed concurrently "
                        f"(attempt {attempt + 1}), re-validating"
                    )

        raise StorageUnavailable(
            f"Application {application_id} kept changing; gave up after "
            f"{self.max_conflict_retries + 1} attempts",
            application_id=application_id,
            job_id=application.job_id,
            candidate_id=application.candidate_id,
            attempted_status=request.target_status.value,
            actor_id=request.actor_id,
        )

    # ── reads ────────────────────────────────────────────────────────────

    def get(self, application_id: str) -> ApplicationResult:
        """Fetch a single application."""
        try:
            return ApplicationResult.ok(self._require(application_id))
        except ApplicationError as e:
            return ApplicationResult.fail(e)

    def history(self, application_id: str) -> list[StatusChange]:
        """
        Audit history of an application, oldest first.

        An unknown id yields an empty list; StorageUnavailable is raised so an
        outage is never mistaken for a missing application.
        """
        result = self.get(application_id)
        if isinstance(result.error, ApplicationNotFound):
            return []
        return list(result.unwrap().history)

    def _require(self, application_id: str) -> Application:
        application = self.ledger.get_by_id(application_id)
        if application is None:
            raise ApplicationNotFound(
                f"Application {application_id} not found",
                application_id=application_id,
            )
        return application

    def _deny(self, action: AuditAction, error: ApplicationError) -> None:
        self.logger.info(f"{action.value}: {error.message}")
        audit_log(action.value, error.to_dict(), audit_type="DENIED")


def _first_problem(error: ValidationError) -> str:
    problem = error.errors()[0]
    field = ".".join(str(part) for part in problem["loc"])
    return f"{field}: {problem['msg']}"


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(getattr(value, "value", value))
