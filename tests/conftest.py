"""
Shared test fixtures for the HirePath test suite.

Sets environment variables before any hirepath imports to prevent config
failures, then provides factory fixtures for profiles and postings and
in-memory wiring for the ranker and the application workflow.
"""

import os

# === Set environment BEFORE any hirepath imports ===
os.environ.setdefault("APP_ENVIRONMENT", "testing")
os.environ.setdefault("DB_NAME", "hirepath_test")
os.environ.setdefault("LOG_FILE_OUTPUT", "false")

from datetime import datetime, timedelta
from typing import Any, Iterable, Optional

import pytest

from hirepath.core.applications import (
    ApplicationService,
    ApplicationStateMachine,
    PairLockRegistry,
)
from hirepath.core.matching import MatchScorer
from hirepath.core.ranking import RecommendationRanker
from hirepath.data.models import CandidateProfile, JobPosting, SkillRecord
from hirepath.data.repositories import (
    InMemoryApplicationLedger,
    InMemoryCandidateDirectory,
    InMemoryJobCatalog,
)
from hirepath.utils.constants import ExperienceLevel, Proficiency

NOW = datetime(2024, 6, 1, 12, 0, 0)


# ---------------------------------------------------------------------------
# Factory fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_candidate():
    """Factory that returns a callable to build CandidateProfile models."""

    def _factory(
        candidate_id: str = "cand-1",
        skills: Optional[Iterable[tuple[str, str]]] = None,
        experience_level: ExperienceLevel = ExperienceLevel.MID,
        preferred_location: Optional[str] = None,
    ) -> CandidateProfile:
        if skills is None:
            skills = [("python", Proficiency.ADVANCED.value)]
        return CandidateProfile(
            _id=candidate_id,
            skills=[SkillRecord(name=name, proficiency=level) for name, level in skills],
            experience_level=experience_level,
            preferred_location=preferred_location,
        )

    return _factory


@pytest.fixture
def make_job():
    """Factory that returns a callable to build JobPosting models."""

    def _factory(
        job_id: str = "job-1",
        required_skills: Optional[Iterable[str]] = None,
        experience_level: ExperienceLevel = ExperienceLevel.MID,
        location: Optional[str] = None,
        is_remote: bool = False,
        is_active: bool = True,
        deadline: Optional[datetime] = None,
        posted_at: Optional[datetime] = None,
        **overrides: Any,
    ) -> JobPosting:
        return JobPosting(
            _id=job_id,
            title=overrides.pop("title", f"Role {job_id}"),
            required_skills=["python"] if required_skills is None else list(required_skills),
            experience_level=experience_level,
            location=location,
            is_remote=is_remote,
            is_active=is_active,
            deadline=deadline,
            posted_at=posted_at or NOW - timedelta(days=7),
            **overrides,
        )

    return _factory


# ---------------------------------------------------------------------------
# In-memory collaborators
# ---------------------------------------------------------------------------


@pytest.fixture
def ledger() -> InMemoryApplicationLedger:
    return InMemoryApplicationLedger(lock_timeout=1.0)


@pytest.fixture
def job_catalog() -> InMemoryJobCatalog:
    return InMemoryJobCatalog()


@pytest.fixture
def candidate_directory() -> InMemoryCandidateDirectory:
    return InMemoryCandidateDirectory()


@pytest.fixture
def scorer() -> MatchScorer:
    return MatchScorer()


@pytest.fixture
def state_machine() -> ApplicationStateMachine:
    return ApplicationStateMachine()


@pytest.fixture
def ranker(job_catalog, candidate_directory, ledger, scorer) -> RecommendationRanker:
    return RecommendationRanker(
        job_catalog,
        candidate_directory,
        ledger,
        scorer=scorer,
        max_workers=1,
        clock=lambda: NOW,
    )


@pytest.fixture
def service(ledger, job_catalog, state_machine) -> ApplicationService:
    return ApplicationService(
        ledger,
        job_catalog,
        state_machine=state_machine,
        locks=PairLockRegistry(timeout=1.0),
        clock=lambda: NOW,
    )


@pytest.fixture
def open_job(job_catalog, make_job) -> JobPosting:
    """An active posting already in the catalog."""
    job = make_job(job_id="job-open")
    job_catalog.put(job)
    return job


@pytest.fixture
def submitted(service, open_job):
    """A freshly submitted application for ``cand-1`` on ``job-open``."""
    return service.submit(open_job.id, "cand-1", "resume-1").unwrap()
