"""
Application-wide constants for HirePath.

This module contains all constant values used throughout the application.
Modify these values to customize behavior without changing code logic.
"""

from enum import Enum
from typing import Final


# =============================================================================
# Application Constants
# =============================================================================

APP_NAME: Final[str] = "HirePath"
APP_DISPLAY_NAME: Final[str] = "HirePath Job Matching & Application Lifecycle"
VERSION: Final[str] = "0.1.0"


# =============================================================================
# Enums
# =============================================================================


class Proficiency(str, Enum):
    """Self-declared proficiency for a candidate skill, lowest first."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"

    @property
    def rank(self) -> int:
        """Ordinal position (0 = beginner)."""
        return list(Proficiency).index(self)

    @property
    def multiplier(self) -> float:
        """Scale applied to the per-skill base weight."""
        return PROFICIENCY_MULTIPLIERS[self.value]


class ExperienceLevel(str, Enum):
    """Career level shared by candidates and job postings, lowest first."""

    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    EXECUTIVE = "executive"

    @property
    def rank(self) -> int:
        """Ordinal position (0 = entry)."""
        return list(ExperienceLevel).index(self)


class ApplicationStatus(str, Enum):
    """Lifecycle status of a job application."""

    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    SHORTLISTED = "shortlisted"
    INTERVIEW_SCHEDULED = "interview_scheduled"
    INTERVIEWED = "interviewed"
    OFFERED = "offered"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"

    @property
    def is_terminal(self) -> bool:
        """No transition is permitted out of a terminal status."""
        return self.value in TERMINAL_STATUSES


class ActorRole(str, Enum):
    """Role of the user requesting a lifecycle transition."""

    CANDIDATE = "candidate"
    ADMINISTRATOR = "administrator"


class AuditAction(str, Enum):
    """Types of actions recorded in the audit trail."""

    APPLICATION_SUBMITTED = "application_submitted"
    APPLICATION_TRANSITIONED = "application_transitioned"
    APPLICATION_WITHDRAWN = "application_withdrawn"
    TRANSITION_DENIED = "transition_denied"
    SUBMISSION_DENIED = "submission_denied"


# =============================================================================
# Scoring Constants
# =============================================================================

# Points available per scoring factor
SKILL_POINTS: Final[float] = 60.0
EXPERIENCE_EXACT_POINTS: Final[float] = 20.0
EXPERIENCE_ADJACENT_POINTS: Final[float] = 10.0
LOCATION_MATCH_POINTS: Final[float] = 15.0
LOCATION_NEUTRAL_POINTS: Final[float] = 7.0

MIN_SCORE: Final[int] = 0
MAX_SCORE: Final[int] = 100

PROFICIENCY_MULTIPLIERS: Final[dict[str, float]] = {
    "beginner": 0.6,
    "intermediate": 0.8,
    "advanced": 1.0,
    "expert": 1.2,
}


# =============================================================================
# Lifecycle Constants
# =============================================================================

# Primary review sequence; OFFERED and REJECTED share the final step
STATUS_ORDER: Final[dict[str, int]] = {
    "submitted": 0,
    "under_review": 1,
    "shortlisted": 2,
    "interview_scheduled": 3,
    "interviewed": 4,
    "offered": 5,
    "rejected": 5,
}

TERMINAL_STATUSES: Final[frozenset[str]] = frozenset({"offered", "rejected", "withdrawn"})
