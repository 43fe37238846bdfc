"""
Pydantic data models and schemas for HirePath.

This module provides the data models used throughout the application:
candidate and job snapshots borrowed from external collaborators, and the
application documents this core owns.
"""

# Base models
from .base import (
    BaseDocument,
    EmbeddedModel,
    PyObjectId,
    parse_object_id,
    to_naive_utc,
    utcnow,
)

# Candidate models
from .candidate import CandidateProfile, SkillRecord, normalize_skill_name, skill_strength

# Job models
from .job import JobPosting

# Application models
from .application import (
    Application,
    ApplicationSubmit,
    ApplicationTransition,
    StatusChange,
)

__all__ = [
    # Base
    "BaseDocument",
    "EmbeddedModel",
    "PyObjectId",
    "parse_object_id",
    "to_naive_utc",
    "utcnow",
    # Candidate
    "CandidateProfile",
    "SkillRecord",
    "normalize_skill_name",
    "skill_strength",
    # Job
    "JobPosting",
    # Application
    "Application",
    "ApplicationSubmit",
    "ApplicationTransition",
    "StatusChange",
]
