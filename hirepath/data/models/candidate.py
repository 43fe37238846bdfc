"""
Candidate data models for HirePath.

Candidate profiles are owned by the identity service; the matching core
only reads snapshots of them.
"""

import re
from typing import Any, Optional

from pydantic import Field, field_validator

from hirepath.utils.constants import ExperienceLevel, Proficiency

from .base import EmbeddedModel

_WHITESPACE = re.compile(r"\s+")


def normalize_skill_name(name: str) -> str:
    """Case-insensitive key for a skill: trimmed, single-spaced, lowercase."""
    return _WHITESPACE.sub(" ", name.strip()).lower()


class SkillRecord(EmbeddedModel):
    """A skill a candidate declares, with proficiency and years."""

    name: str = Field(..., min_length=1)
    proficiency: Proficiency = Proficiency.INTERMEDIATE
    years_experience: int = Field(default=0, ge=0)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        """Normalize skill names for case-insensitive matching."""
        normalized = normalize_skill_name(v)
        if not normalized:
            raise ValueError("Skill name must not be blank")
        return normalized


class CandidateProfile(EmbeddedModel):
    """
    Read-only snapshot of a candidate as seen by the matcher.

    Duplicate skill names collapse to a single record, keeping the
    strongest proficiency (then the most years).
    """

    id: str = Field(..., alias="_id")
    skills: list[SkillRecord] = Field(default_factory=list)
    preferred_location: Optional[str] = None
    experience_level: ExperienceLevel = ExperienceLevel.ENTRY

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> str:
        """Accept ObjectId or any opaque identifier."""
        return str(v)

    @field_validator("preferred_location")
    @classmethod
    def blank_location_is_none(cls, v: Optional[str]) -> Optional[str]:
        """An empty preference is no preference."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("skills")
    @classmethod
    def dedupe_skills(cls, v: list[SkillRecord]) -> list[SkillRecord]:
        """Keep one record per normalized skill name."""
        best: dict[str, SkillRecord] = {}
        for skill in v:
            current = best.get(skill.name)
            if current is None or skill_strength(skill) > skill_strength(current):
                best[skill.name] = skill
        return list(best.values())

    @property
    def skill_names(self) -> set[str]:
        """Normalized names of all declared skills."""
        return {s.name for s in self.skills}


def skill_strength(skill: SkillRecord) -> tuple[int, int]:
    """Ordering key used to pick between duplicate declarations."""
    return Proficiency(skill.proficiency).rank, skill.years_experience
