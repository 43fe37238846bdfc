"""
Job posting data models for HirePath.

Postings belong to the job catalog; the matching core borrows immutable
snapshots and never writes them.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import ConfigDict, Field, field_validator, model_validator

from hirepath.utils.constants import ExperienceLevel

from .base import EmbeddedModel, to_naive_utc, utcnow
from .candidate import normalize_skill_name


class JobPosting(EmbeddedModel):
    """
    Snapshot of an open position.

    Eligible for matching and new applications only while active and
    before its deadline.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        frozen=True,
    )

    id: str = Field(..., alias="_id")
    title: str = ""
    required_skills: frozenset[str] = Field(default_factory=frozenset)
    # Normalized name -> spelling as first posted, for display
    skill_labels: dict[str, str] = Field(default_factory=dict)
    experience_level: ExperienceLevel = ExperienceLevel.MID
    location: Optional[str] = None
    is_remote: bool = False
    is_active: bool = True
    deadline: Optional[datetime] = None
    posted_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="before")
    @classmethod
    def remember_skill_spelling(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("skill_labels"):
            return data
        labels: dict[str, str] = {}
        for raw in data.get("required_skills") or ():
            label = " ".join(str(raw).split())
            key = normalize_skill_name(label)
            if key and key not in labels:
                labels[key] = label
        return {**data, "skill_labels": labels}

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> str:
        """Accept ObjectId or any opaque identifier."""
        return str(v)

    @field_validator("required_skills", mode="before")
    @classmethod
    def normalize_skills(cls, v: Any) -> frozenset[str]:
        """Normalize required skill names and drop blanks."""
        if v is None:
            return frozenset()
        names = (normalize_skill_name(str(s)) for s in v)
        return frozenset(n for n in names if n)

    @field_validator("location")
    @classmethod
    def blank_location_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("deadline", "posted_at")
    @classmethod
    def store_as_naive_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)

    def skill_label(self, name: str) -> str:
        """Display spelling of a normalized required skill."""
        return self.skill_labels.get(name, name)

    def is_open_at(self, now: datetime) -> bool:
        """Check if the posting accepts matches and applications at ``now``."""
        if not self.is_active:
            return False
        if self.deadline is not None and self.deadline <= to_naive_utc(now):
            return False
        return True
