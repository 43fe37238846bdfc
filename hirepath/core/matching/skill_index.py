"""
Normalized skill lookup for a single candidate.

Skill names are compared case-insensitively after whitespace
normalization. Duplicate declarations collapse to the strongest record.
"""

from typing import Iterable, Iterator, Optional

from hirepath.data.models import (
    CandidateProfile,
    SkillRecord,
    normalize_skill_name,
    skill_strength,
)
from hirepath.utils.constants import Proficiency


class SkillIndex:
    """Read-only mapping of normalized skill name to ``SkillRecord``."""

    __slots__ = ("_skills",)

    def __init__(self, skills: Iterable[SkillRecord] = ()) -> None:
        self._skills: dict[str, SkillRecord] = {}
        for skill in skills:
            key = normalize_skill_name(skill.name)
            current = self._skills.get(key)
            if current is None or skill_strength(skill) > skill_strength(current):
                self._skills[key] = skill

    @classmethod
    def from_candidate(cls, candidate: CandidateProfile) -> "SkillIndex":
        return cls(candidate.skills)

    def get(self, name: str) -> Optional[SkillRecord]:
        """Record for a skill name in any casing, or None."""
        return self._skills.get(normalize_skill_name(name))

    def proficiency(self, name: str) -> Optional[Proficiency]:
        record = self.get(name)
        return Proficiency(record.proficiency) if record else None

    def intersection(self, names: Iterable[str]) -> frozenset[str]:
        """Normalized names from ``names`` the candidate has."""
        normalized = (normalize_skill_name(n) for n in names)
        return frozenset(n for n in normalized if n in self._skills)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_skill_name(name) in self._skills

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._skills))

    def __len__(self) -> int:
        return len(self._skills)

