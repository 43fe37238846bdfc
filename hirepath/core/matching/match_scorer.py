"""
Candidate-job match scorer.

Scores a candidate against a single job posting from three factors:
- Skill overlap, weighted by the candidate's proficiency (up to 60 points)
- Experience level alignment (up to 20 points)
- Location alignment (up to 15 points)

Scoring is pure and deterministic: identical inputs always produce an
identical ``MatchResult``, and malformed-but-valid input such as empty
skill sets degrades to a lower score instead of failing.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Optional

from hirepath.data.models import CandidateProfile, JobPosting
from hirepath.utils.constants import (
    EXPERIENCE_ADJACENT_POINTS,
    EXPERIENCE_EXACT_POINTS,
    LOCATION_MATCH_POINTS,
    LOCATION_NEUTRAL_POINTS,
    MAX_SCORE,
    MIN_SCORE,
    SKILL_POINTS,
    ExperienceLevel,
)
from hirepath.utils.logger import get_logger

from .skill_index import SkillIndex

logger = get_logger(__name__)


@dataclass(frozen=True)
class ScoreBreakdown:
    """Points contributed by each factor before clamping and rounding."""

    skills: float = 0.0
    experience: float = 0.0
    location: float = 0.0

    @property
    def total(self) -> float:
        return self.skills + self.experience + self.location

    @property
    def dominant_factor(self) -> Optional[str]:
        """Largest contributor; ties resolve skills, then experience, then location."""
        ranked = [
            ("skills", self.skills),
            ("experience", self.experience),
            ("location", self.location),
        ]
        name, points = ranked[0]
        for candidate_name, candidate_points in ranked[1:]:
            if candidate_points > points:
                name, points = candidate_name, candidate_points
        return name if points > 0 else None


@dataclass(frozen=True)
class MatchResult:
    """Ephemeral result of scoring one candidate against one job."""

    job_id: str
    score: int
    matched_skills: frozenset[str] = field(default_factory=frozenset)
    reason: str = ""
    breakdown: ScoreBreakdown = field(default_factory=ScoreBreakdown, compare=False)
    # Matched skills as the job spells them; falls back to the normalized names
    matched_labels: frozenset[str] = field(default_factory=frozenset, compare=False)

    def to_payload(self) -> dict[str, Any]:
        """Payload handed to the presentation layer."""
        return {
            "job_id": self.job_id,
            "score": self.score,
            "matched_skills": sorted(self.matched_labels or self.matched_skills),
            "reason": self.reason,
        }


class MatchScorer:
    """
    Scores candidates against job postings.

    The scorer holds no mutable state and can be shared across threads.
    """

    def score(
        self,
        candidate: CandidateProfile,
        job: JobPosting,
        skill_index: Optional[SkillIndex] = None,
    ) -> MatchResult:
        """
        Score a candidate against a job posting.

        Args:
            candidate: Candidate profile snapshot
            job: Job posting snapshot
            skill_index: Prebuilt index of the candidate's skills, reused
                when scoring one candidate against many jobs

        Returns:
            MatchResult with the 0-100 score and an explanation
        """
        index = skill_index if skill_index is not None else SkillIndex.from_candidate(candidate)

        matched = index.intersection(job.required_skills)
        breakdown = ScoreBreakdown(
            skills=self._skill_points(index, job, matched),
            experience=self._experience_points(candidate, job),
            location=self._location_points(candidate, job),
        )

        return MatchResult(
            job_id=job.id,
            score=self._finalize(breakdown.total),
            matched_skills=matched,
            reason=self._explain(breakdown, matched, job),
            breakdown=breakdown,
            matched_labels=frozenset(job.skill_label(name) for name in matched),
        )

    @staticmethod
    def _skill_points(index: SkillIndex, job: JobPosting, matched: frozenset[str]) -> float:
        """Per-skill base weight scaled by proficiency, capped at the skill budget."""
        if not job.required_skills or not matched:
            return 0.0

        base_weight = SKILL_POINTS / max(1, len(job.required_skills))
        points = sum(base_weight * index.proficiency(name).multiplier for name in sorted(matched))
        return min(points, SKILL_POINTS)

    @staticmethod
    def _experience_points(candidate: CandidateProfile, job: JobPosting) -> float:
        distance = abs(
            ExperienceLevel(candidate.experience_level).rank
            - ExperienceLevel(job.experience_level).rank
        )
        if distance == 0:
            return EXPERIENCE_EXACT_POINTS
        if distance == 1:
            return EXPERIENCE_ADJACENT_POINTS
        return 0.0

    @staticmethod
    def _location_points(candidate: CandidateProfile, job: JobPosting) -> float:
        if job.is_remote:
            return LOCATION_MATCH_POINTS
        if candidate.preferred_location is None:
            return LOCATION_NEUTRAL_POINTS
        if job.location is not None and _same_place(candidate.preferred_location, job.location):
            return LOCATION_MATCH_POINTS
        return 0.0

    @staticmethod
    def _finalize(total: float) -> int:
        """Clamp to the score range and round half up."""
        clamped = min(max(total, float(MIN_SCORE)), float(MAX_SCORE))
        return int(math.floor(clamped + 0.5))

    @staticmethod
    def _explain(breakdown: ScoreBreakdown, matched: frozenset[str], job: JobPosting) -> str:
        factor = breakdown.dominant_factor

        if factor == "skills":
            names = ", ".join(sorted(job.skill_label(n) for n in matched))
            return f"Skills: matches {len(matched)} of {len(job.required_skills)} required skills ({names})"

        if factor == "experience":
            if breakdown.experience == EXPERIENCE_EXACT_POINTS:
                return "Experience: level matches the role"
            return "Experience: level is one step from the role"

        if factor == "location":
            if job.is_remote:
                return "Location: remote position"
            if breakdown.location == LOCATION_MATCH_POINTS:
                return "Location: matches preferred location"
            return "Location: no preference stated"

        return "No overlap with this job"


def _same_place(a: str, b: str) -> bool:
    return " ".join(a.split()).casefold() == " ".join(b.split()).casefold()


# Singleton instance
_match_scorer: Optional[MatchScorer] = None


def get_match_scorer() -> MatchScorer:
    """Get the match scorer singleton instance."""
    global _match_scorer
    if _match_scorer is None:
        _match_scorer = MatchScorer()
    return _match_scorer
