"""Candidate-job match scoring module."""

from .match_scorer import (
    MatchResult,
    MatchScorer,
    ScoreBreakdown,
    get_match_scorer,
)
from .skill_index import SkillIndex

__all__ = [
    "MatchResult",
    "MatchScorer",
    "ScoreBreakdown",
    "SkillIndex",
    "get_match_scorer",
]
