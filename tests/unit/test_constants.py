"""
Tests for hirepath.utils.constants — enums, scoring points, status order.
"""

import pytest

from hirepath.utils.constants import (
    EXPERIENCE_ADJACENT_POINTS,
    EXPERIENCE_EXACT_POINTS,
    LOCATION_MATCH_POINTS,
    MAX_SCORE,
    SKILL_POINTS,
    STATUS_ORDER,
    TERMINAL_STATUSES,
    ApplicationStatus,
    ExperienceLevel,
    Proficiency,
)


class TestProficiency:
    @pytest.mark.parametrize(
        "level, multiplier",
        [
            (Proficiency.BEGINNER, 0.6),
            (Proficiency.INTERMEDIATE, 0.8),
            (Proficiency.ADVANCED, 1.0),
            (Proficiency.EXPERT, 1.2),
        ],
    )
    def test_multipliers(self, level, multiplier):
        assert level.multiplier == multiplier

    def test_rank_is_ordinal(self):
        assert [p.rank for p in Proficiency] == [0, 1, 2, 3]


class TestExperienceLevel:
    def test_rank_is_ordinal(self):
        assert ExperienceLevel.ENTRY.rank == 0
        assert ExperienceLevel.EXECUTIVE.rank == 3


class TestApplicationStatus:
    def test_terminal_states(self):
        terminal = {s for s in ApplicationStatus if s.is_terminal}
        assert terminal == {ApplicationStatus.OFFERED, ApplicationStatus.REJECTED, ApplicationStatus.WITHDRAWN}
        assert {s.value for s in terminal} == TERMINAL_STATUSES

    def test_primary_sequence_is_increasing(self):
        sequence = ["submitted", "under_review", "shortlisted", "interview_scheduled", "interviewed"]
        assert [STATUS_ORDER[s] for s in sequence] == sorted(STATUS_ORDER[s] for s in sequence)
        assert STATUS_ORDER["offered"] == STATUS_ORDER["rejected"] > STATUS_ORDER["interviewed"]

    def test_withdrawn_not_in_sequence(self):
        assert "withdrawn" not in STATUS_ORDER


class TestScoringPoints:
    def test_maximum_reachable_is_within_bounds(self):
        assert SKILL_POINTS + EXPERIENCE_EXACT_POINTS + LOCATION_MATCH_POINTS <= MAX_SCORE

    def test_adjacent_is_half_exact(self):
        assert EXPERIENCE_ADJACENT_POINTS * 2 == EXPERIENCE_EXACT_POINTS
