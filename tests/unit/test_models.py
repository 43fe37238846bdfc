"""
Tests for Pydantic data models in hirepath.data.models.
"""

from datetime import datetime, timedelta, timezone

import pytest
from bson import ObjectId
from pydantic import ValidationError

from hirepath.data.models import (
    Application,
    ApplicationSubmit,
    ApplicationTransition,
    CandidateProfile,
    JobPosting,
    SkillRecord,
    StatusChange,
    normalize_skill_name,
    to_naive_utc,
)
from hirepath.data.models.base import BaseDocument, parse_object_id
from hirepath.utils.constants import ActorRole, ApplicationStatus, ExperienceLevel, Proficiency


# ── helpers ──────────────────────────────────────────────────────────────────


class TestHelpers:
    def test_normalize_skill_name(self):
        assert normalize_skill_name("  Machine\tLearning ") == "machine learning"

    def test_to_naive_utc_converts_aware(self):
        aware = datetime(2024, 1, 1, 12, tzinfo=timezone(timedelta(hours=2)))
        assert to_naive_utc(aware) == datetime(2024, 1, 1, 10)

    def test_to_naive_utc_keeps_naive(self):
        naive = datetime(2024, 1, 1, 12)
        assert to_naive_utc(naive) is naive
        assert to_naive_utc(None) is None

    def test_parse_object_id_from_string(self):
        oid = ObjectId()
        assert parse_object_id(str(oid)) == oid

    def test_parse_object_id_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_object_id("not-an-id")


# ── CandidateProfile ─────────────────────────────────────────────────────────


class TestCandidateProfile:
    def test_skill_names_normalized(self):
        profile = CandidateProfile(_id="c", skills=[SkillRecord(name=" Java ", proficiency="expert")])
        assert profile.skill_names == {"java"}

    def test_blank_skill_rejected(self):
        with pytest.raises(ValidationError):
            SkillRecord(name="   ")

    def test_duplicates_collapse_to_strongest(self):
        profile = CandidateProfile(
            _id="c",
            skills=[
                SkillRecord(name="sql", proficiency="advanced", years_experience=1),
                SkillRecord(name="SQL", proficiency="advanced", years_experience=6),
                SkillRecord(name="Sql", proficiency="beginner", years_experience=10),
            ],
        )
        assert len(profile.skills) == 1
        assert profile.skills[0].years_experience == 6
        assert profile.skills[0].proficiency == Proficiency.ADVANCED.value

    def test_blank_location_is_none(self):
        assert CandidateProfile(_id="c", preferred_location="  ").preferred_location is None

    def test_object_id_is_stringified(self):
        oid = ObjectId()
        assert CandidateProfile(_id=oid).id == str(oid)

    def test_defaults(self):
        profile = CandidateProfile(_id="c")
        assert profile.skills == []
        assert profile.experience_level == ExperienceLevel.ENTRY.value


# ── JobPosting ───────────────────────────────────────────────────────────────


class TestJobPosting:
    def test_required_skills_normalized(self):
        job = JobPosting(_id="j", required_skills=["Python", "python ", "", "Go"])
        assert job.required_skills == frozenset({"python", "go"})

    def test_first_spelling_kept_for_display(self):
        job = JobPosting(_id="j", required_skills=["Machine  Learning", "machine learning", "SQL"])
        assert job.skill_label("machine learning") == "Machine Learning"
        assert job.skill_label("sql") == "SQL"
        assert job.skill_label("unknown") == "unknown"

    def test_frozen(self):
        job = JobPosting(_id="j")
        with pytest.raises(ValidationError):
            job.is_active = False

    def test_open_until_deadline(self):
        deadline = datetime(2024, 6, 1)
        job = JobPosting(_id="j", deadline=deadline)
        assert job.is_open_at(deadline - timedelta(seconds=1))
        assert not job.is_open_at(deadline)

    def test_aware_deadline_compared_in_utc(self):
        job = JobPosting(_id="j", deadline=datetime(2024, 6, 1, 12, tzinfo=timezone.utc))
        assert job.deadline.tzinfo is None
        assert job.is_open_at(datetime(2024, 6, 1, 13, tzinfo=timezone(timedelta(hours=2))))

    def test_inactive_never_open(self):
        assert not JobPosting(_id="j", is_active=False).is_open_at(datetime(2000, 1, 1))


# ── Application ──────────────────────────────────────────────────────────────


class TestApplication:
    def _make(self, status=ApplicationStatus.SUBMITTED):
        return Application(job_id="j", candidate_id="c", resume_ref="r", status=status)

    def test_status_properties(self):
        application = self._make(ApplicationStatus.WITHDRAWN)
        assert application.current_status == ApplicationStatus.WITHDRAWN
        assert application.is_terminal
        assert application.is_withdrawn

    def test_open_status(self):
        application = self._make(ApplicationStatus.SHORTLISTED)
        assert not application.is_terminal
        assert not application.is_withdrawn

    def test_pair_key(self):
        assert self._make().pair_key == ("j", "c")

    def test_last_change(self):
        application = self._make()
        assert application.last_change is None
        application.history.append(
            StatusChange(status=ApplicationStatus.SUBMITTED, actor_id="c", actor_role=ActorRole.CANDIDATE)
        )
        assert application.last_change.actor_id == "c"

    def test_mongo_dump_drops_missing_id_and_flags_withdrawn(self):
        data = self._make(ApplicationStatus.WITHDRAWN).model_dump_mongo()
        assert "_id" not in data
        assert data["withdrawn"] is True
        assert data["status"] == "withdrawn"

    def test_round_trip_from_mongo_document(self):
        oid = ObjectId()
        application = Application.model_validate(
            {"_id": oid, "job_id": "j", "candidate_id": "c", "resume_ref": "r", "status": "offered", "version": 4}
        )
        assert application.id == oid
        assert application.current_status == ApplicationStatus.OFFERED

    def test_negative_version_rejected(self):
        with pytest.raises(ValidationError):
            Application(job_id="j", candidate_id="c", resume_ref="r", version=-1)

    def test_base_document_timestamps(self):
        doc = BaseDocument()
        assert doc.created_at.tzinfo is None
        assert doc.updated_at >= doc.created_at

    def test_object_id_kept_for_mongo_stringified_for_json(self):
        oid = ObjectId()
        doc = BaseDocument(_id=str(oid))
        assert doc.model_dump_mongo()["_id"] == oid
        assert doc.model_dump(mode="json", by_alias=True)["_id"] == str(oid)


class TestRequestSchemas:
    def test_submit_requires_ids(self):
        with pytest.raises(ValidationError):
            ApplicationSubmit(job_id="", candidate_id="c", resume_ref="r")

    def test_transition_parses_enums(self):
        request = ApplicationTransition(
            application_id="a", actor_id="admin", actor_role="administrator", target_status="offered"
        )
        assert request.actor_role == ActorRole.ADMINISTRATOR
        assert request.target_status == ApplicationStatus.OFFERED
