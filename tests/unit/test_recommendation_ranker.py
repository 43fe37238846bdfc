"""
Tests for hirepath.core.ranking — recommendation ranking and caching.
"""

from datetime import timedelta

import pytest

from hirepath.core.errors import CandidateNotFound, StorageUnavailable
from hirepath.core.ranking import RecommendationCache, RecommendationRanker, clamp_limit
from hirepath.data.repositories import InMemoryApplicationLedger
from hirepath.utils.constants import ActorRole, ApplicationStatus, ExperienceLevel


@pytest.fixture
def candidate(candidate_directory, make_candidate):
    profile = make_candidate(skills=[("python", "expert"), ("sql", "advanced")])
    candidate_directory.put(profile)
    return profile


# ── clamp_limit ──────────────────────────────────────────────────────────────


class TestClampLimit:
    @pytest.mark.parametrize(
        "requested, expected",
        [(None, 10), (0, 1), (-5, 1), (1, 1), (15, 15), (20, 20), (500, 20)],
    )
    def test_bounds(self, requested, expected):
        assert clamp_limit(requested) == expected


# ── RecommendationRanker ─────────────────────────────────────────────────────


class TestRecommend:
    def test_orders_by_score(self, ranker, candidate, job_catalog, make_job):
        job_catalog.put(make_job(job_id="weak", required_skills=["cobol"]))
        job_catalog.put(make_job(job_id="strong", required_skills=["python", "sql"]))
        job_catalog.put(make_job(job_id="medium", required_skills=["python", "go", "rust"]))

        results = list(ranker.recommend(candidate.id))
        assert [r.job_id for r in results] == ["strong", "medium", "weak"]
        assert [r.score for r in results] == sorted((r.score for r in results), reverse=True)

    def test_ties_break_on_posting_date_then_id(self, ranker, candidate, job_catalog, make_job, now):
        job_catalog.put(make_job(job_id="b-late", posted_at=now - timedelta(days=1)))
        job_catalog.put(make_job(job_id="c-early", posted_at=now - timedelta(days=9)))
        job_catalog.put(make_job(job_id="a-early", posted_at=now - timedelta(days=9)))

        results = list(ranker.recommend(candidate.id))
        assert [r.job_id for r in results] == ["a-early", "c-early", "b-late"]

    def test_zero_scores_are_included(self, ranker, make_candidate, candidate_directory, job_catalog, make_job):
        candidate_directory.put(
            make_candidate(candidate_id="nobody", skills=[], preferred_location="Lima",
                           experience_level=ExperienceLevel.ENTRY)
        )
        job_catalog.put(make_job(job_id="far", location="Oslo", experience_level=ExperienceLevel.EXECUTIVE))

        results = list(ranker.recommend("nobody"))
        assert [(r.job_id, r.score) for r in results] == [("far", 0)]

    def test_skips_closed_jobs(self, ranker, candidate, job_catalog, make_job, now):
        job_catalog.put(make_job(job_id="open"))
        job_catalog.put(make_job(job_id="inactive", is_active=False))
        job_catalog.put(make_job(job_id="expired", deadline=now - timedelta(hours=1)))
        job_catalog.put(make_job(job_id="closes-now", deadline=now))
        job_catalog.put(make_job(job_id="future", deadline=now + timedelta(days=3)))

        assert {r.job_id for r in ranker.recommend(candidate.id)} == {"open", "future"}

    def test_excludes_live_applications(self, ranker, candidate, job_catalog, make_job, service):
        for job_id in ("applied", "withdrawn", "fresh"):
            job_catalog.put(make_job(job_id=job_id))
        service.submit("applied", candidate.id, "r").unwrap()
        gone = service.submit("withdrawn", candidate.id, "r").unwrap()
        service.transition(
            str(gone.id), candidate.id, ActorRole.CANDIDATE, ApplicationStatus.WITHDRAWN
        ).unwrap()

        assert {r.job_id for r in ranker.recommend(candidate.id)} == {"withdrawn", "fresh"}

    def test_limit_truncates(self, ranker, candidate, job_catalog, make_job):
        for i in range(30):
            job_catalog.put(make_job(job_id=f"job-{i:02d}"))

        assert len(list(ranker.recommend(candidate.id))) == 10
        assert len(list(ranker.recommend(candidate.id, limit=3))) == 3
        assert len(list(ranker.recommend(candidate.id, limit=100))) == 20
        assert len(list(ranker.recommend(candidate.id, limit=0))) == 1

    def test_is_lazy(self, job_catalog, candidate_directory, make_job, candidate, now):
        class ExplodingLedger(InMemoryApplicationLedger):
            def active_job_ids(self, candidate_id):
                raise StorageUnavailable("ledger down", candidate_id=candidate_id)

        ranker = RecommendationRanker(
            job_catalog, candidate_directory, ExplodingLedger(), max_workers=1, clock=lambda: now
        )
        results = ranker.recommend(candidate.id)  # nothing fetched yet
        with pytest.raises(StorageUnavailable):
            next(results)

    def test_single_use_and_fresh_per_call(self, ranker, candidate, job_catalog, make_job):
        job_catalog.put(make_job(job_id="first", required_skills=["python", "go"]))
        results = ranker.recommend(candidate.id)
        assert [r.job_id for r in results] == ["first"]
        assert list(results) == []

        job_catalog.put(make_job(job_id="second", required_skills=["python", "sql"]))
        assert [r.job_id for r in ranker.recommend(candidate.id)] == ["second", "first"]

    def test_unknown_candidate(self, ranker):
        with pytest.raises(CandidateNotFound):
            list(ranker.recommend("ghost"))

    def test_empty_catalog(self, ranker, candidate):
        assert list(ranker.recommend(candidate.id)) == []

    def test_thread_pool_matches_inline(self, job_catalog, candidate_directory, ledger, candidate, make_job, now):
        for i in range(75):
            skills = ["python", "sql", "go"][: i % 3 + 1]
            job_catalog.put(make_job(job_id=f"job-{i:03d}", required_skills=skills,
                                     posted_at=now - timedelta(minutes=i)))

        inline = RecommendationRanker(job_catalog, candidate_directory, ledger, max_workers=1, clock=lambda: now)
        pooled = RecommendationRanker(job_catalog, candidate_directory, ledger, max_workers=4, clock=lambda: now)

        assert list(pooled.recommend(candidate.id, 20)) == list(inline.recommend(candidate.id, 20))


# ── RecommendationCache ──────────────────────────────────────────────────────


class FakeClock:
    def __init__(self):
        self.t = 0.0

    def __call__(self):
        return self.t


class TestRecommendationCache:
    def test_hit_within_ttl(self, ranker, candidate, job_catalog, make_job):
        job_catalog.put(make_job())
        clock = FakeClock()
        cache = RecommendationCache(ttl_seconds=30, clock=clock)
        calls = []

        def compute():
            calls.append(1)
            return ranker.recommend(candidate.id, 5)

        first = cache.get_or_compute(job_catalog.version, candidate.id, 5, compute)
        clock.t = 29
        second = cache.get_or_compute(job_catalog.version, candidate.id, 5, compute)
        assert first == second
        assert len(calls) == 1

    def test_expires_after_ttl(self):
        clock = FakeClock()
        cache = RecommendationCache(ttl_seconds=10, clock=clock)
        cache.put(1, "c", 5, [])
        clock.t = 10
        assert cache.get(1, "c", 5) is None
        assert len(cache) == 0

    def test_new_job_set_version_misses(self, ranker, candidate, job_catalog, make_job):
        job_catalog.put(make_job(job_id="old"))
        cache = RecommendationCache(ttl_seconds=60)
        before = cache.get_or_compute(job_catalog.version, candidate.id, 5, lambda: ranker.recommend(candidate.id, 5))

        job_catalog.put(make_job(job_id="new", required_skills=["python", "sql"]))
        after = cache.get_or_compute(job_catalog.version, candidate.id, 5, lambda: ranker.recommend(candidate.id, 5))

        assert [r.job_id for r in before] == ["old"]
        assert [r.job_id for r in after] == ["new", "old"]

    def test_invalidate_candidate(self):
        cache = RecommendationCache(ttl_seconds=60)
        cache.put(1, "a", 5, [])
        cache.put(1, "b", 5, [])
        assert cache.invalidate("a") == 1
        assert cache.get(1, "a", 5) is None
        assert cache.get(1, "b", 5) == []
        assert cache.invalidate() == 1

    def test_purge_expired(self):
        clock = FakeClock()
        cache = RecommendationCache(ttl_seconds=5, clock=clock)
        cache.put(1, "a", 5, [])
        clock.t = 3
        cache.put(1, "b", 5, [])
        clock.t = 6
        assert cache.purge_expired() == 1
        assert len(cache) == 1

    def test_ttl_defaults_from_settings(self):
        from hirepath.utils.config import get_settings

        assert RecommendationCache().ttl_seconds == get_settings().matching.cache_ttl_seconds
