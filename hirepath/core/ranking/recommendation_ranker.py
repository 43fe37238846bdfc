"""
Job recommendations for a candidate.

Ranks the open job snapshot against one candidate profile. Jobs the
candidate already holds a live application for are excluded. Results are
produced by a generator: nothing is fetched or scored until the first
result is requested, and every call recomputes from the current snapshot.
"""

import heapq
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from itertools import islice
from typing import Callable, Iterable, Iterator, Optional

from hirepath.core.errors import CandidateNotFound
from hirepath.core.matching import MatchResult, MatchScorer, SkillIndex, get_match_scorer
from hirepath.data.models import CandidateProfile, JobPosting, utcnow
from hirepath.data.repositories import ApplicationLedger, CandidateDirectory, JobCatalog
from hirepath.utils.config import get_settings
from hirepath.utils.logger import LoggerMixin

ScoredJob = tuple[MatchResult, JobPosting]


def clamp_limit(limit: Optional[int], default: int = 10, maximum: int = 20) -> int:
    """Clamp a requested result count to ``[1, maximum]``."""
    if limit is None:
        limit = default
    return max(1, min(int(limit), maximum))


def ranking_key(scored: ScoredJob) -> tuple[int, datetime, str]:
    """Highest score first, then earliest posting, then job id."""
    result, job = scored
    return -result.score, job.posted_at, job.id


class RecommendationRanker(LoggerMixin):
    """
    Orchestrates scoring across the open job set for one candidate.

    Scoring is side-effect free, so with ``max_workers > 1`` it fans out
    across a thread pool; results are gathered before ordering.
    """

    def __init__(
        self,
        jobs: JobCatalog,
        candidates: CandidateDirectory,
        ledger: ApplicationLedger,
        scorer: Optional[MatchScorer] = None,
        max_workers: Optional[int] = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        settings = get_settings().matching
        self._jobs = jobs
        self._candidates = candidates
        self._ledger = ledger
        self._scorer = scorer or get_match_scorer()
        self._max_workers = max_workers or settings.max_workers
        self._default_limit = settings.default_limit
        self._max_limit = settings.max_limit
        self._clock = clock

    def recommend(self, candidate_id: str, limit: Optional[int] = None) -> Iterator[MatchResult]:
        """
        Recommend open jobs for a candidate, best match first.

        Args:
            candidate_id: Candidate to rank jobs for
            limit: Number of results, clamped to [1, 20]; defaults to 10

        Returns:
            A lazy, finite, single-use iterator of MatchResult

        Raises:
            CandidateNotFound: on first iteration, if the profile is unknown
            StorageUnavailable: on first iteration, if a collaborator fails
        """
        limit = clamp_limit(limit, self._default_limit, self._max_limit)
        return self._generate(candidate_id, limit)

    def _generate(self, candidate_id: str, limit: int) -> Iterator[MatchResult]:
        candidate = self._candidates.get(candidate_id)
        if candidate is None:
            raise CandidateNotFound(
                f"No profile for candidate {candidate_id}", candidate_id=candidate_id
            )

        excluded = self._ledger.active_job_ids(candidate_id)
        now = self._clock()
        eligible = (
            job for job in self._jobs.iter_open(now)
            if job.is_open_at(now) and job.id not in excluded
        )

        top = heapq.nsmallest(limit, self._score_all(candidate, eligible), key=ranking_key)
        self.logger.debug(
            f"Ranked jobs for candidate {candidate_id}: "
            f"{len(excluded)} excluded, returning {len(top)}"
        )

        for result, _ in top:
            yield result

    def _score_all(
        self,
        candidate: CandidateProfile,
        jobs: Iterable[JobPosting],
    ) -> Iterator[ScoredJob]:
        index = SkillIndex.from_candidate(candidate)

        def score_one(job: JobPosting) -> ScoredJob:
            return self._scorer.score(candidate, job, skill_index=index), job

        if self._max_workers <= 1:
            yield from map(score_one, jobs)
            return

        # Submit in bounded batches so a large catalog is never fully buffered
        batch_size = self._max_workers * 32
        job_iter = iter(jobs)
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            while True:
                batch = list(islice(job_iter, batch_size))
                if not batch:
                    return
                yield from executor.map(score_one, batch)
