#!/usr/bin/env python3
"""
Demo script for job recommendations and the application lifecycle.
Runs entirely in memory - no MongoDB needed.
"""

import argparse
import json
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

SAMPLE_JOBS = [
    {"_id": "job-backend", "title": "Backend Engineer", "required_skills": ["Java", "SQL"],
     "experience_level": "senior", "is_remote": True},
    {"_id": "job-data", "title": "Data Analyst", "required_skills": ["SQL", "Python", "Tableau"],
     "experience_level": "mid", "location": "Berlin"},
    {"_id": "job-frontend", "title": "Frontend Developer", "required_skills": ["TypeScript", "React"],
     "experience_level": "mid", "location": "Lisbon"},
]

SAMPLE_CANDIDATE = {
    "_id": "cand-demo",
    "skills": [
        {"name": "Java", "proficiency": "expert", "years_experience": 8},
        {"name": "SQL", "proficiency": "advanced", "years_experience": 6},
        {"name": "Python", "proficiency": "intermediate", "years_experience": 2},
    ],
    "experience_level": "senior",
    "preferred_location": "Berlin",
}


def load_json(path, default):
    if path is None:
        return default
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def show_recommendations(ranker, candidate_id, limit):
    print(f"\n{'Rank':<5} {'Job':<15} {'Score':<7} {'Reason'}")
    print("-" * 60)
    results = list(ranker.recommend(candidate_id, limit))
    for i, r in enumerate(results, 1):
        print(f"{i:<5} {r.job_id:<15} {r.score:<7} {r.reason}")
    if not results:
        print("  (no open jobs)")
    return results


def walk_lifecycle(service, job_id, candidate_id):
    """Submit, advance, and reject a duplicate - printing each outcome."""
    from hirepath.utils.constants import ActorRole, ApplicationStatus

    submitted = service.submit(job_id, candidate_id, "resume-demo")
    print(f"  submit            -> {submitted.application.current_status.value}")

    duplicate = service.submit(job_id, candidate_id, "resume-demo")
    print(f"  submit again      -> {duplicate.error.code}")

    app_id = str(submitted.application.id)
    steps = [
        ("admin-1", ActorRole.ADMINISTRATOR, ApplicationStatus.UNDER_REVIEW, "Strong profile"),
        ("admin-1", ActorRole.ADMINISTRATOR, ApplicationStatus.OFFERED, None),
        (candidate_id, ActorRole.CANDIDATE, ApplicationStatus.WITHDRAWN, None),
    ]
    for actor_id, role, target, notes in steps:
        result = service.transition(app_id, actor_id, role, target, notes)
        outcome = result.application.current_status.value if result.success else result.error.code
        print(f"  {target.value:<17} -> {outcome}")

    print("\n  History:")
    for change in service.history(app_id):
        print(f"    {change.timestamp:%H:%M:%S}  {change.status:<15} by {change.actor_id}")


def main():
    parser = argparse.ArgumentParser(description="Job Matching & Application Lifecycle Demo")
    parser.add_argument("--jobs", type=Path, help="JSON file with a list of job postings")
    parser.add_argument("--candidate", type=Path, help="JSON file with one candidate profile")
    parser.add_argument("--limit", type=int, default=10, help="Number of recommendations")
    args = parser.parse_args()

    from hirepath.core.applications import ApplicationService
    from hirepath.core.ranking import RecommendationRanker
    from hirepath.data.models import CandidateProfile, JobPosting
    from hirepath.data.repositories import (
        InMemoryApplicationLedger,
        InMemoryCandidateDirectory,
        InMemoryJobCatalog,
    )

    jobs = InMemoryJobCatalog(JobPosting.model_validate(j) for j in load_json(args.jobs, SAMPLE_JOBS))
    candidate = CandidateProfile.model_validate(load_json(args.candidate, SAMPLE_CANDIDATE))
    candidates = InMemoryCandidateDirectory([candidate])
    ledger = InMemoryApplicationLedger()

    ranker = RecommendationRanker(jobs, candidates, ledger)
    service = ApplicationService(ledger, jobs)

    print("\n" + "=" * 60)
    print("HirePath: Job Matching & Application Lifecycle")
    print("=" * 60)

    print(f"\n--- RECOMMENDATIONS for {candidate.id} ---")
    results = show_recommendations(ranker, candidate.id, args.limit)
    if not results:
        return 0

    top = results[0].job_id
    print(f"\n--- APPLYING to {top} ---")
    walk_lifecycle(service, top, candidate.id)

    print("\n--- RECOMMENDATIONS after applying ---")
    show_recommendations(ranker, candidate.id, args.limit)
    return 0


if __name__ == "__main__":
    sys.exit(main())
