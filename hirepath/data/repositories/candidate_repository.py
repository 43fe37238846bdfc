"""
Candidate repository for HirePath.

Read-only access to candidate profile snapshots.
"""

from typing import Optional

from hirepath.data.database import CANDIDATES_COLLECTION
from hirepath.data.models import CandidateProfile

from .base import BaseRepository
from .ledger import CandidateDirectory


class CandidateRepository(BaseRepository[CandidateProfile], CandidateDirectory):
    """Repository for candidate profile snapshots."""

    @property
    def collection_name(self) -> str:
        return CANDIDATES_COLLECTION

    @property
    def model_class(self) -> type[CandidateProfile]:
        return CandidateProfile

    def get(self, candidate_id: str) -> Optional[CandidateProfile]:
        return self.get_by_id(candidate_id)


# Singleton instance
_candidate_repository: Optional[CandidateRepository] = None


def get_candidate_repository() -> CandidateRepository:
    """Get the candidate repository singleton instance."""
    global _candidate_repository
    if _candidate_repository is None:
        _candidate_repository = CandidateRepository()
    return _candidate_repository
