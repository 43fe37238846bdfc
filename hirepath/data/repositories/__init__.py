"""
Repositories for HirePath data access.

This module provides the storage contracts the lifecycle core depends on,
their MongoDB implementations, and in-process implementations.
"""

# Contracts
from .ledger import ApplicationLedger, CandidateDirectory, JobCatalog

# Base repository
from .base import BaseRepository, storage_guard

# MongoDB repositories
from .application_repository import ApplicationRepository, get_application_repository
from .job_repository import JobRepository, get_job_repository
from .candidate_repository import CandidateRepository, get_candidate_repository

# In-process implementations
from .memory import (
    InMemoryApplicationLedger,
    InMemoryCandidateDirectory,
    InMemoryJobCatalog,
)

__all__ = [
    # Contracts
    "ApplicationLedger",
    "CandidateDirectory",
    "JobCatalog",
    # Base
    "BaseRepository",
    "storage_guard",
    # Application
    "ApplicationRepository",
    "get_application_repository",
    # Job
    "JobRepository",
    "get_job_repository",
    # Candidate
    "CandidateRepository",
    "get_candidate_repository",
    # In-process
    "InMemoryApplicationLedger",
    "InMemoryCandidateDirectory",
    "InMemoryJobCatalog",
]
