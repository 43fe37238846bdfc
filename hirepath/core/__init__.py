"""
Core business logic modules for HirePath.

Submodules:
- matching: Skill index and job match scoring
- ranking: Job recommendations for a candidate
- applications: Application lifecycle state machine and workflow
- errors: Lifecycle error taxonomy and result values
"""
