"""Application lifecycle module."""

from .application_service import ApplicationService
from .locks import PairLockRegistry
from .state_machine import ApplicationStateMachine

__all__ = [
    "ApplicationService",
    "ApplicationStateMachine",
    "PairLockRegistry",
]
