"""
Utility modules for HirePath.

This package contains shared utilities used across the application:
- config: Configuration management
- logger: Logging infrastructure
- constants: Application-wide constants and enums
"""

from hirepath.utils.config import (
    AppSettings,
    get_settings,
    reload_settings,
    ROOT_DIR,
)
from hirepath.utils.constants import (
    APP_NAME,
    APP_DISPLAY_NAME,
    VERSION,
    ActorRole,
    ApplicationStatus,
    AuditAction,
    ExperienceLevel,
    Proficiency,
)
from hirepath.utils.logger import (
    setup_logging,
    get_logger,
    audit_log,
    LoggerMixin,
)

__all__ = [
    # Config
    "AppSettings",
    "get_settings",
    "reload_settings",
    "ROOT_DIR",
    # Constants
    "APP_NAME",
    "APP_DISPLAY_NAME",
    "VERSION",
    "ActorRole",
    "ApplicationStatus",
    "AuditAction",
    "ExperienceLevel",
    "Proficiency",
    # Logger
    "setup_logging",
    "get_logger",
    "audit_log",
    "LoggerMixin",
]
