"""
Loguru setup for HirePath.

Three sinks: a colored console, a rotating application log, and an audit
log that only receives records bound with ``audit_type``. Every accepted
submission and transition, and every denied one, lands in the audit log.
"""

import sys
from functools import cached_property
from typing import Any

from loguru import logger

from hirepath.utils.config import get_settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> | "
    "<level>{message}</level>"
)
AUDIT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {extra[audit_type]} | {message}"

REDACTED = "***REDACTED***"
SENSITIVE_KEYS = frozenset(
    {"password", "secret", "token", "api_key", "apikey", "credential", "private_key", "cover_letter"}
)


def _is_audit(record: dict[str, Any]) -> bool:
    return "audit_type" in record["extra"]


def setup_logging() -> None:
    """Replace loguru's default handler with the configured sinks."""
    settings = get_settings()
    log_settings = settings.logging
    # Variable values in tracebacks only while developing locally
    diagnose = settings.debug and settings.environment == "development"

    logger.remove()
    logger.configure(extra={"name": "hirepath"})

    if log_settings.console_output:
        logger.add(
            sys.stderr,
            format=CONSOLE_FORMAT,
            level=log_settings.level,
            filter=lambda record: not _is_audit(record),
            colorize=True,
            diagnose=diagnose,
        )

    if log_settings.file_output:
        log_dir = log_settings.file_path.parent
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_settings.file_path,
            format=log_settings.format,
            level=log_settings.level,
            rotation=log_settings.rotation,
            retention=log_settings.retention,
            compression="zip",
            diagnose=diagnose,
            enqueue=True,
        )
        logger.add(
            log_dir / "audit.log",
            format=AUDIT_FORMAT,
            level="INFO",
            filter=_is_audit,
            rotation="1 week",
            retention="1 year",
            enqueue=True,
        )

    logger.debug(
        f"Logging ready: level={log_settings.level} "
        f"console={log_settings.console_output} file={log_settings.file_output}"
    )


def get_logger(name: str) -> Any:
    """Loguru logger bound to ``name`` (usually ``__name__``)."""
    return logger.bind(name=name)


def _sanitize_for_logging(data: Any) -> Any:
    """Copy of ``data`` with secrets and candidate free text replaced."""
    if isinstance(data, dict):
        cleaned = {}
        for key, value in data.items():
            lowered = str(key).lower()
            if any(marker in lowered for marker in SENSITIVE_KEYS):
                cleaned[key] = REDACTED
            else:
                cleaned[key] = _sanitize_for_logging(value)
        return cleaned
    if isinstance(data, (list, tuple)):
        return [_sanitize_for_logging(item) for item in data]
    return data


def audit_log(action: str, details: dict[str, Any], audit_type: str = "TRANSITION") -> None:
    """
    Record one lifecycle decision in the audit trail.

    Args:
        action: What happened, e.g. ``application_submitted``
        details: Identifiers and statuses involved; sanitized before writing
        audit_type: SUBMISSION, TRANSITION or DENIED
    """
    logger.bind(name="audit", audit_type=audit_type).info(
        f"{action} | {_sanitize_for_logging(details)}"
    )


class LoggerMixin:
    """Gives a class a ``self.logger`` bound to its class name."""

    @cached_property
    def logger(self) -> Any:
        return get_logger(type(self).__name__)
