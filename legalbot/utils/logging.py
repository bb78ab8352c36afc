"""Per-request logging helpers for the reply pipeline."""

import hashlib
import logging
import time
import uuid
from contextlib import contextmanager
from typing import Any, Optional

from legalbot.utils.logging_config import LoggingConfig, _request_id, current_request_id, redact_secrets


def new_request_id() -> str:
    """Id tying the webhook ack to the worker that answers it."""
    return f"req_{uuid.uuid4().hex[:12]}"


@contextmanager
def request_context(request_id: Optional[str] = None):
    """Bind a request id for the current thread / task."""
    token = _request_id.set(request_id or new_request_id())
    try:
        yield _request_id.get()
    finally:
        _request_id.reset(token)


def mask_user_id(user_id: Optional[str]) -> Optional[str]:
    """Slack user ids are stable identifiers; log a short hash instead."""
    if not user_id or not LoggingConfig.LOG_MASK_SENSITIVE:
        return user_id
    return f"{user_id[:1]}#{hashlib.sha256(user_id.encode()).hexdigest()[:8]}"


def message_preview(text: str, limit: int = 100) -> Optional[str]:
    """Truncated, redacted view of a user question, or None when content logging is off."""
    if not text or not LoggingConfig.LOG_MESSAGE_CONTENT:
        return None
    if len(text) > limit:
        text = text[:limit] + "..."
    return redact_secrets(text)


class EventLogger:
    """Wraps a stdlib logger so keyword arguments become structured fields."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def _log(self, level: int, message: str, exc_info: bool = False, **fields: Any) -> None:
        fields.setdefault("request_id", current_request_id())
        self.logger.log(level, message, extra=fields, exc_info=exc_info)

    def debug(self, message: str, **fields: Any) -> None:
        self._log(logging.DEBUG, message, **fields)

    def info(self, message: str, **fields: Any) -> None:
        self._log(logging.INFO, message, **fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._log(logging.WARNING, message, **fields)

    def error(self, message: str, exc_info: bool = False, **fields: Any) -> None:
        self._log(logging.ERROR, message, exc_info=exc_info, **fields)


def get_event_logger(name: str) -> EventLogger:
    return EventLogger(logging.getLogger(name))


@contextmanager
def timed_call(operation: str, logger: EventLogger, **fields: Any):
    """Log how long an upstream call took; warn past LOG_SLOW_CALL_MS."""
    started = time.monotonic()
    try:
        yield
    finally:
        elapsed_ms = round((time.monotonic() - started) * 1000, 2)
        if elapsed_ms > LoggingConfig.LOG_SLOW_CALL_MS:
            logger.warning(
                f"Slow {operation} call",
                operation=operation,
                elapsed_ms=elapsed_ms,
                threshold_ms=LoggingConfig.LOG_SLOW_CALL_MS,
                **fields
            )
        else:
            logger.info(f"{operation} finished", operation=operation, elapsed_ms=elapsed_ms, **fields)
