"""Process-wide logging setup: stdout handler, request ids and secret redaction."""

import os
import re
import logging
import sys
from contextvars import ContextVar
from typing import Optional
from pythonjsonlogger.json import JsonFormatter

# Third-party loggers that log every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore")

# (pattern, replacement), applied in order
SECRET_PATTERNS = (
    (re.compile(r'Bearer\s+[A-Za-z0-9._-]+'), 'Bearer [REDACTED]'),
    (re.compile(r'xox[abeoprs]-[A-Za-z0-9-]+', re.IGNORECASE), '[REDACTED_SLACK_TOKEN]'),
    (re.compile(r'sk-[A-Za-z0-9_-]{16,}'), '[REDACTED_OPENAI_KEY]'),
    (re.compile(r'[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}', re.IGNORECASE), '[REDACTED_EMAIL]'),
    (re.compile(r'\b\+?\d[\d\s().-]{7,}\b'), '[REDACTED_PHONE]'),
)

_request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)


class LoggingConfig:
    """Logging knobs, read from the environment at import."""

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT = os.environ.get("LOG_FORMAT", "json").lower()
    # Whether user questions may appear (redacted, truncated) in logs
    LOG_MESSAGE_CONTENT = os.environ.get("LOG_MESSAGE_CONTENT", "true").lower() == "true"
    LOG_MASK_SENSITIVE = os.environ.get("LOG_MASK_SENSITIVE", "true").lower() == "true"
    # OpenAI calls routinely take seconds; only flag the pathological ones
    LOG_SLOW_CALL_MS = int(os.environ.get("LOG_SLOW_CALL_MS", "15000"))

    @classmethod
    def build_formatter(cls) -> logging.Formatter:
        if cls.LOG_FORMAT == "json":
            return JsonFormatter(
                "%(asctime)s %(levelname)s %(name)s %(request_id)s %(message)s",
                rename_fields={"asctime": "timestamp", "levelname": "level"},
            )
        return logging.Formatter("%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s")

    @classmethod
    def setup_logging(cls) -> None:
        """Send every record to stdout, tagged with the request id and scrubbed of secrets."""
        handler = logging.StreamHandler(sys.stdout)
        handler.addFilter(RequestContextFilter())
        handler.setFormatter(cls.build_formatter())

        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.addHandler(handler)
        root_logger.setLevel(getattr(logging, cls.LOG_LEVEL, logging.INFO))

        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def redact_secrets(text: str) -> str:
    """Replace tokens, API keys and contact details with placeholders."""
    if not text or not LoggingConfig.LOG_MASK_SENSITIVE:
        return text
    for pattern, replacement in SECRET_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def current_request_id() -> Optional[str]:
    return _request_id.get()


class RequestContextFilter(logging.Filter):
    """
    Fill in ``request_id`` for records that lack it (http.server access
    lines, third-party loggers) and redact the rendered message.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = current_request_id() or "-"
        if LoggingConfig.LOG_MASK_SENSITIVE:
            record.msg = redact_secrets(record.getMessage())
            record.args = None
        return True
