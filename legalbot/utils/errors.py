"""Error handling utilities."""

from typing import Optional


class LegalBotError(Exception):
    """Base exception for LegalBot."""
    pass


class ConfigurationError(LegalBotError):
    """Required setting missing or invalid."""
    pass


class CompletionError(LegalBotError):
    """Completion API call failed."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Optional[object] = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class SlackDeliveryError(LegalBotError):
    """Slack chat.postMessage call failed."""

    def __init__(self, message: str, slack_error: Optional[str] = None):
        super().__init__(message)
        self.slack_error = slack_error
