"""Custom assertion helpers."""

from typing import Any, Dict

from legalbot.services.reply_pipeline import DISCLAIMER


def assert_disclaimed_reply(call: Dict[str, Any], channel: str, thread_ts: str) -> None:
    """Assert that a chat.postMessage body is a disclaimed, threaded reply."""
    assert call["channel"] == channel
    assert call["thread_ts"] == thread_ts
    assert call["text"].startswith(DISCLAIMER + "\n\n")
    assert call["text"][len(DISCLAIMER) + 2:].strip()


def assert_no_outbound_calls(upstreams: Any) -> None:
    """Assert that neither OpenAI nor Slack was contacted."""
    assert upstreams.requests == []
