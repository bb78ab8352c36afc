"""Slack event fixtures."""

from typing import Dict, Any

from tests.utils.helpers import create_slack_event


def slack_url_verification_challenge() -> Dict[str, Any]:
    """Slack URL verification challenge payload."""
    return {
        "type": "url_verification",
        "challenge": "3eZbrw1aBm2rZgRNFdxV2595E9CY3gmdALWMmHkvFXO7tYXAYM8P",
        "token": "test-token"
    }


def slack_message_event(text: str = "Can I ignore a subpoena?") -> Dict[str, Any]:
    """Plain user message."""
    return create_slack_event(text=text, channel="C024BE91L", ts="1355517523.000005")


def slack_bot_message_event() -> Dict[str, Any]:
    """Message posted by a bot (including our own replies)."""
    return create_slack_event(text="⚠️ Not legal advice.", bot_id="B123456")


def slack_edited_message_event() -> Dict[str, Any]:
    """Edit notification."""
    return create_slack_event(text="edited", subtype="message_changed")


def slack_channel_join_event() -> Dict[str, Any]:
    """Channel join notice."""
    return create_slack_event(text="<@U123456> has joined the channel", subtype="channel_join")


def slack_app_mention_event() -> Dict[str, Any]:
    """Event type we do not answer."""
    return create_slack_event(event_type="app_mention", text="<@U0LAN0Z89> is it legal?")


def slack_blank_message_event() -> Dict[str, Any]:
    """Whitespace-only message."""
    return create_slack_event(text="   \n\t ")
