"""Slack chat.postMessage client."""

import httpx
from legalbot.config import Settings
from legalbot.models.slack_event import OutboundReply
from legalbot.utils.errors import SlackDeliveryError
from legalbot.utils.logging import get_event_logger, timed_call

logger = get_event_logger(__name__)


async def post_message(
    client: httpx.AsyncClient,
    settings: Settings,
    reply: OutboundReply
) -> dict:
    """
    Post a threaded reply to Slack.

    Returns the decoded Slack response. Raises SlackDeliveryError on
    transport errors, non-2xx statuses, and ``ok: false`` responses.
    """
    try:
        with timed_call("slack_post_message", logger, channel_id=reply.channel):
            response = await client.post(
                settings.slack_api_url,
                headers={
                    "Authorization": f"Bearer {settings.slack_bot_token}",
                    "Content-Type": "application/json; charset=utf-8",
                },
                json=reply.to_payload(),
            )
    except httpx.HTTPError as e:
        raise SlackDeliveryError(f"Slack request failed: {e}") from e

    if response.is_error:
        raise SlackDeliveryError(f"Slack returned HTTP {response.status_code}")

    try:
        data = response.json()
    except ValueError as e:
        raise SlackDeliveryError("Slack returned a non-JSON body") from e

    if not isinstance(data, dict) or not data.get("ok"):
        slack_error = data.get("error") if isinstance(data, dict) else None
        raise SlackDeliveryError(
            f"Slack postMessage error: {slack_error or 'unknown'}",
            slack_error=slack_error,
        )

    return data
