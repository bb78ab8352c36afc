"""Decide which Slack events warrant a reply."""

from typing import Optional
from legalbot.models.slack_event import EventType, InboundEvent
from legalbot.utils.logging import get_event_logger

logger = get_event_logger(__name__)


def _optional_str(value: object) -> Optional[str]:
    if not value:
        return None
    return str(value)


def parse_inbound_event(body: object) -> Optional[InboundEvent]:
    """
    Pull the inner event out of an event_callback body.

    Returns None when the body has no event object. Field types are
    coerced rather than validated so malformed payloads never raise.
    """
    if not isinstance(body, dict):
        return None

    event = body.get("event")
    if not isinstance(event, dict):
        return None

    text = event.get("text")
    return InboundEvent(
        type=EventType.parse(event.get("type")),
        bot_id=_optional_str(event.get("bot_id")),
        subtype=_optional_str(event.get("subtype")),
        text=text if isinstance(text, str) else "",
        channel=_optional_str(event.get("channel")) or "",
        ts=_optional_str(event.get("ts")) or "",
        user=_optional_str(event.get("user")),
    )


def skip_reason(event: Optional[InboundEvent]) -> Optional[str]:
    """Return why an event should be dropped, or None if it should be answered."""
    if event is None:
        return "no_event"
    # Bot posts include our own replies; answering them would loop forever
    if event.bot_id:
        return "bot_message"
    if event.type is not EventType.MESSAGE:
        return "not_a_message"
    # edits, joins, deletions, ...
    if event.subtype:
        return "has_subtype"
    if not event.user_text:
        return "empty_text"
    return None


def should_process(event: Optional[InboundEvent]) -> bool:
    return skip_reason(event) is None


def filter_event(body: object) -> Optional[InboundEvent]:
    """Parse a webhook body and return the event only if it should be answered."""
    event = parse_inbound_event(body)
    reason = skip_reason(event)
    if reason is not None:
        logger.debug(
            "Ignoring Slack event",
            skip_reason=reason,
            event_type=event.type.value if event is not None else None,
            subtype=event.subtype if event is not None else None,
        )
        return None
    return event
