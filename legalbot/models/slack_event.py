"""Slack event models."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class EventType(str, Enum):
    """Event types the receiver distinguishes."""
    URL_VERIFICATION = "url_verification"
    MESSAGE = "message"
    OTHER = "other"

    @classmethod
    def parse(cls, value: object) -> "EventType":
        if value == cls.URL_VERIFICATION.value:
            return cls.URL_VERIFICATION
        if value == cls.MESSAGE.value:
            return cls.MESSAGE
        return cls.OTHER


class InboundEvent(BaseModel):
    """Message event delivered inside a Slack event_callback."""
    type: EventType = Field(..., description="Event type")
    bot_id: Optional[str] = Field(None, description="Set when a bot posted the message")
    subtype: Optional[str] = Field(None, description="Message subtype (edits, joins, ...)")
    text: str = Field("", description="Message text")
    channel: str = Field("", description="Slack channel ID")
    ts: str = Field("", description="Message timestamp, used as thread token")
    user: Optional[str] = Field(None, description="Slack user ID")

    @property
    def user_text(self) -> str:
        return self.text.strip()


class OutboundReply(BaseModel):
    """Reply posted back to the originating thread."""
    channel: str = Field(..., description="Slack channel ID")
    text: str = Field(..., description="Disclaimer plus reply body")
    thread_ts: str = Field(..., description="Timestamp of the message being replied to")

    def to_payload(self) -> dict:
        return {"channel": self.channel, "text": self.text, "thread_ts": self.thread_ts}
