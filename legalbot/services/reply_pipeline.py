"""Reply pipeline - ask the completion API and post the answer back to the thread."""

import asyncio
import threading
from enum import Enum
from typing import Optional
import httpx
from legalbot.config import Settings
from legalbot.models.slack_event import InboundEvent, OutboundReply
from legalbot.services.completion_client import build_completion_request, request_completion
from legalbot.services.event_filter import filter_event
from legalbot.services.response_extractor import extract_response_text
from legalbot.services.slack_client import post_message
from legalbot.utils.errors import CompletionError, SlackDeliveryError
from legalbot.utils.logging import (
    request_context,
    get_event_logger,
    mask_user_id,
    message_preview,
)

logger = get_event_logger(__name__)

DISCLAIMER = "⚠️ Not legal advice. Consult compliance before acting."
FALLBACK_TEXT = "I couldn't generate a response. Please escalate to Compliance/Legal."
INTERNAL_ERROR_TEXT = (
    "LegalBot hit an internal error generating a response. "
    "Please try again or escalate to Compliance/Legal."
)


class ReplyOutcome(str, Enum):
    """Terminal state of one webhook delivery."""
    FILTERED_OUT = "filtered_out"
    DELIVERED = "delivered"
    FALLBACK_NOTIFIED = "fallback_notified"
    FALLBACK_FAILED = "fallback_failed"


def with_disclaimer(body: str) -> str:
    return f"{DISCLAIMER}\n\n{body}"


class ReplyPipeline:
    """
    Turns a filtered Slack message into a threaded, disclaimed reply.

    Holds only settings and an optional httpx transport; every event gets
    its own AsyncClient so concurrent deliveries share nothing.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        if self._transport is not None:
            return httpx.AsyncClient(transport=self._transport)
        return httpx.AsyncClient()

    def dispatch(self, body: dict, request_id: Optional[str] = None) -> threading.Thread:
        """Process a webhook body on a detached worker thread with its own event loop."""
        worker = threading.Thread(
            target=self._run_detached,
            args=(body, request_id),
            name=f"legalbot-{request_id or 'event'}",
            daemon=True,
        )
        worker.start()
        return worker

    def _run_detached(self, body: dict, request_id: Optional[str]) -> None:
        loop = asyncio.new_event_loop()
        try:
            with request_context(request_id):
                loop.run_until_complete(self.process_body(body))
        except Exception as e:
            logger.error(f"Detached event processing failed: {e}", exc_info=True)
        finally:
            loop.close()

    async def process_body(self, body: dict) -> ReplyOutcome:
        """Filter a raw event_callback body and answer it if it qualifies."""
        event = filter_event(body)
        if event is None:
            return ReplyOutcome.FILTERED_OUT
        return await self.handle_event(event)

    async def handle_event(self, event: InboundEvent) -> ReplyOutcome:
        """Generate and deliver a reply; never raises."""
        logger.info(
            "Handling Slack message",
            channel_id=event.channel,
            thread_ts=event.ts,
            slack_user_id=mask_user_id(event.user) if event.user else None,
            message_preview=message_preview(event.user_text),
        )

        try:
            async with self._client() as client:
                reply = OutboundReply(
                    channel=event.channel,
                    text=with_disclaimer(await self._generate_reply(client, event)),
                    thread_ts=event.ts,
                )
                try:
                    await post_message(client, self.settings, reply)
                except SlackDeliveryError as e:
                    logger.error(
                        f"Slack postMessage failed: {e}",
                        channel_id=event.channel,
                        slack_error=e.slack_error,
                    )
                    return await self._notify_internal_error(client, event)

                logger.info("Reply delivered", channel_id=event.channel, thread_ts=event.ts)
                return ReplyOutcome.DELIVERED
        except Exception as e:
            logger.error(f"LegalBot runtime error: {e}", exc_info=True, channel_id=event.channel)
            async with self._client() as client:
                return await self._notify_internal_error(client, event)

    async def _generate_reply(self, client: httpx.AsyncClient, event: InboundEvent) -> str:
        request = build_completion_request(self.settings, event.user_text)

        payload = None
        try:
            payload = await request_completion(client, self.settings, request)
        except CompletionError as e:
            logger.error(
                f"Completion failed, using fallback text: {e}",
                http_status=e.status_code,
                model=request.model,
            )

        text = extract_response_text(payload)
        if text is None:
            logger.warning("No answer extracted from completion payload", model=request.model)
            return FALLBACK_TEXT
        return text

    async def _notify_internal_error(self, client: httpx.AsyncClient, event: InboundEvent) -> ReplyOutcome:
        """Single best-effort notice into the thread; no further retries."""
        notice = OutboundReply(
            channel=event.channel,
            text=with_disclaimer(INTERNAL_ERROR_TEXT),
            thread_ts=event.ts,
        )
        try:
            await post_message(client, self.settings, notice)
        except Exception as e:
            logger.error(f"Failed to post Slack fallback message: {e}", channel_id=event.channel)
            return ReplyOutcome.FALLBACK_FAILED

        logger.info("Fallback notice delivered", channel_id=event.channel, thread_ts=event.ts)
        return ReplyOutcome.FALLBACK_NOTIFIED
