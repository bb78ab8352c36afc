"""Slack events webhook endpoint."""

from http.server import BaseHTTPRequestHandler
from typing import Optional
import json
import logging

from legalbot.config import Settings
from legalbot.services.reply_pipeline import ReplyPipeline
from legalbot.utils.logging import new_request_id, get_event_logger

logger = get_event_logger(__name__)

# Built on first request when running as a serverless function
_pipeline: Optional[ReplyPipeline] = None


def _load_pipeline() -> ReplyPipeline:
    """Lazy build the pipeline from environment settings."""
    global _pipeline

    if _pipeline is None:
        _pipeline = ReplyPipeline(Settings.from_env())
    return _pipeline


def parse_body(raw_body: bytes) -> dict:
    """Decode a webhook body; anything but a UTF-8 JSON object becomes {}."""
    try:
        body = json.loads(raw_body.decode('utf-8')) if raw_body else {}
    except (UnicodeDecodeError, json.JSONDecodeError):
        return {}
    return body if isinstance(body, dict) else {}


class handler(BaseHTTPRequestHandler):
    """
    Slack events handler.

    POST acknowledges with 200 before any downstream work starts, then hands
    the body to the reply pipeline on a detached worker. ``pipeline`` is bound
    by the standalone server; serverless deployments build it lazily.
    """

    pipeline: Optional[ReplyPipeline] = None

    def _send_json(self, status: int, payload: dict) -> None:
        body = json.dumps(payload).encode('utf-8')
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Content-Length', str(len(body)))
        self.end_headers()
        self.wfile.write(body)
        self.wfile.flush()

    def _resolve_pipeline(self) -> ReplyPipeline:
        return self.pipeline if self.pipeline is not None else _load_pipeline()

    def do_POST(self):
        """Handle POST request from Slack."""
        acknowledged = False
        try:
            content_length = int(self.headers.get('Content-Length', 0))
            raw_body = self.rfile.read(content_length) if content_length > 0 else b""
            body = parse_body(raw_body)

            # URL verification is answered synchronously and goes no further
            if body.get("type") == "url_verification":
                self._send_json(200, {"challenge": body.get("challenge")})
                logger.info("URL verification successful")
                return

            pipeline = self._resolve_pipeline()
            request_id = new_request_id()

            # ACK before any outbound call so Slack doesn't time out and retry
            self._send_json(200, {"ok": True})
            acknowledged = True
            logger.info("Slack event acknowledged", request_id=request_id)

            pipeline.dispatch(body, request_id)

        except Exception as e:
            logger.error(f"Error processing Slack event: {e}", exc_info=True)
            if not acknowledged:
                self._send_json(500, {"error": "internal server error"})

    def do_GET(self):
        """Handle GET request (endpoint status)."""
        self._send_json(200, {"status": "ok", "endpoint": "slack/events"})

    def log_message(self, format, *args):
        logging.getLogger(__name__).debug("%s - %s", self.address_string(), format % args)
