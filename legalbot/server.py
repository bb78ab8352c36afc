"""Standalone HTTP server: routes /events and / onto the endpoint handlers."""

import sys
from http.server import ThreadingHTTPServer
from typing import Optional
from urllib.parse import urlsplit

from api.health import write_liveness
from api.slack.events import handler as EventsHandler
from legalbot.config import Settings
from legalbot.services.reply_pipeline import ReplyPipeline
from legalbot.utils.errors import ConfigurationError
from legalbot.utils.logging import get_event_logger
from legalbot.utils.logging_config import LoggingConfig

logger = get_event_logger(__name__)

EVENT_PATHS = ("/events", "/slack/events", "/api/slack/events")
HEALTH_PATHS = ("/", "/api/health")


class LegalBotRequestHandler(EventsHandler):
    """Path router in front of the Slack events and health handlers."""

    def _path(self) -> str:
        return urlsplit(self.path).path.rstrip("/") or "/"

    def do_GET(self):
        if self._path() in HEALTH_PATHS:
            write_liveness(self)
        elif self._path() in EVENT_PATHS:
            super().do_GET()
        else:
            self._send_json(404, {"error": "not found"})

    def do_POST(self):
        if self._path() in EVENT_PATHS:
            super().do_POST()
        else:
            self._send_json(404, {"error": "not found"})


def build_server(
    settings: Settings,
    pipeline: Optional[ReplyPipeline] = None,
    host: str = "",
) -> ThreadingHTTPServer:
    """Create a threading server whose handler is bound to one pipeline."""
    bound_handler = type(
        "BoundLegalBotRequestHandler",
        (LegalBotRequestHandler,),
        {"pipeline": pipeline or ReplyPipeline(settings)},
    )
    server = ThreadingHTTPServer((host, settings.port), bound_handler)
    server.daemon_threads = True
    return server


def main() -> int:
    LoggingConfig.setup_logging()

    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        logger.error(f"Cannot start LegalBot: {e}")
        return 1

    server = build_server(settings)
    logger.info(f"LegalBot listening on port {settings.port}", port=settings.port, model=settings.openai_model)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.server_close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
