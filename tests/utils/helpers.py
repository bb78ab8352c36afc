"""Test helper functions."""

import json
import time
from io import BytesIO
from typing import Any, Dict, List, Optional, Tuple

import httpx


def create_slack_event(
    event_type: str = "message",
    text: str = "Test message",
    channel: str = "C123456",
    user: str = "U123456",
    ts: Optional[str] = None,
    **event_fields: Any
) -> Dict[str, Any]:
    """Create a Slack event_callback payload for testing."""
    if ts is None:
        ts = f"{int(time.time())}.123456"

    event = {
        "type": event_type,
        "channel": channel,
        "user": user,
        "text": text,
        "ts": ts,
    }
    event.update(event_fields)

    return {
        "type": "event_callback",
        "event_id": f"Ev{int(time.time())}",
        "event": event,
        "team_id": "T123456"
    }


def build_http_request(
    method: str = "POST",
    path: str = "/events",
    body: Any = None,
) -> bytes:
    """Serialize an HTTP/1.1 request as raw bytes."""
    if body is None:
        payload = b""
    elif isinstance(body, (bytes, str)):
        payload = body.encode('utf-8') if isinstance(body, str) else body
    else:
        payload = json.dumps(body).encode('utf-8')

    head = (
        f"{method} {path} HTTP/1.1\r\n"
        "Host: localhost\r\n"
        "Content-Type: application/json\r\n"
        f"Content-Length: {len(payload)}\r\n"
        "\r\n"
    )
    return head.encode('utf-8') + payload


class MockSocket:
    """Minimal socket: serves a canned request and records everything sent."""

    def __init__(self, request_bytes: bytes):
        self._rfile = BytesIO(request_bytes)
        self.sent = bytearray()

    def makefile(self, *args, **kwargs):
        return self._rfile

    def sendall(self, data):
        self.sent.extend(data)

    def close(self):
        pass


def run_handler(handler_cls, request_bytes: bytes) -> MockSocket:
    """Run one request through a BaseHTTPRequestHandler subclass."""
    sock = MockSocket(request_bytes)
    handler_cls(sock, ("127.0.0.1", 8000), None)
    return sock


def parse_http_response(raw: bytes) -> Tuple[int, Dict[str, str], bytes]:
    """Split raw response bytes into (status, headers, body)."""
    head, _, body = bytes(raw).partition(b"\r\n\r\n")
    lines = head.decode('iso-8859-1').split("\r\n")
    status = int(lines[0].split()[1])
    headers = {}
    for line in lines[1:]:
        name, _, value = line.partition(":")
        headers[name.strip().lower()] = value.strip()
    return status, headers, body


def bind_handler(handler_cls, pipeline):
    """Subclass a handler with a pipeline bound, as the server does."""
    return type("BoundTestHandler", (handler_cls,), {"pipeline": pipeline})


def openai_response(text: str) -> Dict[str, Any]:
    """Responses API payload in the current documented shape."""
    return {
        "id": "resp_test",
        "object": "response",
        "output": [
            {
                "type": "message",
                "role": "assistant",
                "content": [{"type": "output_text", "text": text, "annotations": []}],
            }
        ],
    }


class FakeUpstreams:
    """
    httpx MockTransport handler standing in for OpenAI and Slack.

    Slack responses are consumed in order; once exhausted every post
    succeeds. An entry of "raise" simulates a transport error.
    """

    def __init__(
        self,
        openai: Any = None,
        slack: Optional[List[Any]] = None,
    ):
        self.openai = openai if openai is not None else httpx.Response(200, json=openai_response("Generated answer"))
        self.slack = list(slack or [])
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "api.openai.com":
            return self._respond(self.openai, request)
        if request.url.host == "slack.com":
            planned = self.slack.pop(0) if self.slack else httpx.Response(200, json={"ok": True, "ts": "1.1"})
            return self._respond(planned, request)
        return httpx.Response(404)

    @staticmethod
    def _respond(planned: Any, request: httpx.Request) -> httpx.Response:
        if planned == "raise":
            raise httpx.ConnectError("connection refused", request=request)
        return planned

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def _calls(self, host: str) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests if r.url.host == host]

    @property
    def openai_calls(self) -> List[Dict[str, Any]]:
        return self._calls("api.openai.com")

    @property
    def slack_calls(self) -> List[Dict[str, Any]]:
        return self._calls("slack.com")
