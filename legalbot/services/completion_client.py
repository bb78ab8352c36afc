"""OpenAI Responses API client."""

import json
from typing import Any
import httpx
from legalbot.config import Settings
from legalbot.models.completion import CompletionRequest
from legalbot.utils.errors import CompletionError
from legalbot.utils.logging import get_event_logger, timed_call

logger = get_event_logger(__name__)

SYSTEM_INSTRUCTION = """
You are LegalBot, an internal legal/compliance assistant for a telehealth clinic.

Rules:
- Provide general informational guidance only (not legal advice).
- If high-risk (lawsuit/subpoena/DEA/state board complaint/HIPAA breach/termination),
  do not advise and instruct escalation to Compliance/Legal.
- Be concise, practical, and structured (bullets when helpful).
- If unclear, ask 1-2 clarifying questions.
"""


def build_completion_request(settings: Settings, user_text: str) -> CompletionRequest:
    return CompletionRequest(
        model=settings.openai_model,
        system_instruction=SYSTEM_INSTRUCTION,
        user_text=user_text.strip(),
    )


def _error_detail(payload: Any) -> str:
    try:
        return json.dumps(payload, indent=2, default=str)[:2000]
    except (TypeError, ValueError):
        return repr(payload)[:2000]


async def request_completion(
    client: httpx.AsyncClient,
    settings: Settings,
    request: CompletionRequest
) -> Any:
    """
    POST the request to the Responses API and return the decoded JSON payload.

    Raises CompletionError on transport errors, non-2xx statuses, bodies that
    are not JSON, and payloads carrying an ``error`` member.
    """
    try:
        with timed_call("openai_completion", logger, model=request.model):
            response = await client.post(
                settings.openai_api_url,
                headers={
                    "Authorization": f"Bearer {settings.openai_api_key}",
                    "Content-Type": "application/json",
                },
                json=request.to_payload(),
            )
    except httpx.HTTPError as e:
        raise CompletionError(f"OpenAI request failed: {e}") from e

    try:
        payload = response.json()
    except ValueError as e:
        raise CompletionError(
            f"OpenAI returned a non-JSON body (HTTP {response.status_code})",
            status_code=response.status_code,
        ) from e

    if response.is_error or (isinstance(payload, dict) and payload.get("error")):
        logger.error(
            "OpenAI error payload",
            http_status=response.status_code,
            error_payload=_error_detail(payload),
        )
        raise CompletionError(
            f"OpenAI returned an error (HTTP {response.status_code})",
            status_code=response.status_code,
            payload=payload,
        )

    return payload
