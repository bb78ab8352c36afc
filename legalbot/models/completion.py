"""Completion request model for the OpenAI Responses API."""

from pydantic import BaseModel, Field


class CompletionRequest(BaseModel):
    """System instruction plus a single user turn."""
    model: str = Field(..., description="Completion model identifier")
    system_instruction: str = Field(..., description="Fixed system prompt")
    user_text: str = Field(..., description="Trimmed user message")

    def to_payload(self) -> dict:
        """Serialize to the Responses API request body."""
        return {
            "model": self.model,
            "input": [
                {"role": "system", "content": self.system_instruction},
                {"role": "user", "content": self.user_text},
            ],
        }
