"""Runtime settings, read from the environment once at startup."""

import os
from typing import Mapping, Optional
from pydantic import BaseModel, Field, ValidationError
from legalbot.utils.errors import ConfigurationError

DEFAULT_PORT = 3000
DEFAULT_OPENAI_MODEL = "gpt-4.1-mini"
DEFAULT_OPENAI_API_URL = "https://api.openai.com/v1/responses"
DEFAULT_SLACK_API_URL = "https://slack.com/api/chat.postMessage"


class Settings(BaseModel):
    """Settings shared by the webhook receiver and the reply pipeline."""
    slack_bot_token: str = Field(..., min_length=1, description="Slack bot OAuth token")
    openai_api_key: str = Field(..., min_length=1, description="OpenAI API key")
    port: int = Field(DEFAULT_PORT, ge=1, le=65535, description="HTTP listen port")
    openai_model: str = Field(DEFAULT_OPENAI_MODEL, description="Completion model identifier")
    openai_api_url: str = Field(DEFAULT_OPENAI_API_URL, description="Responses API endpoint")
    slack_api_url: str = Field(DEFAULT_SLACK_API_URL, description="chat.postMessage endpoint")

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Secrets have no defaults; a missing or blank SLACK_BOT_TOKEN or
        OPENAI_API_KEY raises ConfigurationError.
        """
        env = os.environ if environ is None else environ

        missing = [
            name for name in ("SLACK_BOT_TOKEN", "OPENAI_API_KEY")
            if not env.get(name, "").strip()
        ]
        if missing:
            raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")

        values = {
            # strip to remove any trailing newlines from env var
            "slack_bot_token": env["SLACK_BOT_TOKEN"].strip(),
            "openai_api_key": env["OPENAI_API_KEY"].strip(),
        }
        optional = {
            "port": "PORT",
            "openai_model": "OPENAI_MODEL",
            "openai_api_url": "OPENAI_API_URL",
            "slack_api_url": "SLACK_API_URL",
        }
        for field_name, env_name in optional.items():
            raw = env.get(env_name, "").strip()
            if raw:
                values[field_name] = raw

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid settings: {e}") from e
