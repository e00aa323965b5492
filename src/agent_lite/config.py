# config.py
# Environment configuration. Values come from the process environment,
# with a local .env file loaded first (existing variables win).

import functools
import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from agent_lite.errors import ConfigurationError

load_dotenv()

DEFAULT_SANDBOX_DIR = "sandbox-lite"
DEFAULT_TEMPERATURE = 0.0
DEFAULT_MAX_OUTPUT_TOKENS = 600


class Settings(BaseModel):
    """Model endpoint settings. Immutable once loaded."""

    model_config = ConfigDict(frozen=True)

    api_key: str
    model: str
    base_url: str | None = None
    temperature: float = DEFAULT_TEMPERATURE
    max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS


def load_settings() -> Settings:
    """
    Read model settings from the environment.

    OPENAI_LITE_MODEL takes precedence over OPENAI_MODEL, and
    OPENAI_LITE_BASE_URL optionally points at an alternate endpoint.
    Raises ConfigurationError when the key or model is missing.
    """
    api_key = os.getenv("OPENAI_API_KEY")
    model = os.getenv("OPENAI_LITE_MODEL") or os.getenv("OPENAI_MODEL")
    base_url = os.getenv("OPENAI_LITE_BASE_URL") or None

    if not api_key:
        raise ConfigurationError("Missing OPENAI_API_KEY in environment.")
    if not model:
        raise ConfigurationError("Missing OPENAI_MODEL in environment.")

    return Settings(api_key=api_key, model=model, base_url=base_url)


@functools.cache
def sandbox_root() -> str:
    """
    Absolute sandbox directory; AGENT_LITE_SANDBOX_DIR overrides the default.

    Resolved on first use and fixed for the rest of the process.
    """
    return os.path.abspath(os.getenv("AGENT_LITE_SANDBOX_DIR") or DEFAULT_SANDBOX_DIR)
