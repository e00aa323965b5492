# llm.py
# Model transport. The loop only needs one thing from a model backend:
# messages in, one completion string out.

import threading
from typing import Protocol

from openai import OpenAI

from agent_lite.config import Settings, load_settings
from agent_lite.errors import ModelResponseError


class ChatClient(Protocol):
    def complete(self, messages: list[dict]) -> str: ...


class OpenAIChatClient:
    """
    Chat-completions client for any OpenAI-compatible endpoint.

    SDK errors (network, auth, upstream API) propagate unchanged. No retry
    policy is layered on top of whatever the SDK itself does.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._client = OpenAI(api_key=settings.api_key, base_url=settings.base_url)

    @property
    def model(self) -> str:
        return self._settings.model

    def complete(self, messages: list[dict]) -> str:
        response = self._client.chat.completions.create(
            model=self._settings.model,
            messages=messages,
            temperature=self._settings.temperature,
            max_tokens=self._settings.max_output_tokens,
        )
        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise ModelResponseError("Empty model response.")
        return content


# ---------------------------------------------------------------------------
# Process-wide client
# ---------------------------------------------------------------------------

_client: OpenAIChatClient | None = None
_client_lock = threading.Lock()


def get_chat_client() -> OpenAIChatClient:
    """
    Return the shared client, building it on first use.

    Construction happens once under a lock; readers after that never lock.
    If settings are missing the ConfigurationError propagates and nothing
    is cached, so a later call can succeed once the environment is fixed.
    """
    global _client
    if _client is None:
        with _client_lock:
            if _client is None:
                _client = OpenAIChatClient(load_settings())
    return _client


def reset_chat_client() -> None:
    global _client
    with _client_lock:
        _client = None
