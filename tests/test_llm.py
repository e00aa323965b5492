import os
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from agent_lite import llm
from agent_lite.config import Settings, load_settings, sandbox_root
from agent_lite.errors import ConfigurationError, ModelResponseError
from agent_lite.llm import OpenAIChatClient, get_chat_client, reset_chat_client


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "OPENAI_API_KEY",
        "OPENAI_MODEL",
        "OPENAI_LITE_MODEL",
        "OPENAI_LITE_BASE_URL",
        "AGENT_LITE_SANDBOX_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_chat_client()
    sandbox_root.cache_clear()
    yield
    reset_chat_client()
    sandbox_root.cache_clear()


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def test_load_settings_requires_api_key(monkeypatch):
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o-mini")
    with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
        load_settings()


def test_load_settings_requires_model(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    with pytest.raises(ConfigurationError, match="OPENAI_MODEL"):
        load_settings()


def test_lite_model_and_base_url_take_precedence(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o")
    monkeypatch.setenv("OPENAI_LITE_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("OPENAI_LITE_BASE_URL", "http://localhost:11434/v1")

    settings = load_settings()
    assert settings.model == "gpt-4o-mini"
    assert settings.base_url == "http://localhost:11434/v1"
    assert settings.temperature == 0
    assert settings.max_output_tokens == 600


def test_sandbox_root_default(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert sandbox_root() == os.path.join(os.getcwd(), "sandbox-lite")


def test_sandbox_root_override(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("AGENT_LITE_SANDBOX_DIR", "work/../box")
    assert sandbox_root() == os.path.join(os.getcwd(), "box")


def test_sandbox_root_fixed_after_first_use(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    first = sandbox_root()

    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    monkeypatch.chdir(elsewhere)
    monkeypatch.setenv("AGENT_LITE_SANDBOX_DIR", "other")

    assert sandbox_root() == first


# ---------------------------------------------------------------------------
# OpenAIChatClient
# ---------------------------------------------------------------------------


@patch("agent_lite.llm.OpenAI")
def test_complete_sends_messages_and_returns_text(mock_openai):
    create = mock_openai.return_value.chat.completions.create
    create.return_value = _completion('{"type":"final","content":"ok"}')

    client = OpenAIChatClient(Settings(api_key="sk-test", model="gpt-4o-mini"))
    messages = [{"role": "user", "content": "hi"}]

    assert client.complete(messages) == '{"type":"final","content":"ok"}'
    mock_openai.assert_called_once_with(api_key="sk-test", base_url=None)
    create.assert_called_once_with(
        model="gpt-4o-mini",
        messages=messages,
        temperature=0.0,
        max_tokens=600,
    )


@pytest.mark.parametrize("response", [_completion(None), _completion(""), SimpleNamespace(choices=[])])
@patch("agent_lite.llm.OpenAI")
def test_empty_completion_raises(mock_openai, response):
    mock_openai.return_value.chat.completions.create.return_value = response
    client = OpenAIChatClient(Settings(api_key="sk-test", model="m"))

    with pytest.raises(ModelResponseError, match="Empty model response"):
        client.complete([{"role": "user", "content": "hi"}])


# ---------------------------------------------------------------------------
# Shared client
# ---------------------------------------------------------------------------


@patch("agent_lite.llm.OpenAI")
def test_get_chat_client_builds_once(mock_openai, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o-mini")

    first = get_chat_client()
    second = get_chat_client()

    assert first is second
    assert first.model == "gpt-4o-mini"
    mock_openai.assert_called_once()


@patch("agent_lite.llm.OpenAI")
def test_failed_build_is_not_cached(mock_openai, monkeypatch):
    with pytest.raises(ConfigurationError):
        get_chat_client()
    assert llm._client is None

    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o-mini")
    assert isinstance(get_chat_client(), OpenAIChatClient)
