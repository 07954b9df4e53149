"""Unit tests for the OpenAI completion model."""

from __future__ import annotations

from dataclasses import replace
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from activity_engine.ai.providers.base import CompletionRequest
from activity_engine.ai.providers.openai import OpenAIModel, build_completion_model
from activity_engine.config import Settings


def _completion(content: str | None) -> SimpleNamespace:
  usage = SimpleNamespace(prompt_tokens=5, completion_tokens=7, total_tokens=12)
  return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))], usage=usage)


def test_requires_api_key() -> None:
  with pytest.raises(ValueError, match="OPENAI_API_KEY"):
    OpenAIModel("gpt-test", api_key=None)


def test_client_is_single_attempt() -> None:
  with patch("activity_engine.ai.providers.openai.AsyncOpenAI") as client_cls:
    OpenAIModel("gpt-test", api_key="sk-test", base_url="http://local", timeout=9.0)
  client_cls.assert_called_once_with(api_key="sk-test", base_url="http://local", timeout=9.0, max_retries=0)


@pytest.mark.anyio
async def test_complete_sends_system_and_user_messages() -> None:
  client = MagicMock()
  client.chat.completions.create = AsyncMock(return_value=_completion('{"title": "x"}'))
  with patch("activity_engine.ai.providers.openai.AsyncOpenAI", return_value=client):
    model = OpenAIModel("gpt-test", api_key="sk-test")

  response = await model.complete(CompletionRequest(system="Respond with JSON", prompt="Make an activity", temperature=0.7, max_tokens=6000))

  client.chat.completions.create.assert_awaited_once_with(
    model="gpt-test",
    messages=[{"role": "system", "content": "Respond with JSON"}, {"role": "user", "content": "Make an activity"}],
    temperature=0.7,
    max_tokens=6000,
  )
  assert response.content == '{"title": "x"}'
  assert response.usage == {"prompt_tokens": 5, "completion_tokens": 7, "total_tokens": 12}


@pytest.mark.anyio
async def test_complete_model_override_and_empty_content() -> None:
  client = MagicMock()
  client.chat.completions.create = AsyncMock(return_value=_completion(None))
  with patch("activity_engine.ai.providers.openai.AsyncOpenAI", return_value=client):
    model = OpenAIModel("gpt-test", api_key="sk-test")

  response = await model.complete(CompletionRequest(system=None, prompt="ping", max_tokens=20, model="gpt-probe"))

  client.chat.completions.create.assert_awaited_once_with(model="gpt-probe", messages=[{"role": "user", "content": "ping"}], max_tokens=20)
  assert response.content == ""


def test_build_completion_model(settings: Settings) -> None:
  assert build_completion_model(replace(settings, openai_api_key=None)) is None
  with patch("activity_engine.ai.providers.openai.AsyncOpenAI"):
    model = build_completion_model(settings)
  assert isinstance(model, OpenAIModel)
  assert model.name == "gpt-test"
