"""OpenAI chat-completions model using the openai SDK."""

from __future__ import annotations

import logging

from openai import AsyncOpenAI

from activity_engine.ai.providers.base import CompletionModel, CompletionRequest, ModelResponse, SimpleModelResponse
from activity_engine.config import Settings

logger = logging.getLogger(__name__)


class OpenAIModel(CompletionModel):
  """Chat-completions client. No SDK retries: every call is a single attempt."""

  def __init__(self, name: str, api_key: str | None, base_url: str | None = None, timeout: float | None = None) -> None:
    self.name: str = name
    if not api_key:
      raise ValueError("OPENAI_API_KEY is required to build a completion model")

    self._client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)

  async def complete(self, request: CompletionRequest) -> ModelResponse:
    """Send one chat completion and return its text."""
    messages = []
    if request.system:
      messages.append({"role": "system", "content": request.system})
    messages.append({"role": "user", "content": request.prompt})

    kwargs = {}
    if request.temperature is not None:
      kwargs["temperature"] = request.temperature
    if request.max_tokens is not None:
      kwargs["max_tokens"] = request.max_tokens

    model_name = request.model or self.name
    response = await self._client.chat.completions.create(model=model_name, messages=messages, **kwargs)

    content = ""
    if response.choices:
      content = response.choices[0].message.content or ""
    logger.debug("OpenAI response from %s (%d chars)", model_name, len(content))
    usage = None

    if response.usage:
      usage = {"prompt_tokens": response.usage.prompt_tokens, "completion_tokens": response.usage.completion_tokens, "total_tokens": response.usage.total_tokens}

    return SimpleModelResponse(content=content, usage=usage)


def build_completion_model(settings: Settings) -> CompletionModel | None:
  """Return the configured model, or None when no API key is set."""
  if not settings.completion_api_configured:
    return None
  return OpenAIModel(settings.generation_model, api_key=settings.openai_api_key, base_url=settings.openai_base_url, timeout=settings.request_timeout_seconds)
