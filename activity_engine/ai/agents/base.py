"""Base class for AI agents."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from activity_engine.ai.providers.base import CompletionModel, CompletionRequest
from activity_engine.config import Settings

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")
UsageSink = Callable[[dict[str, Any]], None] | None
Model = CompletionModel | None


class BaseAgent(ABC, Generic[InputT, OutputT]):
  """Base agent with shared dependencies.

  `model` is None when no completion-API key is configured; agents then take their degraded path without a network call.
  """

  name: str

  def __init__(self, *, model: Model, settings: Settings, use: UsageSink = None) -> None:
    self._model = model
    self._settings = settings
    self._usage_sink = use

  @abstractmethod
  async def run(self, input_data: InputT) -> OutputT:
    """Run the agent on input data."""

  async def _complete(self, request: CompletionRequest, *, purpose: str, call_index: str = "1/1") -> str:
    """Issue one completion bounded by the configured timeout and return its text.

    Raises RuntimeError when no model is configured and TimeoutError when the call overruns.
    """
    if self._model is None:
      raise RuntimeError("OpenAI API key is not configured")

    response = await asyncio.wait_for(self._model.complete(request), timeout=self._settings.request_timeout_seconds)
    self._record_usage(agent=self.name, purpose=purpose, call_index=call_index, usage=response.usage)
    return response.content

  def _record_usage(self, *, agent: str, purpose: str, call_index: str, usage: dict[str, int] | None) -> None:
    if not usage or not self._usage_sink:
      return
    payload = {"model": getattr(self._model, "name", "unknown"), "agent": agent, "purpose": purpose, "call_index": call_index, **usage}
    self._usage_sink(payload)
