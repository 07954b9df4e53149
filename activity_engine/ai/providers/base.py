"""Base interfaces for completion models."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class CompletionRequest:
  """A single-shot system + user exchange."""

  system: str | None
  prompt: str
  temperature: float | None = None
  max_tokens: int | None = None
  model: str | None = None


class ModelResponse(Protocol):
  """Response contract for model outputs."""

  content: str
  usage: dict[str, int] | None


@dataclass
class SimpleModelResponse:
  """Minimal model response structure."""

  content: str
  usage: dict[str, int] | None = None


class CompletionModel(ABC):
  """Abstract base class for completion models."""

  name: str

  @abstractmethod
  async def complete(self, request: CompletionRequest) -> ModelResponse:
    """Return one text completion for the request."""
