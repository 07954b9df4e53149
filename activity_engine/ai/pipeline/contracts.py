"""Tagged results passed between parsing, agents and the engine facade."""

from __future__ import annotations

from dataclasses import dataclass

from activity_engine.schema.activities import ActivitySource, AIGeneratedActivity


@dataclass(frozen=True)
class ValidPayload:
  """A completion that parsed into an activity with its required fields present."""

  activity: AIGeneratedActivity


@dataclass(frozen=True)
class InvalidPayload:
  """A completion that could not be used, with a short reason for logs."""

  reason: str


ParseResult = ValidPayload | InvalidPayload


@dataclass(frozen=True)
class GenerationResult:
  """Outcome of a single generation: the activity plus where it came from."""

  source: ActivitySource
  activity: AIGeneratedActivity
  reason: str | None = None
