"""Unit tests for bulk request mutation and batch generation."""

from __future__ import annotations

import asyncio
import json
from dataclasses import replace
from typing import Any
from unittest.mock import patch

import pytest

from activity_engine.ai.orchestrator import ActivityEngine
from activity_engine.ai.pipeline.bulk import METHODOLOGY_CYCLE, build_bulk_requests
from activity_engine.ai.providers.base import CompletionModel, CompletionRequest, ModelResponse, SimpleModelResponse
from activity_engine.config import Settings
from activity_engine.schema.activities import AIGenerationRequest, VariationType


def test_methodology_cycling(generation_request: AIGenerationRequest) -> None:
  requests = build_bulk_requests(generation_request, 5, VariationType.METHODOLOGY)
  assert [request.methodologies for request in requests] == [[METHODOLOGY_CYCLE[index]] for index in range(5)]
  assert METHODOLOGY_CYCLE == ("montessori", "reggio", "waldorf", "highscope", "bankstreet")


def test_methodology_cycle_wraps(generation_request: AIGenerationRequest) -> None:
  requests = build_bulk_requests(generation_request, 7, VariationType.METHODOLOGY)
  assert requests[5].methodologies == ["montessori"]
  assert requests[6].methodologies == ["reggio"]


def test_difficulty_increments_age(generation_request: AIGenerationRequest) -> None:
  requests = build_bulk_requests(generation_request, 3, VariationType.DIFFICULTY)
  assert [request.child_profile.age for request in requests] == [4, 5, 6]


def test_age_cycles_three_to_five(generation_request: AIGenerationRequest) -> None:
  requests = build_bulk_requests(generation_request, 4, VariationType.AGE)
  assert [request.child_profile.age for request in requests] == [3, 4, 5, 3]


def test_environment_cycles(generation_request: AIGenerationRequest) -> None:
  requests = build_bulk_requests(generation_request, 4, VariationType.ENVIRONMENT)
  assert [request.environment for request in requests] == ["indoor", "outdoor", "both", "indoor"]


def test_only_one_field_changes_and_base_is_untouched(generation_request: AIGenerationRequest) -> None:
  original = generation_request.model_dump()
  varied = build_bulk_requests(generation_request, 2, VariationType.ENVIRONMENT)[1]
  assert generation_request.model_dump() == original
  changed = {key for key, value in varied.model_dump().items() if original[key] != value}
  assert changed == {"environment"}


@pytest.mark.parametrize("count", [0, -3])
def test_non_positive_count_builds_nothing(generation_request: AIGenerationRequest, count: int) -> None:
  assert build_bulk_requests(generation_request, count, VariationType.AGE) == []


@pytest.mark.anyio
async def test_bulk_returns_exactly_count_with_succeeding_model(settings: Settings, scripted_model, generation_request: AIGenerationRequest, activity_json: str) -> None:
  model = scripted_model([activity_json])
  engine = ActivityEngine(model=model, settings=settings)

  activities = await engine.generate_bulk(generation_request, 5, VariationType.METHODOLOGY)

  assert len(activities) == 5
  assert len(model.requests) == 5
  assert "MONTESSORI:" in model.requests[0].prompt
  assert "BANKSTREET:" in model.requests[4].prompt


@pytest.mark.anyio
async def test_bulk_with_failing_model_still_returns_fallbacks(settings: Settings, scripted_model, generation_request: AIGenerationRequest) -> None:
  engine = ActivityEngine(model=scripted_model([ConnectionError("down")]), settings=settings)
  activities = await engine.generate_bulk(generation_request, 3, VariationType.AGE)
  assert len(activities) == 3
  assert all(activity.title == "Maya's Art Adventure" for activity in activities)


@pytest.mark.anyio
async def test_bulk_skips_iterations_that_raise(settings: Settings, generation_request: AIGenerationRequest, activity_payload: dict[str, Any]) -> None:
  engine = ActivityEngine(model=None, settings=settings)
  original = engine.generate
  calls = 0

  async def _flaky(request: AIGenerationRequest):
    nonlocal calls
    calls += 1
    if calls == 2:
      raise RuntimeError("unexpected failure")
    return await original(request)

  with patch.object(engine, "generate", side_effect=_flaky):
    activities = await engine.generate_bulk(generation_request, 3, VariationType.DIFFICULTY)

  assert calls == 3
  assert len(activities) == 2


@pytest.mark.anyio
async def test_bulk_zero_count_makes_no_calls(settings: Settings, scripted_model, generation_request: AIGenerationRequest) -> None:
  model = scripted_model([])
  activities = await ActivityEngine(model=model, settings=settings).generate_bulk(generation_request, 0, VariationType.AGE)
  assert activities == []
  assert model.requests == []


class _ConcurrencyProbeModel(CompletionModel):
  """Tracks peak in-flight calls and replies with an activity naming the child's age."""

  name = "concurrency"

  def __init__(self, payload: dict[str, Any]) -> None:
    self._payload = payload
    self.in_flight = 0
    self.peak = 0

  async def complete(self, request: CompletionRequest) -> ModelResponse:
    self.in_flight += 1
    self.peak = max(self.peak, self.in_flight)
    try:
      age = request.prompt.split("- Age: ", 1)[1].split(" ", 1)[0]
      # Later requests finish first so ordering depends on the engine, not on timing.
      await asyncio.sleep(0.05 / int(age))
      return SimpleModelResponse(content=json.dumps({**self._payload, "title": f"Age {age}"}))
    finally:
      self.in_flight -= 1


@pytest.mark.anyio
async def test_sequential_by_default(settings: Settings, generation_request: AIGenerationRequest, activity_payload: dict[str, Any]) -> None:
  model = _ConcurrencyProbeModel(activity_payload)
  activities = await ActivityEngine(model=model, settings=settings).generate_bulk(generation_request, 4, VariationType.DIFFICULTY)
  assert model.peak == 1
  assert [activity.title for activity in activities] == ["Age 4", "Age 5", "Age 6", "Age 7"]


@pytest.mark.anyio
async def test_concurrency_limit_is_respected_and_order_kept(settings: Settings, generation_request: AIGenerationRequest, activity_payload: dict[str, Any]) -> None:
  model = _ConcurrencyProbeModel(activity_payload)
  engine = ActivityEngine(model=model, settings=replace(settings, bulk_concurrency=2))
  activities = await engine.generate_bulk(generation_request, 5, VariationType.DIFFICULTY)
  assert model.peak == 2
  assert [activity.title for activity in activities] == ["Age 4", "Age 5", "Age 6", "Age 7", "Age 8"]
