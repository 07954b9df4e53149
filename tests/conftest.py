"""Shared fixtures: settings, sample requests and a scripted completion model."""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from activity_engine.ai.orchestrator import ActivityEngine
from activity_engine.ai.providers.base import CompletionModel, CompletionRequest, ModelResponse, SimpleModelResponse
from activity_engine.api.deps import get_engine
from activity_engine.config import Settings
from activity_engine.main import app
from activity_engine.schema.activities import AIGeneratedActivity, AIGenerationRequest

ScriptItem = str | BaseException


class ScriptedModel(CompletionModel):
  """Completion model returning scripted replies in order; the last entry repeats once the script runs out."""

  def __init__(self, script: Sequence[ScriptItem], name: str = "fake-model") -> None:
    self.name = name
    self._script = list(script)
    self.requests: list[CompletionRequest] = []

  async def complete(self, request: CompletionRequest) -> ModelResponse:
    self.requests.append(request)
    if not self._script:
      raise ConnectionError("connection refused")
    item = self._script[min(len(self.requests), len(self._script)) - 1]
    if isinstance(item, BaseException):
      raise item
    return SimpleModelResponse(content=item, usage={"prompt_tokens": 10, "completion_tokens": 20, "total_tokens": 30})


@pytest.fixture
def anyio_backend():
  return "asyncio"


@pytest.fixture
def settings() -> Settings:
  return Settings(
    environment="test",
    debug=False,
    allowed_origins=("http://localhost:5173",),
    openai_api_key="sk-test",
    openai_base_url=None,
    generation_model="gpt-test",
    probe_model="gpt-probe",
    generation_temperature=0.7,
    generation_max_tokens=6000,
    variation_temperature=0.8,
    variation_max_tokens=5000,
    quality_temperature=0.3,
    quality_max_tokens=2500,
    probe_max_tokens=20,
    request_timeout_seconds=2.0,
    bulk_concurrency=1,
    log_dir="./logs",
    log_max_bytes=1024,
    log_backup_count=1,
    log_http_4xx=False,
  )


@pytest.fixture
def scripted_model() -> Callable[..., ScriptedModel]:
  return ScriptedModel


@pytest.fixture
def request_payload() -> dict[str, Any]:
  return {
    "childProfile": {
      "name": "Maya",
      "age": 4,
      "gender": "female",
      "interests": ["dinosaurs", "painting"],
      "learningStyle": "visual",
      "energyLevel": "high",
      "socialPreference": "small-group",
      "sensoryNeeds": ["noise sensitivity"],
      "speechGoals": ["two-word phrases"],
      "otGoals": ["pincer grasp"],
      "developmentalAreas": ["fine motor", "language"],
    },
    "activityType": "Art",
    "category": "Creative Expression",
    "methodologies": ["montessori", "reggio"],
    "duration": 30,
    "environment": "indoor",
    "materialConstraints": ["household items only"],
    "learningObjectives": ["Name three colors"],
    "therapyTargets": {"speech": ["/s/ sound"], "ot": ["bilateral coordination"]},
    "adaptationNeeds": ["extra processing time"],
  }


@pytest.fixture
def generation_request(request_payload: dict[str, Any]) -> AIGenerationRequest:
  return AIGenerationRequest.model_validate(request_payload)


@pytest.fixture
def activity_payload() -> dict[str, Any]:
  return {
    "title": "Maya's Dinosaur Footprint Painting",
    "description": "Maya stamps dinosaur footprints with paint.",
    "materials": ["washable paint", "toy dinosaurs", "large paper"],
    "instructions": ["Lay out the paper", "Dip the dinosaur feet in paint", "Stamp a trail"],
    "learningObjectives": ["Name three colors"],
    "adaptations": {"sensory": ["Offer gloves"], "motor": ["Use chunky dinosaurs"], "cognitive": ["Model one stamp first"]},
    "assessment": {"observationPoints": ["Color naming"], "milestones": ["Uses two-word phrases"]},
    "parentGuidance": {"setupTips": ["Cover the table"], "encouragementPhrases": ["Look at her trail!"], "extensionIdeas": ["Count footprints"], "troubleshooting": ["Take a break if loud"]},
    "developmentalAreas": ["fine motor"],
    "speechTargets": ["/s/ in 'stamp'"],
    "otTargets": ["two-handed stamping"],
    "tags": ["art", "dinosaurs"],
  }


@pytest.fixture
def activity_json(activity_payload: dict[str, Any]) -> str:
  return json.dumps(activity_payload)


@pytest.fixture
def base_activity(activity_payload: dict[str, Any]) -> AIGeneratedActivity:
  return AIGeneratedActivity.model_validate(activity_payload)


@pytest.fixture
async def async_client_factory():
  """Yield a factory that serves the app against a given engine."""
  clients: list[AsyncClient] = []

  async def _build(engine: ActivityEngine) -> AsyncClient:
    app.dependency_overrides[get_engine] = lambda: engine
    client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    clients.append(client)
    return client

  yield _build
  for client in clients:
    await client.aclose()
  app.dependency_overrides.clear()
