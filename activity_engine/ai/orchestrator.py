"""Engine facade over the activity, variation, quality and probe agents."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from activity_engine.ai.agents import ActivityAgent, ProbeAgent, QualityAgent, VariationAgent, VariationInput
from activity_engine.ai.agents.base import UsageSink
from activity_engine.ai.errors import describe_exception
from activity_engine.ai.pipeline.bulk import build_bulk_requests
from activity_engine.ai.pipeline.contracts import GenerationResult
from activity_engine.ai.providers.base import CompletionModel
from activity_engine.ai.providers.openai import build_completion_model
from activity_engine.config import Settings
from activity_engine.schema.activities import AIGeneratedActivity, AIGenerationRequest, QualityAnalysis, VariationType

logger = logging.getLogger(__name__)


@dataclass
class _AgentsBundle:
  """Agents sharing one completion model and settings."""

  activity: ActivityAgent
  variations: VariationAgent
  quality: QualityAgent
  probe: ProbeAgent


class ActivityEngine:
  """Caller-facing operations of the activity engine. None of them raise for model failures."""

  def __init__(self, *, model: CompletionModel | None, settings: Settings, usage_sink: UsageSink = None) -> None:
    self._settings = settings
    self._model = model
    self._agents = _AgentsBundle(
      activity=ActivityAgent(model=model, settings=settings, use=usage_sink),
      variations=VariationAgent(model=model, settings=settings, use=usage_sink),
      quality=QualityAgent(model=model, settings=settings, use=usage_sink),
      probe=ProbeAgent(model=model, settings=settings, use=usage_sink),
    )

  @classmethod
  def from_settings(cls, settings: Settings, *, usage_sink: UsageSink = None) -> ActivityEngine:
    """Build the engine and its OpenAI client from settings; no key means fallback-only operation."""
    return cls(model=build_completion_model(settings), settings=settings, usage_sink=usage_sink)

  @property
  def completion_api_configured(self) -> bool:
    return self._model is not None

  async def generate_with_source(self, request: AIGenerationRequest) -> GenerationResult:
    """Generate one activity and report whether it came from the model or the fallback template."""
    return await self._agents.activity.run(request)

  async def generate(self, request: AIGenerationRequest) -> AIGeneratedActivity:
    """Generate one activity. Always resolves to a usable activity."""
    result = await self.generate_with_source(request)
    return result.activity

  async def generate_bulk(self, base: AIGenerationRequest, count: int, variation_type: VariationType) -> list[AIGeneratedActivity]:
    """Generate up to `count` activities, each from a request with one field varied.

    Requests run one at a time unless `bulk_concurrency` allows more in flight. Results keep iteration order;
    an iteration that raises is logged and skipped.
    """
    requests = build_bulk_requests(base, count, variation_type)
    total = len(requests)
    if total == 0:
      return []

    concurrency = max(1, self._settings.bulk_concurrency)
    logger.info("Bulk generation: %d %s variation(s), concurrency=%d", total, variation_type.value, concurrency)

    if concurrency == 1:
      activities: list[AIGeneratedActivity] = []
      for index, request in enumerate(requests):
        activity = await self._generate_bulk_item(request, index, total)
        if activity is not None:
          activities.append(activity)
      return activities

    semaphore = asyncio.Semaphore(concurrency)

    async def _bounded(request: AIGenerationRequest, index: int) -> AIGeneratedActivity | None:
      async with semaphore:
        return await self._generate_bulk_item(request, index, total)

    results = await asyncio.gather(*(_bounded(request, index) for index, request in enumerate(requests)))
    return [activity for activity in results if activity is not None]

  async def _generate_bulk_item(self, request: AIGenerationRequest, index: int, total: int) -> AIGeneratedActivity | None:
    try:
      return await self.generate(request)
    except Exception as exc:  # noqa: BLE001
      logger.error("Failed to generate bulk activity %d/%d: %s", index + 1, total, describe_exception(exc), exc_info=True)
      return None

  async def generate_variations(self, base: AIGeneratedActivity, count: int = 3) -> list[AIGeneratedActivity]:
    """Ask the model for up to three variations of `base`; failed ones are omitted."""
    return await self._agents.variations.run(VariationInput(base=base, count=count))

  async def analyze(self, activity: AIGeneratedActivity) -> QualityAnalysis:
    """Score an activity, falling back to a constant scorecard on any failure."""
    return await self._agents.quality.run(activity)

  async def probe(self) -> bool:
    """Return True only when a key is configured and the API answers with the expected marker."""
    return await self._agents.probe.run(None)
