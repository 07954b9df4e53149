"""Activity generation agent: one completion, strict parse, template fallback."""

from __future__ import annotations

import logging

from activity_engine.ai.agents.base import BaseAgent
from activity_engine.ai.agents.fallback import synthesize_activity
from activity_engine.ai.agents.prompts import compile_prompt, compile_system_prompt
from activity_engine.ai.errors import classify_failure, describe_exception
from activity_engine.ai.json_parser import parse_activity_payload
from activity_engine.ai.pipeline.contracts import GenerationResult, InvalidPayload
from activity_engine.ai.providers.base import CompletionRequest
from activity_engine.schema.activities import OPTIONAL_SECTION_GATES, AIGeneratedActivity, AIGenerationRequest, enabled_sections

logger = logging.getLogger(__name__)


def strip_ungated_sections(activity: AIGeneratedActivity, request: AIGenerationRequest) -> AIGeneratedActivity:
  """Drop optional extension sections the request did not ask for."""
  allowed = set(enabled_sections(request.advanced_options))
  update = {section: None for section in OPTIONAL_SECTION_GATES if section not in allowed and getattr(activity, section) is not None}
  if not update:
    return activity
  return activity.model_copy(update=update)


class ActivityAgent(BaseAgent[AIGenerationRequest, GenerationResult]):
  """Generate a personalized activity; every failure resolves to the fallback template."""

  name = "Activity"

  async def run(self, input_data: AIGenerationRequest) -> GenerationResult:
    if self._model is None:
      logger.warning("No completion model configured; using fallback activity for %s", input_data.activity_type)
      return GenerationResult(source="fallback", activity=synthesize_activity(input_data), reason="completion api not configured")

    request = CompletionRequest(
      system=compile_system_prompt(input_data),
      prompt=compile_prompt(input_data),
      temperature=self._settings.generation_temperature,
      max_tokens=self._settings.generation_max_tokens,
      model=self._settings.generation_model,
    )

    try:
      text = await self._complete(request, purpose="generate_activity")
    except Exception as exc:  # noqa: BLE001
      kind = classify_failure(exc)
      detail = describe_exception(exc)
      logger.warning("Activity generation failed (%s) for %s: %s; using fallback", kind, input_data.activity_type, detail)
      return GenerationResult(source="fallback", activity=synthesize_activity(input_data), reason=f"{kind}: {detail}")

    parsed = parse_activity_payload(text)
    if isinstance(parsed, InvalidPayload):
      logger.warning("Activity generation returned unusable output (output) for %s: %s; using fallback", input_data.activity_type, parsed.reason)
      return GenerationResult(source="fallback", activity=synthesize_activity(input_data), reason=f"output: {parsed.reason}")

    return GenerationResult(source="model", activity=strip_ungated_sections(parsed.activity, input_data))
