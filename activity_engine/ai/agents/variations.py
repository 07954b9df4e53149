"""Variation agent: derive alternative versions of an existing activity."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from activity_engine.ai.agents.base import BaseAgent
from activity_engine.ai.agents.prompts import load_system_prompt, render_variation_prompt
from activity_engine.ai.errors import classify_failure, describe_exception
from activity_engine.ai.json_parser import parse_activity_payload
from activity_engine.ai.pipeline.contracts import InvalidPayload
from activity_engine.ai.providers.base import CompletionRequest
from activity_engine.schema.activities import AIGeneratedActivity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VariationIntent:
  key: str
  title: str
  instructions: str


VARIATION_INTENTS: tuple[VariationIntent, ...] = (
  VariationIntent(
    key="simplify",
    title="SIMPLIFIED VERSION for Younger or Beginning Learners",
    instructions="""Create a developmentally appropriate simplified version of this activity that:
- Reduces complexity while maintaining core learning objectives
- Shortens duration and number of steps
- Uses larger, easier-to-manipulate materials
- Increases adult support and scaffolding
- Simplifies language and instructions
- Focuses on 1-2 key skills instead of multiple skills
- Makes success more immediately achievable""",
  ),
  VariationIntent(
    key="challenge",
    title="ADVANCED VERSION for Older or Advanced Learners",
    instructions="""Create a challenging extension of this activity that:
- Increases complexity and cognitive demand
- Adds additional steps, materials, or challenges
- Incorporates higher-order thinking skills (analysis, synthesis, evaluation)
- Reduces scaffolding to encourage independence
- Adds opportunities for creativity and open-ended exploration
- Includes reflection and metacognitive components""",
  ),
  VariationIntent(
    key="modality",
    title="ALTERNATIVE MODALITY VERSION with Different Learning Approach",
    instructions="""Create a variation that approaches the same learning objectives through a different modality:
- If the original was visual, make this kinesthetic or auditory
- If the original was sedentary, make this movement-based
- If the original was individual, make this collaborative
- If the original was indoor, make this outdoor (or vice versa)
- Change the primary sense engaged (visual to tactile, auditory to visual)
- Transform the context (table-top to floor play, quiet to active)""",
  ),
)


@dataclass(frozen=True)
class VariationInput:
  base: AIGeneratedActivity
  count: int = len(VARIATION_INTENTS)


class VariationAgent(BaseAgent[VariationInput, list[AIGeneratedActivity]]):
  """Request one variation per intent. Failed variations are omitted; there is no fallback."""

  name = "Variations"

  async def run(self, input_data: VariationInput) -> list[AIGeneratedActivity]:
    if self._model is None:
      logger.info("No completion model configured; skipping variation generation")
      return []

    intents = VARIATION_INTENTS[: max(0, min(input_data.count, len(VARIATION_INTENTS)))]
    base_payload = input_data.base.to_payload()
    system = load_system_prompt("variation_system.md")
    variations: list[AIGeneratedActivity] = []

    for index, intent in enumerate(intents, start=1):
      call_index = f"{index}/{len(intents)}"
      request = CompletionRequest(
        system=system,
        prompt=render_variation_prompt(base_payload, title=intent.title, instructions=intent.instructions),
        temperature=self._settings.variation_temperature,
        max_tokens=self._settings.variation_max_tokens,
        model=self._settings.generation_model,
      )
      try:
        text = await self._complete(request, purpose=f"variation_{intent.key}", call_index=call_index)
      except Exception as exc:  # noqa: BLE001
        logger.error("Failed to generate variation %s (%s, %s): %s", call_index, intent.key, classify_failure(exc), describe_exception(exc))
        continue

      parsed = parse_activity_payload(text)
      if isinstance(parsed, InvalidPayload):
        logger.error("Failed to generate variation %s (%s, output): %s", call_index, intent.key, parsed.reason)
        continue
      variations.append(parsed.activity)

    return variations
