"""Quality analysis agent."""

from __future__ import annotations

import logging

from activity_engine.ai.agents.base import BaseAgent
from activity_engine.ai.agents.prompts import load_system_prompt, render_quality_prompt
from activity_engine.ai.errors import classify_failure, describe_exception
from activity_engine.ai.json_parser import parse_quality_payload
from activity_engine.ai.providers.base import CompletionRequest
from activity_engine.schema.activities import AIGeneratedActivity, QualityAnalysis

logger = logging.getLogger(__name__)

FALLBACK_QUALITY_ANALYSIS = QualityAnalysis(
  overall_score=75,
  engagement=8,
  educational_value=7,
  clarity=8,
  adaptability=7,
  developmental_appropriateness=7,
  therapeutic_integration=6,
  safety_consideration=7,
  methodology_alignment=7,
  strengths=[
    "Activity shows good alignment with developmental stage and incorporates child interests effectively",
    "Instructions are generally clear and provide step-by-step guidance",
    "Materials are accessible and appropriate for the age group",
  ],
  areas_for_improvement=[
    "Could benefit from more detailed sensory adaptations and explicit sensory integration strategies",
    "Therapeutic targets could be more seamlessly woven into the activity flow rather than feeling like separate components",
    "Assessment section could include more specific observation criteria and milestone connections",
  ],
  suggestions=[
    "Add specific sensory diet elements that align with the child's sensory profile",
    "Include more explicit connections to the stated educational methodology throughout instructions",
    "Expand parent guidance section with troubleshooting for common challenges",
    "Provide more detailed extension activities for sustained engagement",
    "Include visual support suggestions for children who benefit from visual schedules",
    "Add specific language modeling examples that target speech goals naturally",
    "Strengthen the connection between learning objectives and assessment criteria",
    "Include more specific timing estimates for each phase of the activity",
  ],
  expert_commentary=(
    "This activity demonstrates a solid foundation with developmentally appropriate content and clear structure. "
    "The incorporation of child interests is a strength that will support engagement. "
    "However, to reach excellence, the activity would benefit from deeper integration of therapeutic targets that feel natural rather than clinical, "
    "more comprehensive adaptations that demonstrate understanding of diverse learning needs, and stronger connections to the stated educational methodology. "
    "With these enhancements, this activity could serve as a model example of inclusive, engaging, and effective early childhood education."
  ),
)


class QualityAgent(BaseAgent[AIGeneratedActivity, QualityAnalysis]):
  """Score an activity; any failure returns the constant fallback scorecard."""

  name = "Quality"

  async def run(self, input_data: AIGeneratedActivity) -> QualityAnalysis:
    if self._model is None:
      logger.info("No completion model configured; returning fallback quality scorecard")
      return FALLBACK_QUALITY_ANALYSIS

    request = CompletionRequest(
      system=load_system_prompt("quality_system.md"),
      prompt=render_quality_prompt(input_data.to_payload()),
      temperature=self._settings.quality_temperature,
      max_tokens=self._settings.quality_max_tokens,
      model=self._settings.generation_model,
    )
    try:
      text = await self._complete(request, purpose="analyze_quality")
    except Exception as exc:  # noqa: BLE001
      logger.warning("Quality analysis failed (%s): %s; using fallback scorecard", classify_failure(exc), describe_exception(exc))
      return FALLBACK_QUALITY_ANALYSIS

    parsed = parse_quality_payload(text)
    if isinstance(parsed, str):
      logger.warning("Quality analysis returned unusable output (output): %s; using fallback scorecard", parsed)
      return FALLBACK_QUALITY_ANALYSIS
    return parsed
