"""Unit tests for the deterministic fallback activity."""

from __future__ import annotations

from typing import Any

import pytest

from activity_engine.ai.agents.fallback import synthesize_activity
from activity_engine.schema.activities import AIGenerationRequest


def test_fallback_is_personalized(generation_request: AIGenerationRequest) -> None:
  activity = synthesize_activity(generation_request)
  assert activity.title == "Maya's Art Adventure"
  assert activity.description.startswith("A personalized creative expression activity designed specifically for Maya")
  assert "dinosaurs and painting" in activity.description
  assert "visual learning style" in activity.description
  assert activity.materials == ["Age-appropriate materials based on activity type", "Items that support sensory needs", "Tools for documentation"]
  assert activity.learning_objectives == ["Name three colors"]
  assert activity.adaptations.sensory == ["Adaptations for noise sensitivity"]
  assert activity.speech_targets == ["/s/ sound"]
  assert activity.ot_targets == ["bilateral coordination"]
  assert activity.developmental_areas == ["fine motor", "language"]
  assert activity.tags == ["art", "creative expression", "dinosaurs", "painting"]
  assert '"Tell me what she is thinking about."' in activity.parent_guidance.encouragement_phrases


def test_fallback_never_populates_extension_sections(request_payload: dict[str, Any]) -> None:
  request = AIGenerationRequest.model_validate({**request_payload, "advancedOptions": {"includeMultimedia": True, "generateExtensionActivities": True}})
  payload = synthesize_activity(request).to_payload()
  assert "multimedia" not in payload
  assert "extensionActivities" not in payload


@pytest.mark.parametrize(
  "profile_overrides",
  [
    {"interests": [], "sensoryNeeds": [], "speechGoals": [], "otGoals": [], "developmentalAreas": []},
    {"gender": None, "age": 0},
    {"gender": "prefer-not-to-say", "learningStyle": "kinesthetic"},
  ],
)
def test_fallback_is_total(request_payload: dict[str, Any], profile_overrides: dict[str, Any]) -> None:
  payload = {
    **request_payload,
    "childProfile": {**request_payload["childProfile"], **profile_overrides},
    "methodologies": [],
    "learningObjectives": [],
    "therapyTargets": {"speech": [], "ot": []},
    "adaptationNeeds": [],
  }
  activity = synthesize_activity(AIGenerationRequest.model_validate(payload))
  assert activity.title.strip()
  assert activity.description.strip()
  assert len(activity.materials) >= 1
  assert activity.adaptations.sensory
  assert activity.assessment.observation_points
  assert activity.parent_guidance.setup_tips


def test_fallback_uses_neutral_pronouns_without_gender(request_payload: dict[str, Any]) -> None:
  payload = {**request_payload, "childProfile": {**request_payload["childProfile"], "gender": None}}
  activity = synthesize_activity(AIGenerationRequest.model_validate(payload))
  assert '"Tell me what they are thinking about."' in activity.parent_guidance.encouragement_phrases
