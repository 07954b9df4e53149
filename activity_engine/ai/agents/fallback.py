"""Deterministic template activity used whenever the model path fails."""

from __future__ import annotations

from activity_engine.ai.agents.prompts import pronouns_for
from activity_engine.schema.activities import Adaptations, AIGeneratedActivity, AIGenerationRequest, Assessment, ParentGuidance


def _join(items: list[str], separator: str, *, empty: str) -> str:
  return separator.join(items) if items else empty


def synthesize_activity(request: AIGenerationRequest) -> AIGeneratedActivity:
  """Build a request-specific activity from string templates only. Never fails for a valid request."""
  profile = request.child_profile
  name = profile.name
  pronouns = pronouns_for(profile.gender)
  interests_phrase = _join(profile.interests, " and ", empty="everyday play")
  interests_list = _join(profile.interests, ", ", empty="things they enjoy")

  return AIGeneratedActivity(
    title=f"{name}'s {request.activity_type} Adventure",
    description=f"A personalized {request.category.lower()} activity designed specifically for {name}, incorporating their interests in {interests_phrase} while supporting their {profile.learning_style} learning style.",
    materials=[
      "Age-appropriate materials based on activity type",
      "Items that support sensory needs",
      "Tools for documentation",
    ],
    instructions=[
      f"Set up the activity in a way that appeals to {name}'s {profile.learning_style} learning style",
      f"Incorporate elements related to {interests_list}",
      f"Guide {name} through the activity with patience and encouragement",
      "Document observations and progress",
    ],
    learning_objectives=list(request.learning_objectives),
    adaptations=Adaptations(
      sensory=[f"Adaptations for {_join(profile.sensory_needs, ', ', empty='general sensory comfort')}"],
      motor=["Provide alternative tools if needed"],
      cognitive=["Break into smaller steps if necessary"],
    ),
    assessment=Assessment(
      observation_points=[
        f"How does {name} engage with the activity?",
        "What strategies do they use?",
        "What interests them most?",
      ],
      milestones=[
        "Demonstrates engagement with activity",
        "Shows progress toward learning objectives",
      ],
    ),
    parent_guidance=ParentGuidance(
      setup_tips=[
        "Prepare materials in advance",
        "Choose a time when child is alert and engaged",
      ],
      encouragement_phrases=[
        f'"Great job exploring, {name}!"',
        f'"I notice {name} is really focused on this!"',
        f'"Tell me what {pronouns.subject} {"are" if pronouns.subject == "they" else "is"} thinking about."',
      ],
      extension_ideas=[
        "Extend the activity based on child's interests",
        "Connect to other learning opportunities",
      ],
      troubleshooting=[
        "If child loses interest, try incorporating their favorite topics",
        "Adjust difficulty level as needed",
      ],
    ),
    developmental_areas=list(profile.developmental_areas),
    speech_targets=list(request.therapy_targets.speech),
    ot_targets=list(request.therapy_targets.ot),
    tags=[request.activity_type.lower(), request.category.lower(), *(interest.lower() for interest in profile.interests)],
  )
