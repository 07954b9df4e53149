"""Request and response contracts for activity generation.

How/Why:
  - Callers post camelCase JSON (the frontend shape); the alias generator lets the same models accept snake_case from Python callers.
  - Every model is frozen: a transformation such as a bulk variation produces a new object via `model_copy(update=...)`.
  - The generated activity only hard-requires `title`, `description` and `materials`; the remaining shape is trusted to the model.
"""

from __future__ import annotations

import enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, ValidationInfo, ValidatorFunctionWrapHandler, field_validator

LearningStyle = Literal["visual", "auditory", "kinesthetic", "mixed"]
EnergyLevel = Literal["low", "medium", "high"]
SocialPreference = Literal["independent", "small-group", "large-group"]
Gender = Literal["male", "female", "other", "prefer-not-to-say"]
ActivitySource = Literal["model", "fallback"]

# Validation context for completions: fields beyond title and description keep whatever shape the model sent.
MODEL_OUTPUT_CONTEXT: dict[str, Any] = {"model_output": True}


def _to_camel(string: str) -> str:
  """Convert snake_case to camelCase so the API accepts frontend-style payloads."""
  parts = string.split("_")
  if not parts:
    return string
  return parts[0] + "".join(part[:1].upper() + part[1:] for part in parts[1:])


class _RequestModel(BaseModel):
  model_config = ConfigDict(populate_by_name=True, alias_generator=_to_camel, frozen=True, extra="forbid")


class _ResponseModel(BaseModel):
  model_config = ConfigDict(populate_by_name=True, alias_generator=_to_camel, frozen=True, extra="allow")


class VariationType(str, enum.Enum):
  """Field of a base request that bulk generation perturbs per iteration."""

  DIFFICULTY = "difficulty"
  METHODOLOGY = "methodology"
  AGE = "age"
  ENVIRONMENT = "environment"


class ChildProfile(_RequestModel):
  """Snapshot of the child the activity is personalized for."""

  name: StrictStr = Field(min_length=1)
  age: int = Field(ge=0)
  gender: Gender | None = None
  interests: list[StrictStr] = Field(default_factory=list)
  learning_style: LearningStyle = "mixed"
  energy_level: EnergyLevel = "medium"
  social_preference: SocialPreference = "small-group"
  sensory_needs: list[StrictStr] = Field(default_factory=list)
  speech_goals: list[StrictStr] = Field(default_factory=list)
  ot_goals: list[StrictStr] = Field(default_factory=list)
  developmental_areas: list[StrictStr] = Field(default_factory=list)


class TherapyTargets(_RequestModel):
  """Speech and OT targets; an empty list means not applicable."""

  speech: list[StrictStr] = Field(default_factory=list)
  ot: list[StrictStr] = Field(default_factory=list)


class AdvancedOptions(_RequestModel):
  """Optional feature toggles that also gate optional output sections."""

  include_multimedia: bool | None = None
  generate_assessment_rubric: bool | None = None
  include_parent_newsletter: bool | None = None
  generate_extension_activities: bool | None = None
  create_digital_resources: bool | None = None
  include_progress_tracking: bool | None = None
  generate_reflection_prompts: bool | None = None
  create_adaptation_guide: bool | None = None
  cultural_considerations: list[StrictStr] | None = None
  language_support: list[StrictStr] | None = None
  seasonal_themes: list[StrictStr] | None = None
  technology_integration: StrictStr | None = None
  assessment_type: StrictStr | None = None
  budget_range: StrictStr | None = None
  parent_involvement: StrictStr | None = None
  group_size: StrictStr | None = None
  difficulty_level: StrictStr | None = None
  time_of_day: StrictStr | None = None
  weather_considerations: StrictStr | None = None
  budget_constraint: StrictStr | None = None
  safety_level: StrictStr | None = None

  def enabled_items(self) -> list[tuple[str, Any]]:
    """Return (camelCase name, value) for every option that is switched on, in declaration order."""
    items: list[tuple[str, Any]] = []
    for field_name, field_info in type(self).model_fields.items():
      value = getattr(self, field_name)
      if value is True or (isinstance(value, list) and value) or (isinstance(value, str) and value.strip() and value != "none"):
        items.append((field_info.alias or field_name, value))
    return items


class AIGenerationRequest(_RequestModel):
  """The single unit of work submitted to the engine."""

  child_profile: ChildProfile
  activity_type: StrictStr = Field(min_length=1)
  category: StrictStr = Field(min_length=1)
  methodologies: list[StrictStr] = Field(default_factory=list)
  duration: int = Field(gt=0, description="Duration in minutes.")
  environment: StrictStr = "indoor"
  material_constraints: list[StrictStr] = Field(default_factory=list)
  learning_objectives: list[StrictStr] = Field(default_factory=list)
  therapy_targets: TherapyTargets = Field(default_factory=TherapyTargets)
  adaptation_needs: list[StrictStr] = Field(default_factory=list)
  advanced_options: AdvancedOptions | None = None


class Adaptations(_ResponseModel):
  sensory: list[str] = Field(default_factory=list)
  motor: list[str] = Field(default_factory=list)
  cognitive: list[str] = Field(default_factory=list)


class Assessment(_ResponseModel):
  observation_points: list[str] = Field(default_factory=list)
  milestones: list[str] = Field(default_factory=list)


class ParentGuidance(_ResponseModel):
  setup_tips: list[str] = Field(default_factory=list)
  encouragement_phrases: list[str] = Field(default_factory=list)
  extension_ideas: list[str] = Field(default_factory=list)
  troubleshooting: list[str] = Field(default_factory=list)


class Multimedia(_ResponseModel):
  suggested_photos: list[str] | None = None
  video_ideas: list[str] | None = None
  audio_elements: list[str] | None = None


class AssessmentRubric(_ResponseModel):
  criteria: list[str] = Field(default_factory=list)
  levels: list[str] = Field(default_factory=list)
  # Models return either level->text maps or level lists per criterion.
  descriptors: dict[str, Any] = Field(default_factory=dict)


class ExtensionActivity(_ResponseModel):
  title: str
  description: str
  materials: list[str] = Field(default_factory=list)


class ReflectionPrompts(_ResponseModel):
  for_child: list[str] = Field(default_factory=list)
  for_parent: list[str] = Field(default_factory=list)
  for_educator: list[str] = Field(default_factory=list)


class CulturalAdaptations(_ResponseModel):
  considerations: list[str] = Field(default_factory=list)
  modifications: list[str] = Field(default_factory=list)


class DigitalResources(_ResponseModel):
  apps: list[str] = Field(default_factory=list)
  websites: list[str] = Field(default_factory=list)
  tools: list[str] = Field(default_factory=list)


class AIGeneratedActivity(_ResponseModel):
  """Activity record returned to callers, whether model-backed or synthesized."""

  title: str = Field(min_length=1)
  description: str = Field(min_length=1)
  materials: list[str] = Field(min_length=1)
  instructions: list[str] = Field(default_factory=list)
  learning_objectives: list[str] = Field(default_factory=list)
  adaptations: Adaptations = Field(default_factory=Adaptations)
  assessment: Assessment = Field(default_factory=Assessment)
  parent_guidance: ParentGuidance = Field(default_factory=ParentGuidance)
  developmental_areas: list[str] = Field(default_factory=list)
  speech_targets: list[str] = Field(default_factory=list)
  ot_targets: list[str] = Field(default_factory=list)
  tags: list[str] = Field(default_factory=list)
  safety_considerations: list[str] | None = None
  implementation_timeline: dict[str, Any] | None = None
  success_indicators: list[str] | None = None
  multimedia: Multimedia | None = None
  assessment_rubric: AssessmentRubric | None = None
  extension_activities: list[ExtensionActivity] | None = None
  reflection_prompts: ReflectionPrompts | None = None
  cultural_adaptations: CulturalAdaptations | None = None
  digital_resources: DigitalResources | None = None

  @field_validator("*", mode="wrap")
  @classmethod
  def validate_model_shape(cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo) -> Any:
    """Under MODEL_OUTPUT_CONTEXT, a field that does not fit its declared shape is carried through as sent."""
    try:
      return handler(value)
    except ValidationError:
      if info.field_name in {"title", "description"} or not (info.context or {}).get("model_output"):
        raise
      return value

  def to_payload(self) -> dict[str, Any]:
    """Serialize with camelCase keys, omitting absent optional sections."""
    # Raw model shapes serialize by inference.
    return self.model_dump(mode="json", by_alias=True, exclude_none=True, warnings=False)


# Optional extension sections and the option that gates each of them.
OPTIONAL_SECTION_GATES: dict[str, str] = {
  "multimedia": "include_multimedia",
  "assessment_rubric": "generate_assessment_rubric",
  "extension_activities": "generate_extension_activities",
  "reflection_prompts": "generate_reflection_prompts",
  "cultural_adaptations": "cultural_considerations",
  "digital_resources": "create_digital_resources",
}


def enabled_sections(options: AdvancedOptions | None) -> list[str]:
  """List the optional output sections a request asks the model for."""
  if options is None:
    return []
  return [section for section, option in OPTIONAL_SECTION_GATES.items() if getattr(options, option)]


class QualityAnalysis(_ResponseModel):
  """Scorecard for a generated activity. Never persisted with the activity."""

  overall_score: float = Field(ge=0, le=100)
  engagement: float = Field(ge=0, le=10)
  educational_value: float = Field(ge=0, le=10)
  clarity: float = Field(ge=0, le=10)
  adaptability: float = Field(ge=0, le=10)
  developmental_appropriateness: float | None = Field(default=None, ge=0, le=10)
  therapeutic_integration: float | None = Field(default=None, ge=0, le=10)
  safety_consideration: float | None = Field(default=None, ge=0, le=10)
  methodology_alignment: float | None = Field(default=None, ge=0, le=10)
  strengths: list[str] = Field(default_factory=list)
  areas_for_improvement: list[str] = Field(default_factory=list)
  suggestions: list[str] = Field(default_factory=list)
  expert_commentary: str | None = None

  def to_payload(self) -> dict[str, Any]:
    return self.model_dump(mode="json", by_alias=True, exclude_none=True)
