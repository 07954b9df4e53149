"""Prompt helpers shared by agents.

`compile_prompt` is the activity prompt compiler: a pure function of the request.
Empty profile lists render a neutral placeholder so the section headers stay stable,
while therapy targets and option-gated JSON fragments are omitted outright when unused.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

from activity_engine.schema.activities import AdvancedOptions, AIGenerationRequest, Gender

METHODOLOGY_DESCRIPTIONS: dict[str, str] = {
  "montessori": "Self-directed learning emphasizing independence, hands-on exploration with carefully prepared materials, intrinsic motivation, mixed-age groupings, and respect for natural psychological development. Focus on practical life skills, sensorial experiences, and following the child's interests.",
  "reggio": "Child-led, project-based exploration emphasizing the 'hundred languages of children', documentation as assessment, collaborative learning, emergent curriculum, beautiful and inspiring environments, and the teacher as researcher and guide.",
  "waldorf": "Holistic development through artistic expression, natural rhythms aligned with seasons and developmental stages, imaginative play, storytelling, minimal technology, natural materials, and nurturing creativity and wonder.",
  "highscope": "Active participatory learning using the plan-do-review sequence, emphasis on key developmental indicators, scaffolding learning, adult-child interaction strategies, and systematic assessment through observation.",
  "bankstreet": "Developmental-interaction approach emphasizing social-emotional development, community connections, experiential learning, integration of subjects, understanding child development stages, and connecting learning to real-world experiences.",
  "play-based": "Learning through child-directed and adult-guided play experiences, recognizing play as the primary vehicle for learning, incorporating both structured and unstructured play, and using play to build skills across all developmental domains.",
  "inquiry-based": "Question-driven exploration promoting curiosity, critical thinking, problem-solving, scientific method, student-led investigations, and discovery learning through hands-on experimentation and observation.",
}
_UNKNOWN_METHODOLOGY = "Apply the core principles of this approach as commonly practiced in early childhood settings."

# Option-gated output sections, in the order they appear in the requested JSON shape.
_SECTION_TEMPLATES: tuple[tuple[str, str], ...] = (
  ("include_multimedia", "multimedia.md"),
  ("generate_assessment_rubric", "assessment_rubric.md"),
  ("generate_extension_activities", "extension_activities.md"),
  ("generate_reflection_prompts", "reflection_prompts.md"),
  ("cultural_considerations", "cultural_adaptations.md"),
  ("create_digital_resources", "digital_resources.md"),
)

_PLACEHOLDER_RE = re.compile(r"\{\{([A-Z_]+)\}\}")
_BLANK_RUN_RE = re.compile(r"\n[ \t]*\n(?:[ \t]*\n)+")


@dataclass(frozen=True)
class Pronouns:
  subject: str
  object: str
  possessive: str
  reflexive: str

  @property
  def short(self) -> str:
    return f"{self.subject}/{self.object}/{self.possessive}"

  @property
  def full(self) -> str:
    return f"{self.subject}/{self.object}/{self.possessive}/{self.reflexive}"


_NEUTRAL_PRONOUNS = Pronouns("they", "them", "their", "themselves")
_PRONOUNS: dict[str, Pronouns] = {
  "male": Pronouns("he", "him", "his", "himself"),
  "female": Pronouns("she", "her", "her", "herself"),
}


def pronouns_for(gender: Gender | None) -> Pronouns:
  """Map a profile gender to pronouns; anything unspecified is they/them."""
  if gender is None:
    return _NEUTRAL_PRONOUNS
  return _PRONOUNS.get(gender, _NEUTRAL_PRONOUNS)


@lru_cache(maxsize=32)
def _load_prompt(name: str) -> str:
  try:
    path = Path(__file__).parents[1] / "prompts" / name
    return path.read_text(encoding="utf-8").strip()
  except (FileNotFoundError, PermissionError, UnicodeDecodeError) as exc:
    raise RuntimeError(f"Failed to load prompt '{name}': {exc}") from exc


@lru_cache(maxsize=32)
def _load_section(name: str) -> str:
  """Load a JSON fragment template, keeping its indentation."""
  try:
    path = Path(__file__).parents[1] / "prompts" / "sections" / name
    return path.read_text(encoding="utf-8").rstrip() + "\n"
  except (FileNotFoundError, PermissionError, UnicodeDecodeError) as exc:
    raise RuntimeError(f"Failed to load prompt section '{name}': {exc}") from exc


def _replace_placeholders(template: str, values: dict[str, str]) -> str:
  """Substitute {{PLACEHOLDER}} markers in one pass so substituted text is never rescanned."""
  return _PLACEHOLDER_RE.sub(lambda match: values.get(match.group(1), match.group(0)), template)


def _format_bullets(items: list[str], *, suffix: str = "", empty: str) -> str:
  """Render a bullet list, or a single placeholder bullet when there is nothing to list."""
  if not items:
    return f"  • {empty}"
  return "\n".join(f"  • {item}{suffix}" for item in items)


def _format_inline(items: list[str], *, empty: str) -> str:
  return ", ".join(items) if items else empty


def _format_methodologies(methodologies: list[str]) -> str:
  if not methodologies:
    return "  • No specific methodology selected - draw on developmentally appropriate best practice"
  return "\n".join(f"  • {methodology.upper()}: {METHODOLOGY_DESCRIPTIONS.get(methodology, _UNKNOWN_METHODOLOGY)}" for methodology in methodologies)


def _format_therapy_targets(request: AIGenerationRequest) -> str:
  # Empty target lists are left out entirely rather than rendered as "none".
  lines: list[str] = []
  if request.therapy_targets.speech:
    lines.append(f"- Speech Therapy Targets (MUST integrate naturally): {', '.join(request.therapy_targets.speech)}")
  if request.therapy_targets.ot:
    lines.append(f"- Occupational Therapy Targets (MUST integrate naturally): {', '.join(request.therapy_targets.ot)}")
  return "\n".join(lines)


def _format_option_value(value: Any) -> str:
  if isinstance(value, bool):
    return "true" if value else "false"
  if isinstance(value, list):
    return ", ".join(str(item) for item in value)
  return str(value)


def _format_advanced_features(options: AdvancedOptions | None) -> str:
  if options is None:
    return ""
  items = options.enabled_items()
  if not items:
    return ""
  lines = [f"  • {name}: {_format_option_value(value)}" for name, value in items]
  return "ADVANCED FEATURES TO INCLUDE:\n" + "\n".join(lines)


def _render_optional_sections(options: AdvancedOptions | None) -> str:
  """Concatenate the JSON fragments for every enabled output section."""
  if options is None:
    return ""
  fragments: list[str] = []
  for option, template_name in _SECTION_TEMPLATES:
    value = getattr(options, option)
    if not value:
      continue
    fragment = _load_section(template_name)
    if isinstance(value, list):
      fragment = _replace_placeholders(fragment, {"CULTURAL_CONSIDERATIONS": ", ".join(value)})
    fragments.append(fragment)
  return "\n".join(fragments)


def _render_therapy_fragment(targets: list[str], template_name: str, placeholder: str) -> str:
  if not targets:
    return ""
  return _replace_placeholders(_load_section(template_name), {placeholder: ", ".join(targets)})


def _collapse_blank_lines(text: str) -> str:
  return _BLANK_RUN_RE.sub("\n\n", text)


def compile_prompt(request: AIGenerationRequest) -> str:
  """Render a generation request into the user prompt sent to the completion API."""
  profile = request.child_profile
  pronouns = pronouns_for(profile.gender)
  replacements = {
    "NAME": profile.name,
    "AGE": str(profile.age),
    "GENDER_LINE": f"- Gender: {profile.gender}" if profile.gender else "",
    "PRONOUNS": pronouns.short,
    "INTERESTS": _format_bullets(profile.interests, suffix=" - Leverage this interest as a powerful motivator and engagement tool", empty="No specific interests listed - observe what captures attention"),
    "INTERESTS_INLINE": _format_inline(profile.interests, empty="general play and exploration"),
    "LEARNING_STYLE": profile.learning_style,
    "ENERGY_LEVEL": profile.energy_level,
    "SOCIAL_PREFERENCE": profile.social_preference,
    "SENSORY_NEEDS": _format_bullets(profile.sensory_needs, suffix=" - Critical consideration for activity design and adaptations", empty="No specific sensory needs noted"),
    "SENSORY_INLINE": _format_inline(profile.sensory_needs, empty="none noted"),
    "SPEECH_GOALS": _format_bullets(profile.speech_goals, suffix=" - Embed opportunities throughout activity", empty="No specific speech goals at this time"),
    "OT_GOALS": _format_bullets(profile.ot_goals, suffix=" - Integrate naturally into activity flow", empty="No specific occupational therapy goals at this time"),
    "ACTIVITY_TYPE": request.activity_type,
    "CATEGORY": request.category,
    "DURATION": str(request.duration),
    "ENVIRONMENT": request.environment,
    "MATERIAL_CONSTRAINTS": _format_inline(request.material_constraints, empty="No material constraints"),
    "METHODOLOGIES": _format_methodologies(request.methodologies),
    "LEARNING_OBJECTIVES": _format_bullets(request.learning_objectives, empty="No specific objectives provided - derive age-appropriate objectives from the category"),
    "THERAPY_TARGETS": _format_therapy_targets(request),
    "ADAPTATION_NEEDS": _format_bullets(request.adaptation_needs, suffix=" - Provide specific, actionable adaptations", empty="No specific adaptations requested"),
    "ADVANCED_FEATURES": _format_advanced_features(request.advanced_options),
    "SPEECH_TARGETS_FRAGMENT": _render_therapy_fragment(request.therapy_targets.speech, "speech_targets.md", "SPEECH_TARGETS"),
    "OT_TARGETS_FRAGMENT": _render_therapy_fragment(request.therapy_targets.ot, "ot_targets.md", "OT_TARGETS"),
    "OPTIONAL_SECTIONS": _render_optional_sections(request.advanced_options),
  }
  rendered = _replace_placeholders(_load_prompt("activity_generator.md"), replacements)
  return _collapse_blank_lines(rendered)


def compile_system_prompt(request: AIGenerationRequest) -> str:
  """Render the generation system instruction, which pins the child's pronouns."""
  pronouns = pronouns_for(request.child_profile.gender)
  return _replace_placeholders(_load_prompt("activity_system.md"), {"NAME": request.child_profile.name, "PRONOUNS_FULL": pronouns.full})


def _serialize_activity(payload: dict[str, Any]) -> str:
  return json.dumps(payload, indent=2, ensure_ascii=False)


def render_variation_prompt(base_payload: dict[str, Any], *, title: str, instructions: str) -> str:
  """Render a variation request embedding the full base activity."""
  template = _load_prompt("variation_request.md")
  return _replace_placeholders(template, {"BASE_ACTIVITY_JSON": _serialize_activity(base_payload), "VARIATION_TITLE": title, "VARIATION_INSTRUCTIONS": instructions})


def render_quality_prompt(activity_payload: dict[str, Any]) -> str:
  """Render the quality scorecard request for an activity."""
  return _replace_placeholders(_load_prompt("quality_request.md"), {"ACTIVITY_JSON": _serialize_activity(activity_payload)})


def load_system_prompt(name: str) -> str:
  return _load_prompt(name)
