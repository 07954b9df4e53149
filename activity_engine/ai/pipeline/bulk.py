"""Request mutation for bulk generation."""

from __future__ import annotations

from activity_engine.schema.activities import AIGenerationRequest, VariationType

METHODOLOGY_CYCLE: tuple[str, ...] = ("montessori", "reggio", "waldorf", "highscope", "bankstreet")
ENVIRONMENT_CYCLE: tuple[str, ...] = ("indoor", "outdoor", "both")
AGE_VARIATION_BASE = 3
AGE_VARIATION_SPAN = 3


def vary_request(base: AIGenerationRequest, index: int, variation_type: VariationType) -> AIGenerationRequest:
  """Return a copy of `base` with exactly one field perturbed for iteration `index`."""
  match variation_type:
    case VariationType.DIFFICULTY:
      profile = base.child_profile.model_copy(update={"age": base.child_profile.age + index})
      return base.model_copy(update={"child_profile": profile})
    case VariationType.AGE:
      profile = base.child_profile.model_copy(update={"age": AGE_VARIATION_BASE + (index % AGE_VARIATION_SPAN)})
      return base.model_copy(update={"child_profile": profile})
    case VariationType.METHODOLOGY:
      return base.model_copy(update={"methodologies": [METHODOLOGY_CYCLE[index % len(METHODOLOGY_CYCLE)]]})
    case VariationType.ENVIRONMENT:
      return base.model_copy(update={"environment": ENVIRONMENT_CYCLE[index % len(ENVIRONMENT_CYCLE)]})
  raise ValueError(f"Unsupported variation type: {variation_type!r}")


def build_bulk_requests(base: AIGenerationRequest, count: int, variation_type: VariationType) -> list[AIGenerationRequest]:
  """Expand a base request into `count` mutated requests, in iteration order."""
  return [vary_request(base, index, variation_type) for index in range(max(0, count))]
