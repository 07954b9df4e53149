"""JSON parsing for model completions.

Parsing is strict: beyond removing a surrounding markdown code fence, no attempt is made to repair the text.
Every entry point returns a result instead of raising, so callers branch on the outcome.
"""

from __future__ import annotations

import json
import re
from typing import Any

from pydantic import ValidationError

from activity_engine.ai.pipeline.contracts import InvalidPayload, ParseResult, ValidPayload
from activity_engine.schema.activities import MODEL_OUTPUT_CONTEXT, AIGeneratedActivity, QualityAnalysis

REQUIRED_ACTIVITY_FIELDS: dict[str, type] = {"title": str, "description": str, "materials": list}

_FENCE_RE = re.compile(r"^```[a-zA-Z0-9_-]*\s*\n?(?P<body>.*?)\n?```$", re.DOTALL)


def strip_json_fences(text: str) -> str:
  """Remove a leading/trailing ``` fence (optionally tagged, e.g. ```json) from a completion."""
  stripped = text.strip()
  match = _FENCE_RE.match(stripped)
  if match is None:
    return stripped
  return match.group("body").strip()


def load_json_object(text: str | None) -> dict[str, Any] | str:
  """Decode a completion into a JSON object, or return the reason it could not be."""
  if text is None or text.strip() == "":
    return "empty completion"

  cleaned = strip_json_fences(text)
  try:
    payload = json.loads(cleaned)
  except json.JSONDecodeError as exc:
    return f"invalid json: {exc.msg} at line {exc.lineno} column {exc.colno}"

  if not isinstance(payload, dict):
    return f"invalid json: expected an object, got {type(payload).__name__}"
  return payload


def _missing_required(payload: dict[str, Any]) -> list[str]:
  # Falsy or wrongly typed values count as missing: "", [], null and a bare string for materials all fail.
  return [field for field, expected in REQUIRED_ACTIVITY_FIELDS.items() if not isinstance(payload.get(field), expected) or not payload[field]]


def parse_activity_payload(text: str | None) -> ParseResult:
  """Parse a completion into an activity, tagging the result valid or invalid.

  Only title, description and materials are checked; every other field is kept in whatever shape the model sent.
  """
  payload = load_json_object(text)
  if isinstance(payload, str):
    return InvalidPayload(reason=payload)

  missing = _missing_required(payload)
  if missing:
    return InvalidPayload(reason=f"missing required fields: {', '.join(missing)}")

  try:
    activity = AIGeneratedActivity.model_validate(payload, context=MODEL_OUTPUT_CONTEXT)
  except ValidationError as exc:
    return InvalidPayload(reason=f"schema validation failed: {exc.error_count()} error(s), first at {_first_error_location(exc)}")
  return ValidPayload(activity=activity)


def parse_quality_payload(text: str | None) -> QualityAnalysis | str:
  """Parse a completion into a quality scorecard, or return the reason it could not be."""
  payload = load_json_object(text)
  if isinstance(payload, str):
    return payload

  try:
    return QualityAnalysis.model_validate(payload)
  except ValidationError as exc:
    return f"schema validation failed: {exc.error_count()} error(s), first at {_first_error_location(exc)}"


def _first_error_location(exc: ValidationError) -> str:
  errors = exc.errors()
  if not errors:
    return "-"
  return ".".join(str(part) for part in errors[0].get("loc", ())) or "-"
