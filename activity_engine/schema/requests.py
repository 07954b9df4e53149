"""HTTP request envelopes for the batch, variation and quality routes."""

from __future__ import annotations

from pydantic import Field

from activity_engine.schema.activities import AIGeneratedActivity, AIGenerationRequest, VariationType, _RequestModel

MAX_BULK_COUNT = 20


class GenerateBulkActivitiesRequest(_RequestModel):
  base_request: AIGenerationRequest
  count: int = Field(ge=0, le=MAX_BULK_COUNT, description="Number of mutated requests to run.")
  variation_type: VariationType


class GenerateActivityVariationsRequest(_RequestModel):
  base_activity: AIGeneratedActivity
  count: int = Field(default=3, ge=0, description="Requested variations; at most three are produced.")


class AnalyzeActivityQualityRequest(_RequestModel):
  activity: AIGeneratedActivity
