import logging
from typing import Any

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from activity_engine.ai.orchestrator import ActivityEngine
from activity_engine.api.deps import get_engine
from activity_engine.schema.activities import AIGenerationRequest
from activity_engine.schema.requests import AnalyzeActivityQualityRequest, GenerateActivityVariationsRequest, GenerateBulkActivitiesRequest

router = APIRouter()
logger = logging.getLogger(__name__)

ACTIVITY_SOURCE_HEADER = "x-activity-source"


@router.post("/generate-activity")
async def generate_activity(payload: AIGenerationRequest, response: Response, engine: ActivityEngine = Depends(get_engine)) -> dict[str, Any]:  # noqa: B008
  """Generate a single activity; falls back to the template when the model path fails."""
  logger.debug("Activity generation request received activity_type=%s", payload.activity_type)
  result = await engine.generate_with_source(payload)
  response.headers[ACTIVITY_SOURCE_HEADER] = result.source
  return result.activity.to_payload()


@router.post("/generate-bulk-activities")
async def generate_bulk_activities(payload: GenerateBulkActivitiesRequest, engine: ActivityEngine = Depends(get_engine)) -> list[dict[str, Any]]:  # noqa: B008
  """Generate a batch of activities, each with one request field varied."""
  activities = await engine.generate_bulk(payload.base_request, payload.count, payload.variation_type)
  logger.debug("Bulk activities generated count=%d requested=%d", len(activities), payload.count)
  return [activity.to_payload() for activity in activities]


@router.post("/generate-activity-variations")
async def generate_activity_variations(payload: GenerateActivityVariationsRequest, engine: ActivityEngine = Depends(get_engine)) -> list[dict[str, Any]]:  # noqa: B008
  """Generate up to three variations of an existing activity."""
  variations = await engine.generate_variations(payload.base_activity, payload.count)
  logger.debug("Activity variations generated count=%d", len(variations))
  return [variation.to_payload() for variation in variations]


@router.post("/analyze-activity-quality")
async def analyze_activity_quality(payload: AnalyzeActivityQualityRequest, engine: ActivityEngine = Depends(get_engine)) -> dict[str, Any]:  # noqa: B008
  """Score an activity's quality."""
  analysis = await engine.analyze(payload.activity)
  return analysis.to_payload()


@router.get("/test-openai-connection")
async def test_openai_connection(engine: ActivityEngine = Depends(get_engine)) -> JSONResponse:  # noqa: B008
  """Report whether the completion API is configured and reachable."""
  if not engine.completion_api_configured:
    logger.warning("OpenAI API key is not configured")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"connected": False, "error": "OpenAI API key is not configured. Please set OPENAI_API_KEY in your .env file."})

  if await engine.probe():
    return JSONResponse(content={"connected": True, "message": "OpenAI connection successful"})

  logger.warning("OpenAI connection test failed")
  return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"connected": False, "error": "OpenAI connection test failed. Please check your API key and internet connection."})
