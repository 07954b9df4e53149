"""Pipeline contracts and request helpers."""

from activity_engine.ai.pipeline.bulk import ENVIRONMENT_CYCLE, METHODOLOGY_CYCLE, build_bulk_requests, vary_request
from activity_engine.ai.pipeline.contracts import GenerationResult, InvalidPayload, ParseResult, ValidPayload

__all__ = ["ENVIRONMENT_CYCLE", "METHODOLOGY_CYCLE", "GenerationResult", "InvalidPayload", "ParseResult", "ValidPayload", "build_bulk_requests", "vary_request"]
