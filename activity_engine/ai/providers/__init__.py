"""Provider implementations."""

from activity_engine.ai.providers.base import CompletionModel, CompletionRequest, ModelResponse, SimpleModelResponse
from activity_engine.ai.providers.openai import OpenAIModel, build_completion_model

__all__ = ["CompletionModel", "CompletionRequest", "ModelResponse", "SimpleModelResponse", "OpenAIModel", "build_completion_model"]
