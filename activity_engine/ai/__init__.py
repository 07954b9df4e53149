"""AI generation engine."""

from activity_engine.ai.orchestrator import ActivityEngine

__all__ = ["ActivityEngine"]
