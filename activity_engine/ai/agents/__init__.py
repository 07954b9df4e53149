"""Agent implementations."""

from activity_engine.ai.agents.activity import ActivityAgent
from activity_engine.ai.agents.base import BaseAgent
from activity_engine.ai.agents.probe import ProbeAgent
from activity_engine.ai.agents.quality import QualityAgent
from activity_engine.ai.agents.variations import VariationAgent, VariationInput

__all__ = ["ActivityAgent", "BaseAgent", "ProbeAgent", "QualityAgent", "VariationAgent", "VariationInput"]
