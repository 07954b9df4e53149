"""Connectivity probe for the completion API."""

from __future__ import annotations

import logging

from activity_engine.ai.agents.base import BaseAgent
from activity_engine.ai.errors import describe_exception, describe_probe_failure
from activity_engine.ai.providers.base import CompletionRequest

logger = logging.getLogger(__name__)

PROBE_PROMPT = "Hello, this is a test. Please respond with 'OpenAI connection successful.'"
PROBE_MARKER = "successful"


class ProbeAgent(BaseAgent[None, bool]):
  """Report whether the completion API answers with the expected marker."""

  name = "Probe"

  async def run(self, input_data: None = None) -> bool:
    if self._model is None:
      logger.error("OpenAI API key is not configured")
      return False

    request = CompletionRequest(system=None, prompt=PROBE_PROMPT, max_tokens=self._settings.probe_max_tokens, model=self._settings.probe_model)
    try:
      text = await self._complete(request, purpose="probe")
    except Exception as exc:  # noqa: BLE001
      logger.error("OpenAI connection test failed: %s", describe_exception(exc))
      hint = describe_probe_failure(exc)
      if hint:
        logger.error(hint)
      return False

    if PROBE_MARKER not in text.lower():
      logger.warning("OpenAI responded but did not include expected success message: %s", text)
      return False
    return True
