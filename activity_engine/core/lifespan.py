import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from activity_engine.ai.orchestrator import ActivityEngine
from activity_engine.config import get_settings
from activity_engine.core.logging import initialize_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
  """Set up logging and build the engine once per process."""
  settings = get_settings()
  logger = logging.getLogger("activity_engine.core.lifespan")

  try:
    initialize_logging(settings)
  except RuntimeError:
    # The service still runs with default stderr logging if the log dir is unusable.
    logger.warning("Logging setup failed; continuing with default handlers.", exc_info=True)

  app.state.engine = ActivityEngine.from_settings(settings)
  logger.info("Startup complete - completion api configured=%s", app.state.engine.completion_api_configured)

  yield

  logger.info("Shutdown complete.")
