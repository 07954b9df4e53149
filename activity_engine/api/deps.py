"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from activity_engine.ai.orchestrator import ActivityEngine


def get_engine(request: Request) -> ActivityEngine:
  """Return the engine built at startup."""
  engine = getattr(request.app.state, "engine", None)
  if engine is None:
    raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Activity engine is not initialized")
  return engine
