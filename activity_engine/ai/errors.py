"""Shared error classification helpers for completion failures."""

from __future__ import annotations

from typing import Literal

import openai

FailureKind = Literal["transport", "output"]

_TRANSPORT_ERRORS: tuple[type[BaseException], ...] = (TimeoutError, ConnectionError, openai.APIError)


def is_transport_error(exc: BaseException) -> bool:
  """Return True when an exception comes from reaching the completion API."""
  return isinstance(exc, _TRANSPORT_ERRORS)


def classify_failure(exc: BaseException) -> FailureKind:
  """Label an exception for logging; anything not recognisably transport is treated as output."""
  return "transport" if is_transport_error(exc) else "output"


def describe_probe_failure(exc: BaseException) -> str | None:
  """Return an operator hint for common connectivity failures."""
  if isinstance(exc, openai.AuthenticationError) or getattr(exc, "status_code", None) == 401:
    return "OpenAI API key is invalid or unauthorized"
  if isinstance(exc, openai.RateLimitError) or getattr(exc, "status_code", None) == 429:
    return "OpenAI API rate limit exceeded"
  if isinstance(exc, (openai.APIConnectionError, ConnectionError)):
    return "Cannot connect to OpenAI API - check network connectivity"
  return None


def describe_exception(exc: BaseException) -> str:
  """Return the exception message, or its type name when the message is empty (e.g. TimeoutError())."""
  return str(exc) or type(exc).__name__
