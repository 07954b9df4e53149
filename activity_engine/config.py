"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from activity_engine.utils.env import default_env_path, load_env_file

load_env_file(default_env_path(), override=False)

DEFAULT_ALLOWED_ORIGINS = "http://localhost:5173"


@dataclass(frozen=True)
class Settings:
  """Typed settings for the activity engine.

  Created once at process start and treated as read-only afterwards; the engine
  receives it explicitly instead of reading the environment itself.
  """

  environment: str
  debug: bool
  allowed_origins: tuple[str, ...]
  openai_api_key: str | None
  openai_base_url: str | None
  generation_model: str
  probe_model: str
  generation_temperature: float
  generation_max_tokens: int
  variation_temperature: float
  variation_max_tokens: int
  quality_temperature: float
  quality_max_tokens: int
  probe_max_tokens: int
  request_timeout_seconds: float
  bulk_concurrency: int
  log_dir: str
  log_max_bytes: int
  log_backup_count: int
  log_http_4xx: bool

  @property
  def completion_api_configured(self) -> bool:
    """Return True when a completion-API key is available."""
    return self.openai_api_key is not None


def _parse_origins(raw: str | None) -> tuple[str, ...]:
  origins = [origin.strip() for origin in (raw or DEFAULT_ALLOWED_ORIGINS).split(",") if origin.strip()]

  if not origins:
    raise ValueError("ACTIVITY_ENGINE_ALLOWED_ORIGINS must include at least one origin.")

  if "*" in origins:
    raise ValueError("ACTIVITY_ENGINE_ALLOWED_ORIGINS must not include wildcard origins.")

  return tuple(origins)


def _parse_bool(raw: str | None) -> bool:
  """Parse a boolean-ish string from environment variables."""

  if raw is None:
    return False

  normalized = raw.strip().lower()
  return normalized in {"1", "true", "yes", "on"}


def _parse_positive_int(name: str, default: str) -> int:
  value = int(os.getenv(name, default))
  if value <= 0:
    raise ValueError(f"{name} must be a positive integer.")
  return value


def _parse_temperature(name: str, default: str) -> float:
  value = float(os.getenv(name, default))
  if not 0.0 <= value <= 2.0:
    raise ValueError(f"{name} must be between 0 and 2.")
  return value


def _optional_str(raw: str | None) -> str | None:
  if raw is None:
    return None
  value = raw.strip()
  if value == "":
    return None
  return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
  """Load settings once per process."""

  environment = os.getenv("ACTIVITY_ENGINE_ENV", "development").lower()
  debug = _parse_bool(os.getenv("ACTIVITY_ENGINE_DEBUG"))

  request_timeout_seconds = float(os.getenv("ACTIVITY_ENGINE_REQUEST_TIMEOUT_SECONDS", "120"))
  if request_timeout_seconds <= 0:
    raise ValueError("ACTIVITY_ENGINE_REQUEST_TIMEOUT_SECONDS must be positive.")

  log_backup_count = int(os.getenv("ACTIVITY_ENGINE_LOG_BACKUP_COUNT", "10"))
  if log_backup_count < 0:
    raise ValueError("ACTIVITY_ENGINE_LOG_BACKUP_COUNT must be zero or a positive integer.")

  return Settings(
    environment=environment,
    debug=debug,
    allowed_origins=_parse_origins(os.getenv("ACTIVITY_ENGINE_ALLOWED_ORIGINS")),
    openai_api_key=_optional_str(os.getenv("OPENAI_API_KEY")),
    openai_base_url=_optional_str(os.getenv("OPENAI_BASE_URL")),
    generation_model=os.getenv("ACTIVITY_ENGINE_GENERATION_MODEL", "gpt-4-turbo-preview"),
    probe_model=os.getenv("ACTIVITY_ENGINE_PROBE_MODEL", "gpt-3.5-turbo"),
    generation_temperature=_parse_temperature("ACTIVITY_ENGINE_GENERATION_TEMPERATURE", "0.7"),
    generation_max_tokens=_parse_positive_int("ACTIVITY_ENGINE_GENERATION_MAX_TOKENS", "6000"),
    variation_temperature=_parse_temperature("ACTIVITY_ENGINE_VARIATION_TEMPERATURE", "0.8"),
    variation_max_tokens=_parse_positive_int("ACTIVITY_ENGINE_VARIATION_MAX_TOKENS", "5000"),
    quality_temperature=_parse_temperature("ACTIVITY_ENGINE_QUALITY_TEMPERATURE", "0.3"),
    quality_max_tokens=_parse_positive_int("ACTIVITY_ENGINE_QUALITY_MAX_TOKENS", "2500"),
    probe_max_tokens=_parse_positive_int("ACTIVITY_ENGINE_PROBE_MAX_TOKENS", "20"),
    request_timeout_seconds=request_timeout_seconds,
    bulk_concurrency=_parse_positive_int("ACTIVITY_ENGINE_BULK_CONCURRENCY", "1"),
    log_dir=os.getenv("ACTIVITY_ENGINE_LOG_DIR", "./logs").strip(),
    log_max_bytes=_parse_positive_int("ACTIVITY_ENGINE_LOG_MAX_BYTES", "5242880"),
    log_backup_count=log_backup_count,
    log_http_4xx=_parse_bool(os.getenv("ACTIVITY_ENGINE_LOG_HTTP_4XX")),
  )
