import logging
import os

logger = logging.getLogger("activity_engine.entrypoint")


def build_uvicorn_args() -> list[str]:
  host = os.getenv("ACTIVITY_ENGINE_HOST", "0.0.0.0")
  port = os.getenv("ACTIVITY_ENGINE_PORT", "8002")
  return ["uvicorn", "activity_engine.main:app", "--host", host, "--port", port, "--no-server-header"]


def main() -> None:
  """Replace this process with uvicorn so it receives signals directly."""
  logging.basicConfig(level=logging.INFO)
  args = build_uvicorn_args()
  logger.info("Starting activity engine: %s", " ".join(args))
  os.execvp("uvicorn", args)


if __name__ == "__main__":
  main()
