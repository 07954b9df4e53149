from __future__ import annotations

from unittest.mock import patch

import pytest

from activity_engine import __main__ as entrypoint


def test_build_uvicorn_args_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
  monkeypatch.delenv("ACTIVITY_ENGINE_HOST", raising=False)
  monkeypatch.delenv("ACTIVITY_ENGINE_PORT", raising=False)
  assert entrypoint.build_uvicorn_args() == ["uvicorn", "activity_engine.main:app", "--host", "0.0.0.0", "--port", "8002", "--no-server-header"]


def test_main_execs_uvicorn(monkeypatch: pytest.MonkeyPatch) -> None:
  monkeypatch.setenv("ACTIVITY_ENGINE_HOST", "127.0.0.1")
  monkeypatch.setenv("ACTIVITY_ENGINE_PORT", "9000")
  with patch("activity_engine.__main__.os.execvp") as execvp:
    entrypoint.main()
  execvp.assert_called_once_with("uvicorn", ["uvicorn", "activity_engine.main:app", "--host", "127.0.0.1", "--port", "9000", "--no-server-header"])
