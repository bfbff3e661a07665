"""Pytest configuration for test isolation.

Makes the workspace ``packages/`` directory importable and keeps every test
hermetic: ``EXPENSE_PARSER_*`` and ``OPENAI_API_KEY`` variables from the
developer's shell are removed, and each test runs from its own temporary
working directory so the CLI never picks up a real ``.env``.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
# Ensure `packages/` precedes the repo root on sys.path so local packages resolve first.
sys.path[:0] = [p for p in [str(_PKG_DIR), str(_ROOT)] if p not in sys.path]

_ENV_VARS = (
    "EXPENSE_PARSER_TZ",
    "EXPENSE_PARSER_THOUSANDS_SEP",
    "EXPENSE_PARSER_DECIMAL_SEP",
    "EXPENSE_PARSER_OPENAI_MODEL",
    "EXPENSE_PARSER_LOG_LEVEL",
    "OPENAI_API_KEY",
)


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear parser/OpenAI env vars and run from a per-test directory."""

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
