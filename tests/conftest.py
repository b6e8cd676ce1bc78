"""Pytest configuration for test isolation.

The package reads a handful of environment variables (worker count, summary
model, OpenAI credentials). A developer's shell or ``.env`` must not leak
into test runs, so every test starts with those variables unset.
"""

from __future__ import annotations

from datetime import date

import pytest

_ENV_VARS = (
    "OPENAI_API_KEY",
    "STATEMENT_MERGER_LOG_LEVEL",
    "STATEMENT_MERGER_MAX_WORKERS",
    "STATEMENT_MERGER_SUMMARY_MODEL",
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def today() -> date:
    """A pinned wall-clock date for date normalization tests."""

    return date(2026, 10, 16)
