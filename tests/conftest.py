"""Shared pytest fixtures."""

from __future__ import annotations

import os

import pytest

from vulngate.constants.config import ENV_GITHUB_OUTPUT, ENV_GITHUB_STEP_SUMMARY, ENV_PREFIX, ENV_WORKSPACE


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CI and ``VULNGATE_*`` variables from the host out of every test."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key)
    for key in (ENV_GITHUB_OUTPUT, ENV_GITHUB_STEP_SUMMARY, ENV_WORKSPACE):
        monkeypatch.delenv(key, raising=False)
