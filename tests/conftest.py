"""pytest configuration and fixtures for graphql_rescue tests.

This module provides fresh registries, recording handlers, and a clean
GRAPHQL_RESCUE_* environment for each test.
"""

from __future__ import annotations

from collections.abc import Generator

import pytest

from graphql_rescue import RescueRegistry
from tests.handlers.host import RecordingHandler


@pytest.fixture
def registry() -> Generator[RescueRegistry, None, None]:
    """Provide a fresh, unfrozen RescueRegistry for each test."""
    yield RescueRegistry()


@pytest.fixture
def recording_handler() -> RecordingHandler:
    """Provide a handler returning {"rescued": True} and recording calls."""
    return RecordingHandler({"rescued": True})


@pytest.fixture
def rescue_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Clear GRAPHQL_RESCUE_* variables for the duration of a test."""
    monkeypatch.delenv("GRAPHQL_RESCUE_CONFIG_PATH", raising=False)
    monkeypatch.delenv("GRAPHQL_RESCUE_LOG_LEVEL", raising=False)
    return monkeypatch
