"""
Pytest configuration and fixtures for testing.

This module provides fresh hub state (registry, counters, broadcaster) for
every test and a FastAPI app wired to it.
"""

import os
import tempfile
from types import SimpleNamespace
from unittest.mock import patch

import pytest

# Keep the JSON error log out of the working tree during test runs
os.environ.setdefault(
    "LOG_FILE_PATH",
    os.path.join(tempfile.gettempdir(), "clickhub-tests", "errors.log"),
)


@pytest.fixture
def registry():
    """
    Provides an empty ConnectionRegistry.

    Returns:
        ConnectionRegistry: Fresh registry instance
    """
    from clickhub.managers.connection_registry import ConnectionRegistry

    return ConnectionRegistry()


@pytest.fixture
def counters():
    """
    Provides a zeroed CounterState.

    Returns:
        CounterState: Fresh counter state
    """
    from clickhub.managers.counter_state import CounterState

    return CounterState()


@pytest.fixture
def broadcaster(registry):
    """
    Provides a Broadcaster bound to the `registry` fixture.

    Args:
        registry: Fixture providing the registry
    """
    from clickhub.managers.broadcaster import Broadcaster

    return Broadcaster(registry)


@pytest.fixture
def hub(registry, counters, broadcaster):
    """
    Swaps the process-wide hub singletons for fresh ones.

    The WebSocket consumer and the health endpoint read the module-level
    singletons, so both are patched for the duration of the test.

    Yields:
        SimpleNamespace: registry, counters and broadcaster in use
    """
    with (
        patch(
            "clickhub.api.ws.consumers.clicks.connection_registry", registry
        ),
        patch("clickhub.api.ws.consumers.clicks.counter_state", counters),
        patch("clickhub.api.ws.consumers.clicks.broadcaster", broadcaster),
        patch("clickhub.api.http.health.connection_registry", registry),
        patch("clickhub.api.http.health.counter_state", counters),
    ):
        yield SimpleNamespace(
            registry=registry, counters=counters, broadcaster=broadcaster
        )


@pytest.fixture
def app(hub):
    """
    Create the FastAPI application bound to the `hub` fixture state.

    Returns:
        FastAPI: FastAPI application instance.
    """
    from clickhub import application

    return application()
