"""Shared pytest fixtures and configuration for lucidlog tests."""

import io
import json
from typing import Any, Dict, List

import pytest

from lucidlog.config.settings import LoggingSettings, reset_settings
from lucidlog.logging.config import LoggerFacade, reset_facade
from lucidlog.logging.coordinator import request_context


@pytest.fixture(autouse=True)
def clean_logging_state():
    """Reset the request context, default facade and cached settings around each test."""
    token = request_context.set(None)
    reset_facade()
    reset_settings()
    yield
    request_context.reset(token)
    reset_facade()
    reset_settings()


@pytest.fixture
def output():
    """Captured log output."""
    return io.StringIO()


@pytest.fixture
def error_output():
    """Captured logger-internal error output."""
    return io.StringIO()


@pytest.fixture
def make_facade(output, error_output):
    """Factory for facades writing to the captured streams, isolated from the environment."""
    def _make(**settings: Any) -> LoggerFacade:
        return LoggerFacade(
            LoggingSettings(_env_file=None, **settings),
            stream=output,
            error_stream=error_output,
        )
    return _make


@pytest.fixture
def json_entries(output):
    """Parse the captured output as one JSON document per line."""
    def _entries() -> List[Dict[str, Any]]:
        return [json.loads(line) for line in output.getvalue().splitlines() if line.strip()]
    return _entries
