"""
Test module for lucidlog.logging.encoders
"""

from datetime import timedelta
from unittest.mock import Mock

import pytest
import structlog

from lucidlog.config.settings import LogFormat
from lucidlog.logging.encoders import (
    GOOGLE_CLOUD_FIELDS,
    add_caller,
    add_stacktrace,
    build_processors,
    console_level_styles,
    encode_durations,
    rename_google_cloud_fields,
    uppercase_level,
)
from lucidlog.logging.levels import add_severity
from lucidlog.logging.sampling import Sampler


class TestGoogleCloudFields:

    def test_field_mapping_is_exact(self):
        assert GOOGLE_CLOUD_FIELDS == {
            "timestamp": "timestamp",
            "level": "severity",
            "logger": "logName",
            "caller": "caller",
            "event": "textPayload",
            "exception": "trace",
        }

    def test_rename_and_order(self):
        """Test well-known keys lead, custom fields follow, trace closes."""
        event_dict = {
            "key": "key-1",
            "exception": "Traceback ...",
            "event": "debug message",
            "level": "panic",
            "caller": "app.py:10",
            "logger": "billing",
            "timestamp": "2024-01-01T12:00:00Z",
            "REQUEST_ID": "req-1",
        }

        result = rename_google_cloud_fields(Mock(), "panic", event_dict)

        assert list(result) == [
            "timestamp", "severity", "logName", "caller", "textPayload",
            "key", "REQUEST_ID", "trace",
        ]
        assert result["severity"] == "ALERT"
        assert result["textPayload"] == "debug message"
        assert result["trace"] == "Traceback ..."

    def test_stack_info_becomes_trace(self):
        result = rename_google_cloud_fields(Mock(), "info", {"event": "x", "level": "info", "stack": "Stack (most recent call last)"})

        assert result["trace"] == "Stack (most recent call last)"
        assert "stack" not in result

    def test_exception_wins_over_stack(self):
        result = rename_google_cloud_fields(
            Mock(), "error", {"event": "x", "level": "error", "stack": "s", "exception": "e"}
        )

        assert result["trace"] == "e"
        assert result["stack"] == "s"


class TestCommonProcessors:

    def test_add_caller_short_form(self):
        event_dict = add_caller(Mock(), "info", {"filename": "/srv/app/handlers/user.py", "lineno": 42})

        assert event_dict == {"caller": "user.py:42"}

    def test_add_caller_without_callsite(self):
        assert add_caller(Mock(), "info", {"event": "x"}) == {"event": "x"}

    def test_encode_durations(self):
        event_dict = encode_durations(Mock(), "info", {"elapsed": timedelta(minutes=1), "count": 3})

        assert event_dict == {"elapsed": 60.0, "count": 3}

    @pytest.mark.parametrize("level", ["warn", "error", "dpanic", "panic", "fatal"])
    def test_add_stacktrace_for_warn_and_above(self, level):
        event_dict = add_stacktrace(Mock(), level, {"event": "x", "level": level})

        assert event_dict["stack_info"] is True

    @pytest.mark.parametrize("level", ["debug", "info"])
    def test_add_stacktrace_skips_lower_levels(self, level):
        event_dict = add_stacktrace(Mock(), level, {"event": "x", "level": level})

        assert "stack_info" not in event_dict

    def test_add_stacktrace_defers_to_exception(self):
        event_dict = add_stacktrace(Mock(), "error", {"event": "x", "level": "error", "exc_info": True})

        assert "stack_info" not in event_dict

    def test_add_stacktrace_keeps_explicit_choice(self):
        event_dict = add_stacktrace(Mock(), "warn", {"event": "x", "level": "warn", "stack_info": False})

        assert event_dict["stack_info"] is False

    def test_uppercase_level(self):
        assert uppercase_level(Mock(), "warn", {"level": "warn"}) == {"level": "WARN"}

    def test_console_level_styles_cover_every_level(self):
        styles = console_level_styles(colors=False)

        assert set(styles) == {"DEBUG", "INFO", "WARN", "ERROR", "DPANIC", "PANIC", "FATAL"}


class TestBuildProcessors:

    def test_google_cloud_ends_with_json(self):
        processors = build_processors(LogFormat.GOOGLE_CLOUD)

        assert processors[0] is add_severity
        assert processors[-2] is rename_google_cloud_fields
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_lines_ends_with_console(self):
        processors = build_processors(LogFormat.LINES)

        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
        assert processors[-2] is uppercase_level
        assert structlog.processors.format_exc_info not in processors

    def test_sampler_follows_severity(self):
        sampler = Sampler()

        processors = build_processors(LogFormat.LINES, sampler=sampler)

        assert processors[:2] == [add_severity, sampler]
