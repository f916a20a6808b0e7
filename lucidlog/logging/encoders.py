"""
lucidlog Encoder Profiles

An encoder profile is the processor chain and renderer applied to every
entry: field naming, severity naming and serialization style.

- Lines: human-readable console lines
- GoogleCloud: JSON matching the Cloud Logging LogEntry payload
  https://cloud.google.com/logging/docs/reference/v2/rest/v2/LogEntry
"""

import datetime
import os
from typing import Any, Dict, List, Optional

import structlog
from structlog.processors import CallsiteParameter
from structlog.types import Processor

from lucidlog.config.settings import LogFormat
from lucidlog.logging.levels import GOOGLE_CLOUD_SEVERITY, LEVELS, WARN, add_severity
from lucidlog.logging.tracing import add_trace_context

# internal key -> Cloud Logging key
GOOGLE_CLOUD_FIELDS: Dict[str, str] = {
    "timestamp": "timestamp",
    "level": "severity",
    "logger": "logName",
    "caller": "caller",
    "event": "textPayload",
    "exception": "trace",
}

_LEADING_KEYS = ("timestamp", "severity", "logName", "caller", "textPayload")


def add_caller(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Collapse callsite parameters into a short ``file.py:line`` caller."""
    filename = event_dict.pop("filename", None)
    lineno = event_dict.pop("lineno", None)
    if filename is not None and "caller" not in event_dict:
        event_dict["caller"] = f"{os.path.basename(filename)}:{lineno}"
    return event_dict


def add_stacktrace(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Request a stack trace for warn and above unless exception info is attached."""
    if LEVELS.get(event_dict.get("level"), 0) >= WARN and not event_dict.get("exc_info"):
        event_dict.setdefault("stack_info", True)
    return event_dict


def uppercase_level(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Render the level in capitals (``INFO``, ``WARN``) for console lines."""
    if "level" in event_dict:
        event_dict["level"] = str(event_dict["level"]).upper()
    return event_dict


def console_level_styles(colors: bool) -> Dict[str, str]:
    """ConsoleRenderer level styles keyed by the capitalized level names."""
    defaults = structlog.dev.ConsoleRenderer.get_default_level_styles(colors)
    return {
        "DEBUG": defaults["debug"],
        "INFO": defaults["info"],
        "WARN": defaults["warn"],
        "ERROR": defaults["error"],
        "DPANIC": defaults["critical"],
        "PANIC": defaults["critical"],
        "FATAL": defaults["critical"],
    }


def encode_durations(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Encode timedelta values as float seconds."""
    for key, value in event_dict.items():
        if isinstance(value, datetime.timedelta):
            event_dict[key] = value.total_seconds()
    return event_dict


def rename_google_cloud_fields(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """
    Map internal keys and severities onto the Cloud Logging schema.

    Well-known keys come first, custom fields follow in their original
    order, the stack trace goes last.
    """
    renamed: Dict[str, Any] = {}
    for key, value in event_dict.items():
        target = GOOGLE_CLOUD_FIELDS.get(key, key)
        if key == "level":
            value = GOOGLE_CLOUD_SEVERITY.get(value, str(value).upper())
        renamed[target] = value

    if "stack" in renamed and "trace" not in renamed:
        renamed["trace"] = renamed.pop("stack")

    ordered = {key: renamed.pop(key) for key in _LEADING_KEYS if key in renamed}
    trace_text = renamed.pop("trace", None)
    ordered.update(renamed)
    if trace_text is not None:
        ordered["trace"] = trace_text
    return ordered


def _callsite_adder() -> Processor:
    return structlog.processors.CallsiteParameterAdder(
        parameters={CallsiteParameter.FILENAME, CallsiteParameter.LINENO},
        additional_ignores=["lucidlog"],
    )


def build_processors(
    log_format: LogFormat,
    sampler: Optional[Processor] = None,
    colors: bool = False,
) -> List[Processor]:
    """
    Build the processor chain for an encoder profile.

    Args:
        log_format: Output encoding
        sampler: Optional sampling processor, applied right after the
            severity is known so dropped entries skip the rest of the chain
        colors: ANSI colors for the lines format

    Returns:
        Processors ending with the renderer
    """
    processors: List[Processor] = [add_severity]
    if sampler is not None:
        processors.append(sampler)

    processors.extend([
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        _callsite_adder(),
        add_caller,
        encode_durations,
        add_trace_context,
        add_stacktrace,
        structlog.processors.StackInfoRenderer(additional_ignores=["lucidlog"]),
    ])

    if log_format == LogFormat.GOOGLE_CLOUD:
        processors.extend([
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            rename_google_cloud_fields,
            structlog.processors.JSONRenderer(),
        ])
    else:
        processors.extend([
            uppercase_level,
            structlog.dev.ConsoleRenderer(
                colors=colors,
                level_styles=console_level_styles(colors),
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ])
    return processors
