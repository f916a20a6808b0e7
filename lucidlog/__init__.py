"""
lucidlog
========

Process-wide structured logger facade with Lines and GoogleCloud output,
a debug toggle and per-request correlation ids.

Usage:
    import lucidlog

    lucidlog.set_format(lucidlog.LogFormat.GOOGLE_CLOUD)
    ctx = lucidlog.with_request_id(None, "request-1234")
    lucidlog.set_context(ctx)
    lucidlog.instance().info("debug message", key="key-1")
"""

__version__ = "0.1.0"

from lucidlog.config import LogFormat, LoggingSettings, ReconfigurePolicy
from lucidlog.exceptions import (
    ConfigurationException,
    LoggerAlreadyInitializedError,
    LucidLogException,
)
from lucidlog.logging import (
    REQUEST_ID_FIELD,
    LoggerFacade,
    RequestContext,
    enable_debug_logging,
    get_facade,
    instance,
    request_scope,
    reset_facade,
    set_context,
    set_format,
    with_request_id,
)

__all__ = [
    "LogFormat",
    "LoggingSettings",
    "ReconfigurePolicy",
    "LucidLogException",
    "ConfigurationException",
    "LoggerAlreadyInitializedError",
    "REQUEST_ID_FIELD",
    "LoggerFacade",
    "RequestContext",
    "enable_debug_logging",
    "get_facade",
    "instance",
    "request_scope",
    "reset_facade",
    "set_context",
    "set_format",
    "with_request_id",
    "__version__",
]
