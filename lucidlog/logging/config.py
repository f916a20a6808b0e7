"""
lucidlog Logger Facade

Wraps a structlog pipeline behind a configure-once, read-many facade. The
backend logger is built exactly once, on open() or on the first instance()
call, from the configuration recorded at that moment. Later configuration
calls never rebuild it.
"""

import sys
import threading
from typing import IO, Optional, Union

import structlog
from opentelemetry.sdk.trace.export import SpanExporter

from lucidlog.config.settings import (
    LogFormat,
    LoggingSettings,
    ReconfigurePolicy,
    get_settings,
    parse_log_format,
)
from lucidlog.exceptions import LoggerAlreadyInitializedError
from lucidlog.logging import coordinator
from lucidlog.logging.coordinator import REQUEST_ID_FIELD, RequestContext
from lucidlog.logging.encoders import build_processors
from lucidlog.logging.levels import (
    DEBUG,
    INFO,
    SeverityBoundLogger,
    drop_all,
    make_severity_bound_logger,
)
from lucidlog.logging.sampling import Sampler
from lucidlog.logging.tracing import enable_trace_export


class LoggerFacade:
    """
    Process-wide structured logger, configured once.

    Construct one per application and share it, or use the module-level
    default facade through get_facade().

    Attributes:
        settings: Settings the facade was created from
    """

    def __init__(
        self,
        settings: Optional[LoggingSettings] = None,
        stream: Optional[IO[str]] = None,
        error_stream: Optional[IO[str]] = None,
    ):
        self.settings = settings if settings is not None else get_settings()
        self._stream = stream
        self._error_stream = error_stream

        self._format = self.settings.format
        self._debug = self.settings.debug
        self._logger: Optional[SeverityBoundLogger] = None
        self._lock = threading.Lock()
        self._build_count = 0

    @property
    def initialized(self) -> bool:
        return self._logger is not None

    @property
    def format(self) -> LogFormat:
        return self._format

    @property
    def debug_enabled(self) -> bool:
        return self._debug

    @property
    def build_count(self) -> int:
        """Number of backend builds performed; never more than one."""
        return self._build_count

    def _reject_late_change(self, message: str, **fields) -> bool:
        """
        Apply the reconfigure policy when the logger is already built.

        Returns:
            True if the change must be ignored
        """
        if self._logger is None:
            return False
        if self.settings.reconfigure_policy == ReconfigurePolicy.RAISE:
            raise LoggerAlreadyInitializedError(message, details=fields)
        self._logger.warning(message, **fields)
        return True

    def set_format(self, log_format: Union[LogFormat, str]) -> None:
        """
        Set the output encoding used when the logger is built.

        After the build the call only emits a warning (or raises under the
        ``raise`` reconfigure policy); the existing logger keeps its format.
        """
        log_format = parse_log_format(log_format)
        with self._lock:
            if self._reject_late_change(
                "logger already initialized when setting format",
                requested_format=log_format.value,
            ):
                return
            self._format = log_format

    def enable_debug_logging(self, exporter: Optional[SpanExporter] = None) -> None:
        """
        Include debug entries in the output.

        Args:
            exporter: Optional span exporter; when given, every trace is
                sampled and exported to it (process-wide)
        """
        with self._lock:
            if self._reject_late_change("logger already initialized when enabling debug"):
                return
            self._debug = True
            if exporter is not None:
                enable_trace_export(exporter)

    @staticmethod
    def with_request_id(ctx: Optional[RequestContext], request_id: str) -> RequestContext:
        return coordinator.with_request_id(ctx, request_id)

    @staticmethod
    def set_context(ctx: Optional[RequestContext]):
        return coordinator.set_context(ctx)

    def open(self) -> SeverityBoundLogger:
        """
        Build the backend logger if needed and return it.

        Safe under concurrent first use: exactly one build happens and every
        caller gets the same logger.
        """
        logger = self._logger
        if logger is not None:
            return logger
        with self._lock:
            if self._logger is None:
                self._logger = self._build()
            return self._logger

    def instance(self) -> SeverityBoundLogger:
        """
        Get the shared logger.

        If the current request context carries a request id, the returned
        logger tags every entry with it as REQUEST_ID.
        """
        logger = self.open()
        request_id = coordinator.current_request_id()
        if request_id is not None:
            return logger.bind(**{REQUEST_ID_FIELD: request_id})
        return logger

    def named(self, name: str) -> SeverityBoundLogger:
        """Get the shared logger with ``name`` as logger name."""
        return self.instance().bind(logger=name)

    def sync(self) -> None:
        """Flush buffered output."""
        stream = self._stream if self._stream is not None else sys.stdout
        stream.flush()

    def _build(self) -> SeverityBoundLogger:
        self._build_count += 1
        try:
            sampler = Sampler(
                initial=self.settings.sampling_initial,
                thereafter=self.settings.sampling_thereafter,
                interval=self.settings.sampling_interval,
            )
            processors = build_processors(self._format, sampler=sampler, colors=self.settings.colors)
            wrapper_class = make_severity_bound_logger(DEBUG if self._debug else INFO)
            sink = structlog.PrintLogger(file=self._stream if self._stream is not None else sys.stdout)
            return wrapper_class(sink, processors, {})
        except Exception as e:
            error_stream = self._error_stream if self._error_stream is not None else sys.stderr
            print(f"lucidlog: logger build failed: {e!r}", file=error_stream)
            return SeverityBoundLogger(structlog.PrintLogger(file=error_stream), [drop_all], {})


# =============================================================================
# DEFAULT FACADE
# =============================================================================

_default_facade: Optional[LoggerFacade] = None
_default_lock = threading.Lock()


def get_facade() -> LoggerFacade:
    """Get the process-wide default facade, created from get_settings()."""
    global _default_facade
    facade = _default_facade
    if facade is not None:
        return facade
    with _default_lock:
        if _default_facade is None:
            _default_facade = LoggerFacade()
        return _default_facade


def reset_facade() -> None:
    """
    Drop the default facade (primarily for testing).

    The next get_facade() call creates a fresh, unbuilt facade.
    """
    global _default_facade
    with _default_lock:
        _default_facade = None


def set_format(log_format: Union[LogFormat, str]) -> None:
    get_facade().set_format(log_format)


def enable_debug_logging(exporter: Optional[SpanExporter] = None) -> None:
    get_facade().enable_debug_logging(exporter)


def with_request_id(ctx: Optional[RequestContext], request_id: str) -> RequestContext:
    return coordinator.with_request_id(ctx, request_id)


def set_context(ctx: Optional[RequestContext]):
    return coordinator.set_context(ctx)


def instance() -> SeverityBoundLogger:
    return get_facade().instance()
