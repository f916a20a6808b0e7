"""
lucidlog Severity Levels

Defines the severity ladder used by every logger built by the facade and a
structlog wrapper class that filters entries below a minimum severity before
any processor runs.

Levels, lowest to highest:
    debug < info < warn < error < dpanic < panic < fatal

``critical`` is an alias of ``dpanic``. ``panic`` and ``fatal`` only log;
they never raise or terminate the process.
"""

from typing import Any, Dict, Optional, Type, Union

from structlog import BoundLoggerBase, DropEvent


DEBUG = 10
INFO = 20
WARN = 30
ERROR = 40
DPANIC = 50
PANIC = 60
FATAL = 70

LEVELS: Dict[str, int] = {
    "debug": DEBUG,
    "info": INFO,
    "warn": WARN,
    "error": ERROR,
    "dpanic": DPANIC,
    "panic": PANIC,
    "fatal": FATAL,
}

LEVEL_ALIASES: Dict[str, str] = {
    "warning": "warn",
    "critical": "dpanic",
    "exception": "error",
}

# Google Cloud LogSeverity names
# https://cloud.google.com/logging/docs/reference/v2/rest/v2/LogEntry#LogSeverity
GOOGLE_CLOUD_SEVERITY: Dict[str, str] = {
    "debug": "DEBUG",
    "info": "INFO",
    "warn": "WARNING",
    "error": "ERROR",
    "dpanic": "CRITICAL",
    "panic": "ALERT",
    "fatal": "EMERGENCY",
}


def canonical_level(level: Union[str, int]) -> str:
    """
    Resolve a level name, alias or number to its canonical name.

    Raises:
        ValueError: If the level is unknown
    """
    if isinstance(level, int):
        for name, number in LEVELS.items():
            if number == level:
                return name
        raise ValueError(f"Unknown log level: {level}")

    name = level.lower()
    name = LEVEL_ALIASES.get(name, name)
    if name not in LEVELS:
        raise ValueError(f"Unknown log level: {level}")
    return name


def add_severity(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Record the canonical level name under ``level``."""
    event_dict["level"] = canonical_level(method_name)
    return event_dict


class SeverityBoundLogger(BoundLoggerBase):
    """
    Bound logger exposing the lucidlog severity ladder.

    Entries below ``_min_level`` are discarded before processing. Use
    make_severity_bound_logger() to get a class with a given threshold;
    bind() keeps the class and therefore the threshold.
    """

    _min_level: int = DEBUG

    def is_enabled_for(self, level: Union[str, int]) -> bool:
        return LEVELS[canonical_level(level)] >= self._min_level

    def _log_at(self, name: str, event: Optional[str], args: tuple, event_kw: Dict[str, Any]) -> Any:
        if LEVELS[name] < self._min_level:
            return None
        if args and isinstance(event, str):
            event = event % args
        try:
            out_args, out_kw = self._process_event(name, event, event_kw)
        except DropEvent:
            return None
        return self._logger.msg(*out_args, **out_kw)

    def debug(self, event: Optional[str] = None, *args: Any, **kw: Any) -> Any:
        return self._log_at("debug", event, args, kw)

    def info(self, event: Optional[str] = None, *args: Any, **kw: Any) -> Any:
        return self._log_at("info", event, args, kw)

    def warn(self, event: Optional[str] = None, *args: Any, **kw: Any) -> Any:
        return self._log_at("warn", event, args, kw)

    warning = warn

    def error(self, event: Optional[str] = None, *args: Any, **kw: Any) -> Any:
        return self._log_at("error", event, args, kw)

    def exception(self, event: Optional[str] = None, *args: Any, **kw: Any) -> Any:
        kw.setdefault("exc_info", True)
        return self._log_at("error", event, args, kw)

    def dpanic(self, event: Optional[str] = None, *args: Any, **kw: Any) -> Any:
        return self._log_at("dpanic", event, args, kw)

    critical = dpanic

    def panic(self, event: Optional[str] = None, *args: Any, **kw: Any) -> Any:
        return self._log_at("panic", event, args, kw)

    def fatal(self, event: Optional[str] = None, *args: Any, **kw: Any) -> Any:
        return self._log_at("fatal", event, args, kw)

    def log(self, level: Union[str, int], event: Optional[str] = None, *args: Any, **kw: Any) -> Any:
        return self._log_at(canonical_level(level), event, args, kw)


_wrapper_classes: Dict[int, Type[SeverityBoundLogger]] = {}


def make_severity_bound_logger(min_level: Union[str, int]) -> Type[SeverityBoundLogger]:
    """
    Get a SeverityBoundLogger subclass filtering below ``min_level``.

    Classes are cached per threshold so loggers sharing a threshold share a
    class.
    """
    name = canonical_level(min_level)
    number = LEVELS[name]
    cls = _wrapper_classes.get(number)
    if cls is None:
        cls = type(
            f"SeverityBoundLoggerFiltering{name.capitalize()}",
            (SeverityBoundLogger,),
            {"_min_level": number},
        )
        _wrapper_classes[number] = cls
    return cls


def drop_all(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Processor that discards every entry."""
    raise DropEvent
