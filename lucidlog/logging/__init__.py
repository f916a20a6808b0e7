"""
lucidlog Logging Infrastructure

A thin configuration and context-propagation layer over structlog.

Components:
- config: LoggerFacade, the configure-once shared logger, and the default
  facade helpers
- coordinator: Immutable request correlation context held in a ContextVar
- encoders: Lines and GoogleCloud encoder profiles
- levels: Severity ladder and filtering bound logger
- sampling: Log volume sampling processor
- tracing: OpenTelemetry trace export and trace context processor
"""

from .config import (
    LoggerFacade,
    enable_debug_logging,
    get_facade,
    instance,
    reset_facade,
    set_context,
    set_format,
    with_request_id,
)
from .coordinator import (
    REQUEST_ID_FIELD,
    RequestContext,
    current_context,
    current_request_id,
    new_request_id,
    request_context,
    request_scope,
    reset_context,
)
from .levels import GOOGLE_CLOUD_SEVERITY, SeverityBoundLogger, make_severity_bound_logger
from .sampling import Sampler
from .tracing import add_trace_context, enable_trace_export

__all__ = [
    # Facade
    'LoggerFacade',
    'get_facade',
    'reset_facade',
    'set_format',
    'enable_debug_logging',
    'instance',

    # Correlation
    'REQUEST_ID_FIELD',
    'RequestContext',
    'request_context',
    'with_request_id',
    'set_context',
    'reset_context',
    'current_context',
    'current_request_id',
    'new_request_id',
    'request_scope',

    # Building blocks
    'GOOGLE_CLOUD_SEVERITY',
    'SeverityBoundLogger',
    'make_severity_bound_logger',
    'Sampler',
    'add_trace_context',
    'enable_trace_export',
]
