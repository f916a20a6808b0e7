"""
lucidlog Trace Integration

OpenTelemetry hooks used by the logger facade: registering a span exporter
when debug logging is enabled, and stamping log entries with the ids of the
active span.
"""

from typing import Any, Dict

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SpanExporter
from opentelemetry.sdk.trace.sampling import ALWAYS_ON


def enable_trace_export(exporter: SpanExporter) -> TracerProvider:
    """
    Export every span to ``exporter``.

    Builds a tracer provider that samples all traces, attaches the exporter
    through a batch span processor and installs the provider process-wide.
    OpenTelemetry only accepts the first provider installed in a process.

    Args:
        exporter: Destination for finished spans

    Returns:
        The installed TracerProvider
    """
    provider = TracerProvider(sampler=ALWAYS_ON)
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)
    return provider


def add_trace_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """
    Add OpenTelemetry trace context to log entries.

    Fields already present on the entry are left untouched.
    """
    span = trace.get_current_span()
    if span and span.is_recording():
        span_context = span.get_span_context()
        if 'trace_id' not in event_dict:
            event_dict['trace_id'] = format(span_context.trace_id, '032x')
        if 'span_id' not in event_dict:
            event_dict['span_id'] = format(span_context.span_id, '016x')

    return event_dict
