# recordkit/tracing/__init__.py
from .tracing import TRACER_NAME, get_tracer, record_attributes, service_span_sync, span_attributes

__all__ = [
    "TRACER_NAME",
    "get_tracer",
    "record_attributes",
    "service_span_sync",
    "span_attributes",
]
