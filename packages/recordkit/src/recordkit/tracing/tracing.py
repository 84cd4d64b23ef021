# recordkit/tracing/tracing.py
"""OpenTelemetry spans for registration and association resolution.

Only ``opentelemetry-api`` is required. Without a configured SDK every span is
a no-op, so the record layer can open spans unconditionally.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from contextlib import contextmanager
from typing import Any, Iterator

from opentelemetry import trace
from opentelemetry.trace import Span, SpanKind, Status, StatusCode, Tracer

logger = logging.getLogger(__name__)

TRACER_NAME = "recordkit"
ATTRIBUTE_PREFIX = "recordkit."

# OpenTelemetry accepts these scalars, or homogeneous sequences of them.
_ALLOWED = (bool, str, bytes, int, float)


def get_tracer(name: str | None = None) -> Tracer:
    return trace.get_tracer(name or TRACER_NAME)


def span_attributes(**values: Any) -> dict[str, Any]:
    """``recordkit.``-prefixed attributes; None is dropped, other unsupported values are stringified."""
    out: dict[str, Any] = {}
    for key, value in values.items():
        if value is None:
            continue
        if not isinstance(value, _ALLOWED):
            if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
                value = [v if isinstance(v, _ALLOWED) else str(v) for v in value]
            else:
                value = str(value)
        out[f"{ATTRIBUTE_PREFIX}{key}"] = value
    return out


def record_attributes(record: Any, **extra: Any) -> dict[str, Any]:
    """Span attributes describing a wrapper (class, model name, collection flag)."""
    return span_attributes(
        wrapper=type(record).__name__,
        model=record.model_name,
        collection=record.is_collection,
        **extra,
    )


def _apply_attributes(span: Span, attrs: Mapping[str, Any] | None) -> None:
    for key, value in (attrs or {}).items():
        if isinstance(value, _ALLOWED) or isinstance(value, list):
            span.set_attribute(key, value)


@contextmanager
def service_span_sync(name: str, *, attributes: Mapping[str, Any] | None = None) -> Iterator[Span]:
    """Open an INTERNAL span; exceptions are recorded on it and re-raised.

    Usage:
        with service_span_sync("recordkit.decorate_association", attributes=record_attributes(record)):
            ...
    """
    with get_tracer().start_as_current_span(name, kind=SpanKind.INTERNAL) as span:
        _apply_attributes(span, attributes)
        try:
            yield span
        except Exception as err:
            span.record_exception(err)
            span.set_status(Status(StatusCode.ERROR, description=str(err)))
            span.set_attribute(f"{ATTRIBUTE_PREFIX}error", type(err).__name__)
            raise


__all__ = [
    "TRACER_NAME",
    "get_tracer",
    "span_attributes",
    "record_attributes",
    "service_span_sync",
]
