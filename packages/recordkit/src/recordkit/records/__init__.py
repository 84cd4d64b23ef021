# recordkit/records/__init__.py
"""Record wrappers: ingestion, association resolution and projection."""

from .base import RecordDecorator
from .diagnostics import report
from .naming import infer_model_name, is_indexed, model_key, strip_suffix

__all__ = [
    "RecordDecorator",
    "report",
    "infer_model_name",
    "is_indexed",
    "model_key",
    "strip_suffix",
]
