# recordkit/decorators/__init__.py
"""Registration decorators for wrapper classes."""

from .base import BaseDecorator, record_decorator

__all__ = ["BaseDecorator", "record_decorator"]
