"""Name-keyed type registry.

Wrapper types are resolved by string name (``"CategoryDecorator"``). A miss is a
normal outcome: callers use :meth:`TypeRegistry.try_get` and fall back to the
generic wrapper. The registry does not check what it stores; a name may map to
any class, and the record layer decides whether the class is usable.
"""
from __future__ import annotations

from typing import Any

from .base import BaseRegistry


def _coerce_name(value: Any) -> str:
    if isinstance(value, type):
        return value.__name__
    name = str(value).strip()
    if not name:
        raise ValueError("type name must be a non-empty string")
    return name


class TypeRegistry(BaseRegistry[str, type]):
    """Registry of classes keyed by type name (class name unless given explicitly)."""

    def __init__(self) -> None:
        super().__init__(coerce_key=_coerce_name)

    def add(self, cls: type, *, name: str | None = None, strict: bool = False) -> str:
        """Register ``cls`` under ``name`` (defaults to ``cls.__name__``)."""
        return self.register(name or cls, cls, strict=strict)

    def names(self) -> tuple[str, ...]:
        return self.keys()


__all__ = ["TypeRegistry"]
