# recordkit/bindings/providers.py
"""Binding metadata providers.

The record layer asks a provider for the bindings of a logical model name and
reads one association out of the returned table. An association with no entry
is an *ad-hoc* association: its own name is the target type and it is treated
as single-valued.
"""
from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Mapping, Protocol, runtime_checkable

from pydantic import ValidationError

from .models import Binding, coerce_bindings

logger = logging.getLogger(__name__)

__all__ = [
    "BindingProvider",
    "NullBindingProvider",
    "StaticBindingProvider",
    "ModelBindingProvider",
]


@runtime_checkable
class BindingProvider(Protocol):
    def bindings_for(self, model_name: str) -> Mapping[str, Binding]:
        ...


class NullBindingProvider:
    """Provider with no metadata; every association is ad-hoc."""

    def bindings_for(self, model_name: str) -> Mapping[str, Binding]:
        return {}


class StaticBindingProvider:
    """Provider backed by an in-memory ``{model: {association: binding}}`` table."""

    def __init__(self, table: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self._table: dict[str, dict[str, Binding]] = {
            model: coerce_bindings(binds) for model, binds in (table or {}).items()
        }

    def bind(self, model_name: str, association: str, binding: Binding | Mapping[str, Any]) -> None:
        self._table.setdefault(model_name, {})[association] = Binding.model_validate(binding)

    def bindings_for(self, model_name: str) -> Mapping[str, Binding]:
        return self._table.get(model_name, {})


class ModelBindingProvider:
    """Reads a ``binds`` table off model classes looked up by name.

    ``models`` is anything with a ``try_get(name)`` method (a
    :class:`~recordkit.registry.TypeRegistry` works). A model's ``binds`` maps
    association names to :class:`Binding` instances or mappings such as
    ``{"className": "Tag", "bindType": "hasMany"}``. Validated tables are cached
    per model name; unknown models are not cached.
    """

    def __init__(self, models: Any, *, attribute: str = "binds") -> None:
        self._models = models
        self._attribute = attribute
        self._cache: dict[str, dict[str, Binding]] = {}
        self._lock = RLock()

    def bindings_for(self, model_name: str) -> Mapping[str, Binding]:
        with self._lock:
            cached = self._cache.get(model_name)
            if cached is not None:
                return cached

            model = self._models.try_get(model_name)
            if model is None:
                return {}
            raw = getattr(model, self._attribute, None)
            try:
                table = coerce_bindings(raw)
            except ValidationError:
                logger.warning("bindings.invalid model=%s attribute=%s", model_name, self._attribute, exc_info=True)
                table = {}
            self._cache[model_name] = table
            return table

    def invalidate(self) -> None:
        with self._lock:
            self._cache.clear()
