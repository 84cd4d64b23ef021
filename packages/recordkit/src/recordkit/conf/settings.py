# recordkit/conf/settings.py
"""Layered recordkit settings.

Lookups walk runtime overrides, then the layers given at construction, then
:data:`~recordkit.conf.defaults.DEFAULTS`. Values written for known keys are
normalized on the way in so the record layer can rely on their shape, e.g.::

    settings["DISCOVERY_PATHS"] = "shop.wrappers, blog.wrappers"
    settings["DISCOVERY_PATHS"]  # -> ("shop.wrappers", "blog.wrappers")
"""
from __future__ import annotations

import importlib
import logging
import os
from collections import ChainMap
from typing import Any, Callable, Iterable, Iterator, Mapping, MutableMapping

from .defaults import DEFAULTS

logger = logging.getLogger(__name__)

CONFIG_MODULE_ENVVAR = "RECORDKIT_CONFIG_MODULE"


def _as_names(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(part.strip() for part in value.split(",") if part.strip())
    return tuple(str(part) for part in value)


def _as_depth(value: Any) -> int | None:
    if value is None:
        return None
    depth = int(value)
    if depth < 0:
        raise ValueError(f"SERIALIZE_MAX_DEPTH must be >= 0 or None, got {value!r}")
    return depth


def _as_suffix(value: Any) -> str:
    suffix = str(value).strip()
    if not suffix:
        raise ValueError("DECORATOR_SUFFIX must be a non-empty string")
    return suffix


def _as_helpers(value: Any) -> dict[str, Any]:
    return dict(value or {})


_NORMALIZERS: dict[str, Callable[[Any], Any]] = {
    "DECORATOR_SUFFIX": _as_suffix,
    "CHILDREN_KEY": str,
    "MULTI_VALUED_BIND_TYPES": _as_names,
    "DISCOVERY_PATHS": _as_names,
    "HELPERS": _as_helpers,
    "SERIALIZE_MAX_DEPTH": _as_depth,
}


def normalize(key: str, value: Any) -> Any:
    """Coerce ``value`` into the shape expected for ``key``; unknown keys pass through."""
    normalizer = _NORMALIZERS.get(key)
    if normalizer is None:
        if key not in DEFAULTS:
            logger.debug("settings.unknown_key %s", key)
        return value
    return normalizer(value)


class Settings(MutableMapping[str, Any]):
    """Settings mapping with defaults, construction layers and runtime overrides."""

    def __init__(self, *layers: Mapping[str, Any]) -> None:
        normalized = [{k: normalize(k, v) for k, v in layer.items()} for layer in layers]
        self._storage = ChainMap({}, *normalized, dict(DEFAULTS))

    # Mapping protocol -------------------------------------------------
    def __getitem__(self, key: str) -> Any:
        return self._storage[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._storage.maps[0][key] = normalize(key, value)

    def __delitem__(self, key: str) -> None:
        del self._storage.maps[0][key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._storage)

    def __len__(self) -> int:
        return len(self._storage)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Settings overrides=[{', '.join(sorted(self._storage.maps[0]))}]>"

    # Loaders ----------------------------------------------------------
    def update_from_object(self, obj: str, *, namespace: str | None = None) -> None:
        """Copy the uppercase names of module ``obj`` (or ``NAMESPACE_`` names, prefix stripped)."""
        module = importlib.import_module(obj)
        self.update_from_mapping(vars(module), namespace=namespace)

    def update_from_envvar(self, envvar: str = CONFIG_MODULE_ENVVAR, *, namespace: str | None = None) -> bool:
        """Load the module named by ``envvar``; False when the variable is unset."""
        module_name = os.environ.get(envvar)
        if not module_name:
            return False
        self.update_from_object(module_name, namespace=namespace)
        logger.debug("settings.loaded %s=%s", envvar, module_name)
        return True

    def update_from_mapping(self, mapping: Mapping[str, Any], *, namespace: str | None = None) -> None:
        for key, value in _filter_by_namespace(mapping, namespace).items():
            self[key] = value

    def reset(self, keys: Iterable[str] | None = None) -> None:
        """Drop runtime overrides (all of them, or only ``keys``)."""
        overrides = self._storage.maps[0]
        if keys is None:
            overrides.clear()
            return
        for key in keys:
            overrides.pop(key, None)

    def as_dict(self) -> dict[str, Any]:
        return dict(self._storage)


def _filter_by_namespace(mapping: Mapping[str, Any], namespace: str | None) -> dict[str, Any]:
    if namespace is None:
        return {k: v for k, v in mapping.items() if k.isupper()}

    prefix = f"{namespace}_"
    return {key[len(prefix) :]: value for key, value in mapping.items() if key.startswith(prefix)}
