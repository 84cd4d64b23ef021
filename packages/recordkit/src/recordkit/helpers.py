# recordkit/helpers.py
"""Shared convenience helpers reachable from every wrapper.

A helper is registered under a reserved property name together with a
zero-argument factory. The factory runs at most once per :class:`HelperSet`;
the built object is then shared by every wrapper of the owning app for the
life of the process.
"""
from __future__ import annotations

import logging
from threading import Lock, RLock
from typing import Any, Callable

logger = logging.getLogger(__name__)

__all__ = ["LazyHelper", "HelperSet"]

_UNBUILT = object()


class LazyHelper:
    """Build-once holder for a helper object."""

    __slots__ = ("name", "_factory", "_instance", "_lock")

    def __init__(self, name: str, factory: Callable[[], Any]) -> None:
        self.name = name
        self._factory = factory
        self._instance: Any = _UNBUILT
        self._lock = Lock()

    @property
    def built(self) -> bool:
        return self._instance is not _UNBUILT

    def get(self) -> Any:
        if self._instance is _UNBUILT:
            with self._lock:
                if self._instance is _UNBUILT:
                    self._instance = self._factory()
                    logger.debug("helper.built %s -> %s", self.name, type(self._instance).__name__)
        return self._instance


class HelperSet:
    """Reserved property name -> :class:`LazyHelper`."""

    def __init__(self) -> None:
        self._helpers: dict[str, LazyHelper] = {}
        self._lock = RLock()

    def register(self, name: str, factory: Callable[[], Any], *, replace: bool = False) -> LazyHelper:
        with self._lock:
            existing = self._helpers.get(name)
            if existing is not None and not replace:
                logger.debug("helper.register.ignored %s (already registered)", name)
                return existing
            helper = LazyHelper(name, factory)
            self._helpers[name] = helper
            return helper

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._helpers

    def get(self, name: str) -> Any:
        """Return the shared helper for ``name``; None when no helper is registered."""
        with self._lock:
            helper = self._helpers.get(name)
        if helper is None:
            return None
        return helper.get()

    def names(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._helpers)

    def clear(self) -> None:
        with self._lock:
            self._helpers.clear()
