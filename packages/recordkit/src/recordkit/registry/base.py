# recordkit/registry/base.py
import logging
from threading import RLock
from typing import Any, Callable, Generic, Iterator, TypeVar

from asgiref.sync import sync_to_async

from .exceptions import (
    RegistryCollisionError,
    RegistryDuplicateError,
    RegistryFrozenError,
    RegistryLookupError,
)

logger = logging.getLogger(__name__)

K = TypeVar("K")
T = TypeVar("T")


class BaseRegistry(Generic[K, T]):
    """Thread-safe registry mapping a coerced key K to an object of T."""

    def __init__(self, *, coerce_key: Callable[[Any], K]) -> None:
        self._coerce = coerce_key
        self._lock = RLock()
        self._store: dict[K, T] = {}
        self._frozen = False

    def _register(self, key: Any, obj: T) -> K:
        """Internal: store ``obj`` under ``key``; returns the coerced key."""
        k = self._coerce(key)

        with self._lock:
            if self._frozen:
                raise RegistryFrozenError("Registry is frozen")
            if k in self._store:
                if self._store[k] is obj:
                    raise RegistryDuplicateError(f"Already registered: {k}")
                raise RegistryCollisionError(
                    f"Key already registered to a different object: {k}"
                )
            self._store[k] = obj
        return k

    # --- registration ---

    def register(self, key: Any, obj: T, *, strict: bool = False) -> K:
        """
        Register ``obj`` under ``key``.

        Re-registering the same object is ignored (logged at DEBUG) unless
        ``strict`` is set, in which case ``RegistryDuplicateError`` propagates.
        A different object under an existing key always raises
        ``RegistryCollisionError``.

        :param key: Registration key; coerced with the registry's key function.
        :param obj: The object to store.
        :param strict: Raise on duplicate registration instead of ignoring it.
        :return: The coerced key.
        """
        try:
            return self._register(key, obj)
        except RegistryDuplicateError:
            if strict:
                raise
            logger.debug("Duplicate registration ignored: %s", key)
            return self._coerce(key)

    async def aregister(self, key: Any, obj: T, *, strict: bool = False) -> K:
        """Async wrapper around :meth:`register`."""
        return await sync_to_async(self.register)(key, obj, strict=strict)

    def unregister(self, key: Any) -> T | None:
        """Remove and return the object stored under ``key`` (None when absent)."""
        k = self._coerce(key)
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError("Registry is frozen")
            return self._store.pop(k, None)

    # --- retrieval ---

    def get(self, key: Any) -> T:
        """
        Retrieve the object registered under ``key``.

        :raises RegistryLookupError: If nothing is registered under ``key``.
        """
        k = self._coerce(key)
        with self._lock:
            try:
                return self._store[k]
            except KeyError as err:
                raise RegistryLookupError(
                    f"Nothing registered under {key!r}"
                ) from err

    async def aget(self, key: Any) -> T:
        """Async wrapper around :meth:`get`."""
        return await sync_to_async(self.get)(key)

    def try_get(self, key: Any) -> T | None:
        """Like :meth:`get`, but returns None instead of raising on a miss."""
        try:
            return self.get(key)
        except RegistryLookupError:
            return None

    async def atry_get(self, key: Any) -> T | None:
        """Async wrapper around :meth:`try_get`."""
        try:
            return await self.aget(key)
        except RegistryLookupError:
            return None

    # --- enumeration ---

    def count(self) -> int:
        with self._lock:
            return len(self._store)

    def keys(self) -> tuple[K, ...]:
        with self._lock:
            return tuple(self._store.keys())

    def all(self) -> dict[K, T]:
        """Return a shallow copy of the store."""
        with self._lock:
            return dict(self._store)

    def filter(self, pred: Callable[[T], bool]) -> tuple[T, ...]:
        """Return all registered objects matching predicate ``pred``."""
        with self._lock:
            return tuple(c for c in self._store.values() if pred(c))

    def __contains__(self, key: Any) -> bool:
        with self._lock:
            return self._coerce(key) in self._store

    def __iter__(self) -> Iterator[tuple[K, T]]:  # pragma: no cover - convenience
        return iter(self.all().items())

    def __len__(self) -> int:
        return self.count()

    # --- mutation / control ---

    @property
    def frozen(self) -> bool:
        return self._frozen

    def clear(self) -> None:
        """Clear the registry if not frozen."""
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError("Registry is frozen")
            self._store.clear()

    def freeze(self) -> None:
        """Mark the registry as frozen (no further mutations)."""
        with self._lock:
            self._frozen = True
