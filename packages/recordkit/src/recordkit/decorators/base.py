# recordkit/decorators/base.py
"""
Registration decorator for wrapper classes.

Usage
-----
    @record_decorator
    class ItemDecorator(RecordDecorator): ...

    @record_decorator(name="CategoryDecorator", decorate=("Parent",))
    class CategoryWrapper(RecordDecorator): ...

    @app.decorator
    class TagDecorator(RecordDecorator): ...

Key behaviors
-------------
- The class is registered into the registry of the bound app, or of the
  current app at decoration time.
- The registry key is the explicit ``name`` or the class name; the record
  layer looks wrappers up as ``<ModelName><DECORATOR_SUFFIX>``.
- Keyword extras set the matching class attribute (``default_model_name``,
  ``decorate``, ``serializable_attributes``, ``serializable_associations``);
  unknown extras raise ``TypeError``.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional, TypeVar, cast

from recordkit._state import get_current_app
from recordkit.records import RecordDecorator
from recordkit.tracing import service_span_sync, span_attributes

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)

BINDABLE_EXTRAS = frozenset(
    {"default_model_name", "decorate", "serializable_attributes", "serializable_associations"}
)


class BaseDecorator:
    """Class-based decorator implementing the dual-form decorator pattern.

    Subclasses may override:
      • ``get_registry(self, app) -> TypeRegistry``
      • ``bind_extras(self, cls, extras) -> None``
    """

    log_category = "decorator"

    def __init__(self, *, app: Any = None) -> None:
        self.app = app

    # ---------------- public API: dual-form decorator ----------------
    def __call__(
        self,
        _cls: Optional[T] = None,
        *,
        name: Optional[str] = None,
        app: Any = None,
        **extras: Any,
    ) -> T | Callable[[T], T]:
        """Support both forms:

            @decorator
            class Foo: ...

            @decorator(name="FooDecorator", decorate=("Bar",))
            class Foo: ...
        """
        unknown = set(extras) - BINDABLE_EXTRAS
        if unknown:
            raise TypeError(f"unexpected decorator options: {', '.join(sorted(unknown))}")

        def _apply(cls: T) -> T:
            if not (isinstance(cls, type) and issubclass(cls, RecordDecorator)):
                raise TypeError(f"{cls!r} is not a RecordDecorator subclass")

            target_app = app or self.app or get_current_app()
            self.bind_extras(cls, extras)
            key = self.get_registry(target_app).add(cls, name=name)

            span_attrs = span_attributes(
                decorator=self.__class__.__name__,
                qualname=f"{cls.__module__}.{cls.__qualname__}",
                registry_key=key,
                app=target_app.name,
            )
            with service_span_sync(f"recordkit.decorator.apply ({cls.__name__})", attributes=span_attrs):
                logger.info("[%s] ✅ registered `%s`", str(self.log_category).upper(), key)

            return cls

        if _cls is not None:
            return _apply(cast(T, _cls))
        return _apply

    # ---------------- hooks / extension points ----------------
    def get_registry(self, app: Any):
        return app.registry

    def bind_extras(self, cls: type, extras: dict[str, Any]) -> None:
        for attr, value in extras.items():
            if attr == "decorate" and isinstance(value, str):
                value = (value,)
            setattr(cls, attr, value)


record_decorator = BaseDecorator()

__all__ = ["BaseDecorator", "record_decorator", "BINDABLE_EXTRAS"]
