# recordkit/records/resolver.py
"""
Association resolution.

Turns raw associated data into wrapper instances, one association at a time.

Resolution rules
----------------
- ``children`` (``CHILDREN_KEY``) holding a list is *threaded* data: the whole
  list becomes one generic collection wrapper exposed as ``record.children``
  and the association is removed. This is one-shot.
- An association that already holds wrappers is left alone (AlreadyResolved).
- A name that is not an association fails (UnknownAssociation).
- Otherwise the binding for ``(model_name, association)`` names the target type
  and cardinality. Without a binding the association name is the target type
  and the association is single-valued.
- ``<Target><DECORATOR_SUFFIX>`` is looked up in the app registry. A miss falls
  back to the generic wrapper; a hit that is not a wrapper class fails
  (InvalidTargetType).
- Multi-valued associations wrap each entry, but only when the raw value is
  positional (a list, or a mapping with only integer keys). A mapping with any
  string key is a single record and falls through to single-valued wrapping.

Failures are reported through :func:`~recordkit.records.diagnostics.report`
and turned into a ``False`` result; the raw data stays in place.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from recordkit.exceptions import (
    AlreadyResolvedError,
    DecorationCondition,
    InvalidTargetTypeError,
    MalformedAssociationError,
    UnknownAssociationError,
)
from recordkit.tracing import record_attributes, service_span_sync

from .diagnostics import report as report_condition
from .naming import infer_model_name, is_indexed

logger = logging.getLogger(__name__)


def _ingestible(value: Any, record_type: type) -> bool:
    """Whether a wrapper can be built over ``value``."""
    if value is None or isinstance(value, (Mapping, record_type)):
        return True
    if isinstance(value, (list, tuple)):
        return all(isinstance(entry, (Mapping, record_type)) for entry in value)
    return False


class AssociationResolverMixin:
    """Lazy promotion of raw associations into wrappers."""

    _associations: dict[str, Any]
    _resolved: dict[str, Any]
    _children: Any
    _children_consumed: bool

    # ---------------- hooks (provided by RecordDecorator) ----------------
    def _record_type(self) -> type:  # pragma: no cover
        raise NotImplementedError

    def _fallback_class(self) -> type:  # pragma: no cover
        raise NotImplementedError

    # ---------------- inspection ----------------
    def is_decorated(self, name: str) -> bool:
        """True when association ``name`` has been resolved or currently holds wrapper(s)."""
        return name in self._resolved or self._holds_wrappers(self._associations.get(name))

    def _holds_wrappers(self, value: Any) -> bool:
        record_type = self._record_type()
        if isinstance(value, record_type):
            return True
        if isinstance(value, (list, tuple)) and value:
            return isinstance(value[0], record_type)
        if isinstance(value, Mapping) and value and is_indexed(value):
            return isinstance(next(iter(value.values())), record_type)
        return False

    # ---------------- public API ----------------
    def set_association(self, name: str, data: Any, resolve: bool = False) -> None:
        """Assign association ``name``.

        A wrapper (or a list of wrappers) is stored as already resolved. Raw data
        replaces any previous value and is resolved immediately when ``resolve``
        is set (with reporting enabled).
        """
        self._associations[name] = data
        if self._holds_wrappers(data):
            self._resolved[name] = data if isinstance(data, self._record_type()) else list(
                data.values() if isinstance(data, Mapping) else data
            )
            return

        self._resolved.pop(name, None)
        if resolve:
            self.decorate_association(name)

    def decorate_association(self, name: str, report: bool = True) -> bool:
        """Resolve association ``name`` into wrapper(s); False when it could not be resolved."""
        attrs = record_attributes(self, association=name)
        with service_span_sync("recordkit.decorate_association", attributes=attrs) as span:
            ok = self._decorate_association(name, report=report)
            span.set_attribute("recordkit.decorated", ok)
        return ok

    # ---------------- internals ----------------
    def _report(self, condition: DecorationCondition, enabled: bool) -> None:
        report_condition(condition, conf=self.conf, enabled=enabled)

    def _decorate_association(self, name: str, *, report: bool) -> bool:
        conf = self.conf
        model_name = self.model_name

        if name == conf["CHILDREN_KEY"]:
            if self._children_consumed and name not in self._associations:
                self._report(AlreadyResolvedError(f"Association {name} already decorated"), report)
                return False
            if isinstance(self._associations.get(name), (list, tuple)):
                self._promote_children(name)
                return True

        value = self._associations.get(name)
        if name in self._associations and self.is_decorated(name):
            self._report(AlreadyResolvedError(f"Association {name} already decorated"), report)
            return False

        if name not in self._associations:
            self._report(UnknownAssociationError(f"Association {name} does not exist in {model_name}"), report)
            return False

        binding = self._app.bindings_for(model_name).get(name)
        target = binding.target_for(name) if binding is not None else name
        multi = binding is not None and binding.is_multi(conf["MULTI_VALUED_BIND_TYPES"])

        decorator_class = self._app.decorator_class_for(target)
        if decorator_class is None:
            decorator_class = self._fallback_class()
        elif not (isinstance(decorator_class, type) and issubclass(decorator_class, self._record_type())):
            label = getattr(decorator_class, "__name__", repr(decorator_class))
            self._report(
                InvalidTargetTypeError(f"{label} is not a subclass of {self._record_type().__name__}"),
                report,
            )
            return False

        record_type = self._record_type()
        if multi and is_indexed(value):
            entries = value.values() if isinstance(value, Mapping) else value
            if not all(_ingestible(entry, record_type) for entry in entries):
                self._report(
                    MalformedAssociationError(f"Association {name} of {model_name} holds non-record entries"),
                    report,
                )
                return False
            if isinstance(value, Mapping):
                wrapped: Any = {i: self._build(decorator_class, entry, target) for i, entry in value.items()}
                members = list(wrapped.values())
            else:
                wrapped = [self._build(decorator_class, entry, target) for entry in value]
                members = list(wrapped)
            self._associations[name] = wrapped
            self._resolved[name] = members
            logger.debug(
                "association.decorated %s.%s -> %d x %s", model_name, name, len(members), decorator_class.__name__
            )
            return True

        if not _ingestible(value, record_type):
            self._report(
                MalformedAssociationError(
                    f"Association {name} of {model_name} cannot be decorated ({type(value).__name__})"
                ),
                report,
            )
            return False

        wrapper = self._build(decorator_class, value, target)
        self._associations[name] = wrapper
        self._resolved[name] = wrapper
        logger.debug("association.decorated %s.%s -> %s", model_name, name, decorator_class.__name__)
        return True

    def _build(self, decorator_class: type, data: Any, model_name: str) -> Any:
        if isinstance(data, self._record_type()):
            return data
        return decorator_class(data, model_name, app=self._app)

    def _promote_children(self, name: str) -> None:
        raw = self._associations.pop(name)
        self._children_consumed = True
        if not raw:
            return
        model_name = infer_model_name(raw)
        if model_name is None:
            model_name = self.model_name
            logger.debug("children.model_name.fallback %s", model_name)
        self._children = self._fallback_class()(raw, model_name, app=self._app)
