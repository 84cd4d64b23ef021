# recordkit/records/base.py
"""
The record wrapper.

A :class:`RecordDecorator` overlays one raw record (or a homogeneous list of
records) with:

- uniform read access: ``record.get("name")`` / ``record.name`` look at a
  computed accessor (property or zero-argument method), then the raw attributes, then the associations (resolved
  lazily), then the app helpers;
- lazy association resolution (see :mod:`recordkit.records.resolver`);
- selective projection back to plain data (see
  :mod:`recordkit.records.projection`).

Raw input shapes
----------------
::

    {"Item": {"id": 1, "name": "Widget"}, "Category": {"id": 9}}   # model-keyed
    {"id": 1, "name": "Widget"}                                    # flat
    [{"Item": {"id": 1}}, {"Item": {"id": 2}}]                     # collection

Subclasses customize behavior through class attributes::

    @record_decorator
    class ItemDecorator(RecordDecorator):
        decorate = ("Category",)
        serializable_attributes = ["id", "label"]

        @property
        def label(self):
            return self.get_attribute("name", "").upper()
"""
from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from functools import cached_property
from types import MappingProxyType
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from recordkit._state import get_current_app
from recordkit.exceptions import UndefinedPropertyError
from recordkit.utils import UNDEFINED

from .attributes import AttributeStoreMixin
from .diagnostics import report
from .naming import infer_model_name, is_indexed, strip_suffix
from .projection import ProjectionMixin
from .resolver import AssociationResolverMixin

logger = logging.getLogger(__name__)

__all__ = ["RecordDecorator"]


def _takes_no_arguments(func: Any) -> bool:
    """True when ``func`` can be called with ``self`` alone."""
    try:
        params = list(inspect.signature(func).parameters.values())[1:]
    except (TypeError, ValueError):
        return False
    return all(
        p.default is not p.empty or p.kind in (p.VAR_POSITIONAL, p.VAR_KEYWORD) for p in params
    )


class RecordDecorator(AttributeStoreMixin, AssociationResolverMixin, ProjectionMixin):
    """Generic record wrapper; also the fallback for unregistered types."""

    #: logical model name for every instance of this class (overrides the class name)
    default_model_name: str | None = None
    #: associations resolved at ingestion time
    decorate: tuple[str, ...] = ()

    _computed_properties: frozenset[str] = frozenset()
    _computed_methods: frozenset[str] = frozenset()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        properties: set[str] = set()
        methods: set[str] = set()
        seen: set[str] = set()
        inherited = set(dir(RecordDecorator))
        for klass in cls.__mro__:
            if klass in RecordDecorator.__mro__:
                continue
            for name, value in vars(klass).items():
                if name.startswith("_") or name in seen:
                    continue
                seen.add(name)
                if isinstance(value, (property, cached_property)):
                    properties.add(name)
                elif name not in inherited and inspect.isfunction(value) and _takes_no_arguments(value):
                    methods.add(name)
        cls._computed_properties = frozenset(properties)
        cls._computed_methods = frozenset(methods)

    def __init__(self, data: Any = None, model_name: str | None = None, *, app: Any = None) -> None:
        self._app = app if app is not None else get_current_app()
        self._explicit_model_name = model_name
        self._model_name: str | None = None
        self._attributes: dict[Any, Any] = {}
        self._associations: dict[str, Any] = {}
        self._resolved: dict[str, Any] = {}
        self._is_collection = False
        self._children: RecordDecorator | None = None
        self._children_consumed = False
        self.set(data)

    # ------------------------------------------------------------------
    # Hooks used by the mixins
    # ------------------------------------------------------------------
    def _record_type(self) -> type:
        return RecordDecorator

    def _fallback_class(self) -> type:
        return RecordDecorator

    def _member_class(self) -> type:
        cls = self._app.decorator_class_for(self.model_name)
        if isinstance(cls, type) and issubclass(cls, RecordDecorator):
            return cls
        return type(self)

    def _wrap_member(self, entry: Any, member_class: type | None = None) -> RecordDecorator:
        if isinstance(entry, RecordDecorator):
            return entry
        cls = member_class or self._member_class()
        return cls(entry, self.model_name, app=self._app)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def app(self) -> Any:
        return self._app

    @property
    def conf(self) -> Any:
        return self._app.conf

    @property
    def model_name(self) -> str:
        if self._model_name is None:
            self._model_name = self._derive_model_name(None)
        return self._model_name

    @property
    def is_collection(self) -> bool:
        return self._is_collection

    @property
    def associations(self) -> Mapping[str, Any]:
        """Read-only view of the association table (raw or resolved values)."""
        return MappingProxyType(self._associations)

    @property
    def children(self) -> RecordDecorator | None:
        """Threaded child records, promoted from the ``children`` association on first access."""
        key = self.conf["CHILDREN_KEY"]
        if not self._children_consumed and isinstance(self._associations.get(key), (list, tuple)):
            self.decorate_association(key, report=False)
        return self._children

    def _derive_model_name(self, data: Any) -> str:
        if self._explicit_model_name:
            return self._explicit_model_name
        cls = type(self)
        if cls.default_model_name:
            return cls.default_model_name
        if cls is RecordDecorator and data is not None:
            inferred = infer_model_name(data)
            if inferred:
                return inferred
        return strip_suffix(cls.__name__, self.conf["DECORATOR_SUFFIX"])

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------
    def set(self, data: Any) -> None:
        """Ingest ``data``, replacing the current attributes and associations.

        ``None`` leaves the wrapper untouched. Raises :class:`TypeError` for input
        that is neither a mapping nor a sequence of records.
        """
        if data is None:
            return
        if self._model_name is None:
            self._model_name = self._derive_model_name(data)
        model_name = self._model_name

        self._resolved = {}
        self._associations = {}
        self._children = None
        self._children_consumed = False
        self._is_collection = False

        if isinstance(data, Mapping) and model_name in data:
            attributes = data[model_name]
            if attributes is not None and not isinstance(attributes, Mapping):
                raise TypeError(
                    f"{type(self).__name__}: record key {model_name!r} must hold a mapping, "
                    f"got {type(attributes).__name__}"
                )
            self._attributes = dict(attributes or {})
            self._associations = {key: value for key, value in data.items() if key != model_name}
        elif self._is_collection_input(data):
            self._is_collection = True
            items = data.items() if isinstance(data, Mapping) else enumerate(data)
            member_class = self._member_class()
            self._attributes = {index: self._wrap_member(entry, member_class) for index, entry in items}
        elif isinstance(data, Mapping):
            self._attributes = dict(data)
        else:
            raise TypeError(f"{type(self).__name__} cannot ingest {type(data).__name__}")

        if self._is_collection:
            return

        for name in self.decorate:
            if name not in self._associations and name in self._attributes:
                self._associations[name] = self._attributes.pop(name)
            if name in self._associations and not self.is_decorated(name):
                self.decorate_association(name, report=False)

        if self.conf["EAGER_ASSOCIATIONS"]:
            for name in list(self._associations):
                if name in self._associations and not self.is_decorated(name):
                    self.decorate_association(name, report=False)

    @staticmethod
    def _is_collection_input(data: Any) -> bool:
        if isinstance(data, Mapping) and not data:
            return False
        if not is_indexed(data):
            return False
        entries = data.values() if isinstance(data, Mapping) else data
        return all(isinstance(entry, (Mapping, RecordDecorator)) for entry in entries)

    # ------------------------------------------------------------------
    # Uniform access
    # ------------------------------------------------------------------
    def get(self, name: str) -> Any:
        """Value of ``name`` from the first tier that knows it, else ``UNDEFINED``."""
        if name in self._computed_properties:
            cls = type(self)
            return inspect.getattr_static(cls, name).__get__(self, cls)
        if name in self._computed_methods:
            return getattr(self, name)()

        if name in self._attributes:
            return self._attributes[name]

        children_key = self.conf["CHILDREN_KEY"]
        if name in self._associations or (name == children_key and self._children_consumed):
            return self._association_value(name)

        helpers = self._app.helpers
        if helpers.has(name):
            return helpers.get(name)

        report(
            UndefinedPropertyError(f"Undefined property {name} in {self.model_name}"),
            conf=self.conf,
            enabled=self.conf["REPORT_UNDEFINED"],
        )
        return UNDEFINED

    def has(self, name: str) -> bool:
        """True for computed accessors and for attributes holding a non-None value."""
        if name in self._computed_properties or name in self._computed_methods:
            return True
        return self._attributes.get(name) is not None

    def _association_value(self, name: str) -> Any:
        if (
            name in self._associations
            and name not in self._resolved
            and self.conf["LAZY_ASSOCIATIONS"]
            and not self.is_decorated(name)
        ):
            self.decorate_association(name, report=False)

        if name in self._resolved:
            return self._resolved[name]
        if name in self._associations:
            return self._associations[name]
        return self._children

    def __getattr__(self, name: str) -> Any:
        # only reached when normal lookup fails
        if name.startswith("_"):
            raise AttributeError(f"{type(self).__name__!s} has no attribute {name!r}")
        return self.get(name)

    def __repr__(self) -> str:
        cls_name = type(self).__name__
        if self._is_collection:
            return f"<{cls_name} {self.model_name}[{len(self._attributes)}]>"
        attrs = ", ".join(str(k) for k in self._attributes)
        assocs = ", ".join(self._associations)
        return f"<{cls_name} {self.model_name} attributes=[{attrs}] associations=[{assocs}]>"

    # ------------------------------------------------------------------
    # pydantic integration
    # ------------------------------------------------------------------
    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(lambda value: value.serialize()),
        )

    @classmethod
    def _validate(cls, value: Any) -> RecordDecorator:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except TypeError as exc:
            raise ValueError(str(exc)) from exc
