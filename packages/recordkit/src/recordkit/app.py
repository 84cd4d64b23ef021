# recordkit/app.py
"""The recordkit application object.

A :class:`RecordKit` bundles everything a wrapper consults at runtime:

- ``conf``      -> layered :class:`~recordkit.conf.Settings`
- ``registry``  -> wrapper classes by name (``"CategoryDecorator"``)
- ``bindings``  -> binding metadata provider (association cardinality/target)
- ``helpers``   -> lazily built shared helper objects

Wrappers receive their app at construction (``app=``) or pick up the current
one; nested wrappers always inherit their parent's app.
"""
from __future__ import annotations

import importlib
import importlib.util
import logging
from collections.abc import Iterable, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from threading import RLock
from typing import Any, Callable, Generator

from ._state import push_current_app, set_current_app
from .bindings import Binding, BindingProvider, NullBindingProvider
from .conf.settings import CONFIG_MODULE_ENVVAR, Settings
from .helpers import HelperSet
from .registry import TypeRegistry

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _import_string(path: str):
    module_name, sep, attr = path.partition(":")
    if not sep:
        module_name, _, attr = path.rpartition(".")
    module = importlib.import_module(module_name)
    return getattr(module, attr) if attr else module


def _safe_import(module_path: str) -> bool:
    """Import ``module_path`` if it exists.

    Returns False when the module (or its parent package) cannot be found.
    Errors raised while executing an existing module propagate.
    """
    try:
        spec = importlib.util.find_spec(module_path)
    except ModuleNotFoundError:
        return False
    if spec is None:
        return False
    importlib.import_module(module_path)
    return True


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

@dataclass
class RecordKit:
    name: str = "recordkit"
    conf: Settings = field(default_factory=Settings)
    registry: TypeRegistry = field(default_factory=TypeRegistry)
    bindings: BindingProvider = field(default_factory=NullBindingProvider)
    helpers: HelperSet = field(default_factory=HelperSet)

    _autodiscovered: bool = False
    _discovery_lock: RLock = field(default_factory=RLock, init=False, repr=False)

    def __post_init__(self) -> None:
        self.conf.update_from_envvar()
        self._load_helpers_from_settings()

    # ------------------------------------------------------------------
    # Current app helpers
    # ------------------------------------------------------------------
    def set_as_current(self) -> RecordKit:
        set_current_app(self)
        return self

    @contextmanager
    def as_current(self) -> Generator[RecordKit, None, None]:
        with push_current_app(self):
            yield self

    # ------------------------------------------------------------------
    # Configuration helpers
    # ------------------------------------------------------------------
    def configure(self, mapping: Mapping[str, Any] | None = None, *, namespace: str | None = None) -> RecordKit:
        if mapping:
            self.conf.update_from_mapping(mapping, namespace=namespace)
        self._load_helpers_from_settings()
        return self

    def config_from_object(self, obj: str, *, namespace: str | None = None) -> RecordKit:
        self.conf.update_from_object(obj, namespace=namespace)
        self._load_helpers_from_settings()
        return self

    def config_from_envvar(self, envvar: str = CONFIG_MODULE_ENVVAR, *, namespace: str | None = None) -> RecordKit:
        if self.conf.update_from_envvar(envvar, namespace=namespace):
            self._load_helpers_from_settings()
        return self

    def _load_helpers_from_settings(self) -> None:
        for helper_name, path in (self.conf.get("HELPERS") or {}).items():
            if self.helpers.has(helper_name):
                continue
            factory = _import_string(path) if isinstance(path, str) else path
            self.helpers.register(helper_name, factory)
            logger.debug("helper.configured %s -> %s", helper_name, path)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    @property
    def decorator(self):
        """Registration decorator bound to this app (``@app.decorator``)."""
        from .decorators.base import BaseDecorator

        return BaseDecorator(app=self)

    def register_decorator(self, cls: type, *, name: str | None = None) -> type:
        self.registry.add(cls, name=name)
        return cls

    def register_helper(self, name: str, factory: Callable[[], Any], *, replace: bool = False) -> None:
        self.helpers.register(name, factory, replace=replace)

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------
    def autodiscover(self, modules: Iterable[str] | None = None) -> list[str]:
        """Import discovery modules so their ``@record_decorator`` classes register.

        Defaults to ``DISCOVERY_PATHS``. Missing modules are skipped.
        """
        with self._discovery_lock:
            if modules is None:
                # set first: discovered modules may build wrappers that miss again
                self._autodiscovered = True
                modules = self.conf.get("DISCOVERY_PATHS", ())
            imported: list[str] = []
            with self.as_current():
                for path in modules:
                    if _safe_import(path):
                        imported.append(path)
                        logger.debug("autodiscover.imported %s", path)
                    else:
                        logger.debug("autodiscover.missing %s", path)
            return imported

    # ------------------------------------------------------------------
    # Lookups used by wrappers
    # ------------------------------------------------------------------
    def decorator_class_for(self, type_name: str) -> type | None:
        """Registered wrapper class for logical type ``type_name``, or None."""
        key = f"{type_name}{self.conf['DECORATOR_SUFFIX']}"
        cls = self.registry.try_get(key)
        if cls is None and self.conf["AUTODISCOVER_ON_MISS"] and not self._autodiscovered:
            self.autodiscover()
            cls = self.registry.try_get(key)
        return cls

    def bindings_for(self, model_name: str) -> Mapping[str, Binding]:
        return self.bindings.bindings_for(model_name) or {}

    # ------------------------------------------------------------------
    # Convenience
    # ------------------------------------------------------------------
    def decorate(self, data: Any, model_name: str | None = None):
        """Wrap ``data`` with the registered class for ``model_name`` (or the generic wrapper)."""
        from .records import RecordDecorator

        cls = self.decorator_class_for(model_name) if model_name else None
        if not (isinstance(cls, type) and issubclass(cls, RecordDecorator)):
            cls = RecordDecorator
        return cls(data, model_name, app=self)


__all__ = ["RecordKit"]
