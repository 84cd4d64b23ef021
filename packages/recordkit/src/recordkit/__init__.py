"""
recordkit — record decorator overlay.

Wraps raw hierarchical records (primary attributes plus named associations)
in :class:`RecordDecorator` objects that offer:

- one uniform read path for attributes, computed properties, associations
  and shared helpers (`RecordDecorator.get`, attribute-style access)
- lazy promotion of associations into typed wrappers, driven by binding
  metadata (`recordkit.bindings`) and a name-keyed registry (`recordkit.registry`)
- selective, depth-bounded projection back to plain data (`RecordDecorator.serialize`)

Import Guidelines:
------------------
- Use `recordkit.RecordKit` to hold settings, registry, bindings and helpers.
- Use `recordkit.record_decorator` to register wrapper classes.
- Use `recordkit.exceptions` for the diagnostic condition classes.
"""

from importlib.metadata import PackageNotFoundError, version

from ._state import current_app, get_current_app, push_current_app
from .app import RecordKit
from .bindings import Binding, BindType, ModelBindingProvider, NullBindingProvider, StaticBindingProvider
from .decorators import record_decorator
from .records import RecordDecorator
from .utils import UNDEFINED, UNSET

try:
    __version__ = version("recordkit")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "RecordKit",
    "RecordDecorator",
    "record_decorator",
    "current_app",
    "get_current_app",
    "push_current_app",
    "Binding",
    "BindType",
    "NullBindingProvider",
    "StaticBindingProvider",
    "ModelBindingProvider",
    "UNDEFINED",
    "UNSET",
]
