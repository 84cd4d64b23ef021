"""Current-application tracking.

The active :class:`~recordkit.app.RecordKit` lives in a ``ContextVar`` so
nested :func:`push_current_app` blocks unwind predictably. When nothing has
been set, a process-wide default app is built on first use.
"""
from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from threading import Lock
from typing import TYPE_CHECKING, Generator

from .utils.proxy import Proxy

if TYPE_CHECKING:
    from .app import RecordKit

_current_app: ContextVar["RecordKit | None"] = ContextVar("recordkit_current_app", default=None)
_default_app: "RecordKit | None" = None
_default_lock = Lock()


def _build_default_app() -> "RecordKit":
    # deferred import: recordkit.app imports this module
    from .app import RecordKit

    return RecordKit("default")


def get_current_app() -> "RecordKit":
    """Return the active app, creating the default one if none is set."""
    app = _current_app.get()
    if app is None:
        global _default_app
        with _default_lock:
            if _default_app is None:
                _default_app = _build_default_app()
        app = _default_app
        set_current_app(app)
    return app


def set_current_app(app: "RecordKit") -> None:
    _current_app.set(app)


@contextmanager
def push_current_app(app: "RecordKit") -> Generator["RecordKit", None, None]:
    token = _current_app.set(app)
    try:
        yield app
    finally:
        _current_app.reset(token)


current_app = Proxy(get_current_app, name="current_app")

__all__ = ["current_app", "get_current_app", "push_current_app", "set_current_app"]
