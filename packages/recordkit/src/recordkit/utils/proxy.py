# recordkit/utils/proxy.py
from __future__ import annotations

from typing import Any, Callable


class Proxy:
    """Stand-in for an object that is looked up again on every use.

    ``recordkit.current_app`` is ``Proxy(get_current_app, name="current_app")``:
    attribute reads go to whichever app is current at that moment, so a module
    can import ``current_app`` once and still follow ``push_current_app``.
    """

    __slots__ = ("_lookup", "_name")

    def __init__(self, lookup: Callable[[], Any], *, name: str | None = None) -> None:
        object.__setattr__(self, "_lookup", lookup)
        object.__setattr__(self, "_name", name or getattr(lookup, "__name__", "proxy"))

    def _get_current(self) -> Any:
        return self._lookup()

    def __getattr__(self, name: str) -> Any:
        return getattr(self._get_current(), name)

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(self._get_current(), name, value)

    def __dir__(self) -> list[str]:
        return dir(self._get_current())

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Proxy {self._name}: {self._get_current()!r}>"
