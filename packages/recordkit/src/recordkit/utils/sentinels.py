# recordkit/utils/sentinels.py
"""Module-level sentinels.

``UNSET`` marks an argument that was not passed at all (so ``None``/``False``
remain meaningful values). ``UNDEFINED`` is what uniform property access
returns for a name that resolves nowhere; it is falsy and compares equal only
to itself.
"""
from __future__ import annotations

__all__ = ["UNSET", "UNDEFINED"]


class _Sentinel:
    __slots__ = ("_name",)

    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return self._name

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return self._name

    def __copy__(self) -> "_Sentinel":
        return self

    def __deepcopy__(self, memo: dict) -> "_Sentinel":
        return self


UNSET = _Sentinel("UNSET")
UNDEFINED = _Sentinel("UNDEFINED")
