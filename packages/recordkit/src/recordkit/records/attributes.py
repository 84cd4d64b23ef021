# recordkit/records/attributes.py
"""Dict- and list-style access to the primary attributes of a record wrapper."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterator


class AttributeStoreMixin:
    """Index-style access to a record's primary attributes.

    Single records behave like a dict of field name -> value. Collection
    wrappers behave like a list of member wrappers keyed by position: iteration
    yields the members, and raw mappings written into a collection are wrapped
    on the way in. Anything else written into a collection raises ``TypeError``.
    """

    _attributes: dict[Any, Any]
    _is_collection: bool

    def _wrap_member(self, entry: Any) -> Any:  # pragma: no cover - provided by RecordDecorator
        raise NotImplementedError

    def _record_type(self) -> type:  # pragma: no cover - provided by RecordDecorator
        raise NotImplementedError

    # --- counting ---

    def count(self) -> int:
        """Member count for collections; otherwise 1 for a populated record, 0 for an empty one."""
        if self._is_collection:
            return len(self._attributes)
        return 1 if self._attributes else 0

    def __len__(self) -> int:
        return len(self._attributes)

    def __bool__(self) -> bool:
        return bool(self._attributes)

    # --- iteration ---

    def __iter__(self) -> Iterator[Any]:
        if self._is_collection:
            return iter(list(self._attributes.values()))
        return iter(list(self._attributes))

    # --- index access ---

    def __getitem__(self, key: Any) -> Any:
        return self._attributes[key]

    def __setitem__(self, key: Any, value: Any) -> None:
        if self._is_collection:
            if not isinstance(value, (Mapping, self._record_type())):
                raise TypeError(
                    f"{type(self).__name__} collection members must be records, got {type(value).__name__}"
                )
            value = self._wrap_member(value)
        self._attributes[key] = value

    def __delitem__(self, key: Any) -> None:
        del self._attributes[key]

    def __contains__(self, key: Any) -> bool:
        # a key holding None counts as absent
        return self._attributes.get(key) is not None

    def append(self, value: Any) -> Any:
        """Store ``value`` under the next integer index and return that index."""
        indexes = [k for k in self._attributes if isinstance(k, int) and not isinstance(k, bool)]
        index = max(indexes) + 1 if indexes else 0
        self[index] = value
        return index

    # --- named access ---

    def get_attribute(self, name: Any, default: Any = None) -> Any:
        """Raw attribute value; ``default`` when the key is absent (a stored None is returned as-is)."""
        if name in self._attributes:
            return self._attributes[name]
        return default

    def get_attributes(self) -> dict[Any, Any]:
        """Shallow copy of the attribute table."""
        return dict(self._attributes)
