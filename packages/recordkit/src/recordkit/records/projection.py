# recordkit/records/projection.py
"""Projection of a record wrapper back to plain dicts and lists."""
from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Iterable

from recordkit.utils import UNSET


class ProjectionMixin:
    """Reduce a wrapper tree back to plain dicts and lists.

    Selectors
    ---------
    ``attributes`` / ``associations`` accept:

    - ``False``: omit entirely
    - ``None`` or ``True``: include everything
    - an iterable of names: include only those names (an empty list includes nothing)

    Explicit arguments win over the instance's ``serializable_attributes`` /
    ``serializable_associations`` defaults. Attribute names may also name
    computed properties, which are evaluated on the fly.
    """

    serializable_attributes: Any = None
    serializable_associations: Any = None

    _attributes: dict[Any, Any]
    _associations: dict[str, Any]
    _is_collection: bool
    _children: Any
    _children_consumed: bool
    _computed_properties: frozenset[str]
    _computed_methods: frozenset[str]

    def _record_type(self) -> type:  # pragma: no cover
        raise NotImplementedError

    def serialize(self, attributes: Any = UNSET, associations: Any = UNSET, *, max_depth: Any = UNSET) -> Any:
        """Project this wrapper into plain data.

        Collections project to a list with the same selectors applied to each
        member. ``max_depth`` bounds how many association levels are followed
        (``0`` drops associations entirely); it defaults to ``SERIALIZE_MAX_DEPTH``.
        """
        if max_depth is UNSET:
            max_depth = self.conf["SERIALIZE_MAX_DEPTH"]

        if self._is_collection:
            return [
                member.serialize(attributes, associations, max_depth=max_depth)
                if isinstance(member, self._record_type())
                else self._to_plain(member, max_depth)
                for member in self._attributes.values()
            ]

        if attributes is UNSET:
            attributes = self.serializable_attributes
        if associations is UNSET:
            associations = self.serializable_associations

        out: dict[Any, Any] = {}
        out.update(self._project_attributes(attributes, max_depth))
        if max_depth is None or max_depth > 0:
            nested = None if max_depth is None else max_depth - 1
            out.update(self._project_associations(associations, nested))
        return out

    def to_json(self, attributes: Any = UNSET, associations: Any = UNSET, **kwargs: Any) -> str:
        """``json.dumps`` of :meth:`serialize`; extra keyword arguments go to ``json.dumps``."""
        max_depth = kwargs.pop("max_depth", UNSET)
        return json.dumps(self.serialize(attributes, associations, max_depth=max_depth), **kwargs)

    # --- selectors ---

    def _project_attributes(self, selector: Any, depth: Any) -> dict[Any, Any]:
        if selector is False:
            return {}
        if selector is None or selector is True:
            return {key: self._to_plain(value, depth) for key, value in self._attributes.items()}

        out: dict[Any, Any] = {}
        for name in _names(selector):
            if name in self._computed_properties or name in self._computed_methods:
                out[name] = self._to_plain(self.get(name), depth)
            elif self._attributes.get(name) is not None:
                out[name] = self._to_plain(self._attributes[name], depth)
        return out

    def _project_associations(self, selector: Any, depth: Any) -> dict[str, Any]:
        if selector is False:
            return {}

        children_key = self.conf["CHILDREN_KEY"]
        table: dict[str, Any] = dict(self._associations)
        if self._children_consumed and self._children is not None and children_key not in table:
            table[children_key] = self._children

        if selector is None or selector is True:
            names: Iterable[str] = table
        else:
            wanted = set(_names(selector))
            names = [name for name in table if name in wanted]

        return {name: self._to_plain(table[name], depth) for name in names}

    def _to_plain(self, value: Any, depth: Any) -> Any:
        if isinstance(value, self._record_type()):
            return value.serialize(max_depth=depth)
        if isinstance(value, Mapping):
            return {key: self._to_plain(item, depth) for key, item in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._to_plain(item, depth) for item in value]
        return value


def _names(selector: Any) -> list[Any]:
    if isinstance(selector, str):
        return [selector]
    return list(selector)
