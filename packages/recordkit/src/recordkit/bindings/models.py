# recordkit/bindings/models.py
"""Relationship binding metadata.

A :class:`Binding` describes one association of a model: which logical type the
associated record(s) have and the relationship cardinality. Data layers often
use camelCase keys (``className``/``bindType``); both spellings are accepted.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["BindType", "Binding", "coerce_bindings"]


class BindType(str, Enum):
    HAS_ONE = "hasOne"
    BELONGS_TO = "belongsTo"
    HAS_MANY = "hasMany"
    HAS_AND_BELONGS_TO_MANY = "hasAndBelongsToMany"


class Binding(BaseModel):
    """Target type and cardinality for a single association."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    class_name: str | None = Field(default=None, alias="className")
    bind_type: BindType | str | None = Field(default=None, alias="bindType")

    def target_for(self, association: str) -> str:
        """Logical type of the associated record(s); the association name when unset."""
        return self.class_name or association

    def is_multi(self, multi_valued: tuple[str, ...] | list[str]) -> bool:
        if self.bind_type is None:
            return False
        bind_type = self.bind_type.value if isinstance(self.bind_type, Enum) else self.bind_type
        return bind_type in tuple(multi_valued)


def coerce_bindings(raw: Mapping[str, Any] | None) -> dict[str, Binding]:
    """Validate a ``{association: Binding | mapping}`` table into Binding models."""
    if not raw:
        return {}
    return {name: Binding.model_validate(spec) for name, spec in raw.items()}
