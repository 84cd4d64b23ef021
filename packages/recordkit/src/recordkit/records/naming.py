# recordkit/records/naming.py
"""Logical model name helpers.

Raw records arrive either keyed by their model name::

    {"Item": {"id": 1}, "Category": {...}}

or as lists of such records. When no model name is known up front, the name is
*inferred* from that shape. Inference is best-effort: empty input, flat records
and lists whose entries disagree yield ``None`` so callers fall back to a name
derived from the wrapper class.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

logger = logging.getLogger(__name__)

__all__ = ["strip_suffix", "model_key", "infer_model_name", "is_indexed"]


def strip_suffix(class_name: str, suffix: str) -> str:
    """``"ItemDecorator"`` -> ``"Item"``; names without the suffix are returned unchanged."""
    if suffix and class_name.endswith(suffix) and len(class_name) > len(suffix):
        return class_name[: -len(suffix)]
    return class_name


def is_indexed(value: Any) -> bool:
    """True for lists/tuples and for mappings whose keys are all integers."""
    if isinstance(value, (list, tuple)):
        return True
    if isinstance(value, Mapping):
        return all(isinstance(k, int) and not isinstance(k, bool) for k in value)
    return False


def _entries(value: Any) -> list[Any]:
    if isinstance(value, Mapping):
        return list(value.values())
    return list(value)


def model_key(record: Any) -> str | None:
    """Model name of a single model-keyed record, or None for any other shape.

    A record is model-keyed when its first key is a capitalized name (``Item``,
    ``BlogPost``) holding a mapping and every top-level value is a mapping, a
    list or None (associations never hold scalars at the top level). A flat
    record whose first field happens to hold a mapping (``{"meta": {...}}``) is
    flagged and read as flat.
    """
    if not isinstance(record, Mapping) or not record:
        return None
    first_key, first_value = next(iter(record.items()))
    if not isinstance(first_key, str) or not isinstance(first_value, Mapping):
        return None
    if not first_key[:1].isupper():
        logger.warning("model_name.infer.nested_field key=%s; reading the record as flat", first_key)
        return None
    for value in record.values():
        if value is not None and not isinstance(value, (Mapping, list, tuple)):
            return None
    return first_key


def infer_model_name(data: Any) -> str | None:
    """Read the model name off the first nested record of ``data``."""
    if isinstance(data, Mapping) and not is_indexed(data):
        return model_key(data)

    if not isinstance(data, (Sequence, Mapping)) or isinstance(data, (str, bytes)):
        return None

    entries = _entries(data)
    if not entries:
        logger.debug("model_name.infer.empty")
        return None

    names = {model_key(entry) for entry in entries}
    if len(names) != 1:
        logger.warning("model_name.infer.ambiguous candidates=%s", sorted(str(n) for n in names))
        return None

    name = names.pop()
    if name is None:
        logger.debug("model_name.infer.flat_entries")
    return name
