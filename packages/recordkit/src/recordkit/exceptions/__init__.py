"""
Exception hierarchy for recordkit.

Decoration conditions (``AlreadyResolvedError`` and friends) are recoverable:
the record layer reports them through logging and returns a falsy result,
raising them only when ``RAISE_ON_ERROR`` is enabled. Registry errors are raised
directly by the registry layer.
"""
from .base import (
    RecordKitError,
    DecorationCondition,
    AlreadyResolvedError,
    UnknownAssociationError,
    InvalidTargetTypeError,
    MalformedAssociationError,
    UndefinedPropertyError,
)
from .registry_exceptions import (
    RegistryError,
    RegistryDuplicateError,
    RegistryCollisionError,
    RegistryLookupError,
    RegistryFrozenError,
)

__all__ = [
    # --- Core (./base.py) ---
    "RecordKitError",
    "DecorationCondition",
    "AlreadyResolvedError",
    "UnknownAssociationError",
    "InvalidTargetTypeError",
    "MalformedAssociationError",
    "UndefinedPropertyError",
    # --- Registry ---
    "RegistryError",
    "RegistryDuplicateError",
    "RegistryCollisionError",
    "RegistryLookupError",
    "RegistryFrozenError",
]
