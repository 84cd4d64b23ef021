# recordkit/registry/__init__.py
from .base import BaseRegistry
from .exceptions import (
    RegistryError,
    RegistryDuplicateError,
    RegistryCollisionError,
    RegistryLookupError,
    RegistryFrozenError,
)
from .types import TypeRegistry

__all__ = (
    "BaseRegistry",
    "TypeRegistry",
    "RegistryError",
    "RegistryDuplicateError",
    "RegistryCollisionError",
    "RegistryLookupError",
    "RegistryFrozenError",
)
