# recordkit/registry/exceptions.py
from recordkit.exceptions.registry_exceptions import (
    RegistryError,
    RegistryDuplicateError,
    RegistryCollisionError,
    RegistryLookupError,
    RegistryFrozenError,
)

__all__ = [
    "RegistryError",
    "RegistryDuplicateError",
    "RegistryCollisionError",
    "RegistryLookupError",
    "RegistryFrozenError",
]
