# recordkit/exceptions/registry_exceptions.py
"""Registry exceptions"""
from .base import RecordKitError


# ----------------------------------------------------------------------------
# Registry errors
# ----------------------------------------------------------------------------
class RegistryError(RecordKitError): ...


class RegistryDuplicateError(RegistryError): ...


class RegistryCollisionError(RegistryError): ...


class RegistryLookupError(RegistryError, LookupError): ...


class RegistryFrozenError(RuntimeError, RegistryError): ...
