from .models import BindType, Binding, coerce_bindings
from .providers import (
    BindingProvider,
    NullBindingProvider,
    StaticBindingProvider,
    ModelBindingProvider,
)

__all__ = [
    "BindType",
    "Binding",
    "coerce_bindings",
    "BindingProvider",
    "NullBindingProvider",
    "StaticBindingProvider",
    "ModelBindingProvider",
]
