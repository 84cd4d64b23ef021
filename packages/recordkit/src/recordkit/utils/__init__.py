from .sentinels import UNDEFINED, UNSET

__all__ = ["UNDEFINED", "UNSET"]
