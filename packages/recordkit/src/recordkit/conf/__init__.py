from .defaults import DEFAULTS
from .settings import CONFIG_MODULE_ENVVAR, Settings

__all__ = ["DEFAULTS", "CONFIG_MODULE_ENVVAR", "Settings"]
