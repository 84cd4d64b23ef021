"""Default configuration values for recordkit."""

DEFAULTS: dict[str, object] = {
    # Wrapper type naming: "<ModelName><DECORATOR_SUFFIX>" is looked up in the registry
    "DECORATOR_SUFFIX": "Decorator",
    # Association holding threaded (tree-shaped) results
    "CHILDREN_KEY": "children",
    # Binding types treated as multi-valued; anything else wraps a single record
    "MULTI_VALUED_BIND_TYPES": ("hasMany", "hasAndBelongsToMany"),
    # Resolution strategy
    "EAGER_ASSOCIATIONS": False,
    "LAZY_ASSOCIATIONS": True,
    # Registry discovery
    "AUTODISCOVER_ON_MISS": True,
    "DISCOVERY_PATHS": (),
    # Reserved property name -> "module:factory" import string
    "HELPERS": {},
    # Diagnostics
    "RAISE_ON_ERROR": False,
    "REPORT_UNDEFINED": True,
    # Projection
    "SERIALIZE_MAX_DEPTH": None,
}
