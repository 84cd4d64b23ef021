import sys
import types

import pytest

from recordkit import RecordKit
from recordkit.conf import DEFAULTS, Settings
from recordkit.conf.settings import _filter_by_namespace


def test_filter_by_namespace():
    mapping = {"FOO": 1, "BAR": 2, "NS_X": 3, "NS_Y": 4, "lower": 5}
    assert _filter_by_namespace(mapping, None) == {"FOO": 1, "BAR": 2, "NS_X": 3, "NS_Y": 4}
    assert _filter_by_namespace(mapping, "NS") == {"X": 3, "Y": 4}


def test_defaults_are_visible_and_never_mutated():
    settings = Settings()

    assert settings["DECORATOR_SUFFIX"] == "Decorator"
    assert settings["MULTI_VALUED_BIND_TYPES"] == ("hasMany", "hasAndBelongsToMany")

    settings["DECORATOR_SUFFIX"] = "Wrapper"
    assert settings["DECORATOR_SUFFIX"] == "Wrapper"
    assert DEFAULTS["DECORATOR_SUFFIX"] == "Decorator"

    del settings["DECORATOR_SUFFIX"]
    assert settings["DECORATOR_SUFFIX"] == "Decorator"


def test_layers_sit_between_overrides_and_defaults():
    settings = Settings({"CHILDREN_KEY": "replies"})
    assert settings["CHILDREN_KEY"] == "replies"

    settings.update_from_mapping({"CHILDREN_KEY": "threads"})
    assert settings["CHILDREN_KEY"] == "threads"

    settings.reset()
    assert settings["CHILDREN_KEY"] == "replies"
    assert set(DEFAULTS) <= set(settings.as_dict())


def test_settings_update_from_object_and_envvar(monkeypatch):
    module = types.ModuleType("recordkit_temp_conf")
    module.RAISE_ON_ERROR = True
    module.RK_CHILDREN_KEY = "replies"
    module.ignored = "x"
    monkeypatch.setitem(sys.modules, "recordkit_temp_conf", module)

    settings = Settings()
    settings.update_from_object("recordkit_temp_conf")
    assert settings["RAISE_ON_ERROR"] is True
    assert "ignored" not in settings

    settings.update_from_object("recordkit_temp_conf", namespace="RK")
    assert settings["CHILDREN_KEY"] == "replies"

    env_module = types.ModuleType("recordkit_env_conf")
    env_module.SERIALIZE_MAX_DEPTH = 2
    monkeypatch.setitem(sys.modules, "recordkit_env_conf", env_module)
    monkeypatch.setenv("RECORDKIT_CONFIG_MODULE", "recordkit_env_conf")

    assert settings.update_from_envvar() is True
    assert settings["SERIALIZE_MAX_DEPTH"] == 2


def test_update_from_envvar_without_variable(monkeypatch):
    monkeypatch.delenv("RECORDKIT_CONFIG_MODULE", raising=False)

    assert Settings().update_from_envvar() is False


def test_app_reads_config_module_at_construction(monkeypatch):
    module = types.ModuleType("recordkit_app_conf")
    module.DECORATOR_SUFFIX = "View"
    monkeypatch.setitem(sys.modules, "recordkit_app_conf", module)
    monkeypatch.setenv("RECORDKIT_CONFIG_MODULE", "recordkit_app_conf")

    app = RecordKit("configured")

    assert app.conf["DECORATOR_SUFFIX"] == "View"


def test_app_configure_helpers():
    app = RecordKit("configured")

    assert app.configure({"EAGER_ASSOCIATIONS": True}) is app
    assert app.conf["EAGER_ASSOCIATIONS"] is True

    app.configure({"RK_REPORT_UNDEFINED": False}, namespace="RK")
    assert app.conf["REPORT_UNDEFINED"] is False


def test_app_config_from_object(monkeypatch):
    module = types.ModuleType("recordkit_obj_conf")
    module.LAZY_ASSOCIATIONS = False
    monkeypatch.setitem(sys.modules, "recordkit_obj_conf", module)

    app = RecordKit("configured").config_from_object("recordkit_obj_conf")

    assert app.conf["LAZY_ASSOCIATIONS"] is False


def test_custom_suffix_changes_lookup():
    from recordkit import RecordDecorator

    app = RecordKit("views")
    app.configure({"DECORATOR_SUFFIX": "View"})

    class CategoryView(RecordDecorator):
        pass

    app.register_decorator(CategoryView)

    assert app.decorator_class_for("Category") is CategoryView
    assert CategoryView({"id": 1}, app=app).model_name == "Category"


@pytest.mark.parametrize(
    "key, value, expected",
    [
        ("DISCOVERY_PATHS", "shop.wrappers, blog.wrappers ,", ("shop.wrappers", "blog.wrappers")),
        ("DISCOVERY_PATHS", ["shop.wrappers"], ("shop.wrappers",)),
        ("MULTI_VALUED_BIND_TYPES", "hasMany", ("hasMany",)),
        ("MULTI_VALUED_BIND_TYPES", None, ()),
        ("SERIALIZE_MAX_DEPTH", "2", 2),
        ("SERIALIZE_MAX_DEPTH", None, None),
        ("DECORATOR_SUFFIX", " View ", "View"),
        ("HELPERS", None, {}),
        ("SOMETHING_ELSE", [1], [1]),
    ],
)
def test_known_keys_are_normalized(key, value, expected):
    settings = Settings()
    settings[key] = value

    assert settings[key] == expected


@pytest.mark.parametrize("key, value", [("SERIALIZE_MAX_DEPTH", -1), ("DECORATOR_SUFFIX", "  ")])
def test_invalid_values_are_rejected(key, value):
    with pytest.raises(ValueError):
        Settings()[key] = value


def test_construction_layers_are_normalized():
    assert Settings({"DISCOVERY_PATHS": "a,b"})["DISCOVERY_PATHS"] == ("a", "b")


def test_reset_selected_keys():
    settings = Settings()
    settings.update_from_mapping({"RAISE_ON_ERROR": True, "EAGER_ASSOCIATIONS": True})

    settings.reset(["RAISE_ON_ERROR"])

    assert settings["RAISE_ON_ERROR"] is False
    assert settings["EAGER_ASSOCIATIONS"] is True
