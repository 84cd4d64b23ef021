import sys
import textwrap

import pytest

import recordkit
from recordkit import RecordDecorator, RecordKit, current_app, get_current_app, push_current_app


WRAPPERS_MODULE = textwrap.dedent(
    """
    from recordkit import RecordDecorator, record_decorator


    @record_decorator
    class GadgetDecorator(RecordDecorator):
        serializable_attributes = ["id"]
    """
)


@pytest.fixture
def wrappers_module(tmp_path, monkeypatch):
    name = "recordkit_discovered_wrappers"
    (tmp_path / f"{name}.py").write_text(WRAPPERS_MODULE)
    monkeypatch.syspath_prepend(str(tmp_path))
    yield name
    sys.modules.pop(name, None)


def test_current_app_tracks_the_pushed_app(app):
    assert get_current_app() is app
    assert current_app.name == "test"

    other = RecordKit("other")
    with push_current_app(other):
        assert get_current_app() is other
        assert RecordDecorator({"id": 1}).app is other
    assert get_current_app() is app


def test_as_current(app):
    other = RecordKit("other")

    with other.as_current() as pushed:
        assert pushed is other
        assert current_app.name == "other"
    assert current_app.name == "test"


def test_current_app_proxy_forwards(app):
    current_app.name = "renamed"

    assert app.name == "renamed"
    assert "decorator_class_for" in dir(current_app)
    assert "renamed" in repr(current_app)


def test_explicit_app_wins_over_current(app):
    other = RecordKit("other")

    assert RecordDecorator({"id": 1}, app=other).app is other


def test_autodiscover_on_miss(app, wrappers_module):
    app.configure({"DISCOVERY_PATHS": [wrappers_module, "recordkit_missing.module"]})
    record = RecordDecorator({"Item": {"id": 1}, "Gadget": {"id": 5, "name": "x"}}, "Item")

    gadget = record.get("Gadget")

    assert type(gadget).__name__ == "GadgetDecorator"
    assert record.serialize() == {"id": 1, "Gadget": {"id": 5}}


def test_autodiscover_can_be_disabled(app, wrappers_module):
    app.configure({"DISCOVERY_PATHS": [wrappers_module], "AUTODISCOVER_ON_MISS": False})

    assert app.decorator_class_for("Gadget") is None

    assert app.autodiscover() == [wrappers_module]
    assert app.decorator_class_for("Gadget") is not None


def test_autodiscover_skips_missing_modules(app):
    assert app.autodiscover(["recordkit_missing", "recordkit_missing.child"]) == []


def test_autodiscover_runs_once_on_misses(app, wrappers_module):
    app.configure({"DISCOVERY_PATHS": [wrappers_module]})

    assert app.decorator_class_for("Unknown") is None
    sys.modules.pop(wrappers_module, None)
    app.registry.clear()

    assert app.decorator_class_for("Gadget") is None


def test_decorate_uses_registered_class(app):
    @app.decorator
    class ItemDecorator(RecordDecorator):
        pass

    record = app.decorate({"Item": {"id": 1}}, "Item")
    assert isinstance(record, ItemDecorator)
    assert record.app is app

    generic = app.decorate({"id": 1})
    assert type(generic) is RecordDecorator
    assert generic.model_name == "Record"


def test_package_exports():
    assert recordkit.RecordDecorator is RecordDecorator
    assert isinstance(recordkit.__version__, str)
