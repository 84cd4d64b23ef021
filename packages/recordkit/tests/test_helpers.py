import sys
import threading
import types

from recordkit import RecordDecorator, RecordKit
from recordkit.helpers import HelperSet, LazyHelper


def test_lazy_helper_builds_once():
    calls = []
    helper = LazyHelper("html", lambda: calls.append(1) or object())

    assert not helper.built
    first = helper.get()
    assert helper.built
    assert helper.get() is first
    assert len(calls) == 1


def test_lazy_helper_concurrent_first_use():
    calls = []
    barrier = threading.Barrier(8)

    def factory():
        calls.append(1)
        return object()

    helper = LazyHelper("html", factory)
    results = []

    def worker():
        barrier.wait()
        results.append(helper.get())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(calls) == 1
    assert len({id(result) for result in results}) == 1


def test_helper_set_registration():
    helpers = HelperSet()
    original = helpers.register("html", dict)

    assert helpers.register("html", list) is original
    assert isinstance(helpers.get("html"), dict)

    helpers.register("html", list, replace=True)
    assert isinstance(helpers.get("html"), list)
    assert helpers.names() == ("html",)


def test_unknown_helper_is_tolerated():
    helpers = HelperSet()

    assert not helpers.has("html")
    assert helpers.get("html") is None

    helpers.register("html", dict)
    helpers.clear()
    assert not helpers.has("html")


class Formatter:
    def format(self, value):
        return f"<{value}>"


def test_helpers_from_settings(monkeypatch):
    module = types.ModuleType("recordkit_helper_mod")
    module.Formatter = Formatter
    monkeypatch.setitem(sys.modules, "recordkit_helper_mod", module)

    app = RecordKit("helpers")
    app.configure({"HELPERS": {"fmt": "recordkit_helper_mod:Formatter"}})
    record = RecordDecorator({"name": "Widget"}, app=app)

    assert record.fmt.format(record.name) == "<Widget>"
    assert record.fmt is RecordDecorator({"id": 2}, app=app).get("fmt")
