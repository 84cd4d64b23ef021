import logging
from functools import cached_property

import pytest

from recordkit import UNDEFINED, RecordDecorator


class ItemDecorator(RecordDecorator):
    @property
    def name(self):
        return f"computed:{self.get_attribute('name')}"

    @property
    def slug(self):
        return str(self.get_attribute("name", "")).lower()


class CountingDecorator(RecordDecorator):
    calls = 0

    @cached_property
    def expensive(self):
        type(self).calls += 1
        return self.get_attribute("id", 0) * 10


RAW = {"Item": {"id": 1, "name": "Widget", "note": None}, "Category": {"id": 9}}


def test_computed_property_wins_over_attribute():
    record = ItemDecorator(RAW)

    assert record.get("name") == "computed:Widget"
    assert record.name == "computed:Widget"
    assert record.get_attribute("name") == "Widget"


def test_attribute_tier_returns_present_keys_even_when_none():
    record = ItemDecorator(RAW)

    assert record.get("id") == 1
    assert record.get("note") is None
    assert record.note is None


def test_association_tier():
    record = ItemDecorator(RAW)

    category = record.get("Category")
    assert isinstance(category, RecordDecorator)
    assert category.get("id") == 9


def test_helper_tier_is_shared_and_built_once(app):
    built = []

    def factory():
        built.append(object())
        return built[-1]

    app.register_helper("html", factory)
    first = RecordDecorator({"id": 1})
    second = RecordDecorator({"id": 2})

    assert first.get("html") is second.html
    assert len(built) == 1


def test_attribute_shadows_helper(app):
    app.register_helper("html", object)
    record = RecordDecorator({"html": "<p/>"})

    assert record.get("html") == "<p/>"


def test_undefined_property(caplog):
    caplog.set_level(logging.INFO, logger="recordkit.records")
    record = ItemDecorator(RAW)

    value = record.get("missing")

    assert value is UNDEFINED
    assert not value
    assert record.missing is UNDEFINED
    messages = [r.getMessage() for r in caplog.records if r.name == "recordkit.records"]
    assert messages[0] == "[UndefinedPropertyError] Undefined property missing in Item"
    assert all(r.levelno == logging.INFO for r in caplog.records if r.name == "recordkit.records")


def test_undefined_reporting_can_be_disabled(caplog, app):
    app.configure({"REPORT_UNDEFINED": False})
    caplog.set_level(logging.INFO, logger="recordkit.records")

    assert RecordDecorator({"id": 1}).get("missing") is UNDEFINED
    assert not [r for r in caplog.records if r.name == "recordkit.records"]


def test_undefined_is_never_raised_in_strict_mode(app):
    app.configure({"RAISE_ON_ERROR": True})

    assert RecordDecorator({"id": 1}).get("missing") is UNDEFINED


def test_private_names_raise_attribute_error():
    record = RecordDecorator({"_secret": 1})

    with pytest.raises(AttributeError):
        record._secret
    assert not hasattr(record, "_missing")
    assert record.get("_secret") == 1


def test_cached_property_is_a_computed_accessor():
    record = CountingDecorator({"id": 4})

    assert record.get("expensive") == 40
    assert record.expensive == 40
    assert CountingDecorator.calls == 1


def test_has_mirrors_properties_and_attributes():
    record = ItemDecorator(RAW)

    assert record.has("slug")
    assert record.has("id")
    assert not record.has("note")
    assert not record.has("Category")
    assert not record.has("missing")


def test_base_properties():
    record = RecordDecorator(RAW, "Item")

    assert record.model_name == "Item"
    assert record.is_collection is False
    with pytest.raises(TypeError):
        record.associations["Other"] = {}


# --- index-style access ---

def test_index_access():
    record = RecordDecorator({"id": 1, "name": "Widget"})

    assert record["id"] == 1
    with pytest.raises(KeyError):
        record["missing"]

    record["name"] = "Gadget"
    record["color"] = None
    assert record.get_attribute("name") == "Gadget"
    assert "name" in record
    assert "color" not in record
    assert record.get_attribute("color", "n/a") is None
    assert record.get_attribute("size", "n/a") == "n/a"

    del record["color"]
    assert len(record) == 2
    assert list(record) == ["id", "name"]


def test_get_attributes_returns_a_copy():
    record = RecordDecorator({"id": 1})
    attributes = record.get_attributes()
    attributes["id"] = 2

    assert record["id"] == 1


def test_count_and_truthiness():
    assert RecordDecorator({}).count() == 0
    assert not RecordDecorator({})
    assert RecordDecorator({"id": 1}).count() == 1
    assert RecordDecorator({"id": 1, "name": "x"}).count() == 1
    assert RecordDecorator([{"id": 1}, {"id": 2}, {"id": 3}]).count() == 3


def test_collection_writes_wrap_mappings():
    record = RecordDecorator([{"id": 1}])

    index = record.append({"id": 2})
    record[5] = {"id": 6}

    assert index == 1
    assert isinstance(record[1], RecordDecorator)
    assert record[5].get_attribute("id") == 6
    assert record.append({"id": 7}) == 6
    assert [member.get_attribute("id") for member in record] == [1, 2, 6, 7]


def test_repr():
    assert repr(RecordDecorator(RAW, "Item")) == "<RecordDecorator Item attributes=[id, name, note] associations=[Category]>"
    assert repr(RecordDecorator([{"id": 1}])) == "<RecordDecorator Record[1]>"


class SummaryDecorator(RecordDecorator):
    default_model_name = "Item"

    def summary(self):
        return f"#{self.get_attribute('id')} {self.get_attribute('name')}"

    def badge(self, size="sm"):
        return f"badge-{size}"

    def price_with(self, tax):
        return tax


def test_zero_argument_methods_are_computed_accessors():
    record = SummaryDecorator(RAW)

    assert record.get("summary") == "#1 Widget"
    assert record.get("badge") == "badge-sm"
    assert record.has("summary")
    assert record.summary() == "#1 Widget"


def test_methods_needing_arguments_are_not_accessors(caplog):
    record = SummaryDecorator(RAW)

    with caplog.at_level(logging.INFO, logger="recordkit.records"):
        assert record.get("price_with") is UNDEFINED

    assert not record.has("price_with")
    assert not record.has("serialize")


def test_collection_writes_reject_non_records():
    record = RecordDecorator([{"id": 1}])

    with pytest.raises(TypeError):
        record.append(5)
    with pytest.raises(TypeError):
        record[3] = ["x"]

    assert record.count() == 1
    assert all(isinstance(member, RecordDecorator) for member in record)


def test_collection_accepts_existing_wrappers():
    record = RecordDecorator([{"id": 1}], "Item")
    member = RecordDecorator({"id": 2}, "Item")

    record.append(member)

    assert record[1] is member
