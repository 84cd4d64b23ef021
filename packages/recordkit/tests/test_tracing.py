import pytest

from recordkit import RecordDecorator
from recordkit.tracing import record_attributes, service_span_sync, span_attributes


def test_span_attributes_prefix_and_coerce():
    attrs = span_attributes(model="Item", depth=2, ok=True, skipped=None, names=("a", 1, object), extra={"k": 1})

    assert attrs["recordkit.model"] == "Item"
    assert attrs["recordkit.depth"] == 2
    assert attrs["recordkit.ok"] is True
    assert "recordkit.skipped" not in attrs
    assert attrs["recordkit.names"][:2] == ["a", 1]
    assert isinstance(attrs["recordkit.names"][2], str)
    assert attrs["recordkit.extra"] == "{'k': 1}"


def test_record_attributes():
    record = RecordDecorator([{"id": 1}], "Item")

    assert record_attributes(record, association="Tag") == {
        "recordkit.wrapper": "RecordDecorator",
        "recordkit.model": "Item",
        "recordkit.collection": True,
        "recordkit.association": "Tag",
    }


def test_service_span_yields_and_reraises():
    with service_span_sync("recordkit.test", attributes=span_attributes(model="Item")) as span:
        span.set_attribute("recordkit.step", 1)

    with pytest.raises(RuntimeError):
        with service_span_sync("recordkit.test"):
            raise RuntimeError("boom")
