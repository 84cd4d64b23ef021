import pytest

from recordkit import RecordKit, StaticBindingProvider


@pytest.fixture
def bindings():
    return StaticBindingProvider()


@pytest.fixture(autouse=True)
def app(bindings, monkeypatch):
    monkeypatch.delenv("RECORDKIT_CONFIG_MODULE", raising=False)
    app = RecordKit("test", bindings=bindings)
    with app.as_current():
        yield app
