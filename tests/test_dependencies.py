"""Tests for settings and store backend selection."""
import pytest

from listycity.config import Settings, settings
from listycity.core import dependencies
from listycity.infrastructure.persistence.repositories.in_memory_city_store import InMemoryCityStore


@pytest.fixture(autouse=True)
def clear_store_cache():
    dependencies.get_city_store.cache_clear()
    yield
    dependencies.get_city_store.cache_clear()


def test_memory_backend(monkeypatch):
    monkeypatch.setattr(settings, "CITY_STORE_BACKEND", "memory")

    store = dependencies.get_city_store()

    assert isinstance(store, InMemoryCityStore)
    assert dependencies.get_city_store() is store


def test_unknown_backend(monkeypatch):
    monkeypatch.setattr(settings, "CITY_STORE_BACKEND", "sqlite")

    with pytest.raises(ValueError):
        dependencies.get_city_store()


def test_swipe_defaults():
    defaults = Settings()

    assert defaults.CITIES_COLLECTION == "cities"
    assert defaults.SWIPE_THRESHOLD_PX == 200
    assert defaults.MAX_VERTICAL_SLOP == 100.0
