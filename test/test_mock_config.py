import json

import pytest

from stockcount.domain.errors import ValidationError
from stockcount.repositories.storage import MemoryStorage
from stockcount.services.mock_config import (
    DEFAULT_CONFIG,
    STORAGE_KEY,
    ErrorRate,
    MockConfigStore,
    PdvScenario,
)


def test_defaults():
    config = MockConfigStore(MemoryStorage()).get_config()

    assert config.api_latency_ms == 0
    assert config.error_rate == ErrorRate.NEVER
    assert config.pdv_scenario == PdvScenario.MIXED
    assert config.product_count == 10
    assert config.store_size == "medium"


def test_set_config_merges_persists_and_notifies():
    storage = MemoryStorage()
    store = MockConfigStore(storage)
    seen = []
    store.on_config_change(seen.append)

    store.set_config(api_latency_ms=1000, error_rate=ErrorRate.LOW)

    config = store.get_config()
    assert config.api_latency_ms == 1000
    assert config.error_rate == ErrorRate.LOW
    assert config.product_count == DEFAULT_CONFIG.product_count
    assert seen == [config]
    assert json.loads(storage.get(STORAGE_KEY))["api_latency_ms"] == 1000


def test_unsubscribe_stops_notifications():
    store = MockConfigStore(MemoryStorage())
    seen = []
    unsubscribe = store.on_config_change(seen.append)

    unsubscribe()
    unsubscribe()
    store.set_config(product_count=50)

    assert seen == []


def test_reset_restores_defaults_and_notifies():
    store = MockConfigStore(MemoryStorage())
    store.set_config(store_size="large", pdv_scenario=PdvScenario.ALL_OFFLINE)
    seen = []
    store.on_config_change(seen.append)

    store.reset_config()

    assert store.get_config() == DEFAULT_CONFIG
    assert seen == [DEFAULT_CONFIG]


def test_config_is_restored_from_storage():
    storage = MemoryStorage()
    MockConfigStore(storage).set_config(product_count=100, store_size="small")

    restored = MockConfigStore(storage).get_config()

    assert restored.product_count == 100
    assert restored.store_size == "small"


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        "[1, 2, 3]",
        json.dumps({"error_rate": "sometimes"}),
        json.dumps({"product_count": [10]}),
        json.dumps({"product_count": 10.0}),
        json.dumps({"product_count": True}),
        json.dumps({"store_size": 3}),
    ],
)
def test_invalid_persisted_config_falls_back_to_defaults(raw):
    store = MockConfigStore(MemoryStorage({STORAGE_KEY: raw}))

    assert store.get_config() == DEFAULT_CONFIG


def test_invalid_patch_is_rejected_without_change():
    store = MockConfigStore(MemoryStorage())

    with pytest.raises(ValidationError):
        store.set_config(api_latency_ms=123)
    with pytest.raises(ValidationError):
        store.set_config(colour="blue")
    with pytest.raises(ValidationError):
        store.set_config(product_count=10.0)
    with pytest.raises(ValidationError):
        store.set_config(product_count=[10])
    with pytest.raises(ValidationError):
        store.set_config(api_latency_ms=False)

    assert store.get_config() == DEFAULT_CONFIG
