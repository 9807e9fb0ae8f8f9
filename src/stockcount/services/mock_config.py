from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields, replace
from typing import Callable

from stockcount.domain.errors import ValidationError
from stockcount.repositories.storage import MemoryStorage, Storage
from stockcount.services.store_generator import StoreSize

log = logging.getLogger("stockcount.config")

STORAGE_KEY = "mock_config"


class ApiLatency:
    NONE = 0
    FAST = 500
    MEDIUM = 1000
    SLOW = 2000
    VERY_SLOW = 5000
    ALL = frozenset({NONE, FAST, MEDIUM, SLOW, VERY_SLOW})


class ErrorRate:
    NEVER = "never"
    LOW = "low"
    HIGH = "high"
    ALWAYS = "always"
    ALL = frozenset({NEVER, LOW, HIGH, ALWAYS})


class PdvScenario:
    ALL_ONLINE = "all_online"
    MIXED = "mixed"
    ALL_OFFLINE = "all_offline"
    ALL = frozenset({ALL_ONLINE, MIXED, ALL_OFFLINE})


class ProductCount:
    FEW = 3
    SOME = 10
    MANY = 50
    LOTS = 100
    ALL = frozenset({FEW, SOME, MANY, LOTS})


@dataclass(frozen=True)
class MockConfig:
    api_latency_ms: int = ApiLatency.NONE
    error_rate: str = ErrorRate.NEVER
    pdv_scenario: str = PdvScenario.MIXED
    product_count: int = ProductCount.SOME
    store_size: str = StoreSize.MEDIUM


DEFAULT_CONFIG = MockConfig()

ALLOWED_VALUES: dict[str, frozenset] = {
    "api_latency_ms": ApiLatency.ALL,
    "error_rate": ErrorRate.ALL,
    "pdv_scenario": PdvScenario.ALL,
    "product_count": ProductCount.ALL,
    "store_size": StoreSize.ALL,
}
INT_KEYS = frozenset({"api_latency_ms", "product_count"})

ConfigListener = Callable[[MockConfig], None]


def _validate_patch(patch: dict) -> None:
    known = {f.name for f in fields(MockConfig)}
    unknown = set(patch) - known
    if unknown:
        raise ValidationError(f"Unknown mock config keys: {', '.join(sorted(unknown))}")
    for key, value in patch.items():
        expected = int if key in INT_KEYS else str
        if type(value) is not expected or value not in ALLOWED_VALUES[key]:
            raise ValidationError(f"Invalid value for {key}: {value!r}")


class MockConfigStore:
    def __init__(self, storage: Storage | None = None):
        self.storage = storage if storage is not None else MemoryStorage()
        self._config = DEFAULT_CONFIG
        self._listeners: list[ConfigListener] = []
        self._restore()

    def _restore(self) -> None:
        raw = self.storage.get(STORAGE_KEY)
        if not raw:
            return
        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("config payload is not an object")
            patch = {k: v for k, v in data.items() if k in ALLOWED_VALUES}
            _validate_patch(patch)
        except (TypeError, ValueError, ValidationError) as e:
            log.warning("mock_config_restore_ignored error=%s", e)
            return
        self._config = replace(DEFAULT_CONFIG, **patch)

    def _commit(self, config: MockConfig) -> None:
        self._config = config
        self.storage.set(STORAGE_KEY, json.dumps(asdict(config)))
        log.info("mock_config_changed %s", " ".join(f"{k}={v}" for k, v in asdict(config).items()))
        for listener in list(self._listeners):
            listener(config)

    def get_config(self) -> MockConfig:
        return self._config

    def set_config(self, **patch) -> MockConfig:
        _validate_patch(patch)
        self._commit(replace(self._config, **patch))
        return self._config

    def reset_config(self) -> MockConfig:
        self._commit(DEFAULT_CONFIG)
        return self._config

    def on_config_change(self, listener: ConfigListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
