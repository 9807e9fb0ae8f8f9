from types import SimpleNamespace

import pytest

from conftest import FixedRng

from stockcount.domain.errors import ErpApiError
from stockcount.repositories.storage import MemoryStorage
from stockcount.services import fault_injection
from stockcount.services.fault_injection import FaultInjector
from stockcount.services.mock_config import ErrorRate, MockConfigStore


def _injector(rate: str, rng_value: float = 0.0) -> FaultInjector:
    store = MockConfigStore(MemoryStorage())
    store.set_config(error_rate=rate)
    return FaultInjector(store, rng=FixedRng(rng_value))


def test_never_does_not_fail():
    _injector(ErrorRate.NEVER, 0.0).maybe_throw_error()


def test_always_fails():
    with pytest.raises(ErpApiError):
        _injector(ErrorRate.ALWAYS, 0.99).maybe_throw_error()


@pytest.mark.parametrize(
    "rate,draw,fails",
    [
        (ErrorRate.LOW, 0.19, True),
        (ErrorRate.LOW, 0.2, False),
        (ErrorRate.HIGH, 0.49, True),
        (ErrorRate.HIGH, 0.5, False),
    ],
)
def test_probabilistic_rates(rate, draw, fails):
    injector = _injector(rate, draw)
    if fails:
        with pytest.raises(ErpApiError):
            injector.maybe_throw_error()
    else:
        injector.maybe_throw_error()


@pytest.mark.asyncio
async def test_latency_sleeps_for_configured_duration(monkeypatch):
    slept = []

    async def fake_sleep(seconds):
        slept.append(seconds)

    monkeypatch.setattr(fault_injection, "asyncio", SimpleNamespace(sleep=fake_sleep))
    store = MockConfigStore(MemoryStorage())
    injector = FaultInjector(store)

    await injector.simulate_latency()
    store.set_config(api_latency_ms=2000)
    await injector.simulate_latency()

    assert slept == [2.0]


@pytest.mark.asyncio
async def test_guard_raises_after_latency(monkeypatch):
    calls = []

    async def fake_sleep(seconds):
        calls.append("sleep")

    monkeypatch.setattr(fault_injection, "asyncio", SimpleNamespace(sleep=fake_sleep))
    store = MockConfigStore(MemoryStorage())
    store.set_config(api_latency_ms=500, error_rate=ErrorRate.ALWAYS)

    with pytest.raises(ErpApiError):
        await FaultInjector(store).guard()
    assert calls == ["sleep"]
