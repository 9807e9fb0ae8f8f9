from __future__ import annotations

import asyncio
import logging
import random

from stockcount.domain.errors import ErpApiError
from stockcount.services.mock_config import ErrorRate, MockConfigStore

log = logging.getLogger("stockcount.faults")

FAILURE_PROBABILITY: dict[str, float] = {
    ErrorRate.NEVER: 0.0,
    ErrorRate.LOW: 0.2,
    ErrorRate.HIGH: 0.5,
    ErrorRate.ALWAYS: 1.0,
}


class FaultInjector:
    def __init__(self, config_store: MockConfigStore, rng=None):
        self.config_store = config_store
        self.rng = rng or random

    async def simulate_latency(self) -> None:
        latency_ms = self.config_store.get_config().api_latency_ms
        if latency_ms > 0:
            await asyncio.sleep(latency_ms / 1000)

    def maybe_throw_error(self) -> None:
        rate = self.config_store.get_config().error_rate
        if rate == ErrorRate.NEVER:
            return
        if rate == ErrorRate.ALWAYS:
            log.info("simulated_error rate=%s", rate)
            raise ErpApiError("[MockERP] Simulated API error")
        if self.rng.random() < FAILURE_PROBABILITY[rate]:
            log.info("simulated_error rate=%s", rate)
            raise ErpApiError("[MockERP] Simulated random API error")

    async def guard(self) -> None:
        """Run before any mock operation touches state."""
        await self.simulate_latency()
        self.maybe_throw_error()
