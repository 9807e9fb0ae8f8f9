from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Optional

from stockcount.domain.errors import NotFoundError
from stockcount.domain.models import (
    Category,
    CheckResult,
    Count,
    CountStatus,
    CreateInventoryParams,
    InventoryItem,
    ListInventoriesFilters,
    Pdv,
    PdvStatus,
    RegisterResult,
    Stock,
    User,
    ValueToConsider,
    apply_count_patch,
    open_count,
    record_counted_qty,
    utc_now_iso,
    validate_create_params,
)
from stockcount.repositories.count_store import InventoryDataStore
from stockcount.services.fault_injection import FaultInjector
from stockcount.services.mock_config import MockConfig, MockConfigStore, PdvScenario
from stockcount.services.store_generator import draw_inventory_items, generate_store_data

log = logging.getLogger("stockcount.erp")

DEFAULT_ACTOR = User(id="mock-user-1", name="Usuário Mock")


class MockErpProvider:
    def __init__(
        self,
        config_store: MockConfigStore,
        faults: FaultInjector,
        data_store: InventoryDataStore,
        actor: User | None = None,
        seed_sample_counts: bool = True,
        rng=None,
    ):
        self.config_store = config_store
        self.faults = faults
        self.data_store = data_store
        self.actor = actor or DEFAULT_ACTOR
        self.seed_sample_counts = seed_sample_counts
        self.rng = rng

        config = config_store.get_config()
        self._load_store(config.store_size)
        self.apply_pdv_scenario()
        if seed_sample_counts and data_store.is_empty():
            self._seed_sample_counts()

    # ---------- Store data ----------
    def _load_store(self, store_size: str) -> None:
        data = generate_store_data(store_size)
        self._store_size = store_size
        self._stocks: list[Stock] = data.stocks
        self._categories: list[Category] = data.categories
        self._catalog = data.catalog
        self._pdvs: dict[str, Pdv] = {p.id: p for p in data.pdvs}
        self._generated_status: dict[str, str] = {p.id: p.status for p in data.pdvs}

    def _seed_sample_counts(self) -> None:
        """Two counts so lists are not empty: one in progress, one finalized."""
        if not self._stocks:
            return
        base = datetime.now(timezone.utc) - timedelta(days=2)
        product_count = self.config_store.get_config().product_count
        stock_ids = [s.id for s in self._stocks[:2]]
        if len(stock_ids) == 1:
            stock_ids.append(stock_ids[0])

        for i, stock_id in enumerate(stock_ids):
            started = base + timedelta(days=i)
            count_id = self.data_store.next_id()
            params = CreateInventoryParams(stock_id=stock_id, value_to_consider=ValueToConsider.SALE_PRICE)
            count = open_count(count_id, params, self.actor, started.isoformat(timespec="milliseconds"))
            if i == 1:
                finished = (started + timedelta(hours=4)).isoformat(timespec="milliseconds")
                count = apply_count_patch(
                    count, {"status": CountStatus.FINALIZED, "finalized_at": finished}, self.actor, finished
                )
            items = draw_inventory_items(self._catalog, count_id, product_count, rng=self.rng)
            self.data_store.add_count(count, items)

    def reset_data(self) -> None:
        """Regenerate the store for the configured size and start over."""
        config = self.config_store.get_config()
        self._load_store(config.store_size)
        self.data_store.clear()
        self.apply_pdv_scenario()
        if self.seed_sample_counts:
            self._seed_sample_counts()
        log.info("mock_data_reset store_size=%s", config.store_size)

    def apply_pdv_scenario(self) -> None:
        scenario = self.config_store.get_config().pdv_scenario
        now = utc_now_iso()
        for pdv_id, pdv in list(self._pdvs.items()):
            if scenario == PdvScenario.ALL_ONLINE:
                status = PdvStatus.ONLINE
            elif scenario == PdvScenario.ALL_OFFLINE:
                status = PdvStatus.OFFLINE
            else:
                status = self._generated_status[pdv_id]
            if status == PdvStatus.ONLINE:
                self._pdvs[pdv_id] = replace(pdv, status=status, last_ping=pdv.last_ping or now)
            else:
                self._pdvs[pdv_id] = replace(pdv, status=status, last_ping=None)
        self._pdv_scenario = scenario

    def handle_config_change(self, config: MockConfig) -> None:
        if config.store_size != self._store_size:
            self.reset_data()
        elif config.pdv_scenario != self._pdv_scenario:
            self.apply_pdv_scenario()

    # ---------- Stocks & categories ----------
    async def list_stocks(self) -> list[Stock]:
        await self.faults.guard()
        return list(self._stocks)

    async def get_stock(self, stock_id: str) -> Optional[Stock]:
        await self.faults.guard()
        return next((s for s in self._stocks if s.id == stock_id), None)

    async def list_categories(self) -> list[Category]:
        await self.faults.guard()
        return list(self._categories)

    # ---------- Counts ----------
    async def list_inventories(self, filters: ListInventoriesFilters | None = None) -> list[Count]:
        await self.faults.guard()
        return self.data_store.list_counts(filters)

    async def get_inventory(self, inventory_id: str) -> Optional[Count]:
        await self.faults.guard()
        return self.data_store.get_count(inventory_id)

    async def create_inventory(self, params: CreateInventoryParams) -> Count:
        await self.faults.guard()
        validate_create_params(params)
        if not any(s.id == params.stock_id for s in self._stocks):
            raise NotFoundError(f"Stock not found: {params.stock_id}")

        count_id = self.data_store.next_id()
        count = open_count(count_id, params, self.actor, utc_now_iso())
        product_count = self.config_store.get_config().product_count
        items = draw_inventory_items(
            self._catalog, count_id, product_count, params.category_filter_ids, rng=self.rng
        )
        self.data_store.add_count(count, items)
        log.info(
            "count_created id=%s stock=%s items=%s actor=%s", count.id, count.stock_id, len(items), self.actor.id
        )
        return count

    async def update_inventory(self, inventory_id: str, **patch) -> Count:
        await self.faults.guard()
        count = self.data_store.get_count(inventory_id)
        if count is None:
            raise NotFoundError(f"Count not found: {inventory_id}")

        updated = apply_count_patch(count, patch, self.actor, utc_now_iso())
        self.data_store.save_count(updated)
        if count.status != updated.status:
            log.info("count_status_changed id=%s from=%s to=%s actor=%s", inventory_id, count.status, updated.status, self.actor.id)
        return updated

    async def delete_inventory(self, inventory_id: str) -> None:
        await self.faults.guard()
        if self.data_store.soft_delete(inventory_id, self.actor, utc_now_iso()):
            log.info("count_deleted id=%s actor=%s", inventory_id, self.actor.id)

    # ---------- Items ----------
    async def list_inventory_items(self, inventory_id: str) -> list[InventoryItem]:
        await self.faults.guard()
        return self.data_store.list_items(inventory_id)

    async def register_counted_quantity(self, inventory_id: str, product_id: str, qty: int) -> RegisterResult:
        await self.faults.guard()
        if type(qty) is not int or qty < 0:
            return RegisterResult.failure("INVALID_QUANTITY", "Counted quantity must be >= 0.")

        item = self.data_store.find_item(inventory_id, product_id)
        if item is None:
            return RegisterResult.failure("NOT_FOUND", "Product not found in this count.")

        count = self.data_store.get_count(inventory_id)
        if count is not None and count.status == CountStatus.FINALIZED:
            return RegisterResult.failure("COUNT_FINALIZED", "This count is already finalized.")

        self.data_store.save_item(inventory_id, record_counted_qty(item, qty, utc_now_iso()))
        log.info("qty_registered count=%s product=%s qty=%s", inventory_id, product_id, qty)
        return RegisterResult.ok()

    # ---------- Pre-register checks ----------
    async def check_pdv_online(self, inventory_id: str) -> CheckResult:
        await self.faults.guard()
        count = self.data_store.get_count(inventory_id)
        if count is None:
            return CheckResult(ok=True)

        offline = [p.name for p in self._pdvs.values() if p.stock_id == count.stock_id and not p.online]
        if offline:
            return CheckResult(ok=False, message=f"Offline terminals: {', '.join(offline)}")
        return CheckResult(ok=True)

    async def check_pending_transfers(self, inventory_id: str, product_id: str) -> CheckResult:
        await self.faults.guard()
        return CheckResult(ok=True)

    # ---------- Terminals ----------
    async def list_pdvs(self, stock_id: Optional[str] = None) -> list[Pdv]:
        await self.faults.guard()
        return [p for p in self._pdvs.values() if stock_id is None or p.stock_id == stock_id]

    async def toggle_pdv_status(self, pdv_id: str) -> Pdv:
        await self.faults.guard()
        pdv = self._pdvs.get(pdv_id)
        if pdv is None:
            raise NotFoundError(f"PDV not found: {pdv_id}")

        if pdv.online:
            toggled = replace(pdv, status=PdvStatus.OFFLINE, last_ping=None)
        else:
            toggled = replace(pdv, status=PdvStatus.ONLINE, last_ping=utc_now_iso())
        self._pdvs[pdv_id] = toggled
        log.info("pdv_toggled id=%s status=%s", pdv_id, toggled.status)
        return toggled
