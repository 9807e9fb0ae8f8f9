from __future__ import annotations

from typing import Optional, Protocol

from stockcount.domain.models import (
    Category,
    CheckResult,
    Count,
    CreateInventoryParams,
    InventoryItem,
    ListInventoriesFilters,
    Pdv,
    RegisterResult,
    Stock,
)


class ErpProvider(Protocol):
    """Backend operations consumed by the counting features.

    Failures come back two ways. Infrastructure problems and misuse (unknown
    count on update) raise `AppError` subclasses. Expected business outcomes of
    a registration come back as a `RegisterResult` with `success=False`.
    """

    async def list_stocks(self) -> list[Stock]: ...
    async def get_stock(self, stock_id: str) -> Optional[Stock]: ...
    async def list_categories(self) -> list[Category]: ...

    async def list_inventories(self, filters: ListInventoriesFilters | None = None) -> list[Count]: ...
    async def get_inventory(self, inventory_id: str) -> Optional[Count]: ...
    async def create_inventory(self, params: CreateInventoryParams) -> Count: ...
    async def update_inventory(self, inventory_id: str, **patch) -> Count: ...
    async def delete_inventory(self, inventory_id: str) -> None: ...

    async def list_inventory_items(self, inventory_id: str) -> list[InventoryItem]: ...
    async def register_counted_quantity(self, inventory_id: str, product_id: str, qty: int) -> RegisterResult: ...

    async def check_pdv_online(self, inventory_id: str) -> CheckResult: ...
    async def check_pending_transfers(self, inventory_id: str, product_id: str) -> CheckResult: ...

    async def list_pdvs(self, stock_id: Optional[str] = None) -> list[Pdv]: ...
    async def toggle_pdv_status(self, pdv_id: str) -> Pdv: ...
