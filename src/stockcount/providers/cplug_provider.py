"""CPlug ERP provider stub.

Reads answer with empty results and writes raise until the HTTP client is
written. Selected with STOCKCOUNT_ERP_PROVIDER=cplug.

API reference: https://cplug.redocly.app/openapi
"""
from __future__ import annotations

from typing import Optional

from stockcount.domain.errors import ProviderNotImplementedError
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

NOT_IMPLEMENTED = "CPlug ERP provider is not implemented yet. Use STOCKCOUNT_ERP_PROVIDER=mock."


class CplugErpProvider:
    # GET /api/v3/stocks
    async def list_stocks(self) -> list[Stock]:
        return []

    # GET /api/v3/stocks/{stockId}
    async def get_stock(self, stock_id: str) -> Optional[Stock]:
        return None

    # GET /api/v3/categories
    async def list_categories(self) -> list[Category]:
        return []

    # GET /api/v3/stocks/{stockId}/inventories
    async def list_inventories(self, filters: ListInventoriesFilters | None = None) -> list[Count]:
        return []

    # GET /api/v3/stocks/{stockId}/inventories/{inventoryId}
    async def get_inventory(self, inventory_id: str) -> Optional[Count]:
        return None

    # POST /api/v3/stocks/{stockId}/inventories
    async def create_inventory(self, params: CreateInventoryParams) -> Count:
        raise ProviderNotImplementedError(NOT_IMPLEMENTED)

    # PUT /api/v3/stocks/{stockId}/inventories/{inventoryId}
    async def update_inventory(self, inventory_id: str, **patch) -> Count:
        raise ProviderNotImplementedError(NOT_IMPLEMENTED)

    # DELETE /api/v3/stocks/{stockId}/inventories/{inventoryId}
    async def delete_inventory(self, inventory_id: str) -> None:
        raise ProviderNotImplementedError(NOT_IMPLEMENTED)

    # GET /api/v3/stocks/{stockId}/inventories/{inventoryId}/items
    async def list_inventory_items(self, inventory_id: str) -> list[InventoryItem]:
        return []

    # PUT /api/v3/stocks/{stockId}/inventories/{inventoryId}/items
    async def register_counted_quantity(self, inventory_id: str, product_id: str, qty: int) -> RegisterResult:
        return RegisterResult.failure("NOT_IMPLEMENTED", NOT_IMPLEMENTED)

    async def check_pdv_online(self, inventory_id: str) -> CheckResult:
        return CheckResult(ok=True)

    async def check_pending_transfers(self, inventory_id: str, product_id: str) -> CheckResult:
        return CheckResult(ok=True)

    # GET /api/v3/pos/drawer-list
    async def list_pdvs(self, stock_id: Optional[str] = None) -> list[Pdv]:
        return []

    # POST /api/v3/pos/{posId}/drawer-open
    async def toggle_pdv_status(self, pdv_id: str) -> Pdv:
        raise ProviderNotImplementedError(NOT_IMPLEMENTED)
