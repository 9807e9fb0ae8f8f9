from pathlib import Path

import pytest
from openpyxl import load_workbook

from stockcount.domain.errors import NotFoundError
from stockcount.domain.models import CreateInventoryParams, ValueToConsider
from stockcount.services.reconciliation_service import ReconciliationService


async def _counted_inventory(provider):
    created = await provider.create_inventory(
        CreateInventoryParams(stock_id="est-1", value_to_consider=ValueToConsider.COST_PRICE)
    )
    items = await provider.list_inventory_items(created.id)
    await provider.register_counted_quantity(created.id, items[0].product_id, items[0].system_qty + 2)
    await provider.register_counted_quantity(created.id, items[1].product_id, items[1].system_qty)
    return created, items


@pytest.mark.asyncio
async def test_summary_totals(provider):
    created, items = await _counted_inventory(provider)

    summary = await ReconciliationService(provider).summarize(created.id)

    assert summary.total_items == len(items)
    assert summary.counted_items == 2
    assert summary.pending_items == len(items) - 2
    assert summary.divergent_items == 1
    assert summary.qty_balance == 2
    assert summary.value_balance == round(2 * items[0].unit_value, 2)


@pytest.mark.asyncio
async def test_export_writes_summary_and_items(provider, tmp_path: Path):
    created, items = await _counted_inventory(provider)
    path = tmp_path / "count.xlsx"

    await ReconciliationService(provider).export_count_excel(created.id, str(path))

    wb = load_workbook(path)
    assert wb.sheetnames == ["Summary", "Items"]
    assert wb["Summary"]["A1"].value == f"Count {created.id}"
    ws = wb["Items"]
    assert ws.max_row == len(items) + 1
    assert ws["A2"].value == items[0].product_id
    assert ws["F2"].value == 2
    assert ws["E4"].value is None


@pytest.mark.asyncio
async def test_deleted_count_cannot_be_reconciled(provider):
    created, _ = await _counted_inventory(provider)
    await provider.delete_inventory(created.id)

    with pytest.raises(NotFoundError):
        await ReconciliationService(provider).summarize(created.id)
