from __future__ import annotations

from dataclasses import dataclass

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.table import Table, TableStyleInfo

from stockcount.domain.errors import NotFoundError
from stockcount.domain.models import Count, InventoryItem


@dataclass(frozen=True)
class CountReconciliation:
    count_id: str
    status: str
    total_items: int
    counted_items: int
    pending_items: int
    divergent_items: int
    qty_balance: int
    value_balance: float


def reconcile(count: Count, items: list[InventoryItem]) -> CountReconciliation:
    counted = [it for it in items if it.counted_qty is not None]
    divergent = [it for it in counted if it.balance != 0]
    return CountReconciliation(
        count_id=count.id,
        status=count.status,
        total_items=len(items),
        counted_items=len(counted),
        pending_items=len(items) - len(counted),
        divergent_items=len(divergent),
        qty_balance=sum(it.balance for it in counted),
        value_balance=round(sum(it.balance * it.unit_value for it in counted), 2),
    )


class ReconciliationService:
    def __init__(self, provider):
        self.provider = provider

    async def _load(self, inventory_id: str) -> tuple[Count, list[InventoryItem]]:
        count = await self.provider.get_inventory(inventory_id)
        if count is None:
            raise NotFoundError(f"Count not found: {inventory_id}")
        items = await self.provider.list_inventory_items(inventory_id)
        return count, items

    async def summarize(self, inventory_id: str) -> CountReconciliation:
        count, items = await self._load(inventory_id)
        return reconcile(count, items)

    async def export_count_excel(self, inventory_id: str, path: str) -> None:
        count, items = await self._load(inventory_id)
        summary = reconcile(count, items)
        wb = Workbook()

        def money(cell):
            cell.number_format = "#,##0.00"

        def set_widths(ws, widths: dict[str, int]):
            for col, w in widths.items():
                ws.column_dimensions[col].width = w

        # -------- 1) Summary --------
        ws = wb.active
        ws.title = "Summary"
        ws["A1"] = f"Count {count.id}"
        ws["A1"].font = Font(bold=True, size=14)

        rows = [
            ("Stock", count.stock_id, None),
            ("Status", count.status, None),
            ("Value basis", count.value_to_consider, None),
            ("Started at", count.started_at, None),
            ("Finalized at", count.finalized_at or "", None),
            ("Finalized by", count.finalized_by_name or "", None),
            ("Items", summary.total_items, None),
            ("Counted", summary.counted_items, None),
            ("Pending", summary.pending_items, None),
            ("Divergent", summary.divergent_items, None),
            ("Quantity balance", summary.qty_balance, None),
            ("Value balance", summary.value_balance, "money"),
        ]
        for i, (label, val, kind) in enumerate(rows):
            r = 3 + i
            ws[f"A{r}"] = label
            ws[f"B{r}"] = val
            if kind == "money":
                money(ws[f"B{r}"])
        set_widths(ws, {"A": 22, "B": 34})

        # -------- 2) Items --------
        ws2 = wb.create_sheet("Items")
        ws2.append([
            "Product ID", "Product", "Unit Value", "System Qty",
            "Counted Qty", "Balance", "Value Balance", "Counted At",
        ])
        for c in ws2[1]:
            c.font = Font(bold=True)

        for row, it in enumerate(items, start=2):
            balance = it.balance
            ws2.append([
                it.product_id, it.product_name, float(it.unit_value), int(it.system_qty),
                it.counted_qty, balance,
                round(balance * it.unit_value, 2) if balance is not None else None,
                it.counted_at or "",
            ])
            money(ws2[f"C{row}"])
            money(ws2[f"G{row}"])

        ws2.freeze_panes = "A2"
        set_widths(ws2, {"A": 12, "B": 36, "C": 12, "D": 12, "E": 12, "F": 10, "G": 14, "H": 30})
        if ws2.max_row >= 2:
            tab = Table(displayName="CountItems", ref=f"A1:{get_column_letter(8)}{ws2.max_row}")
            tab.tableStyleInfo = TableStyleInfo(
                name="TableStyleMedium9",
                showRowStripes=True,
                showColumnStripes=False,
            )
            ws2.add_table(tab)

        wb.save(path)
