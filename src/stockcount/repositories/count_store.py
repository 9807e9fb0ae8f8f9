from __future__ import annotations

import json
import logging
from dataclasses import asdict
from datetime import datetime, timedelta
from typing import Optional

from stockcount.domain.errors import ValidationError
from stockcount.domain.models import (
    Count,
    InventoryItem,
    ListInventoriesFilters,
    User,
    mark_count_deleted,
    parse_iso,
)
from stockcount.repositories.storage import MemoryStorage, Storage

log = logging.getLogger("stockcount.storage")

STORAGE_KEY = "mock_inventories"


def _count_from_dict(data: dict) -> Count:
    data = dict(data)
    data["category_filter_ids"] = tuple(data.get("category_filter_ids") or ())
    return Count(**data)


def _date_bound(value: str, end_of_day: bool) -> datetime:
    try:
        dt = parse_iso(value)
    except ValueError as e:
        raise ValidationError(f"Invalid date filter: {value!r}") from e
    # date-only upper bounds cover the whole day
    if end_of_day and len(value.strip()) == 10:
        dt = dt + timedelta(days=1) - timedelta(microseconds=1)
    return dt


class InventoryDataStore:
    def __init__(self, storage: Storage | None = None, storage_key: str = STORAGE_KEY):
        self.storage = storage if storage is not None else MemoryStorage()
        self.storage_key = storage_key
        self._counts: dict[str, Count] = {}
        self._items: dict[str, list[InventoryItem]] = {}
        self._last_id = 0
        self._restore()

    # ---------- Persistence ----------
    def _restore(self) -> None:
        raw = self.storage.get(self.storage_key)
        if not raw:
            return
        try:
            data = json.loads(raw)
            counts = {c["id"]: _count_from_dict(c) for c in data.get("counts", [])}
            items = {
                count_id: [InventoryItem(**it) for it in rows]
                for count_id, rows in (data.get("items") or {}).items()
            }
            last_id = int(data.get("last_id", 0))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            log.warning("inventory_snapshot_ignored key=%s error=%s", self.storage_key, e)
            return
        self._counts = counts
        self._items = items
        self._last_id = last_id
        log.info("inventory_snapshot_restored counts=%s", len(counts))

    def _persist(self) -> None:
        payload = {
            "last_id": self._last_id,
            "counts": [asdict(c) for c in self._counts.values()],
            "items": {cid: [asdict(it) for it in rows] for cid, rows in self._items.items()},
        }
        self.storage.set(self.storage_key, json.dumps(payload, ensure_ascii=False))

    # ---------- Counts ----------
    def next_id(self) -> str:
        self._last_id += 1
        return f"{self._last_id:03d}"

    def is_empty(self) -> bool:
        return not self._counts

    def get_count(self, count_id: str) -> Optional[Count]:
        count = self._counts.get(count_id)
        if count is None or count.is_deleted:
            return None
        return count

    def list_counts(self, filters: ListInventoriesFilters | None = None) -> list[Count]:
        filters = filters or ListInventoriesFilters()
        date_from = _date_bound(filters.date_from, end_of_day=False) if filters.date_from else None
        date_to = _date_bound(filters.date_to, end_of_day=True) if filters.date_to else None

        out: list[Count] = []
        for count in self._counts.values():
            if count.is_deleted:
                continue
            if filters.stock_id and count.stock_id != filters.stock_id:
                continue
            if filters.status and count.status != filters.status:
                continue
            if date_from or date_to:
                started = parse_iso(count.started_at)
                if date_from and started < date_from:
                    continue
                if date_to and started > date_to:
                    continue
            out.append(count)

        out.sort(key=lambda c: parse_iso(c.created_at), reverse=True)
        return out

    def add_count(self, count: Count, items: list[InventoryItem]) -> None:
        self._counts[count.id] = count
        self._items[count.id] = list(items)
        self._persist()

    def save_count(self, count: Count) -> None:
        self._counts[count.id] = count
        self._persist()

    def soft_delete(self, count_id: str, actor: User, now: str) -> bool:
        count = self.get_count(count_id)
        if count is None:
            return False
        self._counts[count_id] = mark_count_deleted(count, actor, now)
        self._items.pop(count_id, None)
        self._persist()
        return True

    # ---------- Items ----------
    def list_items(self, count_id: str) -> list[InventoryItem]:
        if self.get_count(count_id) is None:
            return []
        return list(self._items.get(count_id, []))

    def find_item(self, count_id: str, product_id: str) -> Optional[InventoryItem]:
        for item in self.list_items(count_id):
            if item.product_id == product_id:
                return item
        return None

    def save_item(self, count_id: str, item: InventoryItem) -> None:
        rows = self._items.get(count_id, [])
        self._items[count_id] = [item if it.id == item.id else it for it in rows]
        self._persist()

    def clear(self) -> None:
        """Drop every count; the id sequence keeps advancing."""
        self._counts = {}
        self._items = {}
        self._persist()
