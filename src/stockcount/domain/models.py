from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from stockcount.domain.errors import ValidationError


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


def parse_iso(value: str) -> datetime:
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


class CountStatus:
    IN_PROGRESS = "EM_ANDAMENTO"
    FINALIZED = "FINALIZADO"
    ALL = frozenset({IN_PROGRESS, FINALIZED})


class ValueToConsider:
    SALE_PRICE = "VENDA"
    COST_PRICE = "CUSTO"
    ALL = frozenset({SALE_PRICE, COST_PRICE})


class CountingMode:
    STORE_CLOSED = "LOJA_FECHADA"
    STORE_OPEN = "LOJA_ABERTA"
    ALL = frozenset({STORE_CLOSED, STORE_OPEN})


class PdvStatus:
    ONLINE = "ONLINE"
    OFFLINE = "OFFLINE"
    ALL = frozenset({ONLINE, OFFLINE})


@dataclass(frozen=True)
class Stock:
    id: str
    name: str
    pos_ids: tuple[str, ...] = ()
    active: bool = True


@dataclass(frozen=True)
class Pdv:
    id: str
    name: str
    status: str
    stock_id: str
    address: Optional[str] = None
    last_ping: Optional[str] = None

    @property
    def online(self) -> bool:
        return self.status == PdvStatus.ONLINE


@dataclass(frozen=True)
class Category:
    id: str
    name: str


@dataclass(frozen=True)
class CatalogProduct:
    product_id: str
    name: str
    category_id: str
    unit_value: float
    base_system_qty: int


@dataclass(frozen=True)
class User:
    id: str
    name: str


@dataclass(frozen=True)
class Count:
    id: str
    stock_id: str
    value_to_consider: str
    started_at: str
    status: str
    created_at: str
    counting_mode: Optional[str] = None
    category_filter_ids: tuple[str, ...] = ()
    created_by: Optional[str] = None
    created_by_name: Optional[str] = None
    finalized_at: Optional[str] = None
    finalized_by: Optional[str] = None
    finalized_by_name: Optional[str] = None
    deleted_by: Optional[str] = None
    deleted_at: Optional[str] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


@dataclass(frozen=True)
class InventoryItem:
    id: str
    product_id: str
    product_name: str
    unit_value: float
    system_qty: int
    counted_qty: Optional[int] = None
    counted_at: Optional[str] = None

    @property
    def balance(self) -> Optional[int]:
        if self.counted_qty is None:
            return None
        return self.counted_qty - self.system_qty


@dataclass(frozen=True)
class RegisterResult:
    success: bool
    code: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls) -> "RegisterResult":
        return cls(success=True)

    @classmethod
    def failure(cls, code: str, message: str) -> "RegisterResult":
        return cls(success=False, code=code, message=message)


@dataclass(frozen=True)
class CheckResult:
    ok: bool
    message: Optional[str] = None


@dataclass(frozen=True)
class ListInventoriesFilters:
    stock_id: Optional[str] = None
    status: Optional[str] = None
    date_from: Optional[str] = None
    date_to: Optional[str] = None


@dataclass(frozen=True)
class CreateInventoryParams:
    stock_id: str
    value_to_consider: str
    counting_mode: Optional[str] = None
    category_filter_ids: tuple[str, ...] = ()


# ---------- Count transitions ----------

PATCHABLE_COUNT_FIELDS = frozenset({"status", "finalized_at", "counting_mode", "category_filter_ids"})


def validate_create_params(params: CreateInventoryParams) -> None:
    if not (params.stock_id or "").strip():
        raise ValidationError("Stock is required.")
    if params.value_to_consider not in ValueToConsider.ALL:
        raise ValidationError(f"Invalid value to consider: {params.value_to_consider!r}")
    if params.counting_mode is not None and params.counting_mode not in CountingMode.ALL:
        raise ValidationError(f"Invalid counting mode: {params.counting_mode!r}")


def open_count(count_id: str, params: CreateInventoryParams, actor: User, now: str) -> Count:
    return Count(
        id=count_id,
        stock_id=params.stock_id,
        value_to_consider=params.value_to_consider,
        counting_mode=params.counting_mode,
        category_filter_ids=tuple(params.category_filter_ids or ()),
        started_at=now,
        status=CountStatus.IN_PROGRESS,
        created_at=now,
        created_by=actor.id,
        created_by_name=actor.name,
    )


def apply_count_patch(count: Count, patch: dict, actor: User, now: str) -> Count:
    """Merge `patch` into `count`; moving to FINALIZED stamps the audit trail."""
    unknown = set(patch) - PATCHABLE_COUNT_FIELDS
    if unknown:
        raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

    changes = dict(patch)
    status = changes.get("status", count.status)
    if status not in CountStatus.ALL:
        raise ValidationError(f"Invalid count status: {status!r}")
    if count.status == CountStatus.FINALIZED and status != CountStatus.FINALIZED:
        raise ValidationError("A finalized count cannot be reopened.")
    if changes.get("counting_mode") is not None and changes["counting_mode"] not in CountingMode.ALL:
        raise ValidationError(f"Invalid counting mode: {changes['counting_mode']!r}")
    if "category_filter_ids" in changes:
        changes["category_filter_ids"] = tuple(changes["category_filter_ids"] or ())

    if changes.get("status") == CountStatus.FINALIZED:
        changes["finalized_at"] = changes.get("finalized_at") or count.finalized_at or now
        if count.finalized_by is None and count.finalized_by_name is None:
            changes["finalized_by"] = actor.id
            changes["finalized_by_name"] = actor.name

    return replace(count, **changes)


def mark_count_deleted(count: Count, actor: User, now: str) -> Count:
    return replace(count, deleted_by=actor.id, deleted_at=now)


def record_counted_qty(item: InventoryItem, qty: int, now: str) -> InventoryItem:
    return replace(item, counted_qty=qty, counted_at=now)
