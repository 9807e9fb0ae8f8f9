from .models import (
    Category,
    CatalogProduct,
    CheckResult,
    Count,
    CountStatus,
    CountingMode,
    CreateInventoryParams,
    InventoryItem,
    ListInventoriesFilters,
    Pdv,
    PdvStatus,
    RegisterResult,
    Stock,
    User,
    ValueToConsider,
)
from .errors import AppError, ValidationError, NotFoundError, ErpApiError, ProviderNotImplementedError

__all__ = [
    "Category",
    "CatalogProduct",
    "CheckResult",
    "Count",
    "CountStatus",
    "CountingMode",
    "CreateInventoryParams",
    "InventoryItem",
    "ListInventoriesFilters",
    "Pdv",
    "PdvStatus",
    "RegisterResult",
    "Stock",
    "User",
    "ValueToConsider",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "ErpApiError",
    "ProviderNotImplementedError",
]
