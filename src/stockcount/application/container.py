from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from stockcount.config import get_app_paths, get_settings
from stockcount.domain.errors import ValidationError
from stockcount.domain.models import User
from stockcount.providers.contracts import ErpProvider
from stockcount.providers.cplug_provider import CplugErpProvider
from stockcount.providers.mock_provider import MockErpProvider
from stockcount.repositories.count_store import InventoryDataStore
from stockcount.repositories.storage import MemoryStorage, SqliteStorage, Storage
from stockcount.services.fault_injection import FaultInjector
from stockcount.services.mock_config import MockConfigStore
from stockcount.services.reconciliation_service import ReconciliationService

PROVIDERS = {"mock", "cplug"}


@dataclass(frozen=True)
class AppContainer:
    storage: Storage
    mock_config: MockConfigStore
    faults: FaultInjector
    data_store: InventoryDataStore
    erp: ErpProvider
    reconciliation: ReconciliationService
    unsubscribe_config: Optional[Callable[[], None]] = None


def build_container(
    provider: str | None = None,
    db_path: Path | str | None = None,
    storage: Storage | None = None,
    actor: User | None = None,
    seed_sample_counts: bool = True,
) -> AppContainer:
    """Wire the ERP provider and its collaborators.

    `provider` and the acting user default to the environment settings; a
    `db_path` switches persistence to sqlite, otherwise state lives in memory.
    """
    settings = get_settings()
    provider_name = (provider or settings.erp_provider).strip().lower()
    if provider_name not in PROVIDERS:
        raise ValidationError(f"Unknown ERP provider: {provider_name!r}")

    if db_path is None and settings.persist:
        db_path = get_app_paths().db_path

    if storage is None:
        if db_path is not None:
            storage = SqliteStorage(db_path)
            storage.init_db()
        else:
            storage = MemoryStorage()

    mock_config = MockConfigStore(storage)
    faults = FaultInjector(mock_config)
    data_store = InventoryDataStore(storage)
    unsubscribe = None

    if provider_name == "mock":
        erp = MockErpProvider(
            mock_config,
            faults,
            data_store,
            actor=actor or User(id=settings.user_id, name=settings.user_name),
            seed_sample_counts=seed_sample_counts,
        )
        unsubscribe = mock_config.on_config_change(erp.handle_config_change)
    else:
        erp = CplugErpProvider()

    return AppContainer(
        storage=storage,
        mock_config=mock_config,
        faults=faults,
        data_store=data_store,
        erp=erp,
        reconciliation=ReconciliationService(erp),
        unsubscribe_config=unsubscribe,
    )
