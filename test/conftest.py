import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from stockcount.domain.models import User  # noqa: E402
from stockcount.providers.mock_provider import MockErpProvider  # noqa: E402
from stockcount.repositories.count_store import InventoryDataStore  # noqa: E402
from stockcount.repositories.storage import MemoryStorage  # noqa: E402
from stockcount.services.fault_injection import FaultInjector  # noqa: E402
from stockcount.services.mock_config import MockConfigStore  # noqa: E402

AUDITOR = User(id="user-42", name="Ana Auditora")


class FixedRng:
    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def config_store(storage):
    return MockConfigStore(storage)


@pytest.fixture
def data_store(storage):
    return InventoryDataStore(storage)


@pytest.fixture
def provider(config_store, data_store):
    erp = MockErpProvider(config_store, FaultInjector(config_store), data_store, actor=AUDITOR)
    config_store.on_config_change(erp.handle_config_change)
    return erp
