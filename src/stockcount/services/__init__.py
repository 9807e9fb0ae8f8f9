from .fault_injection import FaultInjector
from .mock_config import MockConfig, MockConfigStore
from .reconciliation_service import ReconciliationService
from .store_generator import draw_inventory_items, generate_store_data, get_store_summary

__all__ = [
    "FaultInjector",
    "MockConfig",
    "MockConfigStore",
    "ReconciliationService",
    "draw_inventory_items",
    "generate_store_data",
    "get_store_summary",
]
