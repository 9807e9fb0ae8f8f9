from .contracts import ErpProvider
from .cplug_provider import CplugErpProvider
from .mock_provider import MockErpProvider

__all__ = [
    "ErpProvider",
    "CplugErpProvider",
    "MockErpProvider",
]
