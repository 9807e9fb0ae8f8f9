import pytest

from stockcount.domain.errors import ProviderNotImplementedError
from stockcount.domain.models import CreateInventoryParams, ValueToConsider
from stockcount.providers.cplug_provider import CplugErpProvider


@pytest.mark.asyncio
async def test_reads_return_empty_results():
    erp = CplugErpProvider()

    assert await erp.list_stocks() == []
    assert await erp.get_stock("est-1") is None
    assert await erp.list_categories() == []
    assert await erp.list_inventories() == []
    assert await erp.get_inventory("001") is None
    assert await erp.list_inventory_items("001") == []
    assert await erp.list_pdvs() == []
    assert (await erp.check_pdv_online("001")).ok is True
    assert (await erp.check_pending_transfers("001", "1000")).ok is True


@pytest.mark.asyncio
async def test_writes_are_not_implemented():
    erp = CplugErpProvider()

    with pytest.raises(ProviderNotImplementedError):
        await erp.create_inventory(CreateInventoryParams(stock_id="est-1", value_to_consider=ValueToConsider.SALE_PRICE))
    with pytest.raises(ProviderNotImplementedError):
        await erp.update_inventory("001", status="FINALIZADO")
    with pytest.raises(ProviderNotImplementedError):
        await erp.delete_inventory("001")
    with pytest.raises(ProviderNotImplementedError):
        await erp.toggle_pdv_status("pdv-1")

    result = await erp.register_counted_quantity("001", "1000", 1)
    assert result.success is False
    assert result.code == "NOT_IMPLEMENTED"
