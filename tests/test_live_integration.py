import os

import httpx
import pytest
import pytest_asyncio

from getblock_mcp.config import default_config
from getblock_mcp.getblock_api.client import GetBlockClient
from getblock_mcp.tools import get_chain_info, get_eth_gas_price, get_latest_blocks, get_wallet_balance


LIVE = os.getenv("LIVE_GETBLOCK") in {"1", "true", "yes"}
SAMPLE_ETH_ADDRESS = os.getenv("GETBLOCK_SAMPLE_ETH_ADDRESS", "0x00000000219ab540356cBB839Cbe05303d7705Fa")


pytestmark = pytest.mark.skipif(not LIVE, reason="Live GetBlock integration tests are disabled")


@pytest_asyncio.fixture
async def live_client():
    async with httpx.AsyncClient(base_url=default_config.base_url, timeout=10.0) as httpx_client:
        yield GetBlockClient(async_client=httpx_client)


@pytest.mark.asyncio
async def test_live_chain_info(live_client):
    result = await get_chain_info(client=live_client)
    assert result.is_error is False


@pytest.mark.asyncio
async def test_live_gas_price_and_balance(live_client):
    gas = await get_eth_gas_price(client=live_client)
    assert gas.text.endswith("Gwei")
    balance = await get_wallet_balance(SAMPLE_ETH_ADDRESS, client=live_client)
    assert balance.text.endswith("ETH")


@pytest.mark.asyncio
async def test_live_latest_blocks(live_client):
    result = await get_latest_blocks(count=2, client=live_client)
    assert result.is_error is False
