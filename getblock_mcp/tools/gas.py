"""Ethereum gas price tool."""

from __future__ import annotations

from typing import Mapping, Optional

from getblock_mcp.chains import Chain, Operation
from getblock_mcp.getblock_api import default_client
from getblock_mcp.responses import ToolResponse
from getblock_mcp.tools.common import run_single_call


async def get_eth_gas_price(
    *,
    client=default_client,
    overrides: Optional[Mapping[str, str]] = None,
) -> ToolResponse:
    return await run_single_call(Operation.GAS_PRICE, Chain.ETH, client=client, overrides=overrides)
