"""Transaction lookup tool."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from getblock_mcp.chains import Operation
from getblock_mcp.getblock_api import default_client
from getblock_mcp.responses import ToolResponse
from getblock_mcp.tools.common import run_single_call


async def get_transaction(
    txid: Any = None,
    chain: Any = "eth",
    *,
    client=default_client,
    overrides: Optional[Mapping[str, str]] = None,
) -> ToolResponse:
    """Return transaction details by hash (eth) or signature (solana)."""
    if not txid:
        return ToolResponse.error("Transaction ID is required")
    return await run_single_call(
        Operation.TRANSACTION, chain, client=client, overrides=overrides, txid=txid
    )
