"""Account-related tools."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from getblock_mcp.chains import Chain, Operation
from getblock_mcp.getblock_api import default_client
from getblock_mcp.responses import ToolResponse
from getblock_mcp.tools.common import run_single_call


async def get_wallet_balance(
    address: Any = None,
    chain: Any = "eth",
    *,
    client=default_client,
    overrides: Optional[Mapping[str, str]] = None,
) -> ToolResponse:
    """
    Return the native balance of ``address`` in ETH or SOL.

    Args:
        address: Wallet address (required).
        chain: ``eth`` or ``solana``.
        client: GetBlock client (override for testing).
        overrides: Optional per-request access tokens.
    """
    if not address:
        return ToolResponse.error("Address is required")
    return await run_single_call(
        Operation.WALLET_BALANCE, chain, client=client, overrides=overrides, address=address
    )


async def get_solana_account(
    address: Any = None,
    *,
    client=default_client,
    overrides: Optional[Mapping[str, str]] = None,
) -> ToolResponse:
    """Return parsed Solana account info for ``address``."""
    if not address:
        return ToolResponse.error("Address is required")
    return await run_single_call(
        Operation.ACCOUNT_INFO, Chain.SOLANA, client=client, overrides=overrides, address=address
    )
