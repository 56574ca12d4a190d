"""Minimal sanity checks for the GetBlock MCP tools against the live gateway."""

from __future__ import annotations

import asyncio
import os
import sys

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from getblock_mcp.tools import (  # noqa: E402
    get_chain_info,
    get_eth_gas_price,
    get_latest_blocks,
    get_solana_account,
    get_transaction,
    get_wallet_balance,
)

# Public addresses; override via env.
SAMPLE_ETH_ADDRESS = os.getenv("GETBLOCK_SAMPLE_ETH_ADDRESS", "0x00000000219ab540356cBB839Cbe05303d7705Fa")
SAMPLE_SOLANA_ADDRESS = os.getenv(
    "GETBLOCK_SAMPLE_SOLANA_ADDRESS", "Vote111111111111111111111111111111111111111"
)
# Optional transaction hash for lookup.
SAMPLE_ETH_TXID = os.getenv("GETBLOCK_SAMPLE_ETH_TXID")
# Opt-in to Solana checks (needs SOLANA_ACCESS_TOKEN).
RUN_SOLANA = os.getenv("RUN_SOLANA_SANITY", "false").lower() in {"1", "true", "yes"}


async def main() -> None:
    print("Chain info:", (await get_chain_info()).text[:200])
    print("Gas price:", (await get_eth_gas_price()).text)
    print("ETH balance:", (await get_wallet_balance(SAMPLE_ETH_ADDRESS)).text)
    print("Latest blocks (count 2):", (await get_latest_blocks(count=2)).text[:200])

    if SAMPLE_ETH_TXID:
        print("Transaction:", (await get_transaction(SAMPLE_ETH_TXID)).text[:200])

    if RUN_SOLANA:
        print("Solana version:", (await get_chain_info(chain="solana")).text)
        print("SOL balance:", (await get_wallet_balance(SAMPLE_SOLANA_ADDRESS, chain="solana")).text)
        print("Solana account:", (await get_solana_account(SAMPLE_SOLANA_ADDRESS)).text[:200])


if __name__ == "__main__":
    asyncio.run(main())
