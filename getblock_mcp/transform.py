"""Conversion of raw upstream results into display text."""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any

from getblock_mcp.chains import Chain, Operation

WEI_PER_ETH_DECIMALS = 18
WEI_PER_GWEI_DECIMALS = 9
LAMPORTS_PER_SOL_DECIMALS = 9


def parse_hex_quantity(value: Any) -> int:
    """Parse a ``0x``-prefixed JSON-RPC quantity."""
    if not isinstance(value, str):
        raise ValueError(f"Expected a hex quantity, got {value!r}")
    return int(value, 16)


def scale_units(amount: int, decimals: int) -> str:
    """Render ``amount / 10**decimals`` exactly, without trailing zeros."""
    scaled = Decimal(amount).scaleb(-decimals).normalize()
    return format(scaled, "f")


def format_json(raw: Any) -> str:
    return json.dumps(raw, indent=2)


def format_eth_balance(address: str, raw: Any) -> str:
    ether = scale_units(parse_hex_quantity(raw), WEI_PER_ETH_DECIMALS)
    return f"Address {address} has balance: {ether} ETH"


def format_solana_balance(address: str, raw: Any) -> str:
    lamports = raw.get("value") if isinstance(raw, dict) else None
    if not isinstance(lamports, int):
        raise ValueError("Unexpected balance response from upstream.")
    return f"Address {address} has balance: {scale_units(lamports, LAMPORTS_PER_SOL_DECIMALS)} SOL"


def format_gas_price(raw: Any) -> str:
    gwei = scale_units(parse_hex_quantity(raw), WEI_PER_GWEI_DECIMALS)
    return f"Current Ethereum gas price: {gwei} Gwei"


def transform(operation: Operation, chain: Chain, raw: Any, *, address: str = "") -> str:
    """
    Convert a raw upstream result into display text.

    Balance and gas price results are scaled into ETH, SOL or Gwei; everything
    else is pretty-printed JSON.
    """
    if operation is Operation.WALLET_BALANCE:
        if chain is Chain.ETH:
            return format_eth_balance(address, raw)
        return format_solana_balance(address, raw)
    if operation is Operation.GAS_PRICE:
        return format_gas_price(raw)
    return format_json(raw)


def parse_block_height(raw: Any, *, hex_encoded: bool) -> int:
    """Return the chain tip as an int from an ``eth_blockNumber`` or ``getBlockHeight`` result."""
    if hex_encoded:
        return parse_hex_quantity(raw)
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError(f"Expected an integer block height, got {raw!r}")
    return raw
