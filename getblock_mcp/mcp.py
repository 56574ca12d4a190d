"""
Tool registry and dispatch for the MCP surface.

This maps tool names to their implementations and input schemas. It is
stateless; per-request access-token overrides are passed in by the hosting
transport.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from getblock_mcp.config import MAX_BLOCK_COUNT
from getblock_mcp.responses import ToolResponse
from getblock_mcp.tools import (
    get_chain_info,
    get_eth_gas_price,
    get_latest_blocks,
    get_solana_account,
    get_transaction,
    get_wallet_balance,
)

logger = logging.getLogger(__name__)

ToolCallable = Callable[..., Awaitable[ToolResponse]]


def _chain_schema() -> Dict[str, Any]:
    return {
        "type": "string",
        "description": "Blockchain network (e.g., eth, solana)",
        "default": "eth",
    }


@dataclass(slots=True)
class ToolDefinition:
    name: str
    description: str
    input_schema: Dict[str, Any]
    callable: ToolCallable

    @property
    def argument_names(self) -> List[str]:
        return list(self.input_schema.get("properties", {}))


TOOL_REGISTRY: Dict[str, ToolDefinition] = {
    "get-chain-info": ToolDefinition(
        name="get-chain-info",
        description="Get general information about a blockchain network",
        input_schema={
            "type": "object",
            "properties": {"chain": _chain_schema()},
            "required": [],
        },
        callable=get_chain_info,
    ),
    "get-wallet-balance": ToolDefinition(
        name="get-wallet-balance",
        description="Get the balance of a wallet address on a blockchain",
        input_schema={
            "type": "object",
            "properties": {
                "address": {"type": "string", "description": "The wallet address to check"},
                "chain": _chain_schema(),
            },
            "required": ["address"],
        },
        callable=get_wallet_balance,
    ),
    "get-transaction": ToolDefinition(
        name="get-transaction",
        description="Get details of a specific transaction",
        input_schema={
            "type": "object",
            "properties": {
                "txid": {"type": "string", "description": "Transaction ID/hash"},
                "chain": _chain_schema(),
            },
            "required": ["txid"],
        },
        callable=get_transaction,
    ),
    "get-latest-blocks": ToolDefinition(
        name="get-latest-blocks",
        description="Get information about recent blocks",
        input_schema={
            "type": "object",
            "properties": {
                "count": {
                    "type": "number",
                    "description": "Number of recent blocks to fetch",
                    "default": 5,
                    "minimum": 0,
                    "maximum": MAX_BLOCK_COUNT,
                },
                "chain": _chain_schema(),
            },
            "required": [],
        },
        callable=get_latest_blocks,
    ),
    "get-solana-account": ToolDefinition(
        name="get-solana-account",
        description="Get account information from Solana blockchain",
        input_schema={
            "type": "object",
            "properties": {
                "address": {"type": "string", "description": "The Solana account address"},
            },
            "required": ["address"],
        },
        callable=get_solana_account,
    ),
    "get-eth-gas-price": ToolDefinition(
        name="get-eth-gas-price",
        description="Get current gas price on Ethereum network",
        input_schema={"type": "object", "properties": {}, "required": []},
        callable=get_eth_gas_price,
    ),
}


def list_tools() -> List[Dict[str, Any]]:
    """Return the tool descriptors advertised by ``tools/list``."""
    return [
        {
            "name": tool.name,
            "description": tool.description,
            "inputSchema": tool.input_schema,
        }
        for tool in TOOL_REGISTRY.values()
    ]


async def call_tool(
    tool_name: str,
    arguments: Optional[Mapping[str, Any]] = None,
    *,
    overrides: Optional[Mapping[str, str]] = None,
    client=None,
) -> ToolResponse:
    """
    Dispatch to a tool by name.

    Undeclared arguments are dropped. Any exception raised by the tool is
    reported as an error response rather than propagated.
    """
    tool = TOOL_REGISTRY.get(tool_name)
    if tool is None:
        return ToolResponse.error(f"Unknown tool: {tool_name}")

    accepted = tool.argument_names
    kwargs: Dict[str, Any] = {
        key: value for key, value in (arguments or {}).items() if key in accepted
    }
    ignored = set(arguments or {}) - set(kwargs)
    if ignored:
        logger.debug("tool=%s ignoring arguments %s", tool_name, sorted(ignored))
    if client is not None:
        kwargs["client"] = client

    try:
        return await tool.callable(**kwargs, overrides=overrides)
    except Exception as exc:
        logger.exception("Unexpected error calling tool %s", tool_name, extra={"tool": tool_name})
        return ToolResponse.error(f"Error: {exc}")
