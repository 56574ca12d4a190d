"""Chain-level tools: network info and recent blocks."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from getblock_mcp.chains import (
    Chain,
    Operation,
    UnsupportedChainError,
    map_operation,
    select_chain,
)
from getblock_mcp.config import GetBlockConfig, default_config
from getblock_mcp.getblock_api import default_client
from getblock_mcp.metrics import default_metrics
from getblock_mcp.responses import ToolResponse
from getblock_mcp.tools.common import run_single_call, upstream_error
from getblock_mcp.tools.validators import clamp_limit, parse_count
from getblock_mcp.transform import format_json, parse_block_height

logger = logging.getLogger(__name__)


async def get_chain_info(
    chain: Any = "eth",
    *,
    client=default_client,
    overrides: Optional[Mapping[str, str]] = None,
) -> ToolResponse:
    """
    Return general network information.

    Ethereum reports the latest block header; Solana reports the node version.
    """
    return await run_single_call(Operation.CHAIN_INFO, chain, client=client, overrides=overrides)


async def get_latest_blocks(
    count: Any = None,
    chain: Any = "eth",
    *,
    client=default_client,
    overrides: Optional[Mapping[str, str]] = None,
    config: GetBlockConfig = default_config,
) -> ToolResponse:
    """
    Return the most recent ``count`` blocks, newest first.

    The tip height is resolved first, then blocks are fetched one at a time
    counting down from the tip. Blocks whose fetch fails are left out of the
    result; the number skipped is logged and counted in metrics.

    Args:
        count: Number of blocks (default 5, clamped to ``config.max_block_count``).
        chain: ``eth`` or ``solana``.
        client: GetBlock client (override for testing).
        overrides: Optional per-request access tokens.
        config: Limits configuration.
    """
    requested = parse_count(count, default=config.default_block_count)
    if requested is None:
        return ToolResponse.error("Invalid count.")
    effective_count = clamp_limit(requested, max_value=config.max_block_count)

    try:
        selected = select_chain(Operation.BLOCK_HEIGHT, chain)
        height_call = map_operation(Operation.BLOCK_HEIGHT, selected)
    except UnsupportedChainError as exc:
        return ToolResponse.error(str(exc))

    height_result = await client.call(
        height_call.method, height_call.params, selected, overrides=overrides
    )
    if not height_result.ok:
        return upstream_error(height_result.error)
    tip = parse_block_height(height_result.value, hex_encoded=selected is Chain.ETH)

    blocks = []
    for offset in range(effective_count):
        block_call = map_operation(Operation.BLOCK, selected, number=tip - offset)
        result = await client.call(block_call.method, block_call.params, selected, overrides=overrides)
        if result.ok:
            blocks.append(result.value)

    skipped = effective_count - len(blocks)
    if skipped:
        logger.warning(
            "Skipped %d of %d blocks below tip %d on %s",
            skipped,
            effective_count,
            tip,
            selected.value,
            extra={"chain": selected.value},
        )
        default_metrics.incr_skipped_blocks(skipped)
    return ToolResponse.success(format_json(blocks))
