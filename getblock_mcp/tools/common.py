"""Single-call tool pipeline: map, resolve token, call, transform."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from getblock_mcp.chains import Operation, UnsupportedChainError, map_operation, select_chain
from getblock_mcp.responses import ToolResponse
from getblock_mcp.transform import transform


def upstream_error(message: Optional[str]) -> ToolResponse:
    return ToolResponse.error(f"Error: {message}")


async def run_single_call(
    operation: Operation,
    chain: Any,
    *,
    client,
    overrides: Optional[Mapping[str, str]] = None,
    **args: Any,
) -> ToolResponse:
    """
    Execute one upstream call for ``operation`` and format the result.

    An unsupported chain returns an error response before any network call.
    """
    try:
        selected = select_chain(operation, chain)
        rpc_call = map_operation(operation, selected, **args)
    except UnsupportedChainError as exc:
        return ToolResponse.error(str(exc))

    result = await client.call(rpc_call.method, rpc_call.params, selected, overrides=overrides)
    if not result.ok:
        return upstream_error(result.error)
    return ToolResponse.success(
        transform(operation, selected, result.value, address=args.get("address", ""))
    )
