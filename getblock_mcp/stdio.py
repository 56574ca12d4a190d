"""MCP stdio transport exposing the same tool registry as the HTTP gateway."""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any, Dict, List

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from getblock_mcp import mcp as tool_registry
from getblock_mcp.getblock_api import default_client
from getblock_mcp.server import MCP_SERVER_NAME, MCP_SERVER_VERSION, _log_tool_result

# stdout carries the protocol; logging set up by getblock_mcp.server writes to stderr.
logger = logging.getLogger(__name__)

app = Server(MCP_SERVER_NAME, version=MCP_SERVER_VERSION)


@app.list_tools()
async def list_tools() -> List[types.Tool]:
    return [
        types.Tool(name=tool["name"], description=tool["description"], inputSchema=tool["inputSchema"])
        for tool in tool_registry.list_tools()
    ]


@app.call_tool(validate_input=False)
async def call_tool(name: str, arguments: Dict[str, Any] | None) -> types.CallToolResult:
    result = await tool_registry.call_tool(name, arguments if isinstance(arguments, dict) else {})
    _log_tool_result(name, result)
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=result.text)],
        isError=result.is_error,
    )


async def serve() -> None:
    try:
        async with stdio_server() as (read_stream, write_stream):
            await app.run(read_stream, write_stream, app.create_initialization_options())
    finally:
        await default_client.aclose()


def main() -> None:
    """Serve the tools over stdio; exit with status 1 on a fatal transport error."""
    logger.info("GetBlock MCP Server running on stdio")
    try:
        asyncio.run(serve())
    except Exception:
        logger.critical("Fatal error running server", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
