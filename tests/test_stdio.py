import pytest

from getblock_mcp import stdio
from getblock_mcp.metrics import default_metrics
from getblock_mcp.responses import ToolResponse


@pytest.mark.asyncio
async def test_stdio_lists_registry_tools():
    tools = await stdio.list_tools()
    assert [tool.name for tool in tools] == [
        "get-chain-info",
        "get-wallet-balance",
        "get-transaction",
        "get-latest-blocks",
        "get-solana-account",
        "get-eth-gas-price",
    ]
    balance = next(t for t in tools if t.name == "get-wallet-balance")
    assert balance.inputSchema["required"] == ["address"]


@pytest.mark.asyncio
async def test_stdio_call_tool_wraps_registry_result(monkeypatch):
    seen = {}

    async def fake_call_tool(name, arguments):
        seen["name"] = name
        seen["arguments"] = arguments
        return ToolResponse.success("Current gas price: 1 Gwei")

    monkeypatch.setattr(stdio.tool_registry, "call_tool", fake_call_tool)
    result = await stdio.call_tool("get-eth-gas-price", None)
    assert seen == {"name": "get-eth-gas-price", "arguments": {}}
    assert result.isError is False
    assert result.content[0].type == "text"
    assert result.content[0].text == "Current gas price: 1 Gwei"
    assert default_metrics.snapshot()["tool_success"] == {"get-eth-gas-price": 1}


@pytest.mark.asyncio
async def test_stdio_call_tool_keeps_error_in_band(monkeypatch):
    async def fake_call_tool(name, arguments):
        return ToolResponse.error(f"Unknown tool: {name}")

    monkeypatch.setattr(stdio.tool_registry, "call_tool", fake_call_tool)
    result = await stdio.call_tool("get-price", {"chain": "eth"})
    assert result.isError is True
    assert result.content[0].text == "Unknown tool: get-price"
    assert default_metrics.snapshot()["tool_error"] == {"get-price": 1}


def test_main_exits_one_on_fatal_transport_error(monkeypatch, caplog):
    async def broken_serve():
        raise OSError("stdin closed")

    monkeypatch.setattr(stdio, "serve", broken_serve)
    with pytest.raises(SystemExit) as exc_info:
        stdio.main()
    assert exc_info.value.code == 1
    assert "Fatal error running server" in caplog.text
