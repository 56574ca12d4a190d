"""FastAPI application wiring GetBlock MCP tools to HTTP routes."""

from __future__ import annotations

import json
import logging
import sys
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, Response

from getblock_mcp import mcp
from getblock_mcp.config import ETH_TOKEN_ENV_VAR, SOLANA_TOKEN_ENV_VAR, GetBlockConfig, default_config
from getblock_mcp.getblock_api import default_client
from getblock_mcp.metrics import default_metrics
from getblock_mcp.responses import ToolResponse

logger = logging.getLogger(__name__)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
        }
        for key in ("tool", "request_id", "error", "chain"):
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def resolve_log_level(config: GetBlockConfig) -> int:
    """Map the configured level name to a logging level, defaulting to INFO."""
    level = getattr(logging, config.log_level.upper(), None)
    return level if isinstance(level, int) else logging.INFO


_log_level = resolve_log_level(default_config)
if default_config.log_format.lower() == "json":
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=_log_level, handlers=[handler])
else:
    logging.basicConfig(level=_log_level)

HEALTH_STATUS = {"status": "ok"}
APP_VERSION = "1.0.0"
MCP_SERVER_NAME = "mcp-getblock"
MCP_SERVER_VERSION = APP_VERSION

# Request headers that may carry per-request access tokens.
TOKEN_OVERRIDE_HEADERS = {
    "x-eth-access-token": ETH_TOKEN_ENV_VAR,
    "x-solana-access-token": SOLANA_TOKEN_ENV_VAR,
}


@asynccontextmanager
async def lifespan(_app: FastAPI):
    # Startup
    yield
    # Shutdown
    await default_client.aclose()


app = FastAPI(
    title="GetBlock MCP Server",
    description="Read-only Ethereum and Solana tool surface for LLM agents.",
    version=APP_VERSION,
    lifespan=lifespan,
)


@app.middleware("http")
async def add_request_context(request: Request, call_next):
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    start = time.time()
    default_metrics.incr_request()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000
    default_metrics.record_duration(request_id, duration_ms)
    response.headers["X-Request-ID"] = request_id
    return response


def _token_overrides(request: Request) -> Optional[Dict[str, str]]:
    overrides = {
        env_var: request.headers[header]
        for header, env_var in TOKEN_OVERRIDE_HEADERS.items()
        if request.headers.get(header)
    }
    return overrides or None


def _log_tool_result(tool_name: str, result: ToolResponse, request_id: Optional[str] = None) -> None:
    if not isinstance(result, ToolResponse) or result.is_error:
        error = result.text if isinstance(result, ToolResponse) else "invalid result"
        logger.warning(
            "tool=%s outcome=error error=%s request_id=%s",
            tool_name,
            error,
            request_id,
            extra={"tool": tool_name, "request_id": request_id, "error": error},
        )
        default_metrics.record_tool(tool_name, success=False)
    else:
        logger.info(
            "tool=%s outcome=success request_id=%s",
            tool_name,
            request_id,
            extra={"tool": tool_name, "request_id": request_id},
        )
        default_metrics.record_tool(tool_name, success=True)


async def _run_tool(request: Request, tool_name: str, arguments: Dict[str, Any]) -> ToolResponse:
    result = await mcp.call_tool(tool_name, arguments, overrides=_token_overrides(request))
    request_id = getattr(request.state, "request_id", None)
    _log_tool_result(tool_name, result, request_id)
    return result


@app.get("/health")
async def health() -> JSONResponse:
    """Lightweight health endpoint for monitoring."""
    return JSONResponse(content=HEALTH_STATUS)


@app.get("/metrics")
async def metrics() -> JSONResponse:
    """Return in-process metrics snapshot."""
    return JSONResponse(content=default_metrics.snapshot())


@app.get("/tools/chain_info")
async def chain_info(request: Request, chain: str = "eth") -> JSONResponse:
    """Proxy for get-chain-info tool."""
    result = await _run_tool(request, "get-chain-info", {"chain": chain})
    return JSONResponse(content=result.to_dict())


@app.get("/tools/wallet_balance/{address}")
async def wallet_balance(address: str, request: Request, chain: str = "eth") -> JSONResponse:
    """Proxy for get-wallet-balance tool."""
    result = await _run_tool(request, "get-wallet-balance", {"address": address, "chain": chain})
    return JSONResponse(content=result.to_dict())


@app.get("/tools/transaction/{txid}")
async def transaction(txid: str, request: Request, chain: str = "eth") -> JSONResponse:
    """Proxy for get-transaction tool."""
    result = await _run_tool(request, "get-transaction", {"txid": txid, "chain": chain})
    return JSONResponse(content=result.to_dict())


@app.get("/tools/latest_blocks")
async def latest_blocks(
    request: Request,
    count: int | None = Query(None, ge=0),
    chain: str = "eth",
) -> JSONResponse:
    """Proxy for get-latest-blocks tool."""
    result = await _run_tool(request, "get-latest-blocks", {"count": count, "chain": chain})
    return JSONResponse(content=result.to_dict())


@app.get("/tools/solana_account/{address}")
async def solana_account(address: str, request: Request) -> JSONResponse:
    """Proxy for get-solana-account tool."""
    result = await _run_tool(request, "get-solana-account", {"address": address})
    return JSONResponse(content=result.to_dict())


@app.get("/tools/eth_gas_price")
async def eth_gas_price(request: Request) -> JSONResponse:
    """Proxy for get-eth-gas-price tool."""
    result = await _run_tool(request, "get-eth-gas-price", {})
    return JSONResponse(content=result.to_dict())


@app.post("/mcp")
async def mcp_gateway(request: Request) -> Response:
    """
    Minimal JSON-RPC gateway for MCP clients.

    Supported methods:
      - initialize
      - list_tools / tools/list
      - call_tool / tools/call
      - notifications/initialized
    """
    request_id = getattr(request.state, "request_id", None)
    start_time = time.time()

    def _respond(payload: Dict[str, Any], status_code: int = 200, *, outcome: str, method_label: Optional[str] = None, tool_label: Optional[str] = None, error_code: Optional[int] = None) -> JSONResponse:
        duration_ms = (time.time() - start_time) * 1000
        logger.debug(
            "mcp outcome=%s method=%s tool=%s id=%s status=%s duration_ms=%.2f error_code=%s",
            outcome,
            method_label,
            tool_label,
            payload.get("id"),
            status_code,
            duration_ms,
            error_code,
            extra={"request_id": request_id, "tool": tool_label, "error": error_code},
        )
        return JSONResponse(status_code=status_code, content=payload)

    try:
        body = await request.json()
    except ValueError:
        payload = _jsonrpc_error_payload(None, -32700, "Parse error")
        return _respond(payload, status_code=400, outcome="error", error_code=-32700)

    if not isinstance(body, dict):
        payload = _jsonrpc_error_payload(None, -32600, "Invalid request")
        return _respond(payload, status_code=400, outcome="error", error_code=-32600)

    method = body.get("method")
    rpc_id = body.get("id")
    raw_params = body.get("params")
    if raw_params is None:
        params = {}
    elif isinstance(raw_params, dict):
        params = raw_params
    else:
        payload = _jsonrpc_error_payload(rpc_id, -32602, "Invalid params")
        return _respond(payload, outcome="error", method_label=method, error_code=-32602)

    if not method:
        payload = _jsonrpc_error_payload(rpc_id, -32600, "Invalid request")
        return _respond(payload, outcome="error", error_code=-32600)

    if method == "initialize":
        protocol_version = params.get("protocolVersion")
        if not isinstance(protocol_version, str) or not protocol_version:
            payload = _jsonrpc_error_payload(rpc_id, -32602, "Invalid params")
            return _respond(payload, outcome="error", method_label=method, error_code=-32602)
        result = {
            "protocolVersion": protocol_version,
            "serverInfo": {"name": MCP_SERVER_NAME, "version": MCP_SERVER_VERSION},
            "capabilities": {"tools": {"listChanged": False}},
        }
        return _respond(_jsonrpc_success_payload(rpc_id, result), outcome="success", method_label=method)

    if method in ("list_tools", "tools/list"):
        result = {"tools": mcp.list_tools()}
        return _respond(_jsonrpc_success_payload(rpc_id, result), outcome="success", method_label=method)

    if method in ("call_tool", "tools/call"):
        tool_name = params.get("name") or params.get("tool")
        arguments = params.get("arguments")
        if arguments is None:
            arguments = params.get("params") or {}
        if not isinstance(tool_name, str) or not tool_name.strip():
            payload = _jsonrpc_error_payload(rpc_id, -32602, "Invalid params")
            return _respond(payload, outcome="error", method_label=method, error_code=-32602)
        if not isinstance(arguments, dict):
            payload = _jsonrpc_error_payload(rpc_id, -32602, "Invalid params")
            return _respond(payload, outcome="error", method_label=method, tool_label=tool_name, error_code=-32602)
        result = await _run_tool(request, tool_name, arguments)
        return _respond(
            _jsonrpc_success_payload(rpc_id, result.to_dict()),
            outcome="error" if result.is_error else "success",
            method_label=method,
            tool_label=tool_name,
        )

    if method in ("notifications/initialized", "initialized"):
        # Notifications do not get a JSON-RPC response body.
        return Response(status_code=204)

    payload = _jsonrpc_error_payload(rpc_id, -32601, "Method not found")
    return _respond(payload, outcome="error", method_label=method, error_code=-32601)


def _jsonrpc_success_payload(rpc_id: Any, result: Any) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "result": result}


def _jsonrpc_error_payload(rpc_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "error": {"code": code, "message": message}}


def main() -> None:
    """Run the server with uvicorn; exit with status 1 on a fatal startup error."""
    logger.info("GetBlock MCP Server starting on %s:%s", default_config.host, default_config.port)
    try:
        uvicorn.run(app, host=default_config.host, port=default_config.port)
    except Exception:
        logger.critical("Fatal error running server", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
