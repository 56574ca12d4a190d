"""
Thin JSON-RPC client for the GetBlock gateway.

Every request is a single POST to ``{base_url}/{access_token}``. The request
layer raises internal exceptions; ``GetBlockClient.call`` folds them into an
``RpcResult`` that the tool layer turns into user-facing messages.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

import httpx

from getblock_mcp.chains import Chain
from getblock_mcp.config import GetBlockConfig, default_config
from getblock_mcp.credentials import resolve_token
from getblock_mcp.metrics import default_metrics

logger = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"
REQUEST_ID = 1
CONNECT_FAILURE_MESSAGE = "Failed to connect to GetBlock API"
RPC_FALLBACK_MESSAGE = "Unknown error occurred"


class GetBlockApiError(Exception):
    """Base exception for GetBlock gateway errors."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UpstreamUnreachableError(GetBlockApiError):
    """Raised when the gateway cannot be reached."""


class UpstreamHttpError(GetBlockApiError):
    """Raised on a non-2xx response that carries no JSON-RPC error."""


class RpcProtocolError(GetBlockApiError):
    """Raised when the response carries a JSON-RPC ``error`` member."""


class UnexpectedResponseError(GetBlockApiError):
    """Raised when the body is not a JSON-RPC object."""


@dataclass(frozen=True, slots=True)
class RpcResult:
    """Outcome of one upstream call: either a raw result or an error message."""

    ok: bool
    value: Any = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: Any) -> "RpcResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, message: str) -> "RpcResult":
        return cls(ok=False, error=message)


def _redact(message: str, token: str) -> str:
    if token and token in message:
        return message.replace(token, "***")
    return message


class GetBlockClient:
    """Async client for the GetBlock JSON-RPC surface."""

    def __init__(
        self,
        config: GetBlockConfig | None = None,
        *,
        async_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config or default_config
        self._client: Optional[httpx.AsyncClient] = async_client
        self._owns_client = async_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url, timeout=self.config.timeout
            )
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _process_response(self, response: httpx.Response) -> Any:
        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict) and data.get("error") is not None:
            raw_error = data["error"]
            message = raw_error.get("message") if isinstance(raw_error, dict) else None
            raise RpcProtocolError(
                message if isinstance(message, str) and message else RPC_FALLBACK_MESSAGE,
                status_code=response.status_code,
            )

        if response.status_code >= 400:
            raise UpstreamHttpError(
                f"Request failed with status code {response.status_code}",
                status_code=response.status_code,
            )

        if not isinstance(data, dict):
            raise UnexpectedResponseError(
                "Unexpected response from upstream.", status_code=response.status_code
            )
        return data.get("result")

    async def _request(self, method: str, params: List[Any], token: str) -> Any:
        client = await self._get_client()
        payload: Dict[str, Any] = {
            "jsonrpc": JSONRPC_VERSION,
            "method": method,
            "params": params,
            "id": REQUEST_ID,
        }
        default_metrics.incr_upstream_call(method)
        try:
            response = await client.post(
                f"/{token}", json=payload, headers={"Content-Type": "application/json"}
            )
        except httpx.RequestError as exc:
            logger.warning("GetBlock gateway unreachable for method %s", method)
            raise UpstreamUnreachableError(
                _redact(str(exc), token) or CONNECT_FAILURE_MESSAGE
            ) from exc
        return self._process_response(response)

    async def call(
        self,
        method: str,
        params: Optional[List[Any]] = None,
        chain: Chain = Chain.ETH,
        *,
        overrides: Optional[Mapping[str, str]] = None,
    ) -> RpcResult:
        """
        Send one JSON-RPC request for ``chain`` and normalize the outcome.

        Args:
            method: JSON-RPC method name.
            params: Positional params list (defaults to empty).
            chain: Chain whose access token is used.
            overrides: Optional per-request token overrides keyed by env var name.

        Returns:
            ``RpcResult.success(result)`` or ``RpcResult.failure(message)``.
        """
        token = resolve_token(chain, self.config, overrides)
        try:
            result = await self._request(method, list(params or []), token)
        except GetBlockApiError as exc:
            logger.warning(
                "GetBlock call failed method=%s chain=%s error=%s",
                method,
                chain.value,
                exc.message,
                extra={"chain": chain.value, "error": exc.message},
            )
            default_metrics.incr_upstream_error(method)
            return RpcResult.failure(exc.message)
        return RpcResult.success(result)


default_client = GetBlockClient()
