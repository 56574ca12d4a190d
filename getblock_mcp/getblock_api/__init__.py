"""HTTP client wrappers for the GetBlock JSON-RPC gateway."""

from .client import (
    GetBlockApiError,
    GetBlockClient,
    RpcProtocolError,
    RpcResult,
    UnexpectedResponseError,
    UpstreamHttpError,
    UpstreamUnreachableError,
    default_client,
)

__all__ = [
    "GetBlockClient",
    "GetBlockApiError",
    "RpcProtocolError",
    "RpcResult",
    "UnexpectedResponseError",
    "UpstreamHttpError",
    "UpstreamUnreachableError",
    "default_client",
]
