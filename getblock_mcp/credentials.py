"""Access-token resolution for the GetBlock gateway."""

from __future__ import annotations

from typing import Mapping, Optional

from getblock_mcp.chains import Chain
from getblock_mcp.config import (
    ETH_TOKEN_ENV_VAR,
    SOLANA_TOKEN_ENV_VAR,
    GetBlockConfig,
    default_config,
)

TOKEN_ENV_VARS = {
    Chain.ETH: ETH_TOKEN_ENV_VAR,
    Chain.SOLANA: SOLANA_TOKEN_ENV_VAR,
}

PLACEHOLDER_TOKENS = {
    Chain.ETH: "YOUR_ETH_TOKEN_HERE",
    Chain.SOLANA: "YOUR_SOLANA_TOKEN_HERE",
}


def resolve_token(
    chain: Chain,
    config: GetBlockConfig = default_config,
    overrides: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Return the access token for ``chain``.

    Priority: per-request ``overrides`` (keyed by env var name), then the
    startup configuration, then a placeholder. Never raises; a placeholder
    token is rejected later by the gateway.
    """
    override = (overrides or {}).get(TOKEN_ENV_VARS[chain])
    if override:
        return override
    configured = (
        config.eth_access_token if chain is Chain.ETH else config.solana_access_token
    )
    if configured:
        return configured
    return PLACEHOLDER_TOKENS[chain]
