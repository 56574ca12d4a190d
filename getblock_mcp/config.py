"""
Configuration helpers for the GetBlock MCP server.

This module centralizes the upstream base URL, per-chain access tokens, default
timeouts, and safety limits. No secrets are stored in the repository; tokens are
read from the environment (optionally seeded from a local ``.env`` file) once at
startup and never logged.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

load_dotenv()

# Default connection settings
DEFAULT_BASE_URL = "https://go.getblock.io"
DEFAULT_TIMEOUT = 10.0
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000

# Access token handling
ETH_TOKEN_ENV_VAR = "ETH_ACCESS_TOKEN"
SOLANA_TOKEN_ENV_VAR = "SOLANA_ACCESS_TOKEN"

# Safety limits
DEFAULT_BLOCK_COUNT = 5
MAX_BLOCK_COUNT = 100


def _load_timeout(environ: Mapping[str, str]) -> float:
    raw_timeout = environ.get("GETBLOCK_HTTP_TIMEOUT")
    if raw_timeout:
        try:
            return float(raw_timeout)
        except ValueError:
            return DEFAULT_TIMEOUT
    return DEFAULT_TIMEOUT


def _load_port(environ: Mapping[str, str]) -> int:
    raw_port = environ.get("GETBLOCK_MCP_PORT")
    if raw_port:
        try:
            return int(raw_port)
        except ValueError:
            return DEFAULT_PORT
    return DEFAULT_PORT


def _load_token(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(name)
    if value:
        return value.strip() or None
    return None


@dataclass(frozen=True, slots=True)
class GetBlockConfig:
    """Runtime configuration for GetBlock gateway access."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    eth_access_token: Optional[str] = None
    solana_access_token: Optional[str] = None
    default_block_count: int = DEFAULT_BLOCK_COUNT
    max_block_count: int = MAX_BLOCK_COUNT
    log_level: str = "INFO"
    log_format: str = "json"  # json or plain
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


def load_config(environ: Optional[Mapping[str, str]] = None) -> GetBlockConfig:
    """
    Build an immutable configuration from environment variables.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        A ``GetBlockConfig``; unset or invalid values fall back to defaults.
    """
    env = os.environ if environ is None else environ
    return GetBlockConfig(
        base_url=env.get("GETBLOCK_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        timeout=_load_timeout(env),
        eth_access_token=_load_token(env, ETH_TOKEN_ENV_VAR),
        solana_access_token=_load_token(env, SOLANA_TOKEN_ENV_VAR),
        log_level=env.get("GETBLOCK_MCP_LOG_LEVEL", "INFO"),
        log_format=env.get("GETBLOCK_MCP_LOG_FORMAT", "json"),
        host=env.get("GETBLOCK_MCP_HOST", DEFAULT_HOST),
        port=_load_port(env),
    )


default_config = load_config()
