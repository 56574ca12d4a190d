"""
Read-only GetBlock MCP server package.

This package exposes LLM-friendly blockchain read tools (Ethereum and Solana)
backed by a single GetBlock JSON-RPC gateway. See DESIGN.md for full details.
"""

__all__ = ["config"]
