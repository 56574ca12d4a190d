"""LLM-facing tool implementations."""

from .chain import get_chain_info, get_latest_blocks
from .account import get_solana_account, get_wallet_balance
from .transactions import get_transaction
from .gas import get_eth_gas_price
from . import validators

__all__ = [
    "get_chain_info",
    "get_latest_blocks",
    "get_wallet_balance",
    "get_solana_account",
    "get_transaction",
    "get_eth_gas_price",
    "validators",
]
