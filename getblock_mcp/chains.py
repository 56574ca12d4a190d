"""Chain selectors and the operation -> JSON-RPC method table."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Tuple


class Chain(str, Enum):
    """Supported chains. Values match the ``chain`` tool argument."""

    ETH = "eth"
    SOLANA = "solana"


DEFAULT_CHAIN = Chain.ETH


class Operation(str, Enum):
    CHAIN_INFO = "chain-info"
    WALLET_BALANCE = "wallet-balance"
    TRANSACTION = "transaction"
    BLOCK_HEIGHT = "block-height"
    BLOCK = "block"
    ACCOUNT_INFO = "account-info"
    GAS_PRICE = "gas-price"


# Used in "Chain X not supported for ..." messages.
OPERATION_PURPOSE: Dict[Operation, str] = {
    Operation.CHAIN_INFO: "info checking",
    Operation.WALLET_BALANCE: "balance checking",
    Operation.TRANSACTION: "transaction lookup",
    Operation.BLOCK_HEIGHT: "block fetching",
    Operation.BLOCK: "block fetching",
    Operation.ACCOUNT_INFO: "account lookup",
    Operation.GAS_PRICE: "gas price lookup",
}


@dataclass(frozen=True, slots=True)
class RpcCall:
    """A single upstream JSON-RPC method invocation."""

    method: str
    params: List[Any] = field(default_factory=list)


class UnsupportedChainError(Exception):
    """Raised when an (operation, chain) pair has no upstream mapping."""

    def __init__(self, operation: Operation, chain: str) -> None:
        self.operation = operation
        self.chain = chain
        super().__init__(f"Chain {chain} not supported for {OPERATION_PURPOSE[operation]}")


def parse_chain(value: Any) -> Chain | None:
    """Return the ``Chain`` for a selector string, or None if unsupported."""
    if isinstance(value, Chain):
        return value
    try:
        return Chain(value)
    except ValueError:
        return None


def select_chain(operation: Operation, chain: Any) -> Chain:
    """
    Resolve the ``chain`` tool argument for ``operation``.

    None selects the default chain (eth).

    Raises:
        UnsupportedChainError: If the selector is not a known chain.
    """
    selected = parse_chain(DEFAULT_CHAIN if chain is None else chain)
    if selected is None:
        raise UnsupportedChainError(operation, str(chain))
    return selected


def _eth_block(number: int) -> RpcCall:
    return RpcCall("eth_getBlockByNumber", [hex(number), False])


def _solana_block(number: int) -> RpcCall:
    return RpcCall("getBlock", [number, {"encoding": "json"}])


_METHOD_TABLE: Dict[Tuple[Operation, Chain], Callable[..., RpcCall]] = {
    (Operation.CHAIN_INFO, Chain.ETH): lambda: RpcCall("eth_getBlockByNumber", ["latest", False]),
    (Operation.CHAIN_INFO, Chain.SOLANA): lambda: RpcCall("getVersion", []),
    (Operation.WALLET_BALANCE, Chain.ETH): lambda address: RpcCall("eth_getBalance", [address, "latest"]),
    (Operation.WALLET_BALANCE, Chain.SOLANA): lambda address: RpcCall("getBalance", [address]),
    (Operation.TRANSACTION, Chain.ETH): lambda txid: RpcCall("eth_getTransactionByHash", [txid]),
    (Operation.TRANSACTION, Chain.SOLANA): lambda txid: RpcCall(
        "getTransaction", [txid, {"encoding": "json"}]
    ),
    (Operation.BLOCK_HEIGHT, Chain.ETH): lambda: RpcCall("eth_blockNumber", []),
    (Operation.BLOCK_HEIGHT, Chain.SOLANA): lambda: RpcCall("getBlockHeight", []),
    (Operation.BLOCK, Chain.ETH): _eth_block,
    (Operation.BLOCK, Chain.SOLANA): _solana_block,
    (Operation.ACCOUNT_INFO, Chain.SOLANA): lambda address: RpcCall(
        "getAccountInfo", [address, {"encoding": "jsonParsed"}]
    ),
    (Operation.GAS_PRICE, Chain.ETH): lambda: RpcCall("eth_gasPrice", []),
}


def map_operation(operation: Operation, chain: Chain | str, **args: Any) -> RpcCall:
    """
    Translate an operation and chain selector into the upstream method call.

    Args:
        operation: Abstract operation to perform.
        chain: Chain selector; plain strings are accepted and validated here.
        **args: Operation arguments (``address``, ``txid`` or ``number``).

    Returns:
        The ``RpcCall`` to send upstream.

    Raises:
        UnsupportedChainError: If the chain is unknown or the operation has no
            mapping for it.
    """
    selected = select_chain(operation, chain)
    builder = _METHOD_TABLE.get((operation, selected))
    if builder is None:
        raise UnsupportedChainError(operation, selected.value)
    return builder(**args)
