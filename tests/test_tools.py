import json

import pytest

from getblock_mcp.chains import Chain
from getblock_mcp.config import GetBlockConfig
from getblock_mcp.metrics import default_metrics
from getblock_mcp.tools import (
    get_chain_info,
    get_eth_gas_price,
    get_latest_blocks,
    get_solana_account,
    get_transaction,
    get_wallet_balance,
)


@pytest.mark.asyncio
async def test_chain_info_eth_and_solana(stub_client_factory, ok):
    client = stub_client_factory(
        eth_getBlockByNumber=[ok({"number": "0x10"})],
        getVersion=[ok({"solana-core": "1.18.0"})],
    )
    eth = await get_chain_info(client=client)
    sol = await get_chain_info(chain="solana", client=client)
    assert eth.is_error is False
    assert json.loads(eth.text) == {"number": "0x10"}
    assert json.loads(sol.text) == {"solana-core": "1.18.0"}
    assert client.calls[0]["params"] == ["latest", False]
    assert client.calls[1]["chain"] is Chain.SOLANA


@pytest.mark.asyncio
async def test_chain_info_unsupported_chain_makes_no_call(stub_client_factory):
    client = stub_client_factory()
    result = await get_chain_info(chain="btc", client=client)
    assert result.is_error is True
    assert result.text == "Chain btc not supported for info checking"
    assert client.calls == []


@pytest.mark.asyncio
async def test_wallet_balance_eth(stub_client_factory, ok):
    client = stub_client_factory(eth_getBalance=[ok("0xde0b6b3a7640000")])
    result = await get_wallet_balance("0xabc", client=client)
    assert result.is_error is False
    assert "1 ETH" in result.text
    assert client.calls[0]["params"] == ["0xabc", "latest"]


@pytest.mark.asyncio
async def test_wallet_balance_solana(stub_client_factory, ok):
    client = stub_client_factory(getBalance=[ok({"context": {"slot": 5}, "value": 2500000000})])
    result = await get_wallet_balance("Sol1", chain="solana", client=client)
    assert "2.5 SOL" in result.text


@pytest.mark.asyncio
@pytest.mark.parametrize("address", [None, ""])
async def test_wallet_balance_requires_address(stub_client_factory, address):
    client = stub_client_factory()
    result = await get_wallet_balance(address, client=client)
    assert result.is_error is True
    assert result.text == "Address is required"
    assert client.calls == []


@pytest.mark.asyncio
async def test_wallet_balance_unsupported_chain(stub_client_factory):
    client = stub_client_factory()
    result = await get_wallet_balance("0xabc", chain="tron", client=client)
    assert result.text == "Chain tron not supported for balance checking"
    assert client.calls == []


@pytest.mark.asyncio
async def test_wallet_balance_upstream_error(stub_client_factory, fail):
    client = stub_client_factory(eth_getBalance=[fail("invalid address")])
    result = await get_wallet_balance("0xabc", client=client)
    assert result.is_error is True
    assert result.text == "Error: invalid address"


@pytest.mark.asyncio
async def test_transaction_requires_txid(stub_client_factory):
    client = stub_client_factory()
    result = await get_transaction(client=client)
    assert result.text == "Transaction ID is required"
    assert client.calls == []


@pytest.mark.asyncio
async def test_transaction_solana_params(stub_client_factory, ok):
    client = stub_client_factory(getTransaction=[ok({"slot": 7})])
    result = await get_transaction("sig", chain="solana", client=client)
    assert json.loads(result.text) == {"slot": 7}
    assert client.calls[0]["params"] == ["sig", {"encoding": "json"}]


@pytest.mark.asyncio
async def test_solana_account(stub_client_factory, ok):
    client = stub_client_factory(getAccountInfo=[ok({"value": {"lamports": 1}})])
    result = await get_solana_account("Sol1", client=client)
    assert json.loads(result.text) == {"value": {"lamports": 1}}
    assert client.calls[0]["params"] == ["Sol1", {"encoding": "jsonParsed"}]
    assert client.calls[0]["chain"] is Chain.SOLANA


@pytest.mark.asyncio
async def test_solana_account_requires_address(stub_client_factory):
    client = stub_client_factory()
    assert (await get_solana_account(client=client)).text == "Address is required"
    assert client.calls == []


@pytest.mark.asyncio
async def test_gas_price(stub_client_factory, ok):
    client = stub_client_factory(eth_gasPrice=[ok("0x3b9aca00")])
    result = await get_eth_gas_price(client=client)
    assert result.text == "Current Ethereum gas price: 1 Gwei"
    assert client.calls[0]["chain"] is Chain.ETH


@pytest.mark.asyncio
async def test_overrides_are_forwarded(stub_client_factory, ok):
    client = stub_client_factory(eth_gasPrice=[ok("0x1")])
    await get_eth_gas_price(client=client, overrides={"ETH_ACCESS_TOKEN": "t"})
    assert client.calls[0]["overrides"] == {"ETH_ACCESS_TOKEN": "t"}


@pytest.mark.asyncio
async def test_latest_blocks_eth_counts_down_from_tip(stub_client_factory, ok):
    client = stub_client_factory(
        eth_blockNumber=[ok("0x10")],
        eth_getBlockByNumber=[ok({"n": 16}), ok({"n": 15}), ok({"n": 14})],
    )
    result = await get_latest_blocks(count=3, client=client)
    assert json.loads(result.text) == [{"n": 16}, {"n": 15}, {"n": 14}]
    methods = [c["method"] for c in client.calls]
    assert methods == ["eth_blockNumber"] + ["eth_getBlockByNumber"] * 3
    assert [c["params"] for c in client.calls[1:]] == [["0x10", False], ["0xf", False], ["0xe", False]]


@pytest.mark.asyncio
async def test_latest_blocks_skips_failed_block(stub_client_factory, ok, fail):
    client = stub_client_factory(
        eth_blockNumber=[ok("0x10")],
        eth_getBlockByNumber=[ok({"n": 16}), fail("block not found"), ok({"n": 14})],
    )
    result = await get_latest_blocks(count=3, chain="eth", client=client)
    assert result.is_error is False
    assert json.loads(result.text) == [{"n": 16}, {"n": 14}]
    assert default_metrics.snapshot()["skipped_blocks"] == 1


@pytest.mark.asyncio
async def test_latest_blocks_solana_default_count(stub_client_factory, ok):
    client = stub_client_factory(
        getBlockHeight=[ok(100)],
        getBlock=[ok({"slot": 100 - i}) for i in range(5)],
    )
    result = await get_latest_blocks(chain="solana", client=client)
    assert len(json.loads(result.text)) == 5
    assert [c["params"][0] for c in client.calls[1:]] == [100, 99, 98, 97, 96]
    assert client.calls[1]["params"][1] == {"encoding": "json"}


@pytest.mark.asyncio
async def test_latest_blocks_tip_failure(stub_client_factory, fail):
    client = stub_client_factory(eth_blockNumber=[fail("rate limited")])
    result = await get_latest_blocks(count=2, client=client)
    assert result.is_error is True
    assert result.text == "Error: rate limited"
    assert len(client.calls) == 1


@pytest.mark.asyncio
async def test_latest_blocks_invalid_count_and_unsupported_chain(stub_client_factory):
    client = stub_client_factory()
    assert (await get_latest_blocks(count="lots", client=client)).text == "Invalid count."
    assert (await get_latest_blocks(count=2.5, client=client)).text == "Invalid count."
    unsupported = await get_latest_blocks(chain="btc", client=client)
    assert unsupported.text == "Chain btc not supported for block fetching"
    assert client.calls == []


@pytest.mark.asyncio
async def test_latest_blocks_count_is_clamped(stub_client_factory, ok):
    client = stub_client_factory(
        eth_blockNumber=[ok("0x64")],
        eth_getBlockByNumber=[ok({}), ok({})],
    )
    config = GetBlockConfig(max_block_count=2)
    result = await get_latest_blocks(count=50, client=client, config=config)
    assert json.loads(result.text) == [{}, {}]
    assert len(client.calls) == 3


@pytest.mark.asyncio
async def test_latest_blocks_zero_count(stub_client_factory, ok):
    client = stub_client_factory(eth_blockNumber=[ok("0x1")])
    result = await get_latest_blocks(count=0, client=client)
    assert result.text == "[]"
