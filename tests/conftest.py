import os
import sys

import pytest

# Ensure repository root is on sys.path before importing project modules.
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from getblock_mcp.getblock_api import RpcResult  # noqa: E402
from getblock_mcp.metrics import default_metrics  # noqa: E402


@pytest.fixture(autouse=True)
def reset_metrics():
    default_metrics.reset()
    yield
    default_metrics.reset()


class StubClient:
    """Records upstream calls and replays queued results per method."""

    def __init__(self, results=None):
        self.results = {method: list(values) for method, values in (results or {}).items()}
        self.calls = []

    async def call(self, method, params=None, chain=None, *, overrides=None):
        self.calls.append({"method": method, "params": params, "chain": chain, "overrides": overrides})
        queued = self.results.get(method)
        if not queued:
            raise AssertionError(f"Unexpected upstream call: {method}")
        return queued.pop(0)


@pytest.fixture
def stub_client_factory():
    def _make(**results):
        return StubClient(results)

    return _make


@pytest.fixture
def ok():
    return RpcResult.success


@pytest.fixture
def fail():
    return RpcResult.failure
