"""Shared fixtures: a stub node standing in for the JSON-RPC endpoint."""

import pytest
from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector

from moac_toolkit.core.connection import MoacManager
from moac_toolkit.core.wallet import get_address

SECRET = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
TOKEN_ADDRESS = "0x" + "1f" * 20
OTHER_ADDRESS = "0x" + "ab" * 20
TX_HASH = "0x" + "5e" * 32


class StubNode:
    """Records every RPC call and answers from scripted results.

    A scripted result may be a value, an exception instance (raised) or a
    callable taking the params list.
    """

    def __init__(self):
        self.calls = []
        self.results = {}

    def script(self, method, result):
        self.results[method] = result
        return self

    def __call__(self, method, params=None):
        params = params if params is not None else []
        self.calls.append((method, params))
        if method not in self.results:
            raise AssertionError(f"unexpected rpc call {method}")
        result = self.results[method]
        if isinstance(result, Exception):
            raise result
        if callable(result):
            return result(params)
        return result

    @property
    def methods(self):
        return [method for method, _ in self.calls]

    def params_of(self, method):
        return [params for m, params in self.calls if m == method]


def selector(signature):
    return "0x" + function_signature_to_4byte_selector(signature).hex()


def abi_result(types, values):
    return "0x" + encode(types, values).hex()


def contract_responder(responses):
    """mc_call handler answering by 4-byte selector: {"decimals()": "0x..."}"""
    by_selector = {selector(sig): result for sig, result in responses.items()}

    def respond(params):
        data = params[0]["data"]
        return by_selector[data[:10]]

    return respond


@pytest.fixture
def node():
    return StubNode()


@pytest.fixture
def manager(node, monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MOAC_CONFIG_DIR", str(tmp_path))
    for name in ("MOAC_GAS_LIMIT", "MOAC_MIN_GAS_PRICE", "MOAC_MAINNET"):
        monkeypatch.delenv(name, raising=False)

    manager = MoacManager("http://127.0.0.1:8545", mainnet=True)
    monkeypatch.setattr(manager, "request", node)
    return manager


@pytest.fixture
def secret():
    return SECRET


@pytest.fixture
def sender():
    return get_address(SECRET)


@pytest.fixture
def chain_state(node):
    """Gas price 20000000000, nonce 5, empty pool, broadcast returns TX_HASH"""
    node.script("mc_gasPrice", "0x4a817c800")
    node.script("mc_getTransactionCount", "0x5")
    node.script("txpool_content", {"pending": {}, "queued": {}})
    node.script("mc_sendRawTransaction", TX_HASH)
    return node
