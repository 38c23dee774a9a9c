"""MOAC node connection management"""

import logging
import os

import requests
from web3 import Web3
from dotenv import load_dotenv

from .config import (
    Config,
    MAINNET,
    TESTNET,
    DEFAULT_GAS_LIMIT,
    DEFAULT_MIN_GAS_PRICE,
    env_flag,
    env_int,
)
from .exceptions import ConnectionError, ConfigError, RPCError
from . import wallet
from ..utils.units import from_sha, to_int
from ..utils.validators import HASH, check_guards, prefix0x

logger = logging.getLogger(__name__)

HASH_LENGTH = 66


class MoacManager:
    """Manages the JSON-RPC connection to a MOAC node"""

    def __init__(self, node=None, mainnet=None, request_timeout=30):
        """
        Initialize the node connection.

        Args:
            node: Node URL (defaults to MOAC_NODE from the environment)
            mainnet: True for chain id 99, False for 101 (defaults to MOAC_MAINNET)
            request_timeout: HTTP timeout in seconds
        """
        load_dotenv()
        load_dotenv("wallet.env")

        self.config = Config()
        self.node = node or os.getenv("MOAC_NODE")
        if not self.node:
            raise ConfigError("MOAC_NODE not found in environment")

        if mainnet is None:
            mainnet = env_flag("MOAC_MAINNET", default=True)
        self.network = MAINNET if mainnet else TESTNET

        self._gas_limit = env_int("MOAC_GAS_LIMIT", DEFAULT_GAS_LIMIT)
        self._min_gas_price = env_int("MOAC_MIN_GAS_PRICE", DEFAULT_MIN_GAS_PRICE)

        self.w3 = Web3(Web3.HTTPProvider(
            self.node,
            request_kwargs={"timeout": request_timeout},
            exception_retry_configuration=None,
        ))

    @property
    def chain_id(self):
        """Configured network id (99 mainnet, 101 testnet)"""
        return self.network

    @property
    def gas_limit(self):
        """Default gas limit for transactions"""
        return self._gas_limit

    @gas_limit.setter
    def gas_limit(self, gas):
        self._gas_limit = gas

    @property
    def min_gas_price(self):
        """Gas price floor, also used when the node cannot be queried"""
        return self._min_gas_price

    @min_gas_price.setter
    def min_gas_price(self, value):
        self._min_gas_price = value

    # Wallet helpers

    is_valid_address = staticmethod(wallet.is_valid_address)
    is_valid_secret = staticmethod(wallet.is_valid_secret)
    get_address = staticmethod(wallet.get_address)
    create_wallet = staticmethod(wallet.create_wallet)
    prefix0x = staticmethod(prefix0x)

    def is_connected(self):
        """True if the node answers a client version request"""
        try:
            self.request("web3_clientVersion")
        except (ConnectionError, RPCError):
            return False
        return True

    def request(self, method, params=None):
        """
        Send a single JSON-RPC request.

        Raises:
            ConnectionError: Transport failure
            RPCError: The node answered with an error payload
        """
        params = params if params is not None else []
        logger.debug("rpc %s %s", method, params)
        try:
            response = self.w3.provider.make_request(method, params)
        except requests.exceptions.RequestException as e:
            raise ConnectionError(f"Failed to reach {self.node}: {e}") from e

        error = response.get("error")
        if error:
            if isinstance(error, dict):
                raise RPCError(error.get("message", str(error)), error.get("code"), error.get("data"))
            raise RPCError(str(error))
        return response.get("result")

    def get_balance(self, address):
        """
        Get MOAC balance.

        Returns:
            Balance in MOAC as a decimal string, "0" if the request failed
        """
        try:
            balance = self.request("mc_getBalance", [address, "latest"])
            return from_sha(balance)
        except Exception as e:
            logger.debug("balance query for %s failed: %s", address, e)
            return "0"

    def get_transaction_count(self, address):
        """Confirmed transaction count of an address"""
        count = self.request("mc_getTransactionCount", [address, "latest"])
        return to_int(count)

    def get_txpool_content(self):
        """Pending and queued transactions known to the node"""
        return self.request("txpool_content")

    def get_gas_price(self):
        """Current gas price in sha as reported by the node"""
        return to_int(self.request("mc_gasPrice"))

    def send_raw_transaction(self, signed):
        """Submit a signed payload, returns the transaction hash"""
        return self.request("mc_sendRawTransaction", [signed])

    def get_transaction(self, tx_hash):
        """Transaction by hash, None if unknown"""
        check_guards([(0, HASH)], tx_hash)
        return self.request("mc_getTransactionByHash", [tx_hash.lower()])

    def get_transaction_receipt(self, tx_hash):
        """Transaction receipt by hash, None while pending"""
        check_guards([(0, HASH)], tx_hash)
        return self.request("mc_getTransactionReceipt", [tx_hash.lower()])

    def get_block(self, block, full_transactions=False):
        """
        Get a block by number, tag ("latest", "earliest", "pending") or hash.

        Returns:
            Block dict, None if the request failed
        """
        try:
            if isinstance(block, str) and len(block) == HASH_LENGTH and block.startswith("0x"):
                return self.request("mc_getBlockByHash", [block, full_transactions])
            if isinstance(block, str) and block in ("latest", "earliest", "pending"):
                tag = block
            else:
                tag = hex(to_int(block))
            return self.request("mc_getBlockByNumber", [tag, full_transactions])
        except Exception as e:
            logger.debug("block query for %s failed: %s", block, e)
            return None

    def call(self, tx, block="latest"):
        """Simulate a call against the node, returns the raw 0x output"""
        return self.request("mc_call", [tx, block])
