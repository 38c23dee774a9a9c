"""Transaction assembly, signing and submission for MOAC"""

import logging

from .gas import GasPriceAdvisor
from .nonce import NonceResolver
from .units import int_to_hex, to_sha, to_int
from ..core.wallet import get_address, sign_transaction

logger = logging.getLogger(__name__)

EMPTY_CALLDATA = "0x00"


def build_tx(from_address, to, nonce, gas_limit, gas_price, value, calldata, chain_id):
    """
    Assemble an unsigned MOAC transaction record.

    Args:
        from_address: Sender address
        to: Recipient or contract address (omitted from the record if falsy)
        nonce: Sender nonce
        gas_limit: Gas limit
        gas_price: Gas price in sha
        value: Amount of MOAC as a decimal string
        calldata: 0x call-data ("0x00" if falsy)
        chain_id: Network id (99 mainnet, 101 testnet)

    Returns:
        Transaction record with 0x-hex numeric fields
    """
    tx = {
        "chainId": hex(to_int(chain_id)),
        "data": calldata or EMPTY_CALLDATA,
        "from": from_address,
        "gasLimit": int_to_hex(gas_limit),
        "gasPrice": int_to_hex(gas_price),
        "nonce": int_to_hex(nonce),
        "shardingFlag": "0x0",
        "systemContract": "0x0",
        "value": hex(to_sha(value)),
        "via": "0x",
    }
    if to:
        tx["to"] = to
    return tx


class TransactionBuilder:
    """Resolve options, build, sign and broadcast MOAC transactions"""

    def __init__(self, manager, gas_advisor=None, nonce_resolver=None):
        """
        Args:
            manager: MoacManager instance
            gas_advisor: GasPriceAdvisor instance (created if None, loads gas_config.json)
            nonce_resolver: NonceResolver instance (created if None)
        """
        self.manager = manager
        self.gas_advisor = gas_advisor or GasPriceAdvisor(manager)
        self.nonce_resolver = nonce_resolver or NonceResolver(manager)

    def build(self, from_address, to, nonce, gas_limit, gas_price, value, calldata):
        """build_tx on the manager's network"""
        return build_tx(
            from_address, to, nonce, gas_limit, gas_price, value, calldata,
            self.manager.chain_id,
        )

    def resolve_options(self, options, address, operation_type=None):
        """
        Fill in the transaction options the caller did not give.

        The nonce is resolved first so that a failing node query aborts
        before anything else is requested.

        Args:
            options: Dict with optional nonce, gasPrice, gasLimit
            address: Sender address
            operation_type: Operation name for the gas limit lookup

        Returns:
            New dict with nonce, gasPrice and gasLimit all present
        """
        resolved = dict(options or {})
        if resolved.get("nonce") is None:
            resolved["nonce"] = self.nonce_resolver.get_nonce(address)
        if not resolved.get("gasPrice"):
            resolved["gasPrice"] = self.gas_advisor.get_gas_price(
                self.gas_advisor.min_gas_price
            )
        if not resolved.get("gasLimit"):
            resolved["gasLimit"] = self.gas_advisor.get_gas_limit(operation_type)
        return resolved

    def sign(self, tx, secret):
        return sign_transaction(tx, secret)

    def broadcast(self, signed):
        """
        Submit a signed payload once.

        Returns:
            Transaction hash

        Raises:
            RPCError: Node rejection, with the node's message
            ConnectionError: Transport failure
        """
        tx_hash = self.manager.send_raw_transaction(signed)
        logger.info("broadcast %s", tx_hash)
        return tx_hash

    def send_transaction_with_calldata(self, secret, to, value, calldata,
                                       options=None, operation_type=None):
        """
        Resolve options, build, sign and broadcast a transaction.

        Args:
            secret: Sender secret (already validated by the caller)
            to: Recipient or contract address
            value: Amount of MOAC as a decimal string
            calldata: Call-data, or a callable returning it, evaluated after
                the options are resolved
            options: Optional nonce, gasPrice, gasLimit
            operation_type: Operation name for the gas limit lookup

        Returns:
            Transaction hash
        """
        sender = get_address(secret)
        resolved = self.resolve_options(options, sender, operation_type)
        if callable(calldata):
            calldata = calldata()

        tx = self.build(
            sender, to, resolved["nonce"], resolved["gasLimit"],
            resolved["gasPrice"], value, calldata,
        )
        signed = self.sign(tx, secret)
        return self.broadcast(signed)


def format_gas_cost(gas, gas_price):
    """Maximum transaction cost in MOAC as float"""
    return to_int(gas) * to_int(gas_price) / 1e18
