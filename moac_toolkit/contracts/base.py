"""Generic smart contract client"""

from .abi import ContractInstance, call_abi
from ..core.config import Config
from ..utils.transactions import TransactionBuilder
from ..utils.validators import ADDRESS, check_guards


class SmartContract:
    """Address + ABI bound to a node connection"""

    def __init__(self, manager, address, abi, tx_builder=None):
        """
        Args:
            manager: MoacManager instance
            address: Contract address
            abi: ABI list, or the name of a packaged ABI ("erc20", "erc721", "fingate")
            tx_builder: TransactionBuilder instance (created if None)
        """
        check_guards([(0, ADDRESS)], address)

        if isinstance(abi, str):
            abi = Config().get_abi(abi)

        self.manager = manager
        self.contract = ContractInstance(address, abi)
        self.tx_builder = tx_builder or TransactionBuilder(manager)

    @property
    def address(self):
        return self.contract.address

    def call_abi(self, name, *args):
        """Decoded result for read-only functions, call-data otherwise"""
        return call_abi(self.manager, self.contract, name, *args)

    def send(self, secret, calldata, value="0", options=None, operation_type=None):
        """
        Send a transaction to this contract.

        Args:
            secret: Sender secret
            calldata: 0x call-data, or a callable producing it
            value: MOAC to attach as a decimal string
            options: Optional nonce, gasPrice, gasLimit
            operation_type: Operation name for the gas limit lookup

        Returns:
            Transaction hash
        """
        return self.tx_builder.send_transaction_with_calldata(
            secret, self.address, value, calldata,
            options=options, operation_type=operation_type,
        )
