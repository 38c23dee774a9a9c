"""Fingate custody bridge contract wrapper

Fingate receives MOAC or ERC20 deposits on MOAC and releases the matching
assets to a Jingtum account. A sender has at most one pending deposit per
token; ``deposit_state`` reports it and ``is_pending`` tells whether it is
still unsettled.
"""

from .base import SmartContract
from ..core.config import ZERO_ADDRESS
from ..utils.units import to_base_units
from ..utils.validators import (
    ADDRESS,
    AMOUNT,
    HASH,
    JINGTUM_ADDRESS,
    SECRET,
    check_guards,
    prefix0x,
)


class Fingate(SmartContract):
    """Deposit MOAC and ERC20 tokens into the Fingate contract"""

    def __init__(self, manager, address, tx_builder=None):
        """
        Args:
            manager: MoacManager instance
            address: Fingate contract address
            tx_builder: TransactionBuilder instance (created if None)
        """
        super().__init__(manager, address, "fingate", tx_builder)

    def deposit_state(self, address, token=ZERO_ADDRESS):
        """
        Pending deposit of address for a token.

        Args:
            address: Depositor address
            token: Token contract address (zero address for MOAC)

        Returns:
            [amount, jingtum_address, time]
        """
        check_guards([(0, ADDRESS), (1, ADDRESS)], address, token)
        return self.call_abi("depositState", token, prefix0x(address))

    @staticmethod
    def is_pending(state):
        """True while a deposit state still holds an amount or a destination"""
        return state[0] != 0 or state[1] != ""

    def deposit(self, jt_address, amount, secret, options=None):
        """
        Deposit MOAC.

        Args:
            jt_address: Destination Jingtum address
            amount: Amount of MOAC as a decimal string
            secret: Depositor secret
            options: Optional nonce, gasPrice, gasLimit

        Returns:
            Transaction hash
        """
        check_guards(
            [(0, JINGTUM_ADDRESS), (1, AMOUNT), (2, SECRET)],
            jt_address, amount, secret,
        )
        return self.send(
            secret, lambda: self.call_abi("deposit", jt_address),
            value=str(amount), options=options, operation_type="deposit",
        )

    def deposit_token(self, jt_address, token_address, decimals, amount, tx_hash,
                      secret, options=None):
        """
        Deposit an ERC20 token previously transferred to the contract.

        Args:
            jt_address: Destination Jingtum address
            token_address: ERC20 contract address
            decimals: Token decimals
            amount: Human amount
            tx_hash: Hash of the ERC20 transfer to Fingate
            secret: Depositor secret
            options: Optional nonce, gasPrice, gasLimit

        Returns:
            Transaction hash
        """
        check_guards(
            [(0, JINGTUM_ADDRESS), (1, ADDRESS), (3, AMOUNT), (4, HASH), (5, SECRET)],
            jt_address, token_address, decimals, amount, tx_hash, secret,
        )
        value = to_base_units(amount, decimals)
        return self.send(
            secret,
            lambda: self.call_abi("depositToken", jt_address, token_address, value, tx_hash),
            value="0", options=options, operation_type="deposit",
        )
