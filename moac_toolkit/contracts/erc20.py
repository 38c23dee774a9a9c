"""ERC20 token contract wrapper"""

import logging

from .base import SmartContract
from ..utils.units import from_base_units, to_base_units
from ..utils.validators import ADDRESS, AMOUNT, SECRET, check_guards

logger = logging.getLogger(__name__)


class ERC20(SmartContract):
    """Wrapper for ERC20 token interactions"""

    def __init__(self, manager, address, tx_builder=None):
        """
        Args:
            manager: MoacManager instance
            address: Token contract address
            tx_builder: TransactionBuilder instance (created if None)
        """
        super().__init__(manager, address, "erc20", tx_builder)

    def name(self):
        return self.call_abi("name")

    def symbol(self):
        return self.call_abi("symbol")

    def decimals(self):
        return self.call_abi("decimals")

    def total_supply(self):
        """Total supply in base units"""
        return self.call_abi("totalSupply")

    @property
    def info(self):
        """Token metadata as a dict"""
        return {
            "address": self.address,
            "name": self.name(),
            "symbol": self.symbol(),
            "decimals": self.decimals(),
        }

    def balance_of(self, address):
        """
        Get token balance in human units.

        Returns:
            Decimal string, "0" if the query failed
        """
        try:
            raw = self.call_abi("balanceOf", address)
            return from_base_units(raw, self.decimals())
        except Exception as e:
            logger.debug("balanceOf(%s) on %s failed: %s", address, self.address, e)
            return "0"

    def allowance(self, owner, spender):
        """Remaining allowance in base units"""
        check_guards([(0, ADDRESS), (1, ADDRESS)], owner, spender)
        return self.call_abi("allowance", owner, spender)

    def to_base_units(self, amount):
        """Human amount -> base units using the token's decimals"""
        return to_base_units(amount, self.decimals())

    def transfer(self, secret, to, amount, options=None):
        """
        Transfer tokens.

        Args:
            secret: Sender secret
            to: Recipient address
            amount: Human amount (e.g. "1.5")
            options: Optional nonce, gasPrice, gasLimit

        Returns:
            Transaction hash
        """
        check_guards([(0, SECRET), (1, ADDRESS), (2, AMOUNT)], secret, to, amount)
        value = self.to_base_units(amount)
        return self.send(
            secret, lambda: self.call_abi("transfer", to, value),
            options=options, operation_type="transfer",
        )

    def approve(self, secret, spender, amount, options=None):
        """Approve spender for a human amount, returns the transaction hash"""
        check_guards([(0, SECRET), (1, ADDRESS), (2, AMOUNT)], secret, spender, amount)
        value = self.to_base_units(amount)
        return self.send(
            secret, lambda: self.call_abi("approve", spender, value),
            options=options, operation_type="approve",
        )

    def transfer_from(self, secret, from_address, to, amount, options=None):
        """Move tokens out of an allowance, returns the transaction hash"""
        check_guards(
            [(0, SECRET), (1, ADDRESS), (2, ADDRESS), (3, AMOUNT)],
            secret, from_address, to, amount,
        )
        value = self.to_base_units(amount)
        return self.send(
            secret, lambda: self.call_abi("transferFrom", from_address, to, value),
            options=options, operation_type="transfer",
        )
