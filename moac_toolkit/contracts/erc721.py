"""ERC721 token contract wrapper"""

import logging

from .base import SmartContract
from ..core.wallet import get_address
from ..utils.validators import ADDRESS, SECRET, check_guards

logger = logging.getLogger(__name__)


class ERC721(SmartContract):
    """Wrapper for ERC721 (non-fungible token) interactions"""

    def __init__(self, manager, address, tx_builder=None):
        """
        Args:
            manager: MoacManager instance
            address: Token contract address
            tx_builder: TransactionBuilder instance (created if None)
        """
        super().__init__(manager, address, "erc721", tx_builder)

    def name(self):
        return self.call_abi("name")

    def symbol(self):
        return self.call_abi("symbol")

    def token_uri(self, token_id):
        return self.call_abi("tokenURI", token_id)

    def balance_of(self, owner):
        """Number of tokens held by owner, "0" if the query failed"""
        check_guards([(0, ADDRESS)], owner)
        try:
            return str(self.call_abi("balanceOf", owner))
        except Exception as e:
            logger.debug("balanceOf(%s) on %s failed: %s", owner, self.address, e)
            return "0"

    def owner_of(self, token_id):
        return self.call_abi("ownerOf", token_id)

    def get_approved(self, token_id):
        return self.call_abi("getApproved", token_id)

    def is_approved_for_all(self, owner, operator):
        check_guards([(0, ADDRESS), (1, ADDRESS)], owner, operator)
        return self.call_abi("isApprovedForAll", owner, operator)

    # Enumeration extension, optional for ERC721 contracts

    def total_supply(self):
        return self.call_abi("totalSupply")

    def token_by_index(self, index):
        return self.call_abi("tokenByIndex", index)

    def token_of_owner_by_index(self, owner, index):
        check_guards([(0, ADDRESS)], owner)
        return self.call_abi("tokenOfOwnerByIndex", owner, index)

    # Transactions

    def mint(self, secret, to, token_id, uri, options=None):
        """Mint token_id with metadata uri to an address, returns the transaction hash"""
        check_guards([(0, SECRET), (1, ADDRESS)], secret, to)
        return self.send(
            secret, lambda: self.call_abi("mint", to, token_id, uri),
            options=options, operation_type="mint",
        )

    def burn(self, secret, owner, token_id, options=None):
        check_guards([(0, SECRET), (1, ADDRESS)], secret, owner)
        return self.send(
            secret, lambda: self.call_abi("burn", owner, token_id),
            options=options, operation_type="burn",
        )

    def safe_transfer_from(self, secret, to, token_id, data=None, options=None):
        """
        Transfer a token from the sender with the receiver check.

        Args:
            secret: Sender (current owner) secret
            to: Recipient address
            token_id: Token id
            data: Optional 0x payload for the receiver (selects the 4-argument overload)
            options: Optional nonce, gasPrice, gasLimit

        Returns:
            Transaction hash
        """
        check_guards([(0, SECRET), (1, ADDRESS)], secret, to)
        sender = get_address(secret)

        def calldata():
            if not data:
                return self.call_abi("safeTransferFrom", sender, to, token_id)
            return self.call_abi("safeTransferFrom", sender, to, token_id, data)

        return self.send(secret, calldata, options=options, operation_type="transfer")

    def transfer_from(self, secret, to, token_id, options=None):
        check_guards([(0, SECRET), (1, ADDRESS)], secret, to)
        sender = get_address(secret)
        return self.send(
            secret, lambda: self.call_abi("transferFrom", sender, to, token_id),
            options=options, operation_type="transfer",
        )

    def approve(self, secret, approved, token_id, options=None):
        check_guards([(0, SECRET), (1, ADDRESS)], secret, approved)
        return self.send(
            secret, lambda: self.call_abi("approve", approved, token_id),
            options=options, operation_type="approve",
        )

    def set_approval_for_all(self, secret, operator, approved, options=None):
        check_guards([(0, SECRET), (1, ADDRESS)], secret, operator)
        return self.send(
            secret, lambda: self.call_abi("setApprovalForAll", operator, approved),
            options=options, operation_type="approve",
        )
