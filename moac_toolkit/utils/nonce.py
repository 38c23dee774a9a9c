"""Next usable nonce for a sender"""

import logging

from .validators import prefix0x

logger = logging.getLogger(__name__)


class NonceResolver:
    """
    Resolve the next nonce as confirmed count + pending pool entries.

    There is no locking: two resolutions for the same sender that run before
    either transaction reaches the pool return the same nonce and the node
    rejects the second submission. Serialize submissions per sender if that
    matters.
    """

    def __init__(self, manager):
        """
        Args:
            manager: MoacManager instance
        """
        self.manager = manager

    @staticmethod
    def count_pending(txpool, address):
        """Number of pending pool entries whose sender matches address"""
        pending = (txpool or {}).get("pending") or {}
        target = prefix0x(address).lower()
        count = 0
        for sender, entries in pending.items():
            if prefix0x(sender).lower() == target:
                count += len(entries)
        return count

    def get_nonce(self, address):
        """
        Get the next nonce for address.

        Raises:
            RPCError, ConnectionError: If either node query fails. The pool
            is not queried when the transaction count query fails.
        """
        confirmed = self.manager.get_transaction_count(address)
        txpool = self.manager.get_txpool_content()
        pending = self.count_pending(txpool, address)
        logger.debug("nonce for %s: %d confirmed + %d pending", address, confirmed, pending)
        return confirmed + pending
