"""Balance query operations"""

from .config import Config, MOAC_DECIMALS
from ..contracts.erc20 import ERC20
from ..utils.validators import ADDRESS, check_guards


class BalanceQuery:
    """Query MOAC and token balances for an address"""

    def __init__(self, manager):
        """
        Args:
            manager: MoacManager instance
        """
        self.manager = manager
        self.config = Config()

    def get_moac_balance(self, address):
        """Get MOAC balance for address"""
        return {
            "symbol": "MOAC",
            "name": "MOAC",
            "address": None,
            "balance": self.manager.get_balance(address),
            "decimals": MOAC_DECIMALS,
        }

    def get_token_balance(self, token_address, address):
        """Get ERC20 token balance for address"""
        token = ERC20(self.manager, token_address)
        return {
            "symbol": token.symbol(),
            "name": token.name(),
            "address": token_address,
            "balance": token.balance_of(address),
            "decimals": token.decimals(),
        }

    def get_all_balances(self, address):
        """
        Get MOAC and all configured token balances.

        Args:
            address: Address to query

        Returns:
            Dict with address and list of balances
        """
        check_guards([(0, ADDRESS)], address)

        balances = [self.get_moac_balance(address)]

        for symbol, token_address in self.config.common_tokens.items():
            try:
                balances.append(self.get_token_balance(token_address, address))
            except Exception as e:
                balances.append({
                    "symbol": symbol,
                    "address": token_address,
                    "error": str(e),
                })

        return {
            "address": address,
            "balances": balances,
        }
