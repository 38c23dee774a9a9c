"""Core module - configuration, connection, wallet, exceptions, and balances"""

from .config import Config
from .connection import MoacManager
from .exceptions import MoacError, ConfigError, ConnectionError, RPCError, TransactionError
from .balances import BalanceQuery
from .wallet import create_wallet, sign_transaction, recover_sender

__all__ = [
    "Config",
    "MoacManager",
    "MoacError",
    "ConfigError",
    "ConnectionError",
    "RPCError",
    "TransactionError",
    "BalanceQuery",
    "create_wallet",
    "sign_transaction",
    "recover_sender",
]
