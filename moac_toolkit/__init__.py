"""
MOAC Toolkit - transaction signing, token and Fingate bridge client for MOAC
"""

from .core.connection import MoacManager
from .core.config import Config
from .core.exceptions import (
    MoacError,
    ConfigError,
    ConnectionError,
    RPCError,
    ValidationError,
    TransactionError,
    AbiError,
)
from .contracts import ERC20, ERC721, Fingate, SmartContract
from .operations import transfer_moac

__version__ = "0.1.0"
__all__ = [
    "MoacManager",
    "Config",
    "MoacError",
    "ConfigError",
    "ConnectionError",
    "RPCError",
    "ValidationError",
    "TransactionError",
    "AbiError",
    "ERC20",
    "ERC721",
    "Fingate",
    "SmartContract",
    "transfer_moac",
]
