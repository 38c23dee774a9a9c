"""Utility functions for units, validation and transactions"""

from .units import to_sha, from_sha, to_base_units, from_base_units
from .validators import prefix0x, check_guards
from .transactions import build_tx, TransactionBuilder

__all__ = [
    "to_sha",
    "from_sha",
    "to_base_units",
    "from_base_units",
    "prefix0x",
    "check_guards",
    "build_tx",
    "TransactionBuilder",
]
