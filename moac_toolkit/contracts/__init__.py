"""Contract wrappers for ERC20, ERC721 and Fingate interactions"""

from .abi import ContractInstance, call_abi, encode_calldata, find_abi_item
from .base import SmartContract
from .erc20 import ERC20
from .erc721 import ERC721
from .fingate import Fingate

__all__ = [
    "ContractInstance",
    "call_abi",
    "encode_calldata",
    "find_abi_item",
    "SmartContract",
    "ERC20",
    "ERC721",
    "Fingate",
]
