"""ABI lookup, call-data encoding and read/send dispatch

A contract is just an address plus its ABI. ``call_abi`` looks up the ABI
entry for a function and either runs it against the node (``view``/``pure``)
or returns the encoded call-data for a transaction (everything else).
"""

import logging
import re
from dataclasses import dataclass

from eth_abi import decode, encode, is_encodable
from eth_abi.exceptions import DecodingError
from eth_utils import to_bytes, to_checksum_address
from eth_utils.abi import collapse_if_tuple, function_abi_to_4byte_selector

from ..core.exceptions import AbiError
from ..utils.units import to_int
from ..utils.validators import prefix0x

logger = logging.getLogger(__name__)

ARRAY_PATTERN = re.compile(r"^(.*)\[(\d*)\]$")
READ_MUTABILITY = ("view", "pure")


@dataclass(frozen=True)
class ContractInstance:
    address: str
    abi: tuple

    def __post_init__(self):
        object.__setattr__(self, "abi", tuple(self.abi))


def is_read_only(abi_item):
    """view/pure functions, or legacy items flagged constant"""
    mutability = abi_item.get("stateMutability")
    if mutability:
        return mutability in READ_MUTABILITY
    return bool(abi_item.get("constant"))


def input_types(abi_item):
    return [collapse_if_tuple(arg) for arg in abi_item.get("inputs", [])]


def output_types(abi_item):
    return [collapse_if_tuple(arg) for arg in abi_item.get("outputs", [])]


def normalize_argument(abi_type, value):
    """
    Coerce a user-supplied value into what eth_abi expects for abi_type.

    Addresses get a 0x prefix and checksum, integer strings (decimal or 0x)
    become ints, hex strings become bytes, and "true"/"false" become bools.
    Values that do not fit are passed through for the encoder to reject.
    """
    match = ARRAY_PATTERN.match(abi_type)
    if match and isinstance(value, (list, tuple)):
        return [normalize_argument(match.group(1), item) for item in value]

    if abi_type == "address" and isinstance(value, str):
        try:
            return to_checksum_address(prefix0x(value))
        except ValueError:
            return value

    if abi_type.startswith(("uint", "int")) and isinstance(value, str):
        try:
            return to_int(value)
        except ValueError:
            return value

    if abi_type.startswith("bytes") and isinstance(value, str):
        try:
            return to_bytes(hexstr=value)
        except ValueError:
            return value

    if abi_type == "bool" and isinstance(value, str):
        lowered = value.lower()
        if lowered in ("true", "false"):
            return lowered == "true"

    return value


def normalize_arguments(abi_item, args):
    return [normalize_argument(t, v) for t, v in zip(input_types(abi_item), args)]


def _encodable(abi_item, args, normalize=True):
    types = input_types(abi_item)
    values = normalize_arguments(abi_item, args) if normalize else list(args)
    return all(is_encodable(t, v) for t, v in zip(types, values))


def find_abi_item(abi, name, args=()):
    """
    Find the function entry matching name and arguments.

    Overloads with the same name and arity are told apart by which one
    can encode the arguments, first as given and then normalized.

    Raises:
        AbiError: No function matches, or several match equally
    """
    candidates = [
        item for item in abi
        if item.get("type", "function") == "function"
        and item.get("name") == name
        and len(item.get("inputs", [])) == len(args)
    ]
    if not candidates:
        raise AbiError(f"Function {name} with {len(args)} arguments not found in ABI")
    if len(candidates) == 1:
        return candidates[0]

    for normalize in (False, True):
        encodable = [item for item in candidates if _encodable(item, args, normalize)]
        if len(encodable) == 1:
            return encodable[0]
    raise AbiError(f"Ambiguous call to {name} with arguments {list(args)}")


def encode_calldata(contract, name, *args):
    """0x call-data (4-byte selector + encoded arguments) for a function"""
    abi_item = find_abi_item(contract.abi, name, args)
    return _encode(abi_item, args)


def _encode(abi_item, args):
    types = input_types(abi_item)
    values = normalize_arguments(abi_item, args)
    try:
        encoded = encode(types, values)
    except Exception as e:
        raise AbiError(f"Cannot encode arguments for {abi_item['name']}: {e}") from e
    return "0x" + (function_abi_to_4byte_selector(abi_item) + encoded).hex()


def _format_output(abi_type, value):
    if isinstance(value, (list, tuple)):
        match = ARRAY_PATTERN.match(abi_type)
        item_type = match.group(1) if match else ""
        return [_format_output(item_type, item) for item in value]
    if abi_type == "address" and isinstance(value, str):
        return value.lower()
    if isinstance(value, bytes):
        return "0x" + value.hex()
    return value


def decode_output(abi_item, raw):
    """
    Decode mc_call output.

    Returns:
        Single value for one output, list for several, None for none
    """
    types = output_types(abi_item)
    if not types:
        return None
    try:
        values = decode(types, to_bytes(hexstr=raw or "0x"))
    except DecodingError as e:
        raise AbiError(f"Cannot decode output of {abi_item['name']}: {e}") from e

    values = [_format_output(t, v) for t, v in zip(types, values)]
    if len(values) == 1:
        return values[0]
    return values


def call_abi(manager, contract, name, *args):
    """
    Dispatch a contract function.

    Read-only functions are executed with mc_call and their decoded result
    is returned. Every other function returns its call-data without
    touching the node.

    Args:
        manager: MoacManager instance
        contract: ContractInstance
        name: Function name
        *args: Function arguments

    Returns:
        Decoded value for reads, 0x call-data for state-changing functions
    """
    abi_item = find_abi_item(contract.abi, name, args)
    calldata = _encode(abi_item, args)
    if not is_read_only(abi_item):
        return calldata

    logger.debug("call %s.%s%s", contract.address, name, args)
    raw = manager.call({"to": contract.address, "data": calldata})
    return decode_output(abi_item, raw)
