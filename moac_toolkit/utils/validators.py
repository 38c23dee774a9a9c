"""Argument guards evaluated before any network I/O

Every public operation declares an ordered list of ``(argument_index, kind)``
pairs and runs it first, e.g.::

    check_guards([(0, SECRET), (1, ADDRESS), (2, AMOUNT)], secret, to, amount)
"""

import re
from decimal import Decimal, InvalidOperation

from ..core.exceptions import ValidationError
from ..core.wallet import is_valid_address, is_valid_secret, is_valid_jingtum_address

ADDRESS = "moac_address"
SECRET = "moac_secret"
AMOUNT = "amount"
HASH = "hash"
JINGTUM_ADDRESS = "jingtum_address"

HASH_PATTERN = re.compile(r"^0x[0-9a-fA-F]{64}$")


def prefix0x(address):
    """Prefix `0x` unless the value is empty or already prefixed"""
    if address and not address.startswith("0x"):
        address = "0x" + address
    return address


def is_valid_amount(value):
    """Finite number strictly greater than zero"""
    if isinstance(value, bool):
        return False
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return False
    return amount.is_finite() and amount > 0


def is_valid_hash(value):
    return isinstance(value, str) and HASH_PATTERN.match(value) is not None


def check_address(value):
    if not is_valid_address(value):
        raise ValidationError(f"{value} is invalid moac address.")


def check_secret(value):
    if not is_valid_secret(value):
        raise ValidationError(f"{value} is invalid moac secret.")


def check_amount(value):
    if not is_valid_amount(value):
        raise ValidationError(f"{value} is invalid amount.")


def check_hash(value):
    if not is_valid_hash(value):
        raise ValidationError(f"{value} is invalid hash.")


def check_jingtum_address(value):
    if not is_valid_jingtum_address(value):
        raise ValidationError(f"{value} is invalid jingtum address.")


_CHECKS = {
    ADDRESS: check_address,
    SECRET: check_secret,
    AMOUNT: check_amount,
    HASH: check_hash,
    JINGTUM_ADDRESS: check_jingtum_address,
}


def check_guards(guards, *args):
    """
    Run a guard list against positional arguments.

    Args:
        guards: Ordered (argument_index, kind) pairs
        *args: The operation's arguments, in declaration order

    Raises:
        ValidationError: On the first argument that fails its check
    """
    for index, kind in guards:
        value = args[index] if index < len(args) else None
        _CHECKS[kind](value)
