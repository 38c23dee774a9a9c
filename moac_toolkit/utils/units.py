"""Unit and hex conversions"""

from decimal import Decimal, InvalidOperation, localcontext

from web3 import Web3

from ..core.config import MOAC_DECIMALS

# Enough digits for any uint256 scaled by 10**77
_PRECISION = 160


def to_int(value):
    """Accept int, integral decimal string or 0x-hex string"""
    if isinstance(value, bool):
        raise ValueError(f"Expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        if value.lower().startswith("0x"):
            return int(value, 16)
        try:
            value = Decimal(value)
        except InvalidOperation:
            raise ValueError(f"Expected an integer, got {value!r}") from None
    if isinstance(value, Decimal):
        if not value.is_finite() or value != value.to_integral_value():
            raise ValueError(f"Expected an integer, got {value}")
        return int(value)
    raise ValueError(f"Expected an integer, got {value!r}")


def int_to_hex(value):
    """Integer -> 0x-prefixed lowercase hex ("0x0" for zero)"""
    return Web3.to_hex(to_int(value))


def to_base_units(amount, decimals=MOAC_DECIMALS):
    """
    Convert a human amount into integer base units.

    Args:
        amount: Decimal string, int or Decimal (e.g. "1.5")
        decimals: Token decimals (18 for MOAC -> sha)

    Raises:
        ValueError: If the amount has more fractional digits than decimals
    """
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        try:
            scaled = Decimal(str(amount)).scaleb(int(decimals))
        except InvalidOperation:
            raise ValueError(f"{amount} is not a number") from None
        if scaled != scaled.to_integral_value():
            raise ValueError(f"{amount} has more than {decimals} decimal places")
        return int(scaled)


def from_base_units(value, decimals=MOAC_DECIMALS):
    """Convert integer base units into a plain decimal string ("10", "0.5")"""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        amount = Decimal(to_int(value)).scaleb(-int(decimals)).normalize()
    return format(amount, "f")


def to_sha(amount):
    """
    MOAC -> sha.

    Raises:
        ValueError: If the amount is not a number or is finer than one sha
    """
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        try:
            amount = Decimal(str(amount))
        except InvalidOperation:
            raise ValueError(f"{amount} is not a number") from None
        if not amount.is_finite() or amount.normalize().as_tuple().exponent < -MOAC_DECIMALS:
            raise ValueError(f"{amount} has more than {MOAC_DECIMALS} decimal places")
    return Web3.to_wei(amount, "ether")


def from_sha(value):
    """sha -> MOAC decimal string"""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        amount = Decimal(Web3.from_wei(to_int(value), "ether")).normalize()
    return format(amount, "f")
