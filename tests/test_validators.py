import pytest

from moac_toolkit.core.exceptions import ValidationError
from moac_toolkit.utils.validators import (
    ADDRESS,
    AMOUNT,
    HASH,
    JINGTUM_ADDRESS,
    SECRET,
    check_guards,
    is_valid_amount,
    is_valid_hash,
    prefix0x,
)

from conftest import OTHER_ADDRESS, SECRET as TEST_SECRET, TX_HASH

JINGTUM = "jGa9J9TkqtBcUoHe2zqhVFFbgUVED6o9or"


def test_prefix0x():
    assert prefix0x("abc") == "0xabc"
    assert prefix0x("0xabc") == "0xabc"
    assert prefix0x("") == ""
    assert prefix0x(None) is None


@pytest.mark.parametrize("value", ["1", "0.5", 2, "1e-18"])
def test_valid_amounts(value):
    assert is_valid_amount(value)


@pytest.mark.parametrize("value", ["0", 0, -1, "-1", "abc", None, "NaN", "Infinity", True])
def test_invalid_amounts(value):
    assert not is_valid_amount(value)


def test_hash_requires_prefix_and_length():
    assert is_valid_hash(TX_HASH)
    assert not is_valid_hash(TX_HASH[2:])
    assert not is_valid_hash(TX_HASH[:-1])


def test_guards_pass_for_valid_arguments():
    check_guards(
        [(0, SECRET), (1, ADDRESS), (2, AMOUNT), (3, HASH), (4, JINGTUM_ADDRESS)],
        TEST_SECRET, OTHER_ADDRESS, "1", TX_HASH, JINGTUM,
    )


def test_address_without_prefix_is_valid():
    check_guards([(0, ADDRESS)], OTHER_ADDRESS[2:])


@pytest.mark.parametrize("kind,value,message", [
    (ADDRESS, OTHER_ADDRESS[:-1], f"{OTHER_ADDRESS[:-1]} is invalid moac address."),
    (SECRET, TEST_SECRET[3:], f"{TEST_SECRET[3:]} is invalid moac secret."),
    (AMOUNT, "0", "0 is invalid amount."),
    (HASH, TX_HASH[2:], f"{TX_HASH[2:]} is invalid hash."),
    (JINGTUM_ADDRESS, JINGTUM[1:], f"{JINGTUM[1:]} is invalid jingtum address."),
])
def test_guard_messages(kind, value, message):
    with pytest.raises(ValidationError) as exc:
        check_guards([(0, kind)], value)
    assert str(exc.value) == message


def test_first_failing_guard_wins():
    with pytest.raises(ValidationError, match="invalid moac secret"):
        check_guards([(0, SECRET), (1, ADDRESS)], "bad", "also bad")


def test_missing_argument_is_checked_as_none():
    with pytest.raises(ValidationError, match="None is invalid amount."):
        check_guards([(2, AMOUNT)], TEST_SECRET, OTHER_ADDRESS)


def test_validation_error_is_value_error():
    with pytest.raises(ValueError):
        check_guards([(0, ADDRESS)], "0x1234")
