import pytest
from eth_abi import decode

from moac_toolkit.contracts.fingate import Fingate
from moac_toolkit.core.config import ZERO_ADDRESS
from moac_toolkit.core.exceptions import ValidationError
from moac_toolkit.core.wallet import decode_transaction

from conftest import OTHER_ADDRESS, TOKEN_ADDRESS, TX_HASH, abi_result, selector

FINGATE_ADDRESS = "0x" + "4c" * 20
JINGTUM = "jGa9J9TkqtBcUoHe2zqhVFFbgUVED6o9or"


@pytest.fixture
def fingate(manager, chain_state):
    return Fingate(manager, FINGATE_ADDRESS)


def _sent(node):
    [[signed]] = node.params_of("mc_sendRawTransaction")
    return decode_transaction(signed)


def test_deposit_state(fingate, chain_state):
    chain_state.script("mc_call", abi_result(["uint256", "string", "uint256"], [10 ** 18, JINGTUM, 1600000000]))
    state = fingate.deposit_state(OTHER_ADDRESS[2:])
    assert state == [10 ** 18, JINGTUM, 1600000000]

    [[call, _]] = chain_state.params_of("mc_call")
    assert call["to"] == FINGATE_ADDRESS
    assert call["data"][:10] == selector("depositState(address,address)")
    token, address = decode(["address", "address"], bytes.fromhex(call["data"][10:]))
    assert token == ZERO_ADDRESS
    assert address.lower() == OTHER_ADDRESS


def test_deposit_state_validates(fingate, chain_state):
    with pytest.raises(ValidationError, match="invalid moac address"):
        fingate.deposit_state(OTHER_ADDRESS, "0x12")
    assert chain_state.calls == []


@pytest.mark.parametrize("state,pending", [
    ([0, "", 0], False),
    ([5, "", 0], True),
    ([0, JINGTUM, 0], True),
    ([5, JINGTUM, 1600000000], True),
])
def test_is_pending(state, pending):
    assert Fingate.is_pending(state) is pending


def test_deposit(fingate, chain_state, secret):
    assert fingate.deposit(JINGTUM, "2", secret) == TX_HASH
    tx = _sent(chain_state)
    assert tx.to == bytes.fromhex(FINGATE_ADDRESS[2:])
    assert tx.value == 2 * 10 ** 18
    assert tx.nonce == 5
    assert tx.data[:4].hex() == selector("deposit(string)")[2:]
    assert decode(["string"], tx.data[4:]) == (JINGTUM,)


def test_deposit_token(fingate, chain_state, secret):
    assert fingate.deposit_token(JINGTUM, TOKEN_ADDRESS, 6, "1.5", TX_HASH, secret) == TX_HASH
    tx = _sent(chain_state)
    assert tx.value == 0
    assert tx.data[:4].hex() == selector("depositToken(string,address,uint256,bytes32)")[2:]
    jt, token, amount, tx_hash = decode(["string", "address", "uint256", "bytes32"], tx.data[4:])
    assert jt == JINGTUM
    assert token.lower() == TOKEN_ADDRESS
    assert amount == 1500000
    assert "0x" + tx_hash.hex() == TX_HASH


@pytest.mark.parametrize("args,message", [
    ((JINGTUM[1:], "1", "SECRET"), f"{JINGTUM[1:]} is invalid jingtum address."),
    ((JINGTUM, -1, "SECRET"), "-1 is invalid amount."),
    ((JINGTUM, "1", "0xbad"), "0xbad is invalid moac secret."),
])
def test_deposit_validates_in_order(fingate, chain_state, secret, args, message):
    args = tuple(secret if a == "SECRET" else a for a in args)
    with pytest.raises(ValidationError) as exc:
        fingate.deposit(*args)
    assert str(exc.value) == message
    assert chain_state.calls == []


@pytest.mark.parametrize("index,value,message", [
    (0, JINGTUM[1:], f"{JINGTUM[1:]} is invalid jingtum address."),
    (1, "0x12", "0x12 is invalid moac address."),
    (3, -1, "-1 is invalid amount."),
    (4, TX_HASH[1:], f"{TX_HASH[1:]} is invalid hash."),
    (5, "0xbad", "0xbad is invalid moac secret."),
])
def test_deposit_token_validates(fingate, chain_state, secret, index, value, message):
    args = [JINGTUM, TOKEN_ADDRESS, 18, "1", TX_HASH, secret]
    args[index] = value
    with pytest.raises(ValidationError) as exc:
        fingate.deposit_token(*args)
    assert str(exc.value) == message
    assert chain_state.calls == []
