import pytest

from moac_toolkit.core.exceptions import RPCError, ValidationError
from moac_toolkit.core.wallet import decode_transaction, recover_sender
from moac_toolkit.operations.transfer import encode_memo, transfer_moac

from conftest import OTHER_ADDRESS, TX_HASH


def _sent(node):
    [[signed]] = node.params_of("mc_sendRawTransaction")
    return signed, decode_transaction(signed)


def test_transfer_one_moac(manager, chain_state, secret, sender):
    assert transfer_moac(manager, secret, OTHER_ADDRESS, "1") == TX_HASH

    signed, tx = _sent(chain_state)
    assert tx.value == 10 ** 18
    assert tx.data == b"\x00"
    assert tx.to == bytes.fromhex(OTHER_ADDRESS[2:])
    assert (tx.nonce, tx.gas_price, tx.gas_limit) == (5, 20000000000, 200000)
    assert tx.chain_id == 99
    assert recover_sender(signed) == sender


def test_transfer_with_memo(manager, chain_state, secret):
    transfer_moac(manager, secret, OTHER_ADDRESS, 0.5, memo="test测试")
    _, tx = _sent(chain_state)
    assert tx.value == 5 * 10 ** 17
    assert tx.data == b"test%E6%B5%8B%E8%AF%95"


def test_encode_memo():
    assert encode_memo(None) is None
    assert encode_memo("") is None
    assert encode_memo("a b") == "0x" + b"a%20b".hex()
    assert encode_memo("it's (ok)!") == "0x" + b"it's%20(ok)!".hex()


@pytest.mark.parametrize("args,message", [
    (("0x1", OTHER_ADDRESS, "1"), "0x1 is invalid moac secret."),
    (("SECRET", OTHER_ADDRESS + "0", "1"), f"{OTHER_ADDRESS}0 is invalid moac address."),
    (("SECRET", OTHER_ADDRESS, "0"), "0 is invalid amount."),
])
def test_transfer_validates_before_rpc(manager, node, secret, args, message):
    args = tuple(secret if a == "SECRET" else a for a in args)
    with pytest.raises(ValidationError) as exc:
        transfer_moac(manager, *args)
    assert str(exc.value) == message
    assert node.calls == []


def test_gas_price_failure_uses_default(manager, chain_state, secret):
    chain_state.script("mc_gasPrice", RPCError("down"))
    transfer_moac(manager, secret, OTHER_ADDRESS, "1")
    _, tx = _sent(chain_state)
    assert tx.gas_price == 20000000000


def test_pending_transactions_raise_nonce(manager, chain_state, secret, sender):
    chain_state.script("txpool_content", {"pending": {sender.upper().replace("0X", "0x"): {"5": {}, "6": {}}}})
    transfer_moac(manager, secret, OTHER_ADDRESS, "1")
    _, tx = _sent(chain_state)
    assert tx.nonce == 7


def test_testnet_chain_id(manager, chain_state, secret):
    manager.network = 101
    transfer_moac(manager, secret, OTHER_ADDRESS, "1")
    _, tx = _sent(chain_state)
    assert tx.chain_id == 101


SIGNED_WITH_MEMO = (
    "0xf8870c808504a817c80083030d40949bd4810a407812042f938d2f69f673843301cfa6"
    "880de0b6b3a76400009674657374254536254235253842254538254146253935808081ea"
    "a06b87446d73f4ad0d63dae5707b35b34efae1df0fdc5919e64090f5d28e95bd64"
    "a0406886445a194eeff334cce8bdb1640d7ada3fb806075ee387f24637a232ea4d"
)
SIGNED_WITHOUT_MEMO = (
    "0xf8710c808504a817c80083030d40949bd4810a407812042f938d2f69f673843301cfa6"
    "880de0b6b3a764000000808081e9"
    "a06d2da1cf30a41b8b12150bee4b08ba5e7669596efa77cb5b697d104a2dd639ed"
    "a0191c50367e31b5f8edf13faf822e09806965858209fa5f43b88a6ab04c9e2795"
)


@pytest.mark.parametrize("signed", [SIGNED_WITH_MEMO, SIGNED_WITHOUT_MEMO])
def test_known_mainnet_payload_fields(signed):
    tx = decode_transaction(signed)
    assert (tx.nonce, tx.system_contract, tx.gas_price, tx.gas_limit) == (12, 0, 20000000000, 200000)
    assert tx.to == bytes.fromhex("9bd4810a407812042f938d2f69f673843301cfa6")
    assert tx.value == 10 ** 18
    assert (tx.sharding_flag, tx.via) == (0, b"")
    assert tx.chain_id == 99


def test_known_payloads_share_sender():
    sender = recover_sender(SIGNED_WITH_MEMO)
    assert sender == recover_sender(SIGNED_WITHOUT_MEMO)
    assert sender.startswith("0xae8325")
    assert sender.endswith("c667")


def test_known_payload_data():
    assert decode_transaction(SIGNED_WITHOUT_MEMO).data == b"\x00"
    memo_data = decode_transaction(SIGNED_WITH_MEMO).data
    assert encode_memo("test测试") == "0x" + memo_data.hex()
