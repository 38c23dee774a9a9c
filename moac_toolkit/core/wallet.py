"""Wallet operations: key generation, address checks and MOAC transaction signing

MOAC transactions are RLP lists of
``[nonce, systemContract, gasPrice, gasLimit, to, value, data, shardingFlag, via, v, r, s]``.
The signing hash is keccak256 of the same list with ``v = chainId`` and
``r = s = 0``; the signature ``v`` is ``recovery + chainId * 2 + 35``.
"""

import re

import base58
import rlp
from rlp.sedes import Binary, big_endian_int, binary
from eth_account import Account
from eth_keys import keys
from eth_keys.constants import SECPK1_N
from eth_keys.exceptions import ValidationError as KeyValidationError
from eth_utils import keccak, to_bytes
from mnemonic import Mnemonic

from .exceptions import TransactionError

ADDRESS_PATTERN = re.compile(r"^(0x)?[0-9a-fA-F]{40}$")
SECRET_PATTERN = re.compile(r"^(0x)?[0-9a-fA-F]{64}$")

# Ripple's alphabet with 'r' and 'j' swapped, so account ids start with 'j'
JINGTUM_ALPHABET = b"jpshnaf39wBUDNEGHJKLM4PQRST7VWXYZ2bcdeCg65rkm8oFqi1tuvAxyz"

EIP155_OFFSET = 35


class MoacTransaction(rlp.Serializable):
    fields = [
        ("nonce", big_endian_int),
        ("system_contract", big_endian_int),
        ("gas_price", big_endian_int),
        ("gas_limit", big_endian_int),
        ("to", Binary.fixed_length(20, allow_empty=True)),
        ("value", big_endian_int),
        ("data", binary),
        ("sharding_flag", big_endian_int),
        ("via", binary),
        ("v", big_endian_int),
        ("r", big_endian_int),
        ("s", big_endian_int),
    ]

    @property
    def chain_id(self):
        return (self.v - EIP155_OFFSET) // 2

    def signing_hash(self, chain_id=None):
        """keccak256 of the EIP-155 style unsigned payload"""
        unsigned = self.copy(v=chain_id if chain_id is not None else self.chain_id, r=0, s=0)
        return keccak(rlp.encode(unsigned))


def is_valid_address(address):
    """40 hex characters, optionally 0x-prefixed"""
    return isinstance(address, str) and ADDRESS_PATTERN.match(address) is not None


def _secret_bytes(secret):
    if not isinstance(secret, str) or SECRET_PATTERN.match(secret) is None:
        return None
    raw = bytes.fromhex(secret[2:] if secret.startswith("0x") else secret)
    if not 0 < int.from_bytes(raw, "big") < SECPK1_N:
        return None
    try:
        keys.PrivateKey(raw)
    except (KeyValidationError, ValueError):
        return None
    return raw


def is_valid_secret(secret):
    """64 hex characters forming a usable secp256k1 private key"""
    return _secret_bytes(secret) is not None


def get_address(secret):
    """Lowercase 0x address for a secret, or None if the secret is invalid"""
    raw = _secret_bytes(secret)
    if raw is None:
        return None
    return keys.PrivateKey(raw).public_key.to_address()


def create_wallet(with_mnemonic=True):
    """
    Generate a new MOAC wallet.

    Args:
        with_mnemonic: Derive the key from a fresh 12-word mnemonic (default)

    Returns:
        Dict with address, secret (hex without 0x) and mnemonic if requested
    """
    if with_mnemonic:
        Account.enable_unaudited_hdwallet_features()
        phrase = Mnemonic("english").generate(strength=128)
        account = Account.from_mnemonic(phrase, account_path="m/44'/60'/0'/0/0")
    else:
        phrase = None
        account = Account.create()

    wallet = {
        "address": account.address.lower(),
        "secret": bytes(account.key).hex(),
    }
    if phrase:
        wallet["mnemonic"] = phrase
    return wallet


def is_valid_jingtum_address(address):
    """Base58check account id with version byte 0 in the Jingtum alphabet"""
    if not isinstance(address, str) or not address.startswith("j"):
        return False
    try:
        decoded = base58.b58decode_check(address, alphabet=JINGTUM_ALPHABET)
    except ValueError:
        return False
    return len(decoded) == 21 and decoded[0] == 0


def _hex_to_int(value):
    if isinstance(value, int):
        return value
    return int(value, 16)


def sign_transaction(tx, secret):
    """
    Sign a transaction record.

    Args:
        tx: Transaction record with hex-encoded fields (see TransactionBuilder)
        secret: Private key of the sender

    Returns:
        0x-prefixed hex of the signed RLP payload
    """
    raw = _secret_bytes(secret)
    if raw is None:
        raise TransactionError("Cannot sign with an invalid secret")

    try:
        chain_id = _hex_to_int(tx["chainId"])
        unsigned = MoacTransaction(
            nonce=_hex_to_int(tx["nonce"]),
            system_contract=_hex_to_int(tx.get("systemContract", "0x0")),
            gas_price=_hex_to_int(tx["gasPrice"]),
            gas_limit=_hex_to_int(tx["gasLimit"]),
            to=to_bytes(hexstr=tx["to"]) if tx.get("to") else b"",
            value=_hex_to_int(tx["value"]),
            data=to_bytes(hexstr=tx.get("data") or "0x"),
            sharding_flag=_hex_to_int(tx.get("shardingFlag", "0x0")),
            via=to_bytes(hexstr=tx.get("via") or "0x"),
            v=chain_id,
            r=0,
            s=0,
        )
    except (KeyError, ValueError, TypeError) as e:
        raise TransactionError(f"Malformed transaction: {e}") from e

    signature = keys.PrivateKey(raw).sign_msg_hash(unsigned.signing_hash(chain_id))
    signed = unsigned.copy(
        v=signature.v + chain_id * 2 + EIP155_OFFSET,
        r=signature.r,
        s=signature.s,
    )
    return "0x" + rlp.encode(signed).hex()


def decode_transaction(signed):
    """Decode a signed payload back into a MoacTransaction"""
    return rlp.decode(to_bytes(hexstr=signed), MoacTransaction)


def recover_sender(signed):
    """Recover the lowercase 0x address that signed a payload"""
    tx = decode_transaction(signed)
    recovery = tx.v - EIP155_OFFSET - tx.chain_id * 2
    signature = keys.Signature(vrs=(recovery, tx.r, tx.s))
    public_key = signature.recover_public_key_from_msg_hash(tx.signing_hash())
    return public_key.to_address()
