"""Native MOAC transfers"""

from urllib.parse import quote

from ..utils.transactions import TransactionBuilder
from ..utils.validators import ADDRESS, AMOUNT, SECRET, check_guards

# Characters encodeURIComponent leaves untouched
_URI_SAFE = "-_.!~*'()"


def encode_memo(memo):
    """Hex call-data of the URI-component-encoded memo, None without memo"""
    if not memo:
        return None
    encoded = quote(memo, safe=_URI_SAFE)
    return "0x" + encoded.encode("ascii").hex()


def transfer_moac(manager, secret, to, amount, memo=None, options=None, builder=None):
    """
    Transfer MOAC to an address.

    Args:
        manager: MoacManager instance
        secret: Sender secret
        to: Recipient address
        amount: Amount of MOAC as a decimal string
        memo: Optional text memo stored in the transaction data
        options: Optional nonce, gasPrice, gasLimit
        builder: TransactionBuilder instance (created if None)

    Returns:
        Transaction hash
    """
    check_guards([(0, SECRET), (1, ADDRESS), (2, AMOUNT)], secret, to, amount)
    builder = builder or TransactionBuilder(manager)
    return builder.send_transaction_with_calldata(
        secret, to, str(amount), encode_memo(memo),
        options=options, operation_type="transfer",
    )
