"""Main CLI entry point"""

import sys
import os
import json
import logging
import argparse
from pathlib import Path

from ..core.balances import BalanceQuery
from ..core.connection import MoacManager
from ..core.config import Config
from ..core.exceptions import ConfigError
from ..core.wallet import create_wallet
from ..contracts.erc20 import ERC20
from ..contracts.erc721 import ERC721
from ..contracts.fingate import Fingate
from ..operations.transfer import transfer_moac
from ..utils.gas import GasPriceAdvisor
from ..utils.nonce import NonceResolver
from ..utils.transactions import format_gas_cost


def get_results_dir():
    """Get results directory, create if needed"""
    results_dir = Path.cwd() / "results"
    results_dir.mkdir(exist_ok=True)
    return results_dir


def save_result(filename, data):
    """Save result to JSON file in results directory"""
    filepath = get_results_dir() / filename
    with open(filepath, "w") as f:
        json.dump(data, f, indent=2, default=str)
    return filepath


def print_json(data):
    print(json.dumps(data, indent=2, default=str))


def get_manager(args):
    return MoacManager(node=args.node, mainnet=not args.testnet)


def get_secret():
    """Signing secret from MOAC_SECRET (.env / wallet.env are loaded by MoacManager)"""
    secret = os.getenv("MOAC_SECRET")
    if not secret:
        raise ConfigError("MOAC_SECRET not found in environment")
    return secret


def resolve_token(symbol_or_address):
    """Token symbol from tokens.json, or an address passed through"""
    return Config().get_token_address(symbol_or_address)


def get_options(args):
    """Transaction options given on the command line"""
    options = {}
    if getattr(args, "nonce", None) is not None:
        options["nonce"] = args.nonce
    if getattr(args, "gas_price", None):
        options["gasPrice"] = args.gas_price
    if getattr(args, "gas_limit", None):
        options["gasLimit"] = args.gas_limit
    return options


def add_tx_options(parser):
    parser.add_argument("--nonce", type=int, help="Nonce (default: confirmed + pending)")
    parser.add_argument("--gas-price", type=int, help="Gas price in sha (default: node price)")
    parser.add_argument("--gas-limit", type=int, help="Gas limit (default: gas_config.json / 200000)")


# Wallet

def cmd_wallet_generate(args):
    """Generate a new wallet"""
    result = create_wallet(with_mnemonic=not args.no_mnemonic)

    print("=" * 60)
    print("WALLET GENERATED")
    print("=" * 60)
    if "mnemonic" in result:
        print(f"\nRecovery Phrase (12 words):")
        print(f"  {result['mnemonic']}\n")
    print(f"  Address: {result['address']}")
    print(f"  Secret:  {result['secret']}")
    print("\nWARNING: Store the secret securely and NEVER share it!")
    print("=" * 60)

    if args.save:
        save_data = dict(result, warning="NEVER share your mnemonic or secret!")
        filepath = save_result(f"wallet_{result['address'][:10]}.json", save_data)
        print(f"\nSaved to {filepath}", file=sys.stderr)


# Query

def cmd_query_balance(args):
    """Query MOAC and token balances for address"""
    query = BalanceQuery(get_manager(args))
    print_json(query.get_all_balances(args.address))


def cmd_query_nonce(args):
    resolver = NonceResolver(get_manager(args))
    print_json({"address": args.address, "nonce": resolver.get_nonce(args.address)})


def cmd_query_gas_price(args):
    manager = get_manager(args)
    advisor = GasPriceAdvisor(manager)
    gas_price = advisor.get_gas_price(advisor.min_gas_price)
    gas_limit = advisor.get_gas_limit(args.operation)
    print_json({
        "gasPrice": gas_price,
        "gasLimit": gas_limit,
        "maxCost": format_gas_cost(gas_limit, gas_price),
    })


def cmd_query_tx(args):
    print_json(get_manager(args).get_transaction(args.hash))


def cmd_query_receipt(args):
    print_json(get_manager(args).get_transaction_receipt(args.hash))


def cmd_query_block(args):
    block = args.block if not args.block.isdigit() else int(args.block)
    print_json(get_manager(args).get_block(block, full_transactions=args.full))


# Transfer

def cmd_transfer(args):
    """Transfer MOAC"""
    manager = get_manager(args)
    tx_hash = transfer_moac(
        manager, get_secret(), args.to, args.amount,
        memo=args.memo, options=get_options(args),
    )
    print_json({"hash": tx_hash})


# ERC20

def cmd_erc20_info(args):
    token = ERC20(get_manager(args), resolve_token(args.token))
    info = token.info
    info["totalSupply"] = token.total_supply()
    print_json(info)


def cmd_erc20_balance(args):
    token = ERC20(get_manager(args), resolve_token(args.token))
    print_json({"token": token.address, "address": args.address, "balance": token.balance_of(args.address)})


def cmd_erc20_allowance(args):
    token = ERC20(get_manager(args), resolve_token(args.token))
    print_json({"owner": args.owner, "spender": args.spender, "allowance": token.allowance(args.owner, args.spender)})


def cmd_erc20_transfer(args):
    token = ERC20(get_manager(args), resolve_token(args.token))
    tx_hash = token.transfer(get_secret(), args.to, args.amount, get_options(args))
    print_json({"hash": tx_hash})


def cmd_erc20_approve(args):
    token = ERC20(get_manager(args), resolve_token(args.token))
    tx_hash = token.approve(get_secret(), args.spender, args.amount, get_options(args))
    print_json({"hash": tx_hash})


# ERC721

def cmd_erc721_info(args):
    token = ERC721(get_manager(args), args.token)
    print_json({
        "address": token.address,
        "name": token.name(),
        "symbol": token.symbol(),
        "totalSupply": token.total_supply(),
    })


def cmd_erc721_balance(args):
    token = ERC721(get_manager(args), args.token)
    print_json({"token": token.address, "address": args.address, "balance": token.balance_of(args.address)})


def cmd_erc721_owner(args):
    token = ERC721(get_manager(args), args.token)
    print_json({
        "tokenId": args.token_id,
        "owner": token.owner_of(args.token_id),
        "uri": token.token_uri(args.token_id),
    })


def cmd_erc721_transfer(args):
    token = ERC721(get_manager(args), args.token)
    tx_hash = token.safe_transfer_from(
        get_secret(), args.to, args.token_id, data=args.data, options=get_options(args)
    )
    print_json({"hash": tx_hash})


def cmd_erc721_approve(args):
    token = ERC721(get_manager(args), args.token)
    tx_hash = token.approve(get_secret(), args.approved, args.token_id, get_options(args))
    print_json({"hash": tx_hash})


def cmd_erc721_mint(args):
    token = ERC721(get_manager(args), args.token)
    tx_hash = token.mint(get_secret(), args.to, args.token_id, args.uri, get_options(args))
    print_json({"hash": tx_hash})


def cmd_erc721_burn(args):
    token = ERC721(get_manager(args), args.token)
    tx_hash = token.burn(get_secret(), args.owner, args.token_id, get_options(args))
    print_json({"hash": tx_hash})


# Fingate

def cmd_fingate_state(args):
    fingate = Fingate(get_manager(args), args.fingate)
    state = fingate.deposit_state(args.address, args.token)
    print_json({
        "amount": state[0],
        "jtaddress": state[1],
        "time": state[2],
        "pending": fingate.is_pending(state),
    })


def cmd_fingate_deposit(args):
    fingate = Fingate(get_manager(args), args.fingate)
    tx_hash = fingate.deposit(args.jt_address, args.amount, get_secret(), get_options(args))
    print_json({"hash": tx_hash})


def cmd_fingate_deposit_token(args):
    fingate = Fingate(get_manager(args), args.fingate)
    tx_hash = fingate.deposit_token(
        args.jt_address, args.token, args.decimals, args.amount, args.tx_hash,
        get_secret(), get_options(args),
    )
    print_json({"hash": tx_hash})


def main():
    parser = argparse.ArgumentParser(
        prog="moac-toolkit",
        description="MOAC Toolkit - Sign and send MOAC, ERC20, ERC721 and Fingate transactions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""commands overview:
  wallet      Generate new wallets
  query       Query balances, nonces, gas price, transactions and blocks
  transfer    Send MOAC
  erc20       ERC20 token operations
  erc721      ERC721 token operations
  fingate     Fingate bridge deposits

examples:
  moac-toolkit query balance 0x...                      # MOAC and token balances
  moac-toolkit transfer 0x... 1.5 --memo hello          # Send 1.5 MOAC
  moac-toolkit erc20 transfer 0xTOKEN 0xTO 10           # Send 10 tokens
  moac-toolkit fingate deposit 0xFINGATE jXXX... 1      # Deposit 1 MOAC to Jingtum

configuration:
  MOAC_NODE    Node URL, set in .env file
  MOAC_SECRET  Signing secret, set in wallet.env
  tokens       config/tokens.json
  gas          gas_config.json or config/gas_config.json
""",
    )
    parser.add_argument("--node", help="Node URL (default: MOAC_NODE)")
    parser.add_argument("--testnet", action="store_true", help="Use testnet chain id 101")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log RPC requests")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # ── wallet ─────────────────────────────────────────────────────────
    wallet_parser = subparsers.add_parser("wallet", help="Wallet operations")
    wallet_sub = wallet_parser.add_subparsers(dest="wallet_type")

    wallet_gen_parser = wallet_sub.add_parser("generate", help="Generate new wallet")
    wallet_gen_parser.add_argument("--no-mnemonic", action="store_true", help="Random key without mnemonic")
    wallet_gen_parser.add_argument("--save", action="store_true", help="Save to results/")
    wallet_gen_parser.set_defaults(func=cmd_wallet_generate)

    # ── query ──────────────────────────────────────────────────────────
    query_parser = subparsers.add_parser("query", help="Query operations")
    query_sub = query_parser.add_subparsers(dest="query_type")

    balance_parser = query_sub.add_parser("balance", help="MOAC and configured token balances")
    balance_parser.add_argument("address", help="Address to query")
    balance_parser.set_defaults(func=cmd_query_balance)

    nonce_parser = query_sub.add_parser("nonce", help="Next nonce including pending transactions")
    nonce_parser.add_argument("address", help="Address to query")
    nonce_parser.set_defaults(func=cmd_query_nonce)

    gas_parser = query_sub.add_parser("gas-price", help="Gas price and limit")
    gas_parser.add_argument("--operation", help="Operation type for the gas limit (transfer, mint, ...)")
    gas_parser.set_defaults(func=cmd_query_gas_price)

    tx_parser = query_sub.add_parser("tx", help="Transaction by hash")
    tx_parser.add_argument("hash", help="Transaction hash")
    tx_parser.set_defaults(func=cmd_query_tx)

    receipt_parser = query_sub.add_parser("receipt", help="Transaction receipt by hash")
    receipt_parser.add_argument("hash", help="Transaction hash")
    receipt_parser.set_defaults(func=cmd_query_receipt)

    block_parser = query_sub.add_parser("block", help="Block by number, hash or tag")
    block_parser.add_argument("block", nargs="?", default="latest", help="Number, hash or tag (default: latest)")
    block_parser.add_argument("--full", action="store_true", help="Include full transactions")
    block_parser.set_defaults(func=cmd_query_block)

    # ── transfer ───────────────────────────────────────────────────────
    transfer_parser = subparsers.add_parser("transfer", help="Send MOAC")
    transfer_parser.add_argument("to", help="Recipient address")
    transfer_parser.add_argument("amount", help="Amount of MOAC")
    transfer_parser.add_argument("--memo", help="Memo stored in the transaction data")
    add_tx_options(transfer_parser)
    transfer_parser.set_defaults(func=cmd_transfer)

    # ── erc20 ──────────────────────────────────────────────────────────
    erc20_parser = subparsers.add_parser("erc20", help="ERC20 token operations")
    erc20_sub = erc20_parser.add_subparsers(dest="erc20_command")

    p = erc20_sub.add_parser("info", help="Token name, symbol, decimals and supply")
    p.add_argument("token", help="Token symbol (config/tokens.json) or contract address")
    p.set_defaults(func=cmd_erc20_info)

    p = erc20_sub.add_parser("balance", help="Token balance")
    p.add_argument("token", help="Token contract address")
    p.add_argument("address", help="Address to query")
    p.set_defaults(func=cmd_erc20_balance)

    p = erc20_sub.add_parser("allowance", help="Remaining allowance in base units")
    p.add_argument("token", help="Token contract address")
    p.add_argument("owner", help="Owner address")
    p.add_argument("spender", help="Spender address")
    p.set_defaults(func=cmd_erc20_allowance)

    p = erc20_sub.add_parser("transfer", help="Transfer tokens")
    p.add_argument("token", help="Token contract address")
    p.add_argument("to", help="Recipient address")
    p.add_argument("amount", help="Amount in token units")
    add_tx_options(p)
    p.set_defaults(func=cmd_erc20_transfer)

    p = erc20_sub.add_parser("approve", help="Approve a spender")
    p.add_argument("token", help="Token contract address")
    p.add_argument("spender", help="Spender address")
    p.add_argument("amount", help="Amount in token units")
    add_tx_options(p)
    p.set_defaults(func=cmd_erc20_approve)

    # ── erc721 ─────────────────────────────────────────────────────────
    erc721_parser = subparsers.add_parser("erc721", help="ERC721 token operations")
    erc721_sub = erc721_parser.add_subparsers(dest="erc721_command")

    p = erc721_sub.add_parser("info", help="Name, symbol and supply")
    p.add_argument("token", help="Token contract address")
    p.set_defaults(func=cmd_erc721_info)

    p = erc721_sub.add_parser("balance", help="Number of tokens held")
    p.add_argument("token", help="Token contract address")
    p.add_argument("address", help="Address to query")
    p.set_defaults(func=cmd_erc721_balance)

    p = erc721_sub.add_parser("owner", help="Owner and URI of a token")
    p.add_argument("token", help="Token contract address")
    p.add_argument("token_id", help="Token id")
    p.set_defaults(func=cmd_erc721_owner)

    p = erc721_sub.add_parser("transfer", help="Safe transfer a token")
    p.add_argument("token", help="Token contract address")
    p.add_argument("to", help="Recipient address")
    p.add_argument("token_id", help="Token id")
    p.add_argument("--data", help="0x payload for the receiver")
    add_tx_options(p)
    p.set_defaults(func=cmd_erc721_transfer)

    p = erc721_sub.add_parser("approve", help="Approve an address for a token")
    p.add_argument("token", help="Token contract address")
    p.add_argument("approved", help="Approved address")
    p.add_argument("token_id", help="Token id")
    add_tx_options(p)
    p.set_defaults(func=cmd_erc721_approve)

    p = erc721_sub.add_parser("mint", help="Mint a token")
    p.add_argument("token", help="Token contract address")
    p.add_argument("to", help="Recipient address")
    p.add_argument("token_id", help="Token id")
    p.add_argument("uri", help="Token metadata URI")
    add_tx_options(p)
    p.set_defaults(func=cmd_erc721_mint)

    p = erc721_sub.add_parser("burn", help="Burn a token")
    p.add_argument("token", help="Token contract address")
    p.add_argument("owner", help="Current owner address")
    p.add_argument("token_id", help="Token id")
    add_tx_options(p)
    p.set_defaults(func=cmd_erc721_burn)

    # ── fingate ────────────────────────────────────────────────────────
    fingate_parser = subparsers.add_parser("fingate", help="Fingate bridge deposits")
    fingate_sub = fingate_parser.add_subparsers(dest="fingate_command")

    p = fingate_sub.add_parser("state", help="Pending deposit state")
    p.add_argument("fingate", help="Fingate contract address")
    p.add_argument("address", help="Depositor address")
    p.add_argument("--token", default="0x0000000000000000000000000000000000000000",
                   help="Token contract address (default: MOAC)")
    p.set_defaults(func=cmd_fingate_state)

    p = fingate_sub.add_parser("deposit", help="Deposit MOAC")
    p.add_argument("fingate", help="Fingate contract address")
    p.add_argument("jt_address", help="Destination Jingtum address")
    p.add_argument("amount", help="Amount of MOAC")
    add_tx_options(p)
    p.set_defaults(func=cmd_fingate_deposit)

    p = fingate_sub.add_parser("deposit-token", help="Deposit an ERC20 token")
    p.add_argument("fingate", help="Fingate contract address")
    p.add_argument("jt_address", help="Destination Jingtum address")
    p.add_argument("token", help="Token contract address")
    p.add_argument("decimals", type=int, help="Token decimals")
    p.add_argument("amount", help="Amount in token units")
    p.add_argument("tx_hash", help="Hash of the token transfer to Fingate")
    add_tx_options(p)
    p.set_defaults(func=cmd_fingate_deposit_token)

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    nested = {
        "wallet": (wallet_parser, "wallet_type"),
        "query": (query_parser, "query_type"),
        "erc20": (erc20_parser, "erc20_command"),
        "erc721": (erc721_parser, "erc721_command"),
        "fingate": (fingate_parser, "fingate_command"),
    }
    if args.command in nested:
        sub_parser, dest = nested[args.command]
        if not getattr(args, dest):
            sub_parser.print_help()
            sys.exit(1)

    try:
        args.func(args)
    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
