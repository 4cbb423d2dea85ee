"""Command line entry point.

Usage:
    chaintx cosmoshub send --recipient cosmos1... --amount 1000000
    chaintx osmosis delegate --validator osmovaloper1... --amount 500000
    chaintx cosmoshub vote --proposal-id 42 --option yes
    chaintx solana send --recipient <base58> --amount 0.5
    chaintx ethereum send --recipient 0x... --amount 0.01
    chaintx --list-chains

The seed phrase comes from --mnemonic, then WALLET_SEED_PHRASE, then an
interactive prompt.
"""

import argparse
import asyncio
import json
import logging
import sys
from getpass import getpass
from typing import Optional, Sequence

from chaintx.chains import CHAINS, supported_chains
from chaintx.config import get_settings
from chaintx.dispatcher import execute_transaction
from chaintx.errors import TransactionError
from chaintx.handlers import get_chain_handler
from chaintx.models import TransactionParams, TransactionType

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="chaintx",
        description="Sign and broadcast a transaction on a Cosmos SDK chain, Solana or Ethereum",
    )
    parser.add_argument("chain", nargs="?", help=f"Chain name ({', '.join(supported_chains())})")
    parser.add_argument(
        "transaction_type",
        nargs="?",
        help=f"Operation ({', '.join(t.value for t in TransactionType)})",
    )

    ops = parser.add_argument_group("operation parameters")
    ops.add_argument("--recipient", help="Recipient address (send, ibcTransfer)")
    ops.add_argument("--amount", help="Amount: base units on Cosmos, SOL on Solana, ETH on Ethereum")
    ops.add_argument("--validator", dest="validator_address", help="Validator (delegate, undelegate)")
    ops.add_argument("--src-validator", dest="src_validator_address", help="Source validator (redelegate)")
    ops.add_argument("--dst-validator", dest="dst_validator_address", help="Destination validator (redelegate)")
    ops.add_argument("--title", help="Proposal title (submitProposal)")
    ops.add_argument("--description", help="Proposal description (submitProposal)")
    ops.add_argument("--deposit", help="Initial deposit in base units (submitProposal)")
    ops.add_argument("--proposal-id", help="Proposal id (vote)")
    ops.add_argument("--option", help="Vote option: yes, abstain, no, no_with_veto or 1-4 (vote)")
    ops.add_argument("--memo", help="Override the default memo (Cosmos)")
    ops.add_argument("--channel", dest="source_channel", help="IBC source channel (ibcTransfer)")

    parser.add_argument("--mnemonic", help="Seed phrase (prefer WALLET_SEED_PHRASE or the prompt)")
    parser.add_argument("--list-chains", action="store_true", help="List supported chains and exit")
    parser.add_argument("--show-config", action="store_true", help="Print settings (redacted) and exit")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def params_from_args(args: argparse.Namespace) -> TransactionParams:
    """Collect operation parameters from parsed arguments."""
    return TransactionParams(
        recipient=args.recipient,
        amount=args.amount,
        validator_address=args.validator_address,
        src_validator_address=args.src_validator_address,
        dst_validator_address=args.dst_validator_address,
        title=args.title,
        description=args.description,
        deposit=args.deposit,
        proposal_id=args.proposal_id,
        option=args.option,
        memo=args.memo,
        source_channel=args.source_channel,
    )


def resolve_mnemonic(args: argparse.Namespace) -> str:
    """Get the seed phrase from args, settings, or an interactive prompt."""
    if args.mnemonic:
        return args.mnemonic

    settings = get_settings()
    if settings.wallet_seed_phrase:
        return settings.wallet_seed_phrase

    print("Enter your seed phrase (12 or 24 words):")
    return getpass("Seed phrase: ")


def print_chains() -> None:
    """Print the chain table."""
    for name in supported_chains():
        chain = CHAINS[name]
        prefix = f" prefix={chain.address_prefix}" if chain.address_prefix else ""
        print(f"{name:<10} {chain.family.value:<9} denom={chain.native_denom}{prefix} rpc={chain.rpc_endpoint}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    log_level = logging.DEBUG if (args.debug or settings.debug) else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.list_chains:
        print_chains()
        return 0

    if args.show_config:
        print(json.dumps(settings.get_safe_dict(), indent=2))
        return 0

    if not args.chain or not args.transaction_type:
        parser.error("chain and transaction_type are required")

    # Fail on a bad chain or type before asking for the seed phrase
    try:
        get_chain_handler(args.chain, settings).resolve_type(args.transaction_type)
    except TransactionError as e:
        logger.error(str(e))
        return 1

    params = params_from_args(args)
    mnemonic = resolve_mnemonic(args)

    try:
        result = asyncio.run(
            execute_transaction(args.chain, args.transaction_type, mnemonic, params)
        )
    except TransactionError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.error(f"Transaction failed: {e}")
        logger.debug("Traceback", exc_info=True)
        return 1

    print(f"Transaction successful with hash: {result.tx_hash}")
    if result.explorer_url:
        print(f"Explorer: {result.explorer_url}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
