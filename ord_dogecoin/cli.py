"""Command line interface for ord on Dogecoin."""

from __future__ import annotations

"""Command-line interface for ord's option handling.

Global options select the chain, the Dogecoin Core data directory, the ord
data directory and configuration, and the RPC endpoint. Subcommands resolve
them, connect to the node where needed, and hand the result to the indexing
and wallet layers.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from .chain import CHAIN_ALIASES, Chain
from .config import ConfigurationError
from .index import IndexUpdater, plan_index
from .options import DEFAULT_WALLET, Connector, Options, UsageError
from .rpc_client import DogecoinRPCClient, RPCConnectionError, RPCError
from .wallet import DescriptorSummary, VersionError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _non_negative_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid height: {raw}") from exc
    if value < 0:
        raise argparse.ArgumentTypeError(f"height must be non-negative: {raw}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ord", description="ord for Dogecoin")
    parser.add_argument(
        "--dogecoin-data-dir",
        type=Path,
        help="Load Dogecoin Core data dir from <DOGECOIN_DATA_DIR>.",
    )

    chains = parser.add_mutually_exclusive_group()
    chains.add_argument(
        "--chain",
        dest="chain_argument",
        type=Chain.parse,
        default=Chain.MAINNET,
        metavar="{" + ",".join(CHAIN_ALIASES) + "}",
        help="Use <CHAIN>. (default: mainnet)",
    )
    chains.add_argument(
        "-s",
        "--signet",
        action="store_true",
        help="Use signet. Equivalent to `--chain signet`.",
    )
    chains.add_argument(
        "-r",
        "--regtest",
        action="store_true",
        help="Use regtest. Equivalent to `--chain regtest`.",
    )
    chains.add_argument(
        "-t",
        "--testnet",
        action="store_true",
        help="Use testnet. Equivalent to `--chain testnet`.",
    )

    parser.add_argument("--config", type=Path, help="Load configuration from <CONFIG>.")
    parser.add_argument(
        "--config-dir", type=Path, help="Load configuration from <CONFIG_DIR>."
    )
    parser.add_argument(
        "--cookie-file",
        type=Path,
        help="Load Dogecoin Core RPC cookie file from <COOKIE_FILE>.",
    )
    parser.add_argument("--data-dir", type=Path, help="Store index in <DATA_DIR>.")
    parser.add_argument(
        "--first-inscription-height",
        type=_non_negative_int,
        help="Don't look for inscriptions below <FIRST_INSCRIPTION_HEIGHT>.",
    )
    parser.add_argument(
        "--height-limit",
        type=_non_negative_int,
        help="Limit index to <HEIGHT_LIMIT> blocks.",
    )
    parser.add_argument("--index", type=Path, help="Use index at <INDEX>.")
    parser.add_argument(
        "--index-sats", action="store_true", help="Track location of all satoshis."
    )
    parser.add_argument("--rpc-url", help="Connect to Dogecoin Core RPC at <RPC_URL>.")
    parser.add_argument(
        "--wallet",
        default=DEFAULT_WALLET,
        help="Use wallet named <WALLET>. (default: %(default)s)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "settings", help="print the resolved chain, paths and configuration"
    )
    subparsers.add_parser(
        "index", help="connect to Dogecoin Core and update the index"
    )

    wallet_parser = subparsers.add_parser("wallet", help="wallet commands")
    wallet_subparsers = wallet_parser.add_subparsers(dest="wallet_command", required=True)
    wallet_subparsers.add_parser(
        "check", help="verify the node version and the wallet's output descriptors"
    )
    wallet_subparsers.add_parser(
        "create", help="verify the node can host a new ord wallet"
    )

    return parser


def _print_json(value: Any) -> None:
    print(json.dumps(value, indent=2))


def cmd_settings(options: Options) -> None:
    config = options.load_config()
    _print_json(
        {
            "chain": str(options.chain()),
            "rpc_url": options.rpc_url_value(),
            "cookie_file": str(options.cookie_file_path()),
            "data_dir": str(options.data_dir_path()),
            "index": str(options.index_path()),
            "wallet": options.wallet,
            "first_inscription_height": options.first_inscription_height_value(),
            "height_limit": options.height_limit,
            "index_sats": options.index_sats,
            "hidden": sorted(config.hidden),
        }
    )


def cmd_index(
    options: Options, connect: Connector, updater: IndexUpdater | None = None
) -> None:
    config = options.load_config()
    client = options.dogecoin_rpc_client(connect)
    plan = plan_index(options, client, config)
    if updater is None:
        _print_json(plan.to_jsonable())
        return
    logger.info(
        "Updating index at %s up to height %d", plan.index_path, plan.end_height
    )
    updater.update(client, plan)


def cmd_wallet(options: Options, wallet_command: str, connect: Connector) -> None:
    create = wallet_command == "create"
    _, summary = options.dogecoin_rpc_client_for_wallet_command(create, connect)
    result: dict[str, Any] = {"wallet": options.wallet, "chain": str(options.chain())}
    if isinstance(summary, DescriptorSummary):
        result["descriptors"] = {
            "total": summary.total,
            "tr": summary.taproot,
            "rawtr": summary.raw_taproot,
        }
    else:
        result["ready"] = True
    _print_json(result)


def main(
    argv: Sequence[str] | None = None,
    *,
    connect: Connector = DogecoinRPCClient.from_cookie_file,
    updater: IndexUpdater | None = None,
) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        options = Options.from_args(args)
        if args.command == "settings":
            cmd_settings(options)
        elif args.command == "index":
            cmd_index(options, connect, updater)
        elif args.command == "wallet":
            cmd_wallet(options, args.wallet_command, connect)
        else:  # pragma: no cover - argparse enforces choices
            raise UsageError(f"Unknown command: {args.command}")
    except KeyboardInterrupt:  # pragma: no cover - interactive use
        logger.info("Interrupted by user")
    except (
        UsageError,
        ConfigurationError,
        RPCConnectionError,
        RPCError,
        VersionError,
    ) as exc:
        parser.exit(1, f"error: {exc}\n")


if __name__ == "__main__":
    main(sys.argv[1:])
