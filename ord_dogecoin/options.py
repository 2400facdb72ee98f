"""Resolved runtime options shared by every ord command."""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping

from . import paths
from .chain import Chain
from .config import Config, ConfigurationError, load_config
from .rpc_client import DogecoinRPCClient, NodeRPC
from .wallet import DescriptorSummary, preflight_wallet

logger = logging.getLogger(__name__)

DEFAULT_WALLET = "ord"
INTEGRATION_TEST_ENV = "ORD_INTEGRATION_TEST"

Connector = Callable[[str, Path], NodeRPC]


class UsageError(ValueError):
    """Raised when mutually exclusive options are combined."""


@dataclass(frozen=True)
class Options:
    """Immutable snapshot of the global command-line options.

    Accessor methods derive the effective chain, endpoint and filesystem paths.
    Platform directory lookups go through ``directories`` so they can be
    replaced in tests.
    """

    dogecoin_data_dir: Path | None = None
    chain_argument: Chain = Chain.MAINNET
    config: Path | None = None
    config_dir: Path | None = None
    cookie_file: Path | None = None
    data_dir: Path | None = None
    first_inscription_height: int | None = None
    height_limit: int | None = None
    index: Path | None = None
    index_sats: bool = False
    regtest: bool = False
    rpc_url: str | None = None
    signet: bool = False
    testnet: bool = False
    wallet: str = DEFAULT_WALLET
    directories: paths.SystemDirectories | None = None

    def __post_init__(self) -> None:
        selected = [
            flag
            for flag, enabled in (
                ("--signet", self.signet),
                ("--regtest", self.regtest),
                ("--testnet", self.testnet),
                (f"--chain {self.chain_argument}", self.chain_argument is not Chain.MAINNET),
            )
            if enabled
        ]
        if len(selected) > 1:
            raise UsageError(f"{' and '.join(selected)} cannot be used together")

    @classmethod
    def from_args(
        cls,
        args: argparse.Namespace,
        directories: paths.SystemDirectories | None = None,
    ) -> "Options":
        return cls(
            dogecoin_data_dir=args.dogecoin_data_dir,
            chain_argument=args.chain_argument,
            config=args.config,
            config_dir=args.config_dir,
            cookie_file=args.cookie_file,
            data_dir=args.data_dir,
            first_inscription_height=args.first_inscription_height,
            height_limit=args.height_limit,
            index=args.index,
            index_sats=args.index_sats,
            regtest=args.regtest,
            rpc_url=args.rpc_url,
            signet=args.signet,
            testnet=args.testnet,
            wallet=args.wallet,
            directories=directories,
        )

    def chain(self) -> Chain:
        if self.signet:
            return Chain.SIGNET
        if self.regtest:
            return Chain.REGTEST
        if self.testnet:
            return Chain.TESTNET
        return self.chain_argument

    def first_inscription_height_value(self, env: Mapping[str, str] | None = None) -> int:
        """Return the height below which inscriptions are not searched for."""

        env_map = os.environ if env is None else env
        chain = self.chain()
        if chain is Chain.REGTEST:
            return self.first_inscription_height or 0
        if env_map.get(INTEGRATION_TEST_ENV):
            return 0
        if self.first_inscription_height is not None:
            return self.first_inscription_height
        return chain.first_inscription_height

    def rpc_url_value(self) -> str:
        if self.rpc_url is not None:
            return self.rpc_url
        return f"127.0.0.1:{self.chain().default_rpc_port}/wallet/{self.wallet}"

    def cookie_file_path(self) -> Path:
        return paths.cookie_file_path(
            self.chain(),
            cookie_file=self.cookie_file,
            dogecoin_data_dir=self.dogecoin_data_dir,
            directories=self.directories,
        )

    def data_dir_path(self) -> Path:
        return paths.data_dir_path(self.chain(), self.data_dir, self.directories)

    def index_path(self) -> Path:
        return paths.index_path(self.chain(), self.index, self.data_dir, self.directories)

    def load_config(self) -> Config:
        return load_config(self.config, self.config_dir)

    def dogecoin_rpc_client(
        self, connect: Connector = DogecoinRPCClient.from_cookie_file
    ) -> NodeRPC:
        """Connect to Dogecoin Core and check that it runs the selected chain."""

        try:
            cookie_file = self.cookie_file_path()
        except ConfigurationError as exc:
            raise ConfigurationError(f"failed to get cookie file path: {exc}") from exc

        rpc_url = self.rpc_url_value()

        logger.info(
            "Connecting to Dogecoin Core RPC server at %s using credentials from `%s`",
            rpc_url,
            cookie_file,
        )

        client = connect(rpc_url, cookie_file)

        rpc_chain_name = client.getblockchaininfo().get("chain")
        rpc_chain = Chain.from_rpc_name(rpc_chain_name)
        if rpc_chain is None:
            raise ConfigurationError(f"Dogecoin RPC server on unknown chain: {rpc_chain_name}")

        ord_chain = self.chain()
        if rpc_chain is not ord_chain:
            raise ConfigurationError(
                f"Dogecoin RPC server is on {rpc_chain} but ord is on {ord_chain}"
            )

        return client

    def dogecoin_rpc_client_for_wallet_command(
        self,
        create: bool,
        connect: Connector = DogecoinRPCClient.from_cookie_file,
    ) -> tuple[NodeRPC, DescriptorSummary | None]:
        """Connect, check the chain, then run wallet preflight.

        Returns the client with the descriptor summary, which is ``None`` when
        ``create`` is set.
        """

        client = self.dogecoin_rpc_client(connect)
        summary = preflight_wallet(client, self.wallet, create=create)
        return client, summary
