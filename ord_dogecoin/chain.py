"""Dogecoin networks understood by ord and their static parameters."""

from __future__ import annotations

import argparse
from enum import Enum
from pathlib import Path


class Chain(Enum):
    """One of the mutually exclusive networks a command runs against."""

    MAINNET = "mainnet"
    TESTNET = "testnet"
    SIGNET = "signet"
    REGTEST = "regtest"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> "Chain":
        """Map a ``--chain`` argument (including short aliases) to a chain."""

        try:
            return _ALIASES[text.strip().lower()]
        except KeyError as exc:
            choices = ", ".join(sorted(_ALIASES))
            raise argparse.ArgumentTypeError(
                f"invalid chain {text!r} (choose from {choices})"
            ) from exc

    @classmethod
    def from_rpc_name(cls, name: str) -> "Chain | None":
        """Return the chain matching ``getblockchaininfo.chain`` or ``None``."""

        for chain, rpc_name in _RPC_NAMES.items():
            if rpc_name == name:
                return chain
        return None

    @property
    def default_rpc_port(self) -> int:
        return _RPC_PORTS[self]

    @property
    def first_inscription_height(self) -> int:
        return _FIRST_INSCRIPTION_HEIGHTS[self]

    @property
    def rpc_name(self) -> str:
        return _RPC_NAMES[self]

    @property
    def data_dir_suffix(self) -> str | None:
        """Directory segment appended below a base directory; mainnet has none."""

        return _DATA_DIR_SUFFIXES[self]

    def join_with_data_dir(self, base: Path) -> Path:
        suffix = self.data_dir_suffix
        if suffix is None:
            return base
        return base / suffix


_ALIASES = {
    "main": Chain.MAINNET,
    "mainnet": Chain.MAINNET,
    "test": Chain.TESTNET,
    "testnet": Chain.TESTNET,
    "signet": Chain.SIGNET,
    "regtest": Chain.REGTEST,
}

_RPC_NAMES = {
    Chain.MAINNET: "main",
    Chain.TESTNET: "test",
    Chain.SIGNET: "signet",
    Chain.REGTEST: "regtest",
}

_RPC_PORTS = {
    Chain.MAINNET: 22555,
    Chain.TESTNET: 44555,
    Chain.SIGNET: 38332,
    Chain.REGTEST: 18332,
}

_FIRST_INSCRIPTION_HEIGHTS = {
    Chain.MAINNET: 4609723,
    Chain.TESTNET: 4260514,
    Chain.SIGNET: 0,
    Chain.REGTEST: 0,
}

_DATA_DIR_SUFFIXES: dict[Chain, str | None] = {
    Chain.MAINNET: None,
    Chain.TESTNET: "testnet3",
    Chain.SIGNET: "signet",
    Chain.REGTEST: "regtest",
}

CHAIN_ALIASES = tuple(_ALIASES)
