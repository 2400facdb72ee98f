"""Preflight checks for commands that operate on an ord wallet."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from .config import ConfigurationError
from .rpc_client import NodeRPC, RPCConnectionError, RPCError, format_rpc_hint

logger = logging.getLogger(__name__)

MIN_DOGECOIN_VERSION = 1140600

TAPROOT_PREFIX = "tr("
RAW_TAPROOT_PREFIX = "rawtr("


class VersionError(RuntimeError):
    """Raised when the node is older than the minimum supported release."""

    def __init__(self, required: str, actual: str) -> None:
        super().__init__(
            f"Dogecoin Core {required} or newer required, current version is {actual}"
        )
        self.required = required
        self.actual = actual


def format_dogecoin_core_version(version: int) -> str:
    """Render an integer node version such as ``1140600`` as ``1.14.6.0``."""

    return (
        f"{version // 1000000}."
        f"{version % 1000000 // 10000}."
        f"{version % 10000 // 100}."
        f"{version % 100}"
    )


@dataclass(frozen=True)
class DescriptorSummary:
    """Counts of the output descriptors a wallet reported."""

    total: int
    taproot: int
    raw_taproot: int

    @classmethod
    def from_descriptors(cls, descriptors: Iterable[Mapping[str, Any]]) -> "DescriptorSummary":
        encoded = [str(entry.get("desc", "")) for entry in descriptors]
        return cls(
            total=len(encoded),
            taproot=sum(1 for desc in encoded if desc.startswith(TAPROOT_PREFIX)),
            raw_taproot=sum(1 for desc in encoded if desc.startswith(RAW_TAPROOT_PREFIX)),
        )

    @property
    def is_ord_wallet(self) -> bool:
        # ord wallets hold one receive and one change taproot descriptor plus
        # any number of imported rawtr() descriptors.
        return self.taproot == 2 and self.total == 2 + self.raw_taproot


def check_node_version(client: NodeRPC, minimum: int = MIN_DOGECOIN_VERSION) -> int:
    version = client.version()
    if version < minimum:
        raise VersionError(
            format_dogecoin_core_version(minimum),
            format_dogecoin_core_version(version),
        )
    return version


def ensure_wallet_loaded(client: NodeRPC, wallet: str) -> None:
    if wallet in client.listwallets():
        return
    logger.info("Loading wallet %s", wallet)
    try:
        client.loadwallet(wallet)
    except RPCError as exc:
        message = f"failed to load wallet \"{wallet}\": {exc}"
        hint = format_rpc_hint(exc)
        if hint:
            message += f"\nHint: {hint}"
        raise RPCConnectionError(message, endpoint=getattr(client, "url", None)) from exc


def preflight_wallet(
    client: NodeRPC, wallet: str, *, create: bool = False
) -> DescriptorSummary | None:
    """Validate ``client`` for a wallet command.

    The node version is always checked. Unless the command is creating the
    wallet, the wallet is loaded if needed and its descriptors must match the
    shape of a wallet created by ``ord wallet create``. Returns the descriptor
    summary, or ``None`` when ``create`` is set.
    """

    check_node_version(client)

    if create:
        return None

    ensure_wallet_loaded(client, wallet)

    summary = DescriptorSummary.from_descriptors(client.listdescriptors())
    logger.debug(
        "Wallet %s has %d descriptors (%d tr, %d rawtr)",
        wallet,
        summary.total,
        summary.taproot,
        summary.raw_taproot,
    )
    if not summary.is_ord_wallet:
        raise ConfigurationError(
            f"wallet \"{wallet}\" contains unexpected output descriptors, and does not "
            "appear to be an `ord` wallet, create a new wallet with `ord wallet create`"
        )
    return summary
