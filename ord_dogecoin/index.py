"""Hand-off from option resolution to the external index updater."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from .chain import Chain
from .config import Config
from .options import Options
from .rpc_client import NodeRPC


@dataclass(frozen=True)
class IndexPlan:
    """Everything an index updater needs to run against a validated node."""

    chain: Chain
    index_path: Path
    first_inscription_height: int
    height_limit: Optional[int]
    index_sats: bool
    node_height: int
    hidden: frozenset[str]

    @property
    def end_height(self) -> int:
        """Last block height the updater should process, inclusive."""

        if self.height_limit is None:
            return self.node_height
        return min(self.node_height, self.height_limit - 1)

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "chain": str(self.chain),
            "index_path": str(self.index_path),
            "first_inscription_height": self.first_inscription_height,
            "height_limit": self.height_limit,
            "end_height": self.end_height,
            "index_sats": self.index_sats,
            "node_height": self.node_height,
            "hidden": len(self.hidden),
        }


class IndexUpdater(Protocol):
    """Interface implemented by the indexing engine."""

    def update(self, client: NodeRPC, plan: IndexPlan) -> None: ...


def plan_index(options: Options, client: NodeRPC, config: Config) -> IndexPlan:
    return IndexPlan(
        chain=options.chain(),
        index_path=options.index_path(),
        first_inscription_height=options.first_inscription_height_value(),
        height_limit=options.height_limit,
        index_sats=options.index_sats,
        node_height=client.getblockcount(),
        hidden=config.hidden,
    )
