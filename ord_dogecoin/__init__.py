"""ord for Dogecoin: option resolution and Dogecoin Core connection checks."""

from .chain import Chain
from .config import Config, ConfigurationError, load_config
from .index import IndexPlan, IndexUpdater, plan_index
from .options import DEFAULT_WALLET, Options, UsageError
from .paths import SystemDirectories, cookie_file_path, data_dir_path, index_path
from .rpc_client import (
    DogecoinRPCClient,
    NodeRPC,
    RPCConnectionError,
    RPCError,
    read_cookie_file,
)
from .wallet import (
    MIN_DOGECOIN_VERSION,
    DescriptorSummary,
    VersionError,
    format_dogecoin_core_version,
    preflight_wallet,
)

__all__ = [
    "Chain",
    "Config",
    "ConfigurationError",
    "load_config",
    "IndexPlan",
    "IndexUpdater",
    "plan_index",
    "DEFAULT_WALLET",
    "Options",
    "UsageError",
    "SystemDirectories",
    "cookie_file_path",
    "data_dir_path",
    "index_path",
    "DogecoinRPCClient",
    "NodeRPC",
    "RPCConnectionError",
    "RPCError",
    "read_cookie_file",
    "MIN_DOGECOIN_VERSION",
    "DescriptorSummary",
    "VersionError",
    "format_dogecoin_core_version",
    "preflight_wallet",
]
