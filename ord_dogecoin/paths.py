"""Filesystem locations for the Dogecoin Core cookie file and the ord index.

Each helper takes the explicit override (if any) and the selected chain, and
asks a :class:`SystemDirectories` instance for platform locations. Tests pass
their own directories object so no real home directory is consulted.
"""

from __future__ import annotations

import sys
from pathlib import Path

from platformdirs import user_data_dir

from .chain import Chain
from .config import ConfigurationError

COOKIE_FILENAME = ".cookie"
INDEX_FILENAME = "index.redb"
LINUX_DOGECOIN_DIRNAME = ".dogecoin"
DOGECOIN_DIRNAME = "Dogecoin"
ORD_DIRNAME = "ord"


class SystemDirectories:
    """Platform lookups for the per-user home and data directories."""

    def __init__(self, platform: str | None = None) -> None:
        self.platform = platform or sys.platform

    @property
    def is_linux(self) -> bool:
        return self.platform.startswith("linux")

    def home_dir(self) -> Path | None:
        try:
            return Path.home()
        except RuntimeError:
            return None

    def data_dir(self) -> Path | None:
        resolved = user_data_dir(roaming=True)
        return Path(resolved) if resolved else None


def _require(path: Path | None, kind: str) -> Path:
    if path is None:
        raise ConfigurationError(f"failed to retrieve {kind} dir")
    return path


def dogecoin_base_dir(directories: SystemDirectories) -> Path:
    """Return Dogecoin Core's default data directory for this platform."""

    if directories.is_linux:
        return _require(directories.home_dir(), "home") / LINUX_DOGECOIN_DIRNAME
    return _require(directories.data_dir(), "data") / DOGECOIN_DIRNAME


def cookie_file_path(
    chain: Chain,
    cookie_file: str | Path | None = None,
    dogecoin_data_dir: str | Path | None = None,
    directories: SystemDirectories | None = None,
) -> Path:
    if cookie_file is not None:
        return Path(cookie_file)

    if dogecoin_data_dir is not None:
        base = Path(dogecoin_data_dir)
    else:
        base = dogecoin_base_dir(directories or SystemDirectories())

    return chain.join_with_data_dir(base) / COOKIE_FILENAME


def data_dir_path(
    chain: Chain,
    data_dir: str | Path | None = None,
    directories: SystemDirectories | None = None,
) -> Path:
    if data_dir is not None:
        base = Path(data_dir)
    else:
        directories = directories or SystemDirectories()
        base = _require(directories.data_dir(), "data") / ORD_DIRNAME

    return chain.join_with_data_dir(base)


def index_path(
    chain: Chain,
    index: str | Path | None = None,
    data_dir: str | Path | None = None,
    directories: SystemDirectories | None = None,
) -> Path:
    """Return the index file location, defaulting into the chain's data dir."""

    if index is not None:
        return Path(index)
    return data_dir_path(chain, data_dir, directories) / INDEX_FILENAME
