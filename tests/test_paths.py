from pathlib import Path

import pytest

from ord_dogecoin.chain import Chain
from ord_dogecoin.config import ConfigurationError
from ord_dogecoin.paths import SystemDirectories, cookie_file_path, data_dir_path


class FixedDirectories(SystemDirectories):
    def __init__(self, home: Path | None, data: Path | None, platform: str) -> None:
        super().__init__(platform)
        self._home = home
        self._data = data

    def home_dir(self) -> Path | None:
        return self._home

    def data_dir(self) -> Path | None:
        return self._data


HOME = Path("/home/shibe")
DATA = Path("/data")


@pytest.fixture
def linux() -> FixedDirectories:
    return FixedDirectories(HOME, HOME / ".local" / "share", "linux")


@pytest.fixture
def macos() -> FixedDirectories:
    return FixedDirectories(HOME, DATA, "darwin")


def test_mainnet_cookie_file_path_on_linux(linux: FixedDirectories) -> None:
    assert cookie_file_path(Chain.MAINNET, directories=linux) == HOME / ".dogecoin" / ".cookie"


def test_mainnet_cookie_file_path_elsewhere(macos: FixedDirectories) -> None:
    assert cookie_file_path(Chain.MAINNET, directories=macos) == DATA / "Dogecoin" / ".cookie"


@pytest.mark.parametrize(
    "chain, segment",
    [(Chain.SIGNET, "signet"), (Chain.REGTEST, "regtest"), (Chain.TESTNET, "testnet3")],
)
def test_othernet_cookie_file_path(linux: FixedDirectories, macos: FixedDirectories, chain: Chain, segment: str) -> None:
    assert cookie_file_path(chain, directories=linux) == HOME / ".dogecoin" / segment / ".cookie"
    assert cookie_file_path(chain, directories=macos) == DATA / "Dogecoin" / segment / ".cookie"


def test_explicit_cookie_file_wins(linux: FixedDirectories) -> None:
    assert cookie_file_path(
        Chain.TESTNET,
        cookie_file="/foo/bar",
        dogecoin_data_dir="/elsewhere",
        directories=linux,
    ) == Path("/foo/bar")


def test_dogecoin_data_dir_replaces_platform_base() -> None:
    unresolvable = FixedDirectories(None, None, "linux")
    assert cookie_file_path(Chain.TESTNET, dogecoin_data_dir="foo", directories=unresolvable) == (
        Path("foo") / "testnet3" / ".cookie"
    )


def test_mainnet_data_dir(macos: FixedDirectories) -> None:
    assert data_dir_path(Chain.MAINNET, directories=macos) == DATA / "ord"


def test_linux_data_dir_uses_user_data_dir(linux: FixedDirectories) -> None:
    assert data_dir_path(Chain.SIGNET, directories=linux) == HOME / ".local" / "share" / "ord" / "signet"


@pytest.mark.parametrize(
    "alias, segment",
    [("main", None), ("mainnet", None), ("regtest", "regtest"), ("signet", "signet"), ("test", "testnet3"), ("testnet", "testnet3")],
)
def test_network_accepts_aliases(macos: FixedDirectories, alias: str, segment: str | None) -> None:
    expected = DATA / "ord" if segment is None else DATA / "ord" / segment
    assert data_dir_path(Chain.parse(alias), directories=macos) == expected


def test_explicit_data_dir_is_joined_like_default() -> None:
    unresolvable = FixedDirectories(None, None, "darwin")
    assert data_dir_path(Chain.MAINNET, "foo", unresolvable) == Path("foo")
    assert data_dir_path(Chain.REGTEST, "foo", unresolvable) == Path("foo") / "regtest"


def test_missing_data_dir_is_a_configuration_error() -> None:
    unresolvable = FixedDirectories(HOME, None, "darwin")
    with pytest.raises(ConfigurationError, match="failed to retrieve data dir"):
        data_dir_path(Chain.MAINNET, directories=unresolvable)
    with pytest.raises(ConfigurationError, match="failed to retrieve data dir"):
        cookie_file_path(Chain.MAINNET, directories=unresolvable)


def test_missing_home_dir_is_a_configuration_error_on_linux() -> None:
    unresolvable = FixedDirectories(None, DATA, "linux")
    with pytest.raises(ConfigurationError, match="failed to retrieve home dir"):
        cookie_file_path(Chain.SIGNET, directories=unresolvable)


def test_default_directories_use_platformdirs(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr("ord_dogecoin.paths.user_data_dir", lambda roaming: str(tmp_path))
    assert SystemDirectories("darwin").data_dir() == tmp_path
