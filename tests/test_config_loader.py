from pathlib import Path

import pytest

from ord_dogecoin.config import Config, ConfigurationError, load_config

INSCRIPTION_ID = "8d363b28528b0cb86b5fd48615493fb175bdf132d2a3d20b4251bba3f130a5abi0"


def test_load_config_without_sources_returns_default() -> None:
    assert load_config() == Config()


def test_load_config_reads_explicit_file(tmp_path: Path) -> None:
    path = tmp_path / "custom.yaml"
    path.write_text(f'hidden:\n- "{INSCRIPTION_ID}"\n')

    assert load_config(config=path) == Config(hidden=frozenset({INSCRIPTION_ID}))


def test_load_config_dir_matches_explicit_file(tmp_path: Path) -> None:
    (tmp_path / "ord.yaml").write_text(f'hidden:\n- "{INSCRIPTION_ID}"\n')

    assert load_config(config_dir=tmp_path) == load_config(config=tmp_path / "ord.yaml")


def test_load_config_prefers_explicit_file_over_dir(tmp_path: Path) -> None:
    config_dir = tmp_path / "dir"
    config_dir.mkdir()
    (config_dir / "ord.yaml").write_text('hidden:\n- "from-dir"\n')
    explicit = tmp_path / "explicit.yaml"
    explicit.write_text('hidden:\n- "from-file"\n')

    config = load_config(config=explicit, config_dir=config_dir)

    assert config.hidden == frozenset({"from-file"})


def test_load_config_dir_without_file_returns_default(tmp_path: Path) -> None:
    assert load_config(config_dir=tmp_path) == Config()


def test_missing_explicit_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Config file not found"):
        load_config(config=tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    "content",
    [
        "hidden: [unterminated\n",
        "- just\n- a list\n",
        "hidden: not-a-list\n",
        "hidden:\n- 42\n",
    ],
)
def test_malformed_config_is_an_error(tmp_path: Path, content: str) -> None:
    path = tmp_path / "ord.yaml"
    path.write_text(content)

    with pytest.raises(ConfigurationError) as excinfo:
        load_config(config=path)

    assert str(path) in str(excinfo.value)


@pytest.mark.parametrize("content", ["", "hidden:\n", "other: 1\n"])
def test_absent_hidden_key_is_empty(tmp_path: Path, content: str) -> None:
    path = tmp_path / "ord.yaml"
    path.write_text(content)

    assert load_config(config=path).hidden == frozenset()


def test_duplicate_hidden_entries_collapse(tmp_path: Path) -> None:
    path = tmp_path / "ord.yaml"
    path.write_text(f'hidden:\n- "{INSCRIPTION_ID}"\n- "{INSCRIPTION_ID}"\n')

    assert load_config(config=path).hidden == frozenset({INSCRIPTION_ID})


def test_config_that_is_not_utf8_is_an_error(tmp_path: Path) -> None:
    path = tmp_path / "ord.yaml"
    path.write_bytes(b"hidden:\n- \xff\xfe\n")

    with pytest.raises(ConfigurationError) as excinfo:
        load_config(config=path)

    assert str(path) in str(excinfo.value)


def test_hidden_identifiers_are_kept_as_written(tmp_path: Path) -> None:
    path = tmp_path / "ord.yaml"
    path.write_text('hidden:\n- " abci0"\n')

    assert load_config(config=path).hidden == frozenset({" abci0"})


@pytest.mark.parametrize("blank", ['""', '" "'])
def test_blank_hidden_identifier_is_an_error(tmp_path: Path, blank: str) -> None:
    path = tmp_path / "ord.yaml"
    path.write_text(f"hidden:\n- {blank}\n")

    with pytest.raises(ConfigurationError, match="Invalid hidden identifier"):
        load_config(config=path)
