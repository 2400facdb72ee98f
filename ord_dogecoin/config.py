"""Persisted ord configuration loader."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "ord.yaml"


class ConfigurationError(RuntimeError):
    """Raised when configuration is invalid."""


@dataclass(frozen=True)
class Config:
    """Settings read from ``ord.yaml``.

    ``hidden`` holds inscription identifiers that should be suppressed from
    normal operation. They are treated as opaque strings.
    """

    hidden: frozenset[str] = field(default_factory=frozenset)


def _load_config_file(path: Path) -> Config:
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Unable to read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {exc}") from exc

    if loaded is None:
        return Config()
    if not isinstance(loaded, dict):
        raise ConfigurationError(f"Expected {path} to contain a YAML mapping")
    return Config(hidden=_coerce_hidden(loaded.get("hidden"), source=path))


def _coerce_hidden(raw: Any, *, source: Path) -> frozenset[str]:
    if raw is None:
        return frozenset()
    if not isinstance(raw, list):
        raise ConfigurationError(f"Expected 'hidden' to be a list in {source}")
    for entry in raw:
        if not isinstance(entry, str) or not entry.strip():
            raise ConfigurationError(
                f"Invalid hidden identifier in {source}: {entry!r}"
            )
    return frozenset(raw)


def load_config(
    config: str | Path | None = None,
    config_dir: str | Path | None = None,
) -> Config:
    """Load configuration from ``config`` or ``config_dir/ord.yaml``.

    An explicit file must exist and parse. A directory without ``ord.yaml``, or
    no source at all, yields the empty default. Sources are never merged.
    """

    if config is not None:
        path = Path(config).expanduser()
        logger.debug("Loading configuration from %s", path)
        return _load_config_file(path)

    if config_dir is not None:
        path = Path(config_dir).expanduser() / CONFIG_FILENAME
        if path.exists():
            logger.debug("Loading configuration from %s", path)
            return _load_config_file(path)

    return Config()
