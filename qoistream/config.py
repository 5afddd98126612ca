"""Configuration for qoistream decoding."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

DEFAULT_CHUNK_SIZE = 64 * 1024


class ConfigError(Exception):
    """Configuration file could not be loaded."""


@dataclass(frozen=True)
class DecoderConfig:
    """Decoder settings

    Attributes:
        chunk_size: bytes requested from the reader per step of a whole-image read
        strict_channels: reject headers whose channel count is not 3 or 4
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    strict_channels: bool = False

    def __post_init__(self) -> None:
        size = self.chunk_size
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise ConfigError(f"chunk_size must be a positive integer: {self.chunk_size!r}")
        if not isinstance(self.strict_channels, bool):
            raise ConfigError(f"strict_channels must be true or false: {self.strict_channels!r}")


def get_default_config() -> DecoderConfig:
    return DecoderConfig()


def load_config(path: Path) -> DecoderConfig:
    """Load a YAML configuration file

    Args:
        path: configuration file path

    Returns:
        DecoderConfig: the loaded settings merged onto the defaults

    Raises:
        ConfigError: the file is missing, unparsable or has invalid values
    """
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML parse error: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError("Configuration file must contain a YAML mapping")

    default = get_default_config()

    return DecoderConfig(
        chunk_size=data.get("chunk_size", default.chunk_size),
        strict_channels=data.get("strict_channels", default.strict_channels),
    )
