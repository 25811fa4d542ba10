"""
CLI Configuration

Locates and loads the JSON config file, then layers MERKLE_* environment
variables on top. The result is a core RuntimeConfig.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.config import RuntimeConfig


CONFIG_FILE_NAME = "merkle.json"


def default_config_paths() -> list[Path]:
    """Locations searched when no --config is given, in priority order."""
    return [
        Path.cwd() / CONFIG_FILE_NAME,
        Path.cwd() / f".{CONFIG_FILE_NAME}",
        Path.home() / ".config" / "merkle" / "config.json",
    ]


def load_config_from_file(path: Path) -> RuntimeConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a JSON object: {path}")

    return RuntimeConfig.from_dict(data)


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings. An explicit path that
    does not exist is an error; default locations are optional.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged, validated configuration
    """
    config = RuntimeConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    return config.with_env_overrides().validate()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "hash_algorithm": "sha256",
  "leaf_encoding": "utf8",
  "log_level": "INFO",
  "log_file": null
}
"""
