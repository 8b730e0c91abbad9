"""Config loader for YAML configuration files."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from cascada.config.models import CascadaConfig
from cascada.core.errors import ConfigError

MASTER_FILES = ("cascada.yaml", "config.yaml")


class ConfigLoader:
    """Load CascadaConfig from YAML files."""

    @staticmethod
    def load(path: Path | str) -> CascadaConfig:
        """Load configuration from a YAML file or directory.

        A directory is read through its ``cascada.yaml`` (or ``config.yaml``)
        when present; otherwise every ``*.yaml`` in it is merged in name order,
        later files overriding earlier settings.

        Args:
            path: Path to config directory or cascada.yaml file

        Returns:
            Parsed CascadaConfig instance

        Raises:
            FileNotFoundError: If no config file exists at ``path``.
            ConfigError: If the YAML is malformed or fails validation.
        """
        config_path = Path(path)

        if config_path.is_dir():
            master = next(
                (config_path / name for name in MASTER_FILES if (config_path / name).exists()),
                None,
            )
            if master is not None:
                data = _read_yaml(master)
            else:
                files = sorted(config_path.glob("*.yaml"))
                if not files:
                    raise FileNotFoundError(f"No config files found in {config_path}")

                data = {"settings": {}}
                for fpath in files:
                    chunk = _read_yaml(fpath)
                    _merge_settings(data["settings"], chunk.get("settings") or {})
                    for key, value in chunk.items():
                        if key != "settings":
                            data[key] = value
        else:
            if not config_path.exists():
                raise FileNotFoundError(f"Config file not found: {config_path}")
            data = _read_yaml(config_path)

        try:
            return CascadaConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Top level of {path} must be a mapping")
    return data


def _merge_settings(target: dict[str, Any], new: dict[str, Any]) -> None:
    """Deep-merge ``new`` into ``target`` in place."""
    for key, value in new.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _merge_settings(target[key], value)
        else:
            target[key] = value
