"""
Configuration for line blame.

Values come from (highest to lowest priority):
  1. Explicit updates (PropertyStore.update, PUT /config)
  2. A YAML file (BlameConfig.from_yaml)
  3. Environment variables / .env (BlameConfig.from_env)
  4. Defaults

Environment variables:
    GITBLAME_COMMIT_URL                 e.g. https://github.com/me/repo/commit/${hash}
    GITBLAME_INFO_MESSAGE_FORMAT
    GITBLAME_STATUS_BAR_MESSAGE_FORMAT
    GITBLAME_INTERNAL_HASH_LENGTH
    GITBLAME_IGNORE_WHITESPACE          "1", "true" or "yes"
"""

import os
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, Optional

import dotenv
import yaml


ENV_PREFIX = "GITBLAME_"


class Properties(Enum):
    """Names of the configuration values read by the blame engine."""
    COMMIT_URL = "commit_url"
    INFO_MESSAGE_FORMAT = "info_message_format"
    STATUS_BAR_MESSAGE_FORMAT = "status_bar_message_format"
    INTERNAL_HASH_LENGTH = "internal_hash_length"
    IGNORE_WHITESPACE = "ignore_whitespace"


def _to_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes")


def _check_value(name: str, value: Any) -> Any:
    """
    Validate one configuration value against its field.

    Raises:
        ValueError: if the value has the wrong type or is out of range
    """
    if name == "commit_url":
        valid = value is None or isinstance(value, str)
    elif name in ("info_message_format", "status_bar_message_format"):
        valid = isinstance(value, str)
    elif name == "internal_hash_length":
        valid = isinstance(value, int) and not isinstance(value, bool) and value > 0
    elif name == "ignore_whitespace":
        valid = isinstance(value, bool)
    else:
        raise ValueError(f"Unknown configuration value: {name}")

    if not valid:
        raise ValueError(f"Invalid value for {name}: {value!r}")
    return value


@dataclass
class BlameConfig:
    """
    User-configurable values.

    commit_url is a token template; ``${hash}`` is replaced with the
    commit hash. Leaving it unset disables "view online".
    """
    commit_url: Optional[str] = None
    info_message_format: str = "${commit.summary}"
    status_bar_message_format: str = "Blame ${author.name} ( ${time.ago} )"
    internal_hash_length: int = 8
    ignore_whitespace: bool = False

    @classmethod
    def from_env(cls, load_dotenv: bool = True) -> "BlameConfig":
        """Build a config from GITBLAME_* environment variables."""
        if load_dotenv:
            dotenv.load_dotenv()

        config = cls()
        values: Dict[str, Any] = {}

        commit_url = os.getenv(f"{ENV_PREFIX}COMMIT_URL")
        if commit_url:
            values["commit_url"] = commit_url

        info_format = os.getenv(f"{ENV_PREFIX}INFO_MESSAGE_FORMAT")
        if info_format:
            values["info_message_format"] = info_format

        status_format = os.getenv(f"{ENV_PREFIX}STATUS_BAR_MESSAGE_FORMAT")
        if status_format:
            values["status_bar_message_format"] = status_format

        hash_length = os.getenv(f"{ENV_PREFIX}INTERNAL_HASH_LENGTH")
        if hash_length:
            try:
                values["internal_hash_length"] = _check_value("internal_hash_length", int(hash_length))
            except ValueError:
                print(f"[Config] Ignoring invalid {ENV_PREFIX}INTERNAL_HASH_LENGTH: {hash_length!r}")

        ignore_whitespace = os.getenv(f"{ENV_PREFIX}IGNORE_WHITESPACE")
        if ignore_whitespace:
            values["ignore_whitespace"] = _to_bool(ignore_whitespace)

        return replace(config, **values)

    @classmethod
    def from_yaml(cls, config_path: str, base: Optional["BlameConfig"] = None) -> "BlameConfig":
        """
        Load config values from a YAML mapping.

        Args:
            config_path: Path to the YAML file
            base: Config whose values are overridden by the file

        Raises:
            ValueError: if the file holds anything but a mapping, or a
                value of the wrong type
        """
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {config_path}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            print(f"[Config] Ignoring unknown keys in {config_path}: {', '.join(unknown)}")

        try:
            values = {k: _check_value(k, v) for k, v in data.items() if k in known}
        except ValueError as e:
            raise ValueError(f"{config_path}: {e}") from e

        return replace(base or cls(), **values)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


class PropertyStore:
    """
    Holder of the live configuration.

    Owned by the composition root and passed to the components that read
    configuration; released by the disposal coordinator.
    """

    def __init__(self, config: Optional[BlameConfig] = None):
        self._config = config or BlameConfig()
        self._disposed = False

    @property
    def config(self) -> BlameConfig:
        return self._config

    def get(self, prop: Properties) -> Any:
        return getattr(self._config, prop.value)

    def update(self, **values: Any) -> BlameConfig:
        """
        Replace individual values.

        Raises:
            ValueError: for unknown configuration names or values of the
                wrong type; nothing is changed then
        """
        known = {f.name for f in fields(BlameConfig)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown configuration values: {', '.join(unknown)}")

        for name, value in values.items():
            _check_value(name, value)

        self._config = replace(self._config, **values)
        return self._config

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        self._disposed = True
