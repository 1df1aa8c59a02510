"""
Configuration loading and management.

Settings are read from YAML files and accessed with dot-notation keys such as
``records.delimiter``. Programmatic overrides can be layered on top of a file.
"""

from typing import Any, Dict, Optional, Union
import os

import yaml


# Keys understood by the built-in status stages, with their defaults.
DEFAULTS: Dict[str, Any] = {
    "records": {
        "delimiter": "=",
        "target": "ELEMENT",
        "filter_order": "normalize_first",
    },
    "aggregate": {
        "policy": "short_circuit",
    },
}


class Config:
    """
    A wrapper around a dictionary for managing configuration.

    It provides a `get` method that allows accessing nested values using
    dot-notation (e.g., 'records.delimiter').
    """

    def __init__(self, config_data: Optional[Dict[str, Any]]):
        self._config = config_data if isinstance(config_data, dict) else {}

    def get(self, key: str, default: Any = None) -> Any:
        """
        Access a config value using dot notation.

        Example:
            >>> config = Config({'a': {'b': 1}})
            >>> config.get('a.b')
            1
            >>> config.get('a.c', 'default_value')
            'default_value'

        :param key: The dot-separated key for the desired value.
        :param default: The value to return if the key is not found.
        :return: The configuration value or the default.
        """
        value = self._config
        for k in key.split("."):
            if not isinstance(value, dict) or k not in value:
                return default
            value = value[k]
        return value

    def setting(self, key: str) -> Any:
        """Like `get`, but falls back to the built-in default for `key`."""
        return self.get(key, Config(DEFAULTS).get(key))

    def merged(self, overrides: Union["Config", Dict[str, Any], None]) -> "Config":
        """Returns a new Config with `overrides` deep-merged over this one."""
        if overrides is None:
            return Config(dict(self._config))
        if isinstance(overrides, Config):
            overrides = overrides.to_dict()
        return Config(_deep_merge(self._config, overrides))

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._config)

    def __repr__(self) -> str:
        return f"Config(config_data={self._config})"


def _deep_merge(base: Dict[str, Any], other: Dict[str, Any]) -> Dict[str, Any]:
    result = dict(base)
    for key, value in other.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path: Optional[str]) -> Config:
    """
    Loads a YAML configuration file from the given path.

    If the path is None or does not exist, it returns an empty Config object.

    :param path: The path to the YAML configuration file.
    :return: A Config object with the loaded data.
    """
    if not path or not os.path.exists(path):
        return Config({})

    with open(path, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f)

    return Config(config_data)
