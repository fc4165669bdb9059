"""Site configuration loading for Statue.

Configuration lives in ``statue.yaml`` at the project root. Values found
there are deep-merged over :data:`DEFAULT_CONFIG`, so a project only needs
to declare what it changes.

Key functions:
- load_config: Load and merge the project configuration.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "statue.yaml"


class ConfigError(Exception):
    """Raised when ``statue.yaml`` cannot be parsed into a mapping."""

    def __init__(self, source_path: Path, message: str):
        self.source_path = source_path
        self.message = message
        super().__init__(f"{source_path}: {message}")


DEFAULT_CONFIG: dict[str, Any] = {
    "site": {
        "name": "Statue",
        "description": "A static site built with Statue",
        "url": "http://localhost:3000",
        "author": "",
    },
    "contact": {
        "email": "",
        "privacyEmail": "",
        "supportEmail": "",
        "phone": "",
        "address": {
            "street": "",
            "city": "",
            "state": "",
            "zipCode": "",
            "country": "",
        },
    },
    "social": {
        "twitter": "",
        "github": "",
        "linkedin": "",
        "facebook": "",
        "instagram": "",
        "youtube": "",
        "discord": "",
        "reddit": "",
    },
    "legal": {
        "privacyPolicyLastUpdated": "",
        "termsLastUpdated": "",
        "doNotSell": {"processingTime": ""},
    },
    "search": {"enabled": False, "placeholder": "Search..."},
    "content_dir": "content",
    "output_dir": "build",
    "static_dir": "static",
    "templates_dir": "templates",
    "port": 3000,
}


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base`` in place."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(project_root: Path) -> dict[str, Any]:
    """Load site configuration from statue.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    config_path = project_root / CONFIG_FILENAME
    if not config_path.exists():
        return config
    with open(config_path, encoding="utf-8") as f:
        try:
            loaded = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(config_path, f"Invalid YAML: {exc}") from exc
    if loaded is None:
        return config
    if not isinstance(loaded, dict):
        raise ConfigError(config_path, "Configuration must be a mapping")
    return _merge(config, loaded)
