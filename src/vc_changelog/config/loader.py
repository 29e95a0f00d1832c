"""
Configuration loader for vc_changelog.

The tool reads an optional JSON file named ``.changelog_config.json``
from the repository root. It may add or override type labels and
aliases, for example::

    {
        "type_labels": {"rm": "Deprecations", "style": "Code style"},
        "type_aliases": {"hotfix": "fix"}
    }

A missing default file is not an error. A file given explicitly that
does not exist, malformed JSON or fields of the wrong type raise
:class:`ConfigError`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


CONFIG_FILENAME = ".changelog_config.json"
KNOWN_KEYS = ("type_labels", "type_aliases")


class ConfigError(Exception):
    """Raised when the changelog configuration file is missing or invalid."""

    pass


def _validate_string_mapping(data: Dict[str, Any], key: str) -> None:
    value = data[key]
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' must be an object")
    for code, label in value.items():
        if not isinstance(label, str) or not label:
            raise ConfigError(f"'{key}.{code}' must be a non-empty string")


def load_config(repo_root: Path, config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load the changelog configuration and return it.

    Args:
        repo_root: Repository root searched for ``.changelog_config.json``.
        config_path: Explicit configuration file. Must exist when given.

    Returns:
        A dictionary with the validated optional keys:
        - type_labels (dict): type code -> heading label
        - type_aliases (dict): alias code -> canonical type code
        An empty dictionary when no default configuration file exists.

    Raises:
        ConfigError: If the file is missing (explicit path only),
            malformed, or invalid.
    """
    explicit = config_path is not None
    path = config_path if explicit else repo_root / CONFIG_FILENAME

    if not path.exists():
        if explicit:
            logger.error("Configuration file '%s' does not exist", path)
            raise ConfigError(f"Missing configuration file: {path}")
        logger.debug("No configuration file at %s, using defaults", path)
        return {}

    try:
        content = path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {path.name}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{path.name} must contain a JSON object")

    unknown = [key for key in data if key not in KNOWN_KEYS]
    if unknown:
        logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))

    config: Dict[str, Any] = {}
    for key in KNOWN_KEYS:
        if key in data:
            _validate_string_mapping(data, key)
            config[key] = dict(data[key])

    logger.debug("Loaded changelog configuration from: %s", path)
    return config
