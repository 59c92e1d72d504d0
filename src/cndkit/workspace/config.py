# Copyright 2026 cndkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the cndkit configuration file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".cndkit.yaml"


class ConfigError(Exception):
    """Raised when a configuration file is invalid or cannot be loaded."""


@dataclass
class CndConfig:
    """The parsed cndkit configuration.

    Attributes:
        namespaces: Prefix mappings that documents may use without declaring them.
        output_directory: Directory (relative to the config file's directory)
            where ``cndkit export`` writes artifacts, or None for stdout.
        strict: Treat validation warnings as failures.
    """

    namespaces: dict[str, str] = field(default_factory=dict)
    output_directory: str | None = None
    strict: bool = False


def load_config(path: Path) -> CndConfig:
    """Load and parse a cndkit configuration file.

    Args:
        path: Path to the `.cndkit.yaml` file.

    Returns:
        A CndConfig instance populated from the file.

    Raises:
        ConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return _parse_config(text, source_label=str(path))


# ################
# Implementation
# ################

_KNOWN_KEYS = frozenset({"namespaces", "output-directory", "strict"})


def _parse_config(text: str, source_label: str = "<string>") -> CndConfig:
    """Parse config YAML text into a CndConfig.

    An empty document yields the default configuration.

    Raises:
        ConfigError: If the YAML is invalid or a field has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return CndConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: config must be a YAML mapping")

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"{source_label}: unknown field(s): {', '.join(map(str, unknown))}")

    return CndConfig(
        namespaces=_parse_namespaces(data.get("namespaces"), source_label),
        output_directory=_optional_string(data, "output-directory", source_label),
        strict=_optional_bool(data, "strict", source_label),
    )


def _parse_namespaces(raw: object, source_label: str) -> dict[str, str]:
    """Parse the ``namespaces`` mapping of prefix to URI."""
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{source_label}: 'namespaces' must be a mapping of prefix to URI")
    namespaces: dict[str, str] = {}
    for prefix, uri in raw.items():
        if not isinstance(prefix, str) or not isinstance(uri, str):
            raise ConfigError(f"{source_label}: namespace '{prefix}' must map a string prefix to a string URI")
        if ":" in prefix:
            raise ConfigError(f"{source_label}: namespace prefix '{prefix}' must not contain ':'")
        namespaces[prefix] = uri
    return namespaces


def _optional_string(mapping: dict[str, object], key: str, source_label: str) -> str | None:
    """Extract an optional string field, raising ConfigError on a wrong type."""
    value = mapping.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"{source_label}: '{key}' must be a string")
    return value


def _optional_bool(mapping: dict[str, object], key: str, source_label: str) -> bool:
    """Extract an optional boolean field (default False)."""
    value = mapping.get(key, False)
    if not isinstance(value, bool):
        raise ConfigError(f"{source_label}: '{key}' must be a boolean")
    return value
