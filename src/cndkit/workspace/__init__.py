# Copyright 2026 cndkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Configuration for cndkit."""

from cndkit.workspace.config import (
    CONFIG_FILE_NAME,
    CndConfig,
    ConfigError,
    load_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "CndConfig",
    "ConfigError",
    "load_config",
]
