# Copyright 2026 cndkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Read CND documents from disk and parse them."""

import logging
from pathlib import Path

from cndkit.model.schema import Schema
from cndkit.parser.cnd_parser import parse

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class LoadError(Exception):
    """Raised when a CND file cannot be read."""


def load_file(path: Path, *, namespaces: dict[str, str] | None = None) -> Schema:
    """Read *path* as UTF-8 and parse it, using the path as the source name.

    Raises:
        LoadError: If the file cannot be read or decoded.
        ScanError: If the file contains invalid characters or unterminated literals.
        ParseError: If the file is not valid CND.
    """
    logger.debug("Loading %s", path)
    try:
        source = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise LoadError(f"CND file not found: {path}") from None
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(f"Cannot read CND file '{path}': {exc}") from exc
    return parse(source, source_name=str(path), namespaces=namespaces)
