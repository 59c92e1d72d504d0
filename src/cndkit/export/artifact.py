# Copyright 2026 cndkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization and deserialization of parsed schemas as JSON artifacts.

Artifacts hand a parsed schema to tools that register node types without
parsing CND themselves. The format is versioned so future schema changes can
be detected.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from cndkit.model.schema import Schema

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "1"
ARTIFACT_SUFFIX = ".json"


def serialize(schema: Schema, *, indent: int | None = None) -> str:
    """Serialize a Schema to a JSON string (compact unless *indent* is given)."""
    obj: dict[str, Any] = {"v": ARTIFACT_FORMAT_VERSION, **schema.model_dump(mode="json")}
    if indent is None:
        return json.dumps(obj, separators=(",", ":"))
    return json.dumps(obj, indent=indent)


def deserialize(data: str) -> Schema:
    """Deserialize a Schema from a JSON string.

    Args:
        data: JSON string produced by :func:`serialize`.

    Returns:
        The reconstructed :class:`Schema`.

    Raises:
        ValueError: If the data is not valid JSON, the artifact format version
            is not recognised, or the content does not describe a schema.
    """
    try:
        obj = json.loads(data)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid artifact JSON: {exc}") from exc
    if not isinstance(obj, dict):
        raise ValueError("Artifact must be a JSON object")
    version = obj.pop("v", None)
    if version != ARTIFACT_FORMAT_VERSION:
        raise ValueError(f"Unsupported artifact format version: {version!r}")
    try:
        return Schema.model_validate(obj)
    except ValidationError as exc:
        raise ValueError(f"Invalid artifact content: {exc}") from exc


def write_artifact(schema: Schema, path: Path) -> None:
    """Write a schema artifact to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(schema, indent=2), encoding="utf-8")


def read_artifact(path: Path) -> Schema:
    """Read and deserialize a schema artifact from *path*."""
    return deserialize(path.read_text(encoding="utf-8"))
