# Copyright 2026 cndkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""JSON artifacts for parsed schemas."""

from cndkit.export.artifact import (
    ARTIFACT_FORMAT_VERSION,
    ARTIFACT_SUFFIX,
    deserialize,
    read_artifact,
    serialize,
    write_artifact,
)

__all__ = [
    "ARTIFACT_FORMAT_VERSION",
    "ARTIFACT_SUFFIX",
    "deserialize",
    "read_artifact",
    "serialize",
    "write_artifact",
]
