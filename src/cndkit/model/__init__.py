# Copyright 2026 cndkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema model for CND documents (namespaces, node types and item definitions)."""

from cndkit.model.schema import (
    QUERY_OPERATORS,
    RESIDUAL_NAME,
    ChildNodeDef,
    ItemDef,
    NodeTypeDef,
    OnParentVersion,
    PropertyDef,
    PropertyType,
    Schema,
)

__all__ = [
    # Enumerations
    "PropertyType",
    "OnParentVersion",
    "QUERY_OPERATORS",
    "RESIDUAL_NAME",
    # Definitions
    "ItemDef",
    "PropertyDef",
    "ChildNodeDef",
    "NodeTypeDef",
    "Schema",
]
