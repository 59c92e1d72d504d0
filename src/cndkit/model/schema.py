# Copyright 2026 cndkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema model produced by the CND parser."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############

RESIDUAL_NAME = "*"

QUERY_OPERATORS: tuple[str, ...] = ("=", "<>", "<", "<=", ">", ">=", "LIKE")


class PropertyType(Enum):
    """Value types a property definition can require."""

    STRING = "STRING"
    BINARY = "BINARY"
    LONG = "LONG"
    DOUBLE = "DOUBLE"
    BOOLEAN = "BOOLEAN"
    DATE = "DATE"
    NAME = "NAME"
    PATH = "PATH"
    REFERENCE = "REFERENCE"
    WEAKREFERENCE = "WEAKREFERENCE"
    DECIMAL = "DECIMAL"
    URI = "URI"
    UNDEFINED = "UNDEFINED"


class OnParentVersion(Enum):
    """What happens to an item when its parent node is versioned."""

    COPY = "COPY"
    VERSION = "VERSION"
    INITIALIZE = "INITIALIZE"
    COMPUTE = "COMPUTE"
    IGNORE = "IGNORE"
    ABORT = "ABORT"


class ItemDef(BaseModel):
    """Attributes shared by property and child node definitions."""

    name: str
    is_autocreated: bool = False
    is_mandatory: bool = False
    is_protected: bool = False
    on_parent_version: OnParentVersion = OnParentVersion.COPY

    @property
    def is_residual(self) -> bool:
        """True for a definition named ``*`` that applies to any item name."""
        return self.name == RESIDUAL_NAME


class PropertyDef(ItemDef):
    """A property definition (``- name (TYPE) ...``)."""

    required_type: PropertyType = PropertyType.STRING
    default_values: list[str] = _Field(default_factory=list)
    value_constraints: list[str] = _Field(default_factory=list)
    is_multiple: bool = False
    available_query_operators: list[str] = _Field(default_factory=lambda: list(QUERY_OPERATORS))
    is_full_text_searchable: bool = True
    is_query_orderable: bool = True


class ChildNodeDef(ItemDef):
    """A child node definition (``+ name (types) = default ...``)."""

    required_primary_types: list[str] = _Field(default_factory=list)
    default_primary_type: str | None = None
    allows_same_name_siblings: bool = False


class NodeTypeDef(BaseModel):
    """A node type declaration (``[name] > supertypes options items``).

    ``supertypes`` behaves as a set: duplicates are dropped on insertion while
    declaration order is kept.
    """

    name: str
    supertypes: list[str] = _Field(default_factory=list)
    is_abstract: bool = False
    is_mixin: bool = False
    is_orderable: bool = False
    is_queryable: bool = True
    primary_item_name: str | None = None
    properties: list[PropertyDef] = _Field(default_factory=list)
    child_nodes: list[ChildNodeDef] = _Field(default_factory=list)

    def add_supertype(self, name: str) -> None:
        """Append *name* to the supertypes unless it is already present."""
        if name not in self.supertypes:
            self.supertypes.append(name)


class Schema(BaseModel):
    """The parsed contents of a single CND document."""

    namespaces: dict[str, str] = _Field(default_factory=dict)
    node_types: list[NodeTypeDef] = _Field(default_factory=list)

    def get_node_type(self, name: str) -> NodeTypeDef | None:
        """Return the first node type declared as *name*, or None."""
        for node_type in self.node_types:
            if node_type.name == name:
                return node_type
        return None
