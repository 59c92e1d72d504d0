# Copyright 2026 cndkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Consistency checks for parsed CND schemas.

The parser only enforces the grammar and namespace prefixes. These checks
enforce the node type rules a repository would reject on registration.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from cndkit.model.schema import ItemDef, NodeTypeDef, Schema

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ValidationWarning:
    """A non-fatal issue: the schema registers, but probably not as intended.

    Attributes:
        message: Human-readable description of the warning.
    """

    message: str


@dataclass(frozen=True)
class ValidationError:
    """A rule violation that makes the schema unregistrable.

    Attributes:
        message: Human-readable description of the error.
    """

    message: str


@dataclass
class ValidationResult:
    """Result of running the schema checks.

    Attributes:
        warnings: Non-fatal issues found during validation.
        errors: Fatal errors that indicate an invalid schema.
    """

    warnings: list[ValidationWarning] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any fatal validation errors were found."""
        return len(self.errors) > 0


def validate(schema: Schema) -> ValidationResult:
    """Run all checks on a parsed Schema.

    Checks performed:

    1. **Duplicate node types** (error): two declarations with the same name.
    2. **Duplicate item definitions** (error): two properties, or two child
       nodes, with the same name in one node type. Residual (``*``)
       definitions may repeat.
    3. **Residual constraints** (error): a residual definition cannot be
       autocreated or mandatory.
    4. **Autocreated child nodes** (error): an autocreated child node needs a
       default primary type.
    5. **Default value count** (error): a single-valued property may have at
       most one default value.
    6. **Supertype cycles** (error): node types declared in the schema must
       not inherit from themselves, directly or indirectly.
    7. **Primary item** (warning): the primary item name should match one of
       the node type's own items. It may be inherited, so this is not fatal.

    Args:
        schema: The parsed Schema to validate.

    Returns:
        A :class:`ValidationResult`. An empty result means the schema is valid.
    """
    warnings: list[ValidationWarning] = []
    errors: list[ValidationError] = []

    errors.extend(_check_duplicate_node_types(schema))
    for node_type in schema.node_types:
        errors.extend(_check_duplicate_items(node_type))
        errors.extend(_check_residual_items(node_type))
        errors.extend(_check_autocreated_child_nodes(node_type))
        errors.extend(_check_default_value_count(node_type))
        warnings.extend(_check_primary_item(node_type))
    errors.extend(_check_supertype_cycles(schema))

    return ValidationResult(warnings=warnings, errors=errors)


# ################
# Implementation
# ################


def _detect_cycle(graph: dict[str, list[str]]) -> list[str] | None:
    """Detect a cycle in a directed graph using DFS.

    Returns:
        The node names forming the cycle with the start node repeated at the
        end (e.g. ``["A", "B", "A"]``), or ``None`` if the graph is acyclic.
    """
    WHITE, GREY, BLACK = 0, 1, 2
    color: dict[str, int] = {}
    path: list[str] = []

    def _dfs(node: str) -> list[str] | None:
        color[node] = GREY
        path.append(node)
        for neighbor in graph.get(node, []):
            state = color.get(neighbor, WHITE)
            if state == GREY:
                cycle_start = path.index(neighbor)
                return path[cycle_start:] + [neighbor]
            if state == WHITE:
                result = _dfs(neighbor)
                if result is not None:
                    return result
        path.pop()
        color[node] = BLACK
        return None

    for node in graph:
        if color.get(node, WHITE) == WHITE:
            result = _dfs(node)
            if result is not None:
                return result
    return None


def _check_duplicate_node_types(schema: Schema) -> list[ValidationError]:
    errors: list[ValidationError] = []
    seen: set[str] = set()
    for node_type in schema.node_types:
        if node_type.name in seen:
            errors.append(ValidationError(message=f"Node type '{node_type.name}' is declared more than once."))
        seen.add(node_type.name)
    return errors


def _find_duplicates(items: Sequence[ItemDef]) -> list[str]:
    """Return names of non-residual items that occur more than once, in order."""
    seen: set[str] = set()
    duplicates: list[str] = []
    for item in items:
        if item.is_residual:
            continue
        if item.name in seen and item.name not in duplicates:
            duplicates.append(item.name)
        seen.add(item.name)
    return duplicates


def _check_duplicate_items(node_type: NodeTypeDef) -> list[ValidationError]:
    errors: list[ValidationError] = []
    for name in _find_duplicates(node_type.properties):
        errors.append(
            ValidationError(message=f"Node type '{node_type.name}' defines property '{name}' more than once.")
        )
    for name in _find_duplicates(node_type.child_nodes):
        errors.append(
            ValidationError(message=f"Node type '{node_type.name}' defines child node '{name}' more than once.")
        )
    return errors


def _check_residual_items(node_type: NodeTypeDef) -> list[ValidationError]:
    errors: list[ValidationError] = []
    items: list[ItemDef] = [*node_type.properties, *node_type.child_nodes]
    for item in items:
        if not item.is_residual:
            continue
        if item.is_autocreated:
            errors.append(
                ValidationError(message=f"Node type '{node_type.name}': a residual definition cannot be autocreated.")
            )
        if item.is_mandatory:
            errors.append(
                ValidationError(message=f"Node type '{node_type.name}': a residual definition cannot be mandatory.")
            )
    return errors


def _check_autocreated_child_nodes(node_type: NodeTypeDef) -> list[ValidationError]:
    return [
        ValidationError(
            message=(
                f"Node type '{node_type.name}': autocreated child node '{child.name}' "
                "must declare a default primary type."
            )
        )
        for child in node_type.child_nodes
        if child.is_autocreated and child.default_primary_type is None
    ]


def _check_default_value_count(node_type: NodeTypeDef) -> list[ValidationError]:
    return [
        ValidationError(
            message=(
                f"Node type '{node_type.name}': single-valued property '{prop.name}' "
                f"has {len(prop.default_values)} default values."
            )
        )
        for prop in node_type.properties
        if not prop.is_multiple and len(prop.default_values) > 1
    ]


def _check_supertype_cycles(schema: Schema) -> list[ValidationError]:
    declared = {node_type.name for node_type in schema.node_types}
    graph: dict[str, list[str]] = {}
    for node_type in schema.node_types:
        graph.setdefault(node_type.name, []).extend(s for s in node_type.supertypes if s in declared)

    cycle = _detect_cycle(graph)
    if cycle is None:
        return []
    return [ValidationError(message=f"Supertype cycle detected: {' -> '.join(cycle)}.")]


def _check_primary_item(node_type: NodeTypeDef) -> list[ValidationWarning]:
    name = node_type.primary_item_name
    if name is None:
        return []
    own_items = {item.name for item in [*node_type.properties, *node_type.child_nodes]}
    if name in own_items:
        return []
    return [
        ValidationWarning(
            message=(
                f"Node type '{node_type.name}': primary item '{name}' is not defined by the node type itself "
                "(it must be inherited)."
            )
        )
    ]
