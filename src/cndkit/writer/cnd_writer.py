# Copyright 2026 cndkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Render a Schema back into canonical CND text."""

from cndkit.model.schema import (
    QUERY_OPERATORS,
    RESIDUAL_NAME,
    ChildNodeDef,
    ItemDef,
    NodeTypeDef,
    OnParentVersion,
    PropertyDef,
    Schema,
)

# ###############
# Public Interface
# ###############


def write_cnd(schema: Schema) -> str:
    """Return canonical CND text for *schema*.

    Namespace mappings come first, followed by one block per node type.
    Attributes that hold their default value are omitted and values are
    always quoted, so parsing the output yields an equal Schema.
    """
    blocks: list[str] = []
    if schema.namespaces:
        blocks.append(
            "\n".join(f"<{_name(prefix)} = {_quote(uri)}>" for prefix, uri in schema.namespaces.items())
        )
    blocks.extend(_node_type(node_type) for node_type in schema.node_types)
    if not blocks:
        return ""
    return "\n\n".join(blocks) + "\n"


# ################
# Implementation
# ################

_INDENT = "  "

_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}


def _quote(value: str) -> str:
    return "'" + "".join(_ESCAPES.get(ch, ch) for ch in value) + "'"


def _is_plain(name: str) -> bool:
    """Return True if *name* scans as a single identifier token."""
    if not name or not (name[0].isalnum() or name[0] in ":._"):
        return False
    return all(ch.isalnum() or ch in ":._-" for ch in name)


def _name(name: str) -> str:
    return name if _is_plain(name) else _quote(name)


def _item_name(name: str) -> str:
    return RESIDUAL_NAME if name == RESIDUAL_NAME else _name(name)


def _node_type(node_type: NodeTypeDef) -> str:
    header = f"[{_name(node_type.name)}]"
    if node_type.supertypes:
        header += " > " + ", ".join(_name(s) for s in node_type.supertypes)
    lines = [header]

    options: list[str] = []
    if node_type.is_orderable:
        options.append("orderable")
    if node_type.is_mixin:
        options.append("mixin")
    if node_type.is_abstract:
        options.append("abstract")
    if not node_type.is_queryable:
        options.append("noquery")
    if node_type.primary_item_name is not None:
        options.append(f"primaryitem {_name(node_type.primary_item_name)}")
    if options:
        lines.append(_INDENT + " ".join(options))

    lines.extend(_INDENT + _property(prop) for prop in node_type.properties)
    lines.extend(_INDENT + _child_node(child) for child in node_type.child_nodes)
    return "\n".join(lines)


def _common_attributes(item: ItemDef) -> list[str]:
    attributes: list[str] = []
    if item.is_mandatory:
        attributes.append("mandatory")
    if item.is_autocreated:
        attributes.append("autocreated")
    if item.is_protected:
        attributes.append("protected")
    if item.on_parent_version != OnParentVersion.COPY:
        attributes.append(item.on_parent_version.value)
    return attributes


def _property(prop: PropertyDef) -> str:
    parts = [f"- {_item_name(prop.name)}", f"({prop.required_type.value})"]
    if prop.default_values:
        parts.append("= " + ", ".join(_quote(v) for v in prop.default_values))
    parts.extend(_common_attributes(prop))
    if prop.is_multiple:
        parts.append("multiple")
    if list(prop.available_query_operators) != list(QUERY_OPERATORS):
        parts.append("queryops " + _quote(", ".join(prop.available_query_operators)))
    if not prop.is_full_text_searchable:
        parts.append("nofulltext")
    if not prop.is_query_orderable:
        parts.append("noqueryorder")
    if prop.value_constraints:
        parts.append("< " + ", ".join(_quote(v) for v in prop.value_constraints))
    return " ".join(parts)


def _child_node(child: ChildNodeDef) -> str:
    parts = [f"+ {_item_name(child.name)}"]
    if child.required_primary_types:
        parts.append("(" + ", ".join(_name(t) for t in child.required_primary_types) + ")")
    if child.default_primary_type is not None:
        parts.append(f"= {_name(child.default_primary_type)}")
    parts.extend(_common_attributes(child))
    if child.allows_same_name_siblings:
        parts.append("sns")
    return " ".join(parts)
