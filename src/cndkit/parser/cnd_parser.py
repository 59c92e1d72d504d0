# Copyright 2026 cndkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for CND documents.

Converts the token stream produced by the scanner into a Schema: the
namespace mappings declared by the document plus its node type definitions in
declaration order.
"""

import logging

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
from cndkit.parser.abstract_parser import AbstractParser
from cndkit.scanner.scanner import scan
from cndkit.scanner.token_queue import TokenQueue
from cndkit.scanner.tokens import Token, TokenType

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

# Prefixes every repository knows; documents may use them without a mapping.
BUILTIN_NAMESPACES: dict[str, str] = {
    "": "",
    "jcr": "http://www.jcp.org/jcr/1.0",
    "nt": "http://www.jcp.org/jcr/nt/1.0",
    "mix": "http://www.jcp.org/jcr/mix/1.0",
    "xml": "http://www.w3.org/XML/1998/namespace",
    "sv": "http://www.jcp.org/jcr/sv/1.0",
}


def parse(
    source: str,
    *,
    source_name: str | None = None,
    namespaces: dict[str, str] | None = None,
) -> Schema:
    """Parse CND source text into a Schema.

    Args:
        source: The full text of a CND document.
        source_name: Optional document name used in error messages.
        namespaces: Extra prefix mappings that may be used without being
            declared in the document. They are not copied into the result.

    Returns:
        A Schema holding the declared namespaces and node types.

    Raises:
        ScanError: If the source contains invalid characters or unterminated literals.
        ParseError: If the source is syntactically invalid or uses an unknown
            namespace prefix.
    """
    return CndParser(source, source_name=source_name, namespaces=namespaces).parse()


class CndParser(AbstractParser):
    """Parser for one CND document. Each instance parses its source once."""

    def __init__(
        self,
        source: str,
        *,
        source_name: str | None = None,
        namespaces: dict[str, str] | None = None,
    ) -> None:
        super().__init__(TokenQueue(scan(source, source_name)), source_name)
        self._prefixes: dict[str, str] = dict(BUILTIN_NAMESPACES)
        if namespaces:
            self._prefixes.update(namespaces)

    def parse(self) -> Schema:
        """Parse the full token stream and return the Schema."""
        schema = Schema()
        while not self._queue.is_eof():
            if self.check_token(TokenType.LANGLE):
                self._parse_namespace_mapping(schema)
            else:
                schema.node_types.append(self._parse_node_type())
        logger.debug(
            "Parsed %s: %d namespace(s), %d node type(s)",
            self._source_name or "<string>",
            len(schema.namespaces),
            len(schema.node_types),
        )
        return schema

    # ------------------------------------------------------------------
    # Namespace mappings
    # ------------------------------------------------------------------

    def _parse_namespace_mapping(self, schema: Schema) -> None:
        """Parse: < prefix = uri >"""
        self.expect_token(TokenType.LANGLE)
        prefix = self._expect_string().data or ""
        self.expect_token(TokenType.EQUALS)
        uri = self._expect_string().data or ""
        self.expect_token(TokenType.RANGLE)

        previous = self._prefixes.get(prefix)
        if previous is not None and previous != uri:
            logger.warning("Namespace prefix %r remapped from %r to %r", prefix, previous, uri)
        else:
            logger.debug("Registered namespace %r -> %r", prefix, uri)
        self._prefixes[prefix] = uri
        schema.namespaces[prefix] = uri

    def _at_namespace_mapping(self) -> bool:
        """Return True if the upcoming '<' opens a namespace mapping."""
        return self.check_token(TokenType.LANGLE) and self._queue.peek(2).type == TokenType.EQUALS

    # ------------------------------------------------------------------
    # Node type declarations
    # ------------------------------------------------------------------

    def _parse_node_type(self) -> NodeTypeDef:
        """Parse: [name] > supertypes options items"""
        self.expect_token(TokenType.LBRACKET)
        node_type = NodeTypeDef(name=self._parse_name())
        self.expect_token(TokenType.RBRACKET)

        if self.check_and_expect_token(TokenType.RANGLE):
            self._parse_supertypes(node_type)
        self._parse_node_type_options(node_type)
        self._parse_item_defs(node_type)

        logger.debug(
            "Parsed node type %s (%d properties, %d child nodes)",
            node_type.name,
            len(node_type.properties),
            len(node_type.child_nodes),
        )
        return node_type

    def _parse_supertypes(self, node_type: NodeTypeDef) -> None:
        """Parse: name {, name} | ?"""
        if self._variant():
            return
        for name in self._parse_name_list():
            node_type.add_supertype(name)

    def _parse_node_type_options(self, node_type: NodeTypeDef) -> None:
        """Parse node type options in any order until none match."""
        while True:
            if self._check_and_expect_keyword(_ORDERABLE):
                node_type.is_orderable = not self._variant()
            elif self._check_and_expect_keyword(_MIXIN):
                node_type.is_mixin = not self._variant()
            elif self._check_and_expect_keyword(_ABSTRACT):
                node_type.is_abstract = not self._variant()
            elif self._check_and_expect_keyword(_NOQUERY):
                node_type.is_queryable = False
            elif self._check_and_expect_keyword(_QUERY):
                node_type.is_queryable = True
            elif self._check_and_expect_keyword(_PRIMARY_ITEM) or self.check_and_expect_token(TokenType.BANG):
                if not self._variant():
                    node_type.primary_item_name = self._parse_name()
            else:
                return

    def _parse_item_defs(self, node_type: NodeTypeDef) -> None:
        """Parse property ('-') and child node ('+') definitions in declaration order."""
        while True:
            if self.check_and_expect_token(TokenType.MINUS):
                node_type.properties.append(self._parse_property_def(node_type))
            elif self.check_and_expect_token(TokenType.PLUS):
                node_type.child_nodes.append(self._parse_child_node_def(node_type))
            else:
                return

    # ------------------------------------------------------------------
    # Property definitions
    # ------------------------------------------------------------------

    def _parse_property_def(self, node_type: NodeTypeDef) -> PropertyDef:
        """Parse: name [(type)] [= values] attributes [< constraints]

        The leading '-' has already been consumed.
        """
        prop = PropertyDef(name=self._parse_item_name())

        if self.check_and_expect_token(TokenType.LPAREN):
            required_type = self._parse_property_type()
            if required_type is not None:
                prop.required_type = required_type
            self.expect_token(TokenType.RPAREN)

        if self.check_and_expect_token(TokenType.EQUALS) and not self._variant():
            prop.default_values = self._parse_value_list()

        self._parse_property_attributes(prop, node_type)

        if self.check_token(TokenType.LANGLE) and not self._at_namespace_mapping():
            self.expect_token(TokenType.LANGLE)
            if not self._variant():
                prop.value_constraints = self._parse_value_list()
        return prop

    def _parse_property_type(self) -> PropertyType | None:
        """Parse the type name between parentheses; None for a variant '?'."""
        if self.check_and_expect_token(TokenType.STAR):
            return PropertyType.UNDEFINED
        if self._variant():
            return None
        token = self.expect_token(TokenType.IDENTIFIER)
        try:
            return PropertyType((token.data or "").upper())
        except ValueError:
            raise self.error(f"Unknown property type {token.data!r}", token) from None

    def _parse_property_attributes(self, prop: PropertyDef, node_type: NodeTypeDef) -> None:
        """Parse property attributes in any order until none match."""
        while True:
            if self._parse_common_attribute(prop, node_type):
                continue
            if self._check_and_expect_keyword(_MULTIPLE) or self.check_and_expect_token(TokenType.STAR):
                prop.is_multiple = not self._variant()
            elif self._check_and_expect_keyword(_QUERY_OPS):
                operators = self._parse_query_operators()
                if operators is not None:
                    prop.available_query_operators = operators
            elif self._check_and_expect_keyword(_NO_FULL_TEXT):
                if not self._variant():
                    prop.is_full_text_searchable = False
            elif self._check_and_expect_keyword(_NO_QUERY_ORDER):
                if not self._variant():
                    prop.is_query_orderable = False
            else:
                return

    def _parse_query_operators(self) -> list[str] | None:
        """Parse a quoted, comma-separated operator list; None for a variant '?'."""
        if self._variant():
            return None
        token = self.expect_token(TokenType.STRING)
        operators: list[str] = []
        for raw in (token.data or "").split(","):
            operator = raw.strip().upper()
            if not operator:
                continue
            if operator not in QUERY_OPERATORS:
                raise self.error(f"Unknown query operator {raw.strip()!r}", token)
            if operator not in operators:
                operators.append(operator)
        return operators

    # ------------------------------------------------------------------
    # Child node definitions
    # ------------------------------------------------------------------

    def _parse_child_node_def(self, node_type: NodeTypeDef) -> ChildNodeDef:
        """Parse: name [(types)] [= default] attributes

        The leading '+' has already been consumed.
        """
        child = ChildNodeDef(name=self._parse_item_name())

        if self.check_and_expect_token(TokenType.LPAREN):
            if not self._variant():
                child.required_primary_types = self._parse_name_list()
            self.expect_token(TokenType.RPAREN)

        if self.check_and_expect_token(TokenType.EQUALS) and not self._variant():
            child.default_primary_type = self._parse_name()

        while True:
            if self._parse_common_attribute(child, node_type):
                continue
            if self._check_and_expect_keyword(_SNS) or self.check_and_expect_token(TokenType.STAR):
                child.allows_same_name_siblings = not self._variant()
            else:
                return child

    # ------------------------------------------------------------------
    # Attributes shared by properties and child nodes
    # ------------------------------------------------------------------

    def _parse_common_attribute(self, item: ItemDef, node_type: NodeTypeDef) -> bool:
        """Parse one attribute valid for both item kinds; return False if none matched."""
        if self._check_and_expect_keyword(_AUTOCREATED):
            item.is_autocreated = not self._variant()
        elif self._check_and_expect_keyword(_MANDATORY):
            item.is_mandatory = not self._variant()
        elif self._check_and_expect_keyword(_PROTECTED):
            item.is_protected = not self._variant()
        elif self._check_and_expect_keyword(_PRIMARY) or self.check_and_expect_token(TokenType.BANG):
            node_type.primary_item_name = item.name
        elif self.check_and_expect_token(TokenType.IDENTIFIER, "OPV", ignore_case=True):
            self.expect_token(TokenType.QUESTION)
        else:
            on_parent_version = self._check_and_expect_on_parent_version()
            if on_parent_version is None:
                return False
            item.on_parent_version = on_parent_version
        return True

    def _check_and_expect_on_parent_version(self) -> OnParentVersion | None:
        for opv in OnParentVersion:
            if self.check_and_expect_token(TokenType.IDENTIFIER, opv.value, ignore_case=True):
                return opv
        return None

    # ------------------------------------------------------------------
    # Names, values and small helpers
    # ------------------------------------------------------------------

    def _check_and_expect_keyword(self, keywords: tuple[str, ...]) -> Token | None:
        """Consume the next identifier if it is one of *keywords* (case-insensitive)."""
        for keyword in keywords:
            token = self.check_and_expect_token(TokenType.IDENTIFIER, keyword, ignore_case=True)
            if token is not None:
                return token
        return None

    def _variant(self) -> bool:
        """Consume a '?' variant marker if present."""
        return self.check_and_expect_token(TokenType.QUESTION) is not None

    def _expect_string(self) -> Token:
        """Consume a quoted string or a bare identifier."""
        token = self.check_and_expect_token(TokenType.STRING) or self.check_and_expect_token(TokenType.IDENTIFIER)
        if token is None:
            raise self.error("Expected token [STRING] or [IDENTIFIER]", expected="[STRING] or [IDENTIFIER]")
        return token

    def _parse_name(self) -> str:
        """Consume a name and check that its namespace prefix is known."""
        token = self._expect_string()
        name = token.data or ""
        if ":" in name:
            prefix = name.split(":", 1)[0]
            if prefix not in self._prefixes:
                raise self.error(f"Unknown namespace prefix {prefix!r}", token)
        return name

    def _parse_item_name(self) -> str:
        """Consume an item name, which may be the residual name '*'."""
        if self.check_and_expect_token(TokenType.STAR):
            return RESIDUAL_NAME
        return self._parse_name()

    def _parse_name_list(self) -> list[str]:
        """Parse a comma-separated list of names, dropping duplicates."""
        names = [self._parse_name()]
        while self.check_and_expect_token(TokenType.COMMA):
            name = self._parse_name()
            if name not in names:
                names.append(name)
        return names

    def _parse_value(self) -> str:
        """Parse a value; a '-' glued to the following word forms a negative number."""
        if self.check_token(TokenType.MINUS):
            sign = self._queue.peek()
            following = self._queue.peek(1)
            if following.type == TokenType.IDENTIFIER and following.offset == sign.offset + 1:
                self.expect_token(TokenType.MINUS)
                return "-" + (self.expect_token(TokenType.IDENTIFIER).data or "")
        return self._expect_string().data or ""

    def _parse_value_list(self) -> list[str]:
        """Parse a comma-separated list of values."""
        values = [self._parse_value()]
        while self.check_and_expect_token(TokenType.COMMA):
            values.append(self._parse_value())
        return values


# ################
# Implementation
# ################

# Node type options
_ORDERABLE = ("orderable", "ord", "o")
_MIXIN = ("mixin", "mix", "m")
_ABSTRACT = ("abstract", "abs", "a")
_NOQUERY = ("noquery", "nq")
_QUERY = ("query", "q")
_PRIMARY_ITEM = ("primaryitem",)

# Item attributes
_AUTOCREATED = ("autocreated", "aut", "a")
_MANDATORY = ("mandatory", "man", "m")
_PROTECTED = ("protected", "pro", "p")
_PRIMARY = ("primary", "pri")
_MULTIPLE = ("multiple", "mul")
_QUERY_OPS = ("queryops", "qop")
_NO_FULL_TEXT = ("nofulltext", "nof")
_NO_QUERY_ORDER = ("noqueryorder", "nqord")
_SNS = ("sns", "multiple")
