# Copyright 2026 cndkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Token types and token values produced by the CND scanner."""

import enum
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the CND scanner."""

    # Symbols
    LANGLE = "<"
    RANGLE = ">"
    LBRACKET = "["
    RBRACKET = "]"
    LPAREN = "("
    RPAREN = ")"
    EQUALS = "="
    COMMA = ","
    MINUS = "-"
    PLUS = "+"
    STAR = "*"
    QUESTION = "?"
    BANG = "!"

    # Literals
    STRING = "STRING"

    # Identifiers and keywords (keywords are matched by the parser)
    IDENTIFIER = "IDENTIFIER"

    # End of file
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        data: The raw text of an identifier, the decoded content of a string,
            the character of a symbol, or None for EOF.
        line: 1-based line number where the token starts.
        column: 1-based column number where the token starts.
        offset: 0-based character offset where the token starts.
    """

    type: TokenType
    data: str | None
    line: int
    column: int
    offset: int

    @property
    def type_name(self) -> str:
        """Human-readable name of this token's type."""
        return type_name(self.type)

    def describe(self) -> str:
        """Return a short description such as ``[IDENTIFIER, 'mixin']``."""
        if self.data is None:
            return f"[{self.type_name}]"
        return f"[{self.type_name}, {self.data!r}]"


def type_name(token_type: TokenType) -> str:
    """Return the diagnostic name of a token type (e.g. ``"IDENTIFIER"``)."""
    return token_type.name


SYMBOLS: dict[str, TokenType] = {
    "<": TokenType.LANGLE,
    ">": TokenType.RANGLE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "=": TokenType.EQUALS,
    ",": TokenType.COMMA,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    "*": TokenType.STAR,
    "?": TokenType.QUESTION,
    "!": TokenType.BANG,
}
