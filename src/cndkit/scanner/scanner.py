# Copyright 2026 cndkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for CND documents.

Converts raw source text into tokens on demand. The parser pulls tokens one at
a time through a TokenQueue, so a document is only scanned as far as it is
parsed.
"""

from collections.abc import Iterator

from cndkit.errors import CndError
from cndkit.scanner.tokens import SYMBOLS, Token, TokenType

# ###############
# Public Interface
# ###############


class ScanError(CndError):
    """Raised when the scanner encounters an invalid character or unterminated literal.

    Attributes:
        character: The offending character, or '' when the input ended early.
    """

    def __init__(
        self,
        message: str,
        character: str,
        line: int,
        column: int,
        offset: int,
        source_name: str | None = None,
    ) -> None:
        super().__init__(message, line, column, offset, source_name)
        self.character = character


class Scanner:
    """Pull-based scanner over a complete CND document.

    Whitespace, ``//`` line comments and ``/* */`` block comments are skipped.
    Once the end of input is reached, every further call to :meth:`next_token`
    returns an EOF token.
    """

    def __init__(self, source: str, source_name: str | None = None) -> None:
        self._source = source
        self._source_name = source_name
        self._pos = 0
        self._line = 1
        self._column = 1

    @property
    def source_name(self) -> str | None:
        """Name of the document used in diagnostics."""
        return self._source_name

    def next_token(self) -> Token:
        """Scan and return the next token.

        Raises:
            ScanError: On unexpected characters, unterminated string literals,
                or unterminated block comments.
        """
        self._skip_whitespace_and_comments()
        if self._pos >= len(self._source):
            return Token(TokenType.EOF, None, self._line, self._column, self._pos)
        return self._scan_token()

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens lazily, ending with exactly one EOF token."""
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _peek(self) -> str:
        """Return the character one position ahead, or '' at end of input."""
        if self._pos + 1 < len(self._source):
            return self._source[self._pos + 1]
        return ""

    def _advance(self) -> str:
        """Consume the current character, update position tracking, and return it."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    def _error(self, message: str, character: str, line: int, column: int, offset: int) -> ScanError:
        return ScanError(message, character, line, column, offset, self._source_name)

    # ------------------------------------------------------------------
    # Whitespace and comment skipping
    # ------------------------------------------------------------------

    def _skip_whitespace_and_comments(self) -> None:
        """Skip all whitespace and comment runs at the current position."""
        while self._pos < len(self._source):
            ch = self._current()
            if ch.isspace():
                self._advance()
            elif ch == "/" and self._peek() == "/":
                self._skip_line_comment()
            elif ch == "/" and self._peek() == "*":
                self._skip_block_comment()
            else:
                break

    def _skip_line_comment(self) -> None:
        """Consume from '//' through end-of-line (exclusive of the newline itself)."""
        while self._pos < len(self._source) and self._current() != "\n":
            self._advance()

    def _skip_block_comment(self) -> None:
        """Consume from '/*' through the matching '*/'."""
        start_line = self._line
        start_col = self._column
        start_pos = self._pos
        self._advance()  # /
        self._advance()  # *
        while self._pos < len(self._source):
            if self._current() == "*" and self._peek() == "/":
                self._advance()  # *
                self._advance()  # /
                return
            self._advance()
        raise self._error("Unterminated block comment", "/", start_line, start_col, start_pos)

    # ------------------------------------------------------------------
    # Token scanning dispatcher
    # ------------------------------------------------------------------

    def _scan_token(self) -> Token:
        """Dispatch to the appropriate handler based on the current character."""
        ch = self._current()
        line = self._line
        col = self._column
        pos = self._pos

        if ch in SYMBOLS:
            self._advance()
            return Token(SYMBOLS[ch], ch, line, col, pos)
        if ch in "'\"":
            return self._scan_string(line, col, pos)
        if _is_identifier_start(ch):
            return self._scan_identifier(line, col, pos)
        raise self._error(f"Unexpected character: {ch!r}", ch, line, col, pos)

    # ------------------------------------------------------------------
    # Literal scanners
    # ------------------------------------------------------------------

    def _scan_string(self, line: int, col: int, pos: int) -> Token:
        """Scan a single- or double-quoted string literal with escape sequences."""
        quote = self._advance()
        chars: list[str] = []
        while self._pos < len(self._source):
            ch = self._current()
            if ch == quote:
                self._advance()  # closing quote
                return Token(TokenType.STRING, "".join(chars), line, col, pos)
            if ch == "\\":
                self._advance()
                if self._pos >= len(self._source):
                    break
                esc = self._advance()
                chars.append(_ESCAPES.get(esc, esc))
            else:
                chars.append(self._advance())
        raise self._error("Unterminated string literal", quote, line, col, pos)

    def _scan_identifier(self, line: int, col: int, pos: int) -> Token:
        """Scan a bare name, keyword or number."""
        start = self._pos
        while self._pos < len(self._source) and _is_identifier_part(self._current()):
            self._advance()
        return Token(TokenType.IDENTIFIER, self._source[start : self._pos], line, col, pos)


def scan(source: str, source_name: str | None = None) -> Iterator[Token]:
    """Return a lazy token iterator over *source*, ending with an EOF token."""
    return iter(Scanner(source, source_name))


# ################
# Implementation
# ################

# Characters other than letters and digits allowed in bare names. A '-' may
# continue a name but never start one, so '-name' scans as MINUS + name.
_IDENTIFIER_PUNCTUATION = frozenset(":._")

_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
}


def _is_identifier_start(ch: str) -> bool:
    return ch.isalnum() or ch in _IDENTIFIER_PUNCTUATION


def _is_identifier_part(ch: str) -> bool:
    return ch.isalnum() or ch in _IDENTIFIER_PUNCTUATION or ch == "-"
