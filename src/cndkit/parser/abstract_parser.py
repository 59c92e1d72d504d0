# Copyright 2026 cndkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Token-consumption primitives shared by recursive-descent parsers.

Every grammar rule is written in terms of four operations:

- ``check_token``            - check whether the next token matches
- ``check_token_in``         - check the next token against several values
- ``expect_token``           - consume the next token or raise ParseError
- ``check_and_expect_token`` - consume the next token only if it matches

Alternatives are chosen by looking ahead with ``check_token`` (or
``TokenQueue.peek``) before anything is consumed; consumed tokens are never
put back.
"""

from collections.abc import Iterable

from cndkit.errors import CndError
from cndkit.scanner.token_queue import TokenQueue
from cndkit.scanner.tokens import Token, TokenType, type_name

# ###############
# Public Interface
# ###############


class ParseError(CndError):
    """Raised when the token stream does not match the grammar.

    Attributes:
        token: The offending token, still pending in the queue.
        expected: Description of what the grammar required, if known.
    """

    def __init__(
        self,
        message: str,
        token: Token,
        expected: str | None = None,
        source_name: str | None = None,
    ) -> None:
        super().__init__(message, token.line, token.column, token.offset, source_name)
        self.token = token
        self.expected = expected


class AbstractParser:
    """Base class holding the token queue and the matching primitives."""

    def __init__(self, queue: TokenQueue, source_name: str | None = None) -> None:
        self._queue = queue
        self._source_name = source_name

    def check_token(self, token_type: TokenType, data: str | None = None, ignore_case: bool = False) -> bool:
        """Return True if the next token has *token_type* and, if given, *data*.

        Nothing is consumed. At EOF the answer is always False.
        """
        if self._queue.is_eof():
            return False
        token = self._queue.peek()
        if token.type != token_type:
            return False
        if data is None:
            return True
        if token.data is None:
            return False
        if ignore_case:
            return token.data.casefold() == data.casefold()
        return token.data == data

    def check_token_in(self, token_type: TokenType, data: Iterable[str], ignore_case: bool = False) -> bool:
        """Return True if the next token matches *token_type* and any element of *data*."""
        return any(self.check_token(token_type, d, ignore_case) for d in data)

    def expect_token(self, token_type: TokenType, data: str | None = None, ignore_case: bool = False) -> Token:
        """Consume and return the next token if it matches, otherwise raise ParseError.

        On failure the queue is left untouched so the error can point at the
        offending token.
        """
        if not self.check_token(token_type, data, ignore_case):
            expected = _describe(token_type, data)
            raise self.error(f"Expected token {expected}", expected=expected)
        return self._queue.next()

    def check_and_expect_token(
        self, token_type: TokenType, data: str | None = None, ignore_case: bool = False
    ) -> Token | None:
        """Consume and return the next token if it matches, otherwise return None."""
        if self.check_token(token_type, data, ignore_case):
            return self._queue.next()
        return None

    def error(self, message: str, token: Token | None = None, expected: str | None = None) -> ParseError:
        """Build a ParseError located at *token*, or at the next pending token."""
        if token is None:
            token = self._queue.peek()
        return ParseError(message, token, expected=expected, source_name=self._source_name)


# ################
# Implementation
# ################


def _describe(token_type: TokenType, data: str | None) -> str:
    if data is None:
        return f"[{type_name(token_type)}]"
    return f"[{type_name(token_type)}, {data!r}]"
