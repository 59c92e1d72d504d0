# Copyright 2026 cndkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Bounded-lookahead buffer over a lazy token iterator."""

from collections import deque
from collections.abc import Iterator

from cndkit.scanner.tokens import Token, TokenType

# ###############
# Public Interface
# ###############


class TokenQueueError(RuntimeError):
    """Raised when the queue is used in a way the parser must never do."""


class TokenQueue:
    """Peekable view of a token stream.

    Tokens are pulled from the underlying iterator only when :meth:`peek`
    needs them. The EOF token is never buffered: once it has been produced it
    is remembered and returned for every lookahead beyond the real tokens,
    and the iterator is not touched again.
    """

    def __init__(self, tokens: Iterator[Token]) -> None:
        self._tokens = tokens
        self._buffer: deque[Token] = deque()
        self._eof: Token | None = None
        self._position = 0

    @property
    def position(self) -> int:
        """Number of tokens consumed so far."""
        return self._position

    def peek(self, offset: int = 0) -> Token:
        """Return the token *offset* positions ahead without consuming anything."""
        if offset < 0:
            raise ValueError(f"Lookahead offset must not be negative, got {offset}")
        self._fill(offset + 1)
        if offset < len(self._buffer):
            return self._buffer[offset]
        assert self._eof is not None
        return self._eof

    def next(self) -> Token:
        """Consume and return the token at the front of the queue.

        Raises:
            TokenQueueError: If the queue is already at EOF.
        """
        if self.is_eof():
            raise TokenQueueError("Cannot advance past the end of the token stream")
        self._position += 1
        return self._buffer.popleft()

    def is_eof(self) -> bool:
        """Return True once the stream has ended and no buffered tokens remain."""
        self._fill(1)
        return not self._buffer

    # ################
    # Implementation
    # ################

    def _fill(self, count: int) -> None:
        """Scan until *count* tokens are buffered or EOF has been seen."""
        while len(self._buffer) < count and self._eof is None:
            token = next(self._tokens, None)
            if token is None or token.type == TokenType.EOF:
                self._eof = token if token is not None else self._synthetic_eof()
            else:
                self._buffer.append(token)

    def _synthetic_eof(self) -> Token:
        """Build an EOF token for iterators that end without producing one."""
        last = self._buffer[-1] if self._buffer else None
        if last is None:
            return Token(TokenType.EOF, None, 1, 1, 0)
        return Token(TokenType.EOF, None, last.line, last.column, last.offset)
