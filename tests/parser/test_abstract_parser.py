# Copyright 2026 cndkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the shared token-consumption primitives."""

import pytest

from cndkit.parser.abstract_parser import AbstractParser, ParseError
from cndkit.scanner.scanner import scan
from cndkit.scanner.token_queue import TokenQueue
from cndkit.scanner.tokens import TokenType

# ###############
# Test Helpers
# ###############


def _parser(source: str) -> tuple[AbstractParser, TokenQueue]:
    queue = TokenQueue(scan(source))
    return AbstractParser(queue), queue


# ###############
# check_token
# ###############


class TestCheckToken:
    def test_type_only(self) -> None:
        parser, _ = _parser("mixin")
        assert parser.check_token(TokenType.IDENTIFIER)
        assert not parser.check_token(TokenType.STRING)

    def test_type_and_data(self) -> None:
        parser, _ = _parser("mixin")
        assert parser.check_token(TokenType.IDENTIFIER, "mixin")
        assert not parser.check_token(TokenType.IDENTIFIER, "abstract")

    def test_data_must_match_type_too(self) -> None:
        parser, _ = _parser("'mixin'")
        assert not parser.check_token(TokenType.IDENTIFIER, "mixin")
        assert parser.check_token(TokenType.STRING, "mixin")

    def test_case_sensitive_by_default(self) -> None:
        parser, _ = _parser("MIXIN")
        assert not parser.check_token(TokenType.IDENTIFIER, "mixin")

    def test_ignore_case_matches_equal_text(self) -> None:
        parser, _ = _parser("MIXIN")
        assert parser.check_token(TokenType.IDENTIFIER, "mixin", ignore_case=True)

    def test_ignore_case_rejects_different_text(self) -> None:
        parser, _ = _parser("mixin2")
        assert not parser.check_token(TokenType.IDENTIFIER, "mixin", ignore_case=True)

    def test_ignore_case_rejects_unrelated_text(self) -> None:
        parser, _ = _parser("abstract")
        assert not parser.check_token(TokenType.IDENTIFIER, "mixin", ignore_case=True)

    def test_false_at_eof(self) -> None:
        parser, _ = _parser("")
        assert not parser.check_token(TokenType.EOF)
        assert not parser.check_token(TokenType.IDENTIFIER)

    def test_never_consumes(self) -> None:
        parser, queue = _parser("a b")
        for _ in range(5):
            parser.check_token(TokenType.IDENTIFIER, "a")
            parser.check_token(TokenType.STRING)
        assert queue.position == 0
        assert queue.peek().data == "a"


# ###############
# check_token_in
# ###############


class TestCheckTokenIn:
    def test_any_element_matches(self) -> None:
        parser, _ = _parser("mix")
        assert parser.check_token_in(TokenType.IDENTIFIER, ["mixin", "mix", "m"])

    def test_no_element_matches(self) -> None:
        parser, _ = _parser("abstract")
        assert not parser.check_token_in(TokenType.IDENTIFIER, ["mixin", "mix", "m"])

    def test_ignore_case(self) -> None:
        parser, _ = _parser("Mix")
        assert parser.check_token_in(TokenType.IDENTIFIER, ["mixin", "mix"], ignore_case=True)
        assert not parser.check_token_in(TokenType.IDENTIFIER, ["mixin", "mix"])

    def test_empty_set(self) -> None:
        parser, _ = _parser("a")
        assert not parser.check_token_in(TokenType.IDENTIFIER, [])


# ###############
# expect_token
# ###############


class TestExpectToken:
    def test_returns_and_consumes_on_match(self) -> None:
        parser, queue = _parser("[a")
        token = parser.expect_token(TokenType.LBRACKET)
        assert token.type == TokenType.LBRACKET
        assert queue.position == 1

    def test_with_data(self) -> None:
        parser, _ = _parser("mixin")
        assert parser.expect_token(TokenType.IDENTIFIER, "mixin").data == "mixin"

    def test_with_ignore_case(self) -> None:
        parser, _ = _parser("MIXIN")
        assert parser.expect_token(TokenType.IDENTIFIER, "mixin", ignore_case=True).data == "MIXIN"

    def test_failure_consumes_nothing(self) -> None:
        parser, queue = _parser("]")
        with pytest.raises(ParseError):
            parser.expect_token(TokenType.LBRACKET)
        assert queue.position == 0
        assert queue.peek().type == TokenType.RBRACKET

    def test_failure_message_with_data(self) -> None:
        parser, _ = _parser("\n\n\n   abstract")
        with pytest.raises(ParseError) as exc_info:
            parser.expect_token(TokenType.IDENTIFIER, "mixin")
        assert str(exc_info.value) == "Expected token [IDENTIFIER, 'mixin'] at line 4, column 4"
        assert exc_info.value.expected == "[IDENTIFIER, 'mixin']"
        assert exc_info.value.token.data == "abstract"

    def test_failure_message_without_data(self) -> None:
        parser, _ = _parser("x")
        with pytest.raises(ParseError) as exc_info:
            parser.expect_token(TokenType.RBRACKET)
        assert exc_info.value.message == "Expected token [RBRACKET]"
        assert (exc_info.value.line, exc_info.value.column) == (1, 1)

    def test_failure_at_eof_points_at_eof(self) -> None:
        parser, _ = _parser("a")
        parser.expect_token(TokenType.IDENTIFIER)
        with pytest.raises(ParseError) as exc_info:
            parser.expect_token(TokenType.RBRACKET)
        assert exc_info.value.token.type == TokenType.EOF
        assert exc_info.value.column == 2

    def test_source_name_in_message(self) -> None:
        parser = AbstractParser(TokenQueue(scan("x")), source_name="app.cnd")
        with pytest.raises(ParseError) as exc_info:
            parser.expect_token(TokenType.STRING)
        assert str(exc_info.value).startswith("app.cnd: Expected token [STRING]")


# ###############
# check_and_expect_token
# ###############


class TestCheckAndExpectToken:
    def test_consumes_on_match(self) -> None:
        parser, queue = _parser("? a")
        token = parser.check_and_expect_token(TokenType.QUESTION)
        assert token is not None
        assert token.type == TokenType.QUESTION
        assert queue.position == 1

    def test_returns_none_without_consuming(self) -> None:
        parser, queue = _parser("a")
        assert parser.check_and_expect_token(TokenType.QUESTION) is None
        assert queue.position == 0

    def test_data_mismatch_returns_none(self) -> None:
        parser, queue = _parser("mixin")
        assert parser.check_and_expect_token(TokenType.IDENTIFIER, "abstract") is None
        assert queue.position == 0

    def test_none_at_eof(self) -> None:
        parser, _ = _parser("")
        assert parser.check_and_expect_token(TokenType.IDENTIFIER) is None


# ###############
# error
# ###############


class TestError:
    def test_error_defaults_to_pending_token(self) -> None:
        parser, _ = _parser("a b")
        parser.expect_token(TokenType.IDENTIFIER)
        err = parser.error("Unexpected thing")
        assert err.token.data == "b"
        assert err.column == 3
        assert str(err) == "Unexpected thing at line 1, column 3"

    def test_error_at_given_token(self) -> None:
        parser, _ = _parser("a b")
        first = parser.expect_token(TokenType.IDENTIFIER)
        err = parser.error("Bad name", first)
        assert err.column == 1
