"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from monkey.ast import Expression, ExpressionStatement, Program
from monkey.lexer import tokenize
from monkey.parser import parse
from monkey.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str) -> list[Token]:
        tokens = tokenize(source)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.type != TokenType.EOF]

    return _lex


@pytest.fixture
def parse_source():
    """Return a helper that parses source and fails the test on any diagnostic."""

    def _parse(source: str) -> Program:
        program, diagnostics = parse(source)
        messages = [d.message for d in diagnostics]
        assert messages == [], f"Unexpected parser errors: {messages}"
        return program

    return _parse


@pytest.fixture
def parse_expr(parse_source):
    """Return a helper that parses a single expression statement."""

    def _parse(source: str) -> Expression:
        program = parse_source(source)
        assert len(program.statements) == 1, f"Expected 1 statement, got {len(program.statements)}"
        stmt = program.statements[0]
        assert isinstance(stmt, ExpressionStatement), f"Expected ExpressionStatement, got {type(stmt).__name__}"
        return stmt.expression

    return _parse


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_literals(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token literals match the expected list."""
    actual = [t.literal for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
