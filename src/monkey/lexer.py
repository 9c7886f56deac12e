"""Monkey lexer: converts source text into tokens, one per call."""

from __future__ import annotations

from collections.abc import Callable

from monkey.errors import LexError
from monkey.tokens import ONE_CHAR_OPERATORS, TWO_CHAR_OPERATORS, Position, Span, Token, TokenType, lookup


class Lexer:
    """Scan Monkey source one token at a time.

    The scanner keeps the character under the cursor in ``_ch`` and the index
    of the next one in ``_read_pos`` (always ``_pos + 1`` while a character is
    present), which gives the single character of lookahead needed for
    ``==`` and ``!=``. Once the input runs out ``_eof`` is set and every
    further call returns the EOF token without touching the input again.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._read_pos = 0
        self._ch = ""
        self._eof = False
        self._line = 1
        self._col = 0
        self._read_char()

    @property
    def source(self) -> str:
        return self._source

    def next_token(self) -> Token:
        """Return the next token and advance past it."""
        if self._eof:
            return self._eof_token()

        self._skip_whitespace()

        if self._eof:
            return self._eof_token()

        start = self._current_pos()

        pair = self._ch + self._peek_char()
        if pair in TWO_CHAR_OPERATORS:
            self._read_char()
            self._read_char()
            return lookup(pair, self._span_from(start))

        if self._ch in ONE_CHAR_OPERATORS:
            ch = self._ch
            self._read_char()
            return lookup(ch, self._span_from(start))

        if self._ch.isalpha():
            word = self._read_run(str.isalpha)
            return lookup(word, self._span_from(start))

        if self._ch.isdigit():
            return self._read_number(start)

        ch = self._ch
        self._read_char()
        return Token(TokenType.ILLEGAL, ch, self._span_from(start))

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _span_from(self, start: Position) -> Span:
        return Span(start, self._current_pos())

    def _eof_token(self) -> Token:
        pos = self._current_pos()
        return Token(TokenType.EOF, "", Span(pos, pos))

    # ------------------------------------------------------------------
    # Character navigation
    # ------------------------------------------------------------------

    def _read_char(self) -> None:
        if self._eof:
            return

        if self._ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1

        if self._read_pos >= len(self._source):
            self._pos = len(self._source)
            self._read_pos = self._pos + 1
            self._ch = ""
            self._eof = True
            return

        self._pos = self._read_pos
        self._read_pos += 1
        self._ch = self._source[self._pos]

    def _peek_char(self) -> str:
        # Running off the end is expected here; it just fails the pair check
        if self._read_pos < len(self._source):
            return self._source[self._read_pos]
        return ""

    def _skip_whitespace(self) -> None:
        while not self._eof and self._ch.isspace():
            self._read_char()

    def _read_run(self, accept: Callable[[str], bool]) -> str:
        start = self._pos
        while not self._eof and accept(self._ch):
            self._read_char()
        return self._source[start : self._pos]

    def _read_number(self, start: Position) -> Token:
        text = self._read_run(str.isdigit)
        try:
            int(text)
        except ValueError as exc:
            raise LexError(f"digit run {text!r} is not a base-10 integer", start, self._source) from exc
        return Token(TokenType.INT, text, self._span_from(start))


def tokenize(source: str) -> list[Token]:
    """Convenience function: scan source to exhaustion, EOF token included."""
    lexer = Lexer(source)
    tokens = [lexer.next_token()]
    while tokens[-1].type != TokenType.EOF:
        tokens.append(lexer.next_token())
    return tokens
