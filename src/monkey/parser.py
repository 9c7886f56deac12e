"""Monkey parser: statement parsing plus a Pratt expression engine."""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum

from monkey.ast import (
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
)
from monkey.errors import ParseError
from monkey.lexer import Lexer
from monkey.tokens import Token, TokenType

PrefixParseFn = Callable[[], Expression]
InfixParseFn = Callable[[Expression], Expression]


class Precedence(IntEnum):
    """Binding power of operators, lowest first."""

    LOWEST = 1
    EQUALS = 2  # == !=
    LESSGREATER = 3  # < >
    SUM = 4  # + -
    PRODUCT = 5  # * /
    PREFIX = 6  # -x !x
    CALL = 7  # f(x)


class Parser:
    """Pratt parser over a Lexer, keeping two tokens of lookahead.

    Diagnostics are collected in discovery order instead of stopping at the
    first one. A statement that fails is abandoned; with ``recover=True`` the
    parser skips to the next ``;``, ``}`` or EOF and carries on, otherwise the
    ParseError propagates out of ``parse_program``.
    """

    def __init__(self, lexer: Lexer, *, recover: bool = True) -> None:
        self._lexer = lexer
        self._recover = recover
        self._diagnostics: list[ParseError] = []
        self._skipped: list[Token] = []  # illegal tokens between current and peek
        self._block_depth = 0
        self._current = Token(TokenType.ILLEGAL, "")
        self._peek = Token(TokenType.ILLEGAL, "")

        self._prefix_fns: dict[TokenType, PrefixParseFn] = {}
        self._infix_fns: dict[TokenType, InfixParseFn] = {}
        self._precedences: dict[TokenType, Precedence] = {}

        self.register_prefix(TokenType.IDENT, self._parse_identifier)
        self.register_prefix(TokenType.INT, self._parse_integer_literal)
        self.register_prefix(TokenType.TRUE, self._parse_boolean)
        self.register_prefix(TokenType.FALSE, self._parse_boolean)
        self.register_prefix(TokenType.BANG, self._parse_prefix_expression)
        self.register_prefix(TokenType.MINUS, self._parse_prefix_expression)
        self.register_prefix(TokenType.LPAREN, self._parse_grouped_expression)
        self.register_prefix(TokenType.IF, self._parse_if_expression)
        self.register_prefix(TokenType.FUNCTION, self._parse_function_literal)

        for tt, precedence in _BINARY_OPERATORS.items():
            self.register_infix(tt, self._parse_infix_expression, precedence)
        self.register_infix(TokenType.LPAREN, self._parse_call_expression, Precedence.CALL)

        # Fill current and peek
        self.next_token()
        self.next_token()

    # ------------------------------------------------------------------
    # Public state
    # ------------------------------------------------------------------

    @property
    def current(self) -> Token:
        return self._current

    @property
    def peek(self) -> Token:
        return self._peek

    @property
    def errors(self) -> list[str]:
        """Diagnostic messages, in the order they were found."""
        return [d.message for d in self._diagnostics]

    @property
    def diagnostics(self) -> list[ParseError]:
        return list(self._diagnostics)

    def register_prefix(self, tt: TokenType, fn: PrefixParseFn) -> None:
        self._prefix_fns[tt] = fn

    def register_infix(self, tt: TokenType, fn: InfixParseFn, precedence: Precedence) -> None:
        self._infix_fns[tt] = fn
        self._precedences[tt] = precedence

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def next_token(self) -> None:
        """Shift peek into current and pull a fresh token from the lexer.

        Illegal characters are dropped from the stream. They are reported once
        the parser moves past them, so diagnostics stay in source order.
        """
        self._report_skipped()
        self._current = self._peek
        tok = self._lexer.next_token()
        while tok.type == TokenType.ILLEGAL:
            self._skipped.append(tok)
            tok = self._lexer.next_token()
        self._peek = tok

    def expect_peek(self, tt: TokenType) -> Token:
        """Advance onto the peek token if it has the given type.

        Otherwise record a diagnostic and abort the current statement; the
        position is left unchanged.
        """
        if self._peek.type != tt:
            raise self._record(f"expected next token to be {tt}, got {self._peek.type} instead", self._peek)
        self.next_token()
        return self._current

    def _skip_semicolon(self) -> None:
        if self._peek.type == TokenType.SEMICOLON:
            self.next_token()

    def _peek_precedence(self) -> Precedence:
        return self._precedences.get(self._peek.type, Precedence.LOWEST)

    def _current_precedence(self) -> Precedence:
        return self._precedences.get(self._current.type, Precedence.LOWEST)

    def _synchronize(self) -> None:
        """Skip past the statement that failed.

        At top level that means the next ``;``, ``}`` or EOF. Inside a block
        the rest of the outermost enclosing block is skipped, up to its
        closing ``}`` and an optional ``;`` after it.
        """
        depth, self._block_depth = self._block_depth, 0
        if depth == 0:
            while self._current.type not in _SYNC_TOKENS:
                self.next_token()
            return

        while self._current.type != TokenType.EOF:
            if self._current.type == TokenType.LBRACE:
                depth += 1
            elif self._current.type == TokenType.RBRACE:
                depth -= 1
                if depth == 0:
                    self._skip_semicolon()
                    return
            self.next_token()

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def parse_program(self) -> Program:
        program = Program()

        while self._current.type != TokenType.EOF:
            try:
                program.statements.append(self._parse_top_level_statement())
            except ParseError:
                if not self._recover:
                    raise
                self._synchronize()
            self.next_token()

        return program

    def _parse_top_level_statement(self) -> Statement:
        try:
            return self.parse_statement()
        except RecursionError:
            raise self._record("expression nested too deeply", self._current) from None

    def parse_statement(self) -> Statement:
        if self._current.type == TokenType.LET:
            return self._parse_let_statement()
        if self._current.type == TokenType.RETURN:
            return self._parse_return_statement()
        return self._parse_expression_statement()

    def _parse_let_statement(self) -> LetStatement:
        name = Identifier(self.expect_peek(TokenType.IDENT))
        self.expect_peek(TokenType.ASSIGN)
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        self._skip_semicolon()
        return LetStatement(name, value)

    def _parse_return_statement(self) -> ReturnStatement:
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        self._skip_semicolon()
        return ReturnStatement(value)

    def _parse_expression_statement(self) -> ExpressionStatement:
        tok = self._current
        expression = self.parse_expression(Precedence.LOWEST)
        self._skip_semicolon()
        return ExpressionStatement(tok, expression)

    def _parse_block_statement(self) -> BlockStatement:
        tok = self._current  # LBRACE
        statements: list[Statement] = []
        self._block_depth += 1
        self.next_token()

        while self._current.type != TokenType.RBRACE:
            if self._current.type == TokenType.EOF:
                raise self._record(
                    f"expected next token to be {TokenType.RBRACE}, got {TokenType.EOF} instead",
                    self._current,
                )
            statements.append(self.parse_statement())
            self.next_token()

        # Left raised on failure; _synchronize reads and resets it
        self._block_depth -= 1
        return BlockStatement(tok, tuple(statements))

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def parse_expression(self, precedence: Precedence) -> Expression:
        prefix = self._prefix_fns.get(self._current.type)
        if prefix is None:
            raise self._record(f"no prefix parse function for {self._current.type} found", self._current)
        left = prefix()

        while precedence < self._peek_precedence():
            infix = self._infix_fns.get(self._peek.type)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)

        return left

    def _parse_identifier(self) -> Expression:
        return Identifier(self._current)

    def _parse_integer_literal(self) -> Expression:
        return IntegerLiteral(self._current)

    def _parse_boolean(self) -> Expression:
        return BooleanLiteral(self._current)

    def _parse_prefix_expression(self) -> Expression:
        tok = self._current
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        return PrefixExpression(tok, tok.literal, right)

    def _parse_infix_expression(self, left: Expression) -> Expression:
        tok = self._current
        precedence = self._current_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        return InfixExpression(tok, left, tok.literal, right)

    def _parse_grouped_expression(self) -> Expression:
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenType.RPAREN)
        return expression

    def _parse_if_expression(self) -> Expression:
        tok = self._current
        self.expect_peek(TokenType.LPAREN)
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenType.RPAREN)
        self.expect_peek(TokenType.LBRACE)
        consequence = self._parse_block_statement()

        alternative = None
        if self._peek.type == TokenType.ELSE:
            self.next_token()
            self.expect_peek(TokenType.LBRACE)
            alternative = self._parse_block_statement()

        return IfExpression(tok, condition, consequence, alternative)

    def _parse_function_literal(self) -> Expression:
        tok = self._current
        self.expect_peek(TokenType.LPAREN)
        parameters = self._parse_function_parameters()
        self.expect_peek(TokenType.LBRACE)
        body = self._parse_block_statement()
        return FunctionLiteral(tok, parameters, body)

    def _parse_function_parameters(self) -> tuple[Identifier, ...]:
        if self._peek.type == TokenType.RPAREN:
            self.next_token()
            return ()

        params = [Identifier(self.expect_peek(TokenType.IDENT))]
        while self._peek.type == TokenType.COMMA:
            self.next_token()
            params.append(Identifier(self.expect_peek(TokenType.IDENT)))

        self.expect_peek(TokenType.RPAREN)
        return tuple(params)

    def _parse_call_expression(self, function: Expression) -> Expression:
        tok = self._current  # LPAREN
        return CallExpression(tok, function, self._parse_call_arguments())

    def _parse_call_arguments(self) -> tuple[Expression, ...]:
        if self._peek.type == TokenType.RPAREN:
            self.next_token()
            return ()

        self.next_token()
        args = [self.parse_expression(Precedence.LOWEST)]
        while self._peek.type == TokenType.COMMA:
            self.next_token()
            self.next_token()
            args.append(self.parse_expression(Precedence.LOWEST))

        self.expect_peek(TokenType.RPAREN)
        return tuple(args)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _record(self, message: str, tok: Token) -> ParseError:
        """Append a diagnostic and return it so the caller can raise it."""
        if tok.span is not None:
            self._report_skipped(before=tok.span.start.offset)
        err = ParseError(message, tok.span, self._lexer.source)
        self._diagnostics.append(err)
        return err

    def _report_skipped(self, before: int | None = None) -> None:
        """Record dropped illegal tokens, only those ahead of *before* if given."""
        keep: list[Token] = []
        for tok in self._skipped:
            if before is not None and tok.span is not None and tok.span.start.offset >= before:
                keep.append(tok)
                continue
            err = ParseError(f"illegal character {tok.literal!r}", tok.span, self._lexer.source)
            self._diagnostics.append(err)
        self._skipped = keep


# Module-level constants
_BINARY_OPERATORS: dict[TokenType, Precedence] = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.ASTERISK: Precedence.PRODUCT,
}
_SYNC_TOKENS: frozenset[TokenType] = frozenset({TokenType.SEMICOLON, TokenType.RBRACE, TokenType.EOF})


def parse(source: str, *, recover: bool = True) -> tuple[Program, list[ParseError]]:
    """Convenience function: parse source text, returning the program and its diagnostics."""
    parser = Parser(Lexer(source), recover=recover)
    program = parser.parse_program()
    return program, parser.diagnostics
