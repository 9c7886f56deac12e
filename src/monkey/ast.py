"""AST node types for parsed Monkey programs.

Every node renders back to source-like text with ``str()``; infix and prefix
expressions are fully parenthesised so the rendering shows how the parser
grouped them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from monkey.tokens import Token


# ----------------------------------------------------------------------
# Expressions
# ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Identifier:
    """A name. Its value is the token literal."""

    token: Token

    @property
    def value(self) -> str:
        return self.token.literal

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class IntegerLiteral:
    token: Token

    @property
    def value(self) -> int:
        return int(self.token.literal)

    def __str__(self) -> str:
        return self.token.literal


@dataclass(frozen=True, slots=True)
class BooleanLiteral:
    token: Token

    @property
    def value(self) -> bool:
        return self.token.literal == "true"

    def __str__(self) -> str:
        return self.token.literal


@dataclass(frozen=True, slots=True)
class PrefixExpression:
    """Unary ``!x`` or ``-x``."""

    token: Token
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass(frozen=True, slots=True)
class InfixExpression:
    """Binary operator applied to two operands."""

    token: Token
    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True, slots=True)
class IfExpression:
    token: Token
    condition: Expression
    consequence: BlockStatement
    alternative: BlockStatement | None = None

    def __str__(self) -> str:
        text = f"if{self.condition} {self.consequence}"
        if self.alternative is not None:
            text += f"else {self.alternative}"
        return text


@dataclass(frozen=True, slots=True)
class FunctionLiteral:
    token: Token
    parameters: tuple[Identifier, ...]
    body: BlockStatement

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.token.literal}({params}) {self.body}"


@dataclass(frozen=True, slots=True)
class CallExpression:
    """``function(arguments)``; the token is the opening parenthesis."""

    token: Token
    function: Expression
    arguments: tuple[Expression, ...]

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


# ----------------------------------------------------------------------
# Statements
# ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LetStatement:
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"let {self.name} = {self.value};"


@dataclass(frozen=True, slots=True)
class ReturnStatement:
    value: Expression

    def __str__(self) -> str:
        return f"return {self.value};"


@dataclass(frozen=True, slots=True)
class ExpressionStatement:
    """A bare expression; token is the one that began it."""

    token: Token
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


@dataclass(frozen=True, slots=True)
class BlockStatement:
    """Brace-delimited statement list used by ``if`` and ``fn`` bodies."""

    token: Token
    statements: tuple[Statement, ...]

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


@dataclass(slots=True)
class Program:
    """Root node. Statements are appended in source order while parsing."""

    statements: list[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


Expression = (
    Identifier
    | IntegerLiteral
    | BooleanLiteral
    | PrefixExpression
    | InfixExpression
    | IfExpression
    | FunctionLiteral
    | CallExpression
)

Statement = LetStatement | ReturnStatement | ExpressionStatement | BlockStatement
