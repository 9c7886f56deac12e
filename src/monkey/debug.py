"""--debug AST dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

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


def describe_program(program: Program) -> str:
    """One numbered line per top-level statement."""
    lines = ["PROGRAM:"]
    for idx, statement in enumerate(program.statements):
        lines.append(f"--- {idx}: {statement}")
    return "\n".join(lines) + "\n"


def dump_ast(program: Program, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable AST tree to *file*."""
    file.write("Program\n")
    for statement in program.statements:
        _dump_statement(statement, 1, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_statement(node: Statement, depth: int, f: TextIO) -> None:
    if isinstance(node, LetStatement):
        f.write(f"{_indent(depth)}LetStatement {node.name.value}\n")
        _dump_expression(node.value, depth + 1, f)
    elif isinstance(node, ReturnStatement):
        f.write(f"{_indent(depth)}ReturnStatement\n")
        _dump_expression(node.value, depth + 1, f)
    elif isinstance(node, ExpressionStatement):
        f.write(f"{_indent(depth)}ExpressionStatement\n")
        _dump_expression(node.expression, depth + 1, f)
    elif isinstance(node, BlockStatement):
        _dump_block("Block", node, depth, f)


def _dump_block(label: str, block: BlockStatement, depth: int, f: TextIO) -> None:
    f.write(f"{_indent(depth)}{label}\n")
    for statement in block.statements:
        _dump_statement(statement, depth + 1, f)


def _dump_expression(node: Expression, depth: int, f: TextIO) -> None:
    pad = _indent(depth)
    if isinstance(node, Identifier):
        f.write(f"{pad}Identifier {node.value}\n")
    elif isinstance(node, IntegerLiteral):
        f.write(f"{pad}IntegerLiteral {node.value}\n")
    elif isinstance(node, BooleanLiteral):
        f.write(f"{pad}BooleanLiteral {node.token.literal}\n")
    elif isinstance(node, PrefixExpression):
        f.write(f"{pad}PrefixExpression {node.operator}\n")
        _dump_expression(node.right, depth + 1, f)
    elif isinstance(node, InfixExpression):
        f.write(f"{pad}InfixExpression {node.operator}\n")
        _dump_expression(node.left, depth + 1, f)
        _dump_expression(node.right, depth + 1, f)
    elif isinstance(node, IfExpression):
        f.write(f"{pad}IfExpression\n")
        _dump_expression(node.condition, depth + 1, f)
        _dump_block("Then", node.consequence, depth + 1, f)
        if node.alternative is not None:
            _dump_block("Else", node.alternative, depth + 1, f)
    elif isinstance(node, FunctionLiteral):
        params = ", ".join(p.value for p in node.parameters)
        f.write(f"{pad}FunctionLiteral ({params})\n")
        _dump_block("Body", node.body, depth + 1, f)
    elif isinstance(node, CallExpression):
        f.write(f"{pad}CallExpression\n")
        _dump_expression(node.function, depth + 1, f)
        for arg in node.arguments:
            _dump_expression(arg, depth + 1, f)
