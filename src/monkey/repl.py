"""Interactive read loop: token dump or parse, one line at a time."""

from __future__ import annotations

import sys
from typing import TextIO

from monkey.errors import ParseError
from monkey.lexer import Lexer
from monkey.parser import Parser
from monkey.tokens import TokenType

PROMPT = ">> "
MODES = ("tokens", "parse")


def dump_tokens(source: str, out: TextIO) -> None:
    """Print every token of *source*, flagging illegal ones."""
    lexer = Lexer(source)
    while True:
        tok = lexer.next_token()
        if tok.type == TokenType.EOF:
            break
        if tok.type == TokenType.ILLEGAL:
            out.write(f"Illegal! {tok}\n")
        else:
            out.write(f"Token: {tok}\n")


def report_errors(diagnostics: list[ParseError], out: TextIO) -> None:
    out.write("parser errors:\n")
    for diag in diagnostics:
        out.write(f"\t{diag.message}\n")


def parse_line(source: str, out: TextIO, err: TextIO, *, recover: bool = True) -> bool:
    """Parse *source* and print the program, or its diagnostics to *err*.

    Returns True when the line parsed cleanly.
    """
    parser = Parser(Lexer(source), recover=recover)
    try:
        program = parser.parse_program()
    except ParseError:
        report_errors(parser.diagnostics, err)
        return False

    if parser.diagnostics:
        report_errors(parser.diagnostics, err)
        return False

    out.write(f"{program}\n")
    return True


def start(
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
    *,
    prompt: str = PROMPT,
    mode: str = "tokens",
    recover: bool = True,
) -> None:
    """Run the loop until end of input or Ctrl-C.

    A LexError is not caught: it means the scanner broke its own rules.
    """
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr

    if mode not in MODES:
        raise ValueError(f"unknown REPL mode {mode!r} (expected one of {', '.join(MODES)})")

    try:
        while True:
            stdout.write(prompt)
            stdout.flush()
            line = stdin.readline()
            if not line:
                break
            if mode == "tokens":
                dump_tokens(line, stdout)
            else:
                parse_line(line, stdout, stderr, recover=recover)
    except KeyboardInterrupt:
        pass
