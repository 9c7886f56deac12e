"""Error types with formatted source context."""

from __future__ import annotations

from monkey.tokens import Position, Span


def _source_line(source: str, line: int) -> str:
    lines = source.splitlines(keepends=True)
    if 0 <= line - 1 < len(lines):
        return lines[line - 1].rstrip("\n").rstrip("\r")
    return ""


def _render(message: str, filename: str, line: int, col: int, underline_len: int, source_line: str) -> str:
    line_num = str(line)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"
    pad = " " * (col - 1)

    return (
        f"error: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{line}:{col}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {pad}{'^' * underline_len}"
    )


class LexError(Exception):
    """Raised when the scanner's own preconditions break.

    Never a user-input diagnostic: a digit run that passed the character
    class check but cannot be converted to an integer ends up here.
    """

    def __init__(self, message: str, position: Position, source: str) -> None:
        self.message = message
        self.position = position
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "input.monkey") -> str:
        source_line = _source_line(self.source, self.position.line)
        col = self.position.column
        underline_len = max(1, len(source_line) - col + 1)
        return _render(self.message, filename, self.position.line, col, underline_len, source_line)


class ParseError(Exception):
    """A parse diagnostic with span and source context.

    The parser collects these rather than stopping at the first one; it only
    raises one past ``parse_program`` in strict mode.
    """

    def __init__(self, message: str, span: Span | None, source: str) -> None:
        self.message = message
        self.span = span
        self.source = source
        super().__init__(message)

    def format(self, filename: str = "input.monkey") -> str:
        if self.span is None:
            return f"error: {self.message}\n  --> {filename}"

        start, end = self.span.start, self.span.end
        source_line = _source_line(self.source, start.line)

        # Underline the token when it sits on one line, otherwise to end of line
        if end.line == start.line:
            underline_len = max(1, end.column - start.column)
        else:
            underline_len = max(1, len(source_line) - start.column + 1)

        return _render(self.message, filename, start.line, start.column, underline_len, source_line)
