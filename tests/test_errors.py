"""Test error messages, position accuracy, and context snippets."""

import pytest

from monkey.errors import LexError, ParseError
from monkey.lexer import tokenize
from monkey.parser import parse


class TestLexErrorPositions:
    def test_digit_run_position(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("let x = ³;")
        err = exc_info.value
        assert err.position.line == 1
        assert err.position.column == 9

    def test_error_on_second_line(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("let a = 1;\n1²")
        err = exc_info.value
        assert err.position.line == 2
        assert err.position.column == 1


class TestLexErrorFormatting:
    def test_format_contains_line(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("some text ² more text")
        assert "some text ² more text" in exc_info.value.format()

    def test_format_contains_error_prefix(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("²")
        formatted = exc_info.value.format()
        assert formatted.startswith("error:")
        assert "1:1" in formatted
        assert "^" in formatted


def first_diagnostic(source: str) -> ParseError:
    _, diagnostics = parse(source)
    assert diagnostics, "expected at least one diagnostic"
    return diagnostics[0]


class TestParseErrorFormatting:
    def test_layout(self):
        formatted = first_diagnostic("let 5;").format()
        assert formatted == (
            "error: expected next token to be IDENT, got INT instead\n"
            "  --> input.monkey:1:5\n"
            "  |\n"
            "1 | let 5;\n"
            "  |     ^"
        )

    def test_custom_filename(self):
        formatted = first_diagnostic("let 5;").format("prog.monkey")
        assert "--> prog.monkey:1:5" in formatted

    def test_underline_covers_token(self):
        formatted = first_diagnostic("let 12345;").format()
        assert formatted.endswith("^^^^^")

    def test_second_line(self):
        formatted = first_diagnostic("let a = 1;\nlet 2;").format()
        assert "2 | let 2;" in formatted
        assert ":2:5" in formatted

    def test_message_is_exception_text(self):
        err = first_diagnostic("* 1")
        assert str(err) == "no prefix parse function for * found"

    def test_without_span(self):
        err = ParseError("something broke", None, "")
        assert err.format("f.monkey") == "error: something broke\n  --> f.monkey"
