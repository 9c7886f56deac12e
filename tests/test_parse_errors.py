"""Test parser diagnostics, statement recovery, and strict mode."""

from __future__ import annotations

import pytest

from monkey import check
from monkey.ast import LetStatement
from monkey.errors import ParseError
from monkey.lexer import Lexer
from monkey.parser import Parser, parse


def errors_for(source: str) -> list[str]:
    parser = Parser(Lexer(source))
    parser.parse_program()
    return parser.errors


class TestExpectPeek:
    def test_missing_identifier(self):
        program, diagnostics = parse("let 5;")
        assert program.statements == []
        assert [d.message for d in diagnostics] == ["expected next token to be IDENT, got INT instead"]

    def test_missing_assign(self):
        assert errors_for("let x 5;") == ["expected next token to be =, got INT instead"]

    def test_missing_rparen(self):
        assert errors_for("(1 + 2;") == ["expected next token to be ), got ; instead"]

    def test_position_unchanged_on_failure(self):
        parser = Parser(Lexer("let 5;"))
        with pytest.raises(ParseError):
            parser.parse_statement()
        assert parser.current.literal == "let"
        assert parser.peek.literal == "5"

    def test_success_advances(self):
        parser = Parser(Lexer("let x"))
        tok = parser.expect_peek(parser.peek.type)
        assert tok.literal == "x"
        assert parser.current.literal == "x"


class TestNoPrefixFunction:
    def test_stray_operator(self):
        assert errors_for("* 5;") == ["no prefix parse function for * found"]

    def test_missing_operand_at_eof(self):
        assert errors_for("1 +") == ["no prefix parse function for EOF found"]

    def test_return_without_value(self):
        assert errors_for("return;") == ["no prefix parse function for ; found"]


class TestIllegalCharacters:
    def test_illegal_recorded_and_skipped(self):
        program, diagnostics = parse("let x = 5 @ ;")
        assert [d.message for d in diagnostics] == ["illegal character '@'"]
        assert str(program) == "let x = 5;"

    def test_multiple_illegal_in_order(self):
        assert errors_for("a # b $") == ["illegal character '#'", "illegal character '$'"]

    def test_reported_after_earlier_error(self):
        assert errors_for("* @") == ["no prefix parse function for * found", "illegal character '@'"]

    def test_reported_before_later_error(self):
        assert errors_for("let @ 5;") == [
            "illegal character '@'",
            "expected next token to be IDENT, got INT instead",
        ]


class TestBlocks:
    def test_unterminated_block(self):
        assert errors_for("if (x) { y") == ["expected next token to be }, got EOF instead"]

    def test_bad_parameter(self):
        assert errors_for("fn(x, 1) {}") == ["expected next token to be IDENT, got INT instead"]

    def test_unclosed_call(self):
        assert errors_for("add(1, 2") == ["expected next token to be ), got EOF instead"]


class TestRecovery:
    def test_continues_after_bad_statement(self):
        program, diagnostics = parse("let 5; let y = 2;")
        assert len(diagnostics) == 1
        assert len(program.statements) == 1
        stmt = program.statements[0]
        assert isinstance(stmt, LetStatement)
        assert stmt.name.value == "y"

    def test_every_bad_statement_reported(self):
        messages = errors_for(
            """
            let x 5;
            let = 10;
            let 838383;
            """
        )
        assert messages == [
            "expected next token to be =, got INT instead",
            "expected next token to be IDENT, got = instead",
            "expected next token to be IDENT, got INT instead",
        ]

    def test_errors_not_deduplicated(self):
        assert errors_for("let 1; let 1;") == ["expected next token to be IDENT, got INT instead"] * 2

    def test_good_statements_survive(self):
        program, _ = parse("let a = 1; let 2; let c = 3;")
        assert [s.name.value for s in program.statements] == ["a", "c"]

    def test_terminates_on_stray_closing_brace(self):
        program, diagnostics = parse("}}} x")
        assert str(program) == "x"
        assert len(diagnostics) == 3

    def test_error_inside_function_body(self):
        program, diagnostics = parse("let f = fn() { let 5; x }; let y = 2;")
        assert [d.message for d in diagnostics] == ["expected next token to be IDENT, got INT instead"]
        assert str(program) == "let y = 2;"

    def test_error_in_nested_block(self):
        program, diagnostics = parse("fn() { if (x) { let 5; } y }; z")
        assert len(diagnostics) == 1
        assert str(program) == "z"

    def test_error_in_unterminated_block(self):
        program, diagnostics = parse("if (x) { let 5;")
        assert len(diagnostics) == 1
        assert program.statements == []

    def test_block_depth_reset_between_statements(self):
        program, diagnostics = parse("fn() { let 5; }; let 6; let z = 1;")
        assert len(diagnostics) == 2
        assert str(program) == "let z = 1;"


class TestStrictMode:
    def test_first_failure_propagates(self):
        parser = Parser(Lexer("let x = 1; let 5; let y = 2;"), recover=False)
        with pytest.raises(ParseError, match="expected next token to be IDENT"):
            parser.parse_program()
        assert len(parser.errors) == 1

    def test_parse_helper_strict(self):
        with pytest.raises(ParseError):
            parse("let 5;", recover=False)

    def test_earlier_diagnostics_kept(self):
        parser = Parser(Lexer("@ let 5;"), recover=False)
        with pytest.raises(ParseError):
            parser.parse_program()
        assert parser.errors == [
            "illegal character '@'",
            "expected next token to be IDENT, got INT instead",
        ]

    def test_clean_input_unaffected(self):
        program, diagnostics = parse("let x = 1;", recover=False)
        assert diagnostics == []
        assert str(program) == "let x = 1;"


class TestDiagnosticSpans:
    def test_span_points_at_offending_token(self):
        _, diagnostics = parse("let x = 1;\nlet 5;")
        span = diagnostics[0].span
        assert span.start.line == 2
        assert span.start.column == 5

    def test_source_kept_for_formatting(self):
        _, diagnostics = parse("let 5;")
        assert diagnostics[0].source == "let 5;"


class TestCheck:
    def test_clean(self):
        assert check("let x = 1 + 2;") == []

    def test_messages(self):
        assert check("let 5;") == ["expected next token to be IDENT, got INT instead"]


class TestDeepNesting:
    def test_prefix_chain(self):
        assert errors_for("-" * 5000 + "1") == ["expression nested too deeply"]

    def test_grouping(self):
        program, diagnostics = parse("(" * 5000 + "1" + ")" * 5000)
        assert [d.message for d in diagnostics] == ["expression nested too deeply"]
        assert program.statements == []

    def test_parsing_resumes_afterwards(self):
        program, diagnostics = parse("-" * 5000 + "1;\nlet x = 1;")
        assert len(diagnostics) == 1
        assert str(program) == "let x = 1;"

    def test_strict(self):
        with pytest.raises(ParseError, match="nested too deeply"):
            parse("-" * 5000 + "1", recover=False)
