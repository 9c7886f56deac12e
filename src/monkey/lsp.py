"""Minimal LSP server for Monkey, diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from monkey import __version__
from monkey.errors import LexError, ParseError
from monkey.parser import parse

server = LanguageServer("monkey-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _to_diagnostic(exc: ParseError) -> Diagnostic:
    if exc.span is None:
        start = end = Position(line=0, character=0)
    else:
        # 1-based lexer positions -> 0-based LSP positions
        start = Position(line=exc.span.start.line - 1, character=exc.span.start.column - 1)
        end = Position(line=exc.span.end.line - 1, character=exc.span.end.column - 1)
    return Diagnostic(
        range=Range(start=start, end=end),
        message=exc.message,
        severity=DiagnosticSeverity.Error,
        source="monkey",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Parse the document and publish every accumulated diagnostic."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    try:
        _, errors = parse(doc.source)
    except LexError as exc:
        line = exc.position.line - 1
        col = exc.position.column - 1
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=line, character=col),
                    end=Position(line=line, character=col + 1),
                ),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="monkey",
            )
        )
    else:
        diagnostics.extend(_to_diagnostic(err) for err in errors)

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
