"""Minimal LSP server for format-spec files — diagnostics only.

A format-spec file holds one spec per line. Blank lines and lines starting
with '#' are ignored.
"""

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

from scanln import __version__
from scanln.errors import FormatError
from scanln.parser import parse

server = LanguageServer("scanln-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def spec_lines(source: str) -> list[tuple[int, str]]:
    """Return (0-based line number, spec) for every line holding a spec."""
    result = []
    for i, line in enumerate(source.splitlines()):
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        result.append((i, line))
    return result


def _diagnostic(line: int, exc: FormatError) -> Diagnostic:
    return Diagnostic(
        range=Range(
            start=Position(line=line, character=exc.span.start),
            end=Position(line=line, character=max(exc.span.end, exc.span.start + 1)),
        ),
        message=exc.message,
        severity=DiagnosticSeverity.Error,
        source="scanln",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Compile every spec in the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    for line, spec in spec_lines(doc.source):
        try:
            parse(spec)
        except FormatError as exc:
            diagnostics.append(_diagnostic(line, exc))

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
