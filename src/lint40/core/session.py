from __future__ import annotations

import logging

from lint40.core.engine import RuleEngine
from lint40.core.modes import Mode, ModeController
from lint40.core.ports.diagnostics import DiagnosticsSink
from lint40.core.ports.document import Document
from lint40.models import Diagnostic

logger = logging.getLogger(__name__)


class LintSession:
    """Per-session context: the current mode, the open C documents and their published diagnostics."""

    def __init__(self, engine: RuleEngine, sink: DiagnosticsSink, mode: Mode = Mode.DRAFT) -> None:
        self.engine = engine
        self.sink = sink
        self.modes = ModeController(mode)
        self.documents: dict[str, Document] = {}
        self.modes.subscribe(self._on_mode_change)

    @property
    def mode(self) -> Mode:
        return self.modes.mode

    def open(self, document: Document) -> list[Diagnostic]:
        self.documents[document.uri] = document
        return self.lint(document)

    def close(self, uri: str) -> None:
        self.documents.pop(uri, None)
        self.sink.delete(uri)

    def lint(self, document: Document) -> list[Diagnostic]:
        if not self.modes.enabled:
            return []
        diagnostics = self.engine.lint_document(document, self.mode)
        self.sink.set(document.uri, diagnostics)
        return diagnostics

    def lint_all(self) -> int:
        total = 0
        for document in list(self.documents.values()):
            total += len(self.lint(document))
        return total

    def toggle(self) -> Mode:
        return self.modes.toggle()

    def status_label(self) -> str:
        return self.modes.status_label()

    def _on_mode_change(self, previous: Mode, current: Mode) -> None:
        if current is Mode.OFF:
            self.sink.clear()
            logger.info("Cleared diagnostics for all documents")
            return
        total = self.lint_all()
        logger.info("Re-linted %d document(s) in %s mode (%d diagnostic(s))", len(self.documents), current.label, total)
