"""Runs the structural and lexical rule sets against one source text."""

from __future__ import annotations

import logging

from lint40.config import Lint40Settings
from lint40.core.lexical import LexicalRuleSet
from lint40.core.modes import (
    CONTROL_BRACE_NEWLINE,
    DOCUMENTATION,
    EXCESSIVE_NESTING,
    FUNCTION_BRACE_STYLE,
    OPERATOR_SPACING,
    Mode,
    enabled_rules,
)
from lint40.core.ports.document import Document
from lint40.core.structural import SourceContext, StructuralRuleSet
from lint40.core.syntax import Capture, CaptureKind, ParseError, collect_captures, of_kind, parse_source
from lint40.models import Diagnostic

logger = logging.getLogger(__name__)


class DiagnosticSet:
    """Ordered collection that drops exact duplicates."""

    def __init__(self) -> None:
        self._items: dict[tuple[str, object, str], Diagnostic] = {}

    def extend(self, diagnostics: list[Diagnostic]) -> None:
        for diagnostic in diagnostics:
            key = (diagnostic.code, diagnostic.range, diagnostic.message)
            self._items.setdefault(key, diagnostic)

    def __len__(self) -> int:
        return len(self._items)

    def to_list(self) -> list[Diagnostic]:
        return list(self._items.values())


class RuleEngine:
    def __init__(self, settings: Lint40Settings | None = None) -> None:
        self.settings = settings or Lint40Settings()
        self.structural = StructuralRuleSet(self.settings)
        self.lexical = LexicalRuleSet(self.settings)

    def lint_document(self, document: Document, mode: Mode) -> list[Diagnostic]:
        return self.lint(document.text, mode)

    def lint(self, text: str, mode: Mode) -> list[Diagnostic]:
        if mode is Mode.OFF:
            return []

        rules = enabled_rules(mode)
        ctx = SourceContext(text)
        result = DiagnosticSet()

        captures: list[Capture] | None
        try:
            captures = collect_captures(parse_source(text).root_node)
        except ParseError:
            logger.warning("Parsing failed; running line checks only", exc_info=True)
            captures = None

        if DOCUMENTATION in rules:
            result.extend(self.structural.check_file_header(ctx))

        if captures is not None:
            self._run_structural(ctx, captures, rules, result)

        result.extend(self.lexical.check_lines(ctx.lines, mode))
        logger.debug("Lint pass (%s) produced %d diagnostic(s)", mode.label, len(result))
        return result.to_list()

    def _run_structural(
        self, ctx: SourceContext, captures: list[Capture], rules: frozenset[str], result: DiagnosticSet
    ) -> None:
        functions = of_kind(captures, CaptureKind.FUNCTION_DEF)

        if DOCUMENTATION in rules:
            result.extend(self.structural.check_function_docs(ctx, functions))
            result.extend(self.structural.check_struct_docs(ctx, of_kind(captures, CaptureKind.STRUCT_SPEC)))
        if EXCESSIVE_NESTING in rules:
            result.extend(self.structural.check_nesting(ctx, of_kind(captures, CaptureKind.NESTING_STMT)))
        if OPERATOR_SPACING in rules:
            result.extend(self.structural.check_operator_spacing(ctx, of_kind(captures, CaptureKind.OPERATOR_HOST)))
        if FUNCTION_BRACE_STYLE in rules:
            result.extend(self.structural.check_function_braces(ctx, functions))
        if CONTROL_BRACE_NEWLINE in rules:
            result.extend(self.structural.check_control_braces(ctx, of_kind(captures, CaptureKind.CONTROL_STMT)))
