"""Tree-pattern driven style checks."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from tree_sitter import Node

from lint40.config import Lint40Settings
from lint40.core.modes import (
    CONTROL_BRACE_NEWLINE,
    CONTROL_BRACE_SPACING,
    DOCUMENTATION,
    EXCESSIVE_NESTING,
    FUNCTION_BRACE_STYLE,
    MANDATORY_BRACES,
    OPERATOR_SPACING,
)
from lint40.core.positions import PositionMapper, byte_column_to_char, line_range
from lint40.core.syntax import ancestors, find_child_by_type, find_first_descendant, has_ancestor, node_text
from lint40.models import Diagnostic

OPERATORS_NEEDING_SPACES = frozenset(
    {"=", "+", "-", "*", "/", "%", "<", ">", "<=", ">=", "==", "!=", "&&", "||", "?", ":"}
)
COMPOUND_OPERATORS = frozenset({"++", "--", "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=", "<<=", ">>="})
UNARY_OPERATORS = frozenset({"!", "+", "-"})
POINTER_CONTEXTS = frozenset({"pointer_declarator", "parameter_declaration", "declaration"})
INCLUDE_CONTEXTS = frozenset({"preproc_include"})
NESTING_TYPES = frozenset({"if_statement", "for_statement", "while_statement", "do_statement", "switch_statement"})

_SPACING_CHARS = (" ", "\n", "\r")


@dataclass
class SourceContext:
    """Text, lines and offset mapping for one pass."""

    text: str
    lines: list[str] = field(init=False)
    mapper: PositionMapper = field(init=False)

    def __post_init__(self) -> None:
        self.lines = self.text.split("\n")
        self.mapper = PositionMapper(self.text)

    def line(self, row: int) -> str | None:
        if 0 <= row < len(self.lines):
            return self.lines[row]
        return None

    def offset(self, point: tuple[int, int]) -> int:
        row, byte_column = point
        line = self.line(row)
        column = byte_column_to_char(line, byte_column) if line is not None else byte_column
        return self.mapper.offset_of(row, column)

    def char_at(self, offset: int) -> str:
        if 0 <= offset < len(self.text):
            return self.text[offset]
        return ""


def should_skip_operator(operator: Node, text: str) -> bool:
    if text in COMPOUND_OPERATORS:
        return True
    parent = operator.parent
    if parent is not None and parent.type == "unary_expression" and text in UNARY_OPERATORS:
        return True
    if text in ("<", ">") and has_ancestor(operator, INCLUDE_CONTEXTS):
        return True
    return text == "*" and has_ancestor(operator, POINTER_CONTEXTS)


def nesting_depth(node: Node) -> int:
    return 1 + sum(1 for a in ancestors(node) if a.type in NESTING_TYPES)


def _diagnostic(ctx: SourceContext, start: int, end: int, message: str, code: str) -> Diagnostic:
    return Diagnostic(range=ctx.mapper.range_of(start, end), message=message, code=code)


def _line_diagnostic(ctx: SourceContext, row: int, message: str, code: str) -> Diagnostic:
    line = ctx.line(row) or ""
    return Diagnostic(range=line_range(row, 0, len(line)), message=message, code=code)


class StructuralRuleSet:
    def __init__(self, settings: Lint40Settings | None = None) -> None:
        self.settings = settings or Lint40Settings()

    # -- operator spacing -------------------------------------------------

    def check_operator_spacing(self, ctx: SourceContext, hosts: Iterable[Node]) -> list[Diagnostic]:
        found: list[tuple[int, Diagnostic]] = []
        for host in hosts:
            for child in host.children:
                if child.is_named:
                    continue
                operator = node_text(child)
                if operator not in OPERATORS_NEEDING_SPACES or should_skip_operator(child, operator):
                    continue
                start = ctx.offset(child.start_point)
                end = ctx.offset(child.end_point)
                if ctx.char_at(start - 1) in _SPACING_CHARS and ctx.char_at(end) in _SPACING_CHARS:
                    continue
                found.append(
                    (
                        start,
                        _diagnostic(
                            ctx, start, end, f"Operator '{operator}' should have spaces on both sides", OPERATOR_SPACING
                        ),
                    )
                )
        found.sort(key=lambda item: item[0])
        return [d for _, d in found]

    # -- braces -----------------------------------------------------------

    def check_function_braces(self, ctx: SourceContext, functions: Iterable[Node]) -> list[Diagnostic]:
        diagnostics = []
        for func in functions:
            body = find_child_by_type(func, "compound_statement")
            if body is None:
                continue
            declarator = find_first_descendant(func, "function_declarator", skip=frozenset({"compound_statement"}))
            signature_row = declarator.end_point[0] if declarator is not None else func.start_point[0]
            if body.start_point[0] in (func.start_point[0], signature_row):
                brace = ctx.offset(body.start_point)
                diagnostics.append(
                    _diagnostic(
                        ctx,
                        brace,
                        brace + 1,
                        "Function opening brace should be on its own line (Linus style)",
                        FUNCTION_BRACE_STYLE,
                    )
                )
        return diagnostics

    def check_control_braces(self, ctx: SourceContext, statements: Iterable[Node]) -> list[Diagnostic]:
        diagnostics = []
        for stmt in statements:
            body = find_child_by_type(stmt, "compound_statement")
            if body is None:
                diagnostics.append(
                    _diagnostic(
                        ctx,
                        ctx.offset(stmt.start_point),
                        ctx.offset(stmt.end_point),
                        "Always use curly braces for control structures, even single statements",
                        MANDATORY_BRACES,
                    )
                )
                continue

            brace = ctx.offset(body.start_point)
            if body.start_point[0] != stmt.start_point[0]:
                diagnostics.append(
                    _diagnostic(
                        ctx,
                        brace,
                        brace + 1,
                        "Control structure opening brace should be on the same line",
                        CONTROL_BRACE_NEWLINE,
                    )
                )
            elif brace > 0 and ctx.char_at(brace - 1) != " ":
                diagnostics.append(_diagnostic(ctx, brace, brace + 1, "Put a space before '{'", CONTROL_BRACE_SPACING))
        return diagnostics

    # -- nesting ----------------------------------------------------------

    def check_nesting(self, ctx: SourceContext, statements: Iterable[Node]) -> list[Diagnostic]:
        limit = self.settings.max_nesting_depth
        diagnostics = []
        for stmt in statements:
            depth = nesting_depth(stmt)
            if depth <= limit:
                continue
            start = ctx.offset(stmt.start_point)
            keyword = stmt.children[0] if stmt.children else stmt
            diagnostics.append(
                _diagnostic(
                    ctx,
                    start,
                    ctx.offset(keyword.end_point),
                    f"Nesting depth {depth} exceeds the maximum of {limit}",
                    EXCESSIVE_NESTING,
                )
            )
        return diagnostics

    # -- documentation ----------------------------------------------------

    def check_file_header(self, ctx: SourceContext) -> list[Diagnostic]:
        if ctx.text.strip().startswith("/*"):
            return []
        return [_line_diagnostic(ctx, 0, "File missing a header comment", DOCUMENTATION)]

    def check_function_docs(self, ctx: SourceContext, functions: Iterable[Node]) -> list[Diagnostic]:
        diagnostics = []
        for func in functions:
            row = func.start_point[0]
            previous = ctx.line(row - 1) if row > 0 else None
            if previous is not None and previous.strip().endswith("**/"):
                continue
            diagnostics.append(_line_diagnostic(ctx, row, "Function missing a contract", DOCUMENTATION))
        return diagnostics

    def check_struct_docs(self, ctx: SourceContext, structs: Iterable[Node]) -> list[Diagnostic]:
        diagnostics = []
        for struct in structs:
            row = struct.start_point[0]
            previous = ctx.line(row - 1) if row > 0 else None
            if previous is not None and previous.strip() == "*/":
                continue
            diagnostics.append(_line_diagnostic(ctx, row, "Struct missing documentation", DOCUMENTATION))
        return diagnostics
