"""Documentation skeletons: file headers, function contracts and struct docs.

Contracts and struct docs are computed for every entity first and then inserted
bottom to top in a single batch, so the rows of entities that have not been
written yet never move. The file header is a single insertion at the top.
"""

from __future__ import annotations

import logging
import re
from datetime import date

from tree_sitter import Node

from lint40.core.lexical import strip_comments
from lint40.core.ports.document import Document
from lint40.core.syntax import (
    CaptureKind,
    ParseError,
    collect_captures,
    find_child_by_type,
    find_first_descendant,
    node_text,
    of_kind,
    parse_source,
)
from lint40.models import GenerationKind, GenerationReport, Position, TextEdit

logger = logging.getLogger(__name__)

UNKNOWN_FUNCTION = "unknown_function"
UNKNOWN_FILE = "unknown.c"

_NOTE_PATTERNS = [
    re.compile(r"\bassert\s*\([^)]+\)"),
    re.compile(r"\b(?:malloc|calloc|realloc)\s*\([^)]+\)"),
    re.compile(r"\bfree\s*\([^)]+\)"),
    re.compile(r"\b[A-Z][a-zA-Z]*_(?:new|free)\s*\([^)]*\)"),
    re.compile(r"\b(?:exit|abort)\s*\([^)]*\)"),
]

_MESSAGES = {
    GenerationKind.FILE_HEADER: (
        "File header generated! Fill in the bracketed sections.",
        "File already has a header comment",
    ),
    GenerationKind.FUNCTION_CONTRACTS: (
        "Function contracts generated! Fill in the bracketed sections.",
        "All functions already have contracts",
    ),
    GenerationKind.STRUCT_DOCS: (
        "Struct documentation generated! Fill in the bracketed sections.",
        "All structs are already documented",
    ),
}


# ---------------------------------------------------------------------------
# Tree inspection
# ---------------------------------------------------------------------------


def _function_declarator(func: Node) -> Node | None:
    return find_first_descendant(func, "function_declarator", skip=frozenset({"compound_statement"}))


def function_name(func: Node) -> str:
    declarator = _function_declarator(func)
    if declarator is None:
        return UNKNOWN_FUNCTION
    inner = declarator.child_by_field_name("declarator")
    if inner is None or inner.type != "identifier":
        inner = find_child_by_type(declarator, "identifier")
    return node_text(inner) or UNKNOWN_FUNCTION


def function_params(func: Node) -> list[str]:
    declarator = _function_declarator(func)
    if declarator is None:
        return []
    param_list = find_child_by_type(declarator, "parameter_list")
    if param_list is None:
        return []
    params = [node_text(child) for child in param_list.children if child.type == "parameter_declaration"]
    if len(params) == 1 and params[0].strip() == "void":
        return []
    return params


def contract_notes(func: Node) -> list[str]:
    body = find_child_by_type(func, "compound_statement")
    source = node_text(body if body is not None else func)
    text = "\n".join(strip_comments(line) for line in source.split("\n"))

    notes: list[str] = []
    for pattern in _NOTE_PATTERNS:
        for match in pattern.finditer(text):
            note = " ".join(match.group(0).split())
            if note not in notes:
                notes.append(note)
    return notes


def struct_name(struct: Node) -> str:
    return node_text(struct.child_by_field_name("name"))


def struct_fields(struct: Node) -> list[str]:
    field_list = find_child_by_type(struct, "field_declaration_list")
    if field_list is None:
        return []
    return [
        node_text(child).strip().removesuffix(";").rstrip()
        for child in field_list.children
        if child.type == "field_declaration"
    ]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _section(entries: list[str], template: str) -> str:
    if not entries:
        return "None"
    return "".join(template.format(entry) + "\n *" for entry in entries)


def render_contract(name: str, params: list[str], notes: list[str]) -> str:
    return "\n".join(
        [
            f"/******* {name} *******",
            " *",
            " * [PURPOSE]",
            " *",
            " * Parameters:",
            " *" + _section(params, "      {}: [DESCRIPTION]"),
            " * Return: [RETURN]",
            " *",
            " * Expects: [EXPECTS]",
            " *",
            " * Notes:",
            " *" + _section(notes, '      [NOTE "{}"]'),
            " *********" + "*" * len(name) + "********/",
        ]
    )


def render_struct_doc(name: str, fields: list[str]) -> str:
    members = "".join(f"      {field}: [DESCRIPTION]\n *" for field in fields)
    return "\n".join(
        [
            f"/* {name}",
            " *",
            " * [DESCRIPTION]",
            " *",
            " * Members:",
            " *" + members,
            " * Invariants: [DESCRIBE INVARIANTS]",
            " *",
            " */",
        ]
    )


def format_date(day: date) -> str:
    return f"{day.month}/{day.day}/{day.year}"


def render_file_header(file_name: str, day: date) -> str:
    border = "*" * 62
    return "\n".join(
        [
            "/" + border,
            " *",
            f" *                     {file_name}",
            " *",
            " *      Assignment: [ASSIGNMENT]",
            " *      Authors: [YOUR NAMES]",
            f" *      Date: {format_date(day)}",
            " *",
            " *      [PURPOSE]",
            " *",
            " " + border + "/",
            "",
            "",
        ]
    )


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


def _report(kind: GenerationKind, edits: list[TextEdit]) -> GenerationReport:
    done, already = _MESSAGES[kind]
    return GenerationReport(kind=kind, generated=len(edits), edits=edits, message=done if edits else already)


def _previous_line(document: Document, row: int) -> str | None:
    if row <= 0:
        return None
    return document.line_at(row - 1).strip()


def _apply(document: Document, edits: list[TextEdit]) -> list[TextEdit]:
    ordered = sorted(edits, key=lambda e: (e.position.row, e.position.column), reverse=True)
    if ordered:
        document.apply_edits(ordered)
    return ordered


class TemplateGenerator:
    def generate(self, kind: GenerationKind, document: Document | None) -> GenerationReport:
        if kind is GenerationKind.FILE_HEADER:
            return self.generate_file_header(document)
        if kind is GenerationKind.FUNCTION_CONTRACTS:
            return self.generate_function_contracts(document)
        return self.generate_struct_docs(document)

    def generate_function_contracts(self, document: Document | None) -> GenerationReport:
        kind = GenerationKind.FUNCTION_CONTRACTS
        if document is None:
            return GenerationReport(kind=kind, message="No active document")
        functions = self._entities(document, CaptureKind.FUNCTION_DEF)

        edits = []
        for func in functions:
            row = func.start_point[0]
            previous = _previous_line(document, row)
            if previous is not None and previous.endswith("**/"):
                continue
            block = render_contract(function_name(func), function_params(func), contract_notes(func))
            edits.append(TextEdit(position=Position(row=row, column=0), text=block + "\n"))

        logger.debug("Generating %d contract(s) for %s", len(edits), document.uri)
        return _report(kind, _apply(document, edits))

    def generate_struct_docs(self, document: Document | None) -> GenerationReport:
        kind = GenerationKind.STRUCT_DOCS
        if document is None:
            return GenerationReport(kind=kind, message="No active document")
        structs = self._entities(document, CaptureKind.STRUCT_SPEC)

        edits = []
        for struct in structs:
            row = struct.start_point[0]
            if _previous_line(document, row) == "*/":
                continue
            block = render_struct_doc(struct_name(struct), struct_fields(struct))
            edits.append(TextEdit(position=Position(row=row, column=0), text=block + "\n"))

        logger.debug("Generating %d struct doc(s) for %s", len(edits), document.uri)
        return _report(kind, _apply(document, edits))

    def generate_file_header(self, document: Document | None, today: date | None = None) -> GenerationReport:
        kind = GenerationKind.FILE_HEADER
        if document is None:
            return GenerationReport(kind=kind, message="No active document")
        if document.line_at(0).strip().startswith("/**"):
            return _report(kind, [])

        header = render_file_header(document.file_name or UNKNOWN_FILE, today or date.today())
        return _report(kind, _apply(document, [TextEdit(position=Position(row=0, column=0), text=header)]))

    def _entities(self, document: Document, kind: CaptureKind) -> list[Node]:
        try:
            tree = parse_source(document.text)
        except ParseError:
            logger.warning("Parsing failed for %s; nothing generated", document.uri, exc_info=True)
            return []
        return of_kind(collect_captures(tree.root_node), kind)
