"""Per-line text checks run on comment-stripped working copies of each line."""

from __future__ import annotations

import re
from collections.abc import Sequence

from lint40.config import Lint40Settings
from lint40.core.modes import (
    BLANK_LINE_SPACES,
    BOOLEAN_COMPARISON,
    COMMA_SPACING,
    COMMENT_STYLE,
    FOR_SEMICOLON_SPACING,
    INDENT_LENGTH,
    KEYWORD_SPACING,
    LINE_LENGTH,
    PAREN_SPACING_AFTER,
    PAREN_SPACING_BEFORE,
    POINTER_STYLE,
    TAB,
    TRAILING_WHITESPACE,
    Mode,
    enabled_rules,
)
from lint40.core.positions import line_range
from lint40.models import Diagnostic

_LINE_COMMENT = re.compile(r"//.*$")
_BLOCK_COMMENT = re.compile(r"/\*.*?\*/")
_CONTINUATION_COMMENT = re.compile(r"^\s*\*(\s.*)?$|^\s*\*+/?\s*$")
_LEADING_SPACES = re.compile(r"^ +")
_STATEMENT_END = re.compile(r"[;{})]\s*$")

_POINTER_STYLE = re.compile(r"\b(int|char|float|double|FILE|void|size_t)\*")
_COMMA = re.compile(r",(?!\s)")
_FOR_HEADER = re.compile(r"for\s*\(([^)]*)\)")
_KEYWORD_PAREN = re.compile(r"\b(if|for|while)\(")
_SPACE_AFTER_OPEN = re.compile(r"\( +(?=\S)")
_SPACE_BEFORE_CLOSE = re.compile(r"(?<=\S) +\)")
_DOUBLE_SLASH = re.compile(r"//")
_BOOLEAN_COMPARISON = re.compile(r"(\w+)\s*(==|!=)\s*(true|false)\b")
_TRAILING_WHITESPACE = re.compile(r"\s+$")
_BLANK_WITH_SPACES = re.compile(r"^\s+$")

_NEGATED = {("==", "false"), ("!=", "true")}


def strip_comments(line: str) -> str:
    cleaned = _LINE_COMMENT.sub("", line)
    return _BLOCK_COMMENT.sub("", cleaned)


def is_continuation_comment(line: str) -> bool:
    """Whether the line is a `` * ...`` line from the body of a block comment."""
    return bool(_CONTINUATION_COMMENT.match(line))


def split_block_comment(line: str, in_block: bool) -> tuple[str, bool]:
    """Return the code part of ``line`` and whether a ``/* ... */`` block is still open after it.

    ``in_block`` says whether the line starts inside a block opened on an earlier line.
    """
    if in_block:
        end = line.find("*/")
        if end == -1:
            return "", True
        line = line[end + 2 :]
    code = _BLOCK_COMMENT.sub("", line)
    opening = code.find("/*")
    line_comment = code.find("//")
    if opening != -1 and (line_comment == -1 or opening < line_comment):
        return code[:opening], True
    return _LINE_COMMENT.sub("", code), False


def boolean_suggestion(name: str, operator: str, value: str) -> str:
    return f"!{name}" if (operator, value) in _NEGATED else name


class LexicalRuleSet:
    def __init__(self, settings: Lint40Settings | None = None) -> None:
        self.settings = settings or Lint40Settings()

    def check_lines(self, lines: Sequence[str], mode: Mode) -> list[Diagnostic]:
        rules = enabled_rules(mode)
        if not rules:
            return []
        diagnostics: list[Diagnostic] = []
        prev_line_ends = True
        in_block = False

        for row, raw in enumerate(lines):
            line = raw[:-1] if raw.endswith("\r") else raw
            if mode is Mode.REVIEW:
                clean, in_block = split_block_comment(line, in_block)
                if is_continuation_comment(clean):
                    clean = ""
            else:
                clean = strip_comments(line)

            diagnostics.extend(self._raw_line_checks(line, row, rules))

            if clean.strip() == "":
                prev_line_ends = True
                continue

            if prev_line_ends and INDENT_LENGTH in rules:
                diagnostics.extend(self.check_indentation(line, row))
            diagnostics.extend(self._clean_line_checks(clean, row, rules))

            prev_line_ends = bool(_STATEMENT_END.search(clean.strip()))

        return diagnostics

    def _raw_line_checks(self, line: str, row: int, rules: frozenset[str]) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        if LINE_LENGTH in rules:
            diagnostics.extend(self.check_line_length(line, row))
        if TAB in rules:
            diagnostics.extend(check_tabs(line, row))
        if COMMENT_STYLE in rules:
            diagnostics.extend(check_comment_style(line, row))
        if line.strip():
            if TRAILING_WHITESPACE in rules:
                diagnostics.extend(check_trailing_whitespace(line, row))
        elif BLANK_LINE_SPACES in rules:
            diagnostics.extend(check_blank_line_spaces(line, row))
        return diagnostics

    def _clean_line_checks(self, clean: str, row: int, rules: frozenset[str]) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        if POINTER_STYLE in rules:
            diagnostics.extend(check_pointer_style(clean, row))
        if PAREN_SPACING_AFTER in rules or PAREN_SPACING_BEFORE in rules:
            diagnostics.extend(d for d in check_paren_spacing(clean, row) if d.code in rules)
        if COMMA_SPACING in rules:
            diagnostics.extend(check_comma_spacing(clean, row))
        if FOR_SEMICOLON_SPACING in rules:
            diagnostics.extend(check_for_loop_spacing(clean, row))
        if KEYWORD_SPACING in rules:
            diagnostics.extend(check_keyword_spacing(clean, row))
        if BOOLEAN_COMPARISON in rules:
            diagnostics.extend(check_boolean_comparisons(clean, row))
        return diagnostics

    def check_indentation(self, line: str, row: int) -> list[Diagnostic]:
        width = self.settings.indent_width
        match = _LEADING_SPACES.match(line)
        if match is None or len(match.group(0)) % width == 0:
            return []
        return [
            Diagnostic(
                range=line_range(row, 0, len(match.group(0))),
                message=f"Each level of indentation must be {width} characters",
                code=INDENT_LENGTH,
            )
        ]

    def check_line_length(self, line: str, row: int) -> list[Diagnostic]:
        limit = self.settings.max_line_length
        if len(line) <= limit:
            return []
        return [
            Diagnostic(
                range=line_range(row, limit, len(line)),
                message=f"Line exceeds {limit} characters ({len(line)} chars)",
                code=LINE_LENGTH,
            )
        ]


def check_tabs(line: str, row: int) -> list[Diagnostic]:
    return [
        Diagnostic(
            range=line_range(row, index, index + 1),
            message="Your code must not contain tab characters.",
            code=TAB,
        )
        for index, char in enumerate(line)
        if char == "\t"
    ]


def check_pointer_style(clean: str, row: int) -> list[Diagnostic]:
    return [
        Diagnostic(
            range=line_range(row, m.start(), m.end()),
            message="Declare pointers the Linux way: place the asterisk with the variable, not the type.",
            code=POINTER_STYLE,
        )
        for m in _POINTER_STYLE.finditer(clean)
    ]


def check_comma_spacing(clean: str, row: int) -> list[Diagnostic]:
    return [
        Diagnostic(
            range=line_range(row, m.start(), m.end()),
            message="Put a space after every comma.",
            code=COMMA_SPACING,
        )
        for m in _COMMA.finditer(clean)
        if m.end() != len(clean)
    ]


def check_for_loop_spacing(clean: str, row: int) -> list[Diagnostic]:
    diagnostics = []
    for m in _FOR_HEADER.finditer(clean):
        inside = m.group(1)
        inside_start = m.start(1)
        for index, char in enumerate(inside):
            if char != ";" or index + 1 >= len(inside):
                continue
            if inside[index + 1] in (" ", ")"):
                continue
            column = inside_start + index
            diagnostics.append(
                Diagnostic(
                    range=line_range(row, column, column + 1),
                    message="Put a space after semicolons in 'for' loop headers.",
                    code=FOR_SEMICOLON_SPACING,
                )
            )
    return diagnostics


def check_keyword_spacing(clean: str, row: int) -> list[Diagnostic]:
    return [
        Diagnostic(
            range=line_range(row, m.start(), m.end()),
            message=f"Put a space between '{m.group(1)}' and '('.",
            code=KEYWORD_SPACING,
        )
        for m in _KEYWORD_PAREN.finditer(clean)
    ]


def check_paren_spacing(clean: str, row: int) -> list[Diagnostic]:
    diagnostics = [
        Diagnostic(
            range=line_range(row, m.start(), m.end()),
            message="Remove space immediately after (",
            code=PAREN_SPACING_AFTER,
        )
        for m in _SPACE_AFTER_OPEN.finditer(clean)
    ]
    diagnostics.extend(
        Diagnostic(
            range=line_range(row, m.start(), m.end()),
            message="Remove space immediately before )",
            code=PAREN_SPACING_BEFORE,
        )
        for m in _SPACE_BEFORE_CLOSE.finditer(clean)
    )
    return diagnostics


def check_comment_style(line: str, row: int) -> list[Diagnostic]:
    return [
        Diagnostic(
            range=line_range(row, m.start(), m.end()),
            message="Replace // with /* */ comments. Check for commented-out code.",
            code=COMMENT_STYLE,
        )
        for m in _DOUBLE_SLASH.finditer(line)
    ]


def check_boolean_comparisons(clean: str, row: int) -> list[Diagnostic]:
    diagnostics = []
    for m in _BOOLEAN_COMPARISON.finditer(clean):
        suggestion = boolean_suggestion(m.group(1), m.group(2), m.group(3))
        diagnostics.append(
            Diagnostic(
                range=line_range(row, m.start(), m.end()),
                message=f"Simplify boolean check: use '{suggestion}' instead of '{m.group(0)}'",
                code=BOOLEAN_COMPARISON,
            )
        )
    return diagnostics


def check_trailing_whitespace(line: str, row: int) -> list[Diagnostic]:
    match = _TRAILING_WHITESPACE.search(line)
    if match is None:
        return []
    return [
        Diagnostic(
            range=line_range(row, match.start(), match.end()),
            message="Remove trailing whitespace.",
            code=TRAILING_WHITESPACE,
        )
    ]


def check_blank_line_spaces(line: str, row: int) -> list[Diagnostic]:
    if not _BLANK_WITH_SPACES.match(line):
        return []
    return [
        Diagnostic(
            range=line_range(row, 0, len(line)),
            message="Blank lines must not contain whitespace.",
            code=BLANK_LINE_SPACES,
        )
    ]
