"""Operating modes and the rule codes each mode enables."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    OFF = "off"
    DRAFT = "draft"
    REVIEW = "review"

    @classmethod
    def parse(cls, value: str) -> Mode:
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown mode '{value}'. Supported: {[m.value for m in cls]}") from None

    @property
    def label(self) -> str:
        return self.value.capitalize()


_NEXT_MODE = {
    Mode.DRAFT: Mode.REVIEW,
    Mode.REVIEW: Mode.OFF,
    Mode.OFF: Mode.DRAFT,
}

# Rule codes
OPERATOR_SPACING = "operator-spacing"
FUNCTION_BRACE_STYLE = "function-brace-style"
MANDATORY_BRACES = "mandatory-braces"
CONTROL_BRACE_NEWLINE = "control-brace-newline"
CONTROL_BRACE_SPACING = "control-brace-spacing"
EXCESSIVE_NESTING = "excessive-nesting"
DOCUMENTATION = "documentation"
INDENT_LENGTH = "indent-length"
LINE_LENGTH = "line-length"
TAB = "tab"
POINTER_STYLE = "pointer-style"
COMMA_SPACING = "comma-spacing"
FOR_SEMICOLON_SPACING = "for-semicolon-spacing"
KEYWORD_SPACING = "keyword-spacing"
PAREN_SPACING_AFTER = "paren-spacing-after"
PAREN_SPACING_BEFORE = "paren-spacing-before"
COMMENT_STYLE = "comment-style"
BOOLEAN_COMPARISON = "boolean-comparison"
TRAILING_WHITESPACE = "trailing-whitespace"
BLANK_LINE_SPACES = "blank-line-spaces"

DRAFT_RULES: frozenset[str] = frozenset(
    {
        OPERATOR_SPACING,
        FUNCTION_BRACE_STYLE,
        MANDATORY_BRACES,
        CONTROL_BRACE_NEWLINE,
        CONTROL_BRACE_SPACING,
        INDENT_LENGTH,
        LINE_LENGTH,
        TAB,
        POINTER_STYLE,
        COMMA_SPACING,
        FOR_SEMICOLON_SPACING,
        KEYWORD_SPACING,
        PAREN_SPACING_AFTER,
        PAREN_SPACING_BEFORE,
    }
)

REVIEW_RULES: frozenset[str] = DRAFT_RULES | {
    DOCUMENTATION,
    EXCESSIVE_NESTING,
    BLANK_LINE_SPACES,
    TRAILING_WHITESPACE,
    COMMENT_STYLE,
    BOOLEAN_COMPARISON,
}


def enabled_rules(mode: Mode) -> frozenset[str]:
    if mode is Mode.REVIEW:
        return REVIEW_RULES
    if mode is Mode.DRAFT:
        return DRAFT_RULES
    return frozenset()


ModeListener = Callable[[Mode, Mode], None]


class ModeController:
    """Cycles Draft -> Review -> Off -> Draft and notifies listeners of every change.

    Listeners receive ``(previous, current)``; the session uses them to clear or
    re-lint documents.
    """

    def __init__(self, initial: Mode = Mode.DRAFT) -> None:
        self._mode = initial
        self._listeners: list[ModeListener] = []

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def enabled(self) -> bool:
        return self._mode is not Mode.OFF

    def subscribe(self, listener: ModeListener) -> None:
        self._listeners.append(listener)

    def toggle(self) -> Mode:
        previous = self._mode
        self._mode = _NEXT_MODE[previous]
        logger.info("Mode changed from %s to %s", previous.label, self._mode.label)
        for listener in self._listeners:
            listener(previous, self._mode)
        return self._mode

    def rules(self) -> frozenset[str]:
        return enabled_rules(self._mode)

    def is_enabled(self, code: str) -> bool:
        return code in enabled_rules(self._mode)

    def status_label(self) -> str:
        return f"lint40: {self._mode.label}"
