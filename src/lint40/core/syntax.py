"""tree-sitter access: parsing, query loading and node navigation shared by the rules and the generator."""

from __future__ import annotations

import functools
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import cast

from tree_sitter import Language, Node, Parser, Query, QueryCursor, Tree
from tree_sitter_language_pack import SupportedLanguage, get_language, get_parser

LANGUAGE = "c"

# Guard for parent-pointer walks on malformed trees.
MAX_ANCESTOR_DEPTH = 512


class ParseError(RuntimeError):
    """Raised when no usable syntax tree can be produced for a source text."""


class CaptureKind(Enum):
    FUNCTION_DEF = "def.func"
    STRUCT_SPEC = "def.struct"
    CONTROL_STMT = "ctrl.brace"
    NESTING_STMT = "ctrl.nest"
    OPERATOR_HOST = "expr.operator"


@dataclass(frozen=True)
class Capture:
    kind: CaptureKind
    node: Node


QUERIES_DIR = Path(__file__).resolve().parent.parent / "queries"


@functools.lru_cache(maxsize=1)
def _grammar() -> tuple[Language, Parser]:
    name = cast(SupportedLanguage, LANGUAGE)
    try:
        return get_language(name), get_parser(name)
    except Exception as exc:
        # The language pack signals a missing or undownloadable grammar with its own error types.
        raise ParseError(f"C grammar unavailable: {exc}") from exc


@functools.lru_cache(maxsize=None)
def load_query(query_type: str) -> Query:
    """Compile ``queries/c_<query_type>.scm`` against the C grammar."""
    path = QUERIES_DIR / f"{LANGUAGE}_{query_type}.scm"
    if not path.is_file():
        raise FileNotFoundError(f"Query file not found: {path}")
    language, _ = _grammar()
    return Query(language, path.read_text(encoding="utf-8"))


def parse_source(text: str) -> Tree:
    _, parser = _grammar()
    try:
        tree = parser.parse(text.encode("utf-8"))
    except (LookupError, ValueError, OSError) as exc:
        raise ParseError(f"Unable to parse C source: {exc}") from exc
    if tree is None or tree.root_node is None:
        raise ParseError("Parser returned no syntax tree")
    return tree


def collect_captures(root: Node, query_type: str = "lint") -> list[Capture]:
    """Run a query file and return its captures as tagged variants in document order.

    Capture names that do not correspond to a ``CaptureKind`` are ignored.
    """
    cursor = QueryCursor(load_query(query_type))
    captures: list[Capture] = []
    for name, nodes in cursor.captures(root).items():
        try:
            kind = CaptureKind(name)
        except ValueError:
            continue
        captures.extend(Capture(kind, node) for node in nodes)
    captures.sort(key=lambda c: (c.node.start_byte, -c.node.end_byte))
    return captures


def of_kind(captures: list[Capture], kind: CaptureKind) -> list[Node]:
    return [c.node for c in captures if c.kind is kind]


def node_text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def find_child_by_type(node: Node, node_type: str) -> Node | None:
    for child in node.children:
        if child.type == node_type:
            return child
    return None


def find_first_descendant(node: Node, node_type: str, skip: frozenset[str] = frozenset()) -> Node | None:
    """Depth-first, pre-order search below ``node``; subtrees rooted at a type in ``skip`` are not entered."""
    stack = list(reversed(node.children))
    while stack:
        current = stack.pop()
        if current.type == node_type:
            return current
        if current.type in skip:
            continue
        stack.extend(reversed(current.children))
    return None


def ancestors(node: Node, limit: int = MAX_ANCESTOR_DEPTH) -> Iterator[Node]:
    current = node.parent
    steps = 0
    while current is not None and steps < limit:
        yield current
        current = current.parent
        steps += 1


def has_ancestor(node: Node, types: frozenset[str]) -> bool:
    return any(a.type in types for a in ancestors(node))
