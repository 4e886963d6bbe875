"""Shared fixtures and helpers for tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from tree_sitter import Language, Parser, Query
from tree_sitter_language_pack import get_language, get_parser

from lint40.config import Lint40Settings
from lint40.core.engine import RuleEngine
from lint40.core.session import LintSession
from lint40.workspace.memory import InMemoryDiagnosticsSink

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def queries_dir() -> Path:
    """Return the path to the queries directory."""
    return _REPO_ROOT / "src" / "lint40" / "queries"


@pytest.fixture
def c_parser() -> Parser:
    """Return a tree-sitter parser for C."""
    return get_parser("c")


@pytest.fixture
def c_language() -> Language:
    """Return the tree-sitter C language."""
    return get_language("c")


@pytest.fixture
def c_lint_query(c_language: Language, queries_dir: Path) -> Query:
    """Return the compiled structural lint query for C."""
    return Query(c_language, (queries_dir / "c_lint.scm").read_text())


@pytest.fixture
def settings() -> Lint40Settings:
    return Lint40Settings()


@pytest.fixture
def engine(settings: Lint40Settings) -> RuleEngine:
    return RuleEngine(settings)


@pytest.fixture
def sink() -> InMemoryDiagnosticsSink:
    return InMemoryDiagnosticsSink()


@pytest.fixture
def session(engine: RuleEngine, sink: InMemoryDiagnosticsSink) -> LintSession:
    return LintSession(engine, sink)


class GrammarUnavailable(Exception):
    """Stands in for the error the language pack raises when it cannot provide a grammar."""


@pytest.fixture
def missing_grammar(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Make the C grammar fail to load for the duration of a test."""
    from lint40.core import syntax

    def unavailable(_name: str) -> None:
        raise GrammarUnavailable("grammar 'c' could not be downloaded")

    syntax._grammar.cache_clear()
    syntax.load_query.cache_clear()
    monkeypatch.setattr(syntax, "get_parser", unavailable)
    yield
    syntax._grammar.cache_clear()
    syntax.load_query.cache_clear()
