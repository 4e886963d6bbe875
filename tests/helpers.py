"""Small helpers shared by the test modules."""

from lint40.core.engine import RuleEngine
from lint40.core.modes import Mode
from lint40.models import Diagnostic


def codes(diagnostics: list[Diagnostic], code: str) -> list[Diagnostic]:
    return [d for d in diagnostics if d.code == code]


def lint(source: str, mode: Mode = Mode.DRAFT) -> list[Diagnostic]:
    return RuleEngine().lint(source, mode)


def in_function(*body: str) -> str:
    """Wrap statements (already indented) in a well-formed function definition."""
    return "void f(void)\n{\n" + "".join(line + "\n" for line in body) + "}\n"
