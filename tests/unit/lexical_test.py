"""Unit tests for the per-line rule set."""

import pytest

from lint40.config import Lint40Settings
from lint40.core.lexical import LexicalRuleSet, boolean_suggestion, is_continuation_comment, strip_comments
from lint40.core.modes import Mode
from lint40.models import Diagnostic, Position
from tests.helpers import codes


def check(*lines: str, mode: Mode = Mode.DRAFT) -> list[Diagnostic]:
    return LexicalRuleSet().check_lines(list(lines), mode)


class TestStripComments:
    def test_removes_line_comment(self) -> None:
        assert strip_comments("x = 1; // note") == "x = 1; "

    def test_removes_inline_block_comments(self) -> None:
        assert strip_comments("a /* one */ b /* two */") == "a  b "

    def test_keeps_unterminated_block_comment(self) -> None:
        assert strip_comments("/* open") == "/* open"

    @pytest.mark.parametrize("line", [" *", " * Parameters:", "  *      int a: [DESCRIPTION]", " */", " ***********/"])
    def test_continuation_lines(self, line: str) -> None:
        assert is_continuation_comment(line)

    @pytest.mark.parametrize("line", ["*p = 5;", "        x = *p;", "int a;"])
    def test_code_is_not_continuation(self, line: str) -> None:
        assert not is_continuation_comment(line)


class TestLineLength:
    def test_short_line_not_flagged(self) -> None:
        assert codes(check("int x = 5;"), "line-length") == []

    def test_exactly_80_not_flagged(self) -> None:
        assert codes(check("x" * 80), "line-length") == []

    def test_long_line_flagged_once_with_count(self) -> None:
        line = "int very_long_variable_name = some_very_long_function_name_that_exceeds_eighty_chars();"
        found = codes(check(line), "line-length")
        assert len(found) == 1
        assert f"({len(line)} chars)" in found[0].message
        assert "exceeds 80 characters" in found[0].message
        assert found[0].range.start == Position(row=0, column=80)
        assert found[0].range.end == Position(row=0, column=len(line))

    def test_limit_comes_from_settings(self) -> None:
        rules = LexicalRuleSet(Lint40Settings(max_line_length=10))
        assert len(codes(rules.check_lines(["int abcdef = 1;"], Mode.DRAFT), "line-length")) == 1


class TestTabs:
    def test_every_tab_flagged_with_one_char_range(self) -> None:
        found = codes(check("\tint x;\t"), "tab")
        assert len(found) == 2
        assert [(d.range.start.column, d.range.end.column) for d in found] == [(0, 1), (7, 8)]

    def test_tab_in_comment_only_line_flagged(self) -> None:
        assert len(codes(check("/*\tnote */"), "tab")) == 1


class TestIndentation:
    def test_multiple_of_eight_passes(self) -> None:
        assert codes(check("{", "        x = 1;", "}"), "indent-length") == []

    def test_odd_indent_after_statement_end(self) -> None:
        found = codes(check("{", "   x = 1;", "}"), "indent-length")
        assert len(found) == 1
        assert found[0].range.end == Position(row=1, column=3)

    def test_continuation_line_not_checked(self) -> None:
        assert codes(check("        foo(a,", "            b);"), "indent-length") == []

    def test_blank_line_resets_state(self) -> None:
        found = codes(check("        foo(a,", "", "   x = 1;"), "indent-length")
        assert [d.range.start.row for d in found] == [2]

    def test_first_line_is_checked(self) -> None:
        assert len(codes(check("  int x;"), "indent-length")) == 1


class TestPointerStyle:
    def test_type_star_flagged(self) -> None:
        found = codes(check("int* ptr;"), "pointer-style")
        assert len(found) == 1
        assert (found[0].range.start.column, found[0].range.end.column) == (0, 4)

    def test_star_with_variable_passes(self) -> None:
        assert codes(check("int *ptr;"), "pointer-style") == []

    def test_multiplication_passes(self) -> None:
        assert codes(check("int result = a * b;"), "pointer-style") == []

    def test_every_occurrence(self) -> None:
        assert len(codes(check("void* f(char* s, size_t* n);"), "pointer-style")) == 3

    def test_ignored_inside_comment(self) -> None:
        assert codes(check("x = 1; /* int* p */"), "pointer-style") == []


class TestCommaSpacing:
    def test_missing_spaces(self) -> None:
        assert len(codes(check("func(a,b,c);"), "comma-spacing")) == 2

    def test_spaced_commas(self) -> None:
        assert codes(check("func(a, b, c);"), "comma-spacing") == []

    def test_trailing_comma_at_line_end(self) -> None:
        assert codes(check("int a[] = {1, 2,"), "comma-spacing") == []


class TestForLoopSpacing:
    def test_semicolons_without_space(self) -> None:
        found = codes(check("for (i = 0;i < n;i++) {"), "for-semicolon-spacing")
        assert [d.range.start.column for d in found] == [10, 16]

    def test_spaced_header(self) -> None:
        assert codes(check("for (i = 0; i < n; i++) {"), "for-semicolon-spacing") == []


class TestKeywordSpacing:
    @pytest.mark.parametrize("line", ["if(x > 5)", "for(i = 0; i < 5; i++)", "while(x)"])
    def test_keyword_touching_paren(self, line: str) -> None:
        found = codes(check(line), "keyword-spacing")
        assert len(found) == 1
        assert found[0].range.start.column == 0

    @pytest.mark.parametrize("line", ["if (x > 5)", "for (i = 0; i < 5; i++)", "verify(x);"])
    def test_spaced_keyword(self, line: str) -> None:
        assert codes(check(line), "keyword-spacing") == []


class TestParenSpacing:
    def test_space_after_open(self) -> None:
        assert len(codes(check("foo( a);"), "paren-spacing-after")) == 1

    def test_space_before_close(self) -> None:
        assert len(codes(check("foo(a );"), "paren-spacing-before")) == 1

    def test_tight_parens(self) -> None:
        found = check("foo(a);")
        assert codes(found, "paren-spacing-after") == []
        assert codes(found, "paren-spacing-before") == []


class TestReviewOnlyChecks:
    def test_comment_style_only_in_review(self) -> None:
        assert codes(check("x = 1; // note"), "comment-style") == []
        found = codes(check("x = 1; // note // again", mode=Mode.REVIEW), "comment-style")
        assert [d.range.start.column for d in found] == [7, 15]

    def test_comment_only_line_still_checked(self) -> None:
        assert len(codes(check("// todo", mode=Mode.REVIEW), "comment-style")) == 1

    @pytest.mark.parametrize(
        ("line", "suggestion"),
        [
            ("if (done == false) {", "!done"),
            ("if (done != true) {", "!done"),
            ("if (done == true) {", "done"),
            ("if (done != false) {", "done"),
        ],
    )
    def test_boolean_comparison(self, line: str, suggestion: str) -> None:
        found = codes(check(line, mode=Mode.REVIEW), "boolean-comparison")
        assert len(found) == 1
        assert f"use '{suggestion}'" in found[0].message

    def test_boolean_comparison_not_in_draft(self) -> None:
        assert codes(check("if (done == false) {"), "boolean-comparison") == []

    def test_trailing_whitespace(self) -> None:
        found = codes(check("int x;   ", mode=Mode.REVIEW), "trailing-whitespace")
        assert len(found) == 1
        assert (found[0].range.start.column, found[0].range.end.column) == (6, 9)

    def test_blank_line_with_spaces(self) -> None:
        found = check("int x;", "    ", "int y;", mode=Mode.REVIEW)
        assert [d.range.start.row for d in codes(found, "blank-line-spaces")] == [1]
        assert codes(found, "trailing-whitespace") == []

    def test_empty_line_is_clean(self) -> None:
        assert codes(check("", mode=Mode.REVIEW), "blank-line-spaces") == []

    def test_continuation_comment_lines_skipped_in_review(self) -> None:
        found = check("/* header", " * a,b", " */", mode=Mode.REVIEW)
        assert codes(found, "comma-spacing") == []

    def test_block_comment_body_without_space_after_star(self) -> None:
        found = check("/******* zero *******", " *", " *None", " * Return: [RETURN]", " ******/", mode=Mode.REVIEW)
        assert codes(found, "indent-length") == []

    def test_code_after_block_close_is_checked(self) -> None:
        found = check("/* note", " */ int* p;", mode=Mode.REVIEW)
        assert len(codes(found, "pointer-style")) == 1

    def test_dereference_at_line_start_is_code(self) -> None:
        found = check("{", "        *p = 1,q;", "}", mode=Mode.REVIEW)
        assert len(codes(found, "comma-spacing")) == 1

    def test_block_opener_inside_line_comment(self) -> None:
        found = check("x = 1; // see /* here", "int a,b;", mode=Mode.REVIEW)
        assert len(codes(found, "comma-spacing")) == 1


class TestBooleanSuggestion:
    def test_table(self) -> None:
        assert boolean_suggestion("ok", "==", "false") == "!ok"
        assert boolean_suggestion("ok", "!=", "true") == "!ok"
        assert boolean_suggestion("ok", "==", "true") == "ok"
        assert boolean_suggestion("ok", "!=", "false") == "ok"


class TestModeGating:
    def test_off_produces_nothing(self) -> None:
        assert check("\tint* x,y;", mode=Mode.OFF) == []

    def test_diagnostics_carry_source_and_severity(self) -> None:
        found = check("\tx;")
        assert found
        assert all(d.source == "lint40" for d in found)
        assert all(d.severity.value == "info" for d in found)
