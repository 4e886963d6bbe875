"""Unit tests for the mode state machine and rule gating."""

import pytest

from lint40.core.modes import (
    BOOLEAN_COMPARISON,
    DOCUMENTATION,
    DRAFT_RULES,
    EXCESSIVE_NESTING,
    OPERATOR_SPACING,
    PAREN_SPACING_AFTER,
    REVIEW_RULES,
    Mode,
    ModeController,
    enabled_rules,
)


class TestModeController:
    def test_initial_mode_is_draft(self) -> None:
        assert ModeController().mode is Mode.DRAFT

    def test_toggle_cycles_draft_review_off(self) -> None:
        controller = ModeController()
        assert controller.toggle() is Mode.REVIEW
        assert controller.toggle() is Mode.OFF
        assert controller.toggle() is Mode.DRAFT

    @pytest.mark.parametrize("start", list(Mode))
    def test_three_toggles_are_identity(self, start: Mode) -> None:
        controller = ModeController(start)
        for _ in range(3):
            controller.toggle()
        assert controller.mode is start

    def test_listeners_receive_previous_and_current(self) -> None:
        controller = ModeController()
        seen: list[tuple[Mode, Mode]] = []
        controller.subscribe(lambda prev, cur: seen.append((prev, cur)))
        controller.toggle()
        controller.toggle()
        assert seen == [(Mode.DRAFT, Mode.REVIEW), (Mode.REVIEW, Mode.OFF)]

    def test_enabled_reflects_off(self) -> None:
        controller = ModeController(Mode.REVIEW)
        assert controller.enabled
        controller.toggle()
        assert not controller.enabled
        assert controller.rules() == frozenset()

    def test_status_label(self) -> None:
        controller = ModeController()
        assert controller.status_label() == "lint40: Draft"
        controller.toggle()
        assert controller.status_label() == "lint40: Review"

    def test_is_enabled(self) -> None:
        controller = ModeController()
        assert controller.is_enabled(OPERATOR_SPACING)
        assert not controller.is_enabled(DOCUMENTATION)


class TestRuleGating:
    def test_review_is_superset_of_draft(self) -> None:
        assert DRAFT_RULES < REVIEW_RULES

    def test_review_only_rules(self) -> None:
        assert {DOCUMENTATION, EXCESSIVE_NESTING, BOOLEAN_COMPARISON} <= enabled_rules(Mode.REVIEW)
        assert not {DOCUMENTATION, EXCESSIVE_NESTING, BOOLEAN_COMPARISON} & enabled_rules(Mode.DRAFT)

    def test_paren_padding_is_always_on(self) -> None:
        assert PAREN_SPACING_AFTER in enabled_rules(Mode.DRAFT)

    def test_off_has_no_rules(self) -> None:
        assert enabled_rules(Mode.OFF) == frozenset()


class TestModeParse:
    def test_parse_is_case_insensitive(self) -> None:
        assert Mode.parse(" Review ") is Mode.REVIEW

    def test_parse_rejects_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown mode"):
            Mode.parse("strict")
