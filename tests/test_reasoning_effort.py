"""Tests for reasoning effort conversion."""

import pytest

from thinkgate_core.thinking import (
    ReasoningEffortConverter,
    get_global_converter,
    set_global_converter,
)


@pytest.fixture
def converter(registry):
    return ReasoningEffortConverter(registry=registry)


class TestEffortToBudget:

    @pytest.mark.parametrize("effort,expected", [
        ("low", 2048),
        ("medium", 8192),
        ("HIGH", 16384),
        (" none ", 0),
        ("off", 0),
        ("auto", -1),
        ("dynamic", -1),
    ])
    def test_known_levels(self, converter, effort, expected):
        assert converter.effort_to_budget(effort) == expected

    def test_unknown_level_uses_medium(self, converter, caplog):
        with caplog.at_level("WARNING"):
            assert converter.effort_to_budget("extreme") == 8192
        assert "Unknown reasoning_effort" in caplog.text

    def test_custom_mapping_merges_defaults(self, registry):
        converter = ReasoningEffortConverter(effort_budgets={"high": 32000}, registry=registry)
        assert converter.effort_to_budget("high") == 32000
        assert converter.effort_to_budget("low") == 2048


class TestBudgetToEffort:

    @pytest.mark.parametrize("budget,expected", [
        (-1, "auto"),
        (0, "none"),
        (1, "low"),
        (2048, "low"),
        (2049, "medium"),
        (16383, "medium"),
        (16384, "high"),
        (100000, "high"),
    ])
    def test_thresholds(self, converter, budget, expected):
        assert converter.budget_to_effort(budget) == expected


class TestResolveBudget:

    def test_explicit_budget_wins(self, converter):
        assert converter.resolve_budget("range-10-100", reasoning_effort="high", budget=50) == 50

    def test_effort_is_normalized(self, converter):
        assert converter.resolve_budget("range-10-100", reasoning_effort="high") == 100
        assert converter.resolve_budget("zero-forbidden", reasoning_effort="none") == 5
        assert converter.resolve_budget("dynamic-ok", reasoning_effort="auto") == -1

    def test_default_budget(self, registry):
        converter = ReasoningEffortConverter(default_budget=4096, registry=registry)
        assert converter.resolve_budget("dynamic-ok") == 4096
        assert converter.resolve_budget("range-10-100") == 100
        assert converter.resolve_budget("unknown-model") == 4096

    def test_requested_budget_precedence(self, registry):
        converter = ReasoningEffortConverter(default_budget=4096, registry=registry)
        assert converter.requested_budget("high", 0) == 0
        assert converter.requested_budget("high") == 16384
        assert converter.requested_budget("", None) == 4096
        assert converter.requested_budget() == 4096

    def test_unknown_model_passthrough(self, converter):
        assert converter.resolve_budget("unknown-model", reasoning_effort="low") == 2048


class TestGlobalConverter:

    def test_set_and_get(self):
        previous = get_global_converter()
        custom = ReasoningEffortConverter(default_budget=1)
        try:
            set_global_converter(custom)
            assert get_global_converter() is custom
        finally:
            set_global_converter(previous)
