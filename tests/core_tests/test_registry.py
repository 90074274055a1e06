# tests/core_tests/test_registry.py
# This file is part of InfoBool - A cached boolean rule engine
#
# Test suite for the deduplicating rule registry

"""Test suite for RuleRegistry.

Registering the same text in the same context must hand back the same
instance, so a rule shared by many controls is evaluated once per frame.
"""

import pytest
from core import ConditionLeaf, ExpressionInstance, RuleRegistry


class TestRuleRegistry:
    """Registration, deduplication and factory choice."""

    @pytest.fixture
    def registry(self, table, recorder):
        return RuleRegistry(recorder, table)

    def test_single_name_becomes_condition_leaf(self, registry):
        assert isinstance(registry.register("a"), ConditionLeaf)

    def test_expression_becomes_expression_instance(self, registry):
        assert isinstance(registry.register("a + b"), ExpressionInstance)
        assert isinstance(registry.register("!a"), ExpressionInstance)

    def test_same_text_and_context_deduplicated(self, registry):
        first = registry.register("a + b", context=1)
        second = registry.register("  a + b ", context=1)

        assert first is second
        assert len(registry) == 1

    def test_different_context_registers_new_rule(self, registry):
        first = registry.register("a + b", context=1)
        second = registry.register("a + b", context=2)

        assert first is not second
        assert len(registry) == 2

    def test_textual_not_semantic_dedup(self, registry):
        first = registry.register("a + b")
        second = registry.register("b + a")

        assert first is not second
        assert first != second

    def test_empty_text(self, registry):
        assert registry.register("   ") is None
        assert len(registry) == 0

    def test_shared_rule_evaluated_once_per_frame(self, registry, recorder):
        for _ in range(5):
            assert registry.get("a + c", context=0, frame_time=1) is True

        assert recorder.calls == ["a", "c"]

    def test_get_empty_rule_returns_fallback(self, table, recorder):
        registry = RuleRegistry(recorder, table, fallback=True)

        assert registry.get("", context=0, frame_time=1) is True

    def test_malformed_rule_uses_registry_fallback(self, table, recorder, parse_failures):
        registry = RuleRegistry(recorder, table, fallback=True)
        rule = registry.register("a + (b")

        assert rule.get(1) is True
        assert registry.register("a + (b") is rule
        assert len(parse_failures) == 1

    def test_iteration_contains_and_clear(self, registry):
        leaf = registry.register("a")
        expression = registry.register("a | b")

        assert list(registry) == [leaf, expression]
        assert expression in registry

        registry.clear()
        assert len(registry) == 0
        assert leaf not in registry

    def test_condition_with_arguments_is_single_leaf(self, make_table):
        conditions = make_table({"skin.hassetting(foo)": True})
        registry = RuleRegistry(conditions, conditions)

        rule = registry.register("skin.hassetting(foo)")

        assert isinstance(rule, ConditionLeaf)
        assert registry.get("skin.hassetting(foo)", context=0, frame_time=1) is True
