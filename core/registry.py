# core/registry.py
# This file is part of InfoBool - A cached boolean rule engine
#
# Shared table of cached rules, deduplicated by context and text

"""Registry that hands out one cached rule per (context, text) pair.

Skins tend to repeat the same visibility rule on many controls. Registering
a rule that is already known returns the existing instance, so its value is
computed once per frame no matter how many controls use it. The match is
textual: ``"a + b"`` and ``"b + a"`` are two different rules.

Text made of a single condition name becomes a ConditionLeaf; anything else
is compiled into an ExpressionInstance.
"""

from __future__ import annotations
from typing import Any, Iterator, List, Optional

from expr import ConditionLookup, ConditionResolver, is_compound
from utils.logger import get_logger
from .cached_bool import CachedBool
from .condition_leaf import ConditionLeaf
from .expression_instance import ExpressionInstance


class RuleRegistry:
    """Deduplicating factory and owner of cached rules.

    Attributes:
        resolver: Resolver given to every rule created here
        lookup: Name lookup given to every rule created here
        fallback: Value for expressions that do not compile
    """

    def __init__(
        self,
        resolver: ConditionResolver,
        lookup: ConditionLookup,
        fallback: bool = False,
    ):
        self.resolver = resolver
        self.lookup = lookup
        self.fallback = fallback
        self._rules: List[CachedBool] = []

    def register(self, expression: str, context: int = 0) -> Optional[CachedBool]:
        """Return the rule for the given text and context, creating it if needed.

        Args:
            expression: Rule text
            context: Scope id of the rule (e.g. the window it belongs to)

        Returns:
            Shared CachedBool instance, or None for empty text
        """
        text = expression.strip()
        if not text:
            return None

        for rule in self._rules:
            if rule.context == context and rule.source_text == text:
                return rule

        if is_compound(text):
            new_rule: CachedBool = ExpressionInstance(
                text, context, self.resolver, self.lookup, fallback=self.fallback
            )
        else:
            new_rule = ConditionLeaf(text, context, self.resolver, self.lookup)

        self._rules.append(new_rule)
        get_logger().debug(
            f"Registered {type(new_rule).__name__} '{text}' (context {context}), "
            f"{len(self._rules)} rules in registry"
        )
        return new_rule

    def get(self, expression: str, context: int, frame_time: int, item: Any = None) -> bool:
        """Register the rule if necessary and return its value for this frame."""
        rule = self.register(expression, context)
        if rule is None:
            return self.fallback
        return rule.get(frame_time, item)

    def clear(self) -> None:
        self._rules.clear()

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[CachedBool]:
        return iter(self._rules)

    def __contains__(self, rule: object) -> bool:
        return rule in self._rules
