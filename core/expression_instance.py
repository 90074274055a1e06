# core/expression_instance.py
# This file is part of InfoBool - A cached boolean rule engine
#
# Cached rule backed by a compiled boolean expression

from __future__ import annotations
from typing import Any, Optional

from expr import (
    ConditionLookup,
    ConditionResolver,
    ParseError,
    compile_expression,
    constant_tree,
    evaluate,
    render,
)
from utils.logger import get_logger
from .cached_bool import CachedBool


class ExpressionInstance(CachedBool):
    """Rule built from a boolean expression over several conditions.

    The expression is compiled exactly once, here. If it does not compile,
    the failure is logged once and the rule is given a constant tree that
    always yields the fallback value, so a broken rule never interrupts
    drawing. Pass strict=True to get the ParseError instead.

    The rule is list item dependent as soon as one of its conditions is.

    Attributes:
        error: The compilation failure, None if the expression compiled
        fallback: Value used when the expression does not compile
    """

    def __init__(
        self,
        expression: str,
        context: int,
        resolver: ConditionResolver,
        lookup: ConditionLookup,
        fallback: bool = False,
        strict: bool = False,
    ):
        super().__init__(expression, context)
        self._resolver = resolver
        self.fallback = fallback
        self.error: Optional[ParseError] = None

        try:
            compiled = compile_expression(self.source_text, lookup)
        except ParseError as exc:
            if strict:
                raise
            self.error = exc
            self._tree = constant_tree(fallback)
            get_logger().parse_failure(self.source_text, context, str(exc), fallback)
        else:
            self._tree = compiled.root
            self.list_item_dependent = compiled.item_dependent

    @property
    def tree(self):
        """Root node of the compiled evaluation tree."""
        return self._tree

    @property
    def is_valid(self) -> bool:
        return self.error is None

    def update(self, item: Any = None) -> None:
        self.value = evaluate(self._tree, self._resolver, self.context, item)

    def describe(self, name_of=None) -> str:
        """Return the compiled tree in canonical text form."""
        return render(self._tree, name_of)
