# core/condition_leaf.py
# This file is part of InfoBool - A cached boolean rule engine
#
# Cached rule made of a single condition

from __future__ import annotations
from typing import Any, Optional

from expr import ConditionLookup, ConditionResolver
from utils.logger import get_logger
from .cached_bool import CachedBool


class ConditionLeaf(CachedBool):
    """Rule consisting of one condition name, resolved without a tree.

    The name is looked up once at construction. An unknown name is reported
    once and the rule then always evaluates to False.

    Attributes:
        condition_id: Id returned by the lookup, None if the name is unknown
    """

    def __init__(
        self,
        condition: str,
        context: int,
        resolver: ConditionResolver,
        lookup: ConditionLookup,
    ):
        super().__init__(condition, context)
        self._resolver = resolver
        self.condition_id: Optional[int] = lookup.lookup(self.source_text)

        if self.condition_id is None:
            get_logger().unknown_condition(self.source_text, context)
        else:
            self.list_item_dependent = lookup.is_item_dependent(self.condition_id)

    def update(self, item: Any = None) -> None:
        if self.condition_id is None:
            self.value = False
            return
        self.value = bool(self._resolver.resolve(self.condition_id, self.context, item))
