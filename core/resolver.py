# core/resolver.py
# This file is part of InfoBool - A cached boolean rule engine
#
# Condition lookup and resolution interfaces plus an in-memory condition table

"""Interfaces to the system that knows what each condition means.

Rules never decide the truth of a condition themselves. They hold integer
condition ids and ask a resolver for the current value, handing over the
rule's context and, for list rules, the item being drawn.

ConditionTable is a self-contained implementation of both interfaces backed
by plain callables. It is what the command-line tool and the tests use; an
embedding application would usually provide its own.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional

from expr import ConditionLookup, ConditionResolver
from utils.logger import get_logger

ConditionFunc = Callable[[int, Any], bool]


@dataclass(frozen=True, slots=True)
class _Condition:
    name: str
    func: ConditionFunc
    item_dependent: bool


class ConditionTable:
    """Registry of named conditions, usable as resolver and lookup.

    Names are case-insensitive. Ids are assigned from 1 upwards in
    registration order and never reused.

    Example:
        >>> table = ConditionTable()
        >>> playing = table.set_value("player.playing", True)
        >>> table.resolve(playing, context=0)
        True
    """

    def __init__(self):
        self._ids: Dict[str, int] = {}
        self._conditions: List[_Condition] = []

    def register(self, name: str, func: ConditionFunc, item_dependent: bool = False) -> int:
        """Register or replace a condition.

        Args:
            name: Condition name as used in rule text
            func: Called as func(context, item) to obtain the value
            item_dependent: Value differs per list item

        Returns:
            Condition id (unchanged when the name was already registered)
        """
        key = name.strip().lower()
        if not key:
            raise ValueError("Condition name must not be empty")

        condition = _Condition(key, func, item_dependent)
        condition_id = self._ids.get(key)
        if condition_id is None:
            self._conditions.append(condition)
            condition_id = len(self._conditions)
            self._ids[key] = condition_id
            get_logger().debug(f"Registered condition '{key}' as #{condition_id}")
        else:
            self._conditions[condition_id - 1] = condition
        return condition_id

    def set_value(self, name: str, value: bool) -> int:
        """Register a condition with a constant value."""
        return self.register(name, lambda context, item: value)

    def lookup(self, name: str) -> Optional[int]:
        return self._ids.get(name.strip().lower())

    def is_item_dependent(self, condition_id: int) -> bool:
        return self._get(condition_id).item_dependent

    def resolve(self, condition_id: int, context: int, item: Any = None) -> bool:
        """Return the current value of a condition.

        Conditions that are not item dependent never see the item.

        Raises:
            KeyError: condition_id was not issued by this table
        """
        condition = self._get(condition_id)
        return bool(condition.func(context, item if condition.item_dependent else None))

    def name_of(self, condition_id: int) -> Optional[str]:
        if 1 <= condition_id <= len(self._conditions):
            return self._conditions[condition_id - 1].name
        return None

    def names(self) -> List[str]:
        return [condition.name for condition in self._conditions]

    def __len__(self) -> int:
        return len(self._conditions)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def _get(self, condition_id: int) -> _Condition:
        if not 1 <= condition_id <= len(self._conditions):
            raise KeyError(f"Unknown condition id: {condition_id}")
        return self._conditions[condition_id - 1]


__all__ = ["ConditionTable", "ConditionFunc", "ConditionLookup", "ConditionResolver"]
