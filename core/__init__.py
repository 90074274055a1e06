# core/__init__.py
# This file is part of InfoBool - A cached boolean rule engine
#
# Core module public API for cached UI rules

"""Cached boolean rules for UI visibility and enablement.

A rule is created once from its text and a context, then queried with
get(frame_time, item) every time a control is drawn. The value is refreshed
at most once per frame unless the rule depends on the list item it is asked
about.

Primary Components:
    CachedBool: Frame-cached base class and its CacheState
    ConditionLeaf: Rule made of one condition name
    ExpressionInstance: Rule compiled from a boolean expression
    RuleRegistry: Deduplicating owner of rules
    ConditionTable: In-memory condition lookup and resolver

Example:
    >>> from core import ConditionTable, RuleRegistry
    >>> table = ConditionTable()
    >>> table.set_value("player.playing", True)
    >>> table.set_value("window.busy", False)
    >>> registry = RuleRegistry(table, table)
    >>> registry.get("player.playing + !window.busy", context=0, frame_time=1)
    True
"""

from .cached_bool import CachedBool, CacheState
from .condition_leaf import ConditionLeaf
from .expression_instance import ExpressionInstance
from .registry import RuleRegistry
from .resolver import ConditionTable

__all__ = [
    "CachedBool",
    "CacheState",
    "ConditionLeaf",
    "ExpressionInstance",
    "RuleRegistry",
    "ConditionTable",
]

__version__ = "1.0.0"
__description__ = "Frame-cached boolean rules for UI conditions"
