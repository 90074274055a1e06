# core/cached_bool.py
# This file is part of InfoBool - A cached boolean rule engine
#
# Frame-cached boolean base class for conditions and expressions

"""Base class wrapping a boolean rule with a per-frame cache.

A rule is typically queried many times while one frame is drawn. CachedBool
refreshes its value at most once per distinct frame timestamp and serves the
cached value for every other query in that frame, so all widgets drawn in a
frame see the same answer.

Rules whose value depends on the list item being drawn cannot share that
cache. When such a rule is queried with an item it is evaluated for that
item on every call and the frame cache, value included, is left alone.

Cache states:
    STALE: never refreshed, or explicitly invalidated
    FRESH: value belongs to the frame stored in last_update_time
"""

from __future__ import annotations
from enum import Enum, auto
from typing import Any, Optional

from utils.logger import get_logger


class CacheState(Enum):
    """Freshness of a CachedBool value."""

    STALE = auto()
    FRESH = auto()

    def __str__(self) -> str:
        return self.name


class CachedBool:
    """Boolean rule with a frame-coherent cache.

    Subclasses implement update(); callers only use get().

    Attributes:
        value: Last computed value, False until the first update
        context: Opaque scope id handed to the resolver
        list_item_dependent: Value may differ per list item
        last_update_time: Frame timestamp of the last cached refresh
        state: CacheState of value
    """

    def __init__(self, expression: str, context: int = 0):
        self.value = False
        self.context = context
        self.list_item_dependent = False
        self.last_update_time: Optional[int] = None
        self.state = CacheState.STALE
        self._expression = expression.strip()

    @property
    def source_text(self) -> str:
        """Rule text this instance was built from."""
        return self._expression

    def get(self, frame_time: int, item: Any = None) -> bool:
        """Return the value of the rule, refreshing it if required.

        Args:
            frame_time: Current frame counter or timestamp
            item: List item the rule is evaluated for, if any

        Returns:
            Current value of the rule
        """
        if item is not None and self.list_item_dependent:
            # The per-item result must not replace the value cached for the frame
            frame_value = self.value
            self.update(item)
            item_value, self.value = self.value, frame_value
            get_logger().item_refresh(self._expression, item_value)
            return item_value
        elif self.state is CacheState.STALE or frame_time != self.last_update_time:
            self.update(None)
            self.last_update_time = frame_time
            self.state = CacheState.FRESH
            get_logger().frame_refresh(self._expression, frame_time, self.value)
        return self.value

    def invalidate(self) -> None:
        """Force the next get() to refresh, even within the same frame."""
        self.state = CacheState.STALE

    def update(self, item: Any = None) -> None:
        """Recompute value, optionally for a list item.

        Called by get() only when the cached value cannot be used.
        """
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CachedBool):
            return NotImplemented
        return self.context == other.context and self._expression == other._expression

    def __hash__(self) -> int:
        return hash((self.context, self._expression))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._expression!r}, context={self.context}, "
            f"value={self.value}, state={self.state})"
        )
