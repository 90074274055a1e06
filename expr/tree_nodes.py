# expr/tree_nodes.py
# This file is part of InfoBool - A cached boolean rule engine
#
# Evaluation tree nodes for compiled rule expressions

"""Evaluation tree produced by the rule compiler.

A compiled rule is a tree built from exactly two node kinds:

    Leaf: one condition id, optionally inverted
    Group: an associative AND or OR over an ordered list of children

Negation only ever lives on leaves. A NOT in front of a parenthesised group
is pushed down to the leaves by the compiler (De Morgan), so the evaluator
never needs a NOT node.

Groups are flattened while compiling: ``a + b + c`` is one AND group with
three children. Children are kept in textual order, which is the order they
are evaluated in.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional, Protocol, Union


class Combinator(Enum):
    """Connective of a group node."""

    AND = "+"
    OR = "|"

    def swapped(self) -> Combinator:
        """Return the De Morgan dual of this connective."""
        return Combinator.OR if self is Combinator.AND else Combinator.AND


class ConditionResolver(Protocol):
    def resolve(self, condition_id: int, context: int, item: Any = None) -> bool: ...


@dataclass(frozen=True, slots=True)
class Leaf:
    """A single condition reference.

    Attributes:
        condition_id: Id handed to the resolver
        invert: Negate the resolved value
    """

    condition_id: int
    invert: bool = False


@dataclass(slots=True)
class Group:
    """Associative AND/OR over an ordered list of children.

    The list is only modified by the compiler through add_child,
    prepend_child and merge. An empty group is the constant tree: an empty
    AND is True and an empty OR is False.

    Attributes:
        combinator: AND or OR
        children: Owned child nodes in evaluation order
    """

    combinator: Combinator
    children: List[Node] = field(default_factory=list)

    def add_child(self, child: Node) -> None:
        self.children.append(child)

    def prepend_child(self, child: Node) -> None:
        self.children.insert(0, child)

    def merge(self, other: Group) -> None:
        """Move all children of another group of the same kind to the end of this one."""
        if other.combinator is not self.combinator:
            raise ValueError(
                f"Cannot merge {other.combinator.name} group into {self.combinator.name} group"
            )
        self.children.extend(other.children)
        other.children = []


Node = Union[Leaf, Group]


def constant_tree(value: bool) -> Group:
    """Build a tree that evaluates to a fixed value without resolver calls."""
    return Group(Combinator.AND if value else Combinator.OR)


def evaluate(node: Node, resolver: ConditionResolver, context: int, item: Any = None) -> bool:
    """Evaluate a tree with left-to-right short-circuiting.

    An AND group stops at the first false child and an OR group at the first
    true child; the remaining children are never resolved.

    Args:
        node: Root of the tree (or subtree) to evaluate
        resolver: Source of condition values
        context: Opaque scope id forwarded to the resolver
        item: Optional list item forwarded to the resolver

    Returns:
        Truth value of the tree

    Raises:
        TypeError: node is not a Leaf or Group
    """
    if isinstance(node, Leaf):
        return bool(resolver.resolve(node.condition_id, context, item)) != node.invert

    if isinstance(node, Group):
        # A AND B == !(!A OR !B): one loop serves both connectives
        is_and = node.combinator is Combinator.AND
        for child in node.children:
            if evaluate(child, resolver, context, item) != is_and:
                return not is_and
        return is_and

    raise TypeError(f"Unknown evaluation node type: {type(node).__name__}")


def render(node: Node, name_of: Optional[Callable[[int], Optional[str]]] = None) -> str:
    """Return a canonical textual form of a tree for diagnostics.

    Leaves are written as their condition name when name_of knows it,
    otherwise as ``#id``. Groups are always parenthesised.
    """
    if isinstance(node, Leaf):
        name = name_of(node.condition_id) if name_of else None
        label = name if name is not None else f"#{node.condition_id}"
        return f"!{label}" if node.invert else label

    if isinstance(node, Group):
        if not node.children:
            return "true" if node.combinator is Combinator.AND else "false"
        separator = f" {node.combinator.value} "
        return "(" + separator.join(render(child, name_of) for child in node.children) + ")"

    raise TypeError(f"Unknown evaluation node type: {type(node).__name__}")
