# expr/compiler.py
# This file is part of InfoBool - A cached boolean rule engine
#
# Operator-precedence compiler from rule text to evaluation trees

"""Operator-precedence compiler for boolean rule expressions.

Rule text is tokenized by RuleLexer and compiled in a single left-to-right
pass with an operator stack and a value stack (shunting-yard). Values are
partially built evaluation trees.

Operator Precedence (lowest to highest):
- ( : fence, only removed by the matching )
- ) : closes the innermost group
- OR ('|', 'or')
- AND ('+', '&', 'and')
- NOT ('!', 'not')

NOT is not a node. It toggles a pending-invert flag that is stamped onto the
leaves created while it is on the operator stack, and AND/OR popped while the
flag is set are swapped for their dual. That makes ``!a + b`` mean
``(!a) + b`` and ``![a + b]`` mean ``!a | !b``.

Binary operators of the same kind are flattened into one group, keeping
children in textual order.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Protocol

from utils.logger import LogLevel, get_logger
from .exceptions import ExpressionSyntaxError, UnknownConditionError
from .lexer import RuleLexer
from .tree_nodes import Combinator, Group, Leaf, Node, render


class ConditionLookup(Protocol):
    def lookup(self, name: str) -> Optional[int]: ...

    def is_item_dependent(self, condition_id: int) -> bool: ...


class Operator(IntEnum):
    """Stacked operators, ordered by binding strength."""

    LPAREN = 1
    RPAREN = 2
    OR = 3
    AND = 4
    NOT = 5


_TOKEN_OPERATORS = {
    "LPAREN": Operator.LPAREN,
    "RPAREN": Operator.RPAREN,
    "OR": Operator.OR,
    "AND": Operator.AND,
    "NOT": Operator.NOT,
}

# Operators that may only appear where an operand is expected
_PREFIX_OPERATORS = (Operator.NOT, Operator.LPAREN)

# Closing bracket -> the opening bracket it pairs with
_BRACKET_PAIRS = {")": "(", "]": "["}


@dataclass(frozen=True, slots=True)
class CompiledExpression:
    """Result of a successful compilation.

    Attributes:
        root: Root node of the evaluation tree
        item_dependent: At least one condition varies per list item
    """

    root: Node
    item_dependent: bool = False


@dataclass(slots=True)
class ParseContext:
    """Transient state of one compilation, discarded afterwards."""

    text: str
    operators: List[Operator] = field(default_factory=list)
    values: List[Node] = field(default_factory=list)
    invert: bool = False
    expect_operand: bool = True
    brackets: List[str] = field(default_factory=list)
    item_dependent: bool = False


class ExpressionCompiler:
    """Compiles rule text into evaluation trees.

    Operand names are turned into condition ids through the lookup at compile
    time. One compiler can be reused for any number of expressions; all
    per-expression state lives in a ParseContext.

    Attributes:
        lookup: Name to condition id resolver
    """

    def __init__(self, lookup: ConditionLookup):
        self.lookup = lookup

    def compile(self, text: str) -> CompiledExpression:
        """Compile rule text into an evaluation tree.

        Args:
            text: Rule expression, e.g. ``"player.playing + !(a | b)"``

        Returns:
            CompiledExpression holding the tree root

        Raises:
            ExpressionSyntaxError: Text is not a well-formed expression
            UnknownConditionError: An operand is not known to the lookup
        """
        logger = get_logger()
        logger.debug(f"Compiling expression: {text}")

        ctx = ParseContext(text)
        for token in RuleLexer().tokenize(text):
            if token.type == "ID":
                self._process_operand(ctx, token)
            else:
                self._process_operator(ctx, _TOKEN_OPERATORS[token.type], token)

        if ctx.brackets:
            raise ExpressionSyntaxError(
                f"Unmatched '{ctx.brackets[-1]}' at end of expression", len(text)
            )
        if ctx.expect_operand:
            if not ctx.values and not ctx.operators:
                raise ExpressionSyntaxError("Empty expression", 0)
            raise ExpressionSyntaxError("Missing operand at end of expression", len(text))

        while ctx.operators:
            self._pop_operator(ctx)

        if len(ctx.values) != 1:
            raise ExpressionSyntaxError(
                f"Malformed expression: {len(ctx.values)} values left after compilation"
            )

        root = ctx.values[0]
        if logger.is_enabled(LogLevel.DEBUG):
            logger.debug(f"Compiled '{text}' into {render(root)}")
        return CompiledExpression(root, ctx.item_dependent)

    def _process_operand(self, ctx: ParseContext, token) -> None:
        if not ctx.expect_operand:
            raise ExpressionSyntaxError(
                f"Missing operator before '{token.value}' at position {token.index}",
                token.index,
            )

        condition_id = self.lookup.lookup(token.value)
        if condition_id is None:
            raise UnknownConditionError(token.value)

        if self.lookup.is_item_dependent(condition_id):
            ctx.item_dependent = True

        ctx.values.append(Leaf(condition_id, ctx.invert))
        ctx.expect_operand = False

    def _process_operator(self, ctx: ParseContext, op: Operator, token) -> None:
        if (op in _PREFIX_OPERATORS) != ctx.expect_operand:
            raise ExpressionSyntaxError(
                f"Misplaced '{token.value}' at position {token.index}", token.index
            )

        if op is Operator.LPAREN:
            ctx.brackets.append(token.value)
        elif op is Operator.RPAREN:
            if not ctx.brackets:
                raise ExpressionSyntaxError(
                    f"Unmatched '{token.value}' at position {token.index}", token.index
                )
            opener = ctx.brackets.pop()
            if opener != _BRACKET_PAIRS[token.value]:
                raise ExpressionSyntaxError(
                    f"Mismatched '{token.value}' at position {token.index}, "
                    f"opened with '{opener}'",
                    token.index,
                )

        # Everything binding tighter than the new operator is complete now.
        # For ')' this stops with the matching '(' on top.
        if op is not Operator.LPAREN:
            while ctx.operators and ctx.operators[-1] > op:
                self._pop_operator(ctx)

        if op is Operator.RPAREN:
            ctx.operators.pop()
        else:
            ctx.operators.append(op)

        if op is Operator.NOT:
            ctx.invert = not ctx.invert

        ctx.expect_operand = op is not Operator.RPAREN

    def _pop_operator(self, ctx: ParseContext) -> None:
        op = ctx.operators.pop()
        if op is Operator.NOT:
            ctx.invert = not ctx.invert
            return

        # Only AND and OR remain here
        combinator = Combinator.AND if op is Operator.AND else Combinator.OR
        if ctx.invert:
            combinator = combinator.swapped()

        if len(ctx.values) < 2:
            raise ExpressionSyntaxError(f"Missing operand for '{combinator.value}'")

        right = ctx.values.pop()
        left = ctx.values.pop()
        ctx.values.append(self._combine(combinator, left, right))

    @staticmethod
    def _combine(combinator: Combinator, left: Node, right: Node) -> Group:
        left_same = isinstance(left, Group) and left.combinator is combinator
        right_same = isinstance(right, Group) and right.combinator is combinator

        if left_same and right_same:
            left.merge(right)
            _log_group("Merged groups", left)
            return left
        if left_same:
            left.add_child(right)
            _log_group("Appended to group", left)
            return left
        if right_same:
            right.prepend_child(left)
            _log_group("Prepended to group", right)
            return right

        group = Group(combinator, [left, right])
        _log_group("New group", group)
        return group


def _log_group(description: str, group: Group) -> None:
    # render() walks the whole group
    logger = get_logger()
    if logger.is_enabled(LogLevel.DEBUG):
        logger.group_combined(description, render(group))


def is_compound(text: str) -> bool:
    """Return True unless the text is exactly one condition name.

    Text the lexer rejects counts as compound so that it goes through the
    compiler and gets reported.
    """
    try:
        tokens = list(RuleLexer().tokenize(text))
    except ExpressionSyntaxError:
        return True
    return not (len(tokens) == 1 and tokens[0].type == "ID")
