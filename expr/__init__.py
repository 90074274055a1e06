# expr/__init__.py
# This file is part of InfoBool - A cached boolean rule engine
#
# Rule expression parsing and compilation components

"""Boolean rule compilation for UI visibility and enablement conditions.

Turns rule text such as ``"player.hasvideo + !(window.busy | skin.hidden)"``
into an evaluation tree of condition leaves and flattened AND/OR groups. The
tree is evaluated with left-to-right short-circuiting against a condition
resolver.

Core Functions:
    compile_expression: Rule text to CompiledExpression
    evaluate: Evaluate a compiled tree against a resolver
    tokenize: Token stream of a rule, for diagnostics
    is_compound: Whether text needs compiling or is a single condition

Grammar Features:
    - Symbolic and word operators: + & and, | or, ! not
    - Operator precedence NOT > AND > OR
    - ( ) and [ ] grouping, NOT in front of a group inverts the whole group
    - Meaningful error messages with character positions

Example:
    >>> from expr import compile_expression
    >>> compiled = compile_expression("a + b + !c", table)
    >>> # Returns one AND group with three leaves, the last inverted
"""

from utils.logger import get_logger
from .exceptions import ParseError, ExpressionSyntaxError, UnknownConditionError
from .lexer import RuleLexer
from .compiler import CompiledExpression, ConditionLookup, ExpressionCompiler, is_compound
from .tree_nodes import (
    Combinator,
    ConditionResolver,
    Group,
    Leaf,
    constant_tree,
    evaluate,
    render,
)


def compile_expression(source: str, lookup: ConditionLookup) -> CompiledExpression:
    """Compile rule text into an evaluation tree.

    Uses a fresh compiler for each call so no state is shared between
    expressions.

    Args:
        source: Rule expression text
        lookup: Resolves operand names to condition ids

    Returns:
        CompiledExpression with the tree root and its item dependence

    Raises:
        ParseError: Text is malformed or names an unknown condition

    Example:
        >>> compiled = compile_expression("a | b + c", table)
        >>> # Returns OR(a, AND(b, c))
    """
    logger = get_logger()

    try:
        return ExpressionCompiler(lookup).compile(source)

    except ParseError:
        logger.debug("ParseError encountered during rule compilation")
        raise

    except Exception as exc:
        logger.debug(f"Unexpected compilation error: {type(exc).__name__}: {exc}")
        raise ParseError(str(exc)) from exc


def tokenize(source: str):
    """Yield the SLY tokens of a rule expression.

    Raises:
        ExpressionSyntaxError: The text contains an illegal character
    """
    return RuleLexer().tokenize(source)


__all__ = [
    "compile_expression",
    "tokenize",
    "is_compound",
    "evaluate",
    "render",
    "constant_tree",
    "CompiledExpression",
    "ConditionLookup",
    "ConditionResolver",
    "ExpressionCompiler",
    "Combinator",
    "Group",
    "Leaf",
    "ParseError",
    "ExpressionSyntaxError",
    "UnknownConditionError",
]
