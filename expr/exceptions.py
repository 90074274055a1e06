# expr/exceptions.py
# This file is part of InfoBool - A cached boolean rule engine
#
# Custom exceptions for rule expression compilation

"""Domain-specific exceptions for boolean rule compilation.

Every failure to turn rule text into an evaluation tree is reported as a
ParseError subclass. Compilation is the only place these are raised; an
evaluation tree that exists is always well formed.
"""

from typing import Optional


class ParseError(RuntimeError):
    """Exception raised when a rule expression cannot be compiled.

    Base class for all compile-time failures. Callers that only care about
    "did it compile" catch this type.
    """

    pass


class ExpressionSyntaxError(ParseError):
    """Rule text is not a well-formed boolean expression.

    Raised for unbalanced brackets, misplaced or trailing operators, empty
    expressions and characters outside the rule alphabet.

    Attributes:
        position: Character offset where the problem was detected, if known
    """

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.position = position


class UnknownConditionError(ParseError):
    """An operand names a condition that the lookup does not know.

    Attributes:
        name: The operand text as written in the expression
    """

    def __init__(self, name: str):
        super().__init__(f"Unknown condition '{name}'")
        self.name = name
