# expr/lexer.py
# This file is part of InfoBool - A cached boolean rule engine
#
# Lexical analyzer for rule expression tokenization using SLY

"""Lexical analyzer for boolean rule strings.

Breaks rule text into tokens for the expression compiler. Operators have a
symbolic and a word spelling; word spellings are case-insensitive and are
only recognised as whole words, so a condition called ``android.ready`` stays
an operand.

A bracket written directly after a name, with no whitespace, opens the
argument list of that condition and is part of the operand. A bracket after
whitespace or an operator opens a group.

Supported Tokens:
- Grouping: ( ) and [ ], each closed by its own kind
- Operators: + & and, | or, ! not
- Operands: condition names, dotted identifiers such as player.hasvideo,
  optionally followed directly by an argument list: control.isvisible(50)
- Whitespace: ignored during tokenization
"""

from sly import Lexer

from utils.logger import get_logger
from .exceptions import ExpressionSyntaxError

# Word spellings of the operators, matched after lower-casing
KEYWORDS = {
    "and": "AND",
    "or": "OR",
    "not": "NOT",
}


class RuleLexer(Lexer):
    """SLY-based lexer for rule expression tokenization.

    Attributes:
        tokens: Set of valid token types
        ignore: Characters to skip during tokenization
    """

    tokens = {
        "ID",
        "NOT",
        "AND",
        "OR",
        "LPAREN",
        "RPAREN",
    }

    ignore = " \t\r\n"

    NOT = r"!"
    AND = r"\+|&"
    OR = r"\|"
    LPAREN = r"\(|\["
    RPAREN = r"\)|\]"

    # Arguments may hold one level of nested parentheses
    @_(r"[A-Za-z_][A-Za-z0-9_.]*(?:\((?:[^()]|\([^()]*\))*\))?")
    def ID(self, t):
        name, paren, _ = t.value.partition("(")
        keyword = KEYWORDS.get(name.lower())
        if keyword is not None:
            # "not(a)" is an operator followed by a group
            if paren:
                t.value = name
                self.index = t.end = t.index + len(name)
            t.type = keyword
        return t

    def error(self, t):
        """Handle illegal characters during tokenization.

        Args:
            t: SLY token object containing error context

        Raises:
            ExpressionSyntaxError: Always raised with character and position
        """
        illegal_char = t.value[0]
        error_pos = self.index

        get_logger().debug(f"Illegal character '{illegal_char}' at position {error_pos}")

        self.index += 1

        raise ExpressionSyntaxError(
            f"Illegal character '{illegal_char}' at position {error_pos}", error_pos
        )
