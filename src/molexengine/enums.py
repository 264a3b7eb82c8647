"""Enumerations for MOLexEngine type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class ByteOrder(StrEnum):
    """Byte order of a binary catalog, selected by its magic number.

    Values are ``struct`` format prefixes, so a member can be used directly
    when building a format string: ``f"{ByteOrder.LITTLE}I"``.
    """

    LITTLE = "<"
    """Little-endian producer (most common)"""

    BIG = ">"
    """Big-endian producer"""


class ResolverKind(StrEnum):
    """Shape of a plural resolver.

    StrEnum provides automatic string conversion: str(ResolverKind.DEFAULT) == "default"
    """

    DEFAULT = "default"
    """Built-in rule: n != 1"""

    EXPRESSION = "expression"
    """Compiled Plural-Forms expression"""


class TokenKind(StrEnum):
    """Lexical category of a plural rule token."""

    NUMBER = "number"
    """Decimal integer literal: 0, 1, 100"""

    IDENTIFIER = "identifier"
    """Variable name (only ``n`` is valid)"""

    OPERATOR = "operator"
    """Arithmetic, comparison or logical operator"""

    LPAREN = "("
    RPAREN = ")"
    QUESTION = "?"
    COLON = ":"
    SEMICOLON = ";"

    EOF = "eof"
    """End of rule text"""


class Operator(StrEnum):
    """Operators of the plural rule grammar.

    Member values are the operator spellings in rule text.
    """

    NOT = "!"

    MUL = "*"
    DIV = "/"
    MOD = "%"

    ADD = "+"
    SUB = "-"

    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="

    EQ = "=="
    NE = "!="

    AND = "&&"
    OR = "||"


__all__ = [
    "ByteOrder",
    "Operator",
    "ResolverKind",
    "TokenKind",
]
