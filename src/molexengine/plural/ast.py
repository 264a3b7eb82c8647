"""Plural rule expression tree.

Nodes are immutable once built. The tree has no loops or references
between siblings, so evaluation always terminates.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from molexengine.enums import Operator

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Nodes
    "IntegerLiteral",
    "Variable",
    "UnaryOperation",
    "BinaryOperation",
    "Conditional",
    # Type aliases
    "Expression",
    # Helpers
    "expression_depth",
    "to_source",
]


@dataclass(frozen=True, slots=True)
class IntegerLiteral:
    """Non-negative decimal integer: ``0``, ``100``."""

    value: int


@dataclass(frozen=True, slots=True)
class Variable:
    """The count variable ``n``."""


@dataclass(frozen=True, slots=True)
class UnaryOperation:
    """Logical negation: ``!operand``."""

    operator: Operator
    operand: "Expression"


@dataclass(frozen=True, slots=True)
class BinaryOperation:
    """Arithmetic, comparison or logical operation.

    Example:
        ``n % 10 == 1`` parses to::

            BinaryOperation(
                Operator.EQ,
                BinaryOperation(Operator.MOD, Variable(), IntegerLiteral(10)),
                IntegerLiteral(1),
            )
    """

    operator: Operator
    left: "Expression"
    right: "Expression"


@dataclass(frozen=True, slots=True)
class Conditional:
    """C-style ternary: ``test ? consequent : alternative``."""

    test: "Expression"
    consequent: "Expression"
    alternative: "Expression"


type Expression = IntegerLiteral | Variable | UnaryOperation | BinaryOperation | Conditional


def _children(node: Expression) -> tuple[Expression, ...]:
    match node:
        case UnaryOperation(operand=operand):
            return (operand,)
        case BinaryOperation(left=left, right=right):
            return (left, right)
        case Conditional(test=test, consequent=consequent, alternative=alternative):
            return (test, consequent, alternative)
        case _:
            return ()


def expression_depth(node: Expression) -> int:
    """Return the number of nodes on the longest root-to-leaf path.

    Iterative, so it is safe on trees too deep for recursive evaluation.

    Example:
        >>> expression_depth(IntegerLiteral(1))
        1
        >>> expression_depth(BinaryOperation(Operator.ADD, Variable(), IntegerLiteral(1)))
        2
    """
    deepest = 0
    stack: list[tuple[Expression, int]] = [(node, 1)]
    while stack:
        current, depth = stack.pop()
        deepest = max(deepest, depth)
        stack.extend((child, depth + 1) for child in _children(current))
    return deepest


def to_source(node: Expression) -> str:
    """Render a tree back to fully parenthesized rule text.

    Used for logging and repr; the output always re-parses to an equal tree.

    Example:
        >>> to_source(Conditional(Variable(), IntegerLiteral(0), IntegerLiteral(1)))
        '(n ? 0 : 1)'
    """
    match node:
        case IntegerLiteral(value=value):
            return str(value)
        case Variable():
            return "n"
        case UnaryOperation(operator=operator, operand=operand):
            return f"{operator}{to_source(operand)}"
        case BinaryOperation(operator=operator, left=left, right=right):
            return f"({to_source(left)} {operator} {to_source(right)})"
        case Conditional(test=test, consequent=consequent, alternative=alternative):
            return f"({to_source(test)} ? {to_source(consequent)} : {to_source(alternative)})"
