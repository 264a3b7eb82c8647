"""Evaluator for compiled plural rule trees.

Reduces a tree bottom-up to one integer for a concrete count ``n``.
Semantics follow C, which is what Plural-Forms rules are written against:

- Comparison and logical operators yield 0 or 1; nonzero is truthy
- ``&&``, ``||`` and ``?:`` short-circuit (untaken operands are not evaluated)
- ``/`` truncates toward zero, ``%`` takes the sign of the dividend

The result is not clamped: the caller decides what an out-of-range form
index means.

Python 3.13+. Zero external dependencies.
"""

from molexengine.diagnostics import DivisionByZeroError, ErrorTemplate
from molexengine.enums import Operator

from .ast import BinaryOperation, Conditional, Expression, IntegerLiteral, UnaryOperation, Variable

__all__ = ["evaluate"]


def _truncating_divide(dividend: int, divisor: int) -> int:
    quotient = abs(dividend) // abs(divisor)
    return -quotient if (dividend < 0) != (divisor < 0) else quotient


def _apply(operator: Operator, left: int, right: int, n: int) -> int:
    match operator:
        case Operator.MUL:
            return left * right
        case Operator.DIV | Operator.MOD:
            if right == 0:
                raise DivisionByZeroError(ErrorTemplate.division_by_zero(operator, n))
            quotient = _truncating_divide(left, right)
            return quotient if operator is Operator.DIV else left - right * quotient
        case Operator.ADD:
            return left + right
        case Operator.SUB:
            return left - right
        case Operator.LT:
            return int(left < right)
        case Operator.LE:
            return int(left <= right)
        case Operator.GT:
            return int(left > right)
        case Operator.GE:
            return int(left >= right)
        case Operator.EQ:
            return int(left == right)
        case Operator.NE:
            return int(left != right)
        case _:
            msg = f"Not a binary operator: {operator!r}"
            raise ValueError(msg)


def evaluate(expression: Expression, n: int) -> int:
    """Evaluate a plural rule tree for count n.

    Args:
        expression: Root of a tree produced by the plural rule parser
        n: Count substituted for the variable ``n``

    Returns:
        Integer result, normally a form index

    Raises:
        DivisionByZeroError: If a divisor evaluates to zero on the taken path

    Example:
        >>> from molexengine.plural.parser import parse_rule
        >>> rule = parse_rule("n == 1 ? 0 : n % 10 >= 2 && n % 10 <= 4 ? 1 : 2")
        >>> [evaluate(rule, n) for n in (1, 3, 5, 22)]
        [0, 1, 2, 1]
    """
    match expression:
        case IntegerLiteral(value=value):
            return value
        case Variable():
            return n
        case UnaryOperation(operand=operand):
            return int(not evaluate(operand, n))
        case Conditional(test=test, consequent=consequent, alternative=alternative):
            branch = consequent if evaluate(test, n) else alternative
            return evaluate(branch, n)
        case BinaryOperation(operator=Operator.AND, left=left, right=right):
            return int(bool(evaluate(left, n)) and bool(evaluate(right, n)))
        case BinaryOperation(operator=Operator.OR, left=left, right=right):
            return int(bool(evaluate(left, n)) or bool(evaluate(right, n)))
        case BinaryOperation(operator=operator, left=left, right=right):
            return _apply(operator, evaluate(left, n), evaluate(right, n), n)
        case _:
            msg = f"Unknown plural expression node: {type(expression).__name__}"
            raise TypeError(msg)
