"""Tests for plural rule evaluation semantics.

Rules are written against C, so integer division truncates toward zero,
remainders follow the dividend's sign, and logical operators short-circuit.
"""

from __future__ import annotations

import pytest

from molexengine.diagnostics import (
    DiagnosticCode,
    DivisionByZeroError,
    PluralEvaluationError,
)
from molexengine.enums import Operator
from molexengine.plural import (
    BinaryOperation,
    Conditional,
    IntegerLiteral,
    Variable,
    evaluate,
    parse_rule,
)


def _eval(source: str, n: int) -> int:
    return evaluate(parse_rule(source), n)


class TestArithmetic:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("2 + 3", 5),
            ("2 - 3", -1),
            ("2 * 3", 6),
            ("7 / 2", 3),
            ("7 % 2", 1),
            ("1 + 2 * 3", 7),
            ("(1 + 2) * 3", 9),
            ("10 - 3 - 2", 5),
        ],
    )
    def test_constant_expressions(self, source: str, expected: int) -> None:
        assert _eval(source, 0) == expected

    @pytest.mark.parametrize(
        ("n", "quotient", "remainder"),
        [(7, 2, 1), (-7, -2, -1), (-6, -2, 0), (6, 2, 0), (-1, 0, -1)],
    )
    def test_c_division_semantics(self, n: int, quotient: int, remainder: int) -> None:
        """'/' truncates toward zero; '%' takes the sign of the dividend."""
        assert _eval("n / 3", n) == quotient
        assert _eval("n % 3", n) == remainder

    def test_variable_is_substituted(self) -> None:
        assert _eval("n * n", 12) == 144

    def test_large_counts(self) -> None:
        assert _eval("n % 100", 10**12 + 11) == 11


class TestComparisonAndLogic:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("n < 5", 1),
            ("n <= 4", 1),
            ("n > 4", 0),
            ("n >= 4", 1),
            ("n == 4", 1),
            ("n != 4", 0),
            ("n && 0", 0),
            ("n || 0", 1),
            ("0 || 0", 0),
            ("!n", 0),
            ("!0", 1),
            ("!!n", 1),
        ],
    )
    def test_results_are_zero_or_one(self, source: str, expected: int) -> None:
        assert _eval(source, 4) == expected

    def test_logical_operators_normalize_truthy_values(self) -> None:
        assert _eval("n && 5", 7) == 1
        assert _eval("n || 0", 7) == 1

    def test_and_short_circuits(self) -> None:
        """The right operand is not evaluated when the left is false."""
        assert _eval("n != 0 && 10 / n > 1", 0) == 0

    def test_or_short_circuits(self) -> None:
        assert _eval("n == 0 || 10 / n > 1", 0) == 1

    def test_conditional_evaluates_only_taken_branch(self) -> None:
        assert _eval("n == 0 ? 7 : 10 / n", 0) == 7
        assert _eval("n == 0 ? 1 / n : 3", 5) == 3


class TestDivisionByZero:
    @pytest.mark.parametrize("source", ["n / 0", "n % 0", "1 / n", "1 % (n - n)"])
    def test_raises_evaluation_error(self, source: str) -> None:
        with pytest.raises(DivisionByZeroError) as exc_info:
            _eval(source, 0)
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.PLURAL_DIVISION_BY_ZERO

    def test_is_plural_evaluation_error(self) -> None:
        with pytest.raises(PluralEvaluationError):
            _eval("n % 0", 3)

    def test_is_zero_division_error(self) -> None:
        with pytest.raises(ZeroDivisionError):
            _eval("n / 0", 3)

    def test_message_names_count(self) -> None:
        with pytest.raises(DivisionByZeroError, match="n=42"):
            _eval("n % 0", 42)

    def test_compiles_even_when_divisor_is_constant_zero(self) -> None:
        """Zero divisors are found when evaluating, never when parsing."""
        tree = parse_rule("n == 1 ? 0 : n / 0")
        assert evaluate(tree, 1) == 0


class TestRealWorldRules:
    THREE_FORM = "n%10==1 && n%100!=11 ? 0 : n%10>=2 && (n%100<10 || n%100>=20) ? 1 : 2"

    @pytest.mark.parametrize(
        ("n", "expected"),
        [(1, 0), (21, 0), (11, 2), (2, 1), (9, 1), (10, 2), (12, 2), (19, 2), (0, 2), (22, 1)],
    )
    def test_lithuanian(self, n: int, expected: int) -> None:
        assert _eval(self.THREE_FORM, n) == expected

    def test_one_two_other(self) -> None:
        rule = "n == 1 ? 0 : n == 2 ? 1 : 2"
        assert [_eval(rule, n) for n in (0, 1, 2, 3, 19)] == [2, 0, 1, 2, 2]

    def test_result_is_not_clamped(self) -> None:
        assert _eval("n + 10", 5) == 15


class TestDirectTrees:
    def test_hand_built_tree(self) -> None:
        tree = Conditional(
            BinaryOperation(Operator.EQ, Variable(), IntegerLiteral(1)),
            IntegerLiteral(0),
            IntegerLiteral(1),
        )
        assert evaluate(tree, 1) == 0
        assert evaluate(tree, 2) == 1

    def test_unknown_node_type_raises(self) -> None:
        with pytest.raises(TypeError, match="Unknown plural expression node"):
            evaluate("n", 1)  # type: ignore[arg-type]
