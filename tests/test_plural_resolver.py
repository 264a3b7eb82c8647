"""Tests for PluralResolver and compile_plural."""

from __future__ import annotations

import pytest

from molexengine.diagnostics import PluralSyntaxError
from molexengine.enums import ResolverKind
from molexengine.plural import IntegerLiteral, PluralResolver, compile_plural


class TestDefaultResolver:
    @pytest.mark.parametrize(("n", "expected"), [(0, 1), (1, 0), (2, 1), (100, 1)])
    def test_n_not_one(self, n: int, expected: int) -> None:
        assert PluralResolver.default().evaluate(n) == expected

    def test_shared_instance(self) -> None:
        assert PluralResolver.default() is PluralResolver.default()
        assert PluralResolver.default().is_default

    def test_describe(self) -> None:
        assert PluralResolver.default().describe() == "(n != 1)"


class TestCompilePlural:
    def test_expression_resolver(self) -> None:
        resolver = compile_plural("n > 1")
        assert resolver.kind is ResolverKind.EXPRESSION
        assert not resolver.is_default
        assert resolver.source == "n > 1"
        assert [resolver.evaluate(n) for n in (0, 1, 2)] == [0, 0, 1]

    def test_describe_is_normalized(self) -> None:
        assert compile_plural("n%10==1&&n%100!=11?0:1").describe() == (
            "((((n % 10) == 1) && ((n % 100) != 11)) ? 0 : 1)"
        )

    def test_empty_rule_is_rejected(self) -> None:
        with pytest.raises(PluralSyntaxError):
            compile_plural("")

    def test_unbalanced_rule_fails_at_compile_time(self) -> None:
        with pytest.raises(PluralSyntaxError):
            compile_plural("(n == 1 ? 0 : 1")


class TestResolverValidation:
    def test_expression_kind_requires_tree(self) -> None:
        with pytest.raises(ValueError, match="requires an expression"):
            PluralResolver(ResolverKind.EXPRESSION)

    def test_default_kind_rejects_tree(self) -> None:
        with pytest.raises(ValueError, match="cannot carry"):
            PluralResolver(ResolverKind.DEFAULT, IntegerLiteral(0))

    def test_directly_built_expression_resolver_evaluates_tree(self) -> None:
        resolver = PluralResolver(ResolverKind.EXPRESSION, IntegerLiteral(2))
        assert [resolver.evaluate(n) for n in (0, 1, 7)] == [2, 2, 2]
