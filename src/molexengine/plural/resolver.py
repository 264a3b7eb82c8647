"""Plural resolver: maps a count to a translated form index.

A resolver has exactly two shapes, modelled as a tagged value rather than
a class hierarchy:

- DEFAULT: the built-in Germanic rule ``n != 1``
- EXPRESSION: a compiled Plural-Forms expression

Both are evaluated through ``PluralResolver.evaluate``. Resolvers are
immutable and safe to share between threads.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from molexengine.constants import MAX_DEPTH
from molexengine.enums import ResolverKind

from .ast import Expression, to_source
from .evaluator import evaluate
from .parser import parse_rule

__all__ = ["PluralResolver", "compile_plural"]


@dataclass(frozen=True, slots=True)
class PluralResolver:
    """Compiled plural strategy.

    Attributes:
        kind: DEFAULT or EXPRESSION
        expression: Expression tree (EXPRESSION resolvers only)
        source: Rule text the tree was compiled from (EXPRESSION only)

    Example:
        >>> PluralResolver.default().evaluate(1)
        0
        >>> compile_plural("n > 1").evaluate(1)
        0
        >>> compile_plural("n > 1").evaluate(0)
        0
        >>> PluralResolver.default().evaluate(0)
        1
    """

    kind: ResolverKind
    expression: Expression | None = None
    source: str | None = None

    def __post_init__(self) -> None:
        """Validate that the tag matches the payload.

        Raises:
            ValueError: If an EXPRESSION resolver has no tree, or a DEFAULT
                resolver carries one.
        """
        if self.kind is ResolverKind.EXPRESSION and self.expression is None:
            msg = "EXPRESSION resolver requires an expression tree"
            raise ValueError(msg)
        if self.kind is ResolverKind.DEFAULT and self.expression is not None:
            msg = "DEFAULT resolver cannot carry an expression tree"
            raise ValueError(msg)

    @classmethod
    def default(cls) -> PluralResolver:
        """Return the shared built-in ``n != 1`` resolver."""
        return _DEFAULT_RESOLVER

    @property
    def is_default(self) -> bool:
        return self.kind is ResolverKind.DEFAULT

    def evaluate(self, n: int) -> int:
        """Return the form index for count n.

        Raises:
            DivisionByZeroError: If the compiled rule divides by zero for n
        """
        match self.expression:
            case None:
                return 0 if n == 1 else 1
            case expression:
                return evaluate(expression, n)

    def describe(self) -> str:
        """Return the rule in normalized, fully parenthesized form."""
        if self.expression is None:
            return "(n != 1)"
        return to_source(self.expression)


_DEFAULT_RESOLVER = PluralResolver(ResolverKind.DEFAULT)


def compile_plural(source: str, *, max_depth: int = MAX_DEPTH) -> PluralResolver:
    """Compile Plural-Forms rule text into a resolver.

    Compilation is eager: every syntax error surfaces here, never during
    a later ``evaluate`` call.

    Args:
        source: Expression text, e.g. ``"(n==1 ? 0 : n==2 ? 1 : 2)"``
        max_depth: Maximum expression-tree depth

    Returns:
        EXPRESSION resolver

    Raises:
        PluralSyntaxError: If the rule text is malformed
        DepthLimitExceededError: If the rule nests deeper than max_depth

    Example:
        >>> resolver = compile_plural("n%10==1 && n%100!=11 ? 0 : 1")
        >>> resolver.evaluate(21), resolver.evaluate(11)
        (0, 1)
    """
    expression = parse_rule(source, max_depth=max_depth)
    return PluralResolver(ResolverKind.EXPRESSION, expression, source)
