"""Precedence-climbing parser for plural rule expressions.

Grammar (lowest to highest precedence)::

    conditional    := logical_or [ "?" conditional ":" conditional ]
    logical_or     := logical_and { "||" logical_and }
    logical_and    := equality { "&&" equality }
    equality       := relational { ("==" | "!=") relational }
    relational     := additive { ("<" | "<=" | ">" | ">=") additive }
    additive       := multiplicative { ("+" | "-") multiplicative }
    multiplicative := unary { ("*" | "/" | "%") unary }
    unary          := "!" unary | primary
    primary        := INTEGER | "n" | "(" conditional ")"

    rule           := conditional [ ";" ] EOF

Binary operators are left-associative; the conditional is right-associative.
The binary levels are not separate functions: a single loop climbs the
precedence table below.

Python 3.13+. Zero external dependencies.
"""

from molexengine.constants import MAX_DEPTH, MAX_PLURAL_RULE_LENGTH
from molexengine.core.depth_guard import DepthGuard
from molexengine.diagnostics import (
    DepthLimitExceededError,
    ErrorTemplate,
    PluralSyntaxError,
)
from molexengine.enums import Operator, TokenKind

from .ast import (
    BinaryOperation,
    Conditional,
    Expression,
    IntegerLiteral,
    UnaryOperation,
    Variable,
    expression_depth,
)
from .tokenizer import Token, tokenize

__all__ = ["PluralRuleParser", "parse_rule"]

_BINARY_PRECEDENCE: dict[str, int] = {
    Operator.OR: 1,
    Operator.AND: 2,
    Operator.EQ: 3,
    Operator.NE: 3,
    Operator.LT: 4,
    Operator.LE: 4,
    Operator.GT: 4,
    Operator.GE: 4,
    Operator.ADD: 5,
    Operator.SUB: 5,
    Operator.MUL: 6,
    Operator.DIV: 6,
    Operator.MOD: 6,
}

_LOWEST_PRECEDENCE = 1


class PluralRuleParser:
    """Plural rule parser producing an immutable expression tree.

    A parser instance is cheap and holds per-parse state only while
    ``parse()`` runs; create one per thread when parsing concurrently.

    Security:
        - Rule text longer than MAX_PLURAL_RULE_LENGTH is rejected up front
        - Recursion is bounded by a DepthGuard (parentheses, ``!``, ``?:``)
        - The finished tree's depth is bounded, which bounds evaluation

    Example:
        >>> parser = PluralRuleParser()
        >>> tree = parser.parse("n != 1")
        >>> tree.operator
        <Operator.NE: '!='>
    """

    __slots__ = ("_guard", "_index", "_tokens")

    def __init__(self, *, max_depth: int = MAX_DEPTH) -> None:
        """Initialize parser.

        Args:
            max_depth: Maximum expression-tree depth (default: 100)
        """
        self._guard = DepthGuard(max_depth=max_depth)
        self._tokens: list[Token] = []
        self._index = 0

    @property
    def max_depth(self) -> int:
        """Effective depth limit after clamping to the recursion limit."""
        return self._guard.max_depth

    def parse(self, source: str) -> Expression:
        """Parse rule text into an expression tree.

        Args:
            source: Rule text, optionally terminated by ``;``

        Returns:
            Root node of the expression tree

        Raises:
            PluralSyntaxError: On malformed input, unconsumed trailing
                tokens, or an identifier other than ``n``
            DepthLimitExceededError: If nesting exceeds the depth limit
        """
        if len(source) > MAX_PLURAL_RULE_LENGTH:
            raise PluralSyntaxError(
                ErrorTemplate.rule_too_long(len(source), MAX_PLURAL_RULE_LENGTH),
                position=MAX_PLURAL_RULE_LENGTH,
                token="",
            )

        self._tokens = tokenize(source)
        self._index = 0
        self._guard.current_depth = 0

        expression = self._parse_conditional()

        if self._current.kind is TokenKind.SEMICOLON:
            self._advance()

        trailing = self._current
        if trailing.kind is not TokenKind.EOF:
            raise PluralSyntaxError(
                ErrorTemplate.trailing_input(trailing.text, trailing.position),
                position=trailing.position,
                token=trailing.text,
            )

        if expression_depth(expression) > self._guard.max_depth:
            raise DepthLimitExceededError(
                ErrorTemplate.nesting_depth_exceeded(self._guard.max_depth, 0, ""),
                position=0,
                token="",
                max_depth=self._guard.max_depth,
            )

        return expression

    # ------------------------------------------------------------------
    # Token stream
    # ------------------------------------------------------------------

    @property
    def _current(self) -> Token:
        return self._tokens[self._index]

    def _advance(self) -> Token:
        token = self._tokens[self._index]
        # EOF is sticky: never step past the final token.
        if token.kind is not TokenKind.EOF:
            self._index += 1
        return token

    def _expect(self, kind: TokenKind, expected: str) -> Token:
        token = self._current
        if token.kind is not kind:
            raise PluralSyntaxError(
                ErrorTemplate.unexpected_token(token.text, token.position, expected),
                position=token.position,
                token=token.text,
            )
        return self._advance()

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------

    def _parse_conditional(self) -> Expression:
        start = self._current
        with self._guard.descend(start.position, start.text):
            test = self._parse_binary(_LOWEST_PRECEDENCE)
            if self._current.kind is not TokenKind.QUESTION:
                return test
            self._advance()
            consequent = self._parse_conditional()
            self._expect(TokenKind.COLON, "':'")
            alternative = self._parse_conditional()
            return Conditional(test, consequent, alternative)

    def _parse_binary(self, min_precedence: int) -> Expression:
        left = self._parse_unary()
        while True:
            token = self._current
            if token.kind is not TokenKind.OPERATOR:
                return left
            precedence = _BINARY_PRECEDENCE.get(token.text)
            if precedence is None or precedence < min_precedence:
                return left
            self._advance()
            right = self._parse_binary(precedence + 1)
            left = BinaryOperation(Operator(token.text), left, right)

    def _parse_unary(self) -> Expression:
        token = self._current
        if token.kind is TokenKind.OPERATOR and token.text == Operator.NOT:
            self._advance()
            with self._guard.descend(token.position, token.text):
                operand = self._parse_unary()
            return UnaryOperation(Operator.NOT, operand)
        return self._parse_primary()

    def _parse_primary(self) -> Expression:
        token = self._current
        match token.kind:
            case TokenKind.NUMBER:
                self._advance()
                return IntegerLiteral(int(token.text))
            case TokenKind.IDENTIFIER:
                self._advance()
                return Variable()
            case TokenKind.LPAREN:
                self._advance()
                inner = self._parse_conditional()
                self._expect(TokenKind.RPAREN, "')'")
                return inner
            case _:
                raise PluralSyntaxError(
                    ErrorTemplate.unexpected_token(
                        token.text, token.position, "a number, 'n' or '('"
                    ),
                    position=token.position,
                    token=token.text,
                )


def parse_rule(source: str, *, max_depth: int = MAX_DEPTH) -> Expression:
    """Parse plural rule text with a fresh parser.

    Example:
        >>> parse_rule("n > 1;")
        BinaryOperation(operator=<Operator.GT: '>'>, left=Variable(), right=IntegerLiteral(value=1))
    """
    return PluralRuleParser(max_depth=max_depth).parse(source)
