"""Plural rule mini-language: tokenizer, parser, evaluator and resolver.

Catalog-agnostic; usable as a standalone expression interpreter.

Python 3.13+.
"""

from .ast import (
    BinaryOperation,
    Conditional,
    Expression,
    IntegerLiteral,
    UnaryOperation,
    Variable,
)
from .evaluator import evaluate
from .parser import PluralRuleParser, parse_rule
from .resolver import PluralResolver, compile_plural
from .tokenizer import Token, tokenize

__all__ = [
    "BinaryOperation",
    "Conditional",
    "Expression",
    "IntegerLiteral",
    "PluralResolver",
    "PluralRuleParser",
    "Token",
    "UnaryOperation",
    "Variable",
    "compile_plural",
    "evaluate",
    "parse_rule",
    "tokenize",
]
