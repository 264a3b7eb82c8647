"""Tokenizer for plural rule text.

Turns ``n%10==1 && n%100!=11 ? 0 : 1;`` into a flat token list.
Whitespace is skipped; everything else must be an integer, the identifier
``n``, an operator, a parenthesis, ``?``, ``:`` or the terminating ``;``.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from molexengine.diagnostics import ErrorTemplate, PluralSyntaxError
from molexengine.enums import TokenKind

__all__ = ["Token", "tokenize"]

# Longest match first: "<=" must win over "<".
_TWO_CHAR_OPERATORS = frozenset({"<=", ">=", "==", "!=", "&&", "||"})
_ONE_CHAR_OPERATORS = frozenset({"!", "*", "/", "%", "+", "-", "<", ">"})

_PUNCTUATION = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "?": TokenKind.QUESTION,
    ":": TokenKind.COLON,
    ";": TokenKind.SEMICOLON,
}

_WHITESPACE = frozenset(" \t\n\r\f\v")


@dataclass(frozen=True, slots=True)
class Token:
    """One lexical unit of a plural rule.

    Attributes:
        kind: Lexical category
        text: Exact source text (empty for EOF)
        position: Character offset of the first character in the rule text
    """

    kind: TokenKind
    text: str
    position: int


def _is_ascii_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_identifier_char(char: str) -> bool:
    return char == "_" or char.isalnum()


def tokenize(source: str) -> list[Token]:
    """Split rule text into tokens, ending with a single EOF token.

    Identifiers other than ``n`` are rejected here, so the parser only
    ever sees the variable it can evaluate.

    Args:
        source: Rule text, e.g. ``"(n != 1)"``

    Returns:
        Tokens in source order; the last token has kind EOF

    Raises:
        PluralSyntaxError: On a character outside the rule alphabet or an
            identifier other than ``n``

    Example:
        >>> [t.text for t in tokenize("n != 1;")]
        ['n', '!=', '1', ';', '']
    """
    tokens: list[Token] = []
    pos = 0
    length = len(source)

    while pos < length:
        char = source[pos]

        if char in _WHITESPACE:
            pos += 1
            continue

        if _is_ascii_digit(char):
            start = pos
            while pos < length and _is_ascii_digit(source[pos]):
                pos += 1
            tokens.append(Token(TokenKind.NUMBER, source[start:pos], start))
            continue

        if char.isalpha() or char == "_":
            start = pos
            while pos < length and _is_identifier_char(source[pos]):
                pos += 1
            name = source[start:pos]
            if name != "n":
                raise PluralSyntaxError(
                    ErrorTemplate.unknown_identifier(name, start),
                    position=start,
                    token=name,
                )
            tokens.append(Token(TokenKind.IDENTIFIER, name, start))
            continue

        pair = source[pos : pos + 2]
        if pair in _TWO_CHAR_OPERATORS:
            tokens.append(Token(TokenKind.OPERATOR, pair, pos))
            pos += 2
            continue

        if char in _ONE_CHAR_OPERATORS:
            tokens.append(Token(TokenKind.OPERATOR, char, pos))
            pos += 1
            continue

        if char in _PUNCTUATION:
            tokens.append(Token(_PUNCTUATION[char], char, pos))
            pos += 1
            continue

        raise PluralSyntaxError(
            ErrorTemplate.unexpected_character(char, pos),
            position=pos,
            token=char,
        )

    tokens.append(Token(TokenKind.EOF, "", length))
    return tokens
