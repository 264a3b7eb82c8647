"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Container errors (binary structure, encoding, limits)
        2000-2999: Plural rule syntax errors (tokenizer and parser failures)
        3000-3999: Plural rule evaluation errors
    """

    # Container errors (1000-1999)
    BAD_MAGIC = 1001
    UNSUPPORTED_REVISION = 1002
    TRUNCATED_INPUT = 1003
    INVALID_OFFSET = 1004
    INVALID_ENCODING = 1005
    SOURCE_TOO_LARGE = 1006

    # Plural syntax errors (2000-2999)
    PLURAL_UNEXPECTED_CHARACTER = 2001
    PLURAL_UNEXPECTED_TOKEN = 2002
    PLURAL_UNKNOWN_IDENTIFIER = 2003
    PLURAL_TRAILING_INPUT = 2004
    PLURAL_NESTING_DEPTH_EXCEEDED = 2005
    PLURAL_RULE_TOO_LONG = 2006

    # Plural evaluation errors (3000-3999)
    PLURAL_DIVISION_BY_ZERO = 3001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Note:
        ``offset`` is a byte offset for container errors and a character
        position within the rule text for plural syntax errors.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        offset: Location of the problem (None when not applicable)
        token: Offending token text (plural syntax errors)
        hint: Suggestion for fixing the error
        help_url: Documentation URL for this error
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    offset: int | None = None
    token: str | None = None
    hint: str | None = None
    help_url: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Delegates to DiagnosticFormatter for consistent output with
        control-character escaping.

        Example output:
            error[BAD_MAGIC]: Unrecognized magic number 00000000
              --> position 0
              = help: The input is not a compiled message catalog
              = note: see https://www.gnu.org/software/gettext/manual/html_node/MO-Files.html

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
