"""Diagnostic system for catalog errors.

Provides structured error diagnostics with codes, positions, hints, and help URLs.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    BadMagicError,
    CatalogError,
    ContainerError,
    DepthLimitExceededError,
    DivisionByZeroError,
    InvalidEncodingError,
    InvalidOffsetError,
    PluralError,
    PluralEvaluationError,
    PluralSyntaxError,
    SourceTooLargeError,
    TruncatedInputError,
    UnsupportedRevisionError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "BadMagicError",
    "CatalogError",
    "ContainerError",
    "DepthLimitExceededError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "DivisionByZeroError",
    "ErrorTemplate",
    "InvalidEncodingError",
    "InvalidOffsetError",
    "OutputFormat",
    "PluralError",
    "PluralEvaluationError",
    "PluralSyntaxError",
    "SourceTooLargeError",
    "TruncatedInputError",
    "UnsupportedRevisionError",
]
