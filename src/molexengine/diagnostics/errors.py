"""Catalog exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information.
Construction-time errors (container structure, plural rule syntax) abort
parsing; lookups never raise.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class CatalogError(Exception):
    """Base exception for all catalog errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize CatalogError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


# ============================================================================
# CONTAINER ERRORS
# ============================================================================


class ContainerError(CatalogError):
    """Binary container is malformed.

    Parsing is all-or-nothing: no partial catalog is produced.
    """


class BadMagicError(ContainerError):
    """Input does not start with either recognized magic sequence."""


class UnsupportedRevisionError(ContainerError):
    """Catalog revision has a major number other than 0.

    Attributes:
        major: Major revision from the header
        minor: Minor revision from the header
    """

    def __init__(self, message: str | Diagnostic, *, major: int = 0, minor: int = 0) -> None:
        super().__init__(message)
        self.major = major
        self.minor = minor


class TruncatedInputError(ContainerError):
    """A sequential read ran past the end of the buffer.

    Attributes:
        offset: Position where the read started
        size: Bytes the read required
    """

    def __init__(self, message: str | Diagnostic, *, offset: int = 0, size: int = 0) -> None:
        super().__init__(message)
        self.offset = offset
        self.size = size


class InvalidOffsetError(ContainerError):
    """An offset field references bytes outside the buffer.

    Attributes:
        offset: Referenced offset
        length: Referenced length
    """

    def __init__(self, message: str | Diagnostic, *, offset: int = 0, length: int = 0) -> None:
        super().__init__(message)
        self.offset = offset
        self.length = length


class InvalidEncodingError(ContainerError):
    """String bytes are not valid in the selected encoding.

    Attributes:
        encoding: Codec used
        offset: Byte offset of the undecodable string
    """

    def __init__(
        self, message: str | Diagnostic, *, encoding: str = "", offset: int = 0
    ) -> None:
        super().__init__(message)
        self.encoding = encoding
        self.offset = offset


class SourceTooLargeError(ContainerError):
    """Input exceeds ParserConfig.max_source_size.

    Attributes:
        size: Input size in bytes
        limit: Configured limit
    """

    def __init__(self, message: str | Diagnostic, *, size: int = 0, limit: int = 0) -> None:
        super().__init__(message)
        self.size = size
        self.limit = limit


# ============================================================================
# PLURAL RULE ERRORS
# ============================================================================


class PluralError(CatalogError):
    """Base for plural rule compilation and evaluation errors."""


class PluralSyntaxError(PluralError):
    """Plural rule text is malformed.

    Raised at catalog construction, never on first query.

    Attributes:
        position: Character position of the offending token
        token: Offending token text (empty at end of input)
    """

    def __init__(self, message: str | Diagnostic, *, position: int = 0, token: str = "") -> None:
        super().__init__(message)
        self.position = position
        self.token = token


class DepthLimitExceededError(PluralSyntaxError):
    """Plural rule expression tree is deeper than the configured limit.

    This error indicates either adversarial input designed to cause stack
    overflow or a machine-generated rule that should be simplified.

    Attributes:
        max_depth: Depth limit in effect
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        position: int = 0,
        token: str = "",
        max_depth: int = 0,
    ) -> None:
        super().__init__(message, position=position, token=token)
        self.max_depth = max_depth


class PluralEvaluationError(PluralError):
    """Compiled plural rule failed for a concrete count."""


class DivisionByZeroError(PluralEvaluationError, ZeroDivisionError):
    """Divide or modulo by zero while evaluating a plural rule.

    Also a ``ZeroDivisionError`` so generic arithmetic handlers catch it.
    """
