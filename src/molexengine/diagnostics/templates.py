"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This solves EM101/EM102 violations while providing:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    # Base documentation URL
    _DOCS_BASE = "https://www.gnu.org/software/gettext/manual/html_node"

    # ------------------------------------------------------------------
    # Container errors
    # ------------------------------------------------------------------

    @staticmethod
    def bad_magic(found: bytes) -> Diagnostic:
        """Leading bytes are not a known magic number.

        Args:
            found: The first (up to) four bytes of the input

        Returns:
            Diagnostic for BAD_MAGIC
        """
        shown = found.hex() if found else "<empty>"
        msg = f"Unrecognized magic number {shown}"
        return Diagnostic(
            code=DiagnosticCode.BAD_MAGIC,
            message=msg,
            offset=0,
            hint="The input is not a compiled message catalog",
            help_url=f"{ErrorTemplate._DOCS_BASE}/MO-Files.html",
        )

    @staticmethod
    def unsupported_revision(major: int, minor: int) -> Diagnostic:
        """Catalog declares a major revision this reader does not understand.

        Args:
            major: Major revision number from the header
            minor: Minor revision number from the header

        Returns:
            Diagnostic for UNSUPPORTED_REVISION
        """
        msg = f"Unsupported catalog revision {major}.{minor}"
        return Diagnostic(
            code=DiagnosticCode.UNSUPPORTED_REVISION,
            message=msg,
            offset=4,
            hint="Only major revision 0 is supported",
            help_url=f"{ErrorTemplate._DOCS_BASE}/MO-Files.html",
        )

    @staticmethod
    def truncated_input(offset: int, size: int, available: int) -> Diagnostic:
        """Sequential read ran past the end of the buffer.

        Args:
            offset: Position at which the read started
            size: Number of bytes the read needed
            available: Number of bytes actually left

        Returns:
            Diagnostic for TRUNCATED_INPUT
        """
        msg = (
            f"Unexpected end of input at offset {offset} "
            f"(needed {size} bytes, {available} available)"
        )
        return Diagnostic(
            code=DiagnosticCode.TRUNCATED_INPUT,
            message=msg,
            offset=offset,
            hint="The catalog appears to be cut short",
        )

    @staticmethod
    def invalid_offset(offset: int, length: int, buffer_size: int) -> Diagnostic:
        """Offset field points outside the buffer.

        Args:
            offset: Referenced start offset
            length: Number of bytes referenced from offset
            buffer_size: Total buffer size

        Returns:
            Diagnostic for INVALID_OFFSET
        """
        msg = (
            f"Range [{offset}, {offset + length}) lies outside "
            f"the {buffer_size}-byte buffer"
        )
        return Diagnostic(
            code=DiagnosticCode.INVALID_OFFSET,
            message=msg,
            offset=offset,
            hint="A string or table offset in the catalog is corrupt",
            help_url=f"{ErrorTemplate._DOCS_BASE}/MO-Files.html",
        )

    @staticmethod
    def invalid_encoding(encoding: str, offset: int, reason: str) -> Diagnostic:
        """String bytes could not be decoded.

        Args:
            encoding: Codec used for decoding
            offset: Byte offset of the string in the buffer
            reason: Codec error description

        Returns:
            Diagnostic for INVALID_ENCODING
        """
        msg = f"Cannot decode string at offset {offset} as {encoding}: {reason}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_ENCODING,
            message=msg,
            offset=offset,
            hint="Check the Content-Type charset header or pass an encoding override",
        )

    @staticmethod
    def source_too_large(size: int, limit: int) -> Diagnostic:
        """Input exceeds the configured size limit.

        Args:
            size: Input size in bytes
            limit: Configured maximum

        Returns:
            Diagnostic for SOURCE_TOO_LARGE
        """
        msg = f"Catalog is {size} bytes, exceeding the limit of {limit} bytes"
        return Diagnostic(
            code=DiagnosticCode.SOURCE_TOO_LARGE,
            message=msg,
            hint="Raise ParserConfig.max_source_size or set it to 0 to disable the limit",
        )

    # ------------------------------------------------------------------
    # Plural rule syntax errors
    # ------------------------------------------------------------------

    @staticmethod
    def unexpected_character(char: str, position: int) -> Diagnostic:
        """Tokenizer met a character outside the rule alphabet.

        Args:
            char: The offending character
            position: Character position in the rule text

        Returns:
            Diagnostic for PLURAL_UNEXPECTED_CHARACTER
        """
        msg = f"Unexpected character {char!r} at position {position}"
        return Diagnostic(
            code=DiagnosticCode.PLURAL_UNEXPECTED_CHARACTER,
            message=msg,
            offset=position,
            token=char,
            help_url=f"{ErrorTemplate._DOCS_BASE}/Plural-forms.html",
        )

    @staticmethod
    def unexpected_token(token: str, position: int, expected: str) -> Diagnostic:
        """Parser met a token that cannot appear here.

        Args:
            token: Offending token text (empty at end of input)
            position: Character position in the rule text
            expected: Description of what would have been valid

        Returns:
            Diagnostic for PLURAL_UNEXPECTED_TOKEN
        """
        shown = repr(token) if token else "end of rule"
        msg = f"Unexpected {shown} at position {position}, expected {expected}"
        return Diagnostic(
            code=DiagnosticCode.PLURAL_UNEXPECTED_TOKEN,
            message=msg,
            offset=position,
            token=token,
            help_url=f"{ErrorTemplate._DOCS_BASE}/Plural-forms.html",
        )

    @staticmethod
    def unknown_identifier(name: str, position: int) -> Diagnostic:
        """Rule references a variable other than ``n``.

        Args:
            name: The identifier found
            position: Character position in the rule text

        Returns:
            Diagnostic for PLURAL_UNKNOWN_IDENTIFIER
        """
        msg = f"Unknown identifier {name!r} at position {position}"
        return Diagnostic(
            code=DiagnosticCode.PLURAL_UNKNOWN_IDENTIFIER,
            message=msg,
            offset=position,
            token=name,
            hint="Plural rules may only reference the variable 'n'",
            help_url=f"{ErrorTemplate._DOCS_BASE}/Plural-forms.html",
        )

    @staticmethod
    def trailing_input(token: str, position: int) -> Diagnostic:
        """Tokens remain after a complete expression.

        Args:
            token: First unconsumed token
            position: Character position in the rule text

        Returns:
            Diagnostic for PLURAL_TRAILING_INPUT
        """
        msg = f"Unexpected {token!r} after end of expression at position {position}"
        return Diagnostic(
            code=DiagnosticCode.PLURAL_TRAILING_INPUT,
            message=msg,
            offset=position,
            token=token,
            hint="Check for unbalanced parentheses or a missing operator",
        )

    @staticmethod
    def nesting_depth_exceeded(max_depth: int, position: int, token: str) -> Diagnostic:
        """Expression tree grows deeper than allowed.

        Args:
            max_depth: Configured maximum depth
            position: Character position where the limit was hit
            token: Token at that position

        Returns:
            Diagnostic for PLURAL_NESTING_DEPTH_EXCEEDED
        """
        msg = f"Plural rule nesting exceeds maximum depth ({max_depth})"
        return Diagnostic(
            code=DiagnosticCode.PLURAL_NESTING_DEPTH_EXCEEDED,
            message=msg,
            offset=position,
            token=token,
            hint="Simplify the rule or raise ParserConfig.max_nesting_depth",
        )

    @staticmethod
    def rule_too_long(length: int, limit: int) -> Diagnostic:
        """Rule text exceeds the length limit.

        Args:
            length: Rule length in characters
            limit: Maximum accepted length

        Returns:
            Diagnostic for PLURAL_RULE_TOO_LONG
        """
        msg = f"Plural rule is {length} characters long, exceeding the limit of {limit}"
        return Diagnostic(
            code=DiagnosticCode.PLURAL_RULE_TOO_LONG,
            message=msg,
            offset=limit,
            token="",
        )

    # ------------------------------------------------------------------
    # Plural rule evaluation errors
    # ------------------------------------------------------------------

    @staticmethod
    def division_by_zero(operator: str, n: int) -> Diagnostic:
        """Divisor evaluated to zero.

        Args:
            operator: ``/`` or ``%``
            n: Count the rule was evaluated with

        Returns:
            Diagnostic for PLURAL_DIVISION_BY_ZERO
        """
        msg = f"Division by zero in '{operator}' while evaluating plural rule for n={n}"
        return Diagnostic(
            code=DiagnosticCode.PLURAL_DIVISION_BY_ZERO,
            message=msg,
            hint="The Plural-Forms expression divides by zero",
        )
