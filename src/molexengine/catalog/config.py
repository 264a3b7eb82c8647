"""Parser configuration for catalog construction.

Provides a single frozen dataclass that encapsulates every option that
influences how a binary catalog is turned into a Catalog.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass

from molexengine.constants import MAX_DEPTH, MAX_SOURCE_SIZE

__all__ = ["ParserConfig", "text_encoding_name"]


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Immutable configuration for parse_catalog.

    All fields have sensible defaults; constructing ``ParserConfig()`` with
    no arguments reproduces the standard behaviour.

    Attributes:
        encoding: Encoding override (default: None). When set, wins over the
            charset declared in the catalog's Content-Type header. Stored in
            canonical codec form (``"UTF8"`` becomes ``"utf-8"``).
        parse_plural_rules: Compile the Plural-Forms header (default: True).
            When False the built-in ``n != 1`` rule is used and a malformed
            header rule cannot fail construction.
        fallback_locale: Locale whose CLDR rule applies when the catalog has
            no Plural-Forms rule (default: None, meaning the built-in rule).
        max_source_size: Maximum catalog size in bytes (default: 10 MB).
            Set to 0 to disable the limit.
        max_nesting_depth: Maximum plural rule expression depth (default: 100).

    Example:
        >>> config = ParserConfig(encoding="latin-1", parse_plural_rules=False)
        >>> config.encoding
        'iso8859-1'
        >>> ParserConfig(encoding="no-such-codec")
        Traceback (most recent call last):
        ...
        ValueError: Unknown encoding: 'no-such-codec'
    """

    encoding: str | None = None
    parse_plural_rules: bool = True
    fallback_locale: str | None = None
    max_source_size: int = MAX_SOURCE_SIZE
    max_nesting_depth: int = MAX_DEPTH

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If encoding is unknown or not a text codec,
                fallback_locale is blank, max_source_size is negative, or
                max_nesting_depth is not positive.
        """
        if self.encoding is not None:
            try:
                canonical = text_encoding_name(self.encoding)
            except LookupError as e:
                raise ValueError(str(e)) from None
            object.__setattr__(self, "encoding", canonical)
        if self.fallback_locale is not None and not self.fallback_locale.strip():
            msg = "fallback_locale cannot be blank"
            raise ValueError(msg)
        if self.max_source_size < 0:
            msg = "max_source_size cannot be negative"
            raise ValueError(msg)
        if self.max_nesting_depth <= 0:
            msg = "max_nesting_depth must be positive"
            raise ValueError(msg)


def text_encoding_name(name: str) -> str:
    """Return the canonical codec name for a text encoding.

    Bytes-to-bytes codecs such as ``hex`` or ``rot13`` are registered with
    ``codecs`` but cannot decode to ``str`` and are rejected.

    Raises:
        LookupError: If the codec is unknown or not a text encoding

    Example:
        >>> text_encoding_name("UTF8")
        'utf-8'
        >>> text_encoding_name("hex")
        Traceback (most recent call last):
        ...
        LookupError: Not a text encoding: 'hex'
    """
    try:
        info = codecs.lookup(name)
    except LookupError:
        msg = f"Unknown encoding: {name!r}"
        raise LookupError(msg) from None
    # Same flag bytes.decode() consults before refusing a codec.
    if not getattr(info, "_is_text_encoding", True):
        msg = f"Not a text encoding: {name!r}"
        raise LookupError(msg)
    return info.name
