"""Catalog header metadata extraction.

The header record is the translation of the empty original string. It holds
``Key: Value`` lines such as::

    Content-Type: text/plain; charset=UTF-8
    Plural-Forms: nplurals=3; plural=(n==1 ? 0 : n==0 ? 2 : 1);

Extraction is best-effort and never fails: lines without a ``": "``
separator or with an empty key are skipped.

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from molexengine.locale_utils import try_babel_locale

if TYPE_CHECKING:
    from babel import Locale

__all__ = ["CatalogMetadata", "extract_metadata", "parse_plural_forms"]

logger = logging.getLogger(__name__)

_KEY_VALUE_SEPARATOR = ": "

# "plural=" must not match inside "nplurals=".
_PLURAL_RE = re.compile(r"(?<![A-Za-z_])plural\s*=\s*(?P<expression>[^;]*)")
_NPLURALS_RE = re.compile(r"(?<![A-Za-z_])nplurals\s*=\s*(?P<count>\d+)")
_CHARSET_RE = re.compile(r"charset\s*=\s*(?P<charset>[^\s;]+)", re.IGNORECASE)

# Header lines are logged truncated.
_LOG_TRUNCATE: int = 50


def _empty_headers() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class CatalogMetadata:
    """Parsed header record of a catalog.

    Attributes:
        headers: All header pairs in source order (read-only). Keys keep
            their original spelling; a later line whose key matches an
            earlier one case-insensitively replaces it.
        charset: Charset from Content-Type, or None
        plural_forms: Raw Plural-Forms header value, or None
        plural_expression: Rule text between ``plural=`` and ``;``, or None
        nplurals: Declared number of forms, or None

    Example:
        >>> meta = extract_metadata("Language: lt\\nPlural-Forms: nplurals=3; plural=n%10==1 ? 0 : 1;\\n")
        >>> meta.get("language")
        'lt'
        >>> meta.nplurals, meta.plural_expression
        (3, 'n%10==1 ? 0 : 1')
    """

    headers: Mapping[str, str] = field(default_factory=_empty_headers)
    charset: str | None = None
    plural_forms: str | None = None
    plural_expression: str | None = None
    nplurals: int | None = None

    def get(self, key: str, default: str | None = None) -> str | None:
        """Case-insensitive header lookup."""
        folded = key.casefold()
        for name, value in self.headers.items():
            if name.casefold() == folded:
                return value
        return default

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    @property
    def language(self) -> str | None:
        """Language header value (e.g., ``"pt_BR"``), or None."""
        return self.get("Language") or None

    @property
    def locale(self) -> Locale | None:
        """Babel Locale for the Language header, or None if unknown."""
        return try_babel_locale(self.language)


def parse_plural_forms(value: str) -> tuple[int | None, str | None]:
    """Split a Plural-Forms header value into nplurals and rule text.

    Args:
        value: Header value, e.g. ``"nplurals=2; plural=(n != 1);"``

    Returns:
        (nplurals, expression). Either is None when absent; an empty
        expression is reported as None.

    Example:
        >>> parse_plural_forms("nplurals=2; plural=(n != 1);")
        (2, '(n != 1)')
        >>> parse_plural_forms("nplurals=1;")
        (1, None)
    """
    nplurals_match = _NPLURALS_RE.search(value)
    nplurals = int(nplurals_match.group("count")) if nplurals_match else None

    plural_match = _PLURAL_RE.search(value)
    expression = plural_match.group("expression").strip() if plural_match else ""

    return nplurals, expression or None


def _extract_charset(content_type: str | None) -> str | None:
    if not content_type:
        return None
    match = _CHARSET_RE.search(content_type)
    return match.group("charset") if match else None


def extract_metadata(header: str) -> CatalogMetadata:
    """Parse the decoded header record.

    Args:
        header: Translation of the empty original string

    Returns:
        CatalogMetadata; empty when the header is empty or unparseable
    """
    headers: dict[str, str] = {}

    for line in header.split("\n"):
        key, separator, value = line.partition(_KEY_VALUE_SEPARATOR)
        key = key.strip()
        if not separator or not key:
            if line.strip():
                logger.debug("Ignoring header line: %r", line[:_LOG_TRUNCATE])
            continue
        folded = key.casefold()
        for existing in [name for name in headers if name.casefold() == folded]:
            del headers[existing]
        headers[key] = value.strip()

    metadata = CatalogMetadata(headers=MappingProxyType(headers))

    plural_forms = metadata.get("Plural-Forms")
    nplurals, expression = parse_plural_forms(plural_forms) if plural_forms else (None, None)

    return CatalogMetadata(
        headers=metadata.headers,
        charset=_extract_charset(metadata.get("Content-Type")),
        plural_forms=plural_forms,
        plural_expression=expression,
        nplurals=nplurals,
    )
