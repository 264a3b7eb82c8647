"""Locale utilities for catalog Language headers and Babel lookups.

Catalog headers carry POSIX-style locale names (``pt_BR``, ``sr@latin``,
``de_DE.UTF-8``); callers may pass BCP-47 codes (``pt-BR``). Everything is
normalized to the form Babel parses before lookup.

Python 3.13+.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "normalize_locale",
    "try_babel_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert a BCP-47 or POSIX locale name to the form Babel parses.

    Strips a POSIX codeset (``.UTF-8``) and modifier (``@latin``) and
    replaces hyphens with underscores.

    Args:
        locale_code: Locale name (e.g., "en-US", "pt_BR.UTF-8", "sr@latin")

    Returns:
        Normalized locale code (e.g., "en_US", "pt_BR", "sr")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("de_DE.UTF-8")
        'de_DE'
        >>> normalize_locale("sr@latin")
        'sr'
    """
    code = locale_code.strip()
    code = code.split("@", 1)[0]
    code = code.split(".", 1)[0]
    return code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid

    Example:
        >>> locale = get_babel_locale("pt-BR")
        >>> locale.language, locale.territory
        ('pt', 'BR')
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def try_babel_locale(locale_code: str | None) -> Locale | None:
    """Best-effort variant of get_babel_locale.

    Returns None instead of raising for empty, malformed or unknown codes.

    Example:
        >>> try_babel_locale("xx_INVALID") is None
        True
    """
    if not locale_code or not locale_code.strip():
        return None

    from babel.core import UnknownLocaleError  # noqa: PLC0415

    try:
        return get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError, TypeError):
        return None
