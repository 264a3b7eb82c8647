"""CLDR-derived gettext plural rules using Babel.

Converts a locale's CLDR plural rule into Plural-Forms header text, for
catalogs that do not declare their own rule.

Python 3.13+. Depends on Babel for CLDR data.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

import functools

from babel.plural import to_gettext

from molexengine.locale_utils import get_babel_locale

__all__ = ["plural_forms_for_locale"]


@functools.lru_cache(maxsize=128)
def plural_forms_for_locale(locale_code: str) -> str:
    """Return the gettext Plural-Forms value for a locale.

    Args:
        locale_code: Locale code (e.g., "ru_RU", "pl", "ar-SA")

    Returns:
        Header value such as ``"nplurals=2; plural=((n == 1) ? 0 : 1);"``

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid

    Note:
        Babel's gettext compiler maps the integer operand ``i`` to ``n``
        and the fraction operands to 0. Rules that need the exponent
        operand (``e``, used by some Romance "many" categories) keep it as
        an identifier, which the plural rule parser rejects.

    Example:
        >>> plural_forms_for_locale("ja")
        'nplurals=1; plural=(0);'
    """
    locale = get_babel_locale(locale_code)
    return to_gettext(locale.plural_form)
