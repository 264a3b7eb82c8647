"""MOLexEngine - compiled gettext catalog reader with plural rule evaluation.

Parses binary message catalogs into an immutable lookup structure and
resolves, for a given count, which translated form of a phrase applies,
using the catalog's own Plural-Forms rule.

Public API:
    parse_catalog - Parse catalog bytes (or a binary file object) into a Catalog
    Catalog - Immutable translations: gettext, ngettext, pgettext, npgettext
    Message - One translatable entry (id, context, forms, plural id)
    CatalogMetadata - Header record (charset, Plural-Forms, Language, ...)
    ParserConfig - Parser options (encoding override, plural rule switch, limits)
    compile_plural - Compile Plural-Forms rule text into a PluralResolver
    PluralResolver - Compiled plural strategy (default rule or expression)

Exceptions:
    CatalogError - Base exception class
    ContainerError - Malformed binary container (BadMagicError, ...)
    PluralSyntaxError - Malformed plural rule
    PluralEvaluationError - Plural rule failed for a count (DivisionByZeroError)

Submodules:
    molexengine.binary - Bounds-checked byte cursor
    molexengine.plural - Plural rule tokenizer, parser, evaluator
    molexengine.diagnostics - Error types, codes, formatting
"""

from .catalog import Catalog, CatalogMetadata, Message, ParserConfig, parse_catalog
from .diagnostics import (
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
from .plural import PluralResolver, compile_plural

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("molexengine")
except PackageNotFoundError:
    # Development mode: package not installed yet
    # Run: pip install -e .
    __version__ = "0.0.0+dev"

__all__ = [
    "BadMagicError",
    "Catalog",
    "CatalogError",
    "CatalogMetadata",
    "ContainerError",
    "DepthLimitExceededError",
    "DivisionByZeroError",
    "InvalidEncodingError",
    "InvalidOffsetError",
    "Message",
    "ParserConfig",
    "PluralError",
    "PluralEvaluationError",
    "PluralResolver",
    "PluralSyntaxError",
    "SourceTooLargeError",
    "TruncatedInputError",
    "UnsupportedRevisionError",
    "__version__",
    "compile_plural",
    "parse_catalog",
]
