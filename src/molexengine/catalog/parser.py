"""Container parser: binary catalog bytes to Catalog.

Layout (all integers 32-bit, byte order selected by the magic number)::

    offset 0   magic
           4   revision (major << 16 | minor)
           8   N, number of entries
          12   offset of original strings table
          16   offset of translated strings table
          20   hash table size      (read, unused)
          24   hash table offset    (read, unused)

Each table holds N ``(length, offset)`` pairs pointing at raw string bytes.
Original strings may carry ``context \\x04 id`` and ``id \\x00 plural_id``;
translated strings hold plural forms separated by ``\\x00``.

Parsing is all-or-nothing: the first structural, encoding or plural rule
error aborts construction and no partial catalog is returned.

Python 3.13+. External dependency: Babel (fallback_locale rules only).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import BinaryIO

from babel.core import UnknownLocaleError

from molexengine.binary import ByteCursor
from molexengine.constants import (
    BE_MAGIC,
    CONTEXT_SEPARATOR,
    DEFAULT_ENCODING,
    LE_MAGIC,
    PLURAL_SEPARATOR,
    SUPPORTED_MAJOR_REVISION,
    TABLE_ENTRY_SIZE,
)
from molexengine.diagnostics import (
    BadMagicError,
    ErrorTemplate,
    InvalidEncodingError,
    PluralSyntaxError,
    SourceTooLargeError,
    UnsupportedRevisionError,
)
from molexengine.enums import ByteOrder
from molexengine.plural import PluralResolver, compile_plural
from molexengine.plural.cldr import plural_forms_for_locale

from .catalog import Catalog
from .config import ParserConfig, text_encoding_name
from .message import Message
from .metadata import CatalogMetadata, extract_metadata, parse_plural_forms

__all__ = ["ByteSource", "parse_catalog"]

logger = logging.getLogger(__name__)

type ByteSource = bytes | bytearray | memoryview | BinaryIO

_CONTEXT_DELIMITER = CONTEXT_SEPARATOR.encode("ascii")
_PLURAL_DELIMITER = PLURAL_SEPARATOR.encode("ascii")

_MAGIC_SIZE = len(LE_MAGIC)


@dataclass(frozen=True, slots=True)
class _Header:
    major: int
    minor: int
    count: int
    originals_offset: int
    translations_offset: int
    hash_size: int
    hash_offset: int


@dataclass(frozen=True, slots=True)
class _RawEntry:
    original: bytes
    original_offset: int
    translation: bytes
    translation_offset: int


def parse_catalog(source: ByteSource, config: ParserConfig | None = None) -> Catalog:
    """Parse a binary catalog into a Catalog.

    Args:
        source: Catalog bytes, or a binary file object that is read fully
        config: Parser options (default: ParserConfig())

    Returns:
        Immutable Catalog

    Raises:
        BadMagicError: Input does not start with a recognized magic number
        UnsupportedRevisionError: Major revision is not 0
        TruncatedInputError: Header is cut short
        InvalidOffsetError: A table or string lies outside the buffer
        InvalidEncodingError: A string cannot be decoded
        SourceTooLargeError: Input exceeds config.max_source_size
        PluralSyntaxError: The Plural-Forms rule is malformed

    Example:
        >>> with open("locale/lt/LC_MESSAGES/app.mo", "rb") as f:  # doctest: +SKIP
        ...     catalog = parse_catalog(f)
        >>> catalog.ngettext("File", "Files", 3)  # doctest: +SKIP
        'Failai'
    """
    config = config if config is not None else ParserConfig()
    data = _read_source(source)

    if config.max_source_size and len(data) > config.max_source_size:
        raise SourceTooLargeError(
            ErrorTemplate.source_too_large(len(data), config.max_source_size),
            size=len(data),
            limit=config.max_source_size,
        )

    return _ContainerParser(data, config).parse()


def _read_source(source: ByteSource) -> bytes:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    return bytes(source.read())


class _ContainerParser:
    """One-shot parser over an in-memory buffer."""

    __slots__ = ("_config", "_data")

    def __init__(self, data: bytes, config: ParserConfig) -> None:
        self._data = data
        self._config = config

    def parse(self) -> Catalog:
        cursor = self._read_magic()
        header, cursor = self._read_header(cursor)

        entries = self._read_entries(cursor, header)
        header_entry = next((entry for entry in entries if not entry.original), None)

        encoding = self._select_encoding(header_entry)
        metadata = CatalogMetadata()
        if header_entry is not None:
            logger.debug("Header record found at offset %d", header_entry.translation_offset)
            metadata = extract_metadata(
                self._decode(header_entry.translation, header_entry.translation_offset, encoding)
            )

        messages = [
            self._build_message(entry, encoding) for entry in entries if entry.original
        ]
        resolver = self._build_resolver(metadata)

        catalog = Catalog(
            messages,
            resolver=resolver,
            metadata=metadata,
            byte_order=cursor.order,
            revision=(header.major, header.minor),
        )
        logger.info(
            "Catalog loaded: %d entries (%s-endian, revision %d.%d, encoding %s, %s plural rule)",
            len(catalog),
            "little" if cursor.order is ByteOrder.LITTLE else "big",
            header.major,
            header.minor,
            encoding,
            resolver.kind,
        )
        return catalog

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def _read_magic(self) -> ByteCursor:
        magic = self._data[:_MAGIC_SIZE]
        if magic == LE_MAGIC:
            order = ByteOrder.LITTLE
        elif magic == BE_MAGIC:
            order = ByteOrder.BIG
        else:
            raise BadMagicError(ErrorTemplate.bad_magic(magic))
        return ByteCursor(self._data, _MAGIC_SIZE, order)

    def _read_header(self, cursor: ByteCursor) -> tuple[_Header, ByteCursor]:
        revision = cursor.read_u32()
        major, minor = revision.value >> 16, revision.value & 0xFFFF
        if major != SUPPORTED_MAJOR_REVISION:
            raise UnsupportedRevisionError(
                ErrorTemplate.unsupported_revision(major, minor),
                major=major,
                minor=minor,
            )

        cursor = revision.cursor
        fields: list[int] = []
        for _ in range(5):
            result = cursor.read_u32()
            fields.append(result.value)
            cursor = result.cursor

        count, originals_offset, translations_offset, hash_size, hash_offset = fields
        header = _Header(
            major=major,
            minor=minor,
            count=count,
            originals_offset=originals_offset,
            translations_offset=translations_offset,
            hash_size=hash_size,
            hash_offset=hash_offset,
        )
        logger.debug(
            "Header: %d entries, originals at %d, translations at %d, hash table %d@%d",
            count,
            originals_offset,
            translations_offset,
            hash_size,
            hash_offset,
        )
        return header, cursor

    def _read_entries(self, cursor: ByteCursor, header: _Header) -> list[_RawEntry]:
        table_size = header.count * TABLE_ENTRY_SIZE
        # Validate both tables as a whole before walking them entry by entry.
        cursor.slice_at(header.originals_offset, table_size)
        cursor.slice_at(header.translations_offset, table_size)

        entries: list[_RawEntry] = []
        for index in range(header.count):
            original, original_offset = self._read_string(
                cursor, header.originals_offset + index * TABLE_ENTRY_SIZE
            )
            translation, translation_offset = self._read_string(
                cursor, header.translations_offset + index * TABLE_ENTRY_SIZE
            )
            entries.append(_RawEntry(original, original_offset, translation, translation_offset))
        return entries

    @staticmethod
    def _read_string(cursor: ByteCursor, table_entry: int) -> tuple[bytes, int]:
        length = cursor.u32_at(table_entry)
        offset = cursor.u32_at(table_entry + 4)
        return cursor.slice_at(offset, length), offset

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def _select_encoding(self, header_entry: _RawEntry | None) -> str:
        if self._config.encoding is not None:
            logger.debug("Using encoding override: %s", self._config.encoding)
            return self._config.encoding
        if header_entry is None:
            return DEFAULT_ENCODING

        # Charset names are ASCII; latin-1 decodes any byte sequence.
        declared = extract_metadata(header_entry.translation.decode("latin-1")).charset
        if declared is None:
            return DEFAULT_ENCODING
        try:
            encoding = text_encoding_name(declared)
        except LookupError as e:
            logger.warning("Unusable charset in header (%s); decoding as %s", e, DEFAULT_ENCODING)
            return DEFAULT_ENCODING
        logger.debug("Using header charset: %s", encoding)
        return encoding

    @staticmethod
    def _decode(raw: bytes, offset: int, encoding: str) -> str:
        try:
            return raw.decode(encoding)
        except UnicodeError as e:
            # Some codecs raise a bare UnicodeError without a position.
            position = offset + getattr(e, "start", 0)
            reason = getattr(e, "reason", str(e))
            raise InvalidEncodingError(
                ErrorTemplate.invalid_encoding(encoding, position, reason),
                encoding=encoding,
                offset=position,
            ) from e

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    def _build_message(self, entry: _RawEntry, encoding: str) -> Message:
        original = ByteCursor(entry.original)

        context: str | None = None
        head = original.read_until(_CONTEXT_DELIMITER)
        if head.cursor.pos > len(head.value):
            context = self._decode(head.value, entry.original_offset, encoding)
            original = head.cursor

        id_start = entry.original_offset + original.pos
        singular = original.read_until(_PLURAL_DELIMITER)
        msgid = self._decode(singular.value, id_start, encoding)

        plural_id: str | None = None
        rest = singular.cursor
        if rest.pos > original.pos + len(singular.value):
            plural_id = self._decode(
                rest.read_bytes(rest.remaining).value,
                entry.original_offset + rest.pos,
                encoding,
            )

        forms: list[str] = []
        position = entry.translation_offset
        for run in ByteCursor(entry.translation).split(_PLURAL_DELIMITER):
            forms.append(self._decode(run, position, encoding))
            position += len(run) + len(_PLURAL_DELIMITER)

        return Message(msgid, context=context, forms=tuple(forms), plural_id=plural_id)

    # ------------------------------------------------------------------
    # Plural rule
    # ------------------------------------------------------------------

    def _build_resolver(self, metadata: CatalogMetadata) -> PluralResolver:
        if not self._config.parse_plural_rules:
            logger.debug("Plural rule parsing disabled; using default rule")
            return PluralResolver.default()

        if metadata.plural_expression:
            return compile_plural(
                metadata.plural_expression, max_depth=self._config.max_nesting_depth
            )

        if self._config.fallback_locale is not None:
            return self._locale_resolver(self._config.fallback_locale)

        return PluralResolver.default()

    def _locale_resolver(self, locale_code: str) -> PluralResolver:
        try:
            plural_forms = plural_forms_for_locale(locale_code)
        except (UnknownLocaleError, ValueError) as e:
            logger.warning("No CLDR plural rule for %r (%s); using default rule", locale_code, e)
            return PluralResolver.default()

        _, expression = parse_plural_forms(plural_forms)
        if not expression:
            return PluralResolver.default()

        try:
            resolver = compile_plural(expression, max_depth=self._config.max_nesting_depth)
        except PluralSyntaxError as e:
            logger.warning(
                "CLDR plural rule for %r is not expressible as a gettext rule (%s); "
                "using default rule",
                locale_code,
                e.diagnostic or e,
            )
            return PluralResolver.default()

        logger.debug("Using CLDR plural rule for %s: %s", locale_code, plural_forms)
        return resolver
