"""Tests for binary catalog parsing.

Catalogs are assembled with tests.helpers.mo_builder so every header field
can be corrupted independently.
"""

from __future__ import annotations

import io
import logging
import struct

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from molexengine import (
    BadMagicError,
    Catalog,
    ContainerError,
    InvalidEncodingError,
    InvalidOffsetError,
    ParserConfig,
    PluralSyntaxError,
    SourceTooLargeError,
    TruncatedInputError,
    UnsupportedRevisionError,
    parse_catalog,
)
from molexengine.constants import BE_MAGIC, LE_MAGIC
from molexengine.diagnostics import DiagnosticCode
from molexengine.enums import ByteOrder, ResolverKind
from tests.helpers.mo_builder import LITHUANIAN_RULE, build_mo, header_record
from tests.strategies.catalog import catalog_entries, encode_original


class TestMagic:
    def test_little_endian(self, lithuanian_catalog_bytes: bytes) -> None:
        assert lithuanian_catalog_bytes[:4] == LE_MAGIC
        catalog = parse_catalog(lithuanian_catalog_bytes)
        assert catalog.byte_order is ByteOrder.LITTLE

    def test_big_endian(self) -> None:
        data = build_mo(
            [header_record(plural_forms=LITHUANIAN_RULE), ("File\x00Files", "Failas\x00Failai\x00Failų")],
            byte_order=">",
        )
        assert data[:4] == BE_MAGIC
        catalog = parse_catalog(data)
        assert catalog.byte_order is ByteOrder.BIG
        assert catalog.ngettext("File", "Files", 5) == "Failai"

    def test_byte_order_does_not_change_content(self) -> None:
        entries = [header_record(), ("a", "b"), ("ctx\x04a", "c")]
        little = parse_catalog(build_mo(entries, byte_order="<"))
        big = parse_catalog(build_mo(entries, byte_order=">"))
        assert dict(little.messages) == dict(big.messages)

    @pytest.mark.parametrize("data", [b"", b"\xde\x12", b"\x00\x00\x00\x00", b"\xde\x12\x04\x96" + b"\x00" * 24])
    def test_bad_magic(self, data: bytes) -> None:
        with pytest.raises(BadMagicError) as exc_info:
            parse_catalog(data)
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.BAD_MAGIC

    @given(st.binary(max_size=64))
    def test_any_other_prefix_is_bad_magic(self, data: bytes) -> None:
        """PROPERTY: input not starting with a magic number always fails the same way."""
        assume(data[:4] not in (LE_MAGIC, BE_MAGIC))
        with pytest.raises(BadMagicError):
            parse_catalog(data)

    def test_bad_magic_is_container_error(self) -> None:
        with pytest.raises(ContainerError):
            parse_catalog(b"GNU gettext catalog")


class TestRevision:
    def test_minor_revision_is_accepted(self) -> None:
        catalog = parse_catalog(build_mo([("a", "b")], revision=1))
        assert catalog.revision == (0, 1)
        assert catalog.gettext("a") == "b"

    @pytest.mark.parametrize("revision", [1 << 16, (1 << 16) | 1, 0xFFFF0000])
    def test_major_revision_is_rejected(self, revision: int) -> None:
        with pytest.raises(UnsupportedRevisionError) as exc_info:
            parse_catalog(build_mo([("a", "b")], revision=revision))
        assert exc_info.value.major == revision >> 16
        assert exc_info.value.minor == revision & 0xFFFF


class TestStructuralErrors:
    def test_truncated_header(self) -> None:
        data = build_mo([("a", "b")])[:10]
        with pytest.raises(TruncatedInputError) as exc_info:
            parse_catalog(data)
        assert exc_info.value.offset == 8

    def test_magic_only(self) -> None:
        with pytest.raises(TruncatedInputError):
            parse_catalog(LE_MAGIC)

    def test_truncated_after_header(self) -> None:
        """Tables that were cut off are referenced out of range."""
        data = build_mo([("a", "b"), ("c", "d")])[:40]
        with pytest.raises(InvalidOffsetError):
            parse_catalog(data)

    def test_entry_count_exceeds_tables(self) -> None:
        with pytest.raises(InvalidOffsetError):
            parse_catalog(build_mo([("a", "b")], count=1000))

    def test_table_offset_out_of_range(self) -> None:
        with pytest.raises(InvalidOffsetError) as exc_info:
            parse_catalog(build_mo([("a", "b")], originals_offset=10**6))
        assert exc_info.value.offset == 10**6

    def test_string_offset_out_of_range(self) -> None:
        data = bytearray(build_mo([("a", "b")]))
        # First originals table entry: (length, offset) at byte 28.
        struct.pack_into("<I", data, 32, 0xFFFFFFF0)
        with pytest.raises(InvalidOffsetError):
            parse_catalog(bytes(data))

    def test_string_length_out_of_range(self) -> None:
        data = bytearray(build_mo([("a", "b")]))
        struct.pack_into("<I", data, 36, 10**6)
        with pytest.raises(InvalidOffsetError):
            parse_catalog(bytes(data))

    def test_error_messages_are_formatted(self) -> None:
        with pytest.raises(InvalidOffsetError) as exc_info:
            parse_catalog(build_mo([("a", "b")], count=1000))
        assert str(exc_info.value).startswith("error[INVALID_OFFSET]")


class TestEntries:
    def test_lithuanian_catalog(self, lithuanian_catalog_bytes: bytes) -> None:
        catalog = parse_catalog(lithuanian_catalog_bytes)
        assert len(catalog) == 3
        assert catalog.gettext("Text") == "Tekstas"
        assert catalog.pgettext("context", "Image") == "Paveikslas"

        message = catalog.get("File")
        assert message is not None
        assert message.plural_id == "Files"
        assert message.forms == ("Failas", "Failai", "Failų")

    def test_header_is_not_a_message(self, lithuanian_catalog_bytes: bytes) -> None:
        catalog = parse_catalog(lithuanian_catalog_bytes)
        assert "" not in catalog
        assert catalog.get("") is None

    def test_context_entry(self, lithuanian_catalog_bytes: bytes) -> None:
        message = parse_catalog(lithuanian_catalog_bytes).get("Image", context="context")
        assert message is not None
        assert message.context == "context"
        assert message.id == "Image"
        assert not message.is_plural

    def test_empty_context_differs_from_no_context(self) -> None:
        catalog = parse_catalog(build_mo([("\x04Save", "with"), ("Save", "without")]))
        assert catalog.pgettext("", "Save") == "with"
        assert catalog.gettext("Save") == "without"

    def test_context_with_plural(self) -> None:
        catalog = parse_catalog(build_mo([("menu\x04File\x00Files", "Datei\x00Dateien")]))
        message = catalog.get("File", context="menu")
        assert message is not None
        assert message.plural_id == "Files"
        assert catalog.npgettext("menu", "File", "Files", 2) == "Dateien"

    def test_empty_catalog(self) -> None:
        catalog = parse_catalog(build_mo([]))
        assert len(catalog) == 0
        assert catalog.gettext("anything") == "anything"
        assert catalog.resolver.is_default

    def test_empty_translation(self) -> None:
        message = parse_catalog(build_mo([("Empty", "")])).get("Empty")
        assert message is not None
        assert message.forms == ("",)

    def test_empty_plural_forms_are_kept(self) -> None:
        message = parse_catalog(build_mo([("a\x00b", "\x00two\x00")])).get("a")
        assert message is not None
        assert message.forms == ("", "two", "")

    def test_unsorted_tables(self) -> None:
        entries = [("zebra", "Zebra"), ("apple", "Apfel"), header_record()]
        catalog = parse_catalog(build_mo(entries, sort=False))
        assert catalog.gettext("zebra") == "Zebra"
        assert catalog.gettext("apple") == "Apfel"
        assert catalog.metadata.charset == "UTF-8"

    def test_duplicate_keys_last_wins(self, debug_logging: pytest.LogCaptureFixture) -> None:
        catalog = parse_catalog(build_mo([("dup", "first"), ("dup", "second")]))
        assert catalog.gettext("dup") == "second"
        assert len(catalog) == 1
        assert any("Replacing duplicate entry" in r.getMessage() for r in debug_logging.records)

    @given(catalog_entries())
    def test_generated_entries_are_found(
        self, entries: list[tuple[str | None, str, list[str]]]
    ) -> None:
        """PROPERTY: every written (context, id) pair reads back with its forms."""
        records = [
            (encode_original(context, msgid), "\x00".join(forms))
            for context, msgid, forms in entries
        ]
        catalog = parse_catalog(build_mo(records))
        assert len(catalog) == len(entries)
        for context, msgid, forms in entries:
            message = catalog.get(msgid, context)
            assert message is not None
            assert message.forms == tuple(forms)


class TestEncoding:
    def test_utf8_default_without_header(self) -> None:
        catalog = parse_catalog(build_mo([("Grüße", "Sveiki")]))
        assert catalog.gettext("Grüße") == "Sveiki"

    def test_header_charset(self) -> None:
        entries = [header_record(charset="ISO-8859-1"), ("Grüße", "Saluts à tous")]
        catalog = parse_catalog(build_mo(entries, encoding="latin-1"))
        assert catalog.gettext("Grüße") == "Saluts à tous"
        assert catalog.metadata.charset == "ISO-8859-1"

    def test_override_wins_over_header(self) -> None:
        data = build_mo([header_record(charset="UTF-8"), ("key", "ü")])
        catalog = parse_catalog(data, ParserConfig(encoding="latin-1"))
        assert catalog.gettext("key") == "Ã¼"

    def test_invalid_bytes(self) -> None:
        data = build_mo([header_record(), (b"key", b"\xffbad")])
        with pytest.raises(InvalidEncodingError) as exc_info:
            parse_catalog(data)
        assert exc_info.value.offset == data.index(b"\xffbad")
        assert exc_info.value.encoding == "utf-8"

    def test_invalid_bytes_in_plural_form_report_form_offset(self) -> None:
        data = build_mo([(b"a\x00b", b"ok\x00\xfe")])
        with pytest.raises(InvalidEncodingError) as exc_info:
            parse_catalog(data)
        assert exc_info.value.offset == data.index(b"\xfe")

    def test_unknown_charset_falls_back_to_utf8(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.WARNING, logger="molexengine")
        catalog = parse_catalog(build_mo([header_record(charset="CHARSET"), ("a", "ą")]))
        assert catalog.gettext("a") == "ą"
        assert any(
            r.levelno == logging.WARNING and "Unknown encoding" in r.getMessage()
            for r in caplog.records
        )

    @pytest.mark.parametrize("charset", ["hex", "base64", "rot13"])
    def test_bytes_codec_charset_falls_back_to_utf8(
        self, charset: str, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.WARNING, logger="molexengine")
        catalog = parse_catalog(build_mo([header_record(charset=charset), ("a", "ą")]))
        assert catalog.gettext("a") == "ą"
        assert any("Not a text encoding" in r.getMessage() for r in caplog.records)

    def test_codec_error_without_position_is_structured(self) -> None:
        data = build_mo([(b"key", b"\xffvalue")])
        with pytest.raises(InvalidEncodingError) as exc_info:
            parse_catalog(data, ParserConfig(encoding="idna"))
        assert exc_info.value.encoding == "idna"
        assert exc_info.value.offset >= data.index(b"\xffvalue")


class TestPluralRule:
    def test_header_rule_is_compiled(self, lithuanian_catalog_bytes: bytes) -> None:
        catalog = parse_catalog(lithuanian_catalog_bytes)
        assert catalog.resolver.kind is ResolverKind.EXPRESSION
        assert catalog.metadata.nplurals == 3

    def test_missing_rule_uses_default(self) -> None:
        catalog = parse_catalog(build_mo([header_record(), ("a\x00b", "A\x00B")]))
        assert catalog.resolver.is_default

    def test_malformed_rule_fails_construction(self) -> None:
        data = build_mo([header_record(plural_forms="nplurals=2; plural=n ==;"), ("a", "b")])
        with pytest.raises(PluralSyntaxError) as exc_info:
            parse_catalog(data)
        assert exc_info.value.position == 4

    def test_disabled_rule_parsing_skips_malformed_rule(self) -> None:
        data = build_mo([header_record(plural_forms="nplurals=2; plural=n ==;"), ("a", "b")])
        catalog = parse_catalog(data, ParserConfig(parse_plural_rules=False))
        assert catalog.resolver.is_default
        assert catalog.gettext("a") == "b"

    def test_deep_rule_respects_configured_depth(self) -> None:
        rule = "nplurals=2; plural=" + "(" * 10 + "n != 1" + ")" * 10 + ";"
        data = build_mo([header_record(plural_forms=rule)])
        assert parse_catalog(data).resolver.kind is ResolverKind.EXPRESSION
        with pytest.raises(PluralSyntaxError):
            parse_catalog(data, ParserConfig(max_nesting_depth=5))

    def test_fallback_locale_supplies_rule(self) -> None:
        data = build_mo([header_record(), ("File\x00Files", "Файл\x00Файла\x00Файлов")])
        catalog = parse_catalog(data, ParserConfig(fallback_locale="ru"))
        assert catalog.resolver.kind is ResolverKind.EXPRESSION
        assert [catalog.ngettext("File", "Files", n) for n in (1, 3, 5, 21)] == [
            "Файл",
            "Файла",
            "Файлов",
            "Файл",
        ]

    def test_header_rule_wins_over_fallback_locale(self, lithuanian_catalog_bytes: bytes) -> None:
        catalog = parse_catalog(lithuanian_catalog_bytes, ParserConfig(fallback_locale="ja"))
        assert catalog.plural_index(2) == 1

    def test_unknown_fallback_locale_uses_default(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.WARNING, logger="molexengine")
        catalog = parse_catalog(build_mo([("a", "b")]), ParserConfig(fallback_locale="xx_INVALID"))
        assert catalog.resolver.is_default
        assert any("No CLDR plural rule" in r.getMessage() for r in caplog.records)

    def test_division_by_zero_does_not_fail_construction(self) -> None:
        data = build_mo([header_record(plural_forms="nplurals=2; plural=n % 0;")])
        assert parse_catalog(data).resolver.kind is ResolverKind.EXPRESSION


class TestSources:
    def test_file_object(self, lithuanian_catalog_bytes: bytes) -> None:
        catalog = parse_catalog(io.BytesIO(lithuanian_catalog_bytes))
        assert catalog.gettext("Text") == "Tekstas"

    @pytest.mark.parametrize("wrap", [bytearray, memoryview])
    def test_buffer_types(self, lithuanian_catalog_bytes: bytes, wrap: type) -> None:
        catalog = parse_catalog(wrap(lithuanian_catalog_bytes))
        assert catalog.gettext("Text") == "Tekstas"

    def test_from_bytes_alias(self, lithuanian_catalog_bytes: bytes) -> None:
        catalog = Catalog.from_bytes(lithuanian_catalog_bytes)
        assert catalog.gettext("Text") == "Tekstas"

    def test_source_too_large(self, lithuanian_catalog_bytes: bytes) -> None:
        config = ParserConfig(max_source_size=64)
        with pytest.raises(SourceTooLargeError) as exc_info:
            parse_catalog(lithuanian_catalog_bytes, config)
        assert exc_info.value.size == len(lithuanian_catalog_bytes)
        assert exc_info.value.limit == 64

    def test_size_limit_disabled(self, lithuanian_catalog_bytes: bytes) -> None:
        catalog = parse_catalog(lithuanian_catalog_bytes, ParserConfig(max_source_size=0))
        assert len(catalog) == 3

    def test_parsing_is_idempotent(self, lithuanian_catalog_bytes: bytes) -> None:
        first = parse_catalog(lithuanian_catalog_bytes)
        second = parse_catalog(lithuanian_catalog_bytes)
        assert dict(first.messages) == dict(second.messages)
        assert first.metadata == second.metadata

    def test_load_is_logged(
        self, lithuanian_catalog_bytes: bytes, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.INFO, logger="molexengine")
        parse_catalog(lithuanian_catalog_bytes)
        assert any("Catalog loaded: 3 entries" in r.getMessage() for r in caplog.records)
