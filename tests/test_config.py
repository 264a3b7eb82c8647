"""Tests for ParserConfig validation."""

from __future__ import annotations

import dataclasses

import pytest

from molexengine import ParserConfig
from molexengine.constants import MAX_DEPTH, MAX_SOURCE_SIZE


class TestParserConfig:
    def test_defaults(self) -> None:
        config = ParserConfig()
        assert config.encoding is None
        assert config.parse_plural_rules is True
        assert config.fallback_locale is None
        assert config.max_source_size == MAX_SOURCE_SIZE
        assert config.max_nesting_depth == MAX_DEPTH

    @pytest.mark.parametrize(
        ("given_name", "canonical"),
        [("UTF8", "utf-8"), ("latin-1", "iso8859-1"), ("cp1251", "cp1251")],
    )
    def test_encoding_is_canonicalized(self, given_name: str, canonical: str) -> None:
        assert ParserConfig(encoding=given_name).encoding == canonical

    def test_unknown_encoding(self) -> None:
        with pytest.raises(ValueError, match="Unknown encoding"):
            ParserConfig(encoding="no-such-codec")

    @pytest.mark.parametrize("name", ["hex", "base64", "rot13", "zlib"])
    def test_bytes_codec_encoding_is_rejected(self, name: str) -> None:
        with pytest.raises(ValueError, match="Not a text encoding"):
            ParserConfig(encoding=name)

    def test_blank_fallback_locale(self) -> None:
        with pytest.raises(ValueError, match="fallback_locale"):
            ParserConfig(fallback_locale="  ")

    def test_negative_source_size(self) -> None:
        with pytest.raises(ValueError, match="max_source_size"):
            ParserConfig(max_source_size=-1)

    @pytest.mark.parametrize("depth", [0, -5])
    def test_non_positive_depth(self, depth: int) -> None:
        with pytest.raises(ValueError, match="max_nesting_depth"):
            ParserConfig(max_nesting_depth=depth)

    def test_frozen(self) -> None:
        config = ParserConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.encoding = "utf-8"  # type: ignore[misc]

    def test_replace_revalidates(self) -> None:
        with pytest.raises(ValueError, match="Unknown encoding"):
            dataclasses.replace(ParserConfig(), encoding="bogus")
