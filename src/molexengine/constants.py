"""Shared constants for MOLexEngine.

This module provides centralized configuration constants used across
binary, plural and catalog packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Container format: Magic sequences, header layout, separators
- Depth limits: Recursion protection for plural rule compilation
- Input limits: DoS prevention via size constraints

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Container format
    "LE_MAGIC",
    "BE_MAGIC",
    "HEADER_SIZE",
    "TABLE_ENTRY_SIZE",
    "SUPPORTED_MAJOR_REVISION",
    "CONTEXT_SEPARATOR",
    "PLURAL_SEPARATOR",
    "DEFAULT_ENCODING",
    # Depth limits
    "MAX_DEPTH",
    # Input limits
    "MAX_SOURCE_SIZE",
    "MAX_PLURAL_RULE_LENGTH",
]

# ============================================================================
# CONTAINER FORMAT
# ============================================================================
#
# Layout of the fixed header (seven 32-bit words):
#
#   magic | revision | N | orig_table_offset | trans_table_offset
#         | hash_size | hash_offset
#
# The magic number 0x950412de is stored in the writer's byte order, so the
# first four bytes select the decode mode for every following integer.
#
# ============================================================================

# Magic number as written by a little-endian producer.
LE_MAGIC: bytes = b"\xde\x12\x04\x95"

# Magic number as written by a big-endian producer.
BE_MAGIC: bytes = b"\x95\x04\x12\xde"

# Seven 32-bit header words.
HEADER_SIZE: int = 28

# Each string table entry is a (length, offset) pair of 32-bit words.
TABLE_ENTRY_SIZE: int = 8

# Only major revision 0 is understood. Minor revisions are accepted.
SUPPORTED_MAJOR_REVISION: int = 0

# Separates msgctxt from msgid in original strings (ASCII EOT).
CONTEXT_SEPARATOR: str = "\x04"

# Separates singular from plural ids and translated plural forms.
PLURAL_SEPARATOR: str = "\x00"

# Used when neither the caller nor the header declares a charset.
DEFAULT_ENCODING: str = "utf-8"

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum expression-tree depth of a compiled plural rule.
# Real Plural-Forms rules rarely nest deeper than 10 levels; the Arabic rule,
# one of the most complex in common use, stays under 15.
# The evaluator is recursive, so this also bounds evaluation stack usage.
MAX_DEPTH: int = 100

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum catalog size in bytes (10 MB).
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# Plural rule text longer than this is rejected before tokenizing.
MAX_PLURAL_RULE_LENGTH: int = 1000
