"""Hypothesis strategies for MOLexEngine property-based testing.

Strategies are organized by domain:

- plural: Plural rule text, counts and known-invalid rules
- catalog: Message ids, contexts and translated forms

Usage:
    from tests.strategies import plural_rule_texts, counts
    from tests.strategies.catalog import catalog_entries

Event-Emitting Strategies (HypoFuzz-Optimized):
    - plural_rule_texts
"""

from .catalog import (
    catalog_entries,
    catalog_text,
    encode_original,
    optional_contexts,
    translated_forms,
)
from .plural import BINARY_OPERATORS, INVALID_RULES, counts, plural_rule_texts

__all__ = [
    "BINARY_OPERATORS",
    "INVALID_RULES",
    "catalog_entries",
    "catalog_text",
    "counts",
    "encode_original",
    "optional_contexts",
    "plural_rule_texts",
    "translated_forms",
]
