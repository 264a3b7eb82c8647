"""Catalog - queryable translations parsed from one binary catalog.

Python 3.13+. External dependency: Babel (via CatalogMetadata.locale).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from molexengine.diagnostics import PluralEvaluationError
from molexengine.enums import ByteOrder
from molexengine.plural import PluralResolver

from .message import Message, make_key
from .metadata import CatalogMetadata

if TYPE_CHECKING:
    from .config import ParserConfig
    from .parser import ByteSource

__all__ = ["Catalog"]

logger = logging.getLogger(__name__)

# Ids are logged truncated.
_LOG_TRUNCATE: int = 50


class Catalog:
    """Immutable set of translations with plural-aware lookup.

    Lookups never raise. A missing entry degrades to the source string:

    - ``gettext(id)`` returns ``id``
    - ``ngettext(id, id_plural, n)`` returns ``id`` if ``n == 1`` else
      ``id_plural``

    Fallback Asymmetry:
        The two-string fallback chooses singular/plural by the literal test
        ``n == 1``, independent of the catalog's plural rule. The rule only
        selects among the translated forms that exist. A language whose rule
        puts ``n == 0`` in the singular form still gets ``id_plural`` for
        ``n == 0`` when the entry is missing. This matches the reference
        gettext behaviour and is intentional.

    Thread Safety:
        A Catalog is never mutated after construction. Once built it can be
        shared across threads without locking.

    Examples:
        >>> catalog = Catalog([
        ...     Message("Text", forms=("Tekstas", "Tekstai")),
        ...     Message("Image", context="menu", forms=("Paveikslas",)),
        ... ])
        >>> catalog.gettext("Text")
        'Tekstas'
        >>> catalog.gettext("Unknown")
        'Unknown'
        >>> catalog.ngettext("Text", "Texts", 2)
        'Tekstai'
        >>> catalog.gettext("Image")
        'Image'
        >>> catalog.pgettext("menu", "Image")
        'Paveikslas'
    """

    __slots__ = ("_byte_order", "_messages", "_metadata", "_resolver", "_revision")

    def __init__(
        self,
        messages: Iterable[Message] = (),
        *,
        resolver: PluralResolver | None = None,
        metadata: CatalogMetadata | None = None,
        byte_order: ByteOrder = ByteOrder.LITTLE,
        revision: tuple[int, int] = (0, 0),
    ) -> None:
        """Initialize catalog from messages.

        Args:
            messages: Entries in catalog order. A later entry with the same
                (context, id) key replaces an earlier one.
            resolver: Plural resolver (default: built-in ``n != 1``)
            metadata: Header metadata (default: empty)
            byte_order: Byte order of the source container
            revision: (major, minor) revision of the source container
        """
        entries: dict[str, Message] = {}
        for message in messages:
            key = message.key
            if key in entries:
                logger.debug("Replacing duplicate entry: %r", key[:_LOG_TRUNCATE])
            entries[key] = message

        self._messages: Mapping[str, Message] = MappingProxyType(entries)
        self._resolver = resolver if resolver is not None else PluralResolver.default()
        self._metadata = metadata if metadata is not None else CatalogMetadata()
        self._byte_order = byte_order
        self._revision = revision

    @classmethod
    def from_bytes(cls, source: ByteSource, config: ParserConfig | None = None) -> Catalog:
        """Parse a binary catalog. Alias for ``parse_catalog``.

        Raises:
            CatalogError: Any container or plural rule error
        """
        from .parser import parse_catalog  # noqa: PLC0415 - circular

        return parse_catalog(source, config)

    # ------------------------------------------------------------------
    # Read-only properties
    # ------------------------------------------------------------------

    @property
    def messages(self) -> Mapping[str, Message]:
        """Read-only view of entries by composite key."""
        return self._messages

    @property
    def resolver(self) -> PluralResolver:
        return self._resolver

    @property
    def metadata(self) -> CatalogMetadata:
        return self._metadata

    @property
    def byte_order(self) -> ByteOrder:
        return self._byte_order

    @property
    def revision(self) -> tuple[int, int]:
        return self._revision

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages.values())

    def __contains__(self, item: object) -> bool:
        """Check for an id (``str``) or a ``(context, id)`` tuple."""
        match item:
            case str():
                return item in self._messages
            case (str() | None as context, str() as msgid):
                return make_key(msgid, context) in self._messages
            case _:
                return False

    def __repr__(self) -> str:
        return (
            f"Catalog(messages={len(self._messages)}, "
            f"resolver={self._resolver.kind}, language={self._metadata.language!r})"
        )

    def get(self, msgid: str, context: str | None = None) -> Message | None:
        """Return the entry for (context, id), or None."""
        return self._messages.get(make_key(msgid, context))

    def plural_index(self, n: int) -> int:
        """Return the raw resolver output for n.

        Raises:
            PluralEvaluationError: If the rule cannot be evaluated for n
        """
        return self._resolver.evaluate(n)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def gettext(self, msgid: str) -> str:
        """Return the translation of msgid, or msgid itself."""
        return self._singular_lookup(msgid, msgid)

    def ngettext(self, msgid: str, msgid_plural: str, n: int) -> str:
        """Return the translated form for count n.

        Falls back to msgid when ``n == 1`` and msgid_plural otherwise.
        """
        return self._plural_lookup(msgid, msgid, msgid_plural, n)

    def pgettext(self, context: str, msgid: str) -> str:
        """Return the translation of msgid in context, or msgid itself.

        The fallback never includes the context.
        """
        return self._singular_lookup(make_key(msgid, context), msgid)

    def npgettext(self, context: str, msgid: str, msgid_plural: str, n: int) -> str:
        """Context-qualified ngettext with the same fallback rule."""
        return self._plural_lookup(make_key(msgid, context), msgid, msgid_plural, n)

    def _singular_lookup(self, key: str, msgid: str) -> str:
        message = self._messages.get(key)
        if message is not None and message.forms:
            return message.forms[0]
        logger.debug("No translation for %r", key[:_LOG_TRUNCATE])
        return msgid

    def _plural_lookup(self, key: str, msgid: str, msgid_plural: str, n: int) -> str:
        message = self._messages.get(key)
        if message is not None:
            try:
                index = self._resolver.evaluate(n)
            except PluralEvaluationError as e:
                logger.warning("Plural rule failed for n=%s: %s", n, e.diagnostic or e)
            else:
                form = message.form(index)
                if form is not None:
                    return form
                logger.debug(
                    "No form %d for %r (%d available)",
                    index,
                    key[:_LOG_TRUNCATE],
                    len(message.forms),
                )
        else:
            logger.debug("No translation for %r", key[:_LOG_TRUNCATE])
        return msgid if n == 1 else msgid_plural
