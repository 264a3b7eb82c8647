"""Message: one translatable catalog entry.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from molexengine.constants import CONTEXT_SEPARATOR

__all__ = ["Message", "make_key"]


def make_key(msgid: str, context: str | None = None) -> str:
    """Build the composite lookup key for an id and optional context.

    The separator never occurs inside either component, so distinct
    (context, id) pairs never collide.

    Example:
        >>> make_key("Image")
        'Image'
        >>> make_key("Image", "context")
        'context\\x04Image'
    """
    if context is None:
        return msgid
    return f"{context}{CONTEXT_SEPARATOR}{msgid}"


@dataclass(frozen=True, slots=True)
class Message:
    """One translatable unit.

    Attributes:
        id: Source string (singular form for plural entries)
        context: Disambiguating context, or None
        forms: Translated forms; index 0 is the default/singular form
        plural_id: Source plural string, or None for non-plural entries

    Example:
        >>> message = Message("File", forms=("Failas", "Failai", "Failų"), plural_id="Files")
        >>> message.is_plural
        True
        >>> message.form(1)
        'Failai'
        >>> message.form(5) is None
        True
    """

    id: str
    context: str | None = None
    forms: tuple[str, ...] = ()
    plural_id: str | None = None

    @property
    def key(self) -> str:
        """Composite catalog key (see make_key)."""
        return make_key(self.id, self.context)

    @property
    def is_plural(self) -> bool:
        return self.plural_id is not None

    def form(self, index: int) -> str | None:
        """Return the translated form at index, or None if there is none.

        Negative indices never wrap around to the end of the forms.
        """
        if 0 <= index < len(self.forms):
            return self.forms[index]
        return None
