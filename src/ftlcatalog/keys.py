"""Message key parsing.

A message key addresses either a message value ("welcome") or one of its
attributes ("welcome.title"). Keys are parsed once at the API boundary and
travel as MessageKey objects afterwards.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass

from ftlcatalog.diagnostics import InvalidKeyFormatError

__all__ = ["MessageKey", "parse_key"]


@dataclass(frozen=True, slots=True)
class MessageKey:
    """Parsed message key.

    Hashable, so it is used directly as the mapping key of locale collections.

    Attributes:
        id: Message identifier
        attribute: Attribute name, or None for the message value
    """

    id: str
    attribute: str | None = None

    def __str__(self) -> str:
        """Serialize as "id" or "id.attribute"."""
        if self.attribute is None:
            return self.id
        return f"{self.id}.{self.attribute}"


def parse_key(raw: str) -> MessageKey:
    """Parse a dotted message key.

    Args:
        raw: Key string; whitespace around the whole key is ignored,
            whitespace inside a segment is kept

    Returns:
        MessageKey with id and optional attribute

    Raises:
        InvalidKeyFormatError: More than one dot, or an empty segment

    Example:
        >>> parse_key("button.tooltip")
        MessageKey(id='button', attribute='tooltip')
        >>> parse_key(" hello ")
        MessageKey(id='hello', attribute=None)
    """
    segments = raw.strip().split(".")
    if len(segments) > 2 or any(not segment.strip() for segment in segments):
        raise InvalidKeyFormatError(raw)
    if len(segments) == 1:
        return MessageKey(segments[0])
    return MessageKey(segments[0], segments[1])
