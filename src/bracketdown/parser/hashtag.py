"""Hashtag tokens: `#tag` runs up to whitespace or a bracket."""

from __future__ import annotations

from ..config import BRACKET_CLOSE, BRACKET_OPEN, DEFAULT_LINK_STYLE, HASHTAG_MARKER, LinkStyle
from .cursor import Cursor
from .link import page_target


def _is_tag_char(char: str | None) -> bool:
    return char is not None and not char.isspace() and char not in (BRACKET_OPEN, BRACKET_CLOSE)


class Hashtag:
    """A hashtag that absorbs characters greedily from the cursor.

    Construction consumes the marker; the tokenizer then drives
    ``can_accept_more``/``accept_next`` until the tag ends.
    """

    __slots__ = ("chars",)

    def __init__(self, cursor: Cursor) -> None:
        self.chars = [cursor.take()]

    def __repr__(self) -> str:
        return f"Hashtag({self.raw!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hashtag):
            return NotImplemented
        return self.chars == other.chars

    @staticmethod
    def matches(cursor: Cursor) -> bool:
        return cursor.peek() == HASHTAG_MARKER and _is_tag_char(cursor.peek(1))

    def can_accept_more(self, cursor: Cursor) -> bool:
        return _is_tag_char(cursor.peek())

    def accept_next(self, cursor: Cursor) -> None:
        self.chars.append(cursor.take())

    @property
    def raw(self) -> str:
        return "".join(self.chars)

    @property
    def name(self) -> str:
        """Tag text without the marker."""
        return "".join(self.chars[1:])

    def render(self, style: LinkStyle = DEFAULT_LINK_STYLE) -> str:
        return f"[{self.raw}]({page_target(self.name, style)})"
