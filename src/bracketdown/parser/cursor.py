"""Forward cursor over one line of markup."""

from __future__ import annotations


class Cursor:
    """Position-based view over an immutable line.

    The cursor only moves forward during normal parsing; ``mark``/``reset``
    give speculative parses a way to roll back. Nested parses share the
    same cursor, so whatever an inner parse consumes is consumed for the
    caller too.
    """

    __slots__ = ("text", "pos")

    def __init__(self, text: str, pos: int = 0) -> None:
        self.text = text
        self.pos = pos

    def __repr__(self) -> str:
        return f"Cursor(pos={self.pos}, remaining={self.text[self.pos:]!r})"

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    @property
    def remaining(self) -> int:
        """Number of characters not yet consumed."""
        return len(self.text) - self.pos

    def peek(self, offset: int = 0) -> str | None:
        """Return the character ``offset`` places ahead without consuming it."""
        index = self.pos + offset
        if index < len(self.text):
            return self.text[index]
        return None

    def take(self) -> str:
        """Consume and return the next character.

        Raises:
            IndexError: If the cursor is already at the end.
        """
        if self.at_end:
            raise IndexError("cursor is at end of input")
        char = self.text[self.pos]
        self.pos += 1
        return char

    def take_rest(self) -> str:
        """Consume everything that is left."""
        rest = self.text[self.pos:]
        self.pos = len(self.text)
        return rest

    def mark(self) -> int:
        return self.pos

    def reset(self, mark: int) -> None:
        self.pos = mark

    def since(self, mark: int) -> str:
        """Text consumed between ``mark`` and the current position."""
        return self.text[mark:self.pos]
