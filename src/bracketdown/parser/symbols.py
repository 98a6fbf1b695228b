"""Symbol types produced by the tokenizer.

A line parses into a flat sequence of symbols; bracket tokens nest
further symbols inside them. The set is closed: RawChar, Hashtag, and
BracketToken are the only members.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from ..config import CONTROL_BOLD, CONTROL_STRIKE, CONTROL_UNDERLINE
from .hashtag import Hashtag


@dataclass(frozen=True, slots=True)
class RawChar:
    """A literal character not absorbed into any token."""

    char: str


class BracketVariant(Enum):
    EMPTY = "empty"  # `[]`
    DOUBLE_BOLD = "double_bold"  # `[[text]]`
    CONTROL_BLOCK = "control_block"  # `[* text]`, `[- text]`, `[_ text]`
    LINK = "link"  # `[text]`
    UNSUPPORTED = "unsupported"  # `[` at end of line, unterminated link


class Control(Enum):
    BOLD = CONTROL_BOLD
    STRIKE = CONTROL_STRIKE
    UNDERLINE = CONTROL_UNDERLINE


@dataclass(frozen=True)
class BracketToken:
    """A `[...]` construct and its resolved variant.

    ``raw_chars`` is always the exact text this token consumed, so a
    token that renders as fallback reproduces its input unchanged.
    """

    raw_chars: str
    variant: BracketVariant
    inner_symbols: tuple[Symbol, ...] = ()
    control: Control | None = None
    level: int = 0

    @property
    def is_fallback(self) -> bool:
        """True when this token renders as its raw text."""
        return not self.inner_symbols or self.variant in (BracketVariant.EMPTY, BracketVariant.UNSUPPORTED)


Symbol = Union[RawChar, Hashtag, BracketToken]
