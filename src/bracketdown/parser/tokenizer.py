"""Recursive-descent tokenizer for bracket markup.

``parse_symbols`` walks a line left to right, handing `#` to the hashtag
collaborator and `[` to ``parse_bracket``. Bracket interiors are parsed
by calling ``parse_symbols`` again with `]` as the delimiter. When that
delimiter never shows up, the bracket gives up on the richer reading and
keeps the text it consumed as a literal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..config import BRACKET_CLOSE, BRACKET_OPEN, CONTROL_CHARS, MAX_BRACKET_DEPTH
from .cursor import Cursor
from .hashtag import Hashtag
from .symbols import BracketToken, BracketVariant, Control, RawChar, Symbol

log = logging.getLogger(__name__)


class DelimiterNotFound(Exception):
    """Raised when input runs out before a required delimiter."""

    def __init__(self, delimiter: str) -> None:
        self.delimiter = delimiter
        super().__init__(f"delimiter {delimiter!r} not found")


@dataclass(frozen=True)
class ParseResult:
    """Symbols collected by one tokenizer call.

    ``remaining`` counts the unconsumed characters, including the delimiter
    the call stopped at (the caller consumes it).
    """

    symbols: list[Symbol]
    remaining: int


def parse_symbols(cursor: Cursor, delimiter: str | None = None, depth: int = 0) -> ParseResult:
    """Tokenize from the cursor until ``delimiter`` or end of input.

    Args:
        cursor: Cursor to consume from; advanced in place.
        delimiter: Character that ends this call without being consumed.
        depth: Number of brackets enclosing this call.

    Returns:
        ParseResult with the collected symbols.

    Raises:
        DelimiterNotFound: If a delimiter was given and input ran out first.
    """
    symbols: list[Symbol] = []

    while not cursor.at_end:
        if Hashtag.matches(cursor):
            hashtag = Hashtag(cursor)
            while hashtag.can_accept_more(cursor):
                hashtag.accept_next(cursor)
            symbols.append(hashtag)
        elif cursor.peek() == BRACKET_OPEN:
            symbols.append(parse_bracket(cursor, depth))
        elif delimiter is not None and cursor.peek() == delimiter:
            return ParseResult(symbols, cursor.remaining)
        else:
            symbols.append(RawChar(cursor.take()))

    if delimiter is not None:
        raise DelimiterNotFound(delimiter)

    return ParseResult(symbols, 0)


def parse_line(line: str) -> list[Symbol]:
    """Tokenize a whole line. Never fails; malformed markup stays literal."""
    return parse_symbols(Cursor(line)).symbols


def parse_bracket(cursor: Cursor, depth: int = 0) -> BracketToken:
    """Parse a bracket token starting at `[`.

    Lookahead after `[` decides the variant, first match wins:
    end of input -> UNSUPPORTED, `]` -> EMPTY, `[` -> DOUBLE_BOLD,
    control run + whitespace -> CONTROL_BLOCK, anything else -> LINK.

    ``depth`` counts the brackets already open around this one. At
    MAX_BRACKET_DEPTH the rest of the line is kept literally.
    """
    start = cursor.mark()
    if depth >= MAX_BRACKET_DEPTH:
        log.debug("Bracket nesting exceeds %d at column %d", MAX_BRACKET_DEPTH, start)
        return _fallback(cursor, start)

    cursor.take()

    lookahead = cursor.peek()
    if lookahead is None:
        return BracketToken(cursor.since(start), BracketVariant.UNSUPPORTED)

    if lookahead == BRACKET_CLOSE:
        cursor.take()
        return BracketToken(cursor.since(start), BracketVariant.EMPTY)

    if lookahead == BRACKET_OPEN:
        cursor.take()
        return _parse_double_bold(cursor, start, depth + 1)

    if lookahead in CONTROL_CHARS:
        return _parse_control_block(cursor, start, depth + 1)

    return _parse_link(cursor, start, [])


def _parse_double_bold(cursor: Cursor, start: int, depth: int) -> BracketToken:
    inner = _parse_interior(cursor, depth)
    if inner is None:
        return _fallback(cursor, start)

    cursor.take()
    if cursor.peek() == BRACKET_CLOSE:
        cursor.take()
    return BracketToken(cursor.since(start), BracketVariant.DOUBLE_BOLD, tuple(inner))


def _parse_control_block(cursor: Cursor, start: int, depth: int) -> BracketToken:
    run_start = cursor.mark()
    char = cursor.take()
    level = 1
    while cursor.peek() == char:
        cursor.take()
        level += 1

    if not _is_space(cursor.peek()):
        # `[*text]`: the control run is link text, not emphasis
        head = [RawChar(c) for c in cursor.since(run_start)]
        return _parse_link(cursor, start, head)

    while _is_space(cursor.peek()):
        cursor.take()

    inner = _parse_interior(cursor, depth)
    if inner is None:
        return _fallback(cursor, start)

    cursor.take()
    return BracketToken(
        cursor.since(start),
        BracketVariant.CONTROL_BLOCK,
        tuple(inner),
        control=Control(char),
        level=level,
    )


def _parse_link(cursor: Cursor, start: int, head: list[Symbol]) -> BracketToken:
    body = list(head)
    while not cursor.at_end and cursor.peek() != BRACKET_CLOSE:
        body.append(RawChar(cursor.take()))

    if cursor.at_end:
        log.debug("Unterminated link at column %d, keeping %r", start, cursor.since(start))
        return BracketToken(cursor.since(start), BracketVariant.UNSUPPORTED)

    cursor.take()
    return BracketToken(cursor.since(start), BracketVariant.LINK, tuple(body))


def _parse_interior(cursor: Cursor, depth: int) -> list[Symbol] | None:
    """Parse up to (not including) the closing `]`; None if it never comes."""
    try:
        return parse_symbols(cursor, BRACKET_CLOSE, depth).symbols
    except DelimiterNotFound:
        return None


def _fallback(cursor: Cursor, start: int) -> BracketToken:
    """Give up on a bracket: everything from `start` to end of line is literal."""
    cursor.take_rest()
    log.debug("No closing bracket for column %d, rendering rest of line literally", start)
    return BracketToken(cursor.since(start), BracketVariant.UNSUPPORTED)


def _is_space(char: str | None) -> bool:
    return char is not None and char.isspace()
