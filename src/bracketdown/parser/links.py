"""Link and hashtag extraction from parsed lines."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .hashtag import Hashtag
from .link import Link
from .symbols import BracketToken, BracketVariant, Symbol
from .tokenizer import parse_line


def extract_links(source: str | Iterable[Symbol]) -> list[str]:
    """Extract page names from a line or its parsed symbols.

    External URLs are skipped; only links to other pages are returned.

    Args:
        source: Raw line, or symbols already produced by the tokenizer.

    Returns:
        Unique page names in first-seen order.
    """
    seen: set[str] = set()
    links: list[str] = []

    for token in _walk(_symbols(source)):
        if not isinstance(token, BracketToken) or token.variant is not BracketVariant.LINK:
            continue
        if token.is_fallback:
            continue
        # link bodies hold only raw characters, so the text sits between the brackets
        link = Link(token.raw_chars[1:-1])
        if link.is_external or not link.text.strip():
            continue
        if link.text not in seen:
            seen.add(link.text)
            links.append(link.text)

    return links


def extract_hashtags(source: str | Iterable[Symbol]) -> list[str]:
    """Extract hashtag names (without `#`) in first-seen order."""
    seen: set[str] = set()
    tags: list[str] = []

    for token in _walk(_symbols(source)):
        if isinstance(token, Hashtag) and token.name not in seen:
            seen.add(token.name)
            tags.append(token.name)

    return tags


def _symbols(source: str | Iterable[Symbol]) -> Iterable[Symbol]:
    if isinstance(source, str):
        return parse_line(source)
    return source


def _walk(symbols: Iterable[Symbol]) -> Iterator[Symbol]:
    """Depth-first walk including bracket interiors."""
    for symbol in symbols:
        yield symbol
        if isinstance(symbol, BracketToken) and symbol.variant is not BracketVariant.LINK:
            yield from _walk(symbol.inner_symbols)
