"""Serialization of parsed symbols to Markdown/HTML."""

from __future__ import annotations

from collections.abc import Iterable
from functools import singledispatch

from ..config import BOLD_FONT_BASE_EM, BOLD_FONT_STEP_EM, DEFAULT_LINK_STYLE, LinkStyle
from .hashtag import Hashtag
from .link import Link
from .symbols import BracketToken, BracketVariant, Control, RawChar, Symbol


def s2md(symbols: Iterable[Symbol], style: LinkStyle = DEFAULT_LINK_STYLE) -> str:
    """Render a sequence of symbols by concatenation."""
    return "".join(to_markdown(symbol, style) for symbol in symbols)


@singledispatch
def to_markdown(symbol: object, style: LinkStyle = DEFAULT_LINK_STYLE) -> str:
    raise TypeError(f"Cannot render {type(symbol).__name__} as markdown")


@to_markdown.register(RawChar)
def _render_raw(symbol: RawChar, style: LinkStyle = DEFAULT_LINK_STYLE) -> str:
    return symbol.char


@to_markdown.register(Hashtag)
def _render_hashtag(symbol: Hashtag, style: LinkStyle = DEFAULT_LINK_STYLE) -> str:
    return symbol.render(style)


@to_markdown.register(BracketToken)
def _render_bracket(symbol: BracketToken, style: LinkStyle = DEFAULT_LINK_STYLE) -> str:
    if symbol.is_fallback:
        # `[`, `[]`, unterminated brackets
        return symbol.raw_chars

    if symbol.variant is BracketVariant.LINK:
        return Link(s2md(symbol.inner_symbols, style), style).render()

    if symbol.variant is BracketVariant.DOUBLE_BOLD:
        return f"{bold_open_tag(1)}{s2md(symbol.inner_symbols, style)}</b>"

    inner = s2md(_strip_trailing_space(symbol.inner_symbols), style)
    if symbol.control is Control.BOLD:
        return f"{bold_open_tag(symbol.level)}{inner}</b>"
    if symbol.control is Control.STRIKE:
        return f"<del>{inner}</del>"
    if symbol.control is Control.UNDERLINE:
        return f"<u>{inner}</u>"

    return symbol.raw_chars


def bold_open_tag(level: int) -> str:
    """Opening <b> tag for a bold level; levels above 1 are scaled up."""
    if level <= 1:
        return "<b>"
    size = BOLD_FONT_BASE_EM + level * BOLD_FONT_STEP_EM
    return f'<b style="font-size:{size:.1f}em;" class="level-{level}">'


def _strip_trailing_space(symbols: tuple[Symbol, ...]) -> tuple[Symbol, ...]:
    end = len(symbols)
    while end > 0:
        last = symbols[end - 1]
        if not (isinstance(last, RawChar) and last.char.isspace()):
            break
        end -= 1
    return symbols[:end]
