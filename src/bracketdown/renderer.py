"""Line-by-line rendering of bracket markup.

Each line is parsed on its own; a malformed line never affects its
neighbours.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .config import DEFAULT_LINK_STYLE, LinkStyle
from .models import LineRender
from .parser import extract_hashtags, extract_links, parse_line, s2md

log = logging.getLogger(__name__)


def render_line(line: str, style: LinkStyle | None = None) -> str:
    """Render one line of markup to Markdown/HTML."""
    return s2md(parse_line(line), style or DEFAULT_LINK_STYLE)


def render_lines(lines: Iterable[str], style: LinkStyle | None = None) -> Iterator[str]:
    for line in lines:
        yield render_line(line, style)


def render_text(text: str, style: LinkStyle | None = None) -> str:
    """Render multi-line text, one line at a time."""
    lines = text.splitlines()
    log.debug("Rendering %d lines", len(lines))
    return "\n".join(render_lines(lines, style))


def describe_line(line: str, style: LinkStyle | None = None) -> LineRender:
    """Render a line and collect its page links and hashtags."""
    symbols = parse_line(line)
    return LineRender(
        source=line,
        markdown=s2md(symbols, style or DEFAULT_LINK_STYLE),
        links=extract_links(symbols),
        hashtags=extract_hashtags(symbols),
    )
