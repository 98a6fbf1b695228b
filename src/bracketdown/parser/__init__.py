"""Bracket markup parsing and serialization."""

from .cursor import Cursor
from .hashtag import Hashtag
from .link import Link, page_target
from .links import extract_hashtags, extract_links
from .markdown import s2md, to_markdown
from .symbols import BracketToken, BracketVariant, Control, RawChar, Symbol
from .tokenizer import DelimiterNotFound, ParseResult, parse_bracket, parse_line, parse_symbols

__all__ = [
    "Cursor",
    "Hashtag",
    "Link",
    "page_target",
    "extract_links",
    "extract_hashtags",
    "s2md",
    "to_markdown",
    "BracketToken",
    "BracketVariant",
    "Control",
    "RawChar",
    "Symbol",
    "DelimiterNotFound",
    "ParseResult",
    "parse_bracket",
    "parse_line",
    "parse_symbols",
]
