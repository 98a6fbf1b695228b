"""bracketdown: bracket wiki markup to Markdown/HTML."""

from .config import LinkStyle, get_link_style
from .errors import BracketdownError, ConfigurationError, ConversionError
from .parser import extract_hashtags, extract_links, parse_line, s2md
from .renderer import render_line, render_text

__version__ = "0.3.0"

__all__ = [
    "__version__",
    "LinkStyle",
    "get_link_style",
    "BracketdownError",
    "ConfigurationError",
    "ConversionError",
    "extract_hashtags",
    "extract_links",
    "parse_line",
    "s2md",
    "render_line",
    "render_text",
]
