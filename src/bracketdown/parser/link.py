"""Link rendering for bracket links and hashtags.

Link text is classified three ways:
- ``https://example.com``        -> external link, text is the URL
- ``label https://example.com``  -> external link with a label (URL may also come first)
- anything else                  -> page link, target derived from the text
"""

from __future__ import annotations

import re
from urllib.parse import quote

from ..config import DEFAULT_LINK_STYLE, LINK_SAFE_CHARS, LinkStyle

URL_PATTERN = re.compile(r"^https?://\S+$")


def page_target(name: str, style: LinkStyle = DEFAULT_LINK_STYLE) -> str:
    """Return the link target for a page name (percent-encoded filename reference)."""
    return f"{style.prefix}{quote(name, safe=LINK_SAFE_CHARS)}{style.suffix}"


class Link:
    """A resolved `[text]` link."""

    def __init__(self, text: str, style: LinkStyle | None = None) -> None:
        self.text = text
        self.style = style or DEFAULT_LINK_STYLE
        self.label, self.url = _split_external(text)

    def __repr__(self) -> str:
        return f"Link({self.text!r})"

    @property
    def is_external(self) -> bool:
        return self.url is not None

    @property
    def target(self) -> str:
        if self.url is not None:
            return self.url
        return page_target(self.text, self.style)

    def render(self) -> str:
        if self.url is not None:
            return f"[{self.label}]({self.url})"
        return f"[{self.text}]({self.target})"


def _split_external(text: str) -> tuple[str, str | None]:
    """Split link text into (label, url); url is None for page links."""
    if URL_PATTERN.match(text):
        return text, text

    parts = text.split()
    if len(parts) < 2:
        return text, None

    # `[label https://url]`
    if URL_PATTERN.match(parts[-1]):
        return text[: text.rindex(parts[-1])].strip(), parts[-1]

    # `[https://url label]`
    if URL_PATTERN.match(parts[0]):
        return text[len(parts[0]):].strip(), parts[0]

    return text, None
