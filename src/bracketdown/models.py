"""Pydantic models for rendered lines and converted pages."""

from datetime import datetime

from pydantic import BaseModel, Field


class LineRender(BaseModel):
    """One rendered line plus what it links to."""

    source: str  # Original markup
    markdown: str  # Rendered output
    links: list[str] = Field(default_factory=list)  # Page link targets, first-seen order
    hashtags: list[str] = Field(default_factory=list)  # Tag names without `#`


class PageMetadata(BaseModel):
    """Frontmatter metadata for a converted page."""

    title: str = Field(min_length=1)
    tags: list[str] = Field(default_factory=list)  # Hashtags found in the body
    links: list[str] = Field(default_factory=list)  # Pages linked from the body
    created: datetime
    source: str | None = None  # Path of the file the page was converted from


class ConversionResult(BaseModel):
    """Result of converting one page file."""

    source: str
    output: str
    title: str
    lines: int  # Body lines rendered (title excluded)
    tags: list[str] = Field(default_factory=list)
    links: list[str] = Field(default_factory=list)
