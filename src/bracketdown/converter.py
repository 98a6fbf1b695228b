"""Page conversion: bracket-markup pages to Markdown files with frontmatter.

A page is a text file whose first non-blank line is its title. The
remaining lines are rendered one at a time; hashtags and page links found
along the way end up in the frontmatter.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

import frontmatter

from .config import DEFAULT_LINK_STYLE, LinkStyle
from .errors import ConversionError, ErrorCode
from .models import ConversionResult, PageMetadata
from .parser import extract_hashtags, extract_links, parse_line, s2md

log = logging.getLogger(__name__)

# Characters that cannot appear in a single path component
_UNSAFE_FILENAME = re.compile(r"[/\\\x00-\x1f]")


def page_filename(title: str) -> str:
    """Return the .md filename for a page title.

    Only path-unsafe characters are replaced so that `[Title]` links,
    which point at `./Title.md`, resolve to the converted file.
    """
    name = _UNSAFE_FILENAME.sub("_", title).strip()
    if not name or name in (".", ".."):
        raise ConversionError(f"Title {title!r} cannot be used as a filename", ErrorCode.MISSING_TITLE)
    return f"{name}.md"


def convert_page(
    text: str,
    source: str | None = None,
    style: LinkStyle | None = None,
    created: datetime | None = None,
) -> tuple[PageMetadata, str]:
    """Convert page text to metadata and a rendered body.

    Args:
        text: Full page text; first non-blank line is the title.
        source: Where the text came from (recorded in metadata).
        style: Link style for page links and hashtags.
        created: Creation timestamp (defaults to now, UTC).

    Returns:
        Tuple of (metadata, body).

    Raises:
        ConversionError: If the page has no title line.
    """
    style = style or DEFAULT_LINK_STYLE
    lines = text.splitlines()

    title_index = next((i for i, line in enumerate(lines) if line.strip()), None)
    if title_index is None:
        raise ConversionError(
            "Page has no title line",
            ErrorCode.MISSING_TITLE,
            details={"source": source} if source else None,
        )

    title = lines[title_index].strip()
    tags: list[str] = []
    links: list[str] = []
    rendered: list[str] = []

    for line in lines[title_index + 1 :]:
        symbols = parse_line(line)
        rendered.append(s2md(symbols, style))
        tags.extend(t for t in extract_hashtags(symbols) if t not in tags)
        links.extend(link for link in extract_links(symbols) if link not in links)

    metadata = PageMetadata(
        title=title,
        tags=tags,
        links=links,
        created=created or datetime.now(UTC),
        source=source,
    )
    return metadata, "\n".join(rendered).strip("\n")


def build_page(metadata: PageMetadata, body: str) -> str:
    """Serialize metadata and body as a Markdown document with YAML frontmatter."""
    post = frontmatter.Post(body, **metadata.model_dump(exclude_none=True))
    return frontmatter.dumps(post) + "\n"


def convert_file(
    src: Path,
    dest_dir: Path,
    style: LinkStyle | None = None,
    claimed: set[Path] | None = None,
) -> ConversionResult:
    """Convert one page file into ``dest_dir``.

    Args:
        src: Page file to read.
        dest_dir: Directory the Markdown file is written to.
        style: Link style for rendered links (defaults to ./name.md).
        claimed: Output paths already written in this run. The new output
            is refused if it is in the set, and added to it once written.

    Raises:
        ConversionError: If the file cannot be read, has no title, its
            output was already written by another page, or the output
            cannot be written.
    """
    if not src.is_file():
        raise ConversionError(f"{src}: not a file", ErrorCode.FILE_NOT_FOUND)

    try:
        text = src.read_text(encoding="utf-8")
        created = datetime.fromtimestamp(src.stat().st_mtime, UTC)
    except (OSError, UnicodeDecodeError) as e:
        raise ConversionError(f"{src}: {e}", ErrorCode.FILE_READ_ERROR) from e

    metadata, body = convert_page(text, source=str(src), style=style, created=created)
    dest = dest_dir / page_filename(metadata.title)

    if claimed is not None and dest in claimed:
        raise ConversionError(
            f"{src}: title {metadata.title!r} collides with an earlier page at {dest}",
            ErrorCode.DUPLICATE_TITLE,
            details={"output": str(dest)},
        )

    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
        dest.write_text(build_page(metadata, body), encoding="utf-8")
    except OSError as e:
        raise ConversionError(f"{dest}: {e}", ErrorCode.FILE_WRITE_ERROR) from e

    if claimed is not None:
        claimed.add(dest)

    log.debug("Converted %s -> %s", src, dest)
    return ConversionResult(
        source=str(src),
        output=str(dest),
        title=metadata.title,
        lines=len(body.splitlines()),
        tags=metadata.tags,
        links=metadata.links,
    )


@dataclass
class TreeConversion:
    """Outcome of converting a directory of pages."""

    converted: list[ConversionResult] = field(default_factory=list)
    failed: list[dict] = field(default_factory=list)  # [{source, error}]


def convert_tree(
    src_dir: Path,
    dest_dir: Path,
    pattern: str = "*.txt",
    style: LinkStyle | None = None,
) -> TreeConversion:
    """Convert every page under ``src_dir`` matching ``pattern``.

    Failures are logged and collected; one bad page does not stop the run.
    Pages are taken in sorted path order, so when two share a title the
    first one keeps the output file and the second is reported as failed.
    """
    if not src_dir.is_dir():
        raise ConversionError(f"{src_dir}: not a directory", ErrorCode.FILE_NOT_FOUND)

    outcome = TreeConversion()
    claimed: set[Path] = set()
    for src in sorted(src_dir.rglob(pattern)):
        # Skip hidden files and directories
        if any(part.startswith(".") for part in src.relative_to(src_dir).parts):
            continue
        try:
            outcome.converted.append(convert_file(src, dest_dir, style, claimed))
        except ConversionError as e:
            log.warning("Skipping %s: %s", src, e.message)
            outcome.failed.append({"source": str(src), "error": e.message})

    return outcome
