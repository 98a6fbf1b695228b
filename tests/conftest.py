"""Shared test fixtures for bracketdown test suite.

Design:
- isolated_env: every test runs in a temp cwd with link-style env vars cleared
- runner: CliRunner for CLI tests
- pages_dir: a small directory of page files for conversion tests
"""

import logging
from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep config discovery and logging from leaking between tests."""
    for var in ("BRACKETDOWN_LINK_PREFIX", "BRACKETDOWN_LINK_SUFFIX", "BRACKETDOWN_LOG_LEVEL", "BRACKETDOWN_QUIET"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)

    yield

    logger = logging.getLogger("bracketdown")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def pages_dir(tmp_path: Path) -> Path:
    """Directory with two good pages, one untitled page, and a hidden page."""
    root = tmp_path / "pages"
    root.mkdir()
    (root / "first.txt").write_text("First Page\nhello [* world]\nsee [Second Page] #idea\n", encoding="utf-8")
    (root / "second.txt").write_text("Second Page\n[[back]] to [First Page]\n", encoding="utf-8")
    (root / "blank.txt").write_text("\n   \n", encoding="utf-8")
    (root / "notes.md").write_text("Not a page\n", encoding="utf-8")
    hidden = root / ".trash"
    hidden.mkdir()
    (hidden / "old.txt").write_text("Old Page\n", encoding="utf-8")
    return root
