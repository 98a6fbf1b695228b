"""Tests for link style configuration and logging setup."""

import logging
from pathlib import Path

import pytest

from bracketdown._logging import configure_logging, set_quiet_mode
from bracketdown.config import DEFAULT_LINK_STYLE, LinkStyle, find_config_file, get_link_style
from bracketdown.errors import ConfigurationError, ErrorCode


class TestGetLinkStyle:
    """Tests for get_link_style discovery order."""

    def test_defaults(self, tmp_path: Path):
        assert get_link_style(tmp_path) == DEFAULT_LINK_STYLE == LinkStyle("./", ".md")

    def test_env_overrides(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("BRACKETDOWN_LINK_PREFIX", "/wiki/")
        monkeypatch.setenv("BRACKETDOWN_LINK_SUFFIX", "")

        assert get_link_style(tmp_path) == LinkStyle("/wiki/", "")

    def test_config_file_found_from_subdirectory(self, tmp_path: Path):
        (tmp_path / ".bracketdown.yaml").write_text("link_prefix: /pages/\n", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_file(nested) == (tmp_path / ".bracketdown.yaml").resolve()
        assert get_link_style(nested) == LinkStyle("/pages/", ".md")

    def test_env_beats_config_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        (tmp_path / ".bracketdown.yaml").write_text("link_suffix: .html\n", encoding="utf-8")
        monkeypatch.setenv("BRACKETDOWN_LINK_SUFFIX", ".htm")

        assert get_link_style(tmp_path).suffix == ".htm"

    @pytest.mark.parametrize(
        "content",
        [
            "link_prefix: [unclosed\n",
            "- just\n- a list\n",
            "link_prefix: 3\n",
        ],
    )
    def test_malformed_config_raises(self, tmp_path: Path, content: str):
        (tmp_path / ".bracketdown.yaml").write_text(content, encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            get_link_style(tmp_path)

        assert exc_info.value.code == ErrorCode.CONFIG_ERROR

    def test_empty_config_file_uses_defaults(self, tmp_path: Path):
        (tmp_path / ".bracketdown.yaml").write_text("", encoding="utf-8")
        assert get_link_style(tmp_path) == DEFAULT_LINK_STYLE


class TestLogging:
    """Tests for package logger configuration."""

    def test_configure_is_idempotent(self):
        configure_logging()
        configure_logging()

        assert len(logging.getLogger("bracketdown").handlers) == 1

    def test_level_from_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("BRACKETDOWN_LOG_LEVEL", "debug")
        configure_logging()

        assert logging.getLogger("bracketdown").level == logging.DEBUG

    def test_quiet_mode(self):
        configure_logging(logging.INFO)
        set_quiet_mode(True)

        assert logging.getLogger("bracketdown").level == logging.ERROR
