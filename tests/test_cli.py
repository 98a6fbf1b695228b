"""CLI tests for bdown.

Covers each command with:
- One happy path from a file and from stdin where it applies
- --json output
- One error case, with and without --json-errors
"""

import json
from pathlib import Path

import frontmatter
import pytest
from click.testing import CliRunner

from bracketdown import __version__ as BRACKETDOWN_VERSION
from bracketdown.cli import cli, format_table

ALL_COMMANDS = ["render", "links", "convert"]


@pytest.mark.parametrize("command", ALL_COMMANDS)
def test_help(runner: CliRunner, command: str):
    result = runner.invoke(cli, [command, "--help"])

    assert result.exit_code == 0
    assert "Usage:" in result.output


def test_version(runner: CliRunner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert BRACKETDOWN_VERSION in result.output


class TestRender:
    """Tests for bdown render."""

    def test_from_stdin(self, runner: CliRunner):
        result = runner.invoke(cli, ["render"], input="[* hi] [there]\n[- gone]\n")

        assert result.exit_code == 0
        assert result.output == "<b>hi</b> [there](./there.md)\n<del>gone</del>\n"

    def test_from_file(self, runner: CliRunner, tmp_path: Path):
        src = tmp_path / "page.txt"
        src.write_text("[[bold]] #tag\n", encoding="utf-8")

        result = runner.invoke(cli, ["render", str(src)])

        assert result.exit_code == 0
        assert result.output == "<b>bold</b> [#tag](./tag.md)\n"

    def test_json(self, runner: CliRunner):
        result = runner.invoke(cli, ["render", "--json"], input="[a] #b\n[abc\n")

        assert result.exit_code == 0
        rows = json.loads(result.output)
        assert rows[0] == {
            "source": "[a] #b",
            "markdown": "[a](./a.md) [#b](./b.md)",
            "links": ["a"],
            "hashtags": ["b"],
        }
        assert rows[1]["markdown"] == "[abc"

    def test_prefix_suffix_options(self, runner: CliRunner):
        result = runner.invoke(cli, ["render", "--prefix", "/w/", "--suffix", ""], input="[a b]\n")

        assert result.output == "[a b](/w/a%20b)\n"

    def test_config_file_style(self, runner: CliRunner, tmp_path: Path):
        (tmp_path / ".bracketdown.yaml").write_text("link_suffix: .html\n", encoding="utf-8")

        result = runner.invoke(cli, ["render"], input="[a]\n")

        assert result.output == "[a](./a.html)\n"

    def test_bad_config_file(self, runner: CliRunner, tmp_path: Path):
        (tmp_path / ".bracketdown.yaml").write_text("- nope\n", encoding="utf-8")

        result = runner.invoke(cli, ["render"], input="[a]\n")

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_missing_file(self, runner: CliRunner):
        result = runner.invoke(cli, ["render", "missing.txt"])

        assert result.exit_code != 0


class TestLinks:
    """Tests for bdown links."""

    def test_table(self, runner: CliRunner):
        result = runner.invoke(cli, ["links"], input="see [Other Page] #idea\n[Other Page] [https://x.org]\n")

        assert result.exit_code == 0
        assert "TYPE" in result.output
        assert "./Other%20Page.md" in result.output
        assert "#idea" in result.output
        assert "x.org" not in result.output

    def test_json(self, runner: CliRunner):
        result = runner.invoke(cli, ["links", "--json"], input="[a] #t\n[* [b]] #t\n")

        assert json.loads(result.output) == {"links": ["a", "b"], "hashtags": ["t"]}

    def test_nothing_found(self, runner: CliRunner):
        result = runner.invoke(cli, ["links"], input="plain\n")

        assert "No links found." in result.output


class TestConvert:
    """Tests for bdown convert."""

    def test_single_file(self, runner: CliRunner, pages_dir: Path, tmp_path: Path):
        out = tmp_path / "out"

        result = runner.invoke(cli, ["convert", str(pages_dir / "first.txt"), str(out)])

        assert result.exit_code == 0
        assert "Converted 1 page(s)" in result.output
        post = frontmatter.load(out / "First Page.md")
        assert post.metadata["links"] == ["Second Page"]

    def test_directory_with_failure(self, runner: CliRunner, pages_dir: Path, tmp_path: Path):
        out = tmp_path / "out"

        result = runner.invoke(cli, ["convert", str(pages_dir), str(out)])

        assert result.exit_code == 1
        assert "Converted 2 page(s)" in result.output
        assert "blank.txt" in result.output
        assert (out / "Second Page.md").exists()

    def test_json(self, runner: CliRunner, pages_dir: Path, tmp_path: Path):
        result = runner.invoke(
            cli, ["--quiet", "convert", "--json", str(pages_dir / "second.txt"), str(tmp_path / "out")]
        )

        data = json.loads(result.output)
        assert data["failed"] == []
        assert data["converted"][0]["title"] == "Second Page"
        assert data["converted"][0]["links"] == ["First Page"]

    def test_untitled_file_json_errors(self, runner: CliRunner, pages_dir: Path, tmp_path: Path):
        result = runner.invoke(
            cli, ["--json-errors", "convert", str(pages_dir / "blank.txt"), str(tmp_path / "out")]
        )

        assert result.exit_code == 1
        error = json.loads(result.output.strip().splitlines()[-1])["error"]
        assert error["code"] == "MISSING_TITLE"

    def test_untitled_file_plain_error(self, runner: CliRunner, pages_dir: Path, tmp_path: Path):
        result = runner.invoke(cli, ["convert", str(pages_dir / "blank.txt"), str(tmp_path / "out")])

        assert result.exit_code == 1
        assert "Error: Page has no title line" in result.output


def test_json_errors_for_usage_error(runner: CliRunner):
    result = runner.invoke(cli, ["render", "--bogus", "--json-errors"])

    assert result.exit_code == 1
    error = json.loads(result.output.strip().splitlines()[-1])["error"]
    assert error["code"] == "INVALID_ARGUMENT"


def test_format_table_truncates():
    table = format_table([{"name": "x" * 80}], ["name"], max_widths={"name": 10})

    assert table.splitlines()[0].startswith("NAME")
    assert table.splitlines()[2] == "x" * 7 + "..."
