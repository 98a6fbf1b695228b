"""Configuration management for bracketdown.

This module contains the markup constants and the link style lookup.
Magic characters are documented here rather than scattered throughout the parser.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigurationError

# =============================================================================
# Markup Characters
# =============================================================================

BRACKET_OPEN = "["
BRACKET_CLOSE = "]"

# Hashtags start with this marker and run until whitespace or a bracket
HASHTAG_MARKER = "#"

# Control characters selecting emphasis inside a bracket: `[* bold]`,
# `[- strike]`, `[_ underline]`. Repeating one raises the level.
CONTROL_BOLD = "*"
CONTROL_STRIKE = "-"
CONTROL_UNDERLINE = "_"
CONTROL_CHARS = frozenset({CONTROL_BOLD, CONTROL_STRIKE, CONTROL_UNDERLINE})

# Deepest `[[...]]` / `[* ...]` nesting parsed as markup. A bracket opened
# at this depth, and the rest of its line, stay literal text. Parsing and
# rendering both recurse once per level, so this stays well below
# sys.getrecursionlimit().
MAX_BRACKET_DEPTH = 50


# =============================================================================
# Rendering
# =============================================================================

# Bold levels above 1 get font-size: (BASE + level * STEP)em, e.g. level 2 -> 1.2em
BOLD_FONT_BASE_EM = 0.8
BOLD_FONT_STEP_EM = 0.2

# Page links are rendered as `[text](PREFIX + quote(text) + SUFFIX)`
DEFAULT_LINK_PREFIX = "./"
DEFAULT_LINK_SUFFIX = ".md"

# Characters left unescaped in link targets (same set as encodeURIComponent)
LINK_SAFE_CHARS = "-_.!~*'()"

# Name of the per-project config file searched upward from cwd
CONFIG_FILENAME = ".bracketdown.yaml"

# Maximum directory traversal depth when searching for CONFIG_FILENAME
MAX_CONFIG_SEARCH_DEPTH = 10


@dataclass(frozen=True)
class LinkStyle:
    """How page names are turned into link targets."""

    prefix: str = DEFAULT_LINK_PREFIX
    suffix: str = DEFAULT_LINK_SUFFIX


DEFAULT_LINK_STYLE = LinkStyle()


def get_link_style(start_dir: Path | None = None) -> LinkStyle:
    """Get the link style for the current environment.

    Discovery order (per field):
    1. BRACKETDOWN_LINK_PREFIX / BRACKETDOWN_LINK_SUFFIX environment variables
    2. link_prefix / link_suffix in the nearest .bracketdown.yaml
    3. Defaults (./ and .md)

    Args:
        start_dir: Directory to start the config search from (defaults to cwd).

    Returns:
        Resolved LinkStyle.

    Raises:
        ConfigurationError: If the config file exists but is malformed.
    """
    file_values = _load_project_config(start_dir)

    prefix = os.environ.get("BRACKETDOWN_LINK_PREFIX")
    if prefix is None:
        prefix = file_values.get("link_prefix", DEFAULT_LINK_PREFIX)

    suffix = os.environ.get("BRACKETDOWN_LINK_SUFFIX")
    if suffix is None:
        suffix = file_values.get("link_suffix", DEFAULT_LINK_SUFFIX)

    if not isinstance(prefix, str) or not isinstance(suffix, str):
        raise ConfigurationError("link_prefix and link_suffix must be strings")

    return LinkStyle(prefix=prefix, suffix=suffix)


def find_config_file(start_dir: Path | None = None, max_depth: int = MAX_CONFIG_SEARCH_DEPTH) -> Path | None:
    """Walk up from start_dir looking for .bracketdown.yaml.

    Args:
        start_dir: Directory to start from (defaults to cwd)
        max_depth: Maximum directories to traverse up

    Returns:
        Path to the config file if found, None otherwise.
    """
    current = Path(start_dir or os.getcwd()).resolve()

    for _ in range(max_depth):
        config_file = current / CONFIG_FILENAME
        if config_file.is_file():
            return config_file

        parent = current.parent
        if parent == current:  # Reached filesystem root
            break
        current = parent

    return None


def _load_project_config(start_dir: Path | None = None) -> dict:
    import yaml

    config_file = find_config_file(start_dir)
    if config_file is None:
        return {}

    try:
        data = yaml.safe_load(config_file.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to read {config_file}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_file}: expected a mapping at top level")
    return data
