#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the mathedit library.

This module centralizes the markup tokens and default configuration values
used by the expression tree, the TeX renderer and the command-line interface.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Markup Tokens - TeX tokens the editing engine recognizes
3. Rendering Defaults - Default values for renderer options
4. CLI Defaults - Exit codes, environment variables and config discovery
"""

from __future__ import annotations

from typing import Literal, Tuple, Union

# =============================================================================
# Type Definitions
# =============================================================================

# A cursor color is either a hex string ("#ff0000"), a named color, or an
# (r, g, b) triple of ints 0-255 or floats 0.0-1.0
ColorValue = Union[str, Tuple[int, int, int], Tuple[float, float, float]]

LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# =============================================================================
# Markup Tokens
# =============================================================================

# Every TeX command starts with this character
COMMAND_ESCAPE = "\\"

# Opening and closing markers of a case-system block
SYSTEM_BEGIN = r"\begin{cases}"
SYSTEM_END = r"\end{cases}"

# A bare command at the end of a serialized fragment, e.g. "\cdot"
TRAILING_COMMAND_PATTERN = r"\\[a-zA-Z]+$"

# First character that would be swallowed into a preceding command name
COMMAND_CONTINUATION_PATTERN = r"^[a-zA-Z0-9]"

# =============================================================================
# Rendering Defaults
# =============================================================================

DEFAULT_PLACEHOLDER = r"\Box"
DEFAULT_CURSOR_GLYPH = r"\cursor"
DEFAULT_COLOR_COMMAND = r"\textcolor"
DEFAULT_CURSOR_COLOR: str = "#000000"
DEFAULT_PLACEHOLDER_WHEN_EMPTY = True
DEFAULT_SEPARATE_COMMANDS = True

NAMED_COLORS = {
    "black": "#000000",
    "white": "#ffffff",
    "red": "#ff0000",
    "green": "#008000",
    "blue": "#0000ff",
    "grey": "#808080",
    "gray": "#808080",
    "orange": "#ffa500",
    "purple": "#800080",
}

# =============================================================================
# CLI Defaults
# =============================================================================

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4

CONFIG_ENV_VAR = "MATHEDIT_CONFIG"
CONFIG_FILENAMES = [".mathedit.toml", ".mathedit.yaml", ".mathedit.yml", ".mathedit.json"]
PYPROJECT_SECTION = "mathedit"

# Input event keywords understood by the CLI event replay
EVENT_LEFT = "@left"
EVENT_RIGHT = "@right"
EVENT_BACKSPACE = "@back"
EVENT_CLEAR = "@clear"
EVENT_TOGGLE_PAGE = "@page"
EVENT_FUNCTION_PREFIX = "fn:"
