#  Copyright (c) 2025 Tom Villani, Ph.D.

# mathedit/options/tex.py
"""Configuration options for TeX rendering of expression trees."""

from __future__ import annotations

from dataclasses import dataclass, field

from mathedit.constants import (
    COMMAND_ESCAPE,
    DEFAULT_COLOR_COMMAND,
    DEFAULT_CURSOR_GLYPH,
    DEFAULT_PLACEHOLDER,
    DEFAULT_SEPARATE_COMMANDS,
)
from mathedit.options.base import BaseRendererOptions


@dataclass(frozen=True)
class TeXRendererOptions(BaseRendererOptions):
    r"""Configuration options for expression-tree-to-TeX rendering.

    Parameters
    ----------
    placeholder : str, default "\Box"
        Token emitted for an empty tree (an unfilled argument slot, or an
        empty document when placeholders are enabled).
    cursor_glyph : str, default "\cursor"
        Token emitted where the cursor sits, wrapped in the color command.
    color_command : str, default "\textcolor"
        Two-argument command used to color the cursor glyph.
    separate_commands : bool, default True
        Insert a space between a fragment ending in a bare command (``\cdot``)
        and a following fragment starting with a letter or digit, so the two
        are not read as one command name.

    """

    placeholder: str = field(
        default=DEFAULT_PLACEHOLDER,
        metadata={"help": "Token rendered for an empty expression", "importance": "core"},
    )
    cursor_glyph: str = field(
        default=DEFAULT_CURSOR_GLYPH,
        metadata={"help": "Token rendered at the cursor position", "importance": "core"},
    )
    color_command: str = field(
        default=DEFAULT_COLOR_COMMAND,
        metadata={"help": "Command used to color the cursor glyph", "importance": "advanced"},
    )
    separate_commands: bool = field(
        default=DEFAULT_SEPARATE_COMMANDS,
        metadata={
            "help": "Separate a trailing command from a following letter or digit with a space",
            "cli_name": "no-separate-commands",
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate the markup tokens.

        Raises
        ------
        ValueError
            If the cursor glyph is empty or the color command is not a command.

        """
        if not self.cursor_glyph:
            raise ValueError("cursor_glyph must not be empty")
        if not self.color_command.startswith(COMMAND_ESCAPE) or len(self.color_command) < 2:
            raise ValueError(f"color_command must be a TeX command, got {self.color_command!r}")
