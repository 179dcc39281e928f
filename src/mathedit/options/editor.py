#  Copyright (c) 2025 Tom Villani, Ph.D.

# mathedit/options/editor.py
"""Configuration options for the math field editing controller."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from mathedit.constants import DEFAULT_CURSOR_COLOR, DEFAULT_PLACEHOLDER_WHEN_EMPTY
from mathedit.options.base import CloneFrozenMixin
from mathedit.options.tex import TeXRendererOptions
from mathedit.utils.color import to_hex


@dataclass(frozen=True)
class EditorOptions(CloneFrozenMixin):
    """Configuration options for ``MathFieldEditingController``.

    Parameters
    ----------
    cursor_color : str, default "#000000"
        Color of the cursor glyph in ``render()`` output. Any value accepted
        by ``mathedit.utils.color.to_hex``; stored normalized as ``#rrggbb``.
    placeholder_when_empty : bool, default True
        Whether an empty document renders as the placeholder token.
    validate_edits : bool, default False
        Run ``ValidationVisitor`` over the document after every edit.
    renderer : TeXRendererOptions
        Options passed to the TeX renderer.

    """

    cursor_color: Any = field(
        default=DEFAULT_CURSOR_COLOR,
        metadata={"help": "Cursor color as #rrggbb, #rgb or a color name", "importance": "core"},
    )
    placeholder_when_empty: bool = field(
        default=DEFAULT_PLACEHOLDER_WHEN_EMPTY,
        metadata={"help": "Render an empty document as the placeholder token", "importance": "core"},
    )
    validate_edits: bool = field(
        default=False,
        metadata={"help": "Validate the whole document after every edit", "importance": "advanced"},
    )
    renderer: TeXRendererOptions = field(
        default_factory=TeXRendererOptions,
        metadata={"help": "TeX renderer options", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Normalize the cursor color.

        Raises
        ------
        ValidationError
            If ``cursor_color`` is not a valid color.

        """
        object.__setattr__(self, "cursor_color", to_hex(self.cursor_color))

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> EditorOptions:
        """Build editor options from a mapping with an optional ``renderer`` table."""
        values = dict(values)
        renderer = values.pop("renderer", None)
        if isinstance(renderer, Mapping):
            values["renderer"] = TeXRendererOptions.from_mapping(renderer)
        elif renderer is not None:
            values["renderer"] = renderer
        return super().from_mapping(values)
