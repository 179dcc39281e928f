#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the mathedit renderer and editing controller.

Options are frozen dataclasses: derive modified copies with
``create_updated()`` instead of mutating them.
"""

from __future__ import annotations

from mathedit.options.base import BaseRendererOptions, CloneFrozenMixin
from mathedit.options.editor import EditorOptions
from mathedit.options.tex import TeXRendererOptions

__all__ = [
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "EditorOptions",
    "TeXRendererOptions",
]
