#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathedit/renderers/base.py
"""Base classes for expression renderers.

This module defines the abstract base class that expression renderers inherit
from, giving them a common way to be configured and to write their output.

"""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Any, Union

from mathedit.ast.tree import ExpressionTree
from mathedit.exceptions import ValidationError
from mathedit.options.base import BaseRendererOptions


class BaseRenderer(ABC):
    """Abstract base class for expression renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render_to_string(self, tree: ExpressionTree, **kwargs: Any) -> str:
        """Render an expression tree to a string.

        Parameters
        ----------
        tree : ExpressionTree
            Root of the expression to render
        **kwargs : Any
            Renderer-specific arguments

        Returns
        -------
        str
            Rendered expression

        """
        pass

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        ValidationError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise ValidationError(
                f"{renderer_name} expected options of type '{expected_type.__name__}' "
                f"but received '{type(options).__name__}'",
                parameter_name="options",
                parameter_value=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[str], IO[bytes]]) -> None:
        """Write text output to a file path or IO stream.

        Parameters
        ----------
        text : str
            Rendered text to write
        output : str, Path, IO[str] or IO[bytes]
            Output destination

        Raises
        ------
        TypeError
            If output type is not supported

        """
        if isinstance(output, (str, Path)):
            Path(output).write_text(text, encoding="utf-8")
            return

        if not hasattr(output, "write"):
            raise TypeError(f"Unsupported output type: {type(output).__name__}")

        if isinstance(output, io.TextIOBase):
            output.write(text)
        elif isinstance(output, (io.BufferedIOBase, io.RawIOBase)) or "b" in str(getattr(output, "mode", "")):
            output.write(text.encode("utf-8"))  # type: ignore[arg-type]
        else:
            output.write(text)  # type: ignore[arg-type]
