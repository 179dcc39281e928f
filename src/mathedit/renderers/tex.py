#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathedit/renderers/tex.py
r"""TeX rendering of expression trees.

This module serializes an ``ExpressionTree`` to the TeX string handed to an
external typesetter. Leaves are emitted verbatim, functions as their name
followed by each delimited argument, and the cursor (when set) as a colored
glyph at its position:

    x+\frac{1}{\textcolor{#ff0000}{\cursor}}

Empty trees render as a placeholder (``\Box``) so that unfilled argument
slots stay visible. A space is inserted between a fragment ending in a bare
command and one starting with a letter or digit, since ``\cdot`` followed by
``x`` would otherwise read as the single command ``\cdotx``.

"""

from __future__ import annotations

import re
from typing import Any

from mathedit.ast.nodes import CursorMarker, ExpressionFragment, Function, Leaf
from mathedit.ast.tree import ExpressionTree
from mathedit.ast.visitors import FragmentVisitor, ValidationVisitor
from mathedit.constants import COMMAND_CONTINUATION_PATTERN, TRAILING_COMMAND_PATTERN
from mathedit.exceptions import CursorRenderingError
from mathedit.options.tex import TeXRendererOptions
from mathedit.renderers.base import BaseRenderer
from mathedit.utils.color import to_hex


_TRAILING_COMMAND = re.compile(TRAILING_COMMAND_PATTERN)
_COMMAND_CONTINUATION = re.compile(COMMAND_CONTINUATION_PATTERN)


def needs_space_between(current: str, following: str) -> bool:
    r"""Return whether ``current`` and ``following`` must be separated by a space.

    True when ``current`` ends with a bare command and ``following`` starts
    with an ASCII letter or digit, e.g. ``\cdot`` and ``4``.

    Examples
    --------
    >>> needs_space_between(r"\cdot", "x")
    True
    >>> needs_space_between(r"\frac{1}{2}", "x")
    False

    """
    if not following or not _COMMAND_CONTINUATION.match(following):
        return False
    return _TRAILING_COMMAND.search(current) is not None


class TeXRenderer(BaseRenderer, FragmentVisitor):
    r"""Render expression trees as TeX.

    Parameters
    ----------
    options : TeXRendererOptions or None, default = None
        Rendering options; defaults are used when omitted

    Examples
    --------
        >>> tree = ExpressionTree([Leaf("x"), Leaf("+"), Leaf("2")])
        >>> TeXRenderer().render_to_string(tree)
        'x+2'

    """

    def __init__(self, options: TeXRendererOptions | None = None):
        """Initialize the TeX renderer with options."""
        BaseRenderer._validate_options_type(options, TeXRendererOptions, "tex")
        options = options or TeXRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: TeXRendererOptions = options
        self._cursor_color: str | None = None

    def render_to_string(
        self,
        tree: ExpressionTree,
        cursor_color: Any = None,
        placeholder_when_empty: bool = True,
        **kwargs: Any,
    ) -> str:
        """Render an expression tree to TeX.

        Parameters
        ----------
        tree : ExpressionTree
            Root of the expression
        cursor_color : color value, optional
            Color of the cursor glyph; required if the cursor is set anywhere
            in the expression
        placeholder_when_empty : bool, default True
            Whether an empty root renders as the placeholder or as ``""``

        Returns
        -------
        str
            TeX markup

        Raises
        ------
        CursorRenderingError
            If the cursor is set and ``cursor_color`` is None
        ValidationError
            If ``cursor_color`` is not a valid color, or the tree is invalid
            and ``fail_on_invalid_tree`` is enabled

        """
        if self.options.fail_on_invalid_tree:
            ValidationVisitor(strict=True).validate(tree)

        self._cursor_color = to_hex(cursor_color) if cursor_color is not None else None
        try:
            return self._render_tree(tree, placeholder_when_empty)
        finally:
            self._cursor_color = None

    def render_fragment(self, fragment: ExpressionFragment, cursor_color: Any = None) -> str:
        """Render a single fragment to TeX.

        Parameters
        ----------
        fragment : ExpressionFragment
            Leaf, function or cursor marker
        cursor_color : color value, optional
            Color of the cursor glyph, required for a cursor marker or a
            function whose arguments hold the cursor

        Returns
        -------
        str
            TeX markup of the fragment

        """
        self._cursor_color = to_hex(cursor_color) if cursor_color is not None else None
        try:
            return fragment.accept(self)
        finally:
            self._cursor_color = None

    def _render_tree(self, tree: ExpressionTree, placeholder_when_empty: bool) -> str:
        parts = [child.accept(self) for child in tree.children]
        if tree.has_cursor:
            parts.insert(tree.position, CursorMarker().accept(self))

        if not parts:
            return self.options.placeholder if placeholder_when_empty else ""
        return self._join(parts)

    def _join(self, parts: list[str]) -> str:
        pieces = [parts[0]]
        for current, following in zip(parts, parts[1:]):
            if self.options.separate_commands and needs_space_between(current, following):
                pieces.append(" ")
            pieces.append(following)
        return "".join(pieces)

    def visit_tree(self, node: ExpressionTree) -> str:
        # Argument trees always show the placeholder when empty
        return self._render_tree(node, placeholder_when_empty=True)

    def visit_leaf(self, node: Leaf) -> str:
        return node.text

    def visit_function(self, node: Function) -> str:
        pieces = [node.name]
        for slot, argument in zip(node.slots, node.argument_trees):
            pieces.append(slot.opening)
            pieces.append(argument.accept(self))
            pieces.append(slot.closing)
        return "".join(pieces)

    def visit_cursor(self, node: CursorMarker) -> str:
        if self._cursor_color is None:
            raise CursorRenderingError("Cursor rendered without a cursor color")
        return f"{self.options.color_command}{{{self._cursor_color}}}{{{self.options.cursor_glyph}}}"
