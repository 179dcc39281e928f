#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathedit/controller.py
"""Editing controller for a math input field.

The controller owns the document root and tracks the *current* tree, the one
holding the cursor. Input events map to controller calls; the controller
forwards them to the current tree and, whenever a tree reports that it hit
its edge or ran into a function, moves the cursor into or out of the nested
argument trees:

    go_back()   left arrow, or backspace with ``delete_mode=True``
    go_next()   right arrow
    add_leaf()  a key producing a token (``x``, ``+``, ``\\cdot``)
    add_function()  a key producing a template (``\\frac{}{}``)

Listeners registered with ``add_listener`` are called after every change, so
a view can re-render the field from ``render()``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional

from mathedit.ast.nodes import ArgumentSlot, Function, Leaf
from mathedit.ast.tree import ExpressionTree, NavigationResult
from mathedit.ast.visitors import ValidationVisitor
from mathedit.exceptions import ReentrantEditError, ValidationError
from mathedit.options.editor import EditorOptions
from mathedit.renderers.tex import TeXRenderer

logger = logging.getLogger(__name__)

Listener = Callable[["MathFieldEditingController"], None]


class MathFieldEditingController:
    """Controller holding the edited expression and its cursor.

    Parameters
    ----------
    options : EditorOptions or None, default = None
        Editor options; defaults are used when omitted

    Attributes
    ----------
    root : ExpressionTree
        The whole document
    current_node : ExpressionTree
        The tree holding the cursor, ``root`` or a nested argument tree
    second_page : bool
        Whether the keyboard shows its second page

    Examples
    --------
        >>> controller = MathFieldEditingController()
        >>> controller.add_function(r"\\frac", [ArgumentSlot.BRACES, ArgumentSlot.BRACES])
        >>> controller.add_leaf("1")
        >>> controller.go_next()
        <NavigationResult.END: 'end'>
        >>> controller.add_leaf("2")
        >>> controller.current_editing_value()
        '\\\\frac{1}{2}'

    """

    def __init__(self, options: Optional[EditorOptions] = None):
        """Initialize the controller with an empty document."""
        self.options = options or EditorOptions()
        self.root = ExpressionTree()
        self.current_node = self.root
        self.current_node.set_cursor()
        self.second_page = False
        self._listeners: list[Listener] = []
        self._notifying = False
        self._renderer = TeXRenderer(self.options.renderer)

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: Listener) -> None:
        """Register a callable invoked with this controller after every change."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        """Unregister a listener; unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def notify_listeners(self) -> None:
        """Call every listener, validating the document first if configured."""
        if self.options.validate_edits:
            ValidationVisitor(strict=True).validate(self.root)

        self._notifying = True
        try:
            for listener in list(self._listeners):
                listener(self)
        finally:
            self._notifying = False

    def _check_not_notifying(self, operation: str) -> None:
        if self._notifying:
            raise ReentrantEditError(f"{operation}() called while listeners are being notified")

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        """Whether the document has no fragments."""
        return self.root.is_empty

    def toggle_page(self) -> None:
        """Switch between the keyboard's first and second page."""
        self._check_not_notifying("toggle_page")
        self.second_page = not self.second_page
        self.notify_listeners()

    def current_editing_value(self, placeholder_when_empty: Optional[bool] = None) -> str:
        """Return the document's TeX without the cursor glyph.

        Parameters
        ----------
        placeholder_when_empty : bool, optional
            Whether an empty document renders as the placeholder; defaults to
            ``options.placeholder_when_empty``

        """
        if placeholder_when_empty is None:
            placeholder_when_empty = self.options.placeholder_when_empty

        # Hide the cursor for the duration of the render
        cursor_was_set = self.current_node.has_cursor
        if cursor_was_set:
            self.current_node.remove_cursor()
        try:
            return self._renderer.render_to_string(self.root, placeholder_when_empty=placeholder_when_empty)
        finally:
            if cursor_was_set:
                self.current_node.set_cursor()

    def render(self, cursor_color: Any = None, placeholder_when_empty: Optional[bool] = None) -> str:
        """Return the document's TeX with the colored cursor glyph.

        Parameters
        ----------
        cursor_color : color value, optional
            Cursor color; defaults to ``options.cursor_color``
        placeholder_when_empty : bool, optional
            Defaults to ``options.placeholder_when_empty``

        """
        if placeholder_when_empty is None:
            placeholder_when_empty = self.options.placeholder_when_empty
        return self._renderer.render_to_string(
            self.root,
            cursor_color=cursor_color if cursor_color is not None else self.options.cursor_color,
            placeholder_when_empty=placeholder_when_empty,
        )

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def add_leaf(self, tex: str) -> None:
        """Insert a token at the cursor."""
        self._check_not_notifying("add_leaf")
        self.current_node.add_tex(Leaf(tex))
        self.notify_listeners()

    def add_function(self, tex: str, slots: Iterable[ArgumentSlot | str]) -> None:
        """Insert a function template at the cursor and move into its first argument.

        Parameters
        ----------
        tex : str
            Command name of the function
        slots : iterable of ArgumentSlot or slot names
            Delimiter kind of each argument

        Raises
        ------
        FunctionArityError
            If no slot is given

        """
        self._check_not_notifying("add_function")
        function = Function(tex, list(slots))
        self.current_node.add_tex(function)
        self.current_node.remove_cursor()
        self.current_node = function.argument_trees[0]
        self.current_node.set_cursor()
        logger.debug("Inserted %s, editing its first argument", tex)
        self.notify_listeners()

    def go_back(self, delete_mode: bool = False) -> NavigationResult:
        """Move the cursor left, or delete the fragment before it.

        Parameters
        ----------
        delete_mode : bool, default False
            Backspace instead of moving

        Returns
        -------
        NavigationResult
            What the current tree reported before the controller reacted

        """
        self._check_not_notifying("go_back")
        state = self.current_node.remove() if delete_mode else self.current_node.shift_cursor_left()

        if state is NavigationResult.SUCCESS:
            self.notify_listeners()
        elif state is NavigationResult.ENTERED_FUNCTION:
            # Step into the function rather than skipping or deleting it
            function = self.current_node.children[self.current_node.position]
            self.current_node = function.argument_trees[-1]  # type: ignore[attr-defined]
            self.current_node.position = len(self.current_node.children)
            self.current_node.set_cursor()
            self.notify_listeners()
        elif self._leave_backwards(delete_mode):
            self.notify_listeners()
        return state

    def _leave_backwards(self, delete_mode: bool) -> bool:
        """Handle END while going back; return whether anything changed."""
        parent = self.current_node.parent
        if parent is None:
            return False

        index = parent.argument_index(self.current_node)
        if index == 0:
            # Leaving the first argument steps out of the function
            outer, function_index = self._locate_function(parent)
            self.current_node.remove_cursor()
            self.current_node = outer
            outer.position = function_index
            if delete_mode:
                outer.children.pop(outer.position)
                logger.debug("Deleted function %s", parent.name)
            outer.set_cursor()
        else:
            self.current_node.remove_cursor()
            self.current_node = parent.argument_trees[index - 1]
            self.current_node.position = len(self.current_node.children)
            self.current_node.set_cursor()
        return True

    @staticmethod
    def _locate_function(function: Function) -> tuple[ExpressionTree, int]:
        """Return the tree holding ``function`` and its index there.

        Raises before any cursor state changes, so a detached function
        leaves the cursor where it was.
        """
        outer = function.parent
        if outer is None:
            raise ValidationError(f"Function '{function.name}' is not attached to a tree")
        try:
            return outer, outer.index_of(function)
        except ValueError as e:
            raise ValidationError(
                f"Function '{function.name}' is not a child of its parent tree", original_error=e
            ) from e

    def go_next(self) -> NavigationResult:
        """Move the cursor right.

        Returns
        -------
        NavigationResult
            What the current tree reported before the controller reacted

        """
        self._check_not_notifying("go_next")
        state = self.current_node.shift_cursor_right()

        if state is NavigationResult.SUCCESS:
            self.notify_listeners()
        elif state is NavigationResult.ENTERED_FUNCTION:
            function = self.current_node.children[self.current_node.position - 1]
            self.current_node = function.argument_trees[0]  # type: ignore[attr-defined]
            self.current_node.position = 0
            self.current_node.set_cursor()
            self.notify_listeners()
        elif self._leave_forwards():
            self.notify_listeners()
        return state

    def _leave_forwards(self) -> bool:
        """Handle END while going next; return whether anything changed."""
        parent = self.current_node.parent
        if parent is None:
            return False

        index = parent.argument_index(self.current_node)
        if index == len(parent.argument_trees) - 1:
            outer, function_index = self._locate_function(parent)
            self.current_node.remove_cursor()
            self.current_node = outer
            outer.position = function_index + 1
            outer.set_cursor()
        else:
            self.current_node.remove_cursor()
            self.current_node = parent.argument_trees[index + 1]
            self.current_node.position = 0
            self.current_node.set_cursor()
        return True

    def clear(self) -> None:
        """Empty the document and put the cursor in the root."""
        self._check_not_notifying("clear")
        self.root = ExpressionTree()
        self.current_node = self.root
        self.current_node.set_cursor()
        self.notify_listeners()

    def update_value(self, value: ExpressionTree) -> None:
        """Replace the document, e.g. with the output of a TeX parser.

        The cursor is placed at the end of the new root.

        Raises
        ------
        ValidationError
            If ``value`` is an argument tree of a function rather than a root

        """
        self._check_not_notifying("update_value")
        if value.parent is not None:
            raise ValidationError(
                f"Argument tree of '{value.parent.name}' cannot become the document root",
                parameter_name="value",
                parameter_value=value,
            )
        for tree in value.walk():
            if tree.has_cursor:
                tree.remove_cursor()
        self.root = value
        self.current_node = value
        value.position = len(value.children)
        value.set_cursor()
        self.notify_listeners()
