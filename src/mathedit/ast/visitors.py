#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathedit/ast/visitors.py
"""Visitor pattern implementation for expression traversal.

The fragment kinds form a closed set (leaf, function, cursor). Every piece of
code that behaves differently per kind subclasses ``FragmentVisitor``; adding
a kind means adding an abstract method here, and every visitor that does not
handle it can no longer be instantiated.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any

from mathedit.ast.nodes import CursorMarker, Function, Leaf
from mathedit.exceptions import ValidationError

if TYPE_CHECKING:
    from mathedit.ast.tree import ExpressionTree

logger = logging.getLogger(__name__)


class FragmentVisitor(ABC):
    """Abstract base class for expression visitors.

    Subclasses implement one visit_* method per fragment kind plus
    ``visit_tree`` for the sibling lists that hold them.

    Examples
    --------
    Counting leaves in a document:

        >>> class LeafCounter(FragmentVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...     def visit_tree(self, node):
        ...         for child in node.children:
        ...             child.accept(self)
        ...     def visit_leaf(self, node):
        ...         self.count += 1
        ...     def visit_function(self, node):
        ...         for tree in node.argument_trees:
        ...             tree.accept(self)
        ...     def visit_cursor(self, node):
        ...         pass

    """

    @abstractmethod
    def visit_tree(self, node: ExpressionTree) -> Any:
        """Visit an ExpressionTree."""
        pass

    @abstractmethod
    def visit_leaf(self, node: Leaf) -> Any:
        """Visit a Leaf fragment."""
        pass

    @abstractmethod
    def visit_function(self, node: Function) -> Any:
        """Visit a Function fragment."""
        pass

    @abstractmethod
    def visit_cursor(self, node: CursorMarker) -> Any:
        """Visit the cursor marker."""
        pass


class DeletionKind(Enum):
    """How backspace treats the fragment before the cursor."""

    # Descend into the function instead of deleting it
    FUNCTION = "function"
    # Remove the whole case-system block the fragment belongs to
    SYSTEM_MARKER = "system_marker"
    # Remove the command as one unit
    COMMAND = "command"
    # Remove the single fragment
    TOKEN = "token"


class DeletionClassifier(FragmentVisitor):
    """Classify the fragment a backspace is about to delete.

    Trees are not fragments and the cursor is never a child, so both
    ``visit_tree`` and ``visit_cursor`` reject their input.
    """

    def visit_tree(self, node: ExpressionTree) -> DeletionKind:
        raise ValidationError("Expression trees cannot be deleted as fragments", parameter_name="fragment")

    def visit_leaf(self, node: Leaf) -> DeletionKind:
        # Block markers win over the command check: "\begin{cases}" is both
        if node.has_system_marker:
            return DeletionKind.SYSTEM_MARKER
        if node.is_command:
            return DeletionKind.COMMAND
        return DeletionKind.TOKEN

    def visit_function(self, node: Function) -> DeletionKind:
        return DeletionKind.FUNCTION

    def visit_cursor(self, node: CursorMarker) -> DeletionKind:
        raise ValidationError("The cursor is not a child fragment", parameter_name="fragment")


class ValidationVisitor(FragmentVisitor):
    """Visitor that validates the structure of an expression.

    This visitor checks for:
    - Cursor positions outside ``[0, len(children)]``
    - Cursor markers stored as children
    - Functions whose slot and argument tree counts disagree, or that have no slot
    - Back-references that do not point at the actual owner
    - Argument trees shared between functions
    - More than one tree with the cursor set

    Parameters
    ----------
    strict : bool, default = True
        Whether to raise ``ValidationError`` on the first problem found

    Examples
    --------
        >>> validator = ValidationVisitor(strict=False)
        >>> problems = validator.validate(tree)

    """

    def __init__(self, strict: bool = True):
        """Initialize the validator.

        Parameters
        ----------
        strict : bool, default = True
            Whether to raise errors immediately on validation failures

        """
        self.strict = strict
        self.errors: list[str] = []
        self._tree_stack: list[ExpressionTree] = []
        self._seen_trees: set[int] = set()
        self._cursor_count = 0

    def _add_error(self, message: str) -> None:
        """Record a validation error, raising it in strict mode.

        Parameters
        ----------
        message : str
            Error message

        """
        self.errors.append(message)
        if self.strict:
            raise ValidationError(message)

    def validate(self, tree: ExpressionTree) -> list[str]:
        """Validate a whole document rooted at ``tree``.

        Parameters
        ----------
        tree : ExpressionTree
            Root of the document to check

        Returns
        -------
        list of str
            Problems found (empty when the document is valid)

        Raises
        ------
        ValidationError
            In strict mode, on the first problem found

        """
        self.errors = []
        self._tree_stack = []
        self._seen_trees = set()
        self._cursor_count = 0

        tree.accept(self)
        if self._cursor_count > 1:
            self._add_error(f"Cursor is set in {self._cursor_count} trees, expected at most one")
        if self.errors:
            logger.debug("Validation found %d problem(s)", len(self.errors))
        return self.errors

    def visit_tree(self, node: ExpressionTree) -> None:
        if id(node) in self._seen_trees:
            self._add_error("Expression tree appears more than once in the document")
            return
        self._seen_trees.add(id(node))

        if not 0 <= node.position <= len(node.children):
            self._add_error(f"Cursor position {node.position} outside [0, {len(node.children)}]")
        if node.has_cursor:
            self._cursor_count += 1

        self._tree_stack.append(node)
        try:
            for child in node.children:
                child.accept(self)
        finally:
            self._tree_stack.pop()

    def visit_leaf(self, node: Leaf) -> None:
        if not isinstance(node.text, str):
            self._add_error(f"Leaf text must be a string, got {type(node.text).__name__}")

    def visit_function(self, node: Function) -> None:
        if not node.slots:
            self._add_error(f"Function '{node.name}' has no argument slots")
        if len(node.slots) != len(node.argument_trees):
            self._add_error(
                f"Function '{node.name}' has {len(node.slots)} slot(s) "
                f"but {len(node.argument_trees)} argument tree(s)"
            )
        if self._tree_stack and node.parent is not self._tree_stack[-1]:
            self._add_error(f"Function '{node.name}' does not point back at the tree containing it")

        for tree in node.argument_trees:
            if tree.parent is not node:
                self._add_error(f"Argument tree of '{node.name}' does not point back at its function")
            tree.accept(self)

    def visit_cursor(self, node: CursorMarker) -> None:
        self._add_error("Cursor marker stored as a child fragment")
