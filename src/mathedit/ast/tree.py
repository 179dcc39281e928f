#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathedit/ast/tree.py
r"""Expression tree with a movable cursor.

An ``ExpressionTree`` is an ordered list of fragments (reading order of the
expression) plus a cursor ``position`` in ``[0, len(children)]``. The
document root is a tree; every argument of a ``Function`` fragment is a tree
of its own, so the whole expression nests as deep as its functions do.

The cursor is positional: a tree either has the cursor set at ``position``
or not set at all, and the renderer draws the cursor glyph at ``position``.
Only one tree of a document has the cursor set at a time; moving between
trees is the editing controller's job, driven by the ``NavigationResult``
each move or deletion returns:

    SUCCESS           moved or deleted, the cursor is set at the new position
    END               at the edge of this tree, nothing changed
    ENTERED_FUNCTION  the fragment crossed is a function; the cursor is now
                      unset here and must be set inside one of its arguments

Backspace (``remove``) never deletes part of a command: a leaf such as
``\sin(`` goes as a whole, and a leaf holding ``\begin{cases}`` or
``\end{cases}`` takes the whole case-system block with it.

"""

from __future__ import annotations

import logging
import re
import weakref
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable, Iterator, Optional

from mathedit.ast.nodes import CursorMarker, ExpressionFragment, Function, Leaf
from mathedit.ast.visitors import DeletionClassifier, DeletionKind, FragmentVisitor
from mathedit.constants import SYSTEM_BEGIN, SYSTEM_END
from mathedit.exceptions import CursorStateError, ValidationError

if TYPE_CHECKING:
    from mathedit.options.tex import TeXRendererOptions

logger = logging.getLogger(__name__)

_SYSTEM_MARKER_PATTERN = re.compile(re.escape(SYSTEM_BEGIN) + "|" + re.escape(SYSTEM_END))
_CLASSIFIER = DeletionClassifier()


class NavigationResult(Enum):
    """Outcome of a cursor move or a deletion."""

    # The upcoming fragment in navigation direction is a function
    ENTERED_FUNCTION = "entered_function"

    # The cursor is already at the edge of the tree
    END = "end"

    # Moving or deleting succeeded
    SUCCESS = "success"


class _Adopter(FragmentVisitor):
    """Take ownership of a fragment being inserted into a tree."""

    def __init__(self, tree: ExpressionTree):
        self.tree = tree

    def visit_tree(self, node: ExpressionTree) -> None:
        raise ValidationError("An expression tree cannot be inserted as a fragment", parameter_name="fragment")

    def visit_leaf(self, node: Leaf) -> None:
        pass

    def visit_function(self, node: Function) -> None:
        owner = node.parent
        if owner is not None and any(child is node for child in owner.children):
            raise ValidationError(
                f"Function '{node.name}' is already part of a tree",
                parameter_name="fragment",
                parameter_value=node,
            )
        node.parent = self.tree

    def visit_cursor(self, node: CursorMarker) -> None:
        raise ValidationError(
            "The cursor is positional; use set_cursor() instead of inserting a cursor marker",
            parameter_name="fragment",
            parameter_value=node,
        )


def system_block_spans(children: Iterable[ExpressionFragment]) -> list[tuple[int, int]]:
    r"""Pair the case-system markers of a sibling list.

    Markers are matched with a stack, in reading order, including several
    markers inside a single leaf. Closing markers without an opening one and
    opening markers never closed are left out.

    Parameters
    ----------
    children : iterable of ExpressionFragment
        Sibling list to scan

    Returns
    -------
    list of tuple[int, int]
        ``(start, end)`` index pairs, inclusive, of every balanced block

    Examples
    --------
    >>> system_block_spans([Leaf(r"\begin{cases}"), Leaf("x"), Leaf(r"\end{cases}")])
    [(0, 2)]

    """
    stack: list[int] = []
    spans: list[tuple[int, int]] = []
    for index, fragment in enumerate(children):
        if fragment.accept(_CLASSIFIER) is not DeletionKind.SYSTEM_MARKER:
            continue
        for match in _SYSTEM_MARKER_PATTERN.finditer(fragment.text):  # type: ignore[attr-defined]
            if match.group(0) == SYSTEM_BEGIN:
                stack.append(index)
            elif stack:
                spans.append((stack.pop(), index))
    return spans


def find_system_span(children: list[ExpressionFragment], index: int) -> Optional[tuple[int, int]]:
    """Return the innermost balanced case-system block containing ``index``.

    Returns None when the marker at ``index`` has no partner.
    """
    containing = [(start, end) for start, end in system_block_spans(children) if start <= index <= end]
    if not containing:
        return None
    return min(containing, key=lambda span: span[1] - span[0])


class ExpressionTree:
    """Ordered list of fragments with a cursor position.

    Parameters
    ----------
    children : iterable of ExpressionFragment, optional
        Initial fragments, in reading order
    position : int, optional
        Initial cursor position; defaults to the end of ``children``

    Attributes
    ----------
    children : list of ExpressionFragment
        The fragments of this tree, never including the cursor
    position : int
        Cursor position, ``0 <= position <= len(children)``
    parent : Function or None
        The function owning this tree as an argument, None for a document
        root. Held as a weak reference.

    Raises
    ------
    ValidationError
        If a child is a cursor marker, or ``position`` is out of range

    """

    def __init__(self, children: Optional[Iterable[ExpressionFragment]] = None, position: Optional[int] = None):
        """Initialize the tree with optional children and cursor position."""
        self.children: list[ExpressionFragment] = []
        self.position = 0
        self._has_cursor = False
        self._parent_ref: Optional[weakref.ReferenceType[Function]] = None

        for child in children or []:
            self.add_tex(child)

        if position is not None:
            if not 0 <= position <= len(self.children):
                raise ValidationError(
                    f"Cursor position {position} outside [0, {len(self.children)}]",
                    parameter_name="position",
                    parameter_value=position,
                )
            self.position = position

    def __repr__(self) -> str:
        return (
            f"ExpressionTree(children={self.children!r}, position={self.position}, "
            f"has_cursor={self._has_cursor})"
        )

    def __len__(self) -> int:
        return len(self.children)

    @property
    def parent(self) -> Optional[Function]:
        """The function owning this tree, or None for a document root."""
        return self._parent_ref() if self._parent_ref is not None else None

    @parent.setter
    def parent(self, function: Optional[Function]) -> None:
        self._parent_ref = weakref.ref(function) if function is not None else None

    @property
    def has_cursor(self) -> bool:
        """Whether the cursor is set in this tree."""
        return self._has_cursor

    @property
    def is_empty(self) -> bool:
        """Whether the tree has no fragments."""
        return not self.children

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this tree.

        Returns
        -------
        Any
            Result from visitor.visit_tree(self)

        """
        return visitor.visit_tree(self)

    def index_of(self, fragment: ExpressionFragment) -> int:
        """Return the index of ``fragment`` in ``children``, compared by identity.

        Raises
        ------
        ValueError
            If the fragment is not a child of this tree

        """
        for index, child in enumerate(self.children):
            if child is fragment:
                return index
        raise ValueError(f"{fragment!r} is not a child of this tree")

    def walk(self) -> Iterator[ExpressionTree]:
        """Yield this tree and every nested argument tree, depth first in reading order."""
        yield self
        for child in self.children:
            if isinstance(child, Function):
                for tree in child.argument_trees:
                    yield from tree.walk()

    def set_cursor(self) -> None:
        """Set the cursor at the current position.

        Raises
        ------
        CursorStateError
            If the cursor is already set in this tree

        """
        if self._has_cursor:
            raise CursorStateError("Cursor is already set", position=self.position)
        self._has_cursor = True

    def remove_cursor(self) -> None:
        """Unset the cursor.

        Raises
        ------
        CursorStateError
            If the cursor is not set in this tree

        """
        if not self._has_cursor:
            raise CursorStateError("Cursor is not set", position=self.position)
        self._has_cursor = False

    def cursor_at_the_end(self) -> bool:
        """Return whether the cursor sits after the last fragment.

        This does *not* look into nested arguments: being at the end of this
        sibling list is not a guarantee for being visually all the way on the
        right. With a ``\\frac`` whose numerator is long, the cursor after
        the fraction may not be at the right edge of what is displayed.
        """
        return self._has_cursor and self.position == len(self.children)

    def shift_cursor_left(self) -> NavigationResult:
        """Move the cursor one fragment to the left.

        Returns
        -------
        NavigationResult
            END at the start of the tree; ENTERED_FUNCTION if the fragment
            crossed is a function (cursor left unset, ``position`` before the
            function); SUCCESS otherwise

        """
        if self.position == 0:
            return NavigationResult.END
        self.remove_cursor()
        self.position -= 1
        if self.children[self.position].accept(_CLASSIFIER) is DeletionKind.FUNCTION:
            logger.debug("Cursor reached function at %d moving left", self.position)
            return NavigationResult.ENTERED_FUNCTION
        self.set_cursor()
        return NavigationResult.SUCCESS

    def shift_cursor_right(self) -> NavigationResult:
        """Move the cursor one fragment to the right.

        Returns
        -------
        NavigationResult
            END at the end of the tree; ENTERED_FUNCTION if the fragment
            crossed is a function (cursor left unset, ``position`` after the
            function); SUCCESS otherwise

        """
        if self.position >= len(self.children):
            return NavigationResult.END
        self.remove_cursor()
        self.position += 1
        if self.children[self.position - 1].accept(_CLASSIFIER) is DeletionKind.FUNCTION:
            logger.debug("Cursor reached function at %d moving right", self.position - 1)
            return NavigationResult.ENTERED_FUNCTION
        self.set_cursor()
        return NavigationResult.SUCCESS

    def add_tex(self, fragment: ExpressionFragment) -> None:
        """Insert a fragment at the cursor position and move the cursor after it.

        Parameters
        ----------
        fragment : ExpressionFragment
            Leaf or function to insert. A function's ``parent`` is set to
            this tree.

        Raises
        ------
        ValidationError
            If ``fragment`` is a cursor marker or a function already placed
            in a tree, this one included

        """
        fragment.accept(_Adopter(self))
        self.children.insert(self.position, fragment)
        self.position += 1

    def remove(self) -> NavigationResult:
        """Delete the fragment before the cursor (backspace).

        Returns
        -------
        NavigationResult
            END at the start of the tree; ENTERED_FUNCTION if the fragment
            before the cursor is a function, which is kept (cursor left
            unset, ``position`` before the function); SUCCESS otherwise

        """
        if self.position == 0:
            return NavigationResult.END
        self.remove_cursor()
        self.position -= 1

        kind = self.children[self.position].accept(_CLASSIFIER)
        if kind is DeletionKind.FUNCTION:
            logger.debug("Backspace reached function at %d", self.position)
            return NavigationResult.ENTERED_FUNCTION

        if kind is DeletionKind.SYSTEM_MARKER:
            self._remove_system_structure(self.position)
        else:
            # Commands and plain tokens are both single fragments; a command
            # is never shortened character by character
            removed = self.children.pop(self.position)
            logger.debug("Removed %s %r at %d", kind.value, removed, self.position)

        self.set_cursor()
        return NavigationResult.SUCCESS

    def _remove_system_structure(self, index: int) -> None:
        """Remove the case-system block the marker at ``index`` belongs to."""
        span = find_system_span(self.children, index)
        if span is None:
            logger.warning("Unmatched case-system marker at %d, removing only that fragment", index)
            self.children.pop(index)
            self.position = index
            return

        start, end = span
        logger.debug("Removing case-system block %d..%d", start, end)
        del self.children[start : end + 1]
        self.position = start

    def build_tex_string(
        self,
        cursor_color: Any = None,
        placeholder_when_empty: bool = True,
        options: Optional[TeXRendererOptions] = None,
    ) -> str:
        r"""Serialize the tree, including nested arguments, to TeX.

        Parameters
        ----------
        cursor_color : color value, optional
            Color of the cursor glyph. Required when the cursor is set in
            this tree or any nested one.
        placeholder_when_empty : bool, default True
            Whether an empty tree renders as the placeholder (``\Box``) or
            as an empty string. Nested argument trees always use the
            placeholder.
        options : TeXRendererOptions, optional
            Renderer options; defaults are used when omitted

        Returns
        -------
        str
            TeX markup of the expression

        Raises
        ------
        CursorRenderingError
            If the cursor is set somewhere and no color is given

        """
        from mathedit.renderers.tex import TeXRenderer

        return TeXRenderer(options).render_to_string(
            self, cursor_color=cursor_color, placeholder_when_empty=placeholder_when_empty
        )
