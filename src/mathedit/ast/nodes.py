#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathedit/ast/nodes.py
"""Fragment classes for the edited expression.

An expression is an ``ExpressionTree`` (see ``mathedit.ast.tree``) whose
children are fragments. There are exactly three kinds of fragment:

    - Leaf: an atomic piece of markup such as ``x``, ``+`` or ``\\sin(``
    - Function: a command with one or more argument slots, each holding its
      own nested ``ExpressionTree`` (``\\frac{..}{..}``, ``\\sqrt[..]{..}``)
    - CursorMarker: the zero-width cursor glyph; it is never stored in a tree
      but is rendered at the tree's cursor position

Every fragment supports the visitor pattern. Code that must treat the kinds
differently (rendering, deletion, validation) implements ``FragmentVisitor``,
whose abstract methods make the set of kinds explicit.

"""

from __future__ import annotations

import weakref
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from mathedit.constants import COMMAND_ESCAPE, SYSTEM_BEGIN, SYSTEM_END
from mathedit.exceptions import FunctionArityError, ValidationError

if TYPE_CHECKING:
    from mathedit.ast.tree import ExpressionTree


class ArgumentSlot(Enum):
    """How a function argument is delimited.

    BRACES ``{ }`` are used in most cases (e.g. both arguments of a fraction).
    BRACKETS ``[ ]`` are used for the index of an nth root.
    PARENTHESES ``( )`` are used for the argument of a base-n logarithm.
    """

    BRACES = "braces"
    BRACKETS = "brackets"
    PARENTHESES = "parentheses"

    @property
    def opening(self) -> str:
        """Opening delimiter of the slot."""
        if self is ArgumentSlot.BRACES:
            return "{"
        if self is ArgumentSlot.BRACKETS:
            return "["
        return "("

    @property
    def closing(self) -> str:
        """Closing delimiter of the slot."""
        if self is ArgumentSlot.BRACES:
            return "}"
        if self is ArgumentSlot.BRACKETS:
            return "]"
        return ")"

    @classmethod
    def from_name(cls, name: str) -> ArgumentSlot:
        """Look up a slot by name (``"braces"``, ``"brackets"``, ``"parentheses"``).

        Raises
        ------
        ValidationError
            If the name is not a known slot kind

        """
        try:
            return cls(name.strip().lower())
        except ValueError as e:
            valid = ", ".join(slot.value for slot in cls)
            raise ValidationError(
                f"Unknown argument slot '{name}'. Valid slots: {valid}",
                parameter_name="slot",
                parameter_value=name,
                original_error=e,
            ) from e


class ExpressionFragment(ABC):
    """Base class for all fragments of an expression.

    All fragments support the visitor pattern, and each can serialize itself
    to TeX with ``build_string``.
    """

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this fragment.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass

    def build_string(self, cursor_color: Any = None) -> str:
        """Serialize this fragment to TeX.

        Parameters
        ----------
        cursor_color : color value, optional
            Color of the cursor glyph, required if the cursor is rendered
            anywhere inside this fragment

        Returns
        -------
        str
            The fragment's markup

        """
        from mathedit.renderers.tex import TeXRenderer

        return TeXRenderer().render_fragment(self, cursor_color=cursor_color)


@dataclass(frozen=True)
class Leaf(ExpressionFragment):
    r"""Atomic piece of markup.

    The text is emitted verbatim. It may be a single character (``x``) or a
    multi-character command (``\cdot``, ``\sin(``) that is inserted and
    deleted as one unit.

    Parameters
    ----------
    text : str
        Markup text of the leaf

    """

    text: str

    @property
    def is_command(self) -> bool:
        """Whether the leaf starts with the command escape character."""
        return self.text.startswith(COMMAND_ESCAPE)

    @property
    def has_system_marker(self) -> bool:
        """Whether the leaf opens or closes a case-system block."""
        return SYSTEM_BEGIN in self.text or SYSTEM_END in self.text

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this leaf.

        Returns
        -------
        Any
            Result from visitor.visit_leaf(self)

        """
        return visitor.visit_leaf(self)


@dataclass(eq=False)
class Function(ExpressionFragment):
    r"""Command with argument slots, each owning a nested expression tree.

    ``Function(r"\frac", [ArgumentSlot.BRACES, ArgumentSlot.BRACES])``
    renders as ``\frac{\Box}{\Box}`` while both arguments are empty.

    Parameters
    ----------
    name : str
        Command name emitted before the arguments (``\frac``, ``\sqrt``, ``^``)
    slots : list of ArgumentSlot
        Delimiter kind of each argument, in order; must not be empty. Slot
        names (``"braces"``) are accepted as well.
    argument_trees : list of ExpressionTree, optional
        Pre-built argument trees, one per slot. When omitted an empty tree is
        created for every slot. Supplied trees are adopted: their ``parent``
        is set to this function.

    Raises
    ------
    FunctionArityError
        If ``slots`` is empty or the number of argument trees differs from
        the number of slots
    ValidationError
        If a supplied argument tree already belongs to another function

    Notes
    -----
    Functions compare by identity. Both back-references (function to
    containing tree, argument tree to function) are weak; ``parent`` is set
    by ``ExpressionTree.add_tex`` when the function is inserted.

    """

    name: str
    slots: list[ArgumentSlot]
    argument_trees: Optional[list[ExpressionTree]] = None

    def __post_init__(self) -> None:
        from mathedit.ast.tree import ExpressionTree

        self._parent_ref: Optional[weakref.ReferenceType[ExpressionTree]] = None
        self.slots = [slot if isinstance(slot, ArgumentSlot) else ArgumentSlot.from_name(slot) for slot in self.slots]
        if not self.slots:
            raise FunctionArityError(self.name, 0)

        trees = list(self.argument_trees or [])
        if not trees:
            trees = [ExpressionTree() for _ in self.slots]
        elif len(trees) != len(self.slots):
            raise FunctionArityError(self.name, len(self.slots), len(trees))

        for tree in trees:
            owner = tree.parent
            if owner is not None and owner is not self:
                raise ValidationError(
                    f"Argument tree of '{self.name}' already belongs to '{owner.name}'",
                    parameter_name="argument_trees",
                    parameter_value=tree,
                )
            tree.parent = self
        self.argument_trees = trees

    @property
    def parent(self) -> Optional[ExpressionTree]:
        """The tree containing this function, or None if not inserted yet."""
        return self._parent_ref() if self._parent_ref is not None else None

    @parent.setter
    def parent(self, tree: Optional[ExpressionTree]) -> None:
        self._parent_ref = weakref.ref(tree) if tree is not None else None

    def argument_index(self, tree: ExpressionTree) -> int:
        """Return the index of ``tree`` among this function's argument trees.

        Raises
        ------
        ValueError
            If ``tree`` is not an argument of this function

        """
        for index, candidate in enumerate(self.argument_trees):
            if candidate is tree:
                return index
        raise ValueError(f"Tree is not an argument of '{self.name}'")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this function.

        Returns
        -------
        Any
            Result from visitor.visit_function(self)

        """
        return visitor.visit_function(self)


@dataclass(frozen=True)
class CursorMarker(ExpressionFragment):
    r"""The cursor glyph.

    Trees track the cursor as a position; the renderer emits this marker at
    that position. It renders as ``\textcolor{#rrggbb}{\cursor}`` and cannot
    be rendered without a color.
    """

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing the cursor.

        Returns
        -------
        Any
            Result from visitor.visit_cursor(self)

        """
        return visitor.visit_cursor(self)
