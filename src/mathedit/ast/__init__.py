#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathedit/ast/__init__.py
"""Expression tree module for incremental math editing.

This module provides the tree an editor builds one keystroke at a time:

- nodes: the fragment kinds (Leaf, Function, CursorMarker) and ArgumentSlot
- tree: ExpressionTree, the sibling list with a cursor, and NavigationResult
- visitors: FragmentVisitor and the deletion and validation visitors

Examples
--------
Basic usage:

    >>> from mathedit.ast import ArgumentSlot, ExpressionTree, Function, Leaf
    >>>
    >>> tree = ExpressionTree()
    >>> tree.add_tex(Leaf("x"))
    >>> tree.add_tex(Leaf("+"))
    >>> tree.add_tex(Function(r"\\frac", [ArgumentSlot.BRACES, ArgumentSlot.BRACES]))
    >>> tree.build_tex_string()
    'x+\\\\frac{\\\\Box}{\\\\Box}'

"""

from __future__ import annotations

from mathedit.ast.nodes import ArgumentSlot, CursorMarker, ExpressionFragment, Function, Leaf
from mathedit.ast.tree import ExpressionTree, NavigationResult, find_system_span, system_block_spans
from mathedit.ast.visitors import DeletionClassifier, DeletionKind, FragmentVisitor, ValidationVisitor

__all__ = [
    # Fragments
    "ArgumentSlot",
    "CursorMarker",
    "ExpressionFragment",
    "Function",
    "Leaf",
    # Trees
    "ExpressionTree",
    "NavigationResult",
    "find_system_span",
    "system_block_spans",
    # Visitors
    "DeletionClassifier",
    "DeletionKind",
    "FragmentVisitor",
    "ValidationVisitor",
]
