r"""mathedit - Expression tree and cursor engine for math keyboards.

mathedit keeps the expression a user types on a math keyboard as a tree of
TeX fragments and tracks a cursor inside it. Every key press becomes one
editing call; after each call the whole expression, cursor included, is
serialized to TeX for an external typesetter to display.

Key Features
------------
- Positional cursor that moves into and out of nested function arguments
- Backspace that removes commands as a whole and case-system blocks as a block
- TeX serialization with placeholders for empty slots and a colored cursor glyph
- Change listeners for views that re-render after every edit
- Structure validation of whole documents

Requirements
------------
- Python 3.10+

Examples
--------
Typing ``1/2`` into a fraction template:

    >>> from mathedit import ArgumentSlot, MathFieldEditingController
    >>> controller = MathFieldEditingController()
    >>> controller.add_function(r"\frac", [ArgumentSlot.BRACES, ArgumentSlot.BRACES])
    >>> controller.add_leaf("1")
    >>> controller.go_next()
    <NavigationResult.END: 'end'>
    >>> controller.add_leaf("2")
    >>> controller.render(cursor_color="red")
    '\\frac{1}{2\\textcolor{#ff0000}{\\cursor}}'

Working with trees directly:

    >>> from mathedit import ExpressionTree, Leaf
    >>> tree = ExpressionTree([Leaf(r"\cdot"), Leaf("4")])
    >>> tree.build_tex_string()
    '\\cdot 4'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "mathedit requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from mathedit.ast import (  # noqa: E402
    ArgumentSlot,
    CursorMarker,
    DeletionKind,
    ExpressionFragment,
    ExpressionTree,
    FragmentVisitor,
    Function,
    Leaf,
    NavigationResult,
    ValidationVisitor,
)
from mathedit.controller import MathFieldEditingController  # noqa: E402
from mathedit.exceptions import (  # noqa: E402
    ConfigError,
    CursorRenderingError,
    CursorStateError,
    FunctionArityError,
    MathEditError,
    ReentrantEditError,
    RenderingError,
    ValidationError,
)
from mathedit.options import EditorOptions, TeXRendererOptions  # noqa: E402
from mathedit.renderers import TeXRenderer  # noqa: E402

__all__ = [
    "__version__",
    # Tree
    "ArgumentSlot",
    "CursorMarker",
    "DeletionKind",
    "ExpressionFragment",
    "ExpressionTree",
    "FragmentVisitor",
    "Function",
    "Leaf",
    "NavigationResult",
    "ValidationVisitor",
    # Editing
    "MathFieldEditingController",
    # Rendering
    "TeXRenderer",
    # Options
    "EditorOptions",
    "TeXRendererOptions",
    # Exceptions
    "ConfigError",
    "CursorRenderingError",
    "CursorStateError",
    "FunctionArityError",
    "MathEditError",
    "ReentrantEditError",
    "RenderingError",
    "ValidationError",
]
