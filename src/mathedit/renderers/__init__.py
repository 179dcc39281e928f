#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathedit/renderers/__init__.py
"""Renderers turning expression trees into markup."""

from mathedit.renderers.base import BaseRenderer
from mathedit.renderers.tex import TeXRenderer, needs_space_between

__all__ = [
    "BaseRenderer",
    "TeXRenderer",
    "needs_space_between",
]
