#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathedit/utils/__init__.py
"""Utility modules for the mathedit package."""

from mathedit.utils.color import to_hex

__all__ = [
    "to_hex",
]
