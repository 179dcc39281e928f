#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathedit/utils/color.py
"""Color conversion for the cursor glyph.

The cursor is rendered as ``\\textcolor{#rrggbb}{\\cursor}``; this module turns
the color values accepted by the public API into that ``#rrggbb`` form.
"""

from __future__ import annotations

import re
from typing import Any

from mathedit.constants import NAMED_COLORS, ColorValue
from mathedit.exceptions import ValidationError

_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def _channel_to_int8(value: Any) -> int:
    # Floats are fractions of full intensity, ints are already 0-255
    if isinstance(value, bool):
        raise ValidationError(f"Invalid color channel: {value!r}", parameter_name="color", parameter_value=value)
    if isinstance(value, float):
        if not 0.0 <= value <= 1.0:
            raise ValidationError(
                f"Float color channels must be within 0.0-1.0, got {value}",
                parameter_name="color",
                parameter_value=value,
            )
        return round(value * 255.0) & 0xFF
    if isinstance(value, int):
        if not 0 <= value <= 255:
            raise ValidationError(
                f"Integer color channels must be within 0-255, got {value}",
                parameter_name="color",
                parameter_value=value,
            )
        return value
    raise ValidationError(f"Invalid color channel: {value!r}", parameter_name="color", parameter_value=value)


def to_hex(color: ColorValue) -> str:
    """Convert a color value to a lowercase ``#rrggbb`` string.

    Parameters
    ----------
    color : str or tuple
        ``"#rgb"``, ``"#rrggbb"`` (leading ``#`` optional), a named color such
        as ``"red"``, or an ``(r, g, b)`` triple of ints 0-255 or floats
        0.0-1.0.

    Returns
    -------
    str
        The color as ``#rrggbb``

    Raises
    ------
    ValidationError
        If the value cannot be interpreted as a color

    Examples
    --------
    >>> to_hex("#F00")
    '#ff0000'
    >>> to_hex((0, 128, 255))
    '#0080ff'
    >>> to_hex((1.0, 0.0, 0.5))
    '#ff0080'

    """
    if isinstance(color, str):
        named = NAMED_COLORS.get(color.strip().lower())
        if named is not None:
            return named

        match = _HEX_PATTERN.match(color.strip())
        if match is None:
            raise ValidationError(f"Invalid color: {color!r}", parameter_name="color", parameter_value=color)
        digits = match.group(1).lower()
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return f"#{digits}"

    if isinstance(color, (tuple, list)):
        if len(color) != 3:
            raise ValidationError(
                f"Color tuples need exactly 3 channels, got {len(color)}",
                parameter_name="color",
                parameter_value=color,
            )
        return "#" + "".join(f"{_channel_to_int8(channel):02x}" for channel in color)

    raise ValidationError(f"Unsupported color type: {type(color).__name__}", parameter_name="color", parameter_value=color)
