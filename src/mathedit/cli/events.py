#  Copyright (c) 2025 Tom Villani, Ph.D.

r"""Input events replayed by the mathedit CLI.

Each command-line token (or script line) is one key press:

    @left, @right       move the cursor
    @back               backspace
    @clear              empty the field
    @page               toggle the keyboard page
    fn:NAME:SLOTS       insert a function, e.g. ``fn:\frac:braces,braces``
    anything else       insert the token as a leaf, e.g. ``x`` or ``\cdot``
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Literal

from mathedit.ast.nodes import ArgumentSlot
from mathedit.constants import (
    EVENT_BACKSPACE,
    EVENT_CLEAR,
    EVENT_FUNCTION_PREFIX,
    EVENT_LEFT,
    EVENT_RIGHT,
    EVENT_TOGGLE_PAGE,
)
from mathedit.controller import MathFieldEditingController
from mathedit.exceptions import ValidationError

logger = logging.getLogger(__name__)

EventKind = Literal["leaf", "function", "left", "right", "backspace", "clear", "page"]

_KEYWORDS: dict[str, EventKind] = {
    EVENT_LEFT: "left",
    EVENT_RIGHT: "right",
    EVENT_BACKSPACE: "backspace",
    EVENT_CLEAR: "clear",
    EVENT_TOGGLE_PAGE: "page",
}


@dataclass(frozen=True)
class InputEvent:
    """A single key press.

    Parameters
    ----------
    kind : str
        What the key does
    value : str
        Leaf text or function name; empty for navigation keys
    slots : tuple of ArgumentSlot
        Argument slots of a function event

    """

    kind: EventKind
    value: str = ""
    slots: tuple[ArgumentSlot, ...] = ()


def parse_event(token: str) -> InputEvent:
    """Parse one event token.

    Raises
    ------
    ValidationError
        For an empty token, an unknown ``@`` keyword, or a function event
        without a name or slots

    """
    if not token:
        raise ValidationError("Empty input event", parameter_name="event", parameter_value=token)

    if token in _KEYWORDS:
        return InputEvent(_KEYWORDS[token])

    if token.startswith("@"):
        valid = ", ".join(sorted(_KEYWORDS))
        raise ValidationError(f"Unknown event '{token}'. Valid events: {valid}", parameter_name="event", parameter_value=token)

    if token.startswith(EVENT_FUNCTION_PREFIX):
        name, sep, slot_spec = token[len(EVENT_FUNCTION_PREFIX) :].rpartition(":")
        if not sep or not name or not slot_spec:
            raise ValidationError(
                f"Function events look like 'fn:NAME:SLOT,SLOT', got '{token}'",
                parameter_name="event",
                parameter_value=token,
            )
        slots = tuple(ArgumentSlot.from_name(part) for part in slot_spec.split(","))
        return InputEvent("function", name, slots)

    return InputEvent("leaf", token)


def read_script(path: str | Path) -> list[str]:
    """Read event tokens from a script, one per line.

    Blank lines and lines starting with ``#`` are skipped. ``-`` reads
    standard input.
    """
    if str(path) == "-":
        lines = sys.stdin.read().splitlines()
    else:
        lines = Path(path).read_text(encoding="utf-8").splitlines()
    return [line.strip() for line in lines if line.strip() and not line.lstrip().startswith("#")]


def apply_event(controller: MathFieldEditingController, event: InputEvent) -> None:
    """Dispatch one event to the controller."""
    logger.debug("Event %s %s", event.kind, event.value)
    if event.kind == "leaf":
        controller.add_leaf(event.value)
    elif event.kind == "function":
        controller.add_function(event.value, event.slots)
    elif event.kind == "left":
        controller.go_back()
    elif event.kind == "right":
        controller.go_next()
    elif event.kind == "backspace":
        controller.go_back(delete_mode=True)
    elif event.kind == "clear":
        controller.clear()
    elif event.kind == "page":
        controller.toggle_page()
    else:
        raise ValidationError(f"Unhandled event kind: {event.kind}", parameter_name="event", parameter_value=event)


def replay(controller: MathFieldEditingController, events: Iterable[InputEvent]) -> int:
    """Apply events in order and return how many were applied."""
    count = 0
    for event in events:
        apply_event(controller, event)
        count += 1
    return count
