"""
Module: interaction.events

Purpose:
    Input events as delivered by the presentation shell. The shell resolves
    which question container, line and line part an event hit; the
    controller only sees these plain values, never widgets or DOM nodes.

Key Classes:
    - EventTarget: Container id + line index + which part of the line
    - PointerEvent: Pointer/touch down, move or up at page coordinates
    - KeyEvent: Key press identified by its physical key code

Used By:
    - interaction.controller.InteractionController
    - interaction.manager.QuestionManager
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple, Union

from drawlines_toolkit.core.models.lines import Handle


class TargetPart(str, Enum):
    """Part of a line an event landed on."""

    START_HANDLE = "startcircle"
    END_HANDLE = "endcircle"
    LINE = "line"
    NONE = "none"


class PointerPhase(str, Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"


@dataclass(frozen=True)
class EventTarget:
    """
    Where an event originated.

    Attributes:
        container_id: Id of the question container the event came from
        line_index: Zero-based line index, None if no line was hit
        part: Which part of the line was hit
    """

    container_id: str
    line_index: Optional[int] = None
    part: TargetPart = TargetPart.NONE

    @property
    def handle(self) -> Optional[Handle]:
        """The handle hit, if the target is a handle."""
        if self.part is TargetPart.START_HANDLE:
            return Handle.START
        if self.part is TargetPart.END_HANDLE:
            return Handle.END
        return None

    @property
    def hits_line(self) -> bool:
        return self.line_index is not None and self.part is not TargetPart.NONE


@dataclass(frozen=True)
class PointerEvent:
    """Pointer or touch event; x and y are page coordinates."""

    target: EventTarget
    phase: PointerPhase
    x: float = 0
    y: float = 0


@dataclass(frozen=True)
class KeyEvent:
    """Key press; code is the physical key code, e.g. "ArrowLeft" or "KeyA"."""

    target: EventTarget
    code: str


InputEvent = Union[PointerEvent, KeyEvent]


# Unit direction per movement key.
KEY_DIRECTIONS: Dict[str, Tuple[int, int]] = {
    "ArrowLeft": (-1, 0),
    "KeyA": (-1, 0),
    "ArrowRight": (1, 0),
    "KeyD": (1, 0),
    "ArrowDown": (0, 1),
    "KeyS": (0, 1),
    "ArrowUp": (0, -1),
    "KeyW": (0, -1),
}

ACTIVATE_KEY = "Space"
CANCEL_KEY = "Escape"
RESERVED_KEYS: FrozenSet[str] = frozenset({ACTIVATE_KEY, CANCEL_KEY})
