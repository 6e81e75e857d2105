"""
Module: interaction

Purpose:
    Pointer/keyboard manipulation of lines between the home tray and the
    drop area, and the registry that routes input events to questions.

Key Classes:
    - InteractionController: Per-question gesture state machine
    - QuestionManager: Container id -> controller registry
    - InteractionConfig: Layout and movement constants
"""

from .config import InteractionConfig
from .events import (
    EventTarget,
    KeyEvent,
    PointerEvent,
    PointerPhase,
    TargetPart,
)
from .controller import InteractionController, LineView, LiveLine
from .manager import QuestionManager, get_question_manager, reset_question_manager

__all__ = [
    "InteractionConfig",
    "EventTarget",
    "KeyEvent",
    "PointerEvent",
    "PointerPhase",
    "TargetPart",
    "InteractionController",
    "LineView",
    "LiveLine",
    "QuestionManager",
    "get_question_manager",
    "reset_question_manager",
]
