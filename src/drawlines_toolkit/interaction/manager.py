"""
Module: interaction.manager

Purpose:
    Registry of interaction controllers keyed by question container id, and
    dispatch of raw input events to the controller that owns the container
    the event came from.

    One manager normally lives for the page (or session); get_question_manager()
    creates it lazily on first use. Hosts that serve several sessions should
    create a QuestionManager per session instead of sharing the default.

Key Classes:
    - QuestionManager: init / dispatch / teardown

Key Functions:
    - get_question_manager(): Lazily created default manager
    - reset_question_manager(): Drop the default manager

Dependencies:
    - interaction.controller.InteractionController
    - interaction.events

Used By:
    - Presentation shell (external)
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Mapping, MutableMapping, Optional, Set, Tuple

from drawlines_toolkit.core.models import QuestionDefinition

from .config import InteractionConfig
from .controller import InteractionController
from .events import InputEvent, KeyEvent, PointerEvent, PointerPhase

logger = logging.getLogger(__name__)

# Called once per container id with (container_id, dispatch) so the shell
# can subscribe the container's input events.
ListenerHook = Callable[[str, Callable[[InputEvent], bool]], None]


class QuestionManager:
    """
    Tracks every interactive question on a page and routes events to them.

    Attributes:
        questions: Controllers indexed by container id
        listener_hook: Optional callable that subscribes a container's events

    Example:
        >>> manager = QuestionManager()
        >>> controller = manager.init("q1", question, (400, 300))
        >>> manager.dispatch(KeyEvent(EventTarget("q1", 0, TargetPart.LINE), "ArrowDown"))
        True
    """

    def __init__(
        self,
        listener_hook: Optional[ListenerHook] = None,
        config: Optional[InteractionConfig] = None,
    ) -> None:
        self.questions: Dict[str, InteractionController] = {}
        self.listener_hook = listener_hook
        self.config = config or InteractionConfig()
        self._listeners_initialised: Set[str] = set()

    def init(
        self,
        container_id: str,
        question: QuestionDefinition,
        drop_size: Tuple[int, int],
        *,
        read_only: bool = False,
        initial_response: Optional[Mapping[str, str]] = None,
        response_fields: Optional[MutableMapping[str, str]] = None,
    ) -> InteractionController:
        """
        Create (or re-create) the controller for a question container.

        Re-rendering a container replaces its controller, but its event
        listeners are only registered the first time, and never for a
        read-only question.

        Returns:
            The new controller
        """
        controller = InteractionController(
            container_id,
            question,
            drop_size,
            initial_response=initial_response,
            read_only=read_only,
            config=self.config,
            response_fields=response_fields,
        )
        self.questions[container_id] = controller

        if container_id not in self._listeners_initialised and not read_only:
            self._listeners_initialised.add(container_id)
            if self.listener_hook is not None:
                self.listener_hook(container_id, self.dispatch)
            logger.debug(f"Registered input listeners for {container_id!r}")

        return controller

    def get_question_for_event(self, event: InputEvent) -> Optional[InteractionController]:
        """Controller owning the container the event came from, if any."""
        return self.questions.get(event.target.container_id)

    def dispatch(self, event: InputEvent) -> bool:
        """
        Route an input event to its controller.

        Returns:
            True if the event was consumed; False if it was ignored
        """
        controller = self.get_question_for_event(event)
        if controller is None:
            logger.debug(f"Ignoring event for unknown container {event.target.container_id!r}")
            return False

        if isinstance(event, KeyEvent):
            return controller.key_press(event.target, event.code)
        if isinstance(event, PointerEvent):
            if event.phase is PointerPhase.DOWN:
                return controller.pointer_down(event.target, event.x, event.y)
            if event.phase is PointerPhase.MOVE:
                return controller.pointer_move(event.x, event.y)
            return controller.pointer_up()
        return False

    def teardown(self) -> None:
        """Forget every question (page or session end)."""
        self.questions.clear()
        self._listeners_initialised.clear()


_default_manager: Optional[QuestionManager] = None


def get_question_manager() -> QuestionManager:
    """Return the page-wide manager, creating it on first use."""
    global _default_manager
    if _default_manager is None:
        _default_manager = QuestionManager()
    return _default_manager


def reset_question_manager() -> None:
    """Tear down and drop the page-wide manager."""
    global _default_manager
    if _default_manager is not None:
        _default_manager.teardown()
    _default_manager = None
