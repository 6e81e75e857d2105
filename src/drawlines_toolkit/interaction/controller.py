"""
Module: interaction.controller

Purpose:
    Per-question interaction state machine. Turns pointer and keyboard
    events into LineGeometry moves, decides which container (home tray or
    drop area) each line belongs to, and writes the current response value
    for a line into the externally owned response fields after every move.

    Gesture states:

        Idle ──pointer_down──▶ Dragging(handle | whole, last pointer)
          ▲                         │ pointer_move: one move per event
          └──pointer_up / Escape────┘

    Line container rule:
        HOME ─▶ DROP  when a pointer press or key press activates a home line
        DROP ─▶ HOME  when the start handle ends a move below
                      (drop height - return_home_margin)

Key Classes:
    - InteractionController: The state machine for one question container
    - LiveLine: Definition + geometry of one line being edited
    - LineView: Read-only projection handed to the presentation layer

Dependencies:
    - core.models: geometry and question definition
    - interaction.config: layout constants
    - interaction.events: event targets and key map

Used By:
    - interaction.manager.QuestionManager
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, MutableMapping, Optional, Tuple

from drawlines_toolkit.core.models import (
    Container,
    Coordinate,
    Handle,
    LineDefinition,
    LineGeometry,
    ParseError,
    QuestionDefinition,
    parse_response_points,
)

from .config import InteractionConfig
from .events import (
    CANCEL_KEY,
    KEY_DIRECTIONS,
    RESERVED_KEYS,
    EventTarget,
)

logger = logging.getLogger(__name__)


@dataclass
class LiveLine:
    """One line being edited: its immutable definition and mutable geometry."""

    index: int
    definition: LineDefinition
    geometry: LineGeometry

    @property
    def container(self) -> Container:
        return self.geometry.container

    @property
    def choice(self) -> str:
        return f"c{self.index}"


@dataclass(frozen=True)
class LineView:
    """
    What the presentation layer needs to draw one line.

    Attributes:
        index: Zero-based line index
        number: 1-based display number
        container: Container the line is drawn in
        state_tag: "placed" or "inactive"
        points: Control points in drawing order
        labels: (start, middle, end) label text
    """

    index: int
    number: int
    container: Container
    state_tag: str
    points: Tuple[Coordinate, ...]
    labels: Tuple[str, str, str]

    @property
    def css_class(self) -> str:
        return f"dropzone choice{self.index} {self.state_tag}"


class GestureKind(str, Enum):
    HANDLE = "handle"
    WHOLE = "whole"


@dataclass
class Gesture:
    """An in-progress pointer drag."""

    line_index: int
    kind: GestureKind
    handle: Optional[Handle]
    last_x: float
    last_y: float


class InteractionController:
    """
    Interaction state machine for one question container.

    Args:
        container_id: Id of the question container
        question: Question definition providing the lines
        drop_size: (width, height) of the drop area (the background image)
        initial_response: Previously saved response; lines with a value
            start in the drop area at those points
        read_only: Ignore all input when True
        config: Layout and movement constants
        response_fields: Mapping the controller writes "c{i}" values into

    Example:
        >>> fields = {}
        >>> controller = InteractionController("q1", question, (400, 300), response_fields=fields)
        >>> controller.key_press(EventTarget("q1", 0, TargetPart.LINE), "ArrowRight")
        True
        >>> fields["c0"]
        '51,25 201,25'
    """

    def __init__(
        self,
        container_id: str,
        question: QuestionDefinition,
        drop_size: Tuple[int, int],
        *,
        initial_response: Optional[Mapping[str, str]] = None,
        read_only: bool = False,
        config: Optional[InteractionConfig] = None,
        response_fields: Optional[MutableMapping[str, str]] = None,
    ) -> None:
        width, height = drop_size
        if width <= 0 or height <= 0:
            raise ValueError(f"drop area must have a positive size: {drop_size}")

        self.container_id = container_id
        self.question = question
        self.drop_size = (int(width), int(height))
        self.read_only = read_only
        self.config = config or InteractionConfig()
        self.response_fields: MutableMapping[str, str] = (
            response_fields if response_fields is not None else {}
        )
        self.drop_origin: Tuple[float, float] = (0, 0)
        self.gesture: Optional[Gesture] = None

        initial_response = initial_response or {}
        self.lines: List[LiveLine] = [
            self._build_line(index, definition, initial_response.get(f"c{index}", ""))
            for index, definition in enumerate(question.lines)
        ]
        placed = sum(1 for line in self.lines if line.container is Container.DROP)
        logger.info(
            f"Controller for {container_id!r}: {len(self.lines)} lines, {placed} already placed"
            + (" (read-only)" if read_only else "")
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Construction
    # ─────────────────────────────────────────────────────────────────────────

    def _build_line(self, index: int, definition: LineDefinition, saved: str) -> LiveLine:
        radius = self.config.handle_radius
        if saved:
            try:
                start_text, end_text = parse_response_points(saved, definition.type)
                start = Coordinate.parse(start_text, default_tolerance=radius)
                end = Coordinate.parse(end_text, default_tolerance=radius)
            except ParseError as e:
                logger.warning(f"Line {definition.number}: ignoring saved response {saved!r}: {e}")
            else:
                geometry = LineGeometry.from_points(
                    definition.type, start, end, bounds=self.drop_size, container=Container.DROP
                )
                return LiveLine(index, definition, geometry)

        y = self.config.home_slot_y(index)
        geometry = LineGeometry.from_points(
            definition.type,
            Coordinate(self.config.slot_start_x, y, radius),
            Coordinate(self.config.slot_end_x, y, radius),
            bounds=self.home_size,
            container=Container.HOME,
        )
        return LiveLine(index, definition, geometry)

    # ─────────────────────────────────────────────────────────────────────────
    # Layout
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def home_size(self) -> Tuple[int, int]:
        """(width, height) of the home tray."""
        return self.drop_size[0], self.config.home_tray_height(self.question.line_count)

    def bounds_for(self, container: Container) -> Tuple[int, int]:
        return self.drop_size if container is Container.DROP else self.home_size

    @property
    def return_home_y(self) -> int:
        """A placed line whose start handle is below this y goes home."""
        return self.drop_size[1] - self.config.return_home_margin

    def set_drop_origin(self, x: float, y: float) -> None:
        """Record the page position of the drop area's top-left corner."""
        self.drop_origin = (x, y)

    @property
    def is_idle(self) -> bool:
        return self.gesture is None

    def _line_for(self, target: EventTarget) -> Optional[LiveLine]:
        if not target.hits_line:
            return None
        if not 0 <= target.line_index < len(self.lines):
            logger.debug(f"Ignoring event for unknown line {target.line_index}")
            return None
        return self.lines[target.line_index]

    # ─────────────────────────────────────────────────────────────────────────
    # Pointer Gestures
    # ─────────────────────────────────────────────────────────────────────────

    def pointer_down(self, target: EventTarget, x: float, y: float) -> bool:
        """
        Start a drag.

        A press on a home line brings it into the drop area at the press
        point and drags the whole line. On a placed line, a press on a
        handle drags that handle and a press on the body drags the line.

        Returns:
            True if a gesture started
        """
        if self.read_only:
            return False
        line = self._line_for(target)
        if line is None:
            return False

        if line.container is Container.HOME:
            self._place_at(line, x - self.drop_origin[0], y - self.drop_origin[1])
            kind, handle = GestureKind.WHOLE, None
        elif target.handle is not None:
            kind, handle = GestureKind.HANDLE, target.handle
        else:
            kind, handle = GestureKind.WHOLE, None

        self.gesture = Gesture(line.index, kind, handle, x, y)
        logger.debug(f"Line {line.definition.number}: {kind.value} drag started at ({x}, {y})")
        self._after_move(line)
        return True

    def pointer_move(self, x: float, y: float) -> bool:
        """
        Apply one drag step.

        The delta is taken against the previous pointer position, so each
        step is clamped from where the last one left the line.
        """
        gesture = self.gesture
        if gesture is None:
            return False
        dx = int(x) - int(gesture.last_x)
        dy = int(y) - int(gesture.last_y)
        gesture.last_x, gesture.last_y = x, y
        self._apply(self.lines[gesture.line_index], gesture.handle, dx, dy)
        return True

    def pointer_up(self) -> bool:
        """End the drag; the last computed position stands."""
        if self.gesture is None:
            return False
        logger.debug(f"Line {self.gesture.line_index + 1}: drag ended")
        self.gesture = None
        return True

    def cancel_gesture(self) -> None:
        self.gesture = None

    # ─────────────────────────────────────────────────────────────────────────
    # Keyboard
    # ─────────────────────────────────────────────────────────────────────────

    def key_press(self, target: EventTarget, code: str) -> bool:
        """
        Handle a key press on a line, its handles or its body.

        Arrow keys and WASD move the focused handle (or whole line) one
        step. A home line is first brought into the drop area where it sits,
        lifted above the return-home band when the drop area is shorter
        than the tray slot. Space does only that.
        Escape cancels a pointer drag in progress. Other keys are ignored.

        Returns:
            True if the key was consumed
        """
        if self.read_only:
            return False
        if code not in KEY_DIRECTIONS and code not in RESERVED_KEYS:
            return False
        line = self._line_for(target)
        if line is None:
            return False

        if code == CANCEL_KEY:
            self.cancel_gesture()
            return True

        step = self.config.keyboard_step
        dx, dy = KEY_DIRECTIONS.get(code, (0, 0))
        if line.container is Container.HOME:
            start = line.geometry.start
            self._place_at(line, start.x, start.y)
        self._apply(line, target.handle, dx * step, dy * step)
        return True

    # ─────────────────────────────────────────────────────────────────────────
    # Moves and Containers
    # ─────────────────────────────────────────────────────────────────────────

    def _apply(self, line: LiveLine, handle: Optional[Handle], dx: int, dy: int) -> None:
        max_x, max_y = self.bounds_for(line.container)
        if handle is not None:
            line.geometry.move(handle, dx, dy, max_x, max_y)
        else:
            line.geometry.move_whole(dx, dy, max_x, max_y, line.container)
        self._after_move(line)

    def _place_at(self, line: LiveLine, x: float, y: float) -> None:
        """
        Move a home line into the drop area with its start handle at (x, y).

        The point is held above the return-home band so the line does not
        bounce straight back to the tray.
        """
        x = min(max(0, x), self.drop_size[0])
        y = min(max(0, y), self.return_home_y)
        start = line.geometry.start
        max_x, max_y = self.drop_size
        line.geometry.move_whole(x - start.x, y - start.y, max_x, max_y, Container.DROP)
        logger.info(f"Line {line.definition.number}: placed at ({line.geometry.start.xy})")

    def _send_home(self, line: LiveLine) -> None:
        """Move a placed line back into the home tray, clamping it inside."""
        max_x, max_y = self.home_size
        line.geometry.move_whole(0, 0, max_x, max_y, Container.HOME)
        logger.info(f"Line {line.definition.number}: returned home")

    def _after_move(self, line: LiveLine) -> None:
        if line.container is Container.DROP and line.geometry.start.y > self.return_home_y:
            self._send_home(line)
        self._save(line)

    def _save(self, line: LiveLine) -> None:
        """Write the line's response value; "" while it sits in the home tray."""
        if line.container is Container.DROP:
            value = line.geometry.serialize_response()
        else:
            value = ""
        self.response_fields[line.choice] = value
        logger.debug(f"{self.container_id}:{line.choice} = {value!r}")

    # ─────────────────────────────────────────────────────────────────────────
    # Read Path
    # ─────────────────────────────────────────────────────────────────────────

    def line_views(self) -> List[LineView]:
        """Drawing state of every line, in line order."""
        return [
            LineView(
                index=line.index,
                number=line.definition.number,
                container=line.container,
                state_tag=line.container.state_tag,
                points=line.geometry.to_svg_points(),
                labels=(
                    line.definition.label_start,
                    line.definition.label_middle,
                    line.definition.label_end,
                ),
            )
            for line in self.lines
        ]

    def current_response(self) -> Dict[str, str]:
        """Response values for every placed line."""
        return {
            line.choice: line.geometry.serialize_response()
            for line in self.lines
            if line.container is Container.DROP
        }
