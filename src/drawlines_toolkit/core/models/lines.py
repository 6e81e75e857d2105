"""
Module: lines

Purpose:
    Provides LineGeometry - the mutable control-point model of one line
    shared by the interaction controller (which moves it) and the grading
    engine (which parses responses through it).

    A line holds exactly the number of control points its LineType
    requires:

        SEGMENT / RAY:  [start, end]
        INFINITE:       [outer_start, start, end, outer_end]

    For infinite lines only the two inner handles are graded or dragged.
    The outer anchors are derived: they are where the line through the
    inner handles meets the edge of the container it currently sits in.

Key Functions:
    - LineGeometry.from_points(): Build a line from its two graded points
    - LineGeometry.parse(): Replace points from raw coordinate text
    - LineGeometry.move(): Move one handle, clamped to the container
    - LineGeometry.move_whole(): Move the whole line, clamped to the container
    - LineGeometry.serialize_response(): "x1,y1 x2,y2" of the graded points
    - parse_response_points(): Split a stored response into graded points

Dependencies:
    - dataclasses (std)
    - enum (std)
    - .coordinate.Coordinate

Used By:
    - interaction.controller.InteractionController
    - grading.engine.GradingEngine
    - output.overlay
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .coordinate import Coordinate, ParseError


logger = logging.getLogger(__name__)


class InvalidGeometry(ValueError):
    """Raised when a line is given the wrong number of control points."""

    def __init__(self, message: str, line_type: Optional[LineType] = None, count: int = 0):
        super().__init__(message)
        self.line_type = line_type
        self.count = count


class LineType(str, Enum):
    """
    Line variants.

    The value is the identifier stored with question definitions.
    """

    SEGMENT = "linesegment"
    RAY = "linesinglearrow"
    INFINITE = "lineinfinite"

    @property
    def point_count(self) -> int:
        """Number of control points a line of this type holds."""
        return 4 if self is LineType.INFINITE else 2

    @property
    def accepted_counts(self) -> Tuple[int, ...]:
        """Raw point counts accepted by parse()."""
        if self is LineType.INFINITE:
            return (2, 4)
        return (2,)


class Handle(str, Enum):
    """Draggable graded point of a line (inner handles for infinite lines)."""

    START = "startcircle"
    END = "endcircle"


class Container(str, Enum):
    """Container a line is drawn in."""

    HOME = "home"
    DROP = "drop"

    @property
    def state_tag(self) -> str:
        """Presentation tag: lines in the drop area are 'placed'."""
        return "placed" if self is Container.DROP else "inactive"


def _extend_to_bounds(
    start: Coordinate,
    end: Coordinate,
    max_x: float,
    max_y: float,
) -> Tuple[Coordinate, Coordinate]:
    """
    Extend the line through start and end to the edges of the container.

    Returns the two points where the infinite line leaves
    [0, max_x] x [0, max_y], ordered so the first lies beyond start and
    the second beyond end. When start and end coincide there is no
    direction, and the anchors collapse onto the handles.
    """
    dx = end.x - start.x
    dy = end.y - start.y
    if dx == 0 and dy == 0:
        return start, end

    # Parametric clip of start + t * (dx, dy) against the box.
    t_low = float("-inf")
    t_high = float("inf")
    for origin, delta, upper in ((start.x, dx, max_x), (start.y, dy, max_y)):
        if delta == 0:
            continue
        t0 = (0 - origin) / delta
        t1 = (upper - origin) / delta
        t_low = max(t_low, min(t0, t1))
        t_high = min(t_high, max(t0, t1))

    origin = Coordinate(0, 0, 0)

    def at(t: float) -> Coordinate:
        return origin.moved_within(
            round(start.x + t * dx), round(start.y + t * dy), max_x, max_y
        )

    return at(min(t_low, 0.0)), at(max(t_high, 1.0))


def parse_response_points(text: str, line_type: LineType) -> Tuple[str, str]:
    """
    Split a response value into the two graded point strings.

    Responses hold "x1,y1 x2,y2". Infinite lines may also arrive in raw
    form with four pairs, in which case the outer anchors are dropped.

    Args:
        text: Response value for one line
        line_type: Type of the line the value belongs to

    Returns:
        (start, end) coordinate strings without tolerance

    Raises:
        ParseError: If the value does not split into the expected pairs
    """
    bits = text.strip().split(" ")
    if line_type is LineType.INFINITE and len(bits) == 4:
        bits = bits[1:-1]
    if len(bits) != 2:
        raise ParseError(f"{text!r} is not a valid point pair", text)
    return bits[0], bits[1]


class LineGeometry:
    """
    Control points of one line, mutated in place by drag and keyboard input.

    Attributes:
        line_type: LineType, fixed at construction
        points: Control points, len(points) == line_type.point_count
        container: Container the line was last moved within
        bounds: (max_x, max_y) of that container, used to derive the
            outer anchors of infinite lines

    Example:
        >>> g = LineGeometry.from_points(
        ...     LineType.SEGMENT, Coordinate(50, 25), Coordinate(200, 25), bounds=(400, 300))
        >>> g.move(Handle.END, 10, 5, 400, 300)
        >>> g.serialize_response()
        '50,25 210,30'
    """

    def __init__(
        self,
        line_type: LineType,
        points: Sequence[Coordinate],
        *,
        bounds: Tuple[float, float],
        container: Container = Container.HOME,
    ) -> None:
        if len(points) != line_type.point_count:
            raise InvalidGeometry(
                f"{line_type.value} needs {line_type.point_count} control points, got {len(points)}",
                line_type,
                len(points),
            )
        self.line_type = line_type
        self.points: List[Coordinate] = list(points)
        self.bounds = bounds
        self.container = container

    @classmethod
    def from_points(
        cls,
        line_type: LineType,
        start: Coordinate,
        end: Coordinate,
        *,
        bounds: Tuple[float, float],
        container: Container = Container.HOME,
    ) -> LineGeometry:
        """Build a line from its two graded points, deriving any anchors."""
        if line_type is LineType.INFINITE:
            outer_start, outer_end = _extend_to_bounds(start, end, *bounds)
            points = [outer_start, start, end, outer_end]
        else:
            points = [start, end]
        return cls(line_type, points, bounds=bounds, container=container)

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def _start_index(self) -> int:
        return 1 if self.line_type is LineType.INFINITE else 0

    @property
    def start(self) -> Coordinate:
        """First graded point (inner start for infinite lines)."""
        return self.points[self._start_index]

    @property
    def end(self) -> Coordinate:
        """Second graded point (inner end for infinite lines)."""
        return self.points[self._start_index + 1]

    @property
    def graded_points(self) -> Tuple[Coordinate, Coordinate]:
        return (self.start, self.end)

    def _index_for(self, handle: Handle) -> int:
        return self._start_index + (0 if handle is Handle.START else 1)

    # ─────────────────────────────────────────────────────────────────────────
    # Parsing
    # ─────────────────────────────────────────────────────────────────────────

    def parse(self, raw_points: Sequence[str]) -> bool:
        """
        Replace the control points from coordinate text.

        For infinite lines two points are taken as the inner handles
        directly; with four, the first and last are outer anchors and are
        re-derived rather than trusted.

        Args:
            raw_points: "x,y" or "x,y;r" strings, in line order

        Returns:
            True if the points were replaced, False if any point failed to
            parse (the line is left untouched)

        Raises:
            InvalidGeometry: If the number of points does not suit the type
        """
        if len(raw_points) not in self.line_type.accepted_counts:
            raise InvalidGeometry(
                f"{self.line_type.value} cannot be parsed from {len(raw_points)} points",
                self.line_type,
                len(raw_points),
            )
        try:
            parsed = [Coordinate.parse(text) for text in raw_points]
        except ParseError as e:
            logger.debug(f"Ignoring unparseable line points {list(raw_points)}: {e}")
            return False

        if self.line_type is LineType.INFINITE:
            start, end = (parsed[0], parsed[1]) if len(parsed) == 2 else (parsed[1], parsed[2])
            self._set_graded(start, end)
        else:
            self.points = parsed
        return True

    # ─────────────────────────────────────────────────────────────────────────
    # Movement
    # ─────────────────────────────────────────────────────────────────────────

    def move(self, handle: Handle, dx: float, dy: float, max_x: float, max_y: float) -> None:
        """
        Move one graded point by (dx, dy), clamped into [0, max_x] x [0, max_y].

        Only the named point moves. Infinite-line anchors are re-derived so
        the drawn line still spans the container.
        """
        index = self._index_for(handle)
        point = self.points[index]
        self.points[index] = point.moved_within(dx, dy, max_x, max_y)
        self.bounds = (max_x, max_y)
        if self.line_type is LineType.INFINITE:
            self._derive_anchors()

    def move_whole(
        self,
        dx: float,
        dy: float,
        max_x: float,
        max_y: float,
        container: Container,
    ) -> None:
        """
        Move every graded point by (dx, dy), keeping the line inside the container.

        The shift is reduced so the bounding box of the graded points stays
        within [0, max_x] x [0, max_y]. The line keeps its shape; when it is
        larger than the container it is pinned to the top-left edge.
        """
        start, end = self.graded_points
        xs = (start.x + dx, end.x + dx)
        ys = (start.y + dy, end.y + dy)
        shift_x = dx + self._fit_shift(min(xs), max(xs), max_x)
        shift_y = dy + self._fit_shift(min(ys), max(ys), max_y)

        self.bounds = (max_x, max_y)
        self.container = container
        self._set_graded(
            Coordinate(start.x + shift_x, start.y + shift_y, start.tolerance),
            Coordinate(end.x + shift_x, end.y + shift_y, end.tolerance),
        )

    @staticmethod
    def _fit_shift(low: float, high: float, upper: float) -> float:
        """Correction that brings [low, high] inside [0, upper]."""
        if low < 0 or high - low > upper:
            return -low
        if high > upper:
            return upper - high
        return 0

    def _set_graded(self, start: Coordinate, end: Coordinate) -> None:
        if self.line_type is LineType.INFINITE:
            self.points = [start, start, end, end]
            self._derive_anchors()
        else:
            self.points = [start, end]

    def _derive_anchors(self) -> None:
        outer_start, outer_end = _extend_to_bounds(self.start, self.end, *self.bounds)
        self.points[0] = outer_start
        self.points[3] = outer_end

    # ─────────────────────────────────────────────────────────────────────────
    # Output
    # ─────────────────────────────────────────────────────────────────────────

    def to_svg_points(self) -> Tuple[Coordinate, ...]:
        """All control points, in drawing order."""
        return tuple(self.points)

    def polyline(self) -> str:
        """Raw "x,y x,y ..." of every control point, as drawn."""
        return " ".join(point.xy for point in self.points)

    def serialize_response(self) -> str:
        """Graded points as "x1,y1 x2,y2" (tolerance omitted)."""
        return f"{self.start.xy} {self.end.xy}"

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"LineGeometry({self.line_type.value}, {self.polyline()!r}, {self.container.value})"
