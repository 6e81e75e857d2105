"""
Module: coordinate

Purpose:
    Provides the Coordinate dataclass - a 2-D point in background-image
    pixel space with an associated tolerance radius. Parses and serializes
    the "x,y;tolerance" text form used by zone definitions and the
    "x,y" form used by stored responses.

Key Functions:
    - Coordinate.parse(text): Parse "x,y" or "x,y;tolerance"
    - Coordinate.serialize(): Inverse of parse
    - Coordinate.distance_to(other): Euclidean distance
    - Coordinate.moved_within(): Moved copy, clamped into a container

Dependencies:
    - dataclasses (std)
    - math (std)

Used By:
    - core.models.lines.LineGeometry
    - core.models.question.LineDefinition
    - grading.zone_matcher
"""

from __future__ import annotations

import math
from dataclasses import dataclass


# Radius used when a zone definition omits its tolerance, and for the
# handle circles of lines sitting in the home tray.
DEFAULT_TOLERANCE = 10


class ParseError(ValueError):
    """Raised when coordinate text cannot be parsed."""

    def __init__(self, message: str, text: str = ""):
        super().__init__(message)
        self.text = text


def format_number(value: float) -> str:
    """
    Format a coordinate component for text output.

    Integral values are written without a decimal point so that
    "10,10;12" survives a parse/serialize round trip unchanged.
    """
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _parse_number(field: str, text: str) -> float:
    """Parse one numeric field, rejecting blanks and non-finite values."""
    field = field.strip()
    if not field:
        raise ParseError(f"Empty numeric field in {text!r}", text)
    try:
        value = float(field)
    except ValueError:
        raise ParseError(f"Non-numeric field {field!r} in {text!r}", text) from None
    if not math.isfinite(value):
        raise ParseError(f"Non-finite field {field!r} in {text!r}", text)
    return value


@dataclass(frozen=True, slots=True)
class Coordinate:
    """
    A point in image-pixel space with a tolerance radius.

    Attributes:
        x: Horizontal position (pixels from the left edge)
        y: Vertical position (pixels from the top edge)
        tolerance: Radius around the point, used by zones and handles

    Invariants:
        - x, y, tolerance are finite
        - x >= 0, y >= 0
        - tolerance >= 0

    Example:
        >>> c = Coordinate.parse("10,20;12")
        >>> (c.x, c.y, c.tolerance)
        (10.0, 20.0, 12.0)
        >>> c.serialize()
        '10,20;12'
        >>> c.xy
        '10,20'
    """

    x: float
    y: float
    tolerance: float = DEFAULT_TOLERANCE

    def __post_init__(self) -> None:
        """Validate the point on construction."""
        for name in ("x", "y", "tolerance"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite: {value}")
        if self.x < 0:
            raise ValueError(f"x must be >= 0: {self.x}")
        if self.y < 0:
            raise ValueError(f"y must be >= 0: {self.y}")
        if self.tolerance < 0:
            raise ValueError(f"tolerance must be >= 0: {self.tolerance}")

    # ─────────────────────────────────────────────────────────────────────────
    # Parsing and Serialization
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def parse(cls, text: str, *, default_tolerance: float = DEFAULT_TOLERANCE) -> Coordinate:
        """
        Parse "x,y" or "x,y;tolerance".

        Args:
            text: Coordinate text
            default_tolerance: Tolerance used when the text has none

        Returns:
            Parsed Coordinate

        Raises:
            ParseError: If the text does not hold exactly two numeric
                position fields, a field is non-numeric, or a value is
                out of range
        """
        if not isinstance(text, str):
            raise ParseError(f"Coordinate must be text: {text!r}", str(text))

        position, sep, radius = text.partition(";")
        if sep and ";" in radius:
            raise ParseError(f"Too many ';' separators in {text!r}", text)

        fields = position.split(",")
        if len(fields) != 2:
            raise ParseError(f"Expected 2 numeric fields in {text!r}, got {len(fields)}", text)

        x = _parse_number(fields[0], text)
        y = _parse_number(fields[1], text)
        tolerance = _parse_number(radius, text) if sep else default_tolerance

        try:
            return cls(x, y, tolerance)
        except ValueError as e:
            raise ParseError(f"Invalid coordinate {text!r}: {e}", text) from None

    def serialize(self, include_tolerance: bool = True) -> str:
        """
        Serialize to "x,y;tolerance" (or "x,y").

        Zone strings always carry the tolerance, response strings never do.
        """
        if include_tolerance:
            return f"{self.xy};{format_number(self.tolerance)}"
        return self.xy

    @property
    def xy(self) -> str:
        """Position only, as "x,y"."""
        return f"{format_number(self.x)},{format_number(self.y)}"

    # ─────────────────────────────────────────────────────────────────────────
    # Geometry
    # ─────────────────────────────────────────────────────────────────────────

    def distance_to(self, other: Coordinate) -> float:
        """Euclidean distance to another point (tolerances ignored)."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def moved_within(self, dx: float, dy: float, max_x: float, max_y: float) -> Coordinate:
        """
        Return a copy moved by (dx, dy) and clamped into [0, max_x] x [0, max_y].

        The tolerance is kept. The offset is applied before clamping, so a
        move past an edge stops on that edge.
        """
        x = min(max(0, self.x + dx), max_x)
        y = min(max(0, self.y + dy), max_y)
        return Coordinate(x, y, self.tolerance)

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"Coordinate({self.serialize()})"
