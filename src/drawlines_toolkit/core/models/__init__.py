"""
Core Models Package

Coordinate primitive, line geometry and the immutable question definition.

| Model | Mutability | Role |
|-------|------------|------|
| `Coordinate` | frozen | Point + tolerance radius, "x,y;r" text form |
| `LineGeometry` | mutable | Control points moved by drag/keyboard input |
| `LineDefinition` | frozen | Zones, labels and type of one line |
| `QuestionDefinition` | frozen | All lines plus grading options |
"""

from .coordinate import Coordinate, ParseError, DEFAULT_TOLERANCE
from .lines import (
    Container,
    Handle,
    InvalidGeometry,
    LineGeometry,
    LineType,
    parse_response_points,
)
from .question import GradeMethod, LineDefinition, QuestionDefinition

__all__ = [
    "Coordinate",
    "ParseError",
    "DEFAULT_TOLERANCE",
    "Container",
    "Handle",
    "InvalidGeometry",
    "LineGeometry",
    "LineType",
    "parse_response_points",
    "GradeMethod",
    "LineDefinition",
    "QuestionDefinition",
]
