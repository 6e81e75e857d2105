"""
Draw Lines Core Package

Shared data models for grading and interaction. Definitions are frozen
dataclasses; only LineGeometry is mutable, and only the interaction
controller mutates it.
"""

from .models import (
    Coordinate,
    ParseError,
    LineGeometry,
    LineType,
    InvalidGeometry,
    LineDefinition,
    QuestionDefinition,
    GradeMethod,
)

__all__ = [
    "Coordinate",
    "ParseError",
    "LineGeometry",
    "LineType",
    "InvalidGeometry",
    "LineDefinition",
    "QuestionDefinition",
    "GradeMethod",
]
