"""
Module: question

Purpose:
    Immutable question definition: the ordered line records (type, labels,
    target zones) and the grading options. Read by the grading engine and
    used by the interaction controller to build its live lines.

Key Classes:
    - GradeMethod: partial / allnone
    - LineDefinition: One line's zones, labels and type
    - QuestionDefinition: All lines plus grading and feedback options

Dependencies:
    - dataclasses (std)
    - .coordinate.Coordinate
    - .lines.LineType

Used By:
    - grading.engine.GradingEngine
    - interaction.controller.InteractionController
    - loading.loader
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Tuple

from .coordinate import Coordinate
from .lines import LineType


class GradeMethod(str, Enum):
    """How a response is scored."""

    PARTIAL = "partial"   # Each of the 2N endpoints scores independently
    ALL_OR_NONE = "allnone"  # A line scores only if both endpoints are right


@dataclass(frozen=True, slots=True)
class LineDefinition:
    """
    One line of a question definition.

    Attributes:
        number: 1-based display order
        type: LineType of the line
        zone_start: Target zone for the start handle
        zone_end: Target zone for the end handle
        label_start: Text shown at the start of the line
        label_middle: Text shown at the middle of the line
        label_end: Text shown at the end of the line
    """

    number: int
    type: LineType
    zone_start: Coordinate
    zone_end: Coordinate
    label_start: str = ""
    label_middle: str = ""
    label_end: str = ""

    def __post_init__(self) -> None:
        """Validate the line on construction."""
        if self.number < 1:
            raise ValueError(f"line number must be >= 1: {self.number}")

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the stored field names."""
        return {
            "number": self.number,
            "type": self.type.value,
            "labelstart": self.label_start,
            "labelmiddle": self.label_middle,
            "labelend": self.label_end,
            "zonestart": self.zone_start.serialize(),
            "zoneend": self.zone_end.serialize(),
        }


@dataclass(frozen=True)
class QuestionDefinition:
    """
    A complete draw-lines question (immutable for an attempt).

    Attributes:
        id: Question identifier
        lines: Line records, ordered by number
        grade_method: Partial or all-or-none scoring
        show_num_correct: Whether feedback reports the number of correct parts
        show_misplaced: Whether feedback highlights misplaced lines
        background: Optional path of the background image

    Invariants:
        - at least one line
        - line numbers run 1..N in order
    """

    id: str
    lines: Tuple[LineDefinition, ...]
    grade_method: GradeMethod = GradeMethod.PARTIAL
    show_num_correct: bool = False
    show_misplaced: bool = False
    background: Optional[Path] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate the question on construction."""
        if not self.lines:
            raise ValueError(f"question {self.id!r} has no lines")
        numbers = [line.number for line in self.lines]
        if numbers != list(range(1, len(numbers) + 1)):
            raise ValueError(f"line numbers must run 1..{len(numbers)} in order: {numbers}")

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the stored field names."""
        data: dict[str, Any] = {
            "id": self.id,
            "grademethod": self.grade_method.value,
            "shownumcorrect": self.show_num_correct,
            "showmisplaced": self.show_misplaced,
            "lines": [line.to_dict() for line in self.lines],
        }
        if self.background is not None:
            data["bgimage"] = str(self.background)
        return data
