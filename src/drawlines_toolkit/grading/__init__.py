"""
Module: grading

Purpose:
    Zone matching and response grading for draw-lines questions.

Key Functions:
    - in_zone(): Point-in-zone predicate
    - GradingEngine: Completeness, scoring, comparison and summaries
"""

from .zone_matcher import in_zone, is_point_text_in_zone
from .states import GradedState, graded_state_for_fraction
from .engine import (
    GradingEngine,
    GradeResult,
    ClassifiedResponse,
    VALIDATION_MESSAGE_KEY,
)

__all__ = [
    "in_zone",
    "is_point_text_in_zone",
    "GradedState",
    "graded_state_for_fraction",
    "GradingEngine",
    "GradeResult",
    "ClassifiedResponse",
    "VALIDATION_MESSAGE_KEY",
]
