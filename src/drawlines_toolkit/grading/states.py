"""
Module: grading.states

Purpose:
    Default graded-state classifier. Question engines normally supply their
    own; this one maps a raw fraction onto right / partial / wrong with a
    small tolerance at either end.
"""

from __future__ import annotations

from enum import Enum


# Fractions within this distance of 0 or 1 count as exactly 0 or 1.
FRACTION_EPSILON = 0.000001


class GradedState(str, Enum):
    """Outcome of grading one response."""

    GRADED_RIGHT = "gradedright"
    GRADED_PARTIAL = "gradedpartial"
    GRADED_WRONG = "gradedwrong"


def graded_state_for_fraction(fraction: float) -> GradedState:
    """Classify a raw fraction."""
    if fraction < FRACTION_EPSILON:
        return GradedState.GRADED_WRONG
    if fraction > 1 - FRACTION_EPSILON:
        return GradedState.GRADED_RIGHT
    return GradedState.GRADED_PARTIAL
