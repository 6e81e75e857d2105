"""
Module: grading.zone_matcher

Purpose:
    The single geometric correctness predicate: is a response point inside
    a target zone. A zone is a Coordinate whose tolerance is the radius of
    a circle around it; the boundary counts as inside.

Key Functions:
    - in_zone(): Point-in-zone test on parsed coordinates
    - is_point_text_in_zone(): Same test on response text, failing closed

Dependencies:
    - core.models.coordinate

Used By:
    - grading.engine.GradingEngine
"""

from __future__ import annotations

import logging

from drawlines_toolkit.core.models.coordinate import Coordinate, ParseError

logger = logging.getLogger(__name__)


def in_zone(point: Coordinate, zone: Coordinate) -> bool:
    """
    Check whether a point lies within a zone.

    Uses the true Euclidean distance between the point and the zone
    centre; only the zone's tolerance matters, the point's own is ignored.

    Args:
        point: Response point
        zone: Zone centre with its tolerance radius

    Returns:
        True if distance <= zone.tolerance

    Example:
        >>> in_zone(Coordinate(19, 10), Coordinate.parse("10,10;12"))
        True
        >>> in_zone(Coordinate(10, 23), Coordinate.parse("10,10;12"))
        False
    """
    return point.distance_to(zone) <= zone.tolerance


def is_point_text_in_zone(text: str, zone: Coordinate) -> bool:
    """
    Check whether response text such as "10,10" lies within a zone.

    Malformed text is treated as a miss so one bad field cannot abort
    grading of the other lines.
    """
    try:
        point = Coordinate.parse(text)
    except ParseError as e:
        logger.warning(f"Treating unparseable response point as incorrect: {e}")
        return False
    return in_zone(point, zone)
