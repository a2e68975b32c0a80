"""
Proximity evaluation, the only geometry primitive of the engine.

Every rule that asks "is this player close enough?" goes through within();
nothing rounds, and the tolerance comparison is strict, so a point exactly on
the boundary is outside.
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING

from ..core.types import Point

if TYPE_CHECKING:
    from .zones import Zone


def distance(a: Point, b: Point) -> float:
    """
    Calculate Euclidean distance between two points.

    Args:
        a: First point (x, y)
        b: Second point (x, y)

    Returns:
        Euclidean distance as a float
    """
    return math.hypot(a[0] - b[0], a[1] - b[1]) # equivalent to sqrt((x2 - x1)^2 + (y2 - y1)^2)


def within_radius(a: Point, b: Point, radius: float) -> bool:
    """True when a and b are strictly closer than radius."""
    return distance(a, b) < radius


def within(point: Point, zone: Zone) -> bool:
    """True when point lies strictly inside the zone's tolerance circle."""
    return within_radius(point, zone.position, zone.tolerance)
