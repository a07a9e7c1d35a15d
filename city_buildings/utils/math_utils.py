"""
Mathematical utilities for City Buildings Generator.

Provides line intersection and other small geometric operations shared
by the polygon algebra and the roof generators.
"""

from typing import Optional

from ..models.geometry import Point2D


def line_intersection_2d(
    p1: Point2D, p2: Point2D,
    p3: Point2D, p4: Point2D
) -> Optional[Point2D]:
    """
    Find intersection point of two infinite lines.

    Args:
        p1, p2: Two points on first line
        p3, p4: Two points on second line

    Returns:
        Intersection point, or None if lines are parallel
    """
    x1, y1 = p1.x, p1.y
    x2, y2 = p2.x, p2.y
    x3, y3 = p3.x, p3.y
    x4, y4 = p4.x, p4.y

    denom = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)

    if abs(denom) < 1e-10:
        return None  # Lines are parallel

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denom

    x = x1 + t * (x2 - x1)
    y = y1 + t * (y2 - y1)
    return Point2D(x, y)


def perpendicular_vector(v: Point2D) -> Point2D:
    """
    Get perpendicular vector (rotated 90 degrees CCW).

    Args:
        v: 2D vector

    Returns:
        Perpendicular vector
    """
    return Point2D(-v.y, v.x)


def is_open_interval(value: float, low: float, high: float) -> bool:
    """True if low < value < high."""
    return low < value < high
