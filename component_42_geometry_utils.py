"""
Component 42: Geometry Utilities

Tolerance-aware geometric predicates shared by the shape model and both
relation engines. Every comparison against zero or between two lengths goes
through the helpers below so that one epsilon governs all decisions.

Author: SRS Development Team
Date: 2026-10-16
"""

import math
from typing import List, Sequence, Tuple

from common.constants import AREA_RELATIVE_TOLERANCE, GEOMETRY_EPSILON
from component_42_spatial_types import Point

Segment = Tuple[Point, Point]


def is_zero(value: float, tolerance: float = GEOMETRY_EPSILON) -> bool:
    return abs(value) <= tolerance


def nearly_equal(a: float, b: float, tolerance: float = GEOMETRY_EPSILON) -> bool:
    return abs(a - b) <= tolerance


def areas_equal(a: float, b: float) -> bool:
    """Compare two areas with a relative tolerance (areas scale quadratically)."""
    return math.isclose(a, b, rel_tol=AREA_RELATIVE_TOLERANCE, abs_tol=GEOMETRY_EPSILON)


def orient(a: Point, b: Point, c: Point) -> float:
    """
    Twice the signed area of triangle abc.

    > 0: c lies left of a->b (counter-clockwise turn)
    < 0: c lies right of a->b
    = 0: collinear
    """
    return (b.x - a.x) * (c.y - a.y) - (b.y - a.y) * (c.x - a.x)


def _orientation_sign(a: Point, b: Point, c: Point) -> int:
    # Scale the tolerance by the segment length so the test compares a distance
    length = a.distance_to(b)
    value = orient(a, b, c)
    if abs(value) <= GEOMETRY_EPSILON * max(length, 1.0):
        return 0
    return 1 if value > 0 else -1


def signed_area(points: Sequence[Point]) -> float:
    """Shoelace area; positive for counter-clockwise vertex order."""
    if len(points) < 3:
        return 0.0
    total = 0.0
    n = len(points)
    for idx in range(n):
        p1 = points[idx]
        p2 = points[(idx + 1) % n]
        total += p1.x * p2.y - p2.x * p1.y
    return 0.5 * total


def polygon_centroid(points: Sequence[Point]) -> Point:
    """
    Area centroid of a simple polygon.

    Falls back to the vertex average when the area vanishes.
    """
    area = signed_area(points)
    n = len(points)
    if is_zero(area):
        return Point(sum(p.x for p in points) / n, sum(p.y for p in points) / n)

    cx = 0.0
    cy = 0.0
    for idx in range(n):
        p1 = points[idx]
        p2 = points[(idx + 1) % n]
        cross = p1.x * p2.y - p2.x * p1.y
        cx += (p1.x + p2.x) * cross
        cy += (p1.y + p2.y) * cross
    factor = 1.0 / (6.0 * area)
    return Point(cx * factor, cy * factor)


def polygon_edges(points: Sequence[Point]) -> List[Segment]:
    """Closed edge list: (v0, v1), (v1, v2), ..., (vn-1, v0)."""
    n = len(points)
    return [(points[idx], points[(idx + 1) % n]) for idx in range(n)]


def point_segment_distance(p: Point, a: Point, b: Point) -> float:
    """Shortest distance from p to the closed segment a-b."""
    dx = b.x - a.x
    dy = b.y - a.y
    length_sq = dx * dx + dy * dy
    if length_sq <= GEOMETRY_EPSILON * GEOMETRY_EPSILON:
        return p.distance_to(a)
    t = ((p.x - a.x) * dx + (p.y - a.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return p.distance_to(Point(a.x + t * dx, a.y + t * dy))


def point_on_segment(p: Point, a: Point, b: Point) -> bool:
    return point_segment_distance(p, a, b) <= GEOMETRY_EPSILON


def segments_cross(a: Point, b: Point, c: Point, d: Point) -> bool:
    """
    Proper crossing test for segments a-b and c-d.

    True only when the segments intersect at a single point interior to
    both of them. Touching at endpoints or collinear overlap is not a
    proper crossing.
    """
    o1 = _orientation_sign(a, b, c)
    o2 = _orientation_sign(a, b, d)
    o3 = _orientation_sign(c, d, a)
    o4 = _orientation_sign(c, d, b)
    return o1 * o2 < 0 and o3 * o4 < 0


def segments_touch(a: Point, b: Point, c: Point, d: Point) -> bool:
    """True if the closed segments share at least one point (within epsilon)."""
    if segments_cross(a, b, c, d):
        return True
    return (
        point_on_segment(c, a, b)
        or point_on_segment(d, a, b)
        or point_on_segment(a, c, d)
        or point_on_segment(b, c, d)
    )


def boundary_distance(p: Point, points: Sequence[Point]) -> float:
    """Minimum distance from p to the boundary of a polygon."""
    return min(point_segment_distance(p, a, b) for a, b in polygon_edges(points))


def point_in_polygon(p: Point, points: Sequence[Point], include_boundary: bool = True) -> bool:
    """
    Point-in-polygon test for simple (possibly non-convex) polygons.

    Points within epsilon of the boundary count as inside only if
    include_boundary is True. The interior test is an even-odd ray cast.
    """
    if boundary_distance(p, points) <= GEOMETRY_EPSILON:
        return include_boundary

    inside = False
    n = len(points)
    for idx in range(n):
        p1 = points[idx]
        p2 = points[(idx + 1) % n]
        if (p1.y > p.y) != (p2.y > p.y):
            x_cross = (p2.x - p1.x) * (p.y - p1.y) / (p2.y - p1.y) + p1.x
            if p.x < x_cross:
                inside = not inside
    return inside


def sample_segment(a: Point, b: Point, samples: int) -> List[Point]:
    """Evenly spaced points strictly between a and b (endpoints excluded)."""
    return [
        Point(a.x + (b.x - a.x) * k / (samples + 1), a.y + (b.y - a.y) * k / (samples + 1))
        for k in range(1, samples + 1)
    ]
