"""
Component 42: Spatial Reasoning - Geometric Shapes

Circle and Polygon shape variants with the uniform capability set used by
the relation engines: point containment, boundary distance, bounding box,
area, centroid and boundary sampling.

The variant set is closed: Shape = Union[Circle, Polygon]. Pairwise
operations dispatch on the variant pair explicitly (see
component_42_topological_engine).

Author: SRS Development Team
Date: 2026-10-16
"""

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from common.constants import (
    BOUNDARY_SAMPLES_PER_EDGE,
    GEOMETRY_EPSILON,
)
from component_42_geometry_utils import (
    Segment,
    boundary_distance,
    is_zero,
    point_in_polygon,
    polygon_centroid,
    polygon_edges,
    sample_segment,
    signed_area,
)
from component_42_spatial_types import BoundingBox, Point, ShapeKind, Vector
from srs_exceptions import InvalidGeometryError, UnsupportedQueryCombinationError

Coordinate = Union[Point, Tuple[float, float], Sequence[float]]


def _to_point(value: Coordinate) -> Point:
    if isinstance(value, Point):
        return value
    x, y = value
    return Point(float(x), float(y))


@dataclass(frozen=True)
class Circle:
    """
    Circle with center and radius.

    reference_point defaults to the center.
    """

    shape_id: int
    name: str
    center: Point
    radius: float
    facing: Vector = Vector(0.0, 0.0)
    reference_point: Optional[Point] = None

    def __post_init__(self):
        object.__setattr__(self, "center", _to_point(self.center))
        if self.reference_point is None:
            object.__setattr__(self, "reference_point", self.center)
        else:
            object.__setattr__(self, "reference_point", _to_point(self.reference_point))
        self.validate()

    @classmethod
    def create(
        cls,
        shape_id: int,
        name: str,
        x: float,
        y: float,
        radius: float,
        i: float = 0.0,
        j: float = 0.0,
    ) -> "Circle":
        """Build a circle from plain coordinates and a facing (i, j)."""
        return cls(
            shape_id=shape_id,
            name=name,
            center=Point(float(x), float(y)),
            radius=float(radius),
            facing=Vector(float(i), float(j)),
        )

    @property
    def kind(self) -> ShapeKind:
        return ShapeKind.CIRCLE

    def validate(self) -> None:
        """
        Check the circle invariants.

        Raises:
            InvalidGeometryError: If the radius is not strictly positive or
                any coordinate is not finite
        """
        if not self.center.is_finite() or not self.reference_point.is_finite():
            raise InvalidGeometryError(
                "Circle coordinates must be finite",
                shape_id=self.shape_id,
                shape_kind=self.kind.value,
            )
        if not math.isfinite(self.radius) or self.radius <= 0.0:
            raise InvalidGeometryError(
                f"Circle radius must be positive, got {self.radius}",
                shape_id=self.shape_id,
                shape_kind=self.kind.value,
            )
        if not self.facing.is_finite():
            raise InvalidGeometryError(
                "Facing vector must be finite",
                shape_id=self.shape_id,
                shape_kind=self.kind.value,
            )

    def area(self) -> float:
        """Area: pi * r^2"""
        return math.pi * self.radius**2

    def perimeter(self) -> float:
        """Circumference: 2 * pi * r"""
        return 2 * math.pi * self.radius

    def centroid(self) -> Point:
        return self.center

    def bounding_box(self) -> BoundingBox:
        return BoundingBox(
            self.center.x - self.radius,
            self.center.y - self.radius,
            self.center.x + self.radius,
            self.center.y + self.radius,
        )

    def boundary_distance(self, p: Point) -> float:
        """Distance from p to the circle's boundary."""
        return abs(self.center.distance_to(p) - self.radius)

    def contains_point(self, p: Point, include_boundary: bool = True) -> bool:
        distance = self.center.distance_to(p)
        if include_boundary:
            return distance <= self.radius + GEOMETRY_EPSILON
        return distance < self.radius - GEOMETRY_EPSILON

    def translated(self, dx: float, dy: float) -> "Circle":
        return Circle(
            shape_id=self.shape_id,
            name=self.name,
            center=self.center.translated(dx, dy),
            radius=self.radius,
            facing=self.facing,
            reference_point=self.reference_point.translated(dx, dy),
        )

    def __str__(self) -> str:
        return f"Circle({self.shape_id}:{self.name}, center={self.center}, r={self.radius:g})"


@dataclass(frozen=True)
class Polygon:
    """
    Simple polygon given by its vertices in traversal order.

    Vertices are stored as a tuple of Points. The polygon does not have to
    be convex; self-intersecting input is not repaired. reference_point
    defaults to the area centroid.
    """

    shape_id: int
    name: str
    vertices: Tuple[Point, ...]
    facing: Vector = Vector(0.0, 0.0)
    reference_point: Optional[Point] = None

    def __post_init__(self):
        object.__setattr__(self, "vertices", tuple(_to_point(v) for v in self.vertices))
        self.validate()
        if self.reference_point is None:
            object.__setattr__(self, "reference_point", polygon_centroid(self.vertices))
        else:
            object.__setattr__(self, "reference_point", _to_point(self.reference_point))
            if not self.reference_point.is_finite():
                raise InvalidGeometryError(
                    "Polygon reference point must be finite",
                    shape_id=self.shape_id,
                    shape_kind=self.kind.value,
                )

    @classmethod
    def create(
        cls,
        shape_id: int,
        name: str,
        points: Iterable[Coordinate],
        i: float = 0.0,
        j: float = 0.0,
    ) -> "Polygon":
        """Build a polygon from coordinate pairs and a facing (i, j)."""
        return cls(
            shape_id=shape_id,
            name=name,
            vertices=tuple(_to_point(p) for p in points),
            facing=Vector(float(i), float(j)),
        )

    @property
    def kind(self) -> ShapeKind:
        return ShapeKind.POLYGON

    def validate(self) -> None:
        """
        Check the polygon invariants.

        Raises:
            InvalidGeometryError: If the polygon has fewer than 3 vertices,
                non-finite coordinates, or (near) zero area
        """
        if len(self.vertices) < 3:
            raise InvalidGeometryError(
                f"Polygon needs at least 3 vertices, got {len(self.vertices)}",
                shape_id=self.shape_id,
                shape_kind=self.kind.value,
            )
        if not all(v.is_finite() for v in self.vertices):
            raise InvalidGeometryError(
                "Polygon coordinates must be finite",
                shape_id=self.shape_id,
                shape_kind=self.kind.value,
            )
        if not self.facing.is_finite():
            raise InvalidGeometryError(
                "Facing vector must be finite",
                shape_id=self.shape_id,
                shape_kind=self.kind.value,
            )
        if is_zero(signed_area(self.vertices)):
            raise InvalidGeometryError(
                "Polygon is degenerate (zero area)",
                shape_id=self.shape_id,
                shape_kind=self.kind.value,
            )

    def signed_area(self) -> float:
        """Shoelace area; the sign gives the winding (positive = counter-clockwise)."""
        return signed_area(self.vertices)

    def area(self) -> float:
        return abs(self.signed_area())

    @property
    def is_counter_clockwise(self) -> bool:
        return self.signed_area() > 0.0

    def edges(self) -> List[Segment]:
        return polygon_edges(self.vertices)

    def perimeter(self) -> float:
        return sum(a.distance_to(b) for a, b in self.edges())

    def centroid(self) -> Point:
        return polygon_centroid(self.vertices)

    def bounding_box(self) -> BoundingBox:
        xs = [v.x for v in self.vertices]
        ys = [v.y for v in self.vertices]
        return BoundingBox(min(xs), min(ys), max(xs), max(ys))

    def boundary_distance(self, p: Point) -> float:
        return boundary_distance(p, self.vertices)

    def contains_point(self, p: Point, include_boundary: bool = True) -> bool:
        return point_in_polygon(p, self.vertices, include_boundary=include_boundary)

    def sample_boundary(self, samples_per_edge: int = BOUNDARY_SAMPLES_PER_EDGE) -> List[Point]:
        """
        Boundary points: every vertex followed by evenly spaced points on
        the edge leaving it.
        """
        points: List[Point] = []
        for a, b in self.edges():
            points.append(a)
            points.extend(sample_segment(a, b, samples_per_edge))
        return points

    def translated(self, dx: float, dy: float) -> "Polygon":
        return Polygon(
            shape_id=self.shape_id,
            name=self.name,
            vertices=tuple(v.translated(dx, dy) for v in self.vertices),
            facing=self.facing,
            reference_point=self.reference_point.translated(dx, dy),
        )

    def __str__(self) -> str:
        return f"Polygon({self.shape_id}:{self.name}, {len(self.vertices)} vertices)"


Shape = Union[Circle, Polygon]


def shape_kind(shape: Shape) -> ShapeKind:
    """
    Variant tag of a shape.

    Raises:
        UnsupportedQueryCombinationError: If the object is not a known variant
    """
    if isinstance(shape, Circle):
        return ShapeKind.CIRCLE
    if isinstance(shape, Polygon):
        return ShapeKind.POLYGON
    raise UnsupportedQueryCombinationError(
        f"Unsupported shape variant: {type(shape).__name__}"
    )


def validate_shape(shape: Shape) -> None:
    """Re-check a shape's variant invariants (raises InvalidGeometryError)."""
    shape_kind(shape)
    shape.validate()
