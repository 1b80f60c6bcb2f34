"""
Tests for Component 42: Geometric Shapes

Tests for:
- Circle and Polygon construction and validation
- Default reference points
- Area, bounding box, containment and boundary sampling

Author: SRS Development Team
Date: 2026-10-16
"""

import dataclasses
import math

import pytest

from component_42_spatial_shapes import Circle, Polygon, shape_kind, validate_shape
from component_42_spatial_types import BoundingBox, Point, ShapeKind, Vector
from srs_exceptions import InvalidGeometryError, UnsupportedQueryCombinationError


@pytest.fixture
def square():
    return Polygon.create(1, "square", [(0, 0), (2, 0), (2, 2), (0, 2)], 0, 1)


@pytest.fixture
def circle():
    return Circle.create(2, "circle", 1, 1, 2, 1, 0)


class TestCircle:
    """Test Circle construction and geometry."""

    def test_create_sets_fields(self, circle):
        """Test that create() fills center, radius and facing."""
        assert circle.shape_id == 2
        assert circle.name == "circle"
        assert circle.center == Point(1.0, 1.0)
        assert circle.radius == 2.0
        assert circle.facing == Vector(1.0, 0.0)
        assert circle.kind == ShapeKind.CIRCLE

    def test_reference_point_defaults_to_center(self, circle):
        """Test that the reference point is the center by default."""
        assert circle.reference_point == circle.center

    def test_explicit_reference_point_is_kept(self):
        """Test that an explicit reference point overrides the default."""
        c = Circle(3, "c", Point(0, 0), 1.0, Vector(0, 1), reference_point=(0.5, 0.5))
        assert c.reference_point == Point(0.5, 0.5)

    def test_area_and_perimeter(self, circle):
        """Test the area and circumference formulas."""
        assert circle.area() == pytest.approx(math.pi * 4)
        assert circle.perimeter() == pytest.approx(math.pi * 4)

    def test_bounding_box(self, circle):
        """Test the bounding box of a circle."""
        assert circle.bounding_box() == BoundingBox(-1.0, -1.0, 3.0, 3.0)

    def test_contains_point(self, circle):
        """Test interior, boundary and exterior points."""
        assert circle.contains_point(Point(1, 1))
        assert circle.contains_point(Point(3, 1))
        assert not circle.contains_point(Point(3, 1), include_boundary=False)
        assert not circle.contains_point(Point(4, 1))

    @pytest.mark.parametrize("radius", [0.0, -1.0, float("nan"), float("inf")])
    def test_invalid_radius_raises(self, radius):
        """Test that non-positive or non-finite radii are rejected."""
        with pytest.raises(InvalidGeometryError) as exc_info:
            Circle.create(5, "bad", 0, 0, radius)
        assert exc_info.value.context["shape_id"] == 5
        assert exc_info.value.context["shape_kind"] == "circle"

    def test_non_finite_center_raises(self):
        """Test that a non-finite center is rejected."""
        with pytest.raises(InvalidGeometryError):
            Circle.create(5, "bad", float("nan"), 0, 1)

    def test_facing_may_be_zero(self):
        """Test that a zero facing vector is a valid shape."""
        c = Circle.create(6, "still", 0, 0, 1)
        assert c.facing.is_zero()

    def test_shapes_are_immutable(self, circle):
        """Test that shapes cannot be mutated after construction."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            circle.radius = 5.0

    def test_translated(self, circle):
        """Test that translation moves center and reference point."""
        moved = circle.translated(10, -5)
        assert moved.center == Point(11.0, -4.0)
        assert moved.reference_point == Point(11.0, -4.0)
        assert moved.radius == circle.radius
        assert moved.facing == circle.facing


class TestPolygon:
    """Test Polygon construction and geometry."""

    def test_create_converts_points(self, square):
        """Test that tuples become Points."""
        assert square.vertices[0] == Point(0.0, 0.0)
        assert len(square.vertices) == 4
        assert square.kind == ShapeKind.POLYGON

    def test_reference_point_defaults_to_centroid(self, square):
        """Test that the reference point is the area centroid by default."""
        assert square.reference_point.x == pytest.approx(1.0)
        assert square.reference_point.y == pytest.approx(1.0)

    def test_area_is_orientation_independent(self, square):
        """Test that reversed vertex order yields the same area."""
        reversed_square = Polygon.create(9, "rev", reversed(square.vertices))
        assert square.is_counter_clockwise
        assert not reversed_square.is_counter_clockwise
        assert reversed_square.area() == pytest.approx(square.area())

    def test_perimeter(self, square):
        """Test the perimeter of a square."""
        assert square.perimeter() == pytest.approx(8.0)

    def test_bounding_box(self, square):
        """Test the bounding box of a polygon."""
        assert square.bounding_box() == BoundingBox(0.0, 0.0, 2.0, 2.0)

    def test_contains_point(self, square):
        """Test interior, boundary and exterior points."""
        assert square.contains_point(Point(1, 1))
        assert square.contains_point(Point(0, 1))
        assert not square.contains_point(Point(0, 1), include_boundary=False)
        assert not square.contains_point(Point(-1, 1))

    def test_boundary_distance(self, square):
        """Test the distance to the nearest edge."""
        assert square.boundary_distance(Point(1, 0.25)) == pytest.approx(0.25)

    def test_sample_boundary_includes_vertices(self, square):
        """Test that samples hold each vertex plus the edge samples."""
        samples = square.sample_boundary(2)
        assert len(samples) == 4 * 3
        for vertex in square.vertices:
            assert vertex in samples
        assert all(square.boundary_distance(p) == pytest.approx(0.0) for p in samples)

    def test_too_few_vertices_raises(self):
        """Test that polygons need at least three vertices."""
        with pytest.raises(InvalidGeometryError) as exc_info:
            Polygon.create(7, "line", [(0, 0), (1, 1)])
        assert exc_info.value.context["shape_kind"] == "polygon"

    def test_collinear_vertices_raise(self):
        """Test that zero-area polygons are rejected."""
        with pytest.raises(InvalidGeometryError):
            Polygon.create(7, "flat", [(0, 0), (1, 0), (2, 0)])

    def test_non_finite_vertex_raises(self):
        """Test that non-finite coordinates are rejected."""
        with pytest.raises(InvalidGeometryError):
            Polygon.create(7, "nan", [(0, 0), (1, 0), (float("nan"), 1)])

    def test_non_finite_facing_raises(self):
        """Test that a non-finite facing vector is rejected."""
        with pytest.raises(InvalidGeometryError):
            Polygon.create(7, "nan", [(0, 0), (1, 0), (0, 1)], float("inf"), 0)

    def test_translated_keeps_reference_point_relative(self, square):
        """Test that translation moves vertices and reference point."""
        moved = square.translated(3, 4)
        assert moved.vertices[0] == Point(3.0, 4.0)
        assert moved.reference_point.x == pytest.approx(4.0)
        assert moved.reference_point.y == pytest.approx(5.0)


class TestShapeHelpers:
    """Test the variant helpers."""

    def test_shape_kind(self, square, circle):
        """Test the variant tag of each shape."""
        assert shape_kind(square) == ShapeKind.POLYGON
        assert shape_kind(circle) == ShapeKind.CIRCLE

    def test_unknown_variant_rejected(self):
        """Test that foreign objects are not shapes."""
        with pytest.raises(UnsupportedQueryCombinationError):
            validate_shape(object())

    def test_validate_shape_accepts_valid_shapes(self, square, circle):
        """Test that valid shapes pass re-validation."""
        validate_shape(square)
        validate_shape(circle)
