"""
Component 42: Topological Relation Engine

Region Connection Calculus classification between two shapes.

This module handles:
- Bounding box fast rejection
- Variant-specific containment tests (circle/circle, circle/polygon,
  polygon/polygon)
- Interior intersection tests
- Classification into DR, PO, EQ, PP, PPI

Classification order (tie-break policy):
    1. Disjoint bounding boxes       -> DR
    2. Mutual containment, same area -> EQ
    3. One-sided containment         -> PP / PPI
    4. Intersecting interiors        -> PO
    5. Anything else                 -> DR

Containment is closed: a shape touching the inside of the other's boundary
is still a proper part. Shapes that only touch from outside are DR.

Author: SRS Development Team
Date: 2026-10-16
"""

from typing import List, Optional, Tuple

from common.constants import BOUNDARY_SAMPLES_PER_EDGE, GEOMETRY_EPSILON
from component_15_logging_config import get_logger
from component_42_geometry_utils import areas_equal, segments_cross, segments_touch
from component_42_spatial_shapes import (
    Circle,
    Polygon,
    Shape,
    shape_kind,
    validate_shape,
)
from component_42_spatial_types import (
    QueryType,
    RCCRelation,
    ShapeKind,
    SpatialQueryResult,
)
from infrastructure.interfaces import BaseRelationEngine
from srs_exceptions import UnsupportedQueryCombinationError

logger = get_logger(__name__)


class TopologicalRelationEngine(BaseRelationEngine):
    """
    Computes the RCC relation holding between two shapes.

    The engine is stateless: every method is a pure function of the shapes
    passed in.
    """

    def __init__(self, boundary_samples_per_edge: int = BOUNDARY_SAMPLES_PER_EDGE):
        """
        Initialize the topological engine.

        Args:
            boundary_samples_per_edge: Sample points per polygon edge used
                by polygon/polygon containment and overlap tests
        """
        if boundary_samples_per_edge < 1:
            raise ValueError(
                f"boundary_samples_per_edge must be >= 1, got {boundary_samples_per_edge}"
            )
        self.boundary_samples_per_edge = boundary_samples_per_edge

    # ------------------------------------------------------------------
    # BaseRelationEngine
    # ------------------------------------------------------------------

    def get_capabilities(self) -> List[QueryType]:
        return [qt for qt in QueryType if qt.is_topological]

    def estimate_cost(self, reference: Shape, primary: Shape) -> float:
        return float(_primitive_count(reference) * _primitive_count(primary))

    def evaluate(
        self, query_type: QueryType, reference: Shape, primary: Shape
    ) -> SpatialQueryResult:
        """
        Check whether primary stands in the requested RCC relation to reference.

        RCC_PP asks "is primary a proper part of reference?", RCC_PPI asks
        "does primary contain reference?".
        """
        requested = query_type.rcc_relation
        if requested is None:
            raise UnsupportedQueryCombinationError(
                f"Topological engine cannot answer {query_type.value}",
                query_type=query_type.value,
            )

        relation, steps = self.classify_with_trace(primary, reference)
        holds = relation == requested
        steps.append(
            f"Requested {requested.value}, found {relation.value}: "
            f"{'holds' if holds else 'does not hold'}"
        )
        return SpatialQueryResult(
            query_type=query_type,
            reference_id=reference.shape_id,
            primary_id=primary.shape_id,
            relation=relation,
            holds=holds,
            reasoning_steps=steps,
        )

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def classify(self, shape_a: Shape, shape_b: Shape) -> RCCRelation:
        """
        Classify the RCC relation of shape_a with respect to shape_b.

        Returns:
            PP if shape_a is a proper part of shape_b, PPI if shape_b is a
            proper part of shape_a, otherwise DR, PO or EQ

        Raises:
            InvalidGeometryError: If either shape is degenerate
            UnsupportedQueryCombinationError: If a shape variant is unknown
        """
        relation, _ = self.classify_with_trace(shape_a, shape_b)
        return relation

    def holds(self, shape_a: Shape, shape_b: Shape, relation: RCCRelation) -> bool:
        """Check whether 'shape_a relation shape_b' is true."""
        return self.classify(shape_a, shape_b) == relation

    def classify_with_trace(
        self, shape_a: Shape, shape_b: Shape
    ) -> Tuple[RCCRelation, List[str]]:
        """Classify and return the reasoning steps that led to the answer."""
        validate_shape(shape_a)
        validate_shape(shape_b)

        steps: List[str] = []

        if not shape_a.bounding_box().intersects(shape_b.bounding_box()):
            steps.append("Bounding boxes are disjoint")
            return self._finish(shape_a, shape_b, RCCRelation.DR, steps)

        steps.append("Bounding boxes intersect")

        a_in_b = self.covers(shape_b, shape_a)
        b_in_a = self.covers(shape_a, shape_b)

        if a_in_b and b_in_a:
            if areas_equal(shape_a.area(), shape_b.area()):
                steps.append("Each shape covers the other and areas agree")
                return self._finish(shape_a, shape_b, RCCRelation.EQ, steps)
            # Mutual cover with differing areas only arises from tolerance
            # effects; the smaller shape is taken as the part.
            steps.append("Mutual cover with differing areas, comparing areas")
            relation = (
                RCCRelation.PP if shape_a.area() < shape_b.area() else RCCRelation.PPI
            )
            return self._finish(shape_a, shape_b, relation, steps)

        if a_in_b:
            steps.append(f"{shape_a.name} lies within {shape_b.name}")
            return self._finish(shape_a, shape_b, RCCRelation.PP, steps)

        if b_in_a:
            steps.append(f"{shape_b.name} lies within {shape_a.name}")
            return self._finish(shape_a, shape_b, RCCRelation.PPI, steps)

        if self.interiors_intersect(shape_a, shape_b):
            steps.append("Interiors intersect without containment")
            return self._finish(shape_a, shape_b, RCCRelation.PO, steps)

        if self.boundaries_touch(shape_a, shape_b):
            steps.append("Boundaries touch from outside; interiors are disjoint")
        else:
            steps.append("Shapes are separated")
        return self._finish(shape_a, shape_b, RCCRelation.DR, steps)

    def _finish(
        self, shape_a: Shape, shape_b: Shape, relation: RCCRelation, steps: List[str]
    ) -> Tuple[RCCRelation, List[str]]:
        logger.debug(
            "RCC classification complete",
            extra={
                "shape_a": shape_a.shape_id,
                "shape_b": shape_b.shape_id,
                "relation": relation.value,
            },
        )
        return relation, steps

    # ------------------------------------------------------------------
    # Containment
    # ------------------------------------------------------------------

    def covers(self, outer: Shape, inner: Shape) -> bool:
        """Check if every point of inner lies in outer (boundary included)."""
        kinds = (shape_kind(outer), shape_kind(inner))

        if kinds == (ShapeKind.CIRCLE, ShapeKind.CIRCLE):
            return self._circle_covers_circle(outer, inner)
        if kinds == (ShapeKind.CIRCLE, ShapeKind.POLYGON):
            return self._circle_covers_polygon(outer, inner)
        if kinds == (ShapeKind.POLYGON, ShapeKind.CIRCLE):
            return self._polygon_covers_circle(outer, inner)
        if kinds == (ShapeKind.POLYGON, ShapeKind.POLYGON):
            return self._polygon_covers_polygon(outer, inner)

        raise UnsupportedQueryCombinationError(
            f"No containment test for {kinds[0].value}/{kinds[1].value}"
        )

    @staticmethod
    def _circle_covers_circle(outer: Circle, inner: Circle) -> bool:
        distance = outer.center.distance_to(inner.center)
        return distance + inner.radius <= outer.radius + GEOMETRY_EPSILON

    @staticmethod
    def _circle_covers_polygon(outer: Circle, inner: Polygon) -> bool:
        # A disc is convex, so containing every vertex is sufficient
        return all(outer.contains_point(v) for v in inner.vertices)

    @staticmethod
    def _polygon_covers_circle(outer: Polygon, inner: Circle) -> bool:
        if not outer.contains_point(inner.center, include_boundary=False):
            return False
        return outer.boundary_distance(inner.center) >= inner.radius - GEOMETRY_EPSILON

    def _polygon_covers_polygon(self, outer: Polygon, inner: Polygon) -> bool:
        if not outer.bounding_box().contains_box(inner.bounding_box()):
            return False
        if _edges_cross(outer, inner):
            return False
        # A boundary point of outer strictly inside inner means outer dents into it
        outer_samples = outer.sample_boundary(self.boundary_samples_per_edge)
        if any(inner.contains_point(p, include_boundary=False) for p in outer_samples):
            return False
        return all(
            outer.contains_point(p)
            for p in inner.sample_boundary(self.boundary_samples_per_edge)
        )

    # ------------------------------------------------------------------
    # Contact
    # ------------------------------------------------------------------

    def boundaries_touch(self, shape_a: Shape, shape_b: Shape) -> bool:
        """Check if the boundaries of the two shapes share a point (within epsilon)."""
        kinds = (shape_kind(shape_a), shape_kind(shape_b))

        if kinds == (ShapeKind.CIRCLE, ShapeKind.CIRCLE):
            distance = shape_a.center.distance_to(shape_b.center)
            outer = shape_a.radius + shape_b.radius
            inner = abs(shape_a.radius - shape_b.radius)
            return inner - GEOMETRY_EPSILON <= distance <= outer + GEOMETRY_EPSILON
        if kinds == (ShapeKind.CIRCLE, ShapeKind.POLYGON):
            return _circle_meets_polygon_boundary(shape_a, shape_b)
        if kinds == (ShapeKind.POLYGON, ShapeKind.CIRCLE):
            return _circle_meets_polygon_boundary(shape_b, shape_a)
        if kinds == (ShapeKind.POLYGON, ShapeKind.POLYGON):
            edges_b = shape_b.edges()
            return any(
                segments_touch(a1, a2, b1, b2)
                for a1, a2 in shape_a.edges()
                for b1, b2 in edges_b
            )

        raise UnsupportedQueryCombinationError(
            f"No contact test for {kinds[0].value}/{kinds[1].value}"
        )

    # ------------------------------------------------------------------
    # Overlap
    # ------------------------------------------------------------------

    def interiors_intersect(self, shape_a: Shape, shape_b: Shape) -> bool:
        """Check if the interiors of the two shapes share at least one point."""
        kinds = (shape_kind(shape_a), shape_kind(shape_b))

        if kinds == (ShapeKind.CIRCLE, ShapeKind.CIRCLE):
            distance = shape_a.center.distance_to(shape_b.center)
            return distance < shape_a.radius + shape_b.radius - GEOMETRY_EPSILON
        if kinds == (ShapeKind.CIRCLE, ShapeKind.POLYGON):
            return self._circle_polygon_overlap(shape_a, shape_b)
        if kinds == (ShapeKind.POLYGON, ShapeKind.CIRCLE):
            return self._circle_polygon_overlap(shape_b, shape_a)
        if kinds == (ShapeKind.POLYGON, ShapeKind.POLYGON):
            return self._polygon_polygon_overlap(shape_a, shape_b)

        raise UnsupportedQueryCombinationError(
            f"No overlap test for {kinds[0].value}/{kinds[1].value}"
        )

    @staticmethod
    def _circle_polygon_overlap(circle: Circle, polygon: Polygon) -> bool:
        if polygon.contains_point(circle.center, include_boundary=False):
            return True
        # Center outside or on the boundary: the disc reaches into the
        # polygon iff some boundary point is strictly closer than the radius
        return polygon.boundary_distance(circle.center) < circle.radius - GEOMETRY_EPSILON

    def _polygon_polygon_overlap(self, poly_a: Polygon, poly_b: Polygon) -> bool:
        if _edges_cross(poly_a, poly_b):
            return True
        for source, target in ((poly_a, poly_b), (poly_b, poly_a)):
            for p in source.sample_boundary(self.boundary_samples_per_edge):
                if target.contains_point(p, include_boundary=False):
                    return True
        return False


def _circle_meets_polygon_boundary(circle: Circle, polygon: Polygon) -> bool:
    # The circle boundary meets an edge iff the edge runs from within the
    # closed disc to outside the open disc
    nearest = polygon.boundary_distance(circle.center)
    farthest = max(circle.center.distance_to(v) for v in polygon.vertices)
    return nearest <= circle.radius + GEOMETRY_EPSILON and farthest >= circle.radius - GEOMETRY_EPSILON


def _edges_cross(poly_a: Polygon, poly_b: Polygon) -> bool:
    """Check if any edge of poly_a properly crosses any edge of poly_b."""
    edges_b = poly_b.edges()
    for a1, a2 in poly_a.edges():
        for b1, b2 in edges_b:
            if segments_cross(a1, a2, b1, b2):
                return True
    return False


def _primitive_count(shape: Shape) -> int:
    if isinstance(shape, Polygon):
        return len(shape.vertices)
    return 1


_default_engine: Optional[TopologicalRelationEngine] = None


def classify(shape_a: Shape, shape_b: Shape) -> RCCRelation:
    """Classify the RCC relation of shape_a to shape_b with default settings."""
    global _default_engine
    if _default_engine is None:
        _default_engine = TopologicalRelationEngine()
    return _default_engine.classify(shape_a, shape_b)
