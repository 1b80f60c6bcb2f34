"""
Component 42: Spatial Reasoning - Type Definitions

Basic types and data structures for qualitative spatial reasoning:
- Enums for topological relations, compass sectors and query kinds
- Point and Vector classes for 2D coordinates and directions
- BoundingBox for fast rejection tests
- SpatialQueryResult for query results

Author: SRS Development Team
Date: 2026-10-16
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from common.constants import FULL_CIRCLE_DEGREES, GEOMETRY_EPSILON, SECTOR_WIDTH_DEGREES

# ============================================================================
# Enums
# ============================================================================


class ShapeKind(Enum):
    """Variant tag of a shape."""

    CIRCLE = "circle"
    POLYGON = "polygon"


class RCCRelation(Enum):
    """Region Connection Calculus relations supported by the topological engine."""

    DR = "DR"  # Disconnected (external contact included)
    PO = "PO"  # Partial overlap
    EQ = "EQ"  # Equal
    PP = "PP"  # Proper part
    PPI = "PPI"  # Proper part inverse

    @property
    def is_symmetric(self) -> bool:
        """Check if this relation is symmetric (A R B => B R A)."""
        return self in {RCCRelation.DR, RCCRelation.PO, RCCRelation.EQ}

    @property
    def inverse(self) -> "RCCRelation":
        """Get the converse relation (B R' A for A R B)."""
        inverses = {
            RCCRelation.PP: RCCRelation.PPI,
            RCCRelation.PPI: RCCRelation.PP,
        }
        return inverses.get(self, self)


class CompassSector(Enum):
    """
    Eight 45-degree compass sectors.

    Values are the sector's center angle in degrees, measured
    counter-clockwise from the positive x-axis (E = 0, N = 90).
    """

    E = 0
    NE = 45
    N = 90
    NW = 135
    W = 180
    SW = 225
    S = 270
    SE = 315

    @property
    def center_degrees(self) -> float:
        return float(self.value)

    @property
    def index(self) -> int:
        """Position of the sector in counter-clockwise order starting at E."""
        return int(self.value // SECTOR_WIDTH_DEGREES)

    @classmethod
    def from_index(cls, index: int) -> "CompassSector":
        return cls(int((index % 8) * SECTOR_WIDTH_DEGREES))

    @property
    def opposite(self) -> "CompassSector":
        return CompassSector.from_index(self.index + 4)


class QueryType(Enum):
    """Two-object query kinds accepted by the dispatcher."""

    RCC_DR = "RCC_DR"
    RCC_PO = "RCC_PO"
    RCC_EQ = "RCC_EQ"
    RCC_PP = "RCC_PP"
    RCC_PPI = "RCC_PPI"
    ORIENTATION = "ORIENTATION"
    ALLOCENTRIC_ORIENTATION = "ALLOCENTRIC_ORIENTATION"

    @property
    def is_topological(self) -> bool:
        return self.value.startswith("RCC_")

    @property
    def rcc_relation(self) -> Optional[RCCRelation]:
        """The RCC relation tested by this query kind (None for orientation kinds)."""
        if not self.is_topological:
            return None
        return RCCRelation(self.value[len("RCC_"):])


# ============================================================================
# Data Structures
# ============================================================================


@dataclass(frozen=True)
class Point:
    """
    Represents a point in the 2D plane.

    Immutable and hashable for use in sets and dictionaries.
    """

    x: float
    y: float

    def __str__(self) -> str:
        return f"({self.x:g}, {self.y:g})"

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def vector_to(self, other: "Point") -> "Vector":
        """Vector pointing from this point to another."""
        return Vector(other.x - self.x, other.y - self.y)

    def translated(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def is_close(self, other: "Point", tolerance: float = GEOMETRY_EPSILON) -> bool:
        return self.distance_to(other) <= tolerance

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


@dataclass(frozen=True)
class Vector:
    """
    A 2D direction vector (i, j).

    May be the zero vector; angle() refuses to answer for it.
    """

    i: float
    j: float

    def __str__(self) -> str:
        return f"<{self.i:g}, {self.j:g}>"

    @property
    def length(self) -> float:
        return math.hypot(self.i, self.j)

    def is_zero(self, tolerance: float = GEOMETRY_EPSILON) -> bool:
        return self.length <= tolerance

    def is_finite(self) -> bool:
        return math.isfinite(self.i) and math.isfinite(self.j)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounding box."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def intersects(self, other: "BoundingBox", margin: float = GEOMETRY_EPSILON) -> bool:
        """Check overlap with another box; boxes closer than margin count as touching."""
        return not (
            self.max_x < other.min_x - margin
            or other.max_x < self.min_x - margin
            or self.max_y < other.min_y - margin
            or other.max_y < self.min_y - margin
        )

    def contains_box(self, other: "BoundingBox", margin: float = GEOMETRY_EPSILON) -> bool:
        return (
            other.min_x >= self.min_x - margin
            and other.min_y >= self.min_y - margin
            and other.max_x <= self.max_x + margin
            and other.max_y <= self.max_y + margin
        )


@dataclass
class SpatialQueryResult:
    """
    Result of a two-object spatial query.

    Topological queries fill 'relation' (the RCC relation that holds between
    primary and reference) and 'holds' (whether it is the requested one).
    Orientation queries fill 'sector'.
    """

    query_type: QueryType
    reference_id: int
    primary_id: int
    relation: Optional[RCCRelation] = None
    holds: Optional[bool] = None
    sector: Optional[CompassSector] = None
    reasoning_steps: List[str] = field(default_factory=list)

    @property
    def encoded(self) -> int:
        """
        Integer encoding of the answer.

        1/0 for topological queries, the sector index (E=0 ... SE=7) for
        orientation queries.
        """
        if self.query_type.is_topological:
            return 1 if self.holds else 0
        if self.sector is None:
            raise ValueError(f"Orientation result for {self.query_type.value} has no sector")
        return self.sector.index

    def __str__(self) -> str:
        if self.query_type.is_topological:
            return (
                f"{self.query_type.value}({self.primary_id}, {self.reference_id}) = "
                f"{self.holds} [relation={self.relation.value if self.relation else None}]"
            )
        return f"{self.query_type.value}({self.primary_id}, {self.reference_id}) = {self.sector.name if self.sector else None}"


def normalize_degrees(angle: float) -> float:
    """Normalise an angle in degrees to [0, 360)."""
    normalized = math.fmod(angle, FULL_CIRCLE_DEGREES)
    if normalized < 0.0:
        normalized += FULL_CIRCLE_DEGREES
    # fmod of a tiny negative number can round up to exactly 360.0
    if normalized >= FULL_CIRCLE_DEGREES:
        normalized = 0.0
    return normalized
