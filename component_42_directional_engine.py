"""
Component 42: Directional Relation Engine

Egocentric and allocentric orientation of shapes.

This module handles:
- Facing angle computation (degrees from +x, counter-clockwise, [0, 360))
- Mapping angles onto eight 45-degree compass sectors
- Egocentric orientation: the sector of a shape's own facing vector
- Allocentric orientation: the direction of a target as seen from an
  observer, measured from the observer's facing (ahead = E,
  left = N, right = S, behind = W)

Author: SRS Development Team
Date: 2026-10-16
"""

import math
from typing import List, Optional

from common.constants import (
    SECTOR_COUNT,
    SECTOR_WIDTH_DEGREES,
)
from component_15_logging_config import get_logger
from component_42_spatial_shapes import Shape, validate_shape
from component_42_spatial_types import (
    CompassSector,
    QueryType,
    SpatialQueryResult,
    Vector,
    normalize_degrees,
)
from infrastructure.interfaces import BaseRelationEngine
from srs_exceptions import UndefinedOrientationError, UnsupportedQueryCombinationError

logger = get_logger(__name__)


def facing_angle(vector: Vector, shape_id: Optional[int] = None) -> float:
    """
    Angle of a direction vector in degrees, normalised to [0, 360).

    Raises:
        UndefinedOrientationError: If the vector has zero length
    """
    if vector.is_zero():
        raise UndefinedOrientationError(
            f"Orientation of zero-length vector {vector} is undefined",
            shape_id=shape_id,
        )
    return normalize_degrees(math.degrees(math.atan2(vector.j, vector.i)))


def sector_for_angle(degrees: float) -> CompassSector:
    """
    Map an angle onto a compass sector.

    Sectors are 45 degrees wide and centred on E=0, NE=45, N=90, ... SE=315.
    Each covers [center - 22.5, center + 22.5), so exact boundaries belong
    to the counter-clockwise neighbour.
    """
    shifted = normalize_degrees(degrees + SECTOR_WIDTH_DEGREES / 2)
    index = int(shifted // SECTOR_WIDTH_DEGREES) % SECTOR_COUNT
    return CompassSector.from_index(index)


class DirectionalRelationEngine(BaseRelationEngine):
    """
    Computes egocentric and allocentric orientation sectors.

    Stateless; every method is a pure function of its inputs.
    """

    def get_capabilities(self) -> List[QueryType]:
        return [QueryType.ORIENTATION, QueryType.ALLOCENTRIC_ORIENTATION]

    def estimate_cost(self, reference: Shape, primary: Shape) -> float:
        return 1.0

    def evaluate(
        self, query_type: QueryType, reference: Shape, primary: Shape
    ) -> SpatialQueryResult:
        """
        ORIENTATION uses only the primary shape; ALLOCENTRIC_ORIENTATION
        treats reference as observer and primary as target.
        """
        steps: List[str] = []

        if query_type == QueryType.ORIENTATION:
            validate_shape(primary)
            angle = facing_angle(primary.facing, primary.shape_id)
            sector = sector_for_angle(angle)
            steps.append(f"Facing {primary.facing} of {primary.name} points at {angle:.2f} deg")
        elif query_type == QueryType.ALLOCENTRIC_ORIENTATION:
            angle = self.relative_bearing(reference, primary)
            sector = sector_for_angle(angle)
            steps.append(
                f"{primary.name} lies {angle:.2f} deg counter-clockwise of "
                f"{reference.name}'s facing"
            )
        else:
            raise UnsupportedQueryCombinationError(
                f"Directional engine cannot answer {query_type.value}",
                query_type=query_type.value,
            )

        steps.append(f"Sector {sector.name}")
        return SpatialQueryResult(
            query_type=query_type,
            reference_id=reference.shape_id,
            primary_id=primary.shape_id,
            sector=sector,
            reasoning_steps=steps,
        )

    def orientation(self, shape: Shape) -> CompassSector:
        """
        Egocentric orientation: the sector the shape's facing vector points to.

        Raises:
            UndefinedOrientationError: If the facing vector has zero length
        """
        validate_shape(shape)
        sector = sector_for_angle(facing_angle(shape.facing, shape.shape_id))
        logger.debug(
            "Egocentric orientation computed",
            extra={"shape_id": shape.shape_id, "sector": sector.name},
        )
        return sector

    def relative_bearing(self, observer: Shape, target: Shape) -> float:
        """
        Angle of target's reference point relative to observer's facing.

        0 means straight ahead; angles grow counter-clockwise (90 = left).

        Raises:
            UndefinedOrientationError: If the observer's facing is zero or
                both reference points coincide
        """
        validate_shape(observer)
        validate_shape(target)

        facing = facing_angle(observer.facing, observer.shape_id)
        offset = observer.reference_point.vector_to(target.reference_point)
        if offset.is_zero():
            raise UndefinedOrientationError(
                f"{observer.name} and {target.name} share the same reference point",
                shape_id=target.shape_id,
                context={"observer_id": observer.shape_id},
            )
        bearing = facing_angle(offset, target.shape_id)
        return normalize_degrees(bearing - facing)

    def allocentric_orientation(self, observer: Shape, target: Shape) -> CompassSector:
        """
        Direction of target in observer's facing frame.

        The relative bearing is sectored like an absolute angle, so
        E = ahead, NE = front-left, N = left, NW = behind-left, W = behind,
        SW = behind-right, S = right, SE = front-right.
        """
        sector = sector_for_angle(self.relative_bearing(observer, target))
        logger.debug(
            "Allocentric orientation computed",
            extra={
                "observer_id": observer.shape_id,
                "target_id": target.shape_id,
                "sector": sector.name,
            },
        )
        return sector


_default_engine = DirectionalRelationEngine()


def orientation(shape: Shape) -> CompassSector:
    """Egocentric orientation of a shape."""
    return _default_engine.orientation(shape)


def allocentric_orientation(observer: Shape, target: Shape) -> CompassSector:
    """Direction of target as seen from observer's facing frame."""
    return _default_engine.allocentric_orientation(observer, target)
