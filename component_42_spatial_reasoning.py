"""
Component 42: Spatial Reasoning - Facade

Unified facade for the spatial reasoning system.

SpatialReasoningSystem owns a ShapeStore and a SpatialQueryDispatcher and
exposes the insert/remove/query surface callers work with:

- component_42_spatial_shapes: Circle and Polygon variants
- component_42_shape_store: Shape storage keyed by id
- component_42_query_dispatcher: Query resolution and routing
- component_42_topological_engine: RCC classification
- component_42_directional_engine: Egocentric and allocentric orientation
- srs_response_formatter: Human-readable labels

Author: SRS Development Team
Date: 2026-10-16
"""

from itertools import permutations
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from component_15_logging_config import get_logger
from component_42_query_dispatcher import SpatialQueryDispatcher
from component_42_shape_store import ShapeStore
from component_42_spatial_config import SpatialReasoningConfig, load_config
from component_42_spatial_shapes import Circle, Coordinate, Polygon, Shape
from component_42_spatial_types import (
    CompassSector,
    Point,
    QueryType,
    RCCRelation,
    SpatialQueryResult,
    Vector,
)
from infrastructure.cache_manager import CacheManager
from srs_exceptions import UndefinedOrientationError
from srs_response_formatter import format_query_result, frame_label

logger = get_logger(__name__)

__all__ = [
    # Types
    "Point",
    "Vector",
    "QueryType",
    "RCCRelation",
    "CompassSector",
    "SpatialQueryResult",
    # Shapes
    "Circle",
    "Polygon",
    "Shape",
    # Facade
    "SpatialReasoningSystem",
]


class SpatialReasoningSystem:
    """
    Facade over shape storage and relation queries.

    Example:
        srs = SpatialReasoningSystem()
        srs.insert_circle(5, 5, 1, 0, 1, shape_id=1, name="coin")
        srs.insert_polygon([(0, 0), (10, 0), (10, 10), (0, 10)], 1, 0, 2, "table")
        srs.two_object_query(QueryType.RCC_PP, 2, 1)  # -> 1, coin lies on table
    """

    def __init__(
        self,
        config: Optional[SpatialReasoningConfig] = None,
        store: Optional[ShapeStore] = None,
        cache_manager: Optional[CacheManager] = None,
    ):
        self.config = config or SpatialReasoningConfig()
        self.store = store if store is not None else ShapeStore()
        self.dispatcher = SpatialQueryDispatcher(
            self.store, config=self.config, cache_manager=cache_manager
        )

        logger.info("SpatialReasoningSystem initialized", extra={"shapes": len(self.store)})

    @classmethod
    def from_config_file(cls, config_path: Union[str, Path]) -> "SpatialReasoningSystem":
        return cls(config=load_config(config_path))

    # ------------------------------------------------------------------
    # Shape management
    # ------------------------------------------------------------------

    def insert_circle(
        self,
        x: float,
        y: float,
        radius: float,
        i: float,
        j: float,
        shape_id: int,
        name: str,
    ) -> Circle:
        """
        Insert a circle centred at (x, y) facing (i, j).

        Raises:
            InvalidGeometryError: If radius <= 0
            DuplicateShapeError: If shape_id is already held
        """
        circle = Circle.create(shape_id, name, x, y, radius, i, j)
        self.store.insert(circle)
        return circle

    def insert_polygon(
        self,
        points: Iterable[Coordinate],
        i: float,
        j: float,
        shape_id: int,
        name: str,
    ) -> Polygon:
        """
        Insert a polygon with the given vertices facing (i, j).

        Raises:
            InvalidGeometryError: If the polygon is degenerate
            DuplicateShapeError: If shape_id is already held
        """
        polygon = Polygon.create(shape_id, name, points, i, j)
        self.store.insert(polygon)
        return polygon

    def insert_shape(self, shape: Shape) -> None:
        self.store.insert(shape)

    def remove_shape(self, shape_id: int) -> Shape:
        """Remove a shape; later queries on its id raise UnknownShapeError."""
        return self.store.remove(shape_id)

    def get_shape(self, shape_id: int) -> Shape:
        return self.store.get(shape_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def query(
        self, query_type: Union[QueryType, str], reference_id: int, primary_id: int
    ) -> SpatialQueryResult:
        return self.dispatcher.query(query_type, reference_id, primary_id)

    def two_object_query(
        self, query_type: Union[QueryType, str], reference_id: int, primary_id: int
    ) -> int:
        """
        Integer-encoded answer: 1/0 for RCC kinds, the sector index
        (E=0, NE=1, N=2, ... SE=7) for orientation kinds.
        """
        return self.query(query_type, reference_id, primary_id).encoded

    def classify(self, shape_a_id: int, shape_b_id: int) -> RCCRelation:
        """RCC relation of shape_a to shape_b (both resolved from the store)."""
        return self.dispatcher.classify(
            self.store.get(shape_a_id), self.store.get(shape_b_id)
        )

    def orientation(self, shape_id: int) -> CompassSector:
        return self.dispatcher.orientation(self.store.get(shape_id))

    def allocentric_orientation(self, observer_id: int, target_id: int) -> CompassSector:
        return self.dispatcher.allocentric_orientation(
            self.store.get(observer_id), self.store.get(target_id)
        )

    def describe(self, result: SpatialQueryResult) -> str:
        """One-line description of a result using the stored shape names."""
        reference = self.store.find(result.reference_id)
        primary = self.store.find(result.primary_id)
        return format_query_result(
            result,
            reference_name=reference.name if reference else None,
            primary_name=primary.name if primary else None,
        )

    def all_relative_orientations(
        self,
    ) -> Dict[Tuple[int, int], Optional[CompassSector]]:
        """
        Allocentric orientation for every ordered pair (observer, target).

        Pairs whose orientation is undefined (observer without facing, or
        coinciding reference points) map to None.
        """
        orientations: Dict[Tuple[int, int], Optional[CompassSector]] = {}
        for observer, target in permutations(self.store.shapes(), 2):
            try:
                orientations[(observer.shape_id, target.shape_id)] = (
                    self.dispatcher.allocentric_orientation(observer, target)
                )
            except UndefinedOrientationError as e:
                logger.debug(
                    "Relative orientation undefined: %s",
                    e.message,
                    extra={"observer_id": observer.shape_id, "target_id": target.shape_id},
                )
                orientations[(observer.shape_id, target.shape_id)] = None
        return orientations

    def describe_all_relative_orientations(self) -> List[str]:
        """Printable lines for all_relative_orientations(), also logged at INFO."""
        lines = []
        for (observer_id, target_id), sector in self.all_relative_orientations().items():
            observer = self.store.get(observer_id)
            target = self.store.get(target_id)
            if sector is None:
                line = f"{target.name} relative to {observer.name}: undefined"
            else:
                line = f"{target.name} is to the {frame_label(sector)} of {observer.name} ({sector.name})"
            lines.append(line)
            logger.info(line)
        return lines


if __name__ == "__main__":
    srs = SpatialReasoningSystem()
    srs.insert_polygon([(0, 0), (10, 0), (10, 10), (0, 10)], 0, 1, shape_id=1, name="room")
    srs.insert_circle(5, 5, 1, 1, 0, shape_id=2, name="table")
    srs.insert_circle(8, 8, 0.5, 0, -1, shape_id=3, name="lamp")

    for kind in (QueryType.RCC_PP, QueryType.RCC_DR, QueryType.ALLOCENTRIC_ORIENTATION):
        print(srs.describe(srs.query(kind, 1, 2)))
    for line in srs.describe_all_relative_orientations():
        print(line)
