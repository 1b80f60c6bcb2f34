"""
Component 42: Shape Store

Keyed container holding the shapes that queries refer to.

This module handles:
- Insertion with unique-id enforcement
- Lookup and removal by identifier
- A revision counter that changes on every mutation, used by the query
  dispatcher to key its result cache

The store is an explicit context object: callers create it and pass it to
the dispatcher. There is no global registry.

Author: SRS Development Team
Date: 2026-10-16
"""

import threading
from typing import Dict, Iterator, List, Optional

from component_15_logging_config import get_logger
from component_42_spatial_shapes import Shape, validate_shape
from srs_exceptions import DuplicateShapeError, UnknownShapeError

logger = get_logger(__name__)


class ShapeStore:
    """
    Shape collection keyed by shape_id.

    Thread Safety:
        Reads and writes are guarded by an RLock, so concurrent queries
        against a stable store are safe. Interleaving mutations with
        queries is the caller's responsibility.
    """

    def __init__(self):
        self._shapes: Dict[int, Shape] = {}
        self._revision = 0
        self._lock = threading.RLock()

        logger.debug("ShapeStore initialized")

    @property
    def revision(self) -> int:
        """Monotonic counter incremented by every insert and remove."""
        with self._lock:
            return self._revision

    def insert(self, shape: Shape) -> None:
        """
        Add a shape to the store.

        Raises:
            InvalidGeometryError: If the shape violates its invariants
            DuplicateShapeError: If the id is already held
        """
        validate_shape(shape)
        with self._lock:
            if shape.shape_id in self._shapes:
                raise DuplicateShapeError(
                    f"Shape id {shape.shape_id} is already in use",
                    shape_id=shape.shape_id,
                )
            self._shapes[shape.shape_id] = shape
            self._revision += 1

        logger.info(
            "Shape inserted",
            extra={
                "shape_id": shape.shape_id,
                "name": shape.name,
                "kind": shape.kind.value,
            },
        )

    def remove(self, shape_id: int) -> Shape:
        """
        Remove a shape and free its id.

        Returns:
            The removed shape

        Raises:
            UnknownShapeError: If the id is not held
        """
        with self._lock:
            shape = self._shapes.pop(shape_id, None)
            if shape is None:
                raise UnknownShapeError(
                    f"Cannot remove unknown shape {shape_id}", shape_id=shape_id
                )
            self._revision += 1

        logger.info("Shape removed", extra={"shape_id": shape_id, "name": shape.name})
        return shape

    def get(self, shape_id: int) -> Shape:
        """
        Look up a shape by id.

        Raises:
            UnknownShapeError: If the id is not held
        """
        with self._lock:
            shape = self._shapes.get(shape_id)
        if shape is None:
            raise UnknownShapeError(f"Unknown shape {shape_id}", shape_id=shape_id)
        return shape

    def find(self, shape_id: int) -> Optional[Shape]:
        """Look up a shape by id, returning None if it is not held."""
        with self._lock:
            return self._shapes.get(shape_id)

    def ids(self) -> List[int]:
        """Sorted list of held ids."""
        with self._lock:
            return sorted(self._shapes)

    def shapes(self) -> List[Shape]:
        """Held shapes ordered by id."""
        with self._lock:
            return [self._shapes[shape_id] for shape_id in sorted(self._shapes)]

    def clear(self) -> None:
        with self._lock:
            count = len(self._shapes)
            self._shapes.clear()
            self._revision += 1
        logger.info("ShapeStore cleared", extra={"removed": count})

    def __contains__(self, shape_id: object) -> bool:
        with self._lock:
            return shape_id in self._shapes

    def __len__(self) -> int:
        with self._lock:
            return len(self._shapes)

    def __iter__(self) -> Iterator[Shape]:
        return iter(self.shapes())
