"""
infrastructure/interfaces.py

Base interface for the relation engines of the SRS system.

This module defines the common interface that every relation engine must
implement, enabling capability-based routing in the query dispatcher.

Interface Contract:
    All relation engines (topological, directional) implement
    BaseRelationEngine. This ensures:
    - A consistent evaluate() entry point returning SpatialQueryResult
    - Capability discovery for query routing
    - Cost estimation for logging and diagnostics

Usage:
    from infrastructure.interfaces import BaseRelationEngine

    class MyEngine(BaseRelationEngine):
        def evaluate(self, query_type, reference, primary) -> SpatialQueryResult:
            ...

        def get_capabilities(self) -> List[QueryType]:
            return [QueryType.ORIENTATION]

        def estimate_cost(self, reference, primary) -> float:
            return 1.0
"""

from abc import ABC, abstractmethod
from typing import List

from component_42_spatial_shapes import Shape
from component_42_spatial_types import QueryType, SpatialQueryResult


class BaseRelationEngine(ABC):
    """
    Abstract base class for relation engines.

    Engines are stateless with respect to shapes: every call receives the
    shapes it works on and never retains them. Implementations are
    therefore safe to call from multiple threads.

    Design Pattern:
        Strategy pattern. The dispatcher holds a list of engines and routes
        each query kind to the first engine that declares it.
    """

    @abstractmethod
    def evaluate(
        self, query_type: QueryType, reference: Shape, primary: Shape
    ) -> SpatialQueryResult:
        """
        Answer a two-object query.

        Args:
            query_type: The query kind (must be one of get_capabilities())
            reference: The reference shape (landmark / observer)
            primary: The primary shape (subject / target)

        Returns:
            SpatialQueryResult with the relation or sector filled in

        Raises:
            SpatialQueryException: If the query cannot be answered
            GeometryException: If a shape is degenerate
        """

    @abstractmethod
    def get_capabilities(self) -> List[QueryType]:
        """
        Return the query kinds this engine answers.

        Used by the dispatcher to route queries.
        """

    @abstractmethod
    def estimate_cost(self, reference: Shape, primary: Shape) -> float:
        """
        Estimate the relative computational cost for a pair of shapes.

        Cost is proportional to the number of primitive operations
        (1.0 for a constant-time circle test, n*m for pairwise polygon
        edge tests). Used for diagnostics only.
        """

    def supports_capability(self, query_type: QueryType) -> bool:
        """Check if this engine answers the given query kind."""
        return query_type in self.get_capabilities()
