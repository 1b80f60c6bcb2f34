"""
Component 42: Query Dispatcher

Resolves two-object queries against a shape store and routes them to the
relation engine that declares support for the query kind.

This module handles:
- Shape resolution (UnknownShapeError for absent ids)
- Re-validation of resolved shapes
- Capability-based routing (RCC_* -> topological engine,
  ORIENTATION / ALLOCENTRIC_ORIENTATION -> directional engine)
- Result caching keyed by the store revision
- Performance metrics and timing logs

Argument convention: query(kind, reference_id, primary_id) asks about the
primary shape relative to the reference shape, e.g. RCC_PP holds when the
primary shape is a proper part of the reference shape.

Author: SRS Development Team
Date: 2026-10-16
"""

import dataclasses
import threading
from typing import Any, Dict, List, Optional, Sequence, Union

from component_15_logging_config import PerformanceLogger, get_logger
from component_42_directional_engine import DirectionalRelationEngine
from component_42_shape_store import ShapeStore
from component_42_spatial_config import SpatialReasoningConfig
from component_42_spatial_shapes import Shape, validate_shape
from component_42_spatial_types import (
    CompassSector,
    QueryType,
    RCCRelation,
    SpatialQueryResult,
)
from component_42_topological_engine import TopologicalRelationEngine
from infrastructure.cache_manager import CacheManager
from infrastructure.interfaces import BaseRelationEngine
from srs_exceptions import SRSException, UnsupportedQueryCombinationError

logger = get_logger(__name__)


class SpatialQueryDispatcher:
    """
    Routes spatial queries to relation engines.

    The dispatcher only reads shape state. Its own mutable state (metrics
    and result cache) is protected by a lock.
    """

    CACHE_NAME = "spatial_queries"

    def __init__(
        self,
        store: ShapeStore,
        engines: Optional[Sequence[BaseRelationEngine]] = None,
        config: Optional[SpatialReasoningConfig] = None,
        cache_manager: Optional[CacheManager] = None,
    ):
        """
        Initialize the dispatcher.

        Args:
            store: Shape store owned by the caller
            engines: Relation engines in routing order (default: topological
                and directional engines)
            config: Dispatcher/engine settings (default: built-in defaults)
            cache_manager: Cache manager for query results (default: a new
                private instance)
        """
        self.store = store
        self.config = config or SpatialReasoningConfig()

        if engines is None:
            engines = [
                TopologicalRelationEngine(
                    boundary_samples_per_edge=self.config.boundary_samples_per_edge
                ),
                DirectionalRelationEngine(),
            ]
        self.engines: List[BaseRelationEngine] = list(engines)

        self._lock = threading.RLock()
        self.cache_manager = cache_manager or CacheManager()
        if self.config.enable_result_caching:
            self.cache_manager.register_cache(
                self.CACHE_NAME,
                maxsize=self.config.cache_maxsize,
                ttl=self.config.cache_ttl,
                overwrite=True,
            )

        self._performance_metrics = {
            "queries_total": 0,
            "queries_cached": 0,
            "queries_failed": 0,
        }

        logger.info(
            "SpatialQueryDispatcher initialized",
            extra={
                "engines": ", ".join(type(e).__name__ for e in self.engines),
                "caching": self.config.enable_result_caching,
            },
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def query(
        self,
        query_type: Union[QueryType, str],
        reference_id: int,
        primary_id: int,
    ) -> SpatialQueryResult:
        """
        Answer a two-object query.

        Args:
            query_type: Query kind (QueryType or its name, e.g. "RCC_PP")
            reference_id: Id of the reference shape (landmark / observer)
            primary_id: Id of the primary shape (subject / target)

        Returns:
            SpatialQueryResult

        Raises:
            UnknownShapeError: If either id is not in the store
            InvalidGeometryError: If a resolved shape is degenerate
            UndefinedOrientationError: If an orientation is undefined
            UnsupportedQueryCombinationError: If no engine answers the kind
        """
        query_type = self._coerce_query_type(query_type)

        with self._lock:
            self._performance_metrics["queries_total"] += 1

        try:
            return self._query(query_type, reference_id, primary_id)
        except SRSException as e:
            with self._lock:
                self._performance_metrics["queries_failed"] += 1
            logger.warning(
                "Spatial query failed: %s",
                e,
                extra={
                    "query_type": query_type.value,
                    "reference_id": reference_id,
                    "primary_id": primary_id,
                },
            )
            raise

    def classify(self, shape_a: Shape, shape_b: Shape) -> RCCRelation:
        """RCC relation of shape_a to shape_b, bypassing the store."""
        return self._topological_engine().classify(shape_a, shape_b)

    def orientation(self, shape: Shape) -> CompassSector:
        """Egocentric orientation of a shape, bypassing the store."""
        return self._directional_engine().orientation(shape)

    def allocentric_orientation(self, observer: Shape, target: Shape) -> CompassSector:
        """Allocentric orientation of target from observer, bypassing the store."""
        return self._directional_engine().allocentric_orientation(observer, target)

    def clear_cache(self) -> int:
        """Drop all cached results; returns the number of entries removed."""
        if not self.config.enable_result_caching:
            return 0
        return self.cache_manager.invalidate(self.CACHE_NAME)

    def get_performance_metrics(self) -> Dict[str, Any]:
        with self._lock:
            metrics: Dict[str, Any] = dict(self._performance_metrics)
        total = metrics["queries_total"]
        metrics["cache_hit_rate"] = metrics["queries_cached"] / total if total else 0.0
        return metrics

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _query(
        self, query_type: QueryType, reference_id: int, primary_id: int
    ) -> SpatialQueryResult:
        revision = self.store.revision
        reference = self.store.get(reference_id)
        primary = self.store.get(primary_id)

        validate_shape(reference)
        validate_shape(primary)

        cache_key = (id(self.store), revision, query_type.value, reference_id, primary_id)
        cached = self._cache_get(cache_key)
        if cached is not None:
            with self._lock:
                self._performance_metrics["queries_cached"] += 1
            return _copy_result(cached)

        engine = self._route(query_type)
        if self.config.enable_performance_logging:
            with PerformanceLogger(
                logger.logger,
                f"{type(engine).__name__}.{query_type.value}",
                reference_id=reference_id,
                primary_id=primary_id,
                estimated_cost=engine.estimate_cost(reference, primary),
            ):
                result = engine.evaluate(query_type, reference, primary)
        else:
            result = engine.evaluate(query_type, reference, primary)

        logger.info(
            "Spatial query answered",
            extra={
                "query_type": query_type.value,
                "reference_id": reference_id,
                "primary_id": primary_id,
                "answer": result.encoded,
            },
        )

        self._cache_set(cache_key, result)
        return _copy_result(result)

    def _route(self, query_type: QueryType) -> BaseRelationEngine:
        for engine in self.engines:
            if engine.supports_capability(query_type):
                return engine
        raise UnsupportedQueryCombinationError(
            f"No engine answers {query_type.value}", query_type=query_type.value
        )

    def _topological_engine(self) -> TopologicalRelationEngine:
        engine = self._route(QueryType.RCC_EQ)
        if not isinstance(engine, TopologicalRelationEngine):
            raise UnsupportedQueryCombinationError(
                "Topological classification requires a TopologicalRelationEngine",
                query_type=QueryType.RCC_EQ.value,
            )
        return engine

    def _directional_engine(self) -> DirectionalRelationEngine:
        engine = self._route(QueryType.ORIENTATION)
        if not isinstance(engine, DirectionalRelationEngine):
            raise UnsupportedQueryCombinationError(
                "Orientation requires a DirectionalRelationEngine",
                query_type=QueryType.ORIENTATION.value,
            )
        return engine

    def _cache_get(self, key) -> Optional[SpatialQueryResult]:
        if not self.config.enable_result_caching:
            return None
        return self.cache_manager.get(self.CACHE_NAME, key)

    def _cache_set(self, key, result: SpatialQueryResult) -> None:
        if self.config.enable_result_caching:
            self.cache_manager.set(self.CACHE_NAME, key, result)

    @staticmethod
    def _coerce_query_type(query_type: Union[QueryType, str]) -> QueryType:
        if isinstance(query_type, QueryType):
            return query_type
        try:
            return QueryType(str(query_type).upper())
        except ValueError as e:
            raise UnsupportedQueryCombinationError(
                f"Unknown query type: {query_type!r}", query_type=str(query_type)
            ) from e


def _copy_result(result: SpatialQueryResult) -> SpatialQueryResult:
    return dataclasses.replace(result, reasoning_steps=list(result.reasoning_steps))
