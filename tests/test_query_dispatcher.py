"""
Tests for Component 42: Query Dispatcher

Tests for:
- Routing of RCC and orientation kinds
- Reference/primary argument convention
- Error propagation (unknown ids, undefined orientation, unsupported kinds)
- Result caching keyed by the store revision
- Performance metrics

Author: SRS Development Team
Date: 2026-10-16
"""

import pytest

from component_42_directional_engine import DirectionalRelationEngine
from component_42_query_dispatcher import SpatialQueryDispatcher
from component_42_shape_store import ShapeStore
from component_42_spatial_config import SpatialReasoningConfig
from component_42_spatial_shapes import Circle, Polygon
from component_42_spatial_types import CompassSector, QueryType, RCCRelation
from srs_exceptions import (
    UndefinedOrientationError,
    UnknownShapeError,
    UnsupportedQueryCombinationError,
)


@pytest.fixture
def store():
    store = ShapeStore()
    # 1: table facing north, 2: coin on the table facing east,
    # 3: ball to the east of the table without a facing
    store.insert(Polygon.create(1, "table", [(0, 0), (10, 0), (10, 10), (0, 10)], 0, 1))
    store.insert(Circle.create(2, "coin", 5, 5, 1, 1, 0))
    store.insert(Circle.create(3, "ball", 20, 5, 1))
    return store


@pytest.fixture
def dispatcher(store):
    return SpatialQueryDispatcher(store)


class TestTopologicalQueries:
    """Test RCC query routing and argument order."""

    def test_primary_is_part_of_reference(self, dispatcher):
        """Test RCC_PP(reference=table, primary=coin)."""
        result = dispatcher.query(QueryType.RCC_PP, 1, 2)
        assert result.holds is True
        assert result.relation == RCCRelation.PP
        assert result.encoded == 1

    def test_inverse_argument_order(self, dispatcher):
        """Test that swapping the arguments inverts the answer."""
        assert dispatcher.query(QueryType.RCC_PPI, 1, 2).encoded == 0
        assert dispatcher.query(QueryType.RCC_PPI, 2, 1).encoded == 1

    def test_disconnected(self, dispatcher):
        """Test RCC_DR between table and ball."""
        assert dispatcher.query(QueryType.RCC_DR, 1, 3).encoded == 1
        assert dispatcher.query(QueryType.RCC_PO, 1, 3).encoded == 0

    def test_same_shape_is_eq(self, dispatcher):
        """Test that a shape is equal to itself."""
        assert dispatcher.query(QueryType.RCC_EQ, 2, 2).encoded == 1

    def test_string_query_type(self, dispatcher):
        """Test that kind names are accepted case-insensitively."""
        assert dispatcher.query("RCC_PP", 1, 2).holds is True
        assert dispatcher.query("rcc_pp", 1, 2).holds is True

    def test_classify_bypasses_store(self, dispatcher):
        """Test direct classification of unstored shapes."""
        a = Circle.create(10, "a", 0, 0, 1)
        b = Circle.create(11, "b", 0, 0, 2)
        assert dispatcher.classify(a, b) == RCCRelation.PP


class TestOrientationQueries:
    """Test orientation query routing."""

    def test_orientation_uses_primary_facing(self, dispatcher):
        """Test ORIENTATION with the coin as primary."""
        result = dispatcher.query(QueryType.ORIENTATION, 1, 2)
        assert result.sector == CompassSector.E
        assert result.encoded == 0

    def test_orientation_ignores_reference_facing(self, dispatcher):
        """Test ORIENTATION with a reference that has no facing."""
        assert dispatcher.query(QueryType.ORIENTATION, 3, 1).sector == CompassSector.N

    def test_orientation_of_shape_without_facing(self, dispatcher):
        """Test that a zero facing raises UndefinedOrientationError."""
        with pytest.raises(UndefinedOrientationError):
            dispatcher.query(QueryType.ORIENTATION, 1, 3)

    def test_allocentric_right_of_table(self, dispatcher):
        """Test the ball as seen from the table facing north."""
        result = dispatcher.query(QueryType.ALLOCENTRIC_ORIENTATION, 1, 3)
        assert result.sector == CompassSector.S
        assert result.encoded == 6

    def test_allocentric_ahead_of_coin(self, dispatcher):
        """Test the ball as seen from the coin facing east."""
        result = dispatcher.query(QueryType.ALLOCENTRIC_ORIENTATION, 2, 3)
        assert result.sector == CompassSector.E
        assert result.encoded == 0

    def test_allocentric_coincident_reference_points(self, dispatcher):
        """Test table and coin sharing their reference point."""
        with pytest.raises(UndefinedOrientationError):
            dispatcher.query(QueryType.ALLOCENTRIC_ORIENTATION, 1, 2)


class TestErrors:
    """Test error propagation."""

    def test_unknown_reference(self, dispatcher):
        """Test an absent reference id."""
        with pytest.raises(UnknownShapeError) as exc_info:
            dispatcher.query(QueryType.RCC_PP, 99, 2)
        assert exc_info.value.context["shape_id"] == 99

    def test_unknown_primary(self, dispatcher):
        """Test an absent primary id."""
        with pytest.raises(UnknownShapeError):
            dispatcher.query(QueryType.ORIENTATION, 1, 99)

    def test_unknown_query_type(self, dispatcher):
        """Test an unknown kind name."""
        with pytest.raises(UnsupportedQueryCombinationError):
            dispatcher.query("RCC_TPP", 1, 2)

    def test_removed_shape_after_cached_query(self, dispatcher, store):
        """Test that removal wins over a cached answer."""
        assert dispatcher.query(QueryType.RCC_PP, 1, 2).holds is True
        store.remove(2)
        with pytest.raises(UnknownShapeError):
            dispatcher.query(QueryType.RCC_PP, 1, 2)

    def test_no_engine_for_kind(self, store):
        """Test routing when no engine declares the kind."""
        dispatcher = SpatialQueryDispatcher(store, engines=[DirectionalRelationEngine()])
        with pytest.raises(UnsupportedQueryCombinationError):
            dispatcher.query(QueryType.RCC_PP, 1, 2)
        assert dispatcher.query(QueryType.ORIENTATION, 1, 2).sector == CompassSector.E

    def test_failed_queries_are_counted(self, dispatcher):
        """Test the failure counter."""
        with pytest.raises(UnknownShapeError):
            dispatcher.query(QueryType.RCC_PP, 99, 2)
        metrics = dispatcher.get_performance_metrics()
        assert metrics["queries_total"] == 1
        assert metrics["queries_failed"] == 1


class TestCaching:
    """Test result caching."""

    def test_repeated_query_hits_cache(self, dispatcher):
        """Test that the second identical query is served from the cache."""
        first = dispatcher.query(QueryType.RCC_PP, 1, 2)
        second = dispatcher.query(QueryType.RCC_PP, 1, 2)

        assert first.holds == second.holds
        metrics = dispatcher.get_performance_metrics()
        assert metrics["queries_total"] == 2
        assert metrics["queries_cached"] == 1
        assert metrics["cache_hit_rate"] == pytest.approx(0.5)

    def test_mutation_invalidates_cached_answers(self, dispatcher, store):
        """Test that a store change forces recomputation."""
        dispatcher.query(QueryType.RCC_PP, 1, 2)
        store.insert(Circle.create(4, "pebble", 1, 1, 0.5))
        dispatcher.query(QueryType.RCC_PP, 1, 2)
        assert dispatcher.get_performance_metrics()["queries_cached"] == 0

    def test_replaced_shape_gets_fresh_answer(self, dispatcher, store):
        """Test that reusing an id after removal is not answered from the cache."""
        assert dispatcher.query(QueryType.RCC_PP, 1, 2).holds is True
        store.remove(2)
        store.insert(Circle.create(2, "coin", 50, 50, 1))
        assert dispatcher.query(QueryType.RCC_PP, 1, 2).holds is False

    def test_cached_results_are_copies(self, dispatcher):
        """Test that callers cannot corrupt cached results."""
        first = dispatcher.query(QueryType.RCC_PP, 1, 2)
        first.reasoning_steps.append("tampered")
        second = dispatcher.query(QueryType.RCC_PP, 1, 2)
        assert "tampered" not in second.reasoning_steps

    def test_clear_cache(self, dispatcher):
        """Test explicit cache clearing."""
        dispatcher.query(QueryType.RCC_PP, 1, 2)
        assert dispatcher.clear_cache() == 1
        dispatcher.query(QueryType.RCC_PP, 1, 2)
        assert dispatcher.get_performance_metrics()["queries_cached"] == 0

    def test_caching_disabled(self, store):
        """Test a dispatcher configured without caching."""
        config = SpatialReasoningConfig(
            enable_result_caching=False, enable_performance_logging=False
        )
        dispatcher = SpatialQueryDispatcher(store, config=config)

        dispatcher.query(QueryType.RCC_PP, 1, 2)
        dispatcher.query(QueryType.RCC_PP, 1, 2)

        assert dispatcher.get_performance_metrics()["queries_cached"] == 0
        assert not dispatcher.cache_manager.is_registered(SpatialQueryDispatcher.CACHE_NAME)
        assert dispatcher.clear_cache() == 0

    def test_dispatchers_do_not_share_results(self, store):
        """Test that two dispatchers over different stores stay separate."""
        other_store = ShapeStore()
        other_store.insert(Polygon.create(1, "table", [(0, 0), (1, 0), (1, 1), (0, 1)]))
        other_store.insert(Circle.create(2, "coin", 5, 5, 1))

        assert SpatialQueryDispatcher(store).query(QueryType.RCC_PP, 1, 2).holds is True
        assert SpatialQueryDispatcher(other_store).query(QueryType.RCC_PP, 1, 2).holds is False
