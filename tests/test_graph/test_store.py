"""Tests for GraphStore lookups, neighbor expansion and validation."""

import pytest

from campus_tour.graph.models import Direction, Hub, SingleEdge
from campus_tour.graph.store import GraphStore, GraphValidationError


class TestGraphStoreLookup:
    """Tests for get_by_id and container behaviour."""

    def test_get_by_id_is_idempotent(self, corridor_store):
        """Repeated lookups return equal (and identical) objects."""
        first = corridor_store.get_by_id("b")
        second = corridor_store.get_by_id("b")
        assert first == second
        assert first is second

    def test_unknown_id_returns_none(self, corridor_store):
        """Unknown ids are a normal None result, not an exception."""
        assert corridor_store.get_by_id("no-such-id") is None

    def test_len_contains_iter(self, corridor_store):
        """Store supports len(), `in` and iteration."""
        assert len(corridor_store) == 4
        assert "a" in corridor_store
        assert "z" not in corridor_store
        assert {loc.id for loc in corridor_store} == {"a", "b", "c", "d"}

    def test_hubs(self, make_location):
        """hubs() returns only Hub instances."""
        hub = Hub(id="h", image_url="h.jpg", edges={Direction.FLOOR_1: SingleEdge("a")})
        store = GraphStore([make_location("a", 0, {"elevator": "h"}), hub])
        assert store.hubs() == [hub]
        assert len(store.locations()) == 2


class TestGraphStoreNeighbors:
    """Tests for get_neighbors ordering and deduplication."""

    def test_order_horizontal_vertical_floor(self, make_location):
        """Horizontal (enum order), then vertical/special, then floor selections."""
        store = GraphStore(
            [
                make_location(
                    "hub",
                    0,
                    {"floor2": "f2", "door": ["d1", "d2"], "left": "l", "forward": "f"},
                ),
                make_location("f2"),
                make_location("d1"),
                make_location("d2"),
                make_location("l"),
                make_location("f"),
            ]
        )
        assert store.get_neighbors("hub") == ["f", "l", "d1", "d2", "f2"]

    def test_deduplicates(self, make_location):
        """A target reachable by several directions appears once."""
        store = GraphStore(
            [
                make_location("a", 0, {"forward": "b", "door": "b"}),
                make_location("b"),
            ]
        )
        assert store.get_neighbors("a") == ["b"]

    def test_unknown_id(self, corridor_store):
        """Unknown ids have no neighbors."""
        assert corridor_store.get_neighbors("nope") == []


class TestGraphStoreValidation:
    """Tests for load-time validation."""

    def test_dangling_edge_raises(self, make_location):
        """An edge to a missing location is a configuration error."""
        with pytest.raises(GraphValidationError) as exc_info:
            GraphStore([make_location("a", 0, {"forward": "ghost"})])
        assert exc_info.value.problems == ["a.forward -> unknown location 'ghost'"]

    def test_validation_can_be_skipped(self, make_location):
        """validate=False builds the store anyway and validate() reports later."""
        store = GraphStore([make_location("a", 0, {"forward": "ghost"})], validate=False)
        assert len(store.validate()) == 1

    def test_duplicate_ids_raise(self, make_location):
        """Duplicate ids are rejected even without validation."""
        with pytest.raises(GraphValidationError, match="duplicate"):
            GraphStore([make_location("a"), make_location("a")], validate=False)

    def test_validation_error_is_value_error(self, make_location):
        """Callers catching ValueError also catch validation errors."""
        with pytest.raises(ValueError):
            GraphStore([make_location("a", 0, {"door": ["b", "ghost"]}), make_location("b")])


class TestBuildingLabel:
    """Tests for building_label."""

    def test_configured_label(self, make_location):
        """Configured labels win."""
        store = GraphStore([make_location("a")], building_names={"a": "A Block"})
        assert store.building_label("a") == "A Block"

    def test_fallback_upper_case(self, make_location):
        """Unknown buildings fall back to the upper-cased id."""
        store = GraphStore([make_location("a")])
        assert store.building_label("lib") == "LIB"

    def test_none(self, corridor_store):
        """No building id gives no label."""
        assert corridor_store.building_label(None) is None
