"""Tests for graph data model (directions, edges, locations, hubs)."""

import pytest

from campus_tour.graph.models import (
    FLOOR_DIRECTIONS,
    Direction,
    Hub,
    Location,
    MultiEdge,
    SingleEdge,
    floor_direction,
    floor_number,
)


class TestDirectionParse:
    """Tests for Direction.parse accepting several spellings."""

    @pytest.mark.parametrize(
        "name",
        ["forward_right", "forward-right", "forwardRight", "FORWARD_RIGHT", " forwardRight "],
    )
    def test_accepts_spellings(self, name):
        """snake_case, hyphenated and camelCase all map to the same member."""
        assert Direction.parse(name) is Direction.FORWARD_RIGHT

    def test_floor_names(self):
        """floorN names parse to floor directions."""
        assert Direction.parse("floor3") is Direction.FLOOR_3

    def test_unknown_raises(self):
        """Unknown names raise ValueError."""
        with pytest.raises(ValueError, match="Unknown direction"):
            Direction.parse("sideways")


class TestFloorHelpers:
    """Tests for floor_direction and floor_number."""

    def test_floor_direction(self):
        """Floor numbers map to floor-selection directions."""
        assert floor_direction(2) is Direction.FLOOR_2

    def test_floor_direction_out_of_range(self):
        """Unsupported floors raise ValueError."""
        with pytest.raises(ValueError):
            floor_direction(9)

    def test_floor_number_round_trip(self):
        """floor_number inverts floor_direction."""
        for direction in FLOOR_DIRECTIONS:
            assert floor_direction(floor_number(direction)) is direction

    def test_floor_number_non_floor(self):
        """Non-floor directions have no floor number."""
        assert floor_number(Direction.FORWARD) is None


class TestEdges:
    """Tests for SingleEdge and MultiEdge variants."""

    def test_single_edge_targets(self):
        """SingleEdge exposes its target as a one-element tuple."""
        edge = SingleEdge("b")
        assert edge.targets == ("b",)
        assert edge.first == "b"

    def test_multi_edge_keeps_order(self):
        """MultiEdge keeps declared order and resolves first to the first entry."""
        edge = MultiEdge(["x", "y"])
        assert edge.targets == ("x", "y")
        assert edge.first == "x"

    def test_multi_edge_requires_target(self):
        """An empty MultiEdge is rejected."""
        with pytest.raises(ValueError):
            MultiEdge(())


class TestLocation:
    """Tests for Location invariants and helpers."""

    def test_horizontal_direction_requires_single_edge(self):
        """Horizontal directions cannot hold multiple targets."""
        with pytest.raises(ValueError, match="single target"):
            Location(
                id="a",
                image_url="a.jpg",
                edges={Direction.FORWARD: MultiEdge(("b", "c"))},
            )

    def test_vertical_direction_allows_multi_edge(self):
        """Doors and elevators may list several destinations."""
        location = Location(
            id="hall",
            image_url="hall.jpg",
            edges={Direction.DOOR: MultiEdge(("x", "y"))},
        )
        assert location.target(Direction.DOOR) == "x"

    def test_edges_read_only(self, make_location):
        """Edges cannot be changed after construction and locations hash."""
        source = {Direction.FORWARD: SingleEdge("b")}
        location = Location(id="a", image_url="a.jpg", edges=source)
        source[Direction.BACK] = SingleEdge("z")

        with pytest.raises(TypeError):
            location.edges[Direction.LEFT] = SingleEdge("c")
        assert location.edges == {Direction.FORWARD: SingleEdge("b")}
        assert hash(location) == hash(Location(id="a", image_url="a.jpg", edges=dict(source)))

    def test_target_missing_direction(self, make_location):
        """target() returns None for directions without an edge."""
        location = make_location("a", 0, {"forward": "b"})
        assert location.target(Direction.BACK) is None
        assert location.has_edge(Direction.FORWARD)

    def test_horizontal_directions_in_enum_order(self, make_location):
        """horizontal_directions() ignores vertical edges and follows enum order."""
        location = make_location("a", 0, {"left": "l", "elevator": "e", "forward": "f"})
        assert location.horizontal_directions() == [Direction.FORWARD, Direction.LEFT]

    def test_wing_without_context(self, make_location):
        """wing is None when no building context is attached."""
        assert make_location("a").wing is None


class TestHub:
    """Tests for Hub floor connections."""

    def test_floor_connections(self):
        """floor_connections maps floor numbers to destinations."""
        hub = Hub(
            id="a-elevator",
            image_url="elevator.jpg",
            edges={
                Direction.FLOOR_1: SingleEdge("a-f1-lobby"),
                Direction.FLOOR_3: SingleEdge("a-f3-lobby"),
            },
            name="A Block Elevator",
        )
        assert hub.floor_connections == {1: "a-f1-lobby", 3: "a-f3-lobby"}

    def test_hub_is_location(self):
        """Hubs are stored and navigated like any other location."""
        hub = Hub(id="h", image_url="h.jpg")
        assert isinstance(hub, Location)
