"""
Shared pytest fixtures for campus_tour tests.

This module provides reusable fixtures that are automatically discovered
by pytest. Fixtures here are available to all test files.

Educational notes for new developers:
- Fixtures are functions that provide test data or set up test state
- @pytest.fixture decorator marks a function as a fixture
- A fixture can return a factory function when tests need several
  slightly different objects (see make_location)
- Fixtures can depend on other fixtures (dependency injection)
"""

from pathlib import Path

import pytest
from unittest.mock import AsyncMock

from campus_tour.graph.loader import load_graph
from campus_tour.graph.models import Direction, Location, MultiEdge, SingleEdge
from campus_tour.graph.store import GraphStore

SAMPLE_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "sample_campus.json"


@pytest.fixture
def sample_data_path() -> Path:
    """Path to the bundled sample campus graph."""
    return SAMPLE_DATA_PATH


@pytest.fixture
def sample_store() -> GraphStore:
    """GraphStore loaded from the bundled sample campus graph."""
    return load_graph(str(SAMPLE_DATA_PATH))


@pytest.fixture
def make_location():
    """
    Factory for Location objects with terse edge declarations.

    Edge values may be a single id or a list of ids (multi-target edge).

    Example:
        def test_something(make_location):
            a = make_location("a", 0, {"forward": "b"})
            hall = make_location("hall", 90, {"door": ["x", "y"]}, building_id="lib")
    """

    def _make(
        location_id: str,
        base_heading: float = 0.0,
        edges: dict | None = None,
        building_id: str | None = "a",
        floor: int | None = 1,
        **kwargs,
    ) -> Location:
        parsed = {}
        for name, target in (edges or {}).items():
            direction = name if isinstance(name, Direction) else Direction.parse(name)
            if isinstance(target, (list, tuple)):
                parsed[direction] = MultiEdge(tuple(target))
            else:
                parsed[direction] = SingleEdge(target)
        return Location(
            id=location_id,
            image_url=f"/images/{location_id}.jpg",
            base_heading=base_heading,
            edges=parsed,
            building_id=building_id,
            floor=floor,
            **kwargs,
        )

    return _make


@pytest.fixture
def corridor_store(make_location) -> GraphStore:
    """
    Straight corridor A - B - C with a side branch D to the left of B.

    All nodes share base heading 0 except D, which faces west:

        D <-left- B -forward-> C
                  ^
                  | forward
                  A
    """
    return GraphStore(
        [
            make_location("a", 0, {"forward": "b"}),
            make_location("b", 0, {"back": "a", "forward": "c", "left": "d"}),
            make_location("c", 0, {"back": "b"}),
            make_location("d", 270, {"back": "b"}),
        ]
    )


@pytest.fixture
def corner_store(make_location) -> GraphStore:
    """
    Corridor ending in a corner node X that only turns right.

    A --forward--> X --right--> Y, with X.back -> A and Y.back -> X.
    """
    return GraphStore(
        [
            make_location("a", 0, {"forward": "x"}),
            make_location("x", 0, {"right": "y", "back": "a"}),
            make_location("y", 0, {"back": "x"}),
        ]
    )


@pytest.fixture
def mock_image_loader() -> AsyncMock:
    """Async image loader that always succeeds."""
    return AsyncMock(return_value=True)


@pytest.fixture
def mock_status_callback() -> AsyncMock:
    """
    Create a mock async callback for status updates.

    This fixture provides a callable that records all status messages
    sent during a test, useful for verifying user feedback behavior.

    Example:
        async def test_failure(mock_status_callback):
            ...
            mock_status_callback.assert_awaited_once_with("Failed to load this location")
    """
    return AsyncMock()
