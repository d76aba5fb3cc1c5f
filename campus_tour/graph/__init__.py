"""Tour graph: locations, directional edges, elevator hubs."""

from campus_tour.graph.loader import build_graph, derive_building_and_floor, load_graph
from campus_tour.graph.models import (
    BACK_FAMILY,
    DIRECTION_OFFSETS,
    FLOOR_DIRECTIONS,
    FORWARD_FAMILY,
    HORIZONTAL_DIRECTIONS,
    VERTICAL_DIRECTIONS,
    Direction,
    Edge,
    Hub,
    Location,
    MultiEdge,
    SingleEdge,
)
from campus_tour.graph.store import GraphStore, GraphValidationError

__all__ = [
    "BACK_FAMILY",
    "DIRECTION_OFFSETS",
    "FLOOR_DIRECTIONS",
    "FORWARD_FAMILY",
    "HORIZONTAL_DIRECTIONS",
    "VERTICAL_DIRECTIONS",
    "Direction",
    "Edge",
    "Hub",
    "Location",
    "MultiEdge",
    "SingleEdge",
    "GraphStore",
    "GraphValidationError",
    "build_graph",
    "derive_building_and_floor",
    "load_graph",
]
