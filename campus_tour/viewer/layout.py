"""Schematic 3D layout of the tour graph for visualization."""

import logging
from collections import deque
from typing import Sequence

import numpy as np

from campus_tour.graph.models import HORIZONTAL_DIRECTIONS, Direction, Location
from campus_tour.graph.store import GraphStore
from campus_tour.navigation.directions import angle_of

logger = logging.getLogger(__name__)

Position = tuple[float, float, float]

# Distance between neighbouring viewpoints on the schematic (arbitrary units)
STEP_LENGTH = 1.0

# Vertical gap between floors
FLOOR_HEIGHT = 3.0

# Horizontal offset between disconnected parts of the graph
COMPONENT_SPACING = 10.0


def heading_vector(angle: float) -> np.ndarray:
    """
    Unit vector on the ground plane for a compass heading.

    Heading 0 points along +y (north), 90 along +x (east).

    Example:
        >>> heading_vector(90.0).round(6)
        array([1., 0.])
    """
    radians = np.deg2rad(angle)
    return np.array([np.sin(radians), np.cos(radians)])


def compute_location_positions(store: GraphStore) -> dict[str, Position]:
    """
    Compute schematic positions for all locations.

    Panoramas carry no coordinates, so the layout places the first location
    at the origin and walks the graph breadth-first: each horizontal edge
    moves one step along its arrow angle, vertical and floor edges keep
    x/y and change only the height. Incoming edges are followed in reverse
    so locations reachable only by a one-way edge still get a position.
    Disconnected parts are laid out side by side along x.

    Args:
        store: Graph to lay out

    Returns:
        Dict mapping location id to (x, y, z)
    """
    locations = store.locations()
    if not locations:
        return {}

    # Reverse index: target id -> [(source, direction)] for horizontal edges
    incoming: dict[str, list[tuple[Location, Direction]]] = {}
    for location in locations:
        for direction in location.horizontal_directions():
            incoming.setdefault(location.target(direction), []).append((location, direction))

    positions: dict[str, Position] = {}
    component_origin = np.zeros(2)

    for seed in locations:
        if seed.id in positions:
            continue

        placed = _place_component(store, seed, component_origin, incoming, positions)
        xs = [positions[location_id][0] for location_id in placed]
        component_origin = np.array([max(xs) + COMPONENT_SPACING, 0.0])

    logger.debug(f"Laid out {len(positions)} locations")
    return positions


def _place_component(
    store: GraphStore,
    seed: Location,
    origin: np.ndarray,
    incoming: dict[str, list[tuple[Location, Direction]]],
    positions: dict[str, Position],
) -> list[str]:
    """BFS from seed, writing into positions; returns the ids placed."""
    placed: list[str] = []
    queue: deque[tuple[str, np.ndarray, float]] = deque()
    queue.append((seed.id, origin, _floor_height(seed, 0.0)))

    while queue:
        location_id, ground, height = queue.popleft()
        if location_id in positions:
            continue

        location = store.get_by_id(location_id)
        if location is None:
            continue

        positions[location_id] = (float(ground[0]), float(ground[1]), float(height))
        placed.append(location_id)

        for direction, edge in location.edges.items():
            for target_id in edge.targets:
                if target_id in positions:
                    continue
                neighbor = store.get_by_id(target_id)
                if neighbor is None:
                    continue
                if direction in HORIZONTAL_DIRECTIONS:
                    step = STEP_LENGTH * heading_vector(angle_of(location, direction))
                    queue.append((target_id, ground + step, _floor_height(neighbor, height)))
                else:
                    queue.append((target_id, ground, _floor_height(neighbor, height)))

        for source, direction in incoming.get(location_id, []):
            if source.id in positions:
                continue
            step = STEP_LENGTH * heading_vector(angle_of(source, direction))
            queue.append((source.id, ground - step, _floor_height(source, height)))

    return placed


def _floor_height(location: Location, fallback: float) -> float:
    if location.floor is None:
        return fallback
    return (location.floor - 1) * FLOOR_HEIGHT


def compute_edge_lines(
    store: GraphStore,
    positions: dict[str, Position],
) -> list[tuple[Position, Position]]:
    """
    Compute edge line segments for visualization.

    Bidirectional connections produce a single segment.

    Args:
        store: Graph providing the edges
        positions: Dict mapping location id to position

    Returns:
        List of (start_pos, end_pos) tuples
    """
    lines: list[tuple[Position, Position]] = []
    seen: set[frozenset[str]] = set()

    for location in store:
        for target_id in store.get_neighbors(location.id):
            if location.id not in positions or target_id not in positions:
                continue
            pair = frozenset((location.id, target_id))
            if pair in seen:
                continue
            seen.add(pair)
            lines.append((positions[location.id], positions[target_id]))

    return lines


def compute_route_points(
    path: Sequence[str],
    positions: dict[str, Position],
) -> np.ndarray:
    """
    Positions along a route as an Nx3 array, skipping ids without a position.

    Returns:
        Array of shape (N, 3); empty routes give shape (0, 3)
    """
    points = [positions[location_id] for location_id in path if location_id in positions]
    if not points:
        return np.empty((0, 3))
    return np.array(points, dtype=float)
