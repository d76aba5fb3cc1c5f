"""Shortest-hop routes between tour locations, plus route summaries."""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Optional

from campus_tour.graph.models import Location
from campus_tour.graph.store import GraphStore

logger = logging.getLogger(__name__)

DEFAULT_SECONDS_PER_HOP = 0.8


@dataclass(frozen=True)
class PathResult:
    """
    Ordered route from origin to destination (both inclusive).

    Attributes:
        path: Location ids from start_id to end_id
        distance: Number of hops (len(path) - 1)
        start_id: Requested origin
        end_id: Requested destination
    """

    path: tuple[str, ...]
    distance: int
    start_id: str
    end_id: str


@dataclass(frozen=True)
class TravelEstimate:
    """Estimated walking time for a route."""

    seconds: float
    formatted: str


def find_path(store: GraphStore, start_id: str, end_id: str) -> Optional[PathResult]:
    """
    Find the shortest hop sequence between two locations.

    Breadth-first search over GraphStore.get_neighbors. Neighbor order is
    stable, so the returned path is deterministic even when several
    shortest paths exist.

    Args:
        store: Graph to search
        start_id: Origin location id
        end_id: Destination location id

    Returns:
        PathResult, or None when an endpoint is unknown or the destination
        is unreachable. start_id == end_id yields a one-element path.
    """
    if start_id == end_id:
        if start_id not in store:
            return None
        return PathResult(path=(start_id,), distance=0, start_id=start_id, end_id=end_id)

    if start_id not in store or end_id not in store:
        logger.debug(f"find_path: unknown endpoint ({start_id} -> {end_id})")
        return None

    queue: deque[str] = deque([start_id])
    visited: set[str] = {start_id}
    parent: dict[str, str] = {}

    while queue:
        current_id = queue.popleft()

        if current_id == end_id:
            path = _reconstruct_path(parent, start_id, end_id)
            logger.debug(f"find_path: {start_id} -> {end_id} in {len(path) - 1} hops")
            return PathResult(
                path=tuple(path),
                distance=len(path) - 1,
                start_id=start_id,
                end_id=end_id,
            )

        for neighbor_id in store.get_neighbors(current_id):
            if neighbor_id in visited:
                continue
            visited.add(neighbor_id)
            parent[neighbor_id] = current_id
            queue.append(neighbor_id)

    logger.debug(f"find_path: no route from {start_id} to {end_id}")
    return None


def _reconstruct_path(parent: dict[str, str], start_id: str, end_id: str) -> list[str]:
    """Walk parent pointers back from end_id to start_id."""
    path = [end_id]
    current = end_id
    while current != start_id:
        current = parent[current]
        path.append(current)
    path.reverse()
    return path


def format_location_label(store: GraphStore, location_id: str) -> str:
    """
    Coarse human-readable label for a location: building, floor and wing.

    Example:
        "A Block F1 (north)" for a north-wing location on A Block floor 1.
        Falls back to the raw id when no building is known.
    """
    location: Optional[Location] = store.get_by_id(location_id)
    if location is None:
        return location_id

    parts = [store.building_label(location.building_id)]
    if location.floor is not None:
        parts.append(f"F{location.floor}")
    base_label = " ".join(part for part in parts if part)

    if not base_label:
        return location.id
    if location.wing:
        return f"{base_label} ({location.wing})"
    return base_label


def get_route_description(store: GraphStore, result: PathResult) -> str:
    """
    One-sentence summary of a route for UI or chat output.

    Args:
        store: Graph providing building labels and wing metadata
        result: Route produced by find_path

    Returns:
        "You are already at ..." for zero-hop routes, otherwise
        "Route found: N steps from ... to ..."
    """
    start_label = format_location_label(store, result.start_id)
    end_label = format_location_label(store, result.end_id)

    if result.distance == 0:
        return f"You are already at {end_label}."

    steps_label = "1 step" if result.distance == 1 else f"{result.distance} steps"
    return f"Route found: {steps_label} from {start_label} to {end_label}."


def get_estimated_travel_time(
    result: PathResult,
    seconds_per_hop: float = DEFAULT_SECONDS_PER_HOP,
) -> TravelEstimate:
    """
    Estimate walking time as hop count times an average pace.

    Args:
        result: Route produced by find_path
        seconds_per_hop: Average seconds per navigation hop

    Returns:
        TravelEstimate with raw seconds and a label ("2.4s" or "1m 5s")
    """
    seconds = max(0.0, result.distance * seconds_per_hop)
    if seconds < 60:
        formatted = f"{seconds:.1f}s"
    else:
        total = round(seconds)
        formatted = f"{total // 60}m {total % 60}s"
    return TravelEstimate(seconds=seconds, formatted=formatted)


def validate_path(store: GraphStore, result: PathResult) -> bool:
    """
    Re-check that a route is real: endpoints match, ids exist, hops are edges.

    Intended for tests and fuzzing rather than the navigation hot path.
    """
    if not result.path:
        return False
    if result.path[0] != result.start_id or result.path[-1] != result.end_id:
        return False
    if result.distance != len(result.path) - 1:
        return False

    for location_id in result.path:
        if location_id not in store:
            return False

    for current_id, next_id in zip(result.path, result.path[1:]):
        if next_id not in store.get_neighbors(current_id):
            return False

    return True
