"""Load the tour graph from a static JSON content file."""

import json
import logging
import os
import re
from typing import Any, Optional

from campus_tour.graph.models import (
    VERTICAL_DIRECTIONS,
    BuildingContext,
    Direction,
    Edge,
    FloorHotspot,
    Hub,
    Location,
    MultiEdge,
    NavigationHotspot,
    NearbyRoom,
    Position3D,
    SingleEdge,
    floor_direction,
)
from campus_tour.graph.store import GraphStore

logger = logging.getLogger(__name__)

FLOOR_TOKEN_PATTERN = re.compile(r"^f(\d+)$", re.IGNORECASE)


def derive_building_and_floor(location_id: str) -> tuple[Optional[str], Optional[int]]:
    """
    Derive building and floor from the "<building>-f<floor>-..." id convention.

    Only used at load time for content that does not carry explicit
    buildingId/floor fields.

    Args:
        location_id: Location id (e.g. "a-f1-north-3")

    Returns:
        (building_id, floor). Floor is None when the second token is not of
        the form "f<n>" (e.g. "w-gym-entry").

    Example:
        >>> derive_building_and_floor("x-f2-mid-7")
        ("x", 2)
        >>> derive_building_and_floor("w-gym-entry")
        ("w", None)
    """
    tokens = location_id.split("-")
    building_id = tokens[0] or None
    floor = None
    if len(tokens) > 1:
        match = FLOOR_TOKEN_PATTERN.match(tokens[1])
        if match:
            floor = int(match.group(1))
    return building_id, floor


def load_graph(path: str, validate: bool = True) -> GraphStore:
    """
    Load a tour graph from disk.

    Args:
        path: Path to the JSON content file
        validate: Check every edge target at load time

    Returns:
        GraphStore holding all locations and hubs

    Raises:
        FileNotFoundError: If the content file doesn't exist
        ValueError: If the file cannot be parsed or has malformed entries
        GraphValidationError: If an edge points to an unknown location
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Tour data file not found: {path}")

    with open(path, "r", encoding="utf-8") as data_file:
        try:
            data = json.load(data_file)
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse tour data file: {e}") from e

    store = build_graph(data, validate=validate)
    logger.info(f"Loaded tour graph from {path}: {len(store)} locations")
    return store


def build_graph(data: dict[str, Any], validate: bool = True) -> GraphStore:
    """
    Build a GraphStore from already-decoded content.

    Args:
        data: Mapping with "locations", optional "hubs" and "buildings"
        validate: Check every edge target

    Returns:
        GraphStore holding all locations and hubs

    Raises:
        ValueError: If an entry is malformed
    """
    if not isinstance(data, dict):
        raise ValueError("Tour data must be a JSON object")

    locations: list[Location] = []
    for raw in data.get("locations", []):
        locations.append(_parse_location(raw))
    for raw in data.get("hubs", []):
        locations.append(_parse_hub(raw))

    buildings = data.get("buildings", {})
    if not isinstance(buildings, dict):
        raise ValueError("'buildings' must map building ids to labels")

    return GraphStore(locations, building_names=buildings, validate=validate)


def _parse_location(raw: dict[str, Any]) -> Location:
    """Parse one location entry."""
    location_id = _require_str(raw, "id")
    try:
        return _build_location(raw, location_id)
    except KeyError as e:
        raise ValueError(f"Location {location_id}: missing field {e}") from e


def _build_location(raw: dict[str, Any], location_id: str) -> Location:
    building_id, floor = _building_and_floor(raw, location_id)

    edges: dict[Direction, Edge] = {}
    for name, value in _require_mapping(raw.get("edges"), "edges", location_id).items():
        direction = _parse_direction(name, location_id)
        edges[direction] = _parse_edge(value, direction, location_id)

    context = None
    if "wing" in raw or "facilities" in raw:
        context = BuildingContext(
            wing=raw.get("wing"),
            facilities=tuple(raw.get("facilities") or ()),
        )

    nearby_rooms = tuple(
        NearbyRoom(room_number=str(room["roomNumber"]), room_type=room.get("roomType", "facility"))
        for room in (
            _require_mapping(entry, "nearbyRooms entry", location_id)
            for entry in raw.get("nearbyRooms") or ()
        )
    )

    hotspots = tuple(
        NavigationHotspot(
            direction=_parse_direction(spot["direction"], location_id),
            position=_parse_position(spot.get("position"), location_id),
            destination=spot.get("destination"),
        )
        for spot in (
            _require_mapping(entry, "hotspots entry", location_id)
            for entry in raw.get("hotspots") or ()
        )
    )

    return Location(
        id=location_id,
        image_url=_require_str(raw, "imageUrl"),
        base_heading=_parse_heading(raw.get("baseHeading", 0), location_id),
        edges=edges,
        building_id=building_id,
        floor=floor,
        context=context,
        nearby_rooms=nearby_rooms,
        hotspots=hotspots,
    )


def _parse_hub(raw: dict[str, Any]) -> Hub:
    """Parse one elevator hub entry."""
    hub_id = _require_str(raw, "id")
    building_id, floor = _building_and_floor(raw, hub_id)

    edges: dict[Direction, Edge] = {}
    for floor_key, target in _require_mapping(raw.get("floorConnections"), "floorConnections", hub_id).items():
        number = _parse_floor_key(floor_key, hub_id)
        if not isinstance(target, str) or not target:
            raise ValueError(f"Hub {hub_id}: floor {number} must map to a location id")
        edges[floor_direction(number)] = SingleEdge(target)

    try:
        floor_hotspots = tuple(
            FloorHotspot(
                floor=int(spot["floor"]),
                position=_parse_position(spot.get("position"), hub_id),
            )
            for spot in raw.get("hotspots") or ()
        )
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise ValueError(f"Hub {hub_id}: invalid floor hotspot ({e})") from e

    return Hub(
        id=hub_id,
        image_url=_require_str(raw, "imageUrl"),
        base_heading=_parse_heading(raw.get("baseHeading", 0), hub_id),
        edges=edges,
        building_id=building_id,
        floor=floor,
        name=raw.get("name", ""),
        floor_hotspots=floor_hotspots,
    )


def _building_and_floor(raw: dict[str, Any], location_id: str) -> tuple[Optional[str], Optional[int]]:
    derived_building, derived_floor = derive_building_and_floor(location_id)
    building_id = raw.get("buildingId", derived_building)
    floor = raw.get("floor", derived_floor)
    if floor is not None and not isinstance(floor, int):
        raise ValueError(f"Location {location_id}: floor must be an integer")
    return building_id, floor


def _parse_edge(value: Any, direction: Direction, location_id: str) -> Edge:
    if isinstance(value, str) and value:
        return SingleEdge(value)
    if isinstance(value, list) and value and all(isinstance(v, str) and v for v in value):
        if direction not in VERTICAL_DIRECTIONS:
            raise ValueError(
                f"Location {location_id}: direction '{direction.value}' must map to a single id"
            )
        # A one-element list is still a single destination
        if len(value) == 1:
            return SingleEdge(value[0])
        return MultiEdge(tuple(value))
    raise ValueError(f"Location {location_id}: invalid edge for '{direction.value}': {value!r}")


def _parse_direction(name: Any, location_id: str) -> Direction:
    if not isinstance(name, str):
        raise ValueError(f"Location {location_id}: direction name must be a string")
    try:
        return Direction.parse(name)
    except ValueError as e:
        raise ValueError(f"Location {location_id}: {e}") from e


def _parse_floor_key(key: Any, hub_id: str) -> int:
    text = str(key).lower().removeprefix("floor")
    try:
        return int(text)
    except ValueError:
        raise ValueError(f"Hub {hub_id}: invalid floor key {key!r}") from None


def _parse_heading(value: Any, location_id: str) -> float:
    try:
        return float(value) % 360.0
    except (TypeError, ValueError):
        raise ValueError(f"Location {location_id}: baseHeading must be a number") from None


def _parse_position(value: Any, location_id: str) -> Position3D:
    if not isinstance(value, dict):
        raise ValueError(f"Location {location_id}: hotspot position must be an object")
    try:
        return Position3D(x=float(value["x"]), y=float(value["y"]), z=float(value["z"]))
    except (KeyError, TypeError, ValueError):
        raise ValueError(f"Location {location_id}: hotspot position needs numeric x, y, z") from None


def _require_mapping(value: Any, field: str, location_id: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"Location {location_id}: {field} must be an object, got {type(value).__name__}")
    return value


def _require_str(raw: Any, key: str) -> str:
    if not isinstance(raw, dict):
        raise ValueError(f"Expected an object, got {type(raw).__name__}")
    value = raw.get(key)
    if not isinstance(value, str) or not value:
        raise ValueError(f"Missing or empty '{key}' in entry {raw.get('id', '<unknown>')!r}")
    return value
