"""Angle math for directional arrows: absolute angles, closest arrow, reverse lookup."""

import logging
from enum import Enum
from typing import Iterable, Optional

from campus_tour.graph.models import (
    DIRECTION_OFFSETS,
    FLOOR_DIRECTIONS,
    HORIZONTAL_DIRECTIONS,
    VERTICAL_DIRECTIONS,
    Direction,
    Location,
)
from campus_tour.navigation.overrides import ANGLE_OVERRIDES, AngleOverrideTable

logger = logging.getLogger(__name__)

ALL_DIRECTIONS: tuple[Direction, ...] = HORIZONTAL_DIRECTIONS + VERTICAL_DIRECTIONS + FLOOR_DIRECTIONS


class MovementSense(str, Enum):
    """Whether the user is walking along or against a node's forward axis."""

    FORWARD = "forward"
    BACKWARD = "backward"


_COMPATIBLE_DIRECTIONS: dict[MovementSense, frozenset[Direction]] = {
    MovementSense.FORWARD: frozenset(
        {
            Direction.FORWARD,
            Direction.FORWARD_LEFT,
            Direction.FORWARD_RIGHT,
            Direction.LEFT,
            Direction.RIGHT,
        }
    ),
    MovementSense.BACKWARD: frozenset(
        {
            Direction.BACK,
            Direction.BACK_LEFT,
            Direction.BACK_RIGHT,
            Direction.LEFT,
            Direction.RIGHT,
        }
    ),
}


def normalize_heading(angle: float) -> float:
    """Wrap an angle into [0, 360)."""
    result = angle % 360.0
    # -1e-15 % 360 rounds to 360.0
    return 0.0 if result == 360.0 else result


def normalize_relative(angle: float) -> float:
    """Wrap an angle into [-180, 180]."""
    while angle > 180.0:
        angle -= 360.0
    while angle < -180.0:
        angle += 360.0
    return angle


def angular_difference(first: float, second: float) -> float:
    """
    Smallest circular distance between two headings.

    Example:
        >>> angular_difference(350, 10)
        20.0
        >>> angular_difference(90, 270)
        180.0
    """
    diff = abs(normalize_heading(first) - normalize_heading(second))
    return 360.0 - diff if diff > 180.0 else diff


def angle_of(
    location: Location,
    direction: Direction,
    overrides: AngleOverrideTable = ANGLE_OVERRIDES,
) -> float:
    """
    Absolute angle of a direction's arrow on a location.

    Args:
        location: Viewpoint carrying the base heading
        direction: Direction to resolve
        overrides: Manual angle table consulted before the offset model

    Returns:
        Angle in degrees, [0, 360). Directions without a table offset
        (vertical/special) collapse onto the base heading unless overridden.
    """
    override = overrides.lookup(location.id, direction)
    if override is not None:
        return override
    offset = DIRECTION_OFFSETS.get(direction, 0.0)
    return normalize_heading(location.base_heading + offset)


def directions_compatible_with(sense: MovementSense) -> frozenset[Direction]:
    """Horizontal directions that continue a forward or backward movement."""
    return _COMPATIBLE_DIRECTIONS[sense]


def closest_direction(
    location: Location,
    target_angle: float,
    candidates: Iterable[Direction],
    overrides: AngleOverrideTable = ANGLE_OVERRIDES,
) -> Optional[Direction]:
    """
    Pick the candidate arrow closest to a target angle.

    Only horizontal candidates actually present on the location are
    considered. Ties go to the direction declared first in the Direction
    enumeration.

    Args:
        location: Viewpoint to search
        target_angle: Desired heading in degrees
        candidates: Allowed directions
        overrides: Manual angle table

    Returns:
        The closest direction, or None if no candidate is present
    """
    allowed = set(candidates)
    best: Optional[Direction] = None
    best_diff = float("inf")

    for direction in HORIZONTAL_DIRECTIONS:
        if direction not in allowed or not location.has_edge(direction):
            continue
        diff = angular_difference(angle_of(location, direction, overrides), target_angle)
        logger.debug(f"  {location.id} {direction.value}: diff {diff:.1f} from {target_angle:.1f}")
        if diff < best_diff:
            best_diff = diff
            best = direction

    return best


def find_direction_to(
    location: Location,
    target_id: str,
    directions: Iterable[Direction] = ALL_DIRECTIONS,
) -> Optional[Direction]:
    """
    Reverse lookup: which direction on a location leads to target_id.

    Searches horizontal directions first, then vertical/special (any listed
    target matches), then floor selections.

    Args:
        location: Viewpoint whose edges are scanned
        target_id: Location id to look for
        directions: Restrict the search to these directions

    Returns:
        The first matching direction, or None
    """
    allowed = set(directions)
    for direction in ALL_DIRECTIONS:
        if direction not in allowed:
            continue
        edge = location.edge(direction)
        if edge is not None and target_id in edge.targets:
            return direction
    return None


def visible_directions(
    location: Location,
    heading: float,
    tolerance: float,
    overrides: AngleOverrideTable = ANGLE_OVERRIDES,
) -> list[Direction]:
    """Horizontal arrows lying within tolerance degrees of the current heading."""
    return [
        direction
        for direction in location.horizontal_directions()
        if angular_difference(angle_of(location, direction, overrides), heading) <= tolerance
    ]
