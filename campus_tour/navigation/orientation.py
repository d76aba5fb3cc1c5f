"""
Orientation continuity: which heading the camera adopts after a transition.

Source and destination panoramas use unrelated local frames, so the arrival
heading is resolved by a fixed sequence of strategies, committing to the
first one that produces an answer:

1. Reverse connection: find the destination arrow pointing back at the
   source, turn around from it and pick the closest arrow compatible with
   the user's movement sense. Same-corridor glides with an exact primary
   match short-circuit to preserved orientation instead.
2. Direct family matching: face the destination's forward (or back) family
   arrow.
3. Preserved relative orientation: keep the user's offset from the forward
   axis (same-corridor moves and pure left/right turns).
4. Terminal fallback: the destination base heading, reversed for backward
   moves.
"""

import logging
from enum import Enum
from typing import Optional

from campus_tour.graph.models import (
    BACK_FAMILY,
    FORWARD_FAMILY,
    HORIZONTAL_DIRECTIONS,
    Direction,
    Location,
)
from campus_tour.graph.store import GraphStore
from campus_tour.navigation.directions import (
    MovementSense,
    angle_of,
    angular_difference,
    closest_direction,
    directions_compatible_with,
    find_direction_to,
    normalize_heading,
    normalize_relative,
)
from campus_tour.navigation.overrides import ANGLE_OVERRIDES, AngleOverrideTable

logger = logging.getLogger(__name__)

# Opposite arrows of a straight corridor may deviate this much from 180 degrees
CORRIDOR_ANGLE_TOLERANCE = 15.0

# A heading this close to an arrow counts as "looking along" that arrow
ARROW_MATCH_TOLERANCE = 15.0

# Headings closer than this to the forward axis are forward-facing
HEMISPHERE_LIMIT = 90.0

# Probe order used when matching the heading against a node's own arrows
_SENSE_PROBE_ORDER: tuple[Direction, ...] = (
    Direction.FORWARD,
    Direction.FORWARD_LEFT,
    Direction.FORWARD_RIGHT,
    Direction.BACK,
    Direction.BACK_LEFT,
    Direction.BACK_RIGHT,
    Direction.LEFT,
    Direction.RIGHT,
)


class NavigationType(str, Enum):
    """Classification of a transition, driving which strategies apply."""

    SAME_CORRIDOR = "same-corridor"
    SAME_BUILDING_CORNER = "same-building-corner"
    CROSS_BUILDING = "cross-building"
    TURN = "turn"


def movement_family(direction: Direction) -> Optional[MovementSense]:
    """Forward for forward-family directions, backward for back-family, else None."""
    if direction in FORWARD_FAMILY:
        return MovementSense.FORWARD
    if direction in BACK_FAMILY:
        return MovementSense.BACKWARD
    return None


def is_pure_turn(direction: Direction) -> bool:
    return direction in (Direction.LEFT, Direction.RIGHT)


def same_building(first: Location, second: Location) -> bool:
    """True when both locations share building and floor."""
    return (first.building_id, first.floor) == (second.building_id, second.floor)


def classify_navigation(
    source: Location,
    destination: Location,
    direction: Direction,
    overrides: AngleOverrideTable = ANGLE_OVERRIDES,
) -> NavigationType:
    """
    Classify a transition from source to destination along direction.

    Args:
        source: Location being left
        destination: Location being entered
        direction: Direction used on the source
        overrides: Manual angle table

    Returns:
        TURN for left/right and vertical moves, CROSS_BUILDING when building
        or floor differ, SAME_BUILDING_CORNER when the connection is not
        bidirectional along the primary axis or its arrows are not opposite,
        SAME_CORRIDOR otherwise.
    """
    sense = movement_family(direction)
    if sense is None:
        return NavigationType.TURN

    if not same_building(source, destination):
        return NavigationType.CROSS_BUILDING

    opposite = Direction.BACK if sense is MovementSense.FORWARD else Direction.FORWARD
    if source.target(direction) != destination.id or destination.target(opposite) != source.id:
        return NavigationType.SAME_BUILDING_CORNER

    outgoing = angle_of(source, direction, overrides)
    incoming = angle_of(destination, opposite, overrides)
    if abs(angular_difference(outgoing, incoming) - 180.0) > CORRIDOR_ANGLE_TOLERANCE:
        return NavigationType.SAME_BUILDING_CORNER

    return NavigationType.SAME_CORRIDOR


def preserved_heading(
    current_heading: float,
    source: Location,
    destination: Location,
    overrides: AngleOverrideTable = ANGLE_OVERRIDES,
) -> Optional[float]:
    """
    Carry the heading's offset from the source forward axis over to the destination.

    Returns:
        The new heading in [0, 360), or None if either location has no
        forward arrow.
    """
    if not source.has_edge(Direction.FORWARD) or not destination.has_edge(Direction.FORWARD):
        return None

    relative = normalize_relative(current_heading - angle_of(source, Direction.FORWARD, overrides))
    return normalize_heading(angle_of(destination, Direction.FORWARD, overrides) + relative)


class OrientationResolver:
    """Computes arrival headings; needs the store only to inspect neighbors."""

    def __init__(
        self,
        store: GraphStore,
        overrides: AngleOverrideTable = ANGLE_OVERRIDES,
    ) -> None:
        self.store = store
        self.overrides = overrides

    def classify(
        self,
        source: Location,
        destination: Location,
        direction: Direction,
    ) -> NavigationType:
        return classify_navigation(source, destination, direction, self.overrides)

    def infer_movement_sense(self, heading: float, location: Location) -> MovementSense:
        """
        Infer whether the user faces along or against a location's forward axis.

        First checks whether the heading lines up with one of the location's
        arrows. A forward-family arrow means forward, a back-family arrow
        means backward. For a left/right arrow, the neighbor's reverse
        connection decides: if the neighbor points back with a forward-family
        arrow the user was walking backward, with a back-family arrow forward.

        Otherwise falls back to the hemisphere rule against the forward
        reference (forward arrow, else back arrow + 180, else base heading).

        Args:
            heading: Current camera heading in degrees
            location: Location the user stands on

        Returns:
            MovementSense.FORWARD or MovementSense.BACKWARD
        """
        for direction in _SENSE_PROBE_ORDER:
            if not location.has_edge(direction):
                continue
            arrow = angle_of(location, direction, self.overrides)
            if angular_difference(heading, arrow) >= ARROW_MATCH_TOLERANCE:
                continue

            sense = movement_family(direction)
            if sense is not None:
                logger.debug(f"{location.id}: heading {heading:.1f} matches {direction.value} -> {sense.value}")
                return sense

            neighbor = self.store.get_by_id(location.target(direction))
            if neighbor is None:
                continue
            reverse = find_direction_to(neighbor, location.id, HORIZONTAL_DIRECTIONS)
            if reverse in FORWARD_FAMILY:
                return MovementSense.BACKWARD
            if reverse in BACK_FAMILY:
                return MovementSense.FORWARD

        if location.has_edge(Direction.FORWARD):
            forward_reference = angle_of(location, Direction.FORWARD, self.overrides)
        elif location.has_edge(Direction.BACK):
            forward_reference = normalize_heading(
                angle_of(location, Direction.BACK, self.overrides) + 180.0
            )
        else:
            forward_reference = location.base_heading

        diff = angular_difference(heading, forward_reference)
        sense = MovementSense.FORWARD if diff < HEMISPHERE_LIMIT else MovementSense.BACKWARD
        logger.debug(
            f"{location.id}: heading {heading:.1f}, forward ref {forward_reference:.1f}, "
            f"diff {diff:.1f} -> {sense.value}"
        )
        return sense

    def resolve(
        self,
        current_heading: float,
        source: Location,
        destination: Location,
        direction: Direction,
        navigation_type: Optional[NavigationType] = None,
    ) -> float:
        """
        Compute the heading the camera should adopt on arrival.

        Args:
            current_heading: Camera heading on the source, in degrees
            source: Location being left
            destination: Location being entered
            direction: Direction used on the source
            navigation_type: Precomputed classification; derived when None

        Returns:
            New absolute heading in [0, 360)
        """
        if navigation_type is None:
            navigation_type = self.classify(source, destination, direction)

        logger.debug(
            f"Resolving {source.id} -({direction.value})-> {destination.id}: "
            f"heading {current_heading:.1f}, type {navigation_type.value}"
        )

        family = movement_family(direction)
        pure_turn = is_pure_turn(direction)
        if family is not None:
            sense: Optional[MovementSense] = family
        elif pure_turn:
            sense = self.infer_movement_sense(current_heading, source)
        else:
            sense = None

        heading = self._from_reverse_connection(
            current_heading, source, destination, family, sense, navigation_type
        )
        if heading is not None:
            return heading

        heading = self._from_direction_family(destination, family)
        if heading is not None:
            logger.debug(f"  direct family match -> {heading:.1f}")
            return heading

        if navigation_type is NavigationType.SAME_CORRIDOR or pure_turn:
            heading = preserved_heading(current_heading, source, destination, self.overrides)
            if heading is not None:
                logger.debug(f"  preserved orientation -> {heading:.1f}")
                return heading

        heading = destination.base_heading
        if family is MovementSense.BACKWARD:
            heading += 180.0
        heading = normalize_heading(heading)
        logger.debug(f"  fallback -> {heading:.1f}")
        return heading

    def _from_reverse_connection(
        self,
        current_heading: float,
        source: Location,
        destination: Location,
        family: Optional[MovementSense],
        sense: Optional[MovementSense],
        navigation_type: NavigationType,
    ) -> Optional[float]:
        """Strategy 1: continue away from the arrow that points back at the source."""
        reverse = find_direction_to(destination, source.id, HORIZONTAL_DIRECTIONS)
        if reverse is None:
            return None

        continuation = normalize_heading(angle_of(destination, reverse, self.overrides) + 180.0)
        logger.debug(f"  reverse connection {reverse.value}, continuation {continuation:.1f}")

        if navigation_type is NavigationType.SAME_CORRIDOR and self._has_exact_primary(destination, family):
            heading = preserved_heading(current_heading, source, destination, self.overrides)
            if heading is not None:
                logger.debug(f"  same-corridor glide -> {heading:.1f}")
                return heading

        if sense is None:
            return None

        match = closest_direction(
            destination, continuation, directions_compatible_with(sense), self.overrides
        )
        if match is None:
            return None

        heading = angle_of(destination, match, self.overrides)
        logger.debug(f"  closest {sense.value}-compatible arrow {match.value} -> {heading:.1f}")
        return heading

    def _from_direction_family(
        self,
        destination: Location,
        family: Optional[MovementSense],
    ) -> Optional[float]:
        """Strategy 2: face the destination's own forward (or back) family arrow."""
        if family is None:
            return None
        candidates = FORWARD_FAMILY if family is MovementSense.FORWARD else BACK_FAMILY
        for direction in candidates:
            if destination.has_edge(direction):
                return angle_of(destination, direction, self.overrides)
        return None

    @staticmethod
    def _has_exact_primary(destination: Location, family: Optional[MovementSense]) -> bool:
        if family is MovementSense.FORWARD:
            return destination.has_edge(Direction.FORWARD)
        if family is MovementSense.BACKWARD:
            return destination.has_edge(Direction.BACK)
        return False
