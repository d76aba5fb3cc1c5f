"""Explicit arrow angles for viewpoints whose geometry breaks the offset model."""

from dataclasses import dataclass
from typing import Iterable, Optional

from campus_tour.graph.models import Direction


@dataclass(frozen=True)
class AngleOverride:
    """Fixed absolute angle for one (location, direction) arrow."""

    location_id: str
    direction: Direction
    angle: float


class AngleOverrideTable:
    """Lookup of manual arrow angles keyed by (location_id, direction)."""

    def __init__(self, overrides: Iterable[AngleOverride] = ()) -> None:
        self._angles: dict[tuple[str, Direction], float] = {}
        for override in overrides:
            self._angles[(override.location_id, override.direction)] = override.angle % 360.0

    def __len__(self) -> int:
        return len(self._angles)

    def lookup(self, location_id: str, direction: Direction) -> Optional[float]:
        """Return the override angle, or None when the arrow follows the offset model."""
        return self._angles.get((location_id, direction))


# Keep this list short: every entry is a viewpoint drawn at an unusual angle
ANGLE_OVERRIDES = AngleOverrideTable(
    [
        AngleOverride("w-f1-main-entrance", Direction.FORWARD_LEFT, 155.0),
        AngleOverride("w-f1-main-2", Direction.DOOR, 330.0),
        AngleOverride("w-f1-main-3", Direction.DOOR, 330.0),
        AngleOverride("w-gym-entry", Direction.DOOR, 150.0),
        AngleOverride("w-gym-entry", Direction.FORWARD, 220.0),
    ]
)

NO_OVERRIDES = AngleOverrideTable()
