"""Data model for the panoramic tour graph: directions, edges, locations, hubs."""

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Union


class Direction(str, Enum):
    """
    Named connection from one panorama to another.

    Declaration order matters: it is the tie-break order for angle searches
    and the enumeration order for neighbors and reverse lookups.
    """

    FORWARD = "forward"
    FORWARD_RIGHT = "forward_right"
    RIGHT = "right"
    BACK_RIGHT = "back_right"
    BACK = "back"
    BACK_LEFT = "back_left"
    LEFT = "left"
    FORWARD_LEFT = "forward_left"
    UP = "up"
    DOWN = "down"
    ELEVATOR = "elevator"
    DOOR = "door"
    FLOOR_1 = "floor1"
    FLOOR_2 = "floor2"
    FLOOR_3 = "floor3"
    FLOOR_4 = "floor4"

    @classmethod
    def parse(cls, name: str) -> "Direction":
        """
        Parse a direction name written in any of the accepted spellings.

        Accepts snake_case ("forward_right"), hyphenated ("forward-right")
        and camelCase ("forwardRight") names.

        Args:
            name: Direction name as found in content files or UI input

        Returns:
            The matching Direction

        Raises:
            ValueError: If the name does not match any direction
        """
        normalized = re.sub(r"(?<=[a-z])([A-Z])", r"_\1", name.strip())
        normalized = normalized.replace("-", "_").lower()
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown direction: {name!r}") from None


HORIZONTAL_DIRECTIONS: tuple[Direction, ...] = (
    Direction.FORWARD,
    Direction.FORWARD_RIGHT,
    Direction.RIGHT,
    Direction.BACK_RIGHT,
    Direction.BACK,
    Direction.BACK_LEFT,
    Direction.LEFT,
    Direction.FORWARD_LEFT,
)

VERTICAL_DIRECTIONS: tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.ELEVATOR,
    Direction.DOOR,
)

FLOOR_DIRECTIONS: tuple[Direction, ...] = (
    Direction.FLOOR_1,
    Direction.FLOOR_2,
    Direction.FLOOR_3,
    Direction.FLOOR_4,
)

FORWARD_FAMILY: tuple[Direction, ...] = (
    Direction.FORWARD,
    Direction.FORWARD_LEFT,
    Direction.FORWARD_RIGHT,
)

BACK_FAMILY: tuple[Direction, ...] = (
    Direction.BACK,
    Direction.BACK_LEFT,
    Direction.BACK_RIGHT,
)

# Arrow offsets (degrees) relative to a location's base heading
DIRECTION_OFFSETS: dict[Direction, float] = {
    Direction.FORWARD: 0.0,
    Direction.FORWARD_RIGHT: 45.0,
    Direction.RIGHT: 90.0,
    Direction.BACK_RIGHT: 135.0,
    Direction.BACK: 180.0,
    Direction.BACK_LEFT: 225.0,
    Direction.LEFT: 270.0,
    Direction.FORWARD_LEFT: 315.0,
}


def floor_direction(floor: int) -> Direction:
    """Return the floor-selection direction for a floor number (1-4)."""
    try:
        return Direction(f"floor{floor}")
    except ValueError:
        raise ValueError(f"Unsupported floor number: {floor}") from None


def floor_number(direction: Direction) -> Optional[int]:
    """Return the floor number of a floor-selection direction, else None."""
    if direction not in FLOOR_DIRECTIONS:
        return None
    return int(direction.value.removeprefix("floor"))


@dataclass(frozen=True)
class SingleEdge:
    """Edge leading to exactly one location."""

    target: str

    @property
    def targets(self) -> tuple[str, ...]:
        return (self.target,)

    @property
    def first(self) -> str:
        return self.target


@dataclass(frozen=True)
class MultiEdge:
    """Edge offering several destinations (e.g. two doors), in declared order."""

    targets: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.targets:
            raise ValueError("MultiEdge requires at least one target")
        # Accept any iterable from callers but store a tuple
        object.__setattr__(self, "targets", tuple(self.targets))

    @property
    def first(self) -> str:
        return self.targets[0]


Edge = Union[SingleEdge, MultiEdge]


@dataclass(frozen=True)
class Position3D:
    """Cartesian point on the panorama sphere."""

    x: float
    y: float
    z: float


@dataclass(frozen=True)
class BuildingContext:
    """Wing and visible facilities for a single viewpoint."""

    wing: Optional[str] = None
    facilities: tuple[str, ...] = ()


@dataclass(frozen=True)
class NearbyRoom:
    """Room visible or reachable from a viewpoint."""

    room_number: str
    room_type: str


@dataclass(frozen=True)
class NavigationHotspot:
    """Clickable vertical/special navigation area drawn inside a panorama."""

    direction: Direction
    position: Position3D
    destination: Optional[str] = None


@dataclass(frozen=True)
class FloorHotspot:
    """Floor-selection button inside an elevator panorama."""

    floor: int
    position: Position3D


@dataclass(frozen=True)
class Location:
    """
    A single panoramic viewpoint in the tour graph.

    Attributes:
        id: Stable unique key (e.g. "a-f1-north-1")
        image_url: Opaque panorama reference resolved by the asset layer
        base_heading: Heading (degrees) that the photo's local zero maps to
        edges: Read-only Direction -> Edge mapping. Horizontal and floor directions hold
            a SingleEdge; vertical/special directions may hold a MultiEdge.
        building_id: Building key (e.g. "a", "library")
        floor: Floor number, or None for spaces outside the floor scheme
        context: Optional wing/facilities metadata
        nearby_rooms: Rooms visible from this viewpoint
        hotspots: Clickable vertical/special areas
    """

    id: str
    image_url: str
    base_heading: float = 0.0
    edges: Mapping[Direction, Edge] = field(default_factory=dict, hash=False)
    building_id: Optional[str] = None
    floor: Optional[int] = None
    context: Optional[BuildingContext] = None
    nearby_rooms: tuple[NearbyRoom, ...] = ()
    hotspots: tuple[NavigationHotspot, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "edges", MappingProxyType(dict(self.edges)))
        for direction, edge in self.edges.items():
            if direction in VERTICAL_DIRECTIONS:
                continue
            if not isinstance(edge, SingleEdge):
                raise ValueError(
                    f"Location {self.id}: direction '{direction.value}' must map to a single target"
                )

    def edge(self, direction: Direction) -> Optional[Edge]:
        return self.edges.get(direction)

    def has_edge(self, direction: Direction) -> bool:
        return direction in self.edges

    def target(self, direction: Direction) -> Optional[str]:
        """Return the (first) target id for a direction, or None if absent."""
        edge = self.edges.get(direction)
        return edge.first if edge is not None else None

    def horizontal_directions(self) -> list[Direction]:
        """Horizontal directions present on this location, in enum order."""
        return [d for d in HORIZONTAL_DIRECTIONS if d in self.edges]

    @property
    def wing(self) -> Optional[str]:
        return self.context.wing if self.context else None


@dataclass(frozen=True)
class Hub(Location):
    """Elevator interior: a location whose exits are floor selections."""

    name: str = ""
    floor_hotspots: tuple[FloorHotspot, ...] = ()

    @property
    def floor_connections(self) -> dict[int, str]:
        """Floor number -> destination location id."""
        connections: dict[int, str] = {}
        for direction in FLOOR_DIRECTIONS:
            target = self.target(direction)
            if target is not None:
                connections[floor_number(direction)] = target
        return connections
