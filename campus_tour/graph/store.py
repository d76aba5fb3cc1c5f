"""Read-only, in-memory index of the tour graph."""

import logging
from typing import Iterable, Iterator, Optional

from campus_tour.graph.models import (
    FLOOR_DIRECTIONS,
    HORIZONTAL_DIRECTIONS,
    VERTICAL_DIRECTIONS,
    Hub,
    Location,
)

logger = logging.getLogger(__name__)


class GraphValidationError(ValueError):
    """Raised when static graph data references locations that do not exist."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        summary = "; ".join(problems[:5])
        if len(problems) > 5:
            summary += f"; ... ({len(problems) - 5} more)"
        super().__init__(f"Invalid tour graph: {summary}")


class GraphStore:
    """
    Immutable collection of locations and hubs keyed by id.

    The store is populated once and never mutated afterwards, so concurrent
    reads are always safe.
    """

    def __init__(
        self,
        locations: Iterable[Location],
        building_names: Optional[dict[str, str]] = None,
        validate: bool = True,
    ) -> None:
        """
        Build the index and (by default) validate every edge.

        Args:
            locations: Locations and hubs making up the tour
            building_names: Optional building_id -> display label mapping
            validate: Check that every edge target exists

        Raises:
            GraphValidationError: On duplicate ids, or dangling edges when
                validate is True
        """
        self._locations: dict[str, Location] = {}
        duplicates: list[str] = []
        for location in locations:
            if location.id in self._locations:
                duplicates.append(f"duplicate location id '{location.id}'")
                continue
            self._locations[location.id] = location

        if duplicates:
            raise GraphValidationError(duplicates)

        self._building_names: dict[str, str] = dict(building_names or {})

        if validate:
            problems = self.validate()
            if problems:
                raise GraphValidationError(problems)

        logger.info(
            f"Graph store ready: {len(self._locations)} locations "
            f"({len(self.hubs())} hubs)"
        )

    def __len__(self) -> int:
        return len(self._locations)

    def __contains__(self, location_id: object) -> bool:
        return location_id in self._locations

    def __iter__(self) -> Iterator[Location]:
        return iter(self._locations.values())

    def get_by_id(self, location_id: str) -> Optional[Location]:
        """Return the location with this id, or None if it is not in the graph."""
        return self._locations.get(location_id)

    def get_neighbors(self, location_id: str) -> list[str]:
        """
        Flatten every edge of a location into a deduplicated neighbor list.

        Direction semantics are ignored: for path finding every edge is
        traversable. Order is stable: horizontal directions in enum order,
        then vertical/special targets in declared order, then floor
        selections.

        Args:
            location_id: Location to expand

        Returns:
            Neighbor ids, or an empty list for unknown ids
        """
        location = self._locations.get(location_id)
        if location is None:
            return []

        neighbors: list[str] = []
        seen: set[str] = set()
        for family in (HORIZONTAL_DIRECTIONS, VERTICAL_DIRECTIONS, FLOOR_DIRECTIONS):
            for direction in family:
                edge = location.edge(direction)
                if edge is None:
                    continue
                for target in edge.targets:
                    if target not in seen:
                        seen.add(target)
                        neighbors.append(target)
        return neighbors

    def locations(self) -> list[Location]:
        return list(self._locations.values())

    def hubs(self) -> list[Hub]:
        return [loc for loc in self._locations.values() if isinstance(loc, Hub)]

    @property
    def building_names(self) -> dict[str, str]:
        return dict(self._building_names)

    def building_label(self, building_id: Optional[str]) -> Optional[str]:
        """Display label for a building, falling back to the upper-cased id."""
        if not building_id:
            return None
        return self._building_names.get(building_id, building_id.upper())

    def validate(self) -> list[str]:
        """
        Walk every edge and hotspot destination and report dangling targets.

        Returns:
            Human-readable problem descriptions (empty when the graph is valid)
        """
        problems: list[str] = []
        for location in self._locations.values():
            for direction, edge in location.edges.items():
                for target in edge.targets:
                    if target not in self._locations:
                        problems.append(
                            f"{location.id}.{direction.value} -> unknown location '{target}'"
                        )
            for hotspot in location.hotspots:
                if hotspot.destination and hotspot.destination not in self._locations:
                    problems.append(
                        f"{location.id} hotspot -> unknown location '{hotspot.destination}'"
                    )

        for problem in problems:
            logger.warning(f"Graph validation: {problem}")
        return problems
