"""Navigation controller: the only place the tour's NavigationState changes."""

import logging
from dataclasses import dataclass, replace
from typing import Awaitable, Callable, Optional

from campus_tour.graph.models import Direction, Location
from campus_tour.graph.store import GraphStore
from campus_tour.navigation.directions import normalize_heading
from campus_tour.navigation.orientation import OrientationResolver
from campus_tour.navigation.pathfinding import (
    DEFAULT_SECONDS_PER_HOP,
    PathResult,
    TravelEstimate,
    find_path,
    get_estimated_travel_time,
    get_route_description,
)

logger = logging.getLogger(__name__)

# Resolves an image reference and reports whether it can be displayed
ImageLoader = Callable[[str], Awaitable[bool]]
StatusCallback = Callable[[str], Awaitable[None]]
StateListener = Callable[["NavigationState"], None]

LOAD_FAILED_MESSAGE = "Failed to load this location"


@dataclass(frozen=True)
class NavigationState:
    """Snapshot of where the user is and which way the camera faces."""

    current_location_id: str
    current_heading: float
    is_transitioning: bool = False


@dataclass(frozen=True)
class RoutePlan:
    """Route to a destination plus its narration, for callers that animate walks."""

    result: PathResult
    description: str
    travel_time: TravelEstimate

    @property
    def path(self) -> tuple[str, ...]:
        return self.result.path


class NavigationController:
    """
    Owns the NavigationState of one tour session.

    Transitions are serialized by the is_transitioning flag: an intent that
    arrives while another is pending is dropped (first intent wins). Every
    transition takes a request token; a preload that finishes after a newer
    request or after close() is discarded instead of committed.
    """

    def __init__(
        self,
        store: GraphStore,
        image_loader: ImageLoader,
        entry_location_id: str,
        *,
        initial_heading: Optional[float] = None,
        status_callback: Optional[StatusCallback] = None,
        resolver: Optional[OrientationResolver] = None,
        seconds_per_hop: float = DEFAULT_SECONDS_PER_HOP,
    ) -> None:
        """
        Start a session at the entry location.

        Args:
            store: Graph of locations and hubs
            image_loader: Async callable preloading an image_url
            entry_location_id: Where the session starts
            initial_heading: Starting heading; defaults to the entry's base heading
            status_callback: Async callable receiving user-facing error messages
            resolver: Orientation resolver; one bound to store is built when None
            seconds_per_hop: Pace used for route travel estimates

        Raises:
            ValueError: If entry_location_id is not in the store
        """
        entry = store.get_by_id(entry_location_id)
        if entry is None:
            raise ValueError(f"Unknown entry location: {entry_location_id}")

        self.store = store
        self.resolver = resolver or OrientationResolver(store)
        self.seconds_per_hop = seconds_per_hop
        self._image_loader = image_loader
        self._status_callback = status_callback
        self._listeners: list[StateListener] = []
        self._request_token = 0
        self._closed = False

        heading = entry.base_heading if initial_heading is None else initial_heading
        self._state = NavigationState(
            current_location_id=entry.id,
            current_heading=normalize_heading(heading),
        )
        logger.info(f"Navigation session started at {entry.id} (heading {self._state.current_heading:.1f})")

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def current_location(self) -> Location:
        # The current id always comes from the store, so the lookup cannot miss
        return self.store.get_by_id(self._state.current_location_id)

    @property
    def is_closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Register a renderer callback for every committed state change.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_heading(self, heading: float) -> None:
        """Apply a camera drag from the renderer."""
        if self._closed:
            return
        self._set_state(replace(self._state, current_heading=normalize_heading(heading)))

    async def navigate(self, direction: Direction, target_id: Optional[str] = None) -> bool:
        """
        Move along one of the current location's edges.

        The arrival heading comes from the orientation resolver. State is
        committed only after the destination image has loaded.

        Args:
            direction: Direction to follow
            target_id: For multi-target edges, which target to take. Defaults
                to the first listed target; must be one of the edge's targets.

        Returns:
            True if the move was committed. False when dropped (transition in
            flight, no such edge, unknown target) or when the image failed
            to load.
        """
        if self._closed:
            return False
        if self._state.is_transitioning:
            logger.debug(f"Ignoring navigate({direction.value}): transition in flight")
            return False

        source = self.current_location
        edge = source.edge(direction)
        if edge is None:
            logger.debug(f"{source.id} has no '{direction.value}' edge")
            return False

        if target_id is None:
            target_id = edge.first
        elif target_id not in edge.targets:
            logger.warning(f"{source.id}.{direction.value} does not lead to '{target_id}'")
            return False

        destination = self.store.get_by_id(target_id)
        if destination is None:
            logger.error(f"{source.id}.{direction.value} points to unknown location '{target_id}'")
            return False

        navigation_type = self.resolver.classify(source, destination, direction)
        heading = self.resolver.resolve(
            self._state.current_heading, source, destination, direction, navigation_type
        )
        logger.info(
            f"Navigate {source.id} -({direction.value})-> {destination.id} "
            f"[{navigation_type.value}] heading {self._state.current_heading:.1f} -> {heading:.1f}"
        )
        return await self._transition(destination, heading)

    async def jump_to(self, location_id: str) -> bool:
        """
        Teleport directly to a location, facing its base heading.

        Used for menu or search selection. No route is computed and no
        orientation continuity is attempted.

        Returns:
            True if the jump was committed
        """
        if self._closed or self._state.is_transitioning:
            return False
        if location_id == self._state.current_location_id:
            return False

        destination = self.store.get_by_id(location_id)
        if destination is None:
            logger.warning(f"Cannot jump to unknown location '{location_id}'")
            return False

        logger.info(f"Jump {self._state.current_location_id} -> {destination.id}")
        return await self._transition(destination, destination.base_heading)

    def plan_route_to(self, location_id: str) -> Optional[RoutePlan]:
        """
        Plan a walk from the current location without moving.

        Returns:
            RoutePlan, or None when the destination is unknown or unreachable
        """
        result = find_path(self.store, self._state.current_location_id, location_id)
        if result is None:
            return None
        return RoutePlan(
            result=result,
            description=get_route_description(self.store, result),
            travel_time=get_estimated_travel_time(result, self.seconds_per_hop),
        )

    def close(self) -> None:
        """End the session. Pending preloads will not commit."""
        self._closed = True
        self._request_token += 1
        self._listeners.clear()
        logger.info("Navigation session closed")

    async def _transition(self, destination: Location, heading: float) -> bool:
        self._request_token += 1
        token = self._request_token
        self._set_state(replace(self._state, is_transitioning=True))

        try:
            loaded = await self._image_loader(destination.image_url)
        except Exception:
            logger.exception(f"Image loader crashed for {destination.id} ({destination.image_url})")
            loaded = False

        if token != self._request_token:
            logger.info(f"Discarding stale load of {destination.id}")
            return False

        if not loaded:
            logger.warning(f"Failed to load {destination.id} ({destination.image_url})")
            self._set_state(replace(self._state, is_transitioning=False))
            await self._report(LOAD_FAILED_MESSAGE)
            return False

        self._set_state(
            NavigationState(
                current_location_id=destination.id,
                current_heading=normalize_heading(heading),
            )
        )
        return True

    def _set_state(self, state: NavigationState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("State listener failed")

    async def _report(self, message: str) -> None:
        if self._status_callback is None:
            return
        try:
            await self._status_callback(message)
        except Exception:
            logger.exception("Status callback failed")
