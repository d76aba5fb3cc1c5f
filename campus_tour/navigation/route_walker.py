"""Step-by-step playback of a planned route through the navigation controller."""

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Awaitable, Callable, Optional, Sequence, Union

from campus_tour.navigation.controller import NavigationController
from campus_tour.navigation.directions import find_direction_to
from campus_tour.navigation.pathfinding import PathResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NavigationSpeed:
    """Playback speed preset: display label and pause between hops."""

    label: str
    delay_seconds: float


NAVIGATION_SPEEDS: dict[str, NavigationSpeed] = {
    "slow": NavigationSpeed("Slow", 3.5),
    "normal": NavigationSpeed("Normal", 2.2),
    "fast": NavigationSpeed("Fast", 1.2),
}


@dataclass(frozen=True)
class WalkState:
    """
    Progress of the walk in flight.

    Attributes:
        is_walking: A walk is active (possibly paused)
        is_paused: Playback is halted until resume()
        step_index: Index into path of the last location reached, -1 before the first
        total_steps: Length of path
        current_location_id: Last location reached by the walk
        path: Location ids being walked
    """

    is_walking: bool = False
    is_paused: bool = False
    step_index: int = -1
    total_steps: int = 0
    current_location_id: Optional[str] = None
    path: tuple[str, ...] = ()


class RouteWalker:
    """
    Animate a multi-hop route by repeatedly driving the controller.

    Each hop uses the direction connecting the two locations so that
    orientation continuity applies. When no direction connects them the
    walker teleports with jump_to.
    """

    def __init__(
        self,
        controller: NavigationController,
        speed: NavigationSpeed = NAVIGATION_SPEEDS["normal"],
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.controller = controller
        self._speed = speed
        self._sleep = sleep
        self._state = WalkState()
        self._cancelled = False
        self._resume_event = asyncio.Event()
        self._resume_event.set()
        self._pending_skip: Optional[asyncio.Future] = None

    @property
    def state(self) -> WalkState:
        return self._state

    @property
    def speed(self) -> NavigationSpeed:
        return self._speed

    def set_speed(self, speed: NavigationSpeed) -> None:
        """Change the pause between hops; applies from the next hop."""
        self._speed = speed
        logger.debug(f"Walk speed set to {speed.label}")

    async def walk(self, route: Union[PathResult, Sequence[str]]) -> bool:
        """
        Walk a route hop by hop, pausing between hops.

        Locations the controller already stands on are skipped without delay,
        so a route starting at the current location begins immediately.

        Args:
            route: PathResult from find_path, or a sequence of location ids

        Returns:
            True if the final location was reached. False for an empty route,
            when another walk is running, on cancel, or when a hop failed.
        """
        path = tuple(route.path if isinstance(route, PathResult) else route)
        path = tuple(location_id for location_id in path if location_id)
        if not path:
            return False
        if self._state.is_walking:
            logger.warning("Walk already in progress")
            return False

        self._cancelled = False
        self._pending_skip = None
        self._resume_event.set()
        self._state = WalkState(is_walking=True, total_steps=len(path), path=path)
        logger.info(f"Walking {len(path)} locations: {path[0]} -> {path[-1]}")

        moved = False
        try:
            for index, location_id in enumerate(path):
                if location_id == self.controller.state.current_location_id:
                    self._mark_reached(index, location_id)
                    continue

                if moved:
                    await self._sleep(self._speed.delay_seconds)
                await self._resume_event.wait()
                if self._pending_skip is not None:
                    return await self._complete_skip()
                if self._cancelled:
                    logger.info("Walk cancelled")
                    return False

                stepped = await self._step_to(location_id)
                if self._pending_skip is not None:
                    return await self._complete_skip()
                if not stepped:
                    logger.warning(f"Walk stopped: could not reach {location_id}")
                    return False
                moved = True
                self._mark_reached(index, location_id)
        finally:
            if self._pending_skip is not None and not self._pending_skip.done():
                self._pending_skip.set_result(False)
            self._pending_skip = None
            self._state = replace(self._state, is_walking=False, is_paused=False)

        logger.info(f"Walk finished at {path[-1]}")
        return True

    def pause(self) -> None:
        if not self._state.is_walking:
            return
        self._resume_event.clear()
        self._state = replace(self._state, is_paused=True)

    def resume(self) -> None:
        if not self._state.is_paused:
            return
        self._state = replace(self._state, is_paused=False)
        self._resume_event.set()

    def cancel(self) -> None:
        """Stop the walk after the hop in flight; the location reached so far stays."""
        if not self._state.is_walking:
            return
        self._cancelled = True
        self._resume_event.set()

    async def skip_to_end(self) -> bool:
        """
        Abandon the remaining hops and jump straight to the destination.

        While a hop is still loading the controller refuses new intents, so
        the jump is handed to walk() and happens once that hop settles.

        Returns:
            True if the destination was reached
        """
        if not self._state.is_walking or not self._state.path:
            return False

        if self.controller.state.is_transitioning:
            if self._pending_skip is None:
                logger.debug("Skip requested mid-hop, deferring until it settles")
                self._pending_skip = asyncio.get_running_loop().create_future()
                self._resume_event.set()
            return await asyncio.shield(self._pending_skip)

        destination = self._state.path[-1]
        self.cancel()
        jumped = await self.controller.jump_to(destination)
        if jumped:
            self._mark_reached(len(self._state.path) - 1, destination)
        return jumped

    async def _complete_skip(self) -> bool:
        path = self._state.path
        destination = path[-1]
        if self.controller.state.current_location_id == destination:
            reached = True
        else:
            reached = await self.controller.jump_to(destination)

        if reached:
            self._mark_reached(len(path) - 1, destination)
            logger.info(f"Skipped to {destination}")
        else:
            logger.warning(f"Skip to {destination} was not committed")
        if not self._pending_skip.done():
            self._pending_skip.set_result(reached)
        return reached

    async def _step_to(self, location_id: str) -> bool:
        current = self.controller.current_location
        direction = find_direction_to(current, location_id)
        if direction is None:
            logger.debug(f"No edge {current.id} -> {location_id}, jumping")
            return await self.controller.jump_to(location_id)
        return await self.controller.navigate(direction, target_id=location_id)

    def _mark_reached(self, index: int, location_id: str) -> None:
        self._state = replace(self._state, step_index=index, current_location_id=location_id)
