"""Navigation engine: angles, routes, orientation continuity and the session controller."""

from campus_tour.navigation.controller import (
    LOAD_FAILED_MESSAGE,
    ImageLoader,
    NavigationController,
    NavigationState,
    RoutePlan,
)
from campus_tour.navigation.directions import (
    MovementSense,
    angle_of,
    angular_difference,
    closest_direction,
    directions_compatible_with,
    find_direction_to,
    normalize_heading,
    visible_directions,
)
from campus_tour.navigation.orientation import (
    NavigationType,
    OrientationResolver,
    classify_navigation,
)
from campus_tour.navigation.overrides import (
    ANGLE_OVERRIDES,
    NO_OVERRIDES,
    AngleOverride,
    AngleOverrideTable,
)
from campus_tour.navigation.pathfinding import (
    PathResult,
    TravelEstimate,
    find_path,
    get_estimated_travel_time,
    get_route_description,
    validate_path,
)
from campus_tour.navigation.route_walker import (
    NAVIGATION_SPEEDS,
    NavigationSpeed,
    RouteWalker,
    WalkState,
)

__all__ = [
    "LOAD_FAILED_MESSAGE",
    "ImageLoader",
    "NavigationController",
    "NavigationState",
    "RoutePlan",
    "MovementSense",
    "angle_of",
    "angular_difference",
    "closest_direction",
    "directions_compatible_with",
    "find_direction_to",
    "normalize_heading",
    "visible_directions",
    "NavigationType",
    "OrientationResolver",
    "classify_navigation",
    "ANGLE_OVERRIDES",
    "NO_OVERRIDES",
    "AngleOverride",
    "AngleOverrideTable",
    "PathResult",
    "TravelEstimate",
    "find_path",
    "get_estimated_travel_time",
    "get_route_description",
    "validate_path",
    "NAVIGATION_SPEEDS",
    "NavigationSpeed",
    "RouteWalker",
    "WalkState",
]
