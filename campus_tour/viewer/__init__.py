"""Tour graph viewer - interactive 3D visualization of locations, elevators and routes."""

from campus_tour.viewer.figure import LocationInfo, create_figure, export_html, show_figure
from campus_tour.viewer.layout import (
    compute_edge_lines,
    compute_location_positions,
    compute_route_points,
)

__all__ = [
    "LocationInfo",
    "create_figure",
    "export_html",
    "show_figure",
    "compute_edge_lines",
    "compute_location_positions",
    "compute_route_points",
]
