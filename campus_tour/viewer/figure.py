"""Plotly-based interactive visualization of the tour graph."""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
import plotly.graph_objects as go

from campus_tour.graph.models import Hub
from campus_tour.graph.store import GraphStore
from campus_tour.navigation.pathfinding import format_location_label
from campus_tour.viewer.layout import (
    Position,
    compute_edge_lines,
    compute_location_positions,
    compute_route_points,
)

# Colors cycled across buildings
BUILDING_COLORS = (
    "rgb(65, 105, 225)",   # Royal blue
    "rgb(220, 20, 60)",    # Crimson
    "rgb(46, 139, 87)",    # Sea green
    "rgb(218, 165, 32)",   # Goldenrod
    "rgb(148, 0, 211)",    # Dark violet
    "rgb(0, 139, 139)",    # Dark cyan
)
HUB_COLOR = "rgb(255, 165, 0)"
ROUTE_COLOR = "rgb(50, 205, 50)"


@dataclass
class LocationInfo:
    """Extracted location metadata for display."""

    id: str
    label: str
    position: Position
    building_id: Optional[str]
    floor: Optional[int]
    wing: Optional[str]
    edge_count: int
    facilities: tuple[str, ...] = ()


def extract_location_info(
    store: GraphStore,
    positions: dict[str, Position],
) -> list[LocationInfo]:
    """
    Extract displayable metadata from all positioned, non-hub locations.

    Args:
        store: Graph to describe
        positions: Dict mapping location id to position

    Returns:
        List of LocationInfo, hubs excluded
    """
    infos: list[LocationInfo] = []

    for location_id, position in positions.items():
        location = store.get_by_id(location_id)
        if location is None or isinstance(location, Hub):
            continue

        infos.append(
            LocationInfo(
                id=location.id,
                label=format_location_label(store, location.id),
                position=position,
                building_id=location.building_id,
                floor=location.floor,
                wing=location.wing,
                edge_count=len(location.edges),
                facilities=location.context.facilities if location.context else (),
            )
        )

    return infos


def create_figure(
    store: GraphStore,
    title: str = "Campus Tour Graph",
    route: Optional[Sequence[str]] = None,
    show_edges: bool = True,
    show_labels: bool = False,
) -> go.Figure:
    """
    Create interactive 3D Plotly figure of the tour graph.

    Args:
        store: Graph to draw
        title: Figure title
        route: Location ids to highlight as a walked route
        show_edges: Whether to show edge lines
        show_labels: Whether to show the id next to every location

    Returns:
        Plotly Figure object ready for display
    """
    positions = compute_location_positions(store)
    infos = extract_location_info(store, positions)

    fig = go.Figure()

    # Edges behind everything else
    if show_edges:
        _add_edges_to_figure(fig, compute_edge_lines(store, positions))

    by_building: dict[Optional[str], list[LocationInfo]] = {}
    for info in infos:
        by_building.setdefault(info.building_id, []).append(info)

    for index, building_id in enumerate(sorted(by_building, key=lambda b: b or "")):
        name = store.building_label(building_id) or "Unassigned"
        _add_locations_to_figure(
            fig,
            by_building[building_id],
            color=BUILDING_COLORS[index % len(BUILDING_COLORS)],
            name=name,
            show_labels=show_labels,
        )

    hubs = [hub for hub in store.hubs() if hub.id in positions]
    if hubs:
        _add_hubs_to_figure(fig, hubs, positions)

    if route:
        points = compute_route_points(route, positions)
        if len(points) > 0:
            _add_route_to_figure(fig, points, route)

    toggle_buttons = _create_toggle_buttons(fig)

    fig.update_layout(
        title=title,
        scene=dict(
            xaxis_title="East",
            yaxis_title="North",
            zaxis_title="Floor",
            aspectmode="data",
        ),
        showlegend=True,
        legend=dict(
            yanchor="top",
            y=0.99,
            xanchor="left",
            x=0.01,
            itemclick="toggle",
            itemdoubleclick="toggleothers",
        ),
        margin=dict(l=0, r=0, t=80, b=0),
        updatemenus=toggle_buttons,
    )

    return fig


def _create_toggle_buttons(fig: go.Figure) -> list[dict]:
    """
    Create a dropdown menu for visibility control.

    Returns a list of updatemenus configurations for Plotly.
    Uses explicit visibility arrays since Plotly doesn't support "toggle".
    """
    trace_names = [trace.name for trace in fig.data]
    num_traces = len(trace_names)

    buttons = [
        dict(
            label="All Visible",
            method="restyle",
            args=[{"visible": [True] * num_traces}],
        ),
        dict(
            label="All Hidden",
            method="restyle",
            args=[{"visible": ["legendonly"] * num_traces}],
        ),
    ]

    for i, name in enumerate(trace_names):
        visible = ["legendonly"] * num_traces
        visible[i] = True
        buttons.append(
            dict(
                label=f"Only {name}",
                method="restyle",
                args=[{"visible": visible}],
            )
        )

    return [
        dict(
            type="dropdown",
            direction="down",
            buttons=buttons,
            pad={"r": 10, "t": 10},
            showactive=True,
            x=0.0,
            xanchor="left",
            y=1.15,
            yanchor="top",
        )
    ]


def _add_locations_to_figure(
    fig: go.Figure,
    infos: list[LocationInfo],
    color: str,
    name: str,
    show_labels: bool,
) -> None:
    """Add location markers with hover information."""
    x = [info.position[0] for info in infos]
    y = [info.position[1] for info in infos]
    z = [info.position[2] for info in infos]

    hover_texts = []
    for info in infos:
        text = f"<b>{info.label}</b><br>"
        text += f"ID: {info.id}<br>"
        if info.floor is not None:
            text += f"Floor: {info.floor}<br>"
        if info.facilities:
            text += f"Facilities: {', '.join(info.facilities)}<br>"
        text += f"Connections: {info.edge_count}"
        hover_texts.append(text)

    fig.add_trace(
        go.Scatter3d(
            x=x,
            y=y,
            z=z,
            mode="markers+text" if show_labels else "markers",
            marker=dict(size=6, color=color, opacity=0.9),
            text=[info.id for info in infos] if show_labels else None,
            textposition="top center",
            textfont=dict(size=10, color="black"),
            hovertext=hover_texts,
            hoverinfo="text",
            name=name,
        )
    )


def _add_hubs_to_figure(
    fig: go.Figure,
    hubs: list[Hub],
    positions: dict[str, Position],
) -> None:
    """Add elevator hubs as diamonds."""
    hover_texts = []
    for hub in hubs:
        floors = ", ".join(str(floor) for floor in sorted(hub.floor_connections))
        hover_texts.append(f"<b>{hub.name or hub.id}</b><br>ID: {hub.id}<br>Floors: {floors}")

    fig.add_trace(
        go.Scatter3d(
            x=[positions[hub.id][0] for hub in hubs],
            y=[positions[hub.id][1] for hub in hubs],
            z=[positions[hub.id][2] for hub in hubs],
            mode="markers+text",
            marker=dict(size=10, color=HUB_COLOR, symbol="diamond", opacity=0.9),
            text=[hub.name or hub.id for hub in hubs],
            textposition="top center",
            textfont=dict(size=12),
            hovertext=hover_texts,
            hoverinfo="text",
            name="Elevators",
        )
    )


def _add_edges_to_figure(
    fig: go.Figure,
    edge_lines: list[tuple[Position, Position]],
) -> None:
    """Add edge lines to figure."""
    # None separators keep the segments disconnected
    x: list[Optional[float]] = []
    y: list[Optional[float]] = []
    z: list[Optional[float]] = []

    for start, end in edge_lines:
        x.extend([start[0], end[0], None])
        y.extend([start[1], end[1], None])
        z.extend([start[2], end[2], None])

    fig.add_trace(
        go.Scatter3d(
            x=x,
            y=y,
            z=z,
            mode="lines",
            line=dict(color="rgb(150, 150, 150)", width=2),
            hoverinfo="skip",
            name="Edges",
        )
    )


def _add_route_to_figure(
    fig: go.Figure,
    points: np.ndarray,
    route: Sequence[str],
) -> None:
    """
    Add a highlighted route polyline.

    Args:
        fig: Plotly figure
        points: Nx3 array of route positions
        route: Location ids, used for the start/end labels
    """
    labels = [""] * len(points)
    labels[0] = "Start"
    if len(points) > 1:
        labels[-1] = "End"

    fig.add_trace(
        go.Scatter3d(
            x=points[:, 0],
            y=points[:, 1],
            z=points[:, 2],
            mode="lines+markers+text",
            line=dict(color=ROUTE_COLOR, width=6),
            marker=dict(size=8, color=ROUTE_COLOR),
            text=labels,
            textposition="top center",
            hoverinfo="skip",
            name=f"Route ({route[0]} -> {route[-1]})",
        )
    )


def show_figure(fig: go.Figure) -> None:
    """Display figure in browser."""
    fig.show()


def export_html(fig: go.Figure, output_path: str) -> None:
    """Export figure as standalone HTML file."""
    fig.write_html(output_path, include_plotlyjs=True, full_html=True)
