"""Command-line interface for the campus tour navigation engine."""

import argparse
import logging
import sys
from typing import Optional, Sequence

from campus_tour.config import TourSettings, load_settings
from campus_tour.graph.loader import load_graph
from campus_tour.graph.store import GraphStore
from campus_tour.logging_config import setup_logging
from campus_tour.navigation.pathfinding import (
    find_path,
    get_estimated_travel_time,
    get_route_description,
)

logger = logging.getLogger(__name__)

# Exit codes
EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_ROUTE = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with validate/route/view subcommands."""
    parser = argparse.ArgumentParser(
        prog="campus-tour",
        description="Campus Tour - inspect and query panoramic tour graphs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check a content file for dangling edges
  campus-tour validate data/sample_campus.json

  # Shortest route between two locations
  campus-tour route a-f1-north-1 library-f1-desk --data data/sample_campus.json

  # View the graph in the browser with a route highlighted
  campus-tour view data/sample_campus.json --route a-f1-north-1 library-f1-desk

  # Export to HTML file
  campus-tour view data/sample_campus.json --export campus.html
        """,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser("validate", help="Load and validate a tour graph")
    validate_parser.add_argument(
        "data",
        nargs="?",
        default=None,
        help="Path to tour graph JSON (default: CAMPUS_TOUR_DATA)",
    )

    route_parser = subparsers.add_parser("route", help="Find the shortest route between two locations")
    route_parser.add_argument("start", help="Origin location id")
    route_parser.add_argument("end", help="Destination location id")
    route_parser.add_argument(
        "--data",
        default=None,
        help="Path to tour graph JSON (default: CAMPUS_TOUR_DATA)",
    )
    route_parser.add_argument(
        "--seconds-per-hop",
        type=float,
        default=None,
        help="Walking pace for the travel estimate (default: CAMPUS_TOUR_SECONDS_PER_HOP)",
    )

    view_parser = subparsers.add_parser("view", help="Visualize the tour graph")
    view_parser.add_argument(
        "data",
        nargs="?",
        default=None,
        help="Path to tour graph JSON (default: CAMPUS_TOUR_DATA)",
    )
    view_parser.add_argument(
        "--route",
        nargs=2,
        metavar=("START", "END"),
        help="Highlight the shortest route between two locations",
    )
    view_parser.add_argument(
        "--export",
        type=str,
        metavar="FILE",
        help="Export to HTML file instead of opening browser",
    )
    view_parser.add_argument(
        "--labels",
        action="store_true",
        help="Show location ids next to every marker",
    )
    view_parser.add_argument(
        "--title",
        type=str,
        default=None,
        help="Custom title for the visualization",
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the campus-tour CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings()
    setup_logging(console_level=settings.log_level, log_dir=settings.log_dir)
    if args.verbose:
        logging.getLogger("campus_tour").setLevel(logging.DEBUG)
        for handler in logging.getLogger().handlers:
            handler.setLevel(logging.DEBUG)

    if args.command == "validate":
        exit_code = _run_validate(args, settings)
    elif args.command == "route":
        exit_code = _run_route(args, settings)
    else:
        exit_code = _run_view(args, settings)

    sys.exit(exit_code)


def _load_store(data: Optional[str], settings: TourSettings) -> Optional[GraphStore]:
    """Load the graph, printing an error and returning None on failure."""
    path = str(data or settings.data_path)
    try:
        logger.info(f"Loading tour graph from {path}")
        return load_graph(path)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
    return None


def _run_validate(args: argparse.Namespace, settings: TourSettings) -> int:
    store = _load_store(args.data, settings)
    if store is None:
        return EXIT_ERROR

    buildings = sorted({loc.building_id for loc in store if loc.building_id})
    print(f"OK: {len(store)} locations (hubs: {len(store.hubs())}, buildings: {len(buildings)})")
    for building_id in buildings:
        count = sum(1 for loc in store if loc.building_id == building_id)
        print(f"  {store.building_label(building_id)}: {count} locations")
    return EXIT_OK


def _run_route(args: argparse.Namespace, settings: TourSettings) -> int:
    store = _load_store(args.data, settings)
    if store is None:
        return EXIT_ERROR

    for location_id in (args.start, args.end):
        if location_id not in store:
            print(f"Error: Unknown location '{location_id}'", file=sys.stderr)
            return EXIT_ERROR

    result = find_path(store, args.start, args.end)
    if result is None:
        print(f"No route from {args.start} to {args.end}")
        return EXIT_NO_ROUTE

    seconds_per_hop = args.seconds_per_hop if args.seconds_per_hop is not None else settings.seconds_per_hop
    estimate = get_estimated_travel_time(result, seconds_per_hop)

    print(get_route_description(store, result))
    print(f"Estimated time: {estimate.formatted}")
    for step, location_id in enumerate(result.path):
        print(f"  {step:>3}. {location_id}")
    return EXIT_OK


def _run_view(args: argparse.Namespace, settings: TourSettings) -> int:
    # Plotly is only needed for this command
    from campus_tour.viewer.figure import create_figure, export_html, show_figure

    store = _load_store(args.data, settings)
    if store is None:
        return EXIT_ERROR

    route = None
    if args.route:
        start, end = args.route
        result = find_path(store, start, end)
        if result is None:
            print(f"No route from {start} to {end}")
            return EXIT_NO_ROUTE
        route = list(result.path)

    title = args.title or f"Campus Tour: {args.data or settings.data_path}"
    fig = create_figure(store, title=title, route=route, show_labels=args.labels)

    if args.export:
        logger.info(f"Exporting to {args.export}")
        export_html(fig, args.export)
        print(f"Exported to {args.export}")
    else:
        logger.info("Opening in browser")
        show_figure(fig)
    return EXIT_OK


if __name__ == "__main__":
    main()
