"""
Command-line interface for the schedule viewer.

Usage:
    schedule-viewer view path/to/dump.yaml [--link "?schedule=Update&include=physics"]
    schedule-viewer render path/to/dump.yaml Update [--render-app] [--include ...] [--exclude ...] [--format svg|dot] [--output out.svg]
    schedule-viewer list path/to/dump.yaml
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .catalog import build_option_groups, load_catalog
from .engines import GraphvizLayoutEngine, YamlScheduleEngine, graph_settings_from
from .settings import get_settings

Logger = logging.getLogger(__name__)

DOT_FORMATS = ("dot", "gv")


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(message)s")


def add_shared_dump_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "dump",
        type=Path,
        help="Path to the YAML schedule dump describing the application's schedules.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedule-viewer",
        description="Inspect the system ordering graphs of an application's schedules.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # view command
    view_parser = subparsers.add_parser("view", help="Launch the interactive viewer.")
    add_shared_dump_argument(view_parser)
    view_parser.add_argument(
        "--link",
        type=str,
        default=None,
        help="Shared link or query string selecting the schedule and filters to open.",
    )

    # render command
    render_parser = subparsers.add_parser(
        "render",
        help="Generate one schedule graph and write it as SVG (or DOT) without opening the viewer.",
    )
    add_shared_dump_argument(render_parser)
    render_parser.add_argument("schedule", type=str, help="Schedule name.")
    render_parser.add_argument(
        "--render-app",
        action="store_true",
        help="Look the schedule up in the render app instead of the main app.",
    )
    render_parser.add_argument("--include", type=str, default="", help="Comma-separated include filter.")
    render_parser.add_argument("--exclude", type=str, default="", help="Comma-separated exclude filter.")
    render_parser.add_argument(
        "--format",
        type=str,
        default=None,
        help="Output format: 'dot' for the graph description, otherwise any Graphviz format (default: svg).",
    )
    render_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output file (defaults to standard output).",
    )

    # list command
    list_parser = subparsers.add_parser("list", help="Print the schedules found in a dump, grouped.")
    add_shared_dump_argument(list_parser)

    return parser


def view_command(args: argparse.Namespace) -> int:
    dump_path: Path = args.dump
    if not dump_path.exists():
        Logger.error("Schedule dump not found: %s", dump_path)
        return 2

    from .gui import run as run_gui  # Local import to avoid Qt widget initialization unless needed

    try:
        return run_gui(dump_path, link=args.link)
    except Exception as exc:  # pylint: disable=broad-except
        Logger.error("Viewer failed to start: %s", exc)
        if Logger.isEnabledFor(logging.DEBUG):
            Logger.exception("Stack trace")
        return 1


def render_command(args: argparse.Namespace) -> int:
    dump_path: Path = args.dump
    if not dump_path.exists():
        Logger.error("Schedule dump not found: %s", dump_path)
        return 2

    settings = get_settings()
    output_format = (args.format or settings.output_format).lower()
    try:
        engine = YamlScheduleEngine(dump_path, graph_settings=graph_settings_from(settings))
        engine.initialize()
        document = engine.generate(args.schedule, args.render_app, args.include, args.exclude)
        if output_format in DOT_FORMATS:
            content = document
        else:
            layout = GraphvizLayoutEngine(settings.layout_program)
            content = layout.render(document, output_format)
    except Exception as exc:  # pylint: disable=broad-except
        Logger.error("Render failed: %s", exc)
        if Logger.isEnabledFor(logging.DEBUG):
            Logger.exception("Stack trace")
        return 1

    if args.output is None:
        sys.stdout.write(content)
        return 0

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(content)
    Logger.info("Wrote %s", output_path)
    return 0


def list_command(args: argparse.Namespace) -> int:
    dump_path: Path = args.dump
    if not dump_path.exists():
        Logger.error("Schedule dump not found: %s", dump_path)
        return 2

    try:
        engine = YamlScheduleEngine(dump_path)
        engine.initialize()
        catalog = load_catalog(engine)
    except Exception as exc:  # noqa: BLE001
        Logger.error("Failed to read schedules: %s", exc)
        return 1

    lines = []
    for group in build_option_groups(catalog):
        lines.append(f"{group.label}:")
        lines.extend(f"  {option.key.composite}" for option in group.options)
    print("\n".join(lines))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command == "view":
        return view_command(args)
    if args.command == "render":
        return render_command(args)
    if args.command == "list":
        return list_command(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
