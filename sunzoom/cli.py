#!/usr/bin/env python3
"""
Sunzoom CLI - Zoomable sunburst charts from hierarchy data

Usage:
    sunzoom render <data.json> [-o out.svg]       Render the sunburst (SVG or PNG)
    sunzoom zoom <data.json> --zoom A/B -o DIR    Write every frame of a zoom
    sunzoom tree <data.json>                      Print the partition layout
"""

import argparse
import json
import logging
import math
import sys
from pathlib import Path


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Sunzoom: zoomable sunburst charts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    sunzoom render data.json -o sunburst.svg
    sunzoom render data.json -o konkan.png --zoom "Konkan"
    sunzoom zoom data.json --zoom "Konkan/Scheme A" --frames 30 -o frames/
    sunzoom tree data.json --json
        """,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging on stderr")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("data", help="JSON dataset (nested hierarchy or record bundle)")
    common.add_argument("--config", "-c", help="Path to a YAML config file")
    common.add_argument("--rings", action="store_true", help="Build the completion/LPCD status rings")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # render command
    render_parser = subparsers.add_parser("render", parents=[common], help="Render the sunburst as SVG or PNG")
    render_parser.add_argument("--output", "-o", default="sunburst.svg", help="Output file (.svg or .png)")
    render_parser.add_argument("--zoom", "-z", help="Name path to zoom into, e.g. 'Konkan/Scheme A'")

    # zoom command
    zoom_parser = subparsers.add_parser("zoom", parents=[common], help="Write every frame of a zoom transition")
    zoom_parser.add_argument("--zoom", "-z", required=True, help="Name path to zoom into")
    zoom_parser.add_argument("--frames", "-n", type=int, default=None, help="Frames per zoom step")
    zoom_parser.add_argument("--output", "-o", default="frames", help="Output directory")

    # tree command
    tree_parser = subparsers.add_parser("tree", parents=[common], help="Print the partition layout")
    tree_parser.add_argument("--json", "-j", action="store_true", help="Output as JSON")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    from .config import load_config
    from .errors import SunzoomError
    from .sunburst import Sunburst

    try:
        config = load_config(Path(args.config) if args.config else None)
        data = json.loads(Path(args.data).read_text(encoding="utf-8"))
        chart = Sunburst.from_dataset(data, config, rings=args.rings, clock=lambda: 0.0)
        if args.command == "render":
            return cmd_render(chart, args)
        elif args.command == "zoom":
            return cmd_zoom(chart, args)
        elif args.command == "tree":
            return cmd_tree(chart, args)
    except (SunzoomError, OSError, json.JSONDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def _names(path):
    return [p for p in path.split("/") if p]


def cmd_render(chart, args):
    """Handle render command."""
    if args.zoom:
        chart.zoom_path(args.zoom)
    chart.render(args.output)
    print(f"Rendered {' > '.join(chart.breadcrumb)} to {args.output}")
    return 0


def cmd_zoom(chart, args):
    """Handle zoom command."""
    out_dir = Path(args.output)
    out_dir.mkdir(parents=True, exist_ok=True)
    names = _names(args.zoom)

    written = 0

    def write(svg):
        nonlocal written
        (out_dir / f"frame_{written:03d}.svg").write_text(svg, encoding="utf-8")
        written += 1

    write(chart.render())
    for i in range(1, len(names) + 1):
        if not chart.click(names[:i]):
            print(f"Skipping {'/'.join(names[:i])}: not zoomable", file=sys.stderr)
            continue
        before = written
        for svg in chart.frames(count=args.frames):
            write(svg)
        if written == before:
            # transition completed on activation (zero duration)
            write(chart.render())

    print(f"Wrote {written} frames to {out_dir}")
    return 0


def cmd_tree(chart, args):
    """Handle tree command."""
    rows = []
    for node in chart.tree:
        s = node.canonical
        rows.append(
            {
                "id": node.id,
                "parent": node.parent,
                "depth": node.depth,
                "name": node.name,
                "type": node.kind.value,
                "value": node.value,
                "x0": s.x0,
                "x1": s.x1,
                "y0": s.y0,
                "y1": s.y1,
            }
        )

    if args.json:
        print(json.dumps(rows, indent=2))
        return 0

    print(f"# {chart.tree.root.name} ({len(rows)} nodes, height {chart.tree.height})")
    print("")
    for row in rows:
        indent = "  " * row["depth"]
        print(
            f"{indent}- {row['name']} [{row['type']}] "
            f"value={row['value']:g} angle={math.degrees(row['x0']):.1f}..{math.degrees(row['x1']):.1f}"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
