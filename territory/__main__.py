"""
Territory — entry point.

Usage:
    python -m territory layout participants.json             # spiral, capacity 2500
    python -m territory layout participants.json --strategy column_pack --report
    python -m territory serve                                 # start web server on :8000
    python -m territory serve --port 3000
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from territory.config import LAYOUT_RULES
from territory.engine import (
    Strategy, LayoutError,
    compute_layout, layout_to_dict, parse_participants, parse_config, cell_report,
)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="territory", description="Weighted participants → territory tiles")
    sub = p.add_subparsers(dest="cmd", required=True)

    lay = sub.add_parser("layout", help="Compute a layout from a JSON file")
    lay.add_argument("input", help="JSON file: a participant list, or {participants, config}")
    lay.add_argument("--strategy", default=Strategy.SPIRAL.value,
                     choices=[s.value for s in Strategy])
    lay.add_argument("--capacity", type=int, default=LAYOUT_RULES.capacity)
    lay.add_argument("--min-tile", type=int, default=None, help="Override the minimum tile side")
    lay.add_argument("--cell-size", type=float, default=None, help="Attach world positions")
    lay.add_argument("--report", action="store_true", help="Print target vs. actual cells")
    lay.add_argument("--out", default=None, help="Write the layout JSON here instead of stdout")
    lay.add_argument("-v", "--verbose", action="store_true")

    sv = sub.add_parser("serve", help="Start the web server")
    sv.add_argument("--host", default="127.0.0.1", help="Host to bind")
    sv.add_argument("--port", type=int, default=8000, help="Port to bind")

    return p


def run_layout(args: argparse.Namespace) -> int:
    data = json.loads(Path(args.input).read_text(encoding="utf-8"))
    if isinstance(data, list):
        data = {"participants": data}

    config_data = dict(data.get("config") or {})
    if args.min_tile is not None:
        config_data["min_tile_size"] = args.min_tile

    try:
        participants = parse_participants(data["participants"])
        config = parse_config(config_data)
        result = compute_layout(participants, args.capacity, args.strategy, config)
    except LayoutError as exc:
        print(f"Layout failed: {exc}", file=sys.stderr)
        return 1

    text = json.dumps(layout_to_dict(result, cell_size=args.cell_size), indent=2)
    if args.out:
        Path(args.out).write_text(text, encoding="utf-8")
    else:
        print(text)

    if result.fell_back:
        print(f"Fell back to {result.strategy.value}: {result.fallback_reason}", file=sys.stderr)
    if args.report:
        report = cell_report(participants, result, args.capacity, config)
        for line in report.format_lines():
            print(line, file=sys.stderr)
    return 0


def main() -> int:
    args = build_parser().parse_args()

    if args.cmd == "layout":
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
        )
        return run_layout(args)

    if args.cmd == "serve":
        logging.basicConfig(level=logging.INFO)
        from territory.web.server import main as serve_main
        serve_main(host=args.host, port=args.port)
        return 0

    return 2


if __name__ == "__main__":
    sys.exit(main())
