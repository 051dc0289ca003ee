#!/usr/bin/env python3
"""Check a deployment for coherency and line of sight.

Usage (from the repo root):
    python scripts/check_board.py board.json                  # coherency
    python scripts/check_board.py board.png --sight m1 m7     # model LOS
    python scripts/check_board.py board.json --unit-sight u1 u2
    python scripts/check_board.py board.json --deployment "Dawn of War"
    python scripts/check_board.py board.json --preset "Layout 8" \\
        --render out.png                                      # preset terrain
    python scripts/check_board.py --list-presets

A board is a JSON snapshot, or a PNG saved by this script (the snapshot is
embedded in the image). With ``--preset``, the preset's terrain and walls
replace the board's, and the board contributes its models and table size.
"""

import argparse
import sys
from pathlib import Path

# Add the repo root to path so we can import rules and boardio
SCRIPT_DIR = Path(__file__).resolve().parent
ROOT_DIR = SCRIPT_DIR.parent
sys.path.insert(0, str(ROOT_DIR))

from PIL import Image  # noqa: E402

from boardio.layout_io import load_board, save_board_png  # noqa: E402
from boardio.missions import DEPLOYMENTS, get_deployment  # noqa: E402
from boardio.presets import LAYOUT_PRESETS, get_preset  # noqa: E402
from boardio.render import BoardRenderer  # noqa: E402
from boardio.report import (  # noqa: E402
    coherency_report,
    deployment_report,
    sight_report,
    unit_sight_report,
)
from rules.coherency import check_all_units_coherency  # noqa: E402
from rules.line_of_sight import check_line_of_sight  # noqa: E402
from rules.types import Battlefield  # noqa: E402
from rules.walls import WALL_SHAPES  # noqa: E402

SUPERSAMPLE = 4


def _build_board(args) -> Battlefield:
    if args.board:
        board = load_board(args.board)
    else:
        board = Battlefield()
    if args.preset:
        preset = get_preset(args.preset)
        preset.models = board.models
        if args.board:
            preset.width, preset.height = board.width, board.height
        board = preset
    return board


def _render(board, args):
    """Render at a supersampled resolution, then downscale for smooth
    edges, and save with the snapshot embedded."""
    ppi = args.ppi
    renderer = BoardRenderer(
        board.width,
        board.height,
        ppi * SUPERSAMPLE,
        line_scale=SUPERSAMPLE,
    )
    deployment = None
    if args.deployment:
        deployment = get_deployment(args.deployment)
    sight = None
    if args.sight:
        models = board.models_by_id()
        viewer_id, target_id = args.sight
        sight = check_line_of_sight(
            models[viewer_id],
            models[target_id],
            board.terrain_footprints(),
            board.wall_polygons(),
        )
    img = renderer.render(
        board,
        coherency=check_all_units_coherency(board.models),
        sight=sight,
        deployment=deployment,
    )
    img = img.resize(
        (int(board.width * ppi), int(board.height * ppi)),
        Image.Resampling.LANCZOS,
    )
    save_board_png(img, board, args.render)
    print(f"Rendered board written to {args.render}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Check unit coherency and line of sight on a board."
    )
    parser.add_argument(
        "board", nargs="?", help="Board snapshot (.json or .png)"
    )
    parser.add_argument("--preset", help="Use a preset terrain layout")
    parser.add_argument(
        "--list-presets",
        action="store_true",
        help="List preset layouts, deployments and wall shapes, then exit",
    )
    parser.add_argument(
        "--deployment",
        help="Check models against a deployment map and draw it",
    )
    parser.add_argument(
        "--sight",
        nargs=2,
        metavar=("VIEWER", "TARGET"),
        help="Check line of sight between two models",
    )
    parser.add_argument(
        "--unit-sight",
        nargs=2,
        metavar=("VIEWER_UNIT", "TARGET_UNIT"),
        help="Check line of sight between two units",
    )
    parser.add_argument(
        "--no-coherency",
        action="store_true",
        help="Skip the coherency report",
    )
    parser.add_argument("--render", metavar="PNG", help="Write a PNG image")
    parser.add_argument(
        "--ppi", type=int, default=20, help="Pixels per inch (default 20)"
    )
    args = parser.parse_args(argv)

    if args.list_presets:
        print("Layouts: " + ", ".join(LAYOUT_PRESETS))
        print("Deployments: " + ", ".join(DEPLOYMENTS))
        print("Wall shapes: " + ", ".join(WALL_SHAPES))
        return 0
    if not args.board and not args.preset:
        parser.error("a board file or --preset is required")

    try:
        board = _build_board(args)
        lines: list[str] = []
        if not args.no_coherency:
            lines += coherency_report(board)
        if args.sight:
            lines += sight_report(board, *args.sight)
        if args.unit_sight:
            lines += unit_sight_report(board, *args.unit_sight)
        if args.deployment:
            lines += deployment_report(board, args.deployment)
        for line in lines:
            print(line)
        if args.render:
            _render(board, args)
    except KeyError as e:
        print(f"Error: {e.args[0]}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
