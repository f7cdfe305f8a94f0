"""Command-line entry point.

Run with: `python -m blockdrop`

``--ascii`` prints a single frame of a fresh game, which is a minimal smoke
test that renderers see more than a blank grid.  Without it the pygame front
end is started.
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Sequence

from .config import DEFAULT_DROP_INTERVAL_MS, EngineConfig
from .engine import GameEngine
from .utils import render_grid


def format_grid(grid: List[List[int]]) -> str:
    return "\n".join("".join("#" if cell else "." for cell in row) for row in grid)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="blockdrop", description=__doc__.splitlines()[0])
    parser.add_argument(
        "--drop-interval",
        type=float,
        default=DEFAULT_DROP_INTERVAL_MS,
        help="milliseconds between gravity steps (default: %(default)s)",
    )
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--ascii", action="store_true", help="print one frame and exit")
    parser.add_argument("--log-level", default="INFO")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())
    config = EngineConfig(drop_interval_ms=args.drop_interval, seed=args.seed)

    if args.ascii:
        engine = GameEngine(config)
        print(format_grid(render_grid(engine.board, engine.active)))
        return

    from .run_pygame import main as run_pygame

    run_pygame(config)


if __name__ == "__main__":
    main()
