"""Entry point: ``python -m geocoin``.

Supports two modes:
  - ``python -m geocoin``                 → Launch the FastAPI server
  - ``python -m geocoin walk --path NNE`` → Headless walk: move, collect, save
"""

from __future__ import annotations

import argparse
import logging

from geocoin.core.enums import Direction

logger = logging.getLogger(__name__)


def _parse_path(text: str) -> list[Direction]:
    """argparse type for ``--path``: a string of N/E/S/W steps."""
    try:
        return [Direction.parse(ch) for ch in text if not ch.isspace()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="GeoCoin — location-based coin collecting")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=str, default="geocoin")
    srv.add_argument("--save", type=str, default="geocoin_save.json")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless walk ---
    walk = sub.add_parser("walk", help="Walk a path of N/E/S/W steps, collecting every coin in reach")
    walk.add_argument("--path", type=_parse_path, default=[], help="Steps, e.g. NNEES")
    walk.add_argument("--seed", type=str, default="geocoin")
    walk.add_argument("--save", type=str, default="geocoin_save.json")
    walk.add_argument("--radius", type=int, default=8)
    walk.add_argument("--fresh", action="store_true", help="Ignore any existing save")
    walk.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from geocoin.api.app import create_app
    from geocoin.config import GameConfig

    config = GameConfig(world_seed=args.seed, save_file=args.save, log_level=args.log_level)
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_walk(args: argparse.Namespace) -> None:
    from geocoin.api.session_manager import SessionManager
    from geocoin.config import GameConfig
    from geocoin.utils.logging import setup_logging

    config = GameConfig(
        world_seed=args.seed,
        save_file=args.save,
        neighborhood_radius=args.radius,
        log_level=args.log_level,
    )
    setup_logging(config.log_level)

    manager = SessionManager(config)
    if not args.fresh:
        manager.load()

    steps: list[Direction] = args.path
    for step in [None, *steps]:
        if step is not None:
            manager.move(step)
        for cache in manager.nearby_caches():
            while manager.collect(cache.cell.row, cache.cell.col) is not None:
                pass

    for event in manager.events.latest(20):
        print(event.message)
    position, cell, holding = manager.player_status()
    print(f"At {position} in cell {cell.key} holding {len(holding)} coins.")
    logger.info("Done. Game saved to %s", config.save_file)


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "walk":
        _run_walk(args)


if __name__ == "__main__":
    main()
