"""
Sea Battle CLI - Command-line interface for the server.

Usage:
    seabattle serve [--host HOST] [--port PORT]    Run the game server
    seabattle rules                                Print board size and fleet
"""

import argparse
import logging
import os
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Sea Battle - two-player naval battle server",
        prog="seabattle",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the game server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")
    serve_parser.add_argument(
        "--log-level",
        default=os.getenv("SEABATTLE_LOG_LEVEL", "INFO"),
        help="Logging level (DEBUG, INFO, WARNING, ...)",
    )

    # Rules command
    subparsers.add_parser("rules", help="Print board size and fleet")

    args = parser.parse_args(argv)

    if args.command == "serve":
        cmd_serve(args)
    elif args.command == "rules":
        cmd_rules(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_serve(args):
    """Run the FastAPI app under uvicorn."""
    import uvicorn

    level = args.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    from .api.app import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port, log_level=level.lower())


def cmd_rules(args):
    """Print the board size and fleet."""
    from .engine_core.board import BOARD_SIZE, FLEET, PLACEMENT_TARGET

    print(f"Board: {BOARD_SIZE}x{BOARD_SIZE}")
    print(f"Fleet: {', '.join(str(size) for size in FLEET)}")
    print(f"Cells to place: {PLACEMENT_TARGET}")


if __name__ == "__main__":
    main()
