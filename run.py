"""mazegen CLI entry point.

Generates a dungeon and prints it as text or JSON, or runs the HTTP API that
serves generated grids. Accepts configuration via flags and DUNGEON_*
environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

from mazegen import __version__

# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()

_REGION_COLORS = ("RED", "GREEN", "YELLOW", "BLUE", "MAGENTA", "CYAN", "WHITE")


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    mazegen dungeon generator

    Generate a room-and-corridor dungeon and print it, or run the HTTP API
    that serves generated grids. Configuration can be provided via CLI flags
    or DUNGEON_* environment variables. If both are present, CLI flags take
    precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          DUNGEON_WIDTH, DUNGEON_HEIGHT          Grid size (default: 64x36)
          DUNGEON_MAX_ROOM_SIZE                  Largest room side (default: 11)
          DUNGEON_ROOM_ATTEMPTS                  Room placement budget (default: 600)
          DUNGEON_WINDING_CHANCE                 0-100 corridor turn chance (default: 50)
          DUNGEON_CONNECTIVITY_CHANCE            0-100 extra loop chance (default: 10)
          HOST, PORT                             Bind address for the API server

        Examples:
          # Print a dungeon with the default settings
          python run.py generate

          # Reproduce a dungeon and show generation metrics
          python run.py generate --seed 1234 --metrics

          # Straight corridors, lots of loops, JSON output
          python run.py generate --winding 5 --connectivity 60 --json

          # Serve dungeons over HTTP on port 8080
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="mazegen",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"mazegen {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a dungeon and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a dungeon and print it as text or JSON",
    )
    gen_parser.add_argument("--seed", default=None, help="Seed (integer or any string)")
    gen_parser.add_argument("--width", type=int, default=None, help="Grid width (odd values round down)")
    gen_parser.add_argument("--height", type=int, default=None, help="Grid height (odd values round down)")
    gen_parser.add_argument("--max-room-size", dest="max_room_size", type=int, default=None)
    gen_parser.add_argument("--room-attempts", dest="room_attempts", type=int, default=None)
    gen_parser.add_argument("--winding", dest="winding_chance", type=int, default=None, help="0-100")
    gen_parser.add_argument("--connectivity", dest="connectivity_chance", type=int, default=None, help="0-100")
    gen_parser.add_argument(
        "--collapse-regions",
        dest="collapse_regions",
        action="store_true",
        default=None,
        help="Relabel every floor cell with the surviving region id",
    )
    gen_parser.add_argument("--json", action="store_true", help="Print the dungeon as JSON")
    gen_parser.add_argument("--metrics", action="store_true", help="Print generation metrics after the map")
    gen_parser.add_argument(
        "--no-color",
        dest="color",
        action="store_false",
        help="Disable per-region colors in text output",
    )
    gen_parser.set_defaults(command="generate")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the dungeon HTTP API",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask dungeon API",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 127.0.0.1)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    # If no subcommand provided, default to generate
    if len(argv) == 0:
        argv = ["generate"]

    return parser.parse_args(argv)


def render_text(grid, color: bool) -> str:
    """Text map: '#' for wall, region ids coloured by a fixed cycle when enabled."""
    if not color:
        return grid.render_ascii()
    lines = []
    for row in grid.cells:
        parts = []
        for v in row:
            if v:
                fore = getattr(Fore, _REGION_COLORS[v % len(_REGION_COLORS)])
                parts.append(f"{fore}.{Style.RESET_ALL}")
            else:
                parts.append("#")
        lines.append("".join(parts))
    return "\n".join(lines)


def _run_generate(args) -> int:
    from mazegen.dungeon import Dungeon, GeneratorConfig
    from mazegen.dungeon.seeds import coerce_seed

    try:
        config = GeneratorConfig.from_env(
            width=args.width,
            height=args.height,
            max_room_size=args.max_room_size,
            room_attempts=args.room_attempts,
            winding_chance=args.winding_chance,
            connectivity_chance=args.connectivity_chance,
            collapse_regions=args.collapse_regions,
        ).validate()
    except ValueError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    seed = coerce_seed(args.seed) if args.seed is not None else None
    dungeon = Dungeon(config=config, seed=seed)
    if args.json:
        print(json.dumps(dungeon.to_dict(), separators=(",", ":")))
        return 0
    print(render_text(dungeon.grid, color=_COLOR_ENABLED and args.color))
    print(f"seed={dungeon.seed} size={dungeon.width}x{dungeon.height} rooms={len(dungeon.rooms)}")
    if args.metrics:
        for key, val in dungeon.metrics.items():
            print(f"  {key}: {val}")
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if _COLOR_ENABLED:
        _color_init()  # pragma: no cover - terminal only
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()
    if os.getenv("MAZEGEN_LOG_LEVEL"):
        from mazegen.logging_utils import set_level

        set_level(os.environ["MAZEGEN_LOG_LEVEL"])

    mode = (getattr(args, "command", None) or "generate").lower()
    if mode == "generate":
        return _run_generate(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "127.0.0.1")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))

    title = f"{Fore.CYAN}{Style.BRIGHT}Dungeon API Bootup{Style.RESET_ALL}" if _COLOR_ENABLED else "Dungeon API Bootup"

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Version:'):12} {value(__version__)}",
        divider,
        "",
    ]
    print("\n".join(lines))

    from mazegen.logging_utils import log
    from mazegen.server import start_server

    log.info(event="startup", mode=mode, host=host, port=port)
    start_server(host, port, bool(getattr(args, "debug", False)))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
