"""Command-line preview of generated worlds."""

import argparse
import logging
import sys
import tomllib

import structlog


def render_chunks(
    world, chunk_x: int, chunk_y: int, chunks_x: int, chunks_y: int
) -> list[str]:
    """Generate a block of chunks and return it as text lines.

    Horizontally adjacent chunks are joined into the same lines.
    """
    lines: list[str] = []
    for cy in range(chunk_y, chunk_y + chunks_y):
        band = [world.generate(cx, cy) for cx in range(chunk_x, chunk_x + chunks_x)]
        for row_parts in zip(*band):
            lines.append("".join(str(value) for part in row_parts for value in part))
    return lines


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for world previews."""
    parser = argparse.ArgumentParser(
        description="Print tiles generated from a world config"
    )
    parser.add_argument("config", type=str, help="Path or name of a world TOML config")
    parser.add_argument(
        "--chunk",
        type=int,
        nargs=2,
        default=(0, 0),
        metavar=("X", "Y"),
        help="Top-left chunk coordinates (default: 0 0)",
    )
    parser.add_argument(
        "--chunks-x", type=int, default=1, help="Number of chunks across (default: 1)"
    )
    parser.add_argument(
        "--chunks-y", type=int, default=1, help="Number of chunks down (default: 1)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )

    args = parser.parse_args(argv)

    # Configure structlog
    level = logging.DEBUG if args.verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )
    logger = structlog.get_logger()

    # Import here to avoid slow startup for --help
    from pydantic import ValidationError

    from .config import build_world, find_config, load_config
    from .exceptions import WorldgenError

    try:
        config_path = find_config(args.config)
    except FileNotFoundError as e:
        logger.error("config_not_found", path=args.config, error=str(e))
        return 1

    try:
        config = load_config(config_path)
    except (tomllib.TOMLDecodeError, ValidationError) as e:
        logger.error("config_invalid", path=str(config_path), error=str(e))
        return 1
    logger.info("config_loaded", path=str(config_path))

    chunk_x, chunk_y = args.chunk
    try:
        world = build_world(config)
        lines = render_chunks(world, chunk_x, chunk_y, args.chunks_x, args.chunks_y)
    except WorldgenError as e:
        logger.error("generation_failed", error=str(e))
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
