"""
=============================================================================
CHIRPY CLI
=============================================================================

    python -m chirpy                        # 0.0.0.0:8080, serve the cwd
    python -m chirpy --port 3000
    python -m chirpy --static ./public --log-format json
    chirpy -w 8 -l DEBUG                    # console script, same flags

Settings come from CHIRPY_* environment variables first (see
chirpy.config); any flag given on the command line overrides them.

Exit status is 1 when the configuration is invalid or the port cannot be
bound.

=============================================================================
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import Optional

from . import __version__
from .app import create_app
from .config import ServerConfig

logger = logging.getLogger("chirpy")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chirpy",
        description="Chirpy: health check, static files, hit metrics and chirp validation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  chirpy                          # Listen on 0.0.0.0:8080, serve current directory
  chirpy --port 3000              # Custom port
  chirpy --static ./public        # Serve another directory under /app/
  chirpy --log-format json        # JSON access log
        """
    )

    parser.add_argument(
        "--host", "-H",
        default=None,
        help="Host to bind to (default: 0.0.0.0)"
    )
    parser.add_argument(
        "--port", "-p",
        type=int,
        default=None,
        help="Port to listen on (default: 8080)"
    )
    parser.add_argument(
        "--workers", "-w",
        type=int,
        default=None,
        help="Minimum worker threads; up to twice as many are started under load"
    )
    parser.add_argument(
        "--static", "-s",
        default=None,
        help="Directory to serve static files from (default: current directory)"
    )
    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)"
    )
    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        default=None,
        help="Access log format (default: text)"
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"Chirpy {__version__}"
    )
    return parser


def config_from_args(args: argparse.Namespace, base: Optional[ServerConfig] = None) -> ServerConfig:
    """Overlay the flags that were actually given on ``base`` (or the environment)."""
    config = base or ServerConfig.from_env()
    overrides = {}

    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.workers is not None:
        overrides["min_workers"] = args.workers
        overrides["max_workers"] = args.workers * 2
    if args.static is not None:
        overrides["static_dir"] = args.static
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    if args.log_format is not None:
        overrides["log_format"] = args.log_format

    return replace(config, **overrides)


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = config_from_args(args)
        server = create_app(config)
    except ValueError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        server.run()
    except OSError as e:
        logger.error(f"Server failed to start: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
