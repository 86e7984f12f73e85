"""Command-line interface for inferstat."""

import argparse
import logging
import sys

from inferstat import __version__
from inferstat.config import get_settings


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    settings = get_settings()

    parser = argparse.ArgumentParser(
        prog="inferstat",
        description="Inferential statistics service for data-exploration front ends",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Start the API server",
    )
    parser.add_argument(
        "--host",
        default=settings.api_host,
        help=f"API server host (default: {settings.api_host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.api_port,
        help=f"API server port (default: {settings.api_port})",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=f"Logging level (default: {settings.log_level})",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.serve:
        try:
            import uvicorn

            from inferstat.api.app import app

            uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())
        except ImportError as e:
            print(f"Error: {e}. Make sure uvicorn is installed.", file=sys.stderr)
            return 1
    else:
        parser.print_help()

    return 0


if __name__ == "__main__":
    sys.exit(main())
