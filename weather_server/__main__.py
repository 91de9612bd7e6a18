"""Command-line entrypoint: ``python -m weather_server``."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Tuple

import structlog
import uvicorn

from weather_server.app import create_app
from weather_server.config import get_settings
from weather_server.logging import configure_logging


logger = structlog.get_logger("weather_server")

GRACEFUL_SHUTDOWN_SECONDS = 30


def split_socket_addr(value: str) -> Tuple[str, int]:
    """Split ``HOST:PORT`` (``[::1]:PORT`` for IPv6) into its parts."""

    host, sep, port = value.strip().rpartition(":")
    if not sep or not host or not port.isdigit():
        raise argparse.ArgumentTypeError(f"invalid socket address {value!r}, expected HOST:PORT")
    port_number = int(port)
    if not 0 < port_number < 65536:
        raise argparse.ArgumentTypeError(f"port out of range in {value!r}")
    return host.strip("[]"), port_number


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Cardea Weather MCP server")
    parser.add_argument(
        "-s",
        "--socket-addr",
        type=split_socket_addr,
        default=split_socket_addr(settings.socket_addr),
        help=f"Socket address to bind to (default: {settings.socket_addr})",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Log level (default: %(default)s)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(level=args.log_level)
    host, port = args.socket_addr

    logger.info("server.start", host=host, port=port)
    # uvicorn drains in-flight requests on SIGINT/SIGTERM before exiting
    uvicorn.run(
        create_app(host),
        host=host,
        port=port,
        log_config=None,
        timeout_graceful_shutdown=GRACEFUL_SHUTDOWN_SECONDS,
    )
    logger.info("server.stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
