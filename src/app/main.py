from __future__ import annotations

import argparse
import logging
import socket
import sys
from typing import Optional, Sequence

from src.core.errors import ServerBindError
from src.core.levels import LOG_LEVELS
from src.lib.environment import env_flag
from src.lib.hostname import DEFAULT_IPV4_ADDR, resolve_hostname
from src.logging.config import LoggerOptions, configure_logging, create_logger
from src.services.url_reporter import ServerOptions, print_common_server_urls


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="devconsole-urls",
        description="Bind a local port and print the URLs it is reachable on.",
    )
    parser.add_argument(
        "--host",
        nargs="?",
        const=True,
        default=None,
        help="address to bind; pass the bare flag to listen on all interfaces",
    )
    parser.add_argument("--port", type=int, default=0, help="port to bind (0 picks a free one)")
    parser.add_argument("--https", action="store_true", help="print https:// URLs")
    parser.add_argument("--base", default="/", help="public base path appended to every URL")
    parser.add_argument("--log-level", choices=list(LOG_LEVELS), default="info")
    parser.add_argument("--no-clear-screen", action="store_true")
    parser.add_argument("--debug", action="store_true", help="emit diagnostic logs on stderr")
    return parser


def bind_server(host: Optional[str], port: int) -> socket.socket:
    bind_host = host or DEFAULT_IPV4_ADDR
    family = socket.AF_INET6 if ":" in bind_host else socket.AF_INET
    try:
        return socket.create_server((bind_host, port), family=family)
    except OSError as exc:
        raise ServerBindError(
            f"Could not bind {bind_host}:{port} ({exc.strerror or exc}).",
            title="Bind Failed",
            remediation="Pick another --port or check that --host is a local address.",
        ) from exc


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.debug or env_flag("DEVCONSOLE_DEBUG"):
        configure_logging(level=logging.DEBUG)

    logger = create_logger(args.log_level, LoggerOptions(allow_clear_screen=not args.no_clear_screen))
    options = ServerOptions(host=args.host, https=args.https)
    hostname = resolve_hostname(options.host)

    try:
        server = bind_server(hostname.host, args.port)
    except ServerBindError as exc:
        logger.error(f"{exc.title}: {exc} {exc.remediation}", error=exc)
        return 1

    with server:
        logging.getLogger(__name__).info(
            "Server bound",
            extra={"host": hostname.host, "port": server.getsockname()[1]},
        )
        print_common_server_urls(server, options, base=args.base, logger=logger)
    return 0


if __name__ == "__main__":
    sys.exit(main())
