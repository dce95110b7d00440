from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional

from rich.text import Text

from src.lib.hostname import (
    DEFAULT_IPV4_ADDR,
    DEFAULT_IPV6_ADDR,
    LOOPBACK_IPV4,
    LOOPBACK_IPV6,
    Hostname,
    resolve_hostname,
)
from src.lib.network import InterfaceAddress, list_interface_addresses
from src.logging.config import Logger
from src.logging.terminal import bold, cyan, dim

InfoSink = Callable[[Text], None]

_logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ServerOptions:
    host: str | bool | None = None
    https: bool = False


def resolve_server_urls(
    hostname: Hostname,
    protocol: str,
    port: int,
    base: str,
    interfaces: Optional[Iterable[InterfaceAddress]] = None,
) -> List[Text]:
    """Build the ``Local:``/``Network:`` lines for a server bound to ``hostname``."""

    if hostname.host == LOOPBACK_IPV4:
        lines = [Text.assemble("  > Local: ", cyan(_url(protocol, hostname.name, port, base)))]
        if hostname.name != LOOPBACK_IPV4:
            lines.append(Text.assemble("  > Network: ", dim("use `--host` to expose")))
        return lines

    if interfaces is None:
        interfaces = list_interface_addresses()

    lines = []
    for detail in interfaces:
        if not detail.address or not _is_listed(detail, hostname.host):
            continue
        label = "Local:   " if detail.address in (LOOPBACK_IPV4, LOOPBACK_IPV6) else "Network: "
        host = hostname.name if detail.address == LOOPBACK_IPV4 else detail.address
        if ":" in host:
            host = f"[{host}]"
        lines.append(Text.assemble(f"  > {label} ", cyan(_url(protocol, host, port, base))))
    return lines


def print_server_urls(
    hostname: Hostname,
    protocol: str,
    port: int,
    base: str,
    info: InfoSink,
    interfaces: Optional[Iterable[InterfaceAddress]] = None,
) -> None:
    for line in resolve_server_urls(hostname, protocol, port, base, interfaces):
        info(line)


def print_common_server_urls(
    server: Any,
    options: ServerOptions,
    *,
    base: str,
    logger: Logger,
    interfaces: Optional[Iterable[InterfaceAddress]] = None,
) -> None:
    """Print the URLs a listening server is reachable on.

    ``server`` is a bound socket or a ``socketserver``-style object exposing
    ``server_address``. Servers without an IP address (unix sockets) print
    nothing.
    """
    port = _bound_port(server)
    if port is None:
        _logger.debug("Server has no IP address; skipping URL report")
        return
    hostname = resolve_hostname(options.host)
    protocol = "https" if options.https else "http"
    print_server_urls(hostname, protocol, port, base, logger.info, interfaces)


def print_http_server_urls(
    server: Any,
    options: ServerOptions,
    *,
    base: str,
    logger: Logger,
    interfaces: Optional[Iterable[InterfaceAddress]] = None,
) -> None:
    warnings.warn(
        "print_http_server_urls() is deprecated, use print_common_server_urls() instead",
        DeprecationWarning,
        stacklevel=2,
    )
    print_common_server_urls(server, options, base=base, logger=logger, interfaces=interfaces)


# Internal helpers -------------------------------------------------
def _is_listed(detail: InterfaceAddress, host: Optional[str]) -> bool:
    if detail.family == "IPv6":
        # Only show an IPv6 url when the host names it and isn't ::
        return bool(host) and detail.address in host and host != DEFAULT_IPV6_ADDR
    return (
        host is None
        or host == DEFAULT_IPV4_ADDR
        or host == DEFAULT_IPV6_ADDR
        or detail.address in host
        # 127.0.0.1 stands in for every other host except ::1; it is shown
        # under the display name
        or (detail.address == LOOPBACK_IPV4 and host != LOOPBACK_IPV6)
    )


def _url(protocol: str, host: str, port: int, base: str) -> Text:
    return Text.assemble(f"{protocol}://{host}:", bold(str(port)), base)


def _bound_port(server: Any) -> Optional[int]:
    if hasattr(server, "getsockname"):
        address = server.getsockname()
    else:
        address = getattr(server, "server_address", None)
    if isinstance(address, tuple) and len(address) >= 2 and address[0]:
        return int(address[1])
    return None


__all__ = [
    "ServerOptions",
    "resolve_server_urls",
    "print_server_urls",
    "print_common_server_urls",
    "print_http_server_urls",
]
