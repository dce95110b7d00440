"""Hostname resolution for dev server URLs.

Maps the user's ``host`` option onto the address to bind and the name to
show in printed URLs.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_IPV4_ADDR = "0.0.0.0"
DEFAULT_IPV6_ADDR = "::"
LOOPBACK_IPV4 = "127.0.0.1"
LOOPBACK_IPV6 = "::1"

WILDCARD_HOSTS = (DEFAULT_IPV4_ADDR, DEFAULT_IPV6_ADDR)


@dataclass(frozen=True, slots=True)
class Hostname:
    # None means listen on all interfaces
    host: Optional[str]
    name: str


def resolve_hostname(option_host: str | bool | None) -> Hostname:
    """Resolve the ``host`` option into a bind host and a display name.

    - ``None``, ``False`` or ``"localhost"`` bind to the IPv4 loopback
    - ``True`` binds to every interface (host ``None``)
    - any other string is used verbatim

    The display name is ``localhost`` for loopback, wildcard or unset hosts,
    unless the user explicitly asked for ``127.0.0.1``.
    """
    host: Optional[str]
    if option_host is None or option_host is False or option_host == "localhost":
        host = LOOPBACK_IPV4
    elif option_host is True:
        host = None
    else:
        host = str(option_host)

    if (option_host != LOOPBACK_IPV4 and host == LOOPBACK_IPV4) or host is None or host in WILDCARD_HOSTS:
        name = "localhost"
    else:
        name = host
    return Hostname(host=host, name=name)


__all__ = [
    "DEFAULT_IPV4_ADDR",
    "DEFAULT_IPV6_ADDR",
    "LOOPBACK_IPV4",
    "LOOPBACK_IPV6",
    "WILDCARD_HOSTS",
    "Hostname",
    "resolve_hostname",
]
