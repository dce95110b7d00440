from __future__ import annotations

import logging
import socket
from dataclasses import dataclass
from typing import List, Literal, Mapping

import psutil

AddressFamily = Literal["IPv4", "IPv6"]

_FAMILY_NAMES: Mapping[int, AddressFamily] = {
    socket.AF_INET: "IPv4",
    socket.AF_INET6: "IPv6",
}

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class InterfaceAddress:
    address: str
    family: AddressFamily


def list_interface_addresses() -> List[InterfaceAddress]:
    """Return every IPv4/IPv6 address of the local interfaces in OS order.

    Link-layer entries are skipped and IPv6 zone suffixes (``%eth0``) are
    stripped. Enumeration failures yield an empty list.
    """
    try:
        interfaces = psutil.net_if_addrs()
    except OSError:
        _logger.debug("Network interface enumeration failed", exc_info=True)
        return []

    addresses: List[InterfaceAddress] = []
    for entries in interfaces.values():
        for entry in entries:
            family = _FAMILY_NAMES.get(entry.family)
            if family is None or not entry.address:
                continue
            address = entry.address.split("%", 1)[0] if family == "IPv6" else entry.address
            addresses.append(InterfaceAddress(address=address, family=family))
    _logger.debug("Enumerated interface addresses", extra={"count": len(addresses)})
    return addresses


__all__ = ["AddressFamily", "InterfaceAddress", "list_interface_addresses"]
