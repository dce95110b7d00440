from __future__ import annotations

import socket
from collections import namedtuple

import psutil
import pytest

from src.lib.network import InterfaceAddress, list_interface_addresses

snicaddr = namedtuple("snicaddr", "family address netmask broadcast ptp")


def _addr(family: int, address: str) -> snicaddr:
    return snicaddr(family, address, None, None, None)


def test_lists_inet_addresses_in_interface_order(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        psutil,
        "net_if_addrs",
        lambda: {
            "lo": [_addr(socket.AF_INET, "127.0.0.1"), _addr(socket.AF_INET6, "::1")],
            "eth0": [
                _addr(psutil.AF_LINK, "aa:bb:cc:dd:ee:ff"),
                _addr(socket.AF_INET, "192.168.1.5"),
                _addr(socket.AF_INET6, "fe80::1%eth0"),
            ],
        },
    )

    assert list_interface_addresses() == [
        InterfaceAddress("127.0.0.1", "IPv4"),
        InterfaceAddress("::1", "IPv6"),
        InterfaceAddress("192.168.1.5", "IPv4"),
        InterfaceAddress("fe80::1", "IPv6"),
    ]


def test_enumeration_failure_yields_no_addresses(monkeypatch: pytest.MonkeyPatch) -> None:
    def _broken() -> dict:
        raise OSError("netlink unavailable")

    monkeypatch.setattr(psutil, "net_if_addrs", _broken)

    assert list_interface_addresses() == []


def test_real_interfaces_are_inet_only() -> None:
    addresses = list_interface_addresses()

    assert all(item.family in ("IPv4", "IPv6") for item in addresses)
    assert all("%" not in item.address for item in addresses)
