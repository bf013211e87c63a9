"""Network addresses and wireless link information."""

from __future__ import annotations

import array
import re
import socket
import struct
import sys
from pathlib import Path

import psutil

from dwmkit.status.util import cformat

SYS_CLASS_NET = "/sys/class/net"
PROC_NET_WIRELESS = "/proc/net/wireless"

_WIRELESS_MAX = 70
_SIOCGIWESSID = 0x8B1B
_IW_ESSID_MAX_SIZE = 32
_IWREQ_SIZE = 32


def _address(iface, family):
    try:
        interfaces = psutil.net_if_addrs()
    except OSError as exc:
        print(f"getifaddrs: {exc.strerror or exc}", file=sys.stderr)
        return None
    for addr in interfaces.get(iface, ()):
        if addr.family == family:
            return addr.address
    return None


def ipv4(iface):
    """The IPv4 address of ``iface``, or None."""
    return _address(iface, socket.AF_INET)


def ipv6(iface):
    """The IPv6 address of ``iface``, or None."""
    return _address(iface, socket.AF_INET6)


def parse_wireless(text, iface):
    """Link quality of ``iface`` from ``/proc/net/wireless`` text, or None."""
    lines = text.splitlines()
    if len(lines) < 3:
        return None
    line = lines[2]
    start = line.find(iface)
    if start == -1:
        return None
    rest = line[start + len(iface) + 2:]
    match = re.match(r"\s*[+-]?\d+(?!\d)\s*([+-]?\d+)", rest)
    return int(match.group(1)) if match else None


def wifi_perc(iface, sysfs=SYS_CLASS_NET, wireless=PROC_NET_WIRELESS):
    """Wireless link quality of ``iface`` in percent, or None when the link is down."""
    operstate = Path(sysfs) / iface / "operstate"
    try:
        with open(operstate, encoding="utf-8", errors="replace") as handle:
            status = handle.readline()[:4]
    except OSError as exc:
        print(f"fopen '{operstate}': {exc.strerror or exc}", file=sys.stderr)
        return None
    if status != "up\n":
        return None
    try:
        with open(wireless, encoding="utf-8", errors="replace") as handle:
            text = handle.read()
    except OSError as exc:
        print(f"fopen '{wireless}': {exc.strerror or exc}", file=sys.stderr)
        return None
    quality = parse_wireless(text, iface)
    if quality is None:
        return None
    return cformat("%.0f", quality / _WIRELESS_MAX * 100.0)


def wifi_essid(iface):
    """The ESSID ``iface`` is associated with, or None."""
    import fcntl

    essid = array.array("B", bytes(_IW_ESSID_MAX_SIZE + 1))
    address, _ = essid.buffer_info()
    request = struct.pack(
        "16sPHH", iface.encode()[:15], address, _IW_ESSID_MAX_SIZE + 1, 0
    ).ljust(_IWREQ_SIZE, b"\0")
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    except OSError as exc:
        print(f"socket 'AF_INET': {exc.strerror or exc}", file=sys.stderr)
        return None
    with sock:
        try:
            fcntl.ioctl(sock.fileno(), _SIOCGIWESSID, request)
        except OSError as exc:
            print(f"ioctl 'SIOCGIWESSID': {exc.strerror or exc}", file=sys.stderr)
            return None
    name = essid.tobytes().split(b"\0", 1)[0].decode(errors="replace")
    return name or None