"""RAM and swap usage from ``/proc/meminfo``."""

from __future__ import annotations

from dwmkit.status.util import cformat, parse_meminfo, read_text

MEMINFO = "/proc/meminfo"


def _meminfo(path):
    text = read_text(path)
    return None if text is None else parse_meminfo(text)


def _fields(path, *names):
    info = _meminfo(path)
    if info is None or any(name not in info for name in names):
        return None
    return [info[name] for name in names]


def _gib(kib):
    return cformat("%f", kib / 1024 / 1024)


def ram_free(path=MEMINFO):
    """Free memory in GiB."""
    values = _fields(path, "MemFree")
    return None if values is None else _gib(values[0])


def ram_perc(path=MEMINFO):
    """Memory in use, excluding buffers and cache, in percent."""
    values = _fields(path, "MemTotal", "MemFree", "Buffers", "Cached")
    if values is None or values[0] == 0:
        return None
    total, free, buffers, cached = values
    return str(int(100 * ((total - free) - (buffers + cached)) / total))


def ram_total(path=MEMINFO):
    """Total memory in GiB."""
    values = _fields(path, "MemTotal")
    return None if values is None else _gib(values[0])


def ram_used(path=MEMINFO):
    """Used memory, excluding buffers and cache, in GiB."""
    values = _fields(path, "MemTotal", "MemFree", "Buffers", "Cached")
    if values is None:
        return None
    total, free, buffers, cached = values
    return _gib(total - free - buffers - cached)


def swap_free(path=MEMINFO):
    """Free swap in GiB."""
    values = _fields(path, "SwapTotal", "SwapFree")
    return None if values is None else _gib(values[1])


def swap_perc(path=MEMINFO):
    """Swap in use, excluding swap cache, in percent."""
    values = _fields(path, "SwapTotal", "SwapCached", "SwapFree")
    if values is None or values[0] == 0:
        return None
    total, cached, free = values
    return str(int(100 * (total - free - cached) / total))


def swap_total(path=MEMINFO):
    """Total swap in GiB."""
    values = _fields(path, "SwapTotal")
    return None if values is None else _gib(values[0])


def swap_used(path=MEMINFO):
    """Used swap, excluding swap cache, in GiB."""
    values = _fields(path, "SwapTotal", "SwapCached", "SwapFree")
    if values is None:
        return None
    total, cached, free = values
    return _gib(total - free - cached)