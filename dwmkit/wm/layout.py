"""Tiling arrangements for a monitor's visible, non-floating clients.

Each arrangement takes the window manager and the monitor to arrange, and
places clients through ``manager.resize(client, x, y, w, h, interact)``.
"""

from __future__ import annotations

from dwmkit.wm.model import LTSYMBOL_MAX, Layout


def tile(manager, monitor):
    """Master area on the left, the remaining clients stacked on the right."""
    clients = monitor.tiled()
    n = len(clients)
    if n == 0:
        return
    if n > monitor.nmaster:
        master_w = int(monitor.ww * monitor.mfact) if monitor.nmaster else 0
    else:
        master_w = monitor.ww
    master_y = stack_y = 0
    for i, client in enumerate(clients):
        if i < monitor.nmaster:
            h = (monitor.wh - master_y) // (min(n, monitor.nmaster) - i)
            manager.resize(
                client,
                monitor.wx,
                monitor.wy + master_y,
                master_w - 2 * client.bw,
                h - 2 * client.bw,
                False,
            )
            if master_y + client.outer_height() < monitor.wh:
                master_y += client.outer_height()
        else:
            h = (monitor.wh - stack_y) // (n - i)
            manager.resize(
                client,
                monitor.wx + master_w,
                monitor.wy + stack_y,
                monitor.ww - master_w - 2 * client.bw,
                h - 2 * client.bw,
                False,
            )
            if stack_y + client.outer_height() < monitor.wh:
                stack_y += client.outer_height()


def monocle(manager, monitor):
    """Every tiled client fills the whole window area; the symbol shows the count."""
    visible = sum(1 for client in monitor.clients if monitor.is_visible(client))
    if visible > 0:
        monitor.ltsymbol = f"[{visible}]"[:LTSYMBOL_MAX]
    for client in monitor.tiled():
        manager.resize(
            client,
            monitor.wx,
            monitor.wy,
            monitor.ww - 2 * client.bw,
            monitor.wh - 2 * client.bw,
            False,
        )


def grid(manager, monitor):
    """Clients in a near-square grid of equal cells, filled row by row."""
    clients = monitor.tiled()
    n = len(clients)
    if n == 0:
        return
    limit = n // 2
    cols = next((c for c in range(limit + 1) if c * c >= n), limit + 1)
    rows = cols - 1 if cols and (cols - 1) * cols >= n else cols
    cell_w = monitor.ww // cols
    cell_h = monitor.wh // rows
    for i, client in enumerate(clients):
        col, row = i % cols, i // cols
        manager.resize(
            client,
            monitor.wx + col * cell_w,
            monitor.wy + row * cell_h,
            cell_w - 2 * client.bw,
            cell_h - 2 * client.bw,
            False,
        )


def columns(manager, monitor):
    """Clients side by side in equal columns; the last takes what rounding leaves."""
    clients = monitor.tiled()
    n = len(clients)
    if n == 0:
        return
    width = monitor.ww // n
    x = monitor.wx
    right = monitor.wx + monitor.ww
    for i, client in enumerate(clients):
        column_w = right - x if i == n - 1 else width
        manager.resize(
            client,
            x,
            monitor.wy,
            column_w - 2 * client.bw,
            monitor.wh - 2 * client.bw,
            False,
        )
        x += column_w


def default_layouts():
    """The available layouts; the first is the default, ``><>`` floats."""
    return [
        Layout("[]=", tile),
        Layout("><>", None),
        Layout("[M]", monocle),
        Layout("###", grid),
        Layout("|||", columns),
    ]