"""Moving the selected client up or down the tiled order."""

from __future__ import annotations


def movestack(manager, direction):
    """Swap the selected client with the next (direction > 0) or previous tiled client."""
    mon = manager.selmon
    sel = mon.sel
    if sel is None or sel not in mon.clients:
        return

    def eligible(client):
        return mon.is_visible(client) and not client.is_floating

    index = mon.clients.index(sel)
    target = None
    if direction > 0:
        target = next((c for c in mon.clients[index + 1:] if eligible(c)), None)
        if target is None:
            target = next((c for c in mon.clients if eligible(c)), None)
    else:
        before = [c for c in mon.clients[:index] if eligible(c)]
        if before:
            target = before[-1]
        else:
            rest = [c for c in mon.clients[index:] if eligible(c)]
            target = rest[-1] if rest else None

    if target is None or target is sel:
        return
    other = mon.clients.index(target)
    mon.clients[index], mon.clients[other] = target, sel
    manager.arrange(mon)