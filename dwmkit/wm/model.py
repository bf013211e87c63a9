"""Geometry, clients, layouts, rules and monitors: the state a tiling window manager keeps."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, List, Optional

#: Longest layout symbol shown in the bar.
LTSYMBOL_MAX = 15


@dataclass
class Rect:
    """An axis-aligned rectangle."""

    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0

    def intersect_area(self, other):
        """Area shared by this rectangle and ``other``; 0 when they do not overlap."""
        dx = min(self.x + self.w, other.x + other.w) - max(self.x, other.x)
        dy = min(self.y + self.h, other.y + other.h) - max(self.y, other.y)
        return max(0, dx) * max(0, dy)


@dataclass
class SizeHints:
    """The ICCCM normal size hints of a client, reduced to what placement needs."""

    basew: int = 0
    baseh: int = 0
    incw: int = 0
    inch: int = 0
    maxw: int = 0
    maxh: int = 0
    minw: int = 0
    minh: int = 0
    mina: float = 0.0
    maxa: float = 0.0

    def is_fixed(self):
        """True when the hints pin the client to a single size."""
        return bool(
            self.maxw and self.maxh
            and self.maxw == self.minw and self.maxh == self.minh
        )


def _fdiv(a, b):
    if b == 0:
        if a > 0:
            return math.inf
        if a < 0:
            return -math.inf
        return math.nan
    return a / b


def _cmod(a, b):
    quotient = abs(a) // abs(b)
    if (a >= 0) != (b >= 0):
        quotient = -quotient
    return a - b * quotient


def apply_size_hints(hints, current, x, y, w, h, border, interact, screen, area,
                     bar_height, use_hints):
    """Constrain a requested geometry.

    ``current`` is the client's present geometry, ``screen`` the whole display,
    ``area`` the monitor's window area. With ``interact`` the client is kept on
    the screen, otherwise on the monitor. Size hints are honoured only when
    ``use_hints`` is true. Returns the adjusted ``Rect`` and whether it differs
    from ``current``.
    """
    w = max(1, w)
    h = max(1, h)
    outer_w = current.w + 2 * border
    outer_h = current.h + 2 * border
    if interact:
        if x > screen.w:
            x = screen.w - outer_w
        if y > screen.h:
            y = screen.h - outer_h
        if x + w + 2 * border < 0:
            x = 0
        if y + h + 2 * border < 0:
            y = 0
    else:
        if x >= area.x + area.w:
            x = area.x + area.w - outer_w
        if y >= area.y + area.h:
            y = area.y + area.h - outer_h
        if x + w + 2 * border <= area.x:
            x = area.x
        if y + h + 2 * border <= area.y:
            y = area.y
    h = max(h, bar_height)
    w = max(w, bar_height)
    if use_hints:
        # see the last two sentences in ICCCM 4.1.2.3
        base_is_min = hints.basew == hints.minw and hints.baseh == hints.minh
        if not base_is_min:
            w -= hints.basew
            h -= hints.baseh
        if hints.mina > 0 and hints.maxa > 0:
            if hints.maxa < _fdiv(w, h):
                w = int(h * hints.maxa + 0.5)
            elif hints.mina < _fdiv(h, w):
                h = int(w * hints.mina + 0.5)
        if base_is_min:
            w -= hints.basew
            h -= hints.baseh
        if hints.incw:
            w -= _cmod(w, hints.incw)
        if hints.inch:
            h -= _cmod(h, hints.inch)
        w = max(w + hints.basew, hints.minw)
        h = max(h + hints.baseh, hints.minh)
        if hints.maxw:
            w = min(w, hints.maxw)
        if hints.maxh:
            h = min(h, hints.maxh)
    result = Rect(x, y, w, h)
    changed = (x, y, w, h) != (current.x, current.y, current.w, current.h)
    return result, changed


@dataclass(frozen=True)
class Layout:
    """A named arrangement; ``arrange`` is None for floating layouts."""

    symbol: str
    arrange: Optional[Callable] = None


@dataclass(frozen=True)
class Rule:
    """Initial tags, floating state and monitor for windows that match."""

    class_name: Optional[str] = None
    instance: Optional[str] = None
    title: Optional[str] = None
    tags: int = 0
    is_floating: bool = False
    monitor: int = -1


@dataclass(eq=False)
class Client:
    """A managed top-level window."""

    window: int = 0
    name: str = ""
    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0
    old_x: int = 0
    old_y: int = 0
    old_w: int = 0
    old_h: int = 0
    bw: int = 0
    old_bw: int = 0
    tags: int = 0
    hints: SizeHints = field(default_factory=SizeHints)
    hints_valid: bool = False
    is_fixed: bool = False
    is_floating: bool = False
    is_urgent: bool = False
    never_focus: bool = False
    old_state: bool = False
    is_fullscreen: bool = False
    mon: Optional["Monitor"] = field(default=None, repr=False)

    def outer_width(self):
        """Width including both borders."""
        return self.w + 2 * self.bw

    def outer_height(self):
        """Height including both borders."""
        return self.h + 2 * self.bw


@dataclass
class Pertag:
    """Layout settings remembered per tag; index 0 stands for the all-tags view."""

    curtag: int = 1
    prevtag: int = 1
    nmasters: List[int] = field(default_factory=list)
    mfacts: List[float] = field(default_factory=list)
    sellts: List[int] = field(default_factory=list)
    ltidxs: List[List[Layout]] = field(default_factory=list)
    showbars: List[bool] = field(default_factory=list)


class Monitor:
    """One screen: its geometry, its clients in order and in focus history."""

    def __init__(self, layouts, mfact, nmaster, showbar, topbar, ntags):
        layouts = list(layouts)
        if not layouts:
            raise ValueError("at least one layout is required")
        self.mfact = mfact
        self.nmaster = nmaster
        self.num = 0
        self.by = 0
        self.mx = self.my = self.mw = self.mh = 0
        self.wx = self.wy = self.ww = self.wh = 0
        self.seltags = 0
        self.sellt = 0
        self.tagset = [1, 1]
        self.showbar = bool(showbar)
        self.topbar = bool(topbar)
        self.clients: List[Client] = []
        self.stack: List[Client] = []
        self.sel: Optional[Client] = None
        self.lt = [layouts[0], layouts[1 % len(layouts)]]
        self.ltsymbol = layouts[0].symbol[:LTSYMBOL_MAX]
        count = ntags + 1
        self.pertag = Pertag(
            curtag=1,
            prevtag=1,
            nmasters=[nmaster] * count,
            mfacts=[mfact] * count,
            sellts=[self.sellt] * count,
            ltidxs=[[self.lt[0], self.lt[1]] for _ in range(count)],
            showbars=[self.showbar] * count,
        )

    def __repr__(self):
        return (
            f"Monitor(num={self.num}, geometry=({self.mx}, {self.my}, "
            f"{self.mw}, {self.mh}), clients={len(self.clients)})"
        )

    def current_layout(self):
        """The selected layout."""
        return self.lt[self.sellt]

    def is_visible(self, client):
        """True when ``client`` has a tag in the selected tag set."""
        return bool(client.tags & self.tagset[self.seltags])

    def attach(self, client):
        """Put ``client`` first in the client list."""
        client.mon = self
        self.clients.insert(0, client)

    def attach_stack(self, client):
        """Put ``client`` on top of the focus stack."""
        self.stack.insert(0, client)

    def detach(self, client):
        """Remove ``client`` from the client list."""
        if client in self.clients:
            self.clients.remove(client)

    def detach_stack(self, client):
        """Remove ``client`` from the focus stack, reselecting if it was selected."""
        if client in self.stack:
            self.stack.remove(client)
        if client is self.sel:
            self.sel = next((c for c in self.stack if self.is_visible(c)), None)

    def tiled(self):
        """Visible, non-floating clients in client-list order."""
        return [c for c in self.clients if not c.is_floating and self.is_visible(c)]

    def update_bar_pos(self, bar_height):
        """Recompute the window area and bar position from the monitor geometry."""
        self.wy = self.my
        self.wh = self.mh
        if self.showbar:
            self.wh -= bar_height
            self.by = self.wy if self.topbar else self.wy + self.wh
            self.wy = self.wy + bar_height if self.topbar else self.wy
        else:
            self.by = -bar_height