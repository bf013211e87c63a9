"""The window manager's state machine: monitors, clients, tags, focus and layouts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from dwmkit.wm.layout import default_layouts
from dwmkit.wm.model import (
    LTSYMBOL_MAX,
    Client,
    Layout,
    Monitor,
    Rect,
    Rule,
    apply_size_hints,
)

#: Placeholder title given to clients that report no name.
BROKEN = "broken"
#: The largest number of tags that fit in the tag bit mask.
MAX_TAGS = 31

_UINT = 0xFFFFFFFF


def _cdiv(a, b):
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def _lowest_bit(mask):
    return (mask & -mask).bit_length() - 1


@dataclass
class Config:
    """Settings of the window manager."""

    tags: Tuple[str, ...] = ("1", "2", "3", "4", "5", "6", "7", "8", "9")
    rules: Sequence[Rule] = ()
    layouts: Sequence[Layout] = field(default_factory=default_layouts)
    mfact: float = 0.55
    nmaster: int = 1
    showbar: bool = True
    topbar: bool = True
    borderpx: int = 1
    snap: int = 32
    resizehints: bool = True
    lockfullscreen: bool = True
    bar_height: int = 20

    def __post_init__(self):
        self.tags = tuple(self.tags)
        if not self.tags:
            raise ValueError("at least one tag is required")
        if len(self.tags) > MAX_TAGS:
            raise ValueError(f"at most {MAX_TAGS} tags are supported")
        self.layouts = list(self.layouts)
        if not self.layouts:
            raise ValueError("at least one layout is required")


class WindowManager:
    """Keeps monitors and their clients, and carries out the user's commands."""

    def __init__(self, config=None, screens=None):
        self.config = config if config is not None else Config()
        self.monitors = []
        self.selmon: Optional[Monitor] = None
        self.sw = 0
        self.sh = 0
        if screens is None:
            screens = [Rect(0, 0, 1920, 1080)]
        self.update_geometry(screens)

    def tagmask(self):
        """Bit mask with one bit for every configured tag."""
        return (1 << len(self.config.tags)) - 1

    # monitors -------------------------------------------------------------

    def _create_monitor(self):
        cfg = self.config
        return Monitor(cfg.layouts, cfg.mfact, cfg.nmaster, cfg.showbar, cfg.topbar,
                       len(cfg.tags))

    def update_geometry(self, screens):
        """Match the monitors to the given screen rectangles; True if anything changed."""
        unique = []
        for screen in screens:
            rect = Rect(screen.x, screen.y, screen.w, screen.h)
            if rect not in unique:
                unique.append(rect)
        if not unique:
            raise ValueError("at least one screen is required")
        self.sw = max(r.x + r.w for r in unique)
        self.sh = max(r.y + r.h for r in unique)
        bar_height = self.config.bar_height
        dirty = False
        count = len(self.monitors)
        while len(self.monitors) < len(unique):
            self.monitors.append(self._create_monitor())
        for i, (mon, rect) in enumerate(zip(self.monitors, unique)):
            if i >= count or (rect.x, rect.y, rect.w, rect.h) != (mon.mx, mon.my, mon.mw, mon.mh):
                dirty = True
                mon.num = i
                mon.mx = mon.wx = rect.x
                mon.my = mon.wy = rect.y
                mon.mw = mon.ww = rect.w
                mon.mh = mon.wh = rect.h
                mon.update_bar_pos(bar_height)
        while len(self.monitors) > len(unique):
            mon = self.monitors[-1]
            target = self.monitors[0]
            for client in list(mon.clients):
                dirty = True
                mon.detach(client)
                mon.detach_stack(client)
                target.attach(client)
                target.attach_stack(client)
            if mon is self.selmon:
                self.selmon = target
            self.monitors.pop()
        if dirty or self.selmon is None:
            self.selmon = self.monitors[0]
        return dirty

    def dirtomon(self, direction):
        """The monitor after (direction > 0) or before the selected one, wrapping."""
        index = self.monitors.index(self.selmon)
        if direction > 0:
            return self.monitors[(index + 1) % len(self.monitors)]
        return self.monitors[index - 1]

    def recttomon(self, x, y, w, h):
        """The monitor whose window area overlaps the rectangle most; the selected one if none."""
        best, area = self.selmon, 0
        rect = Rect(x, y, w, h)
        for mon in self.monitors:
            shared = rect.intersect_area(Rect(mon.wx, mon.wy, mon.ww, mon.wh))
            if shared > area:
                best, area = mon, shared
        return best

    # clients --------------------------------------------------------------

    def _find(self, window):
        for mon in self.monitors:
            for client in mon.clients:
                if client.window == window:
                    return client
        return None

    def _is_managed(self, client):
        return any(client in mon.clients for mon in self.monitors)

    def apply_rules(self, client, class_name, instance):
        """Set tags, floating state and monitor of ``client`` from the matching rules."""
        if client.mon is None:
            client.mon = self.selmon
        class_name = class_name if class_name is not None else BROKEN
        instance = instance if instance is not None else BROKEN
        client.is_floating = False
        client.tags = 0
        for rule in self.config.rules:
            if ((rule.title is None or rule.title in client.name)
                    and (rule.class_name is None or rule.class_name in class_name)
                    and (rule.instance is None or rule.instance in instance)):
                client.is_floating = rule.is_floating
                client.tags |= rule.tags
                target = next((m for m in self.monitors if m.num == rule.monitor), None)
                if target is not None:
                    client.mon = target
        mask = client.tags & self.tagmask()
        client.tags = mask if mask else client.mon.tagset[client.mon.seltags]

    def manage(self, client, class_name=None, instance=None, transient_for=None):
        """Start managing ``client``, whose geometry holds the window's own request."""
        if self._is_managed(client) or self._find(client.window) is not None:
            raise ValueError(f"window {client.window} is already managed")
        client.old_x, client.old_y = client.x, client.y
        client.old_w, client.old_h = client.w, client.h
        client.old_bw = client.bw
        if not client.name:
            client.name = BROKEN
        parent = transient_for
        if parent is not None and not isinstance(parent, Client):
            parent = self._find(parent)
        if isinstance(parent, Client) and self._is_managed(parent):
            client.mon = parent.mon
            client.tags = parent.tags
        else:
            client.mon = self.selmon
            self.apply_rules(client, class_name, instance)
        mon = client.mon
        if client.x + client.outer_width() > mon.wx + mon.ww:
            client.x = mon.wx + mon.ww - client.outer_width()
        if client.y + client.outer_height() > mon.wy + mon.wh:
            client.y = mon.wy + mon.wh - client.outer_height()
        client.x = max(client.x, mon.wx)
        client.y = max(client.y, mon.wy)
        client.bw = self.config.borderpx
        client.is_fixed = client.hints.is_fixed()
        client.hints_valid = True
        client.x = mon.mx + _cdiv(mon.mw - client.outer_width(), 2)
        client.y = mon.my + _cdiv(mon.mh - client.outer_height(), 2)
        if not client.is_floating:
            client.is_floating = client.old_state = (
                transient_for is not None or client.is_fixed
            )
        mon.attach(client)
        mon.attach_stack(client)
        mon.sel = client
        self.arrange(mon)
        self.focus(None)
        return client

    def unmanage(self, client):
        """Stop managing ``client``."""
        mon = client.mon
        if mon is None:
            raise ValueError("client is not managed")
        mon.detach(client)
        mon.detach_stack(client)
        self.focus(None)
        self.arrange(mon)

    def _resize_client(self, client, x, y, w, h):
        client.old_x, client.x = client.x, x
        client.old_y, client.y = client.y, y
        client.old_w, client.w = client.w, w
        client.old_h, client.h = client.h, h

    def resize(self, client, x, y, w, h, interact):
        """Move and resize ``client`` within its constraints; True if it changed."""
        mon = client.mon
        use_hints = (self.config.resizehints or client.is_floating
                     or mon.current_layout().arrange is None)
        rect, changed = apply_size_hints(
            client.hints,
            Rect(client.x, client.y, client.w, client.h),
            x, y, w, h,
            client.bw,
            interact,
            Rect(0, 0, self.sw, self.sh),
            Rect(mon.wx, mon.wy, mon.ww, mon.wh),
            self.config.bar_height,
            use_hints,
        )
        if changed:
            self._resize_client(client, rect.x, rect.y, rect.w, rect.h)
        return changed

    def _showhide(self, mon):
        for client in mon.stack:
            if (mon.is_visible(client) and not client.is_fullscreen
                    and (mon.current_layout().arrange is None or client.is_floating)):
                self.resize(client, client.x, client.y, client.w, client.h, False)

    def _arrangemon(self, mon):
        layout = mon.current_layout()
        mon.ltsymbol = layout.symbol[:LTSYMBOL_MAX]
        if layout.arrange is not None:
            layout.arrange(self, mon)

    def arrange(self, monitor=None):
        """Lay out ``monitor``, or every monitor when it is None."""
        targets = [monitor] if monitor is not None else list(self.monitors)
        for mon in targets:
            self._showhide(mon)
        for mon in targets:
            self._arrangemon(mon)

    # focus ----------------------------------------------------------------

    def focus(self, client):
        """Focus ``client``, or the most recently focused visible client when None."""
        if client is None or client.mon is None or not client.mon.is_visible(client):
            client = next((c for c in self.selmon.stack if self.selmon.is_visible(c)), None)
        if client is not None:
            self.selmon = client.mon
            client.is_urgent = False
            client.mon.detach_stack(client)
            client.mon.attach_stack(client)
        self.selmon.sel = client

    def focusstack(self, direction):
        """Focus the next (direction > 0) or previous visible client, wrapping."""
        mon = self.selmon
        sel = mon.sel
        if sel is None or (sel.is_fullscreen and self.config.lockfullscreen):
            return
        index = mon.clients.index(sel)
        before = [c for c in mon.clients[:index] if mon.is_visible(c)]
        after = [c for c in mon.clients[index + 1:] if mon.is_visible(c)]
        if direction > 0:
            candidates = after or before
            target = candidates[0] if candidates else None
        else:
            candidates = before or after
            target = candidates[-1] if candidates else None
        if target is not None:
            self.focus(target)

    def focusmon(self, direction):
        """Move the focus to the next or previous monitor."""
        if len(self.monitors) < 2:
            return
        mon = self.dirtomon(direction)
        if mon is self.selmon:
            return
        self.selmon = mon
        self.focus(None)

    def sendmon(self, client, monitor):
        """Move ``client`` to ``monitor``, giving it that monitor's current tags."""
        if client.mon is monitor:
            return
        client.mon.detach(client)
        client.mon.detach_stack(client)
        client.tags = monitor.tagset[monitor.seltags]
        monitor.attach(client)
        monitor.attach_stack(client)
        self.focus(None)
        self.arrange(None)

    def tagmon(self, direction):
        """Send the selected client to the next or previous monitor."""
        if self.selmon.sel is None or len(self.monitors) < 2:
            return
        self.sendmon(self.selmon.sel, self.dirtomon(direction))

    # tags -----------------------------------------------------------------

    def _apply_pertag(self):
        mon = self.selmon
        pertag = mon.pertag
        cur = pertag.curtag
        mon.nmaster = pertag.nmasters[cur]
        mon.mfact = pertag.mfacts[cur]
        mon.sellt = pertag.sellts[cur]
        mon.lt[mon.sellt] = pertag.ltidxs[cur][mon.sellt]
        mon.lt[mon.sellt ^ 1] = pertag.ltidxs[cur][mon.sellt ^ 1]
        if mon.showbar != pertag.showbars[cur]:
            self.togglebar()

    def view(self, tagmask):
        """Show the given tags; 0 returns to the previous view."""
        mon = self.selmon
        ui = tagmask & _UINT
        mask = ui & self.tagmask()
        if mask == mon.tagset[mon.seltags]:
            return
        mon.seltags ^= 1
        pertag = mon.pertag
        if mask:
            mon.tagset[mon.seltags] = mask
            pertag.prevtag = pertag.curtag
            pertag.curtag = 0 if ui == _UINT else _lowest_bit(ui) + 1
        else:
            pertag.prevtag, pertag.curtag = pertag.curtag, pertag.prevtag
        self._apply_pertag()
        self.focus(None)
        self.arrange(mon)

    def toggleview(self, tagmask):
        """Add or remove the given tags from the current view; the view never becomes empty."""
        mon = self.selmon
        newtagset = mon.tagset[mon.seltags] ^ (tagmask & _UINT & self.tagmask())
        if not newtagset:
            return
        mon.tagset[mon.seltags] = newtagset
        pertag = mon.pertag
        if newtagset == _UINT:
            pertag.prevtag = pertag.curtag
            pertag.curtag = 0
        if pertag.curtag == 0 or not newtagset & (1 << (pertag.curtag - 1)):
            pertag.prevtag = pertag.curtag
            pertag.curtag = _lowest_bit(newtagset) + 1
        self._apply_pertag()
        self.focus(None)
        self.arrange(mon)

    def tag(self, tagmask):
        """Give the selected client exactly the given tags."""
        sel = self.selmon.sel
        mask = tagmask & _UINT & self.tagmask()
        if sel is not None and mask:
            sel.tags = mask
            self.focus(None)
            self.arrange(self.selmon)

    def toggletag(self, tagmask):
        """Add or remove tags of the selected client; it always keeps one."""
        sel = self.selmon.sel
        if sel is None:
            return
        newtags = sel.tags ^ (tagmask & _UINT & self.tagmask())
        if newtags:
            sel.tags = newtags
            self.focus(None)
            self.arrange(self.selmon)

    # layout settings ------------------------------------------------------

    def incnmaster(self, delta):
        """Change the number of master clients, never below zero."""
        mon = self.selmon
        value = max(mon.nmaster + delta, 0)
        mon.nmaster = mon.pertag.nmasters[mon.pertag.curtag] = value
        self.arrange(mon)

    def setmfact(self, value):
        """Change the master area factor; values above 1.0 set it to ``value - 1.0``."""
        mon = self.selmon
        if value is None or mon.current_layout().arrange is None:
            return
        f = value + mon.mfact if value < 1.0 else value - 1.0
        if f < 0.05 or f > 0.95:
            return
        mon.mfact = mon.pertag.mfacts[mon.pertag.curtag] = f
        self.arrange(mon)

    def setlayout(self, layout=None):
        """Select ``layout``, or switch to the previously used one when None."""
        mon = self.selmon
        pertag = mon.pertag
        cur = pertag.curtag
        if layout is None or layout != mon.lt[mon.sellt]:
            pertag.sellts[cur] ^= 1
            mon.sellt = pertag.sellts[cur]
        if layout is not None:
            mon.lt[mon.sellt] = pertag.ltidxs[cur][mon.sellt] = layout
        mon.ltsymbol = mon.lt[mon.sellt].symbol[:LTSYMBOL_MAX]
        if mon.sel is not None:
            self.arrange(mon)

    def togglebar(self):
        """Show or hide the bar of the selected monitor."""
        mon = self.selmon
        mon.showbar = mon.pertag.showbars[mon.pertag.curtag] = not mon.showbar
        mon.update_bar_pos(self.config.bar_height)
        self.arrange(mon)

    def togglefloating(self):
        """Float or tile the selected client; fixed-size clients always float."""
        sel = self.selmon.sel
        if sel is None or sel.is_fullscreen:
            return
        sel.is_floating = not sel.is_floating or sel.is_fixed
        if sel.is_floating:
            self.resize(sel, sel.x, sel.y, sel.w, sel.h, False)
        self.arrange(self.selmon)

    def setfullscreen(self, client, fullscreen):
        """Make ``client`` cover its monitor, or restore it."""
        if fullscreen and not client.is_fullscreen:
            client.is_fullscreen = True
            client.old_state = client.is_floating
            client.old_bw = client.bw
            client.bw = 0
            client.is_floating = True
            mon = client.mon
            self._resize_client(client, mon.mx, mon.my, mon.mw, mon.mh)
        elif not fullscreen and client.is_fullscreen:
            client.is_fullscreen = False
            client.is_floating = client.old_state
            client.bw = client.old_bw
            client.x, client.y = client.old_x, client.old_y
            client.w, client.h = client.old_w, client.old_h
            self._resize_client(client, client.x, client.y, client.w, client.h)
            self.arrange(client.mon)

    def zoom(self):
        """Swap the selected client with the master, or promote the next tiled client."""
        mon = self.selmon
        client = mon.sel
        if mon.current_layout().arrange is None or client is None or client.is_floating:
            return
        tiled = mon.tiled()
        if tiled and client is tiled[0]:
            if len(tiled) < 2:
                return
            client = tiled[1]
        mon = client.mon
        mon.detach(client)
        mon.attach(client)
        self.focus(client)
        self.arrange(mon)