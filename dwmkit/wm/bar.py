"""Bar geometry: which tags are drawn, what a click hits, and the system tray size."""

from __future__ import annotations

import enum

# X protocol error codes
_BAD_WINDOW = 3
_BAD_MATCH = 8
_BAD_DRAWABLE = 9
_BAD_ACCESS = 10

# X protocol request codes
_X_CONFIGURE_WINDOW = 12
_X_GRAB_BUTTON = 28
_X_GRAB_KEY = 33
_X_SET_INPUT_FOCUS = 42
_X_COPY_AREA = 62
_X_POLY_SEGMENT = 66
_X_POLY_FILL_RECTANGLE = 70
_X_POLY_TEXT8 = 74

_IGNORED = frozenset({
    (_X_SET_INPUT_FOCUS, _BAD_MATCH),
    (_X_POLY_TEXT8, _BAD_DRAWABLE),
    (_X_POLY_FILL_RECTANGLE, _BAD_DRAWABLE),
    (_X_POLY_SEGMENT, _BAD_DRAWABLE),
    (_X_CONFIGURE_WINDOW, _BAD_MATCH),
    (_X_GRAB_BUTTON, _BAD_ACCESS),
    (_X_GRAB_KEY, _BAD_ACCESS),
    (_X_COPY_AREA, _BAD_DRAWABLE),
})


class Click(enum.Enum):
    """Where a mouse button was pressed."""

    TAG_BAR = enum.auto()
    LT_SYMBOL = enum.auto()
    STATUS_TEXT = enum.auto()
    WIN_TITLE = enum.auto()
    CLIENT_WIN = enum.auto()
    ROOT_WIN = enum.auto()


def _occupied(monitor, ntags):
    full = (1 << ntags) - 1
    occ = 0
    for client in monitor.clients:
        if client.tags != full:
            occ |= client.tags
    return occ


def _tag_shown(monitor, occ, index):
    bit = 1 << index
    return bool(occ & bit or monitor.tagset[monitor.seltags] & bit)


def visible_tags(monitor, ntags):
    """Indices of the tags drawn in the bar: occupied or selected ones.

    Clients carrying every tag do not make a tag occupied.
    """
    occ = _occupied(monitor, ntags)
    return [i for i in range(ntags) if _tag_shown(monitor, occ, i)]


def bar_click(monitor, x, tags, text_width, status_text, status_offset):
    """Classify a click at ``x`` in the bar of ``monitor``.

    ``text_width`` gives the padded width of a string, ``status_offset`` the
    width taken by the system tray. Returns the ``Click`` and, for the tag
    bar, the mask of the tag that was hit (otherwise 0).
    """
    ntags = len(tags)
    occ = _occupied(monitor, ntags)
    i = 0
    edge = 0
    while i < ntags:
        if _tag_shown(monitor, occ, i):
            edge += text_width(tags[i])
        if x < edge:
            break
        i += 1
    if i < ntags:
        return Click.TAG_BAR, 1 << i
    if x < edge + text_width(monitor.ltsymbol):
        return Click.LT_SYMBOL, 0
    if x > monitor.ww - text_width(status_text) - status_offset:
        return Click.STATUS_TEXT, 0
    return Click.WIN_TITLE, 0


def systray_width(icon_widths, spacing):
    """Width of the system tray holding icons of the given widths; 1 when empty."""
    width = sum(w + spacing for w in icon_widths)
    return width + spacing if width else 1


def systray_icon_size(w, h, bar_height):
    """Size of a tray icon that asked for ``w`` x ``h``, fitted to the bar height."""
    if w == h:
        new_w = bar_height
    elif h == bar_height:
        new_w = w
    else:
        if h == 0:
            raise ValueError("icon height must not be zero")
        new_w = int(bar_height * (w / h))
    new_h = bar_height
    new_w = max(new_w, 1, bar_height)
    new_h = max(new_h, 1, bar_height)
    if new_h > bar_height:
        new_w = bar_height if new_w == new_h else int(bar_height * (new_w / new_h))
        new_h = bar_height
    return new_w, new_h


def is_ignored_error(request_code, error_code):
    """True for X errors that come from windows vanishing and are safe to ignore."""
    if error_code == _BAD_WINDOW:
        return True
    return (request_code, error_code) in _IGNORED