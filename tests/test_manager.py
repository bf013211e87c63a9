import pytest

from dwmkit.wm.layout import default_layouts
from dwmkit.wm.manager import BROKEN, Config, WindowManager
from dwmkit.wm.model import Client, Rect, Rule


def make_wm(screens=None, **kwargs):
    kwargs.setdefault("resizehints", False)
    return WindowManager(Config(**kwargs), screens or [Rect(0, 0, 1280, 800)])


def new_client(window, name="term"):
    return Client(window=window, name=name, x=10, y=10, w=200, h=100)


def test_too_many_tags_rejected():
    with pytest.raises(ValueError):
        Config(tags=tuple(str(i) for i in range(32)))


def test_tagmask_covers_all_tags():
    wm = make_wm()
    assert wm.tagmask() == 0b111111111


def test_duplicate_screens_merged():
    screens = [Rect(0, 0, 800, 600), Rect(0, 0, 800, 600), Rect(800, 0, 800, 600)]
    wm = make_wm(screens)
    assert [m.num for m in wm.monitors] == [0, 1]
    assert wm.monitors[1].mx == 800
    assert wm.selmon is wm.monitors[0]


def test_bar_reserves_space():
    wm = make_wm()
    mon = wm.monitors[0]
    assert mon.wy == wm.config.bar_height
    assert mon.wh == mon.mh - wm.config.bar_height
    assert mon.by == 0


def test_manage_selects_client_with_border():
    wm = make_wm(borderpx=2)
    client = wm.manage(new_client(1))
    mon = wm.monitors[0]
    assert client in mon.clients
    assert mon.sel is client
    assert client.bw == 2
    assert client.tags == 1


def test_manage_twice_raises():
    wm = make_wm()
    wm.manage(new_client(1))
    with pytest.raises(ValueError):
        wm.manage(new_client(1))


def test_unnamed_client_gets_placeholder():
    wm = make_wm()
    client = wm.manage(new_client(1, name=""))
    assert client.name == BROKEN


def test_rules_set_tags_monitor_and_floating():
    rule = Rule(class_name="Firefox", tags=1 << 8, is_floating=True, monitor=1)
    wm = make_wm([Rect(0, 0, 800, 600), Rect(800, 0, 800, 600)], rules=(rule,))
    client = wm.manage(new_client(1), class_name="Firefox", instance="Navigator")
    assert client.tags == 1 << 8
    assert client.mon is wm.monitors[1]
    assert client.is_floating


def test_rule_not_matching_keeps_current_tags():
    rule = Rule(class_name="Gimp", tags=1 << 3)
    wm = make_wm(rules=(rule,))
    client = wm.manage(new_client(1), class_name="Firefox")
    assert client.tags == wm.monitors[0].tagset[0]
    assert not client.is_floating


def test_transient_inherits_and_floats():
    wm = make_wm()
    parent = wm.manage(new_client(1))
    wm.tag(1 << 2)
    wm.view(1 << 2)
    child = wm.manage(new_client(2), transient_for=parent)
    assert child.tags == parent.tags
    assert child.is_floating


def test_tile_places_clients_without_overlap():
    wm = make_wm()
    a = wm.manage(new_client(1))
    b = wm.manage(new_client(2))
    mon = wm.monitors[0]
    ra = Rect(a.x, a.y, a.outer_width(), a.outer_height())
    rb = Rect(b.x, b.y, b.outer_width(), b.outer_height())
    area = Rect(mon.wx, mon.wy, mon.ww, mon.wh)
    assert ra.intersect_area(rb) == 0
    assert area.intersect_area(ra) == ra.w * ra.h
    assert area.intersect_area(rb) == rb.w * rb.h
    assert b.x == mon.wx


def test_view_and_previous():
    wm = make_wm()
    mon = wm.monitors[0]
    wm.view(1 << 2)
    assert mon.tagset[mon.seltags] == 1 << 2
    assert mon.pertag.curtag == 3
    wm.view(0)
    assert mon.tagset[mon.seltags] == 1
    assert mon.pertag.curtag == 1


def test_nmaster_remembered_per_tag():
    wm = make_wm(nmaster=1)
    mon = wm.monitors[0]
    wm.view(1 << 1)
    wm.incnmaster(1)
    assert mon.nmaster == 2
    wm.view(1)
    assert mon.nmaster == 1
    wm.view(1 << 1)
    assert mon.nmaster == 2


def test_incnmaster_never_negative():
    wm = make_wm(nmaster=1)
    wm.incnmaster(-5)
    assert wm.monitors[0].nmaster == 0


def test_toggleview_adds_and_removes():
    wm = make_wm()
    mon = wm.monitors[0]
    wm.toggleview(1 << 1)
    assert mon.tagset[mon.seltags] == 0b11
    wm.toggleview(1)
    assert mon.tagset[mon.seltags] == 1 << 1
    assert mon.pertag.curtag == 2
    wm.toggleview(1 << 1)
    assert mon.tagset[mon.seltags] == 1 << 1


def test_tag_moves_selected_out_of_view():
    wm = make_wm()
    client = wm.manage(new_client(1))
    wm.tag(1 << 4)
    assert client.tags == 1 << 4
    assert wm.monitors[0].sel is None


def test_toggletag_keeps_last_tag():
    wm = make_wm()
    client = wm.manage(new_client(1))
    wm.toggletag(1)
    assert client.tags == 1
    wm.toggletag(1 << 1)
    assert client.tags == 0b11


def test_setmfact_relative_absolute_and_limits():
    wm = make_wm(mfact=0.55)
    mon = wm.monitors[0]
    wm.setmfact(0.05)
    assert mon.mfact == pytest.approx(0.60)
    wm.setmfact(1.3)
    assert mon.mfact == pytest.approx(0.3)
    before = mon.mfact
    wm.setmfact(0.9)
    assert mon.mfact == before


def test_setmfact_ignored_in_floating_layout():
    wm = make_wm(mfact=0.55)
    wm.setlayout(None)
    wm.setmfact(0.1)
    assert wm.monitors[0].mfact == 0.55


def test_setlayout_toggles_and_selects():
    layouts = default_layouts()
    wm = make_wm(layouts=layouts)
    mon = wm.monitors[0]
    wm.setlayout(None)
    assert mon.ltsymbol == "><>"
    wm.setlayout(layouts[2])
    assert mon.ltsymbol == "[M]"
    assert mon.current_layout() == layouts[2]


def test_monocle_fills_area_and_counts():
    layouts = default_layouts()
    wm = make_wm(layouts=layouts)
    a = wm.manage(new_client(1))
    b = wm.manage(new_client(2))
    wm.setlayout(layouts[2])
    assert wm.monitors[0].ltsymbol == "[2]"
    assert (a.x, a.y, a.w, a.h) == (b.x, b.y, b.w, b.h)


def test_togglebar_gives_full_height():
    wm = make_wm()
    mon = wm.monitors[0]
    wm.togglebar()
    assert not mon.showbar
    assert mon.wh == mon.mh
    assert mon.by == -wm.config.bar_height
    wm.togglebar()
    assert mon.wh == mon.mh - wm.config.bar_height


def test_togglefloating():
    wm = make_wm()
    client = wm.manage(new_client(1))
    wm.togglefloating()
    assert client.is_floating
    wm.togglefloating()
    assert not client.is_floating


def test_fullscreen_round_trip():
    wm = make_wm()
    client = wm.manage(new_client(1))
    mon = client.mon
    before = (client.x, client.y, client.w, client.h, client.bw, client.is_floating)
    wm.setfullscreen(client, True)
    assert (client.x, client.y, client.w, client.h) == (mon.mx, mon.my, mon.mw, mon.mh)
    assert client.bw == 0
    wm.togglefloating()
    assert client.is_fullscreen
    wm.setfullscreen(client, False)
    after = (client.x, client.y, client.w, client.h, client.bw, client.is_floating)
    assert after == before


def test_focusstack_cycles():
    wm = make_wm()
    a = wm.manage(new_client(1))
    b = wm.manage(new_client(2))
    c = wm.manage(new_client(3))
    mon = wm.monitors[0]
    assert mon.sel is c
    wm.focusstack(1)
    assert mon.sel is b
    wm.focusstack(1)
    assert mon.sel is a
    wm.focusstack(1)
    assert mon.sel is c
    wm.focusstack(-1)
    assert mon.sel is a


def test_focus_moves_to_top_of_stack():
    wm = make_wm()
    a = wm.manage(new_client(1))
    wm.manage(new_client(2))
    wm.focus(a)
    assert wm.monitors[0].stack[0] is a


def test_dirtomon_and_focusmon():
    wm = make_wm([Rect(0, 0, 800, 600), Rect(800, 0, 800, 600)])
    assert wm.dirtomon(1) is wm.monitors[1]
    assert wm.dirtomon(-1) is wm.monitors[1]
    wm.focusmon(1)
    assert wm.selmon is wm.monitors[1]
    assert wm.dirtomon(1) is wm.monitors[0]


def test_recttomon():
    wm = make_wm([Rect(0, 0, 800, 600), Rect(800, 0, 800, 600)])
    assert wm.recttomon(900, 100, 50, 50) is wm.monitors[1]
    assert wm.recttomon(5000, 5000, 10, 10) is wm.selmon


def test_tagmon_moves_client():
    wm = make_wm([Rect(0, 0, 800, 600), Rect(800, 0, 800, 600)])
    client = wm.manage(new_client(1))
    target = wm.monitors[1]
    wm.tagmon(1)
    assert client.mon is target
    assert client in target.clients
    assert client not in wm.monitors[0].clients
    assert client.tags == target.tagset[target.seltags]


def test_zoom_promotes_to_master():
    wm = make_wm()
    a = wm.manage(new_client(1))
    b = wm.manage(new_client(2))
    mon = wm.monitors[0]
    assert mon.clients[0] is b
    wm.zoom()
    assert mon.clients[0] is a
    assert mon.sel is a


def test_unmanage_removes_and_refocuses():
    wm = make_wm()
    a = wm.manage(new_client(1))
    b = wm.manage(new_client(2))
    wm.unmanage(b)
    mon = wm.monitors[0]
    assert b not in mon.clients
    assert b not in mon.stack
    assert mon.sel is a


def test_removing_screen_moves_clients():
    screens = [Rect(0, 0, 800, 600), Rect(800, 0, 800, 600)]
    wm = make_wm(screens)
    wm.focusmon(1)
    client = wm.manage(new_client(1))
    assert client.mon is wm.monitors[1]
    assert wm.update_geometry(screens[:1]) is True
    assert len(wm.monitors) == 1
    assert client.mon is wm.monitors[0]
    assert client in wm.monitors[0].clients
    assert wm.selmon is wm.monitors[0]


def test_update_geometry_unchanged_is_clean():
    screens = [Rect(0, 0, 800, 600)]
    wm = make_wm(screens)
    assert wm.update_geometry(screens) is False
    with pytest.raises(ValueError):
        wm.update_geometry([])


def test_resize_reports_no_change():
    wm = make_wm()
    client = wm.manage(new_client(1))
    assert wm.resize(client, client.x, client.y, client.w, client.h, True) is False
    assert wm.resize(client, client.x + 5, client.y, client.w, client.h, True) is True
    assert client.old_x == client.x - 5