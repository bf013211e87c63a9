# dwmkit

dwmkit is a library in two parts:

* `dwmkit.status` holds small components that read the state of a Linux
  system: battery, CPU, memory, swap, network and volume. Each returns a
  short string suited to a window manager's bar.
* `dwmkit.wm` holds the logic of a dynamic tiling window manager: monitors,
  clients, tags, per-tag settings, size hints, layouts and bar hit-testing.
  It keeps state and computes geometry; it draws nothing itself.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Status components

Every component returns a string, or `None` when the value cannot be read.
Files that cannot be opened produce a message on standard error.

| Module                  | What it offers                                                                 |
|-------------------------|--------------------------------------------------------------------------------|
| `dwmkit.status.power`   | `battery_perc`, `battery_power`, `battery_state` (each takes a battery name and an optional sysfs directory) |
| `dwmkit.status.cpu`     | `cpu_freq`, `CpuMonitor` with `perc()` and `iowait()`, plus `CpuTimes`, `parse_cpu_times`, `usage_percent`, `iowait_percent` |
| `dwmkit.status.memory`  | `ram_free`, `ram_perc`, `ram_total`, `ram_used`, `swap_free`, `swap_perc`, `swap_total`, `swap_used` |
| `dwmkit.status.network` | `ipv4`, `ipv6`, `wifi_perc`, `wifi_essid`, `parse_wireless`                    |
| `dwmkit.status.audio`   | `alsa_master_vol`, `vol_perc`, `parse_amixer_tail`                             |
| `dwmkit.status.util`    | `cformat`, `read_text`, `read_int`, `parse_meminfo`                            |

Notes:

* `battery_state` returns `+` (charging), `-` (discharging), `=` (full),
  `/` (unknown) or `?` for any other state.
* Memory and swap sizes are in GiB, formatted like `%f`; percentages are
  whole numbers.
* CPU usage is measured between two reads of `/proc/stat`, so a
  `CpuMonitor` returns `None` the first time it is asked.
* `wifi_perc` returns `None` unless the interface's operstate is `up`.
* `alsa_master_vol` runs `amixer get Master` through the shell and returns
  the volume text or `MUTE`.
* `cformat` formats with a printf-style string and clips the result to the
  output buffer size.

Example:

```python
from dwmkit.status.cpu import CpuMonitor
from dwmkit.status.memory import ram_perc
from dwmkit.status.util import cformat

cpu = CpuMonitor()
cpu.perc()                      # None on the first call
line = cformat("cpu %s%% | ram %s%%", cpu.perc() or "n/a", ram_perc() or "n/a")
```

## The window manager model

`dwmkit.wm.manager.WindowManager` takes a `Config` and a list of screen
rectangles (`dwmkit.wm.model.Rect`); with no screens given it assumes one
1920x1080 screen. `Config` holds the tags (`"1"` to `"9"` by default),
rules, layouts, master factor, master count, bar settings, border width and
related options.

The manager keeps monitors and their clients and offers: `manage`,
`unmanage`, `resize`, `arrange`, `focus`, `focusstack`, `focusmon`,
`dirtomon`, `recttomon`, `sendmon`, `tagmon`, `view`, `toggleview`, `tag`,
`toggletag`, `incnmaster`, `setmfact`, `setlayout`, `togglebar`,
`togglefloating`, `setfullscreen`, `zoom`, `apply_rules` and
`update_geometry`. Each tag remembers its own layout, master count, master
factor and bar visibility.

`dwmkit.wm.model` defines `Rect`, `SizeHints`, `apply_size_hints`, `Layout`,
`Rule`, `Client`, `Pertag` and `Monitor`.

The layouts in `dwmkit.wm.layout` are `tile`, `monocle`, `grid` and
`columns`; `default_layouts()` returns them together with a floating layout.
`dwmkit.wm.movestack.movestack` swaps the selected client with the next or
previous tiled client.

`dwmkit.wm.bar` works out which tags the bar shows (`visible_tags`), what a
click at a given position hits (`bar_click`, returning a `Click`), the size
of the system tray (`systray_width`, `systray_icon_size`), and which X
errors are safe to ignore (`is_ignored_error`).

## What the package does not do

* It has no command-line program. There is no command that assembles the
  components into a status line and refreshes it; combine them yourself.
* It has no components for date and time, disk space, entropy, host name,
  kernel release, load average, file counts, temperature, uptime, user and
  group ids, or the output of a shell command.
* `dwmkit.wm` does not connect to a display server. It has no event loop,
  no key or button bindings, and does not draw the bar or move real
  windows; a front end has to feed it events and apply the geometry it
  computes.