"""Battery readings from the power supply class in sysfs."""

from __future__ import annotations

import re
from pathlib import Path

from dwmkit.status.util import read_int, read_text

POWER_SUPPLY = "/sys/class/power_supply"

_STATE_SYMBOLS = {
    "Charging": "+",
    "Discharging": "-",
    "Full": "=",
    "Unknown": "/",
}


def _trunc_div(a, b):
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def battery_perc(bat, sysfs=POWER_SUPPLY):
    """Battery charge in percent, or None."""
    value = read_int(Path(sysfs) / bat / "capacity")
    return None if value is None else str(value)


def battery_power(bat, sysfs=POWER_SUPPLY):
    """Battery power draw in whole watts, rounded, or None."""
    microwatts = read_int(Path(sysfs) / bat / "power_now")
    if microwatts is None:
        return None
    return str(_trunc_div(microwatts + 500000, 1000000))


def battery_state(bat, sysfs=POWER_SUPPLY):
    """A one-character charging state symbol, ``?`` when unknown, or None."""
    text = read_text(Path(sysfs) / bat / "status")
    if text is None:
        return None
    match = re.match(r"\s*(\S{1,12})", text)
    if not match:
        return None
    return _STATE_SYMBOLS.get(match.group(1), "?")