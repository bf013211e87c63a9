"""CPU usage and frequency."""

from __future__ import annotations

from dataclasses import dataclass

from dwmkit.status.util import read_int, read_text

PROC_STAT = "/proc/stat"
SCALING_CUR_FREQ = "/sys/devices/system/cpu/cpu0/cpufreq/scaling_cur_freq"


@dataclass(frozen=True)
class CpuTimes:
    """Aggregate CPU time counters from the first line of ``/proc/stat``."""

    user: float
    nice: float
    system: float
    idle: float
    iowait: float
    irq: float
    softirq: float

    def total(self):
        return (
            self.user + self.nice + self.system + self.idle
            + self.iowait + self.irq + self.softirq
        )


def _busy(times):
    return times.user + times.nice + times.system + times.irq + times.softirq


def parse_cpu_times(text):
    """Parse the first line of ``/proc/stat``; raise ValueError if it is malformed."""
    lines = text.splitlines()
    fields = lines[0].split() if lines else []
    if len(fields) < 8:
        raise ValueError("not enough CPU counters")
    return CpuTimes(*(float(value) for value in fields[1:8]))


def _delta_total(before, after):
    delta = after.total() - before.total()
    if delta == 0:
        raise ZeroDivisionError("no CPU time elapsed between samples")
    return delta


def usage_percent(before, after):
    """Busy time between two samples as a whole percentage."""
    return int(100 * (_busy(after) - _busy(before)) / _delta_total(before, after))


def iowait_percent(before, after):
    """I/O wait time between two samples as a whole percentage."""
    return int(100 * (after.iowait - before.iowait) / _delta_total(before, after))


def cpu_freq(path=SCALING_CUR_FREQ):
    """Current CPU frequency in MHz, or None."""
    khz = read_int(path)
    if khz is None:
        return None
    return str(int((khz + 500) / 1000))


class CpuMonitor:
    """Keeps the previous samples needed to compute usage between calls."""

    def __init__(self, path=PROC_STAT):
        self.path = path
        self._perc_prev = None
        self._iowait_prev = None

    def _sample(self):
        text = read_text(self.path)
        if text is None:
            return None
        try:
            return parse_cpu_times(text)
        except ValueError:
            return None

    def perc(self):
        """CPU usage since the last call, or None on the first call."""
        now = self._sample()
        if now is None:
            return None
        prev, self._perc_prev = self._perc_prev, now
        if prev is None:
            return None
        try:
            return str(usage_percent(prev, now))
        except ZeroDivisionError:
            return None

    def iowait(self):
        """I/O wait since the last call, or None on the first call."""
        now = self._sample()
        if now is None:
            return None
        prev, self._iowait_prev = self._iowait_prev, now
        if prev is None:
            return None
        try:
            return str(iowait_percent(prev, now))
        except ZeroDivisionError:
            return None