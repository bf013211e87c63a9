"""Mixer volume readings."""

from __future__ import annotations

import os
import struct
import subprocess
import sys

_AMIXER_CMD = "amixer get Master | tail -c13"
_TAIL_SIZE = 14
_VOLUME_SIZE = 5

_SOUND_MIXER_READ_DEVMASK = 0x80044DFE
_SOUND_DEVICE_NAMES = (
    "vol", "bass", "treble", "synth", "pcm", "speaker", "line", "mic", "cd",
    "mix", "pcm2", "rec", "igain", "ogain", "line1", "line2", "line3",
    "dig1", "dig2", "dig3", "phin", "phout", "video", "radio", "monitor",
)


def _mixer_read(device):
    return 0x80044D00 | device


def parse_amixer_tail(text):
    """Volume from the tail of ``amixer get Master`` output, or ``MUTE``."""
    tail = text[:_TAIL_SIZE]
    switch = tail.rfind("[")
    if switch == -1 or tail[switch + 1:switch + 3] != "on":
        return "MUTE"
    start = tail.rfind("[", 0, max(switch - 2, 0))
    segment = tail[start + 1:]
    end = segment.find("]")
    if 0 <= end < _VOLUME_SIZE:
        return segment[:end]
    return segment[:_VOLUME_SIZE]


def alsa_master_vol():
    """Volume of the ALSA Master control, or ``MUTE``."""
    proc = subprocess.run(_AMIXER_CMD, shell=True, stdout=subprocess.PIPE, check=False)
    return parse_amixer_tail(proc.stdout.decode(errors="replace"))


def _ioctl_int(fd, request):
    import fcntl

    result = fcntl.ioctl(fd, request, struct.pack("i", 0))
    return struct.unpack("i", result)[0]


def vol_perc(card):
    """Master volume of the OSS mixer device ``card`` in percent, or None."""
    try:
        fd = os.open(card, os.O_RDONLY | os.O_NONBLOCK)
    except OSError as exc:
        print(f"open '{card}': {exc.strerror or exc}", file=sys.stderr)
        return None
    level = None
    try:
        try:
            devmask = _ioctl_int(fd, _SOUND_MIXER_READ_DEVMASK)
        except OSError as exc:
            print(
                f"ioctl 'SOUND_MIXER_READ_DEVMASK': {exc.strerror or exc}",
                file=sys.stderr,
            )
            return None
        for index, name in enumerate(_SOUND_DEVICE_NAMES):
            if devmask & (1 << index) and name == "vol":
                try:
                    level = _ioctl_int(fd, _mixer_read(index))
                except OSError as exc:
                    print(
                        f"ioctl 'MIXER_READ({index})': {exc.strerror or exc}",
                        file=sys.stderr,
                    )
                    return None
    finally:
        os.close(fd)
    if level is None:
        return None
    return str(level & 0xFF)