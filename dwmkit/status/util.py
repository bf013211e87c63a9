"""Small helpers shared by the status components: C-style formatting and file reading."""

from __future__ import annotations

import re
import sys
from os import PathLike
from typing import Union

PathArg = Union[str, "PathLike[str]"]

#: Size of the shared output buffer; formatted results never exceed BUF_SIZE - 2 characters.
BUF_SIZE = 1024
MAX_LEN = BUF_SIZE - 2

_SPEC = re.compile(
    r"%(?P<flags>[-+ #0]*)"
    r"(?P<width>\*|\d+)?"
    r"(?:\.(?P<prec>\*|\d*))?"
    r"(?:hh|h|ll|l|L|q|j|z|t)?"
    r"(?P<conv>[diouxXeEfFgGcsp%])"
)


def cformat(fmt, *args):
    """Format ``args`` with a printf-style ``fmt`` and clip to the buffer size.

    Length modifiers such as ``l`` or ``L`` are accepted and ignored.
    Sequences that are not valid conversions are copied as they are.
    """
    remaining = iter(args)

    def take():
        try:
            return next(remaining)
        except StopIteration:
            raise ValueError(f"not enough arguments for format {fmt!r}") from None

    def render(match):
        conv = match["conv"]
        if conv == "%":
            return "%"
        flags = match["flags"]
        width = match["width"] or ""
        prec = match["prec"]
        if width == "*":
            value = int(take())
            if value < 0:
                flags += "-"
                value = -value
            width = str(value)
        if prec == "*":
            value = int(take())
            prec = None if value < 0 else str(value)
        spec = "%" + flags + width + ("" if prec is None else "." + (prec or "0"))
        value = take()
        if conv in "diu":
            return (spec + "d") % int(value)
        if conv in "oxX":
            return (spec + conv) % int(value)
        if conv in "eEfFgG":
            return (spec + conv) % float(value)
        if conv == "c":
            return (spec + "c") % (chr(value) if isinstance(value, int) else value)
        if conv == "p":
            return (spec + "s") % hex(int(value))
        return (spec + "s") % str(value)

    return _SPEC.sub(render, fmt)[:MAX_LEN]


def read_text(path):
    """Return the contents of ``path``, or None (with a message on stderr) if it cannot be read."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            return handle.read()
    except OSError as exc:
        print(f"fopen '{path}': {exc.strerror or exc}", file=sys.stderr)
        return None


def read_int(path):
    """Return the leading integer of the file at ``path``, or None."""
    text = read_text(path)
    if text is None:
        return None
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else None


def parse_meminfo(text):
    """Parse ``/proc/meminfo`` style text into a mapping of field name to kB value."""
    fields = {}
    for line in text.splitlines():
        name, sep, rest = line.partition(":")
        if not sep:
            continue
        parts = rest.split()
        if not parts:
            continue
        try:
            fields[name.strip()] = int(parts[0])
        except ValueError:
            continue
    return fields