"""Tiling window manager model and system status components."""

__version__ = "0.1.0"