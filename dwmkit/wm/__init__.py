"""Monitors, clients, tags, layouts and bar logic of a tiling window manager."""