"""Hitboard: play/download counters with bounded per-metric leaderboards."""

__version__ = "0.1.0"
