# src/hitboard/models/__init__.py
"""SQLAlchemy models for the Hitboard application."""

from .counter import KIND_BOTH, METRIC_DOWNLOAD, METRIC_PLAY, METRICS, Counter
from .rank_view import RankView

__all__ = [
    "Counter",
    "RankView",
    "KIND_BOTH", "METRIC_DOWNLOAD", "METRIC_PLAY", "METRICS",
]
