# src/hitboard/services/__init__.py
"""Counter, ranking and support services."""

from .counter_service import CounterService, TopPage
from .counter_store import CounterSnapshot, CounterStore
from .rank_index import RankedView, RankEntry, RankIndex

__all__ = [
    "CounterService", "TopPage",
    "CounterSnapshot", "CounterStore",
    "RankedView", "RankEntry", "RankIndex",
]
