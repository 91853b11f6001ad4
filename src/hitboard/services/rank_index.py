"""Bounded per-metric leaderboards maintained incrementally on each write.

Every metric keeps a capped list of ``RankEntry`` projections ordered by
count desc, then updated_at desc, then id asc. The ordering work happens in
``RankedView`` which knows nothing about storage; ``RankIndex`` loads and
saves one ``RankedView`` per metric through the caller's session so index
updates share the transaction of the counter write that caused them.

An id pushed past the cap is forgotten. It only comes back when a later hit
on that id ranks it inside the cap again.
"""

from __future__ import annotations

import bisect
from collections.abc import Iterable, Iterator
from dataclasses import asdict, dataclass
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from hitboard.core.errors import InvalidArgumentError
from hitboard.core.settings import settings
from hitboard.models import METRICS, RankView


@dataclass(frozen=True)
class RankEntry:
    """A counter as it appears in one metric's ordering."""

    id: str
    count: int
    updated_at: int
    title: str = ""
    file_name: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form stored in the rank view row."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RankEntry:
        """Rebuild an entry from its stored form."""
        return cls(
            id=str(data["id"]),
            count=int(data.get("count") or 0),
            updated_at=int(data.get("updated_at") or 0),
            title=str(data.get("title") or ""),
            file_name=str(data.get("file_name") or ""),
        )


def rank_key(entry: RankEntry) -> tuple[int, int, str]:
    """Sort key giving the total leaderboard order."""
    return (-entry.count, -entry.updated_at, entry.id)


class RankedView:
    """Sorted, capped list of entries for a single metric."""

    def __init__(self, entries: Iterable[RankEntry] = (), *, cap: int) -> None:
        if cap <= 0:
            raise ValueError("cap must be positive")
        self.cap = cap
        unique: dict[str, RankEntry] = {}
        for entry in entries:
            unique[entry.id] = entry
        self._entries = sorted(unique.values(), key=rank_key)[:cap]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[RankEntry]:
        return iter(self._entries)

    def _index_of(self, entry_id: str) -> int | None:
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                return index
        return None

    def contains(self, entry_id: str) -> bool:
        """Return True when ``entry_id`` is currently ranked."""
        return self._index_of(entry_id) is not None

    def reinsert(self, entry: RankEntry) -> bool:
        """Replace any entry for the same id, place ``entry`` in order and enforce the cap.

        Returns:
            True if the entry is still ranked after truncation.
        """
        self.remove(entry.id)
        bisect.insort(self._entries, entry, key=rank_key)
        del self._entries[self.cap:]
        return self.contains(entry.id)

    def remove(self, entry_id: str) -> bool:
        """Drop ``entry_id`` from the view; return whether it was present."""
        index = self._index_of(entry_id)
        if index is None:
            return False
        del self._entries[index]
        return True

    def page(self, offset: int, limit: int) -> tuple[list[RankEntry], bool]:
        """Return entries ``[offset, offset + limit)`` and whether more follow."""
        offset = max(0, offset)
        end = offset + max(0, limit)
        return list(self._entries[offset:end]), end < len(self._entries)

    def to_rows(self) -> list[dict[str, Any]]:
        return [entry.to_dict() for entry in self._entries]


class RankIndex:
    """Per-metric ranked views persisted in the ``rank_view`` table.

    The index never commits; callers wrap mutations in the same transaction as
    the counter write they mirror.
    """

    def __init__(self, session: Session, *, cap: int | None = None) -> None:
        self.session = session
        self.cap = settings.top_cap if cap is None else cap

    @staticmethod
    def _check_metric(metric: str) -> str:
        if metric not in METRICS:
            raise InvalidArgumentError(f"Unknown metric: {metric!r}")
        return metric

    def _row(self, metric: str, *, for_update: bool = False) -> RankView | None:
        stmt = select(RankView).where(RankView.metric == metric)
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.execute(stmt).scalar_one_or_none()

    def _create_row(self, metric: str) -> RankView:
        row = RankView(metric=metric, entries=[])
        self.session.add(row)
        self.session.flush()
        return row

    def _load(self, metric: str, *, for_update: bool = False) -> tuple[RankView | None, RankedView]:
        row = self._row(self._check_metric(metric), for_update=for_update)
        stored = row.entries if row is not None else []
        view = RankedView((RankEntry.from_dict(item) for item in stored or []), cap=self.cap)
        return row, view

    def _save(self, metric: str, row: RankView | None, view: RankedView) -> None:
        if row is None:
            row = self._create_row(metric)
        # Assign a fresh list so the JSON column registers the change.
        row.entries = view.to_rows()

    def view(self, metric: str) -> RankedView:
        """Return the current ordering for ``metric``."""
        return self._load(metric)[1]

    def entries(self, metric: str) -> list[RankEntry]:
        """Return every ranked entry for ``metric`` in order."""
        return list(self.view(metric))

    def contains(self, metric: str, entry_id: str) -> bool:
        return self.view(metric).contains(entry_id)

    def reinsert(self, metric: str, entry: RankEntry) -> bool:
        """Move ``entry`` to its place in ``metric``'s ordering.

        Returns:
            True if the entry survived the cap.
        """
        row, view = self._load(metric, for_update=True)
        kept = view.reinsert(entry)
        self._save(metric, row, view)
        return kept

    def refresh(self, metric: str, entry: RankEntry) -> bool:
        """Update ``entry`` in ``metric`` only if its id is already ranked there."""
        row, view = self._load(metric, for_update=True)
        if not view.contains(entry.id):
            return False
        view.reinsert(entry)
        self._save(metric, row, view)
        return True

    def remove(self, entry_id: str) -> list[str]:
        """Drop ``entry_id`` from every metric; return the metrics it was removed from."""
        removed: list[str] = []
        for metric in METRICS:
            row, view = self._load(metric, for_update=True)
            if view.remove(entry_id):
                self._save(metric, row, view)
                removed.append(metric)
        return removed

    def clear(self, metric: str | None = None) -> None:
        """Empty one metric's view, or all of them."""
        targets = METRICS if metric is None else (self._check_metric(metric),)
        for name in targets:
            row = self._row(name, for_update=True)
            if row is not None:
                row.entries = []

    def page(self, metric: str, offset: int, limit: int) -> tuple[list[RankEntry], bool]:
        """Return one page of ``metric``'s ordering and whether more entries follow."""
        return self.view(metric).page(offset, limit)
