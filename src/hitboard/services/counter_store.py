"""Authoritative play/download counters."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from hitboard.core.settings import settings
from hitboard.db.time import epoch_millis
from hitboard.db.transaction import atomic, guarded_read
from hitboard.models import KIND_BOTH, METRIC_DOWNLOAD, METRIC_PLAY, METRICS, Counter
from hitboard.services.chunking import partition
from hitboard.services.rank_index import RankEntry, RankIndex
from hitboard.services.sanitize import clamp_text, normalize_kind, require_id, sanitize_ids

logger = logging.getLogger(__name__)

BulkCounts = dict[str, int] | dict[str, dict[str, int]]


@dataclass(frozen=True)
class CounterSnapshot:
    """Immutable copy of a counter taken right after a write."""

    id: str
    play_count: int
    download_count: int
    title: str
    file_name: str
    updated_at: int

    @classmethod
    def from_model(cls, counter: Counter) -> CounterSnapshot:
        return cls(
            id=counter.id,
            play_count=int(counter.play_count or 0),
            download_count=int(counter.download_count or 0),
            title=counter.title or "",
            file_name=counter.file_name or "",
            updated_at=int(counter.updated_at or 0),
        )

    def count_for(self, metric: str) -> int:
        return self.play_count if metric == METRIC_PLAY else self.download_count

    def rank_entry(self, metric: str) -> RankEntry:
        """Project this counter into ``metric``'s ordering."""
        return RankEntry(
            id=self.id,
            count=self.count_for(metric),
            updated_at=self.updated_at,
            title=self.title,
            file_name=self.file_name,
        )


class CounterStore:
    """Read-modify-write access to counters, mirrored into a RankIndex.

    Every mutation runs inside one transaction together with the rank index
    update, so a counter and its rank entries are never observed out of step.
    """

    def __init__(
        self,
        session: Session,
        rank_index: RankIndex,
        *,
        clock: Callable[[], int] = epoch_millis,
        max_bulk: int | None = None,
        chunk_size: int | None = None,
        max_id_len: int | None = None,
        max_title_len: int | None = None,
        max_file_name_len: int | None = None,
    ) -> None:
        self.session = session
        self.rank_index = rank_index
        self.clock = clock
        self.max_bulk = settings.max_bulk_ids if max_bulk is None else max_bulk
        self.chunk_size = settings.bulk_chunk_size if chunk_size is None else chunk_size
        self.max_id_len = settings.max_id_len if max_id_len is None else max_id_len
        self.max_title_len = settings.max_title_len if max_title_len is None else max_title_len
        self.max_file_name_len = (
            settings.max_file_name_len if max_file_name_len is None else max_file_name_len
        )

    def _locked_counter(self, entry_id: str) -> Counter | None:
        stmt = select(Counter).where(Counter.id == entry_id).with_for_update()
        return self.session.execute(stmt).scalar_one_or_none()

    def record_hit(
        self,
        entry_id: Any,
        kind: Any,
        title: Any = None,
        file_name: Any = None,
    ) -> CounterSnapshot:
        """Count one play or download of ``entry_id`` and return the new state.

        Args:
            entry_id: Item identifier.
            kind: ``"play"`` or ``"download"``.
            title: Optional display title; empty values keep the stored one.
            file_name: Optional file name; empty values keep the stored one.

        Returns:
            Snapshot of the counter after the increment.

        Raises:
            InvalidArgumentError: If the id or kind is invalid.
            StorageUnavailableError: If the write could not be committed.
        """
        entry_id = require_id(entry_id, self.max_id_len)
        metric = normalize_kind(kind)
        title = clamp_text(title, self.max_title_len)
        file_name = clamp_text(file_name, self.max_file_name_len)

        with atomic(self.session):
            counter = self._locked_counter(entry_id)
            if counter is None:
                counter = Counter(
                    id=entry_id,
                    play_count=0,
                    download_count=0,
                    title="",
                    file_name="",
                    updated_at=0,
                )
                self.session.add(counter)

            if metric == METRIC_PLAY:
                counter.play_count = int(counter.play_count or 0) + 1
            else:
                counter.download_count = int(counter.download_count or 0) + 1
            if title:
                counter.title = title
            if file_name:
                counter.file_name = file_name
            counter.updated_at = max(self.clock(), int(counter.updated_at or 0))
            self.session.flush()

            snapshot = CounterSnapshot.from_model(counter)
            for name in METRICS:
                if name == metric:
                    self.rank_index.reinsert(name, snapshot.rank_entry(name))
                else:
                    self.rank_index.refresh(name, snapshot.rank_entry(name))

        logger.debug("Recorded %s hit for %s (count=%d)", metric, entry_id, snapshot.count_for(metric))
        return snapshot

    def bulk_get(self, ids: Iterable[Any], kind: Any) -> BulkCounts:
        """Return current counts for up to ``max_bulk`` unique ids.

        Unknown ids report zero. Lookups are issued ``chunk_size`` ids at a
        time; the result does not depend on the chunk size.

        Returns:
            ``{id: count}`` for a single metric, ``{id: {"play": n, "download": m}}``
            for ``both``. Keys follow first-seen request order.
        """
        kind = normalize_kind(kind, allow_both=True)
        unique = sanitize_ids(ids, self.max_bulk, self.max_id_len)

        found: dict[str, tuple[int, int]] = {}
        with guarded_read(self.session):
            for chunk in partition(unique, self.chunk_size):
                stmt = select(Counter.id, Counter.play_count, Counter.download_count).where(
                    Counter.id.in_(chunk)
                )
                for row_id, play, download in self.session.execute(stmt):
                    found[row_id] = (int(play or 0), int(download or 0))

        if kind == KIND_BOTH:
            return {
                entry_id: {
                    METRIC_PLAY: found.get(entry_id, (0, 0))[0],
                    METRIC_DOWNLOAD: found.get(entry_id, (0, 0))[1],
                }
                for entry_id in unique
            }
        position = 0 if kind == METRIC_PLAY else 1
        return {entry_id: found.get(entry_id, (0, 0))[position] for entry_id in unique}

    def get(self, entry_id: Any) -> CounterSnapshot | None:
        """Return the stored counter for ``entry_id``, if any."""
        entry_id = require_id(entry_id, self.max_id_len)
        with guarded_read(self.session):
            counter = self.session.get(Counter, entry_id)
            return CounterSnapshot.from_model(counter) if counter is not None else None

    def reset_one(self, entry_id: Any) -> bool:
        """Delete one counter and its rank entries.

        Returns:
            True if a counter existed for ``entry_id``.
        """
        entry_id = require_id(entry_id, self.max_id_len)
        with atomic(self.session):
            result = self.session.execute(delete(Counter).where(Counter.id == entry_id))
            self.rank_index.remove(entry_id)
        existed = bool(result.rowcount and result.rowcount > 0)
        logger.info("Reset counter %s (existed=%s)", entry_id, existed)
        return existed

    def reset_all(self) -> int:
        """Delete every counter and empty every ranking.

        Returns:
            Number of counters deleted, as reported by the driver (0 if unknown).
        """
        with atomic(self.session):
            result = self.session.execute(delete(Counter))
            self.rank_index.clear()
        deleted = max(0, result.rowcount or 0)
        logger.info("Reset all counters (deleted=%d)", deleted)
        return deleted
