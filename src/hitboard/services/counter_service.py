"""Façade exposing the four counter operations used by the API and CLI."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.orm import Session

from hitboard.core.errors import InvalidArgumentError
from hitboard.core.settings import settings
from hitboard.db.time import epoch_millis
from hitboard.db.transaction import guarded_read
from hitboard.services.admin_guard import AdminGuard
from hitboard.services.counter_store import BulkCounts, CounterStore
from hitboard.services.pagination import clamp_limit, next_cursor, parse_cursor
from hitboard.services.rank_index import RankEntry, RankIndex
from hitboard.services.sanitize import normalize_kind, normalize_metric, sanitize_id

logger = logging.getLogger(__name__)

RESET_MODE_ALL = "all"
RESET_MODE_ID = "id"


def entry_row(entry: RankEntry, metric: str) -> dict[str, Any]:
    """Render a rank entry the way clients receive it."""
    return {
        "id": entry.id,
        "title": entry.title,
        "file_name": entry.file_name,
        "type": metric,
        "count": entry.count,
        "updatedAt": entry.updated_at,
    }


@dataclass(frozen=True)
class TopPage:
    """One page of a leaderboard plus the cursor for the next one."""

    metric: str
    limit: int
    offset: int
    rows: list[dict[str, Any]] = field(default_factory=list)
    next_cursor: str | None = None


class CounterService:
    """Owns the counter store and rank index for one session."""

    def __init__(
        self,
        session: Session,
        *,
        guard: AdminGuard | None = None,
        top_cap: int | None = None,
        top_limit_max: int | None = None,
        top_limit_default: int | None = None,
        max_bulk: int | None = None,
        chunk_size: int | None = None,
        clock: Callable[[], int] = epoch_millis,
    ) -> None:
        self.session = session
        self.guard = guard if guard is not None else AdminGuard(settings.admin_token)
        self.top_limit_max = settings.top_limit_max if top_limit_max is None else top_limit_max
        self.top_limit_default = (
            settings.top_limit_default if top_limit_default is None else top_limit_default
        )
        self.rank_index = RankIndex(session, cap=top_cap)
        self.store = CounterStore(
            session,
            self.rank_index,
            clock=clock,
            max_bulk=max_bulk,
            chunk_size=chunk_size,
        )

    def hit(
        self,
        kind: Any,
        entry_id: Any,
        title: Any = None,
        file_name: Any = None,
    ) -> dict[str, Any]:
        """Record one hit and return the updated row for ``kind``."""
        snapshot = self.store.record_hit(entry_id, kind, title=title, file_name=file_name)
        metric = normalize_kind(kind)
        return entry_row(snapshot.rank_entry(metric), metric)

    def bulk_counts(self, kind: Any, ids: Iterable[Any]) -> BulkCounts:
        """Return counts for the requested ids; unknown ids count as zero."""
        return self.store.bulk_get(ids, kind)

    def top_page(self, metric: Any = None, limit: Any = None, cursor: Any = None) -> TopPage:
        """Return one leaderboard page.

        ``limit`` is clamped to ``[1, top_limit_max]`` and a malformed cursor
        restarts from the top; neither is an error.
        """
        name = normalize_metric(metric)
        size = clamp_limit(limit, default=self.top_limit_default, maximum=self.top_limit_max)
        offset = parse_cursor(cursor)
        with guarded_read(self.session):
            entries, has_more = self.rank_index.page(name, offset, size)
        return TopPage(
            metric=name,
            limit=size,
            offset=offset,
            rows=[entry_row(entry, name) for entry in entries],
            next_cursor=next_cursor(offset, size, has_more),
        )

    def reset(self, token: str | None, mode: Any, entry_id: Any = None) -> dict[str, Any]:
        """Reset one counter or all of them after checking the admin token.

        Raises:
            ConfigurationError: If no admin secret is configured.
            UnauthorizedError: If ``token`` does not match.
            InvalidArgumentError: For an unknown mode or a missing id.
        """
        self.guard.require(token)
        mode = ("" if mode is None else str(mode)).strip()
        logger.info("Admin reset requested (mode=%s)", mode or "<missing>")
        if mode == RESET_MODE_ID:
            existed = self.store.reset_one(entry_id)
            return {"mode": RESET_MODE_ID, "id": sanitize_id(entry_id), "deleted": int(existed)}
        if mode == RESET_MODE_ALL:
            deleted = self.store.reset_all()
            return {"mode": RESET_MODE_ALL, "deleted": deleted}
        raise InvalidArgumentError('mode must be "all" or "id"')
