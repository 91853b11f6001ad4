# src/hitboard/models/rank_view.py
"""Persisted per-metric ranked views."""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from hitboard.db.session import Base


class RankView(Base):
    """Precomputed, capped ordering of counters for one metric.

    ``entries`` holds the view as a list of plain dicts already sorted by
    count desc, updated_at desc, id asc. The list is replaced wholesale on
    every write; JSON columns do not track in-place mutation.
    """

    __tablename__ = "rank_view"

    metric: Mapped[str] = mapped_column(String(16), primary_key=True)
    entries: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
