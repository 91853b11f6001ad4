# src/hitboard/models/counter.py
"""SQLAlchemy model for per-item play and download counters."""

from sqlalchemy import BigInteger, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hitboard.db.session import Base

METRIC_PLAY = "play"
METRIC_DOWNLOAD = "download"
KIND_BOTH = "both"
METRICS = (METRIC_PLAY, METRIC_DOWNLOAD)


class Counter(Base):
    """Authoritative tally for one item id.

    Counts only grow, except when the item or the whole table is reset.
    """

    __tablename__ = "counter"

    id: Mapped[str] = mapped_column(String(300), primary_key=True)
    play_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    download_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Display metadata; an empty incoming value never replaces a stored one.
    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    file_name: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Epoch milliseconds of the last mutation.
    updated_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
