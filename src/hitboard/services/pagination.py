"""Offset-based cursors for the leaderboard.

A cursor is nothing more than the offset of the next page rendered as a
decimal string. Nothing is snapshotted: a page is cut from the ranking as it
stands when the request arrives, so hits landing between two page requests can
shift an item across a page boundary (seen twice or skipped). That drift is
accepted behaviour.
"""

from __future__ import annotations

from typing import Any


def _as_int(raw: Any) -> int | None:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        try:
            number = float(text)
        except ValueError:
            return None
        if number != number or number in (float("inf"), float("-inf")):
            return None
        return int(number)


def clamp_limit(raw: Any, *, default: int, maximum: int) -> int:
    """Return ``raw`` as a page size clamped to ``[1, maximum]``.

    Missing or non-numeric input falls back to ``default``.
    """
    value = _as_int(raw)
    if value is None:
        value = default
    return max(1, min(maximum, value))


def parse_cursor(raw: Any) -> int:
    """Return the offset encoded by a cursor; junk and negatives mean the start."""
    value = _as_int(raw)
    if value is None:
        return 0
    return max(0, value)


def next_cursor(offset: int, limit: int, has_more: bool) -> str | None:
    """Return the cursor for the page after ``[offset, offset + limit)``, if any."""
    if not has_more:
        return None
    return str(offset + limit)
