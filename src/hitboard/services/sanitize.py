"""Input validation and clamping applied before values reach the store."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from hitboard.core.errors import InvalidArgumentError
from hitboard.core.settings import settings
from hitboard.models import KIND_BOTH, METRIC_DOWNLOAD, METRIC_PLAY
from hitboard.services.chunking import dedupe

_FORBIDDEN = "\x00"


def _encodable(value: str) -> bool:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def sanitize_id(raw: Any, max_len: int | None = None) -> str:
    """Return a trimmed id, or ``""`` when it is empty, too long, contains NUL or is not valid UTF-8."""
    limit = settings.max_id_len if max_len is None else max_len
    value = "" if raw is None else str(raw).strip()
    if not value or len(value) > limit or _FORBIDDEN in value or not _encodable(value):
        return ""
    return value


def require_id(raw: Any, max_len: int | None = None) -> str:
    """Return a valid id or raise InvalidArgumentError."""
    value = sanitize_id(raw, max_len)
    if not value:
        raise InvalidArgumentError("id is required")
    return value


def sanitize_ids(raw_ids: Iterable[Any], max_count: int, max_len: int | None = None) -> list[str]:
    """Sanitize, deduplicate and cap a list of ids.

    Invalid ids are skipped and duplicates keep their first position. Ids past
    ``max_count`` are dropped without error.
    """
    cleaned = [value for value in (sanitize_id(raw, max_len) for raw in raw_ids) if value]
    return dedupe(cleaned, max_count)


def clamp_text(value: Any, max_len: int) -> str:
    """Truncate a display string; anything that is not a string becomes ``""``.

    Lone surrogates are dropped so the result always encodes as UTF-8.
    """
    if not isinstance(value, str):
        return ""
    if not _encodable(value):
        value = value.encode("utf-8", "ignore").decode("utf-8")
    return value if len(value) <= max_len else value[:max_len]


def normalize_kind(value: Any, *, allow_both: bool = False) -> str:
    """Return ``play``, ``download`` or (optionally) ``both``.

    Raises:
        InvalidArgumentError: For any other value.
    """
    kind = ("" if value is None else str(value)).strip().lower()
    if kind in (METRIC_PLAY, METRIC_DOWNLOAD):
        return kind
    if allow_both and kind == KIND_BOTH:
        return kind
    allowed = '"play" / "download" / "both"' if allow_both else '"play" / "download"'
    raise InvalidArgumentError(f"type must be {allowed}")


def normalize_metric(value: Any) -> str:
    """Return the leaderboard metric; anything other than ``play`` means downloads."""
    kind = ("" if value is None else str(value)).strip().lower()
    return METRIC_PLAY if kind == METRIC_PLAY else METRIC_DOWNLOAD
