"""Tests for the counter façade: hits, bulk counts, leaderboard pages and resets."""

import pytest

from hitboard.core.errors import ConfigurationError, InvalidArgumentError, UnauthorizedError
from hitboard.services.admin_guard import AdminGuard
from hitboard.services.counter_service import CounterService


def _walk(service: CounterService, metric: str, limit: int) -> list[str]:
    ids: list[str] = []
    cursor = None
    while True:
        page = service.top_page(metric, limit, cursor)
        ids.extend(row["id"] for row in page.rows)
        if page.next_cursor is None:
            return ids
        cursor = page.next_cursor


def test_hit_returns_row_for_kind(service) -> None:
    row = service.hit("play", "track", title="Song", file_name="song.mp3")
    assert row == {
        "id": "track",
        "title": "Song",
        "file_name": "song.mp3",
        "type": "play",
        "count": 1,
        "updatedAt": 1_000,
    }
    assert service.hit("DOWNLOAD", "track")["count"] == 1


def test_example_scenario(service) -> None:
    """Three downloads of A and five of B page out as B then A."""
    for _ in range(3):
        service.hit("download", "trackA")
    for _ in range(5):
        service.hit("download", "trackB")

    first = service.top_page("download", limit=1)
    assert [(row["id"], row["count"]) for row in first.rows] == [("trackB", 5)]
    assert first.next_cursor is not None

    second = service.top_page("download", limit=1, cursor=first.next_cursor)
    assert [(row["id"], row["count"]) for row in second.rows] == [("trackA", 3)]
    assert second.next_cursor is None


def test_top_page_defaults_and_clamping(service) -> None:
    service.hit("download", "a")
    page = service.top_page()
    assert page.metric == "download"
    assert page.limit == 10
    assert service.top_page("play", limit="500").limit == 50
    assert service.top_page("play", limit="zero").limit == 10
    assert service.top_page("play", limit=0).limit == 1


def test_top_page_empty_is_not_an_error(service) -> None:
    page = service.top_page("play", limit=5, cursor="40")
    assert page.rows == []
    assert page.next_cursor is None


def test_pagination_covers_the_ranking_without_duplicates(db_session, clock, admin_guard) -> None:
    """Walking every page reproduces the capped ranking in order."""
    service = CounterService(db_session, guard=admin_guard, clock=clock, top_cap=8)
    for index in range(12):
        for _ in range(index + 1):
            service.hit("play", f"id{index:02d}")

    walked = _walk(service, "play", 3)
    ranked = [entry.id for entry in service.rank_index.entries("play")]
    assert walked == ranked
    assert len(walked) == 8
    assert len(set(walked)) == len(walked)
    assert walked[0] == "id11"


def test_pages_are_not_snapshots(service) -> None:
    """Cursors are plain offsets, so hits between pages can repeat an item.

    This drift is expected behaviour, not a bug.
    """
    for entry_id, hits in [("a", 3), ("b", 2), ("c", 1)]:
        for _ in range(hits):
            service.hit("play", entry_id)

    first = service.top_page("play", limit=1)
    assert [row["id"] for row in first.rows] == ["a"]

    for _ in range(3):
        service.hit("play", "c")

    second = service.top_page("play", limit=1, cursor=first.next_cursor)
    assert [row["id"] for row in second.rows] == ["a"]


def test_bulk_counts(service) -> None:
    service.hit("play", "a")
    service.hit("download", "a")
    service.hit("download", "a")
    assert service.bulk_counts("both", ["a", "b", "a"]) == {
        "a": {"play": 1, "download": 2},
        "b": {"play": 0, "download": 0},
    }
    assert service.bulk_counts("download", []) == {}


def test_reset_one(service) -> None:
    service.hit("play", "a")
    service.hit("download", "a")
    service.hit("play", "b")

    result = service.reset("s3cret-Token", "id", "a")
    assert result == {"mode": "id", "id": "a", "deleted": 1}
    assert service.bulk_counts("both", ["a"]) == {"a": {"play": 0, "download": 0}}
    assert "a" not in _walk(service, "play", 50)
    assert "a" not in _walk(service, "download", 50)


def test_reset_all(service) -> None:
    for entry_id in ["a", "b"]:
        service.hit("play", entry_id)
        service.hit("download", entry_id)

    assert service.reset("s3cret-Token", "all") == {"mode": "all", "deleted": 2}
    assert service.bulk_counts("play", ["a", "b"]) == {"a": 0, "b": 0}
    assert service.top_page("play").rows == []
    assert service.top_page("download").rows == []


def test_reset_requires_authorization(service, db_session, clock) -> None:
    service.hit("play", "a")
    with pytest.raises(UnauthorizedError):
        service.reset("wrong", "all")
    with pytest.raises(UnauthorizedError):
        service.reset(None, "all")

    unconfigured = CounterService(db_session, guard=AdminGuard(None), clock=clock)
    with pytest.raises(ConfigurationError):
        unconfigured.reset("anything", "all")

    assert service.bulk_counts("play", ["a"]) == {"a": 1}


def test_reset_rejects_bad_mode_and_id(service) -> None:
    with pytest.raises(InvalidArgumentError):
        service.reset("s3cret-Token", "everything")
    with pytest.raises(InvalidArgumentError):
        service.reset("s3cret-Token", "id", "")
