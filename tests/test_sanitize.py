"""Tests for input sanitizing helpers."""

import pytest

from hitboard.core.errors import InvalidArgumentError
from hitboard.services.sanitize import (
    clamp_text,
    normalize_kind,
    normalize_metric,
    require_id,
    sanitize_id,
    sanitize_ids,
)


def test_sanitize_id_trims_and_rejects_bad_values() -> None:
    """Whitespace is trimmed; empty, oversize, NUL-bearing and non-UTF-8 ids are invalid."""
    assert sanitize_id("  track-1 ") == "track-1"
    assert sanitize_id("") == ""
    assert sanitize_id(None) == ""
    assert sanitize_id("a" * 301) == ""
    assert sanitize_id("a" * 300) == "a" * 300
    assert sanitize_id("bad\x00id") == ""
    assert sanitize_id(42) == "42"
    assert sanitize_id("\ud800x") == ""


def test_require_id_raises_for_invalid() -> None:
    with pytest.raises(InvalidArgumentError, match="id is required"):
        require_id("   ")


def test_sanitize_ids_drops_invalid_and_duplicates() -> None:
    """Invalid ids are skipped, duplicates keep first position and the cap applies."""
    raw = ["a", "", None, "b", " a ", "c", "d"]
    assert sanitize_ids(raw, 3) == ["a", "b", "c"]


def test_clamp_text() -> None:
    assert clamp_text("hello", 3) == "hel"
    assert clamp_text("hi", 3) == "hi"
    assert clamp_text(None, 3) == ""
    assert clamp_text(123, 3) == ""
    assert clamp_text("A\ud800B", 3) == "AB"
    assert clamp_text("\udfff", 3) == ""


def test_normalize_kind() -> None:
    """Kinds are matched case-insensitively; ``both`` only when allowed."""
    assert normalize_kind("PLAY") == "play"
    assert normalize_kind(" download ") == "download"
    assert normalize_kind("both", allow_both=True) == "both"
    with pytest.raises(InvalidArgumentError):
        normalize_kind("both")
    with pytest.raises(InvalidArgumentError):
        normalize_kind("view")
    with pytest.raises(InvalidArgumentError):
        normalize_kind(None)


def test_normalize_metric_defaults_to_download() -> None:
    assert normalize_metric("play") == "play"
    assert normalize_metric("Play") == "play"
    assert normalize_metric("download") == "download"
    assert normalize_metric("both") == "download"
    assert normalize_metric(None) == "download"
