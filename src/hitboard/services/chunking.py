"""Helpers for splitting bulk id lookups into storage-sized pieces."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import TypeVar

T = TypeVar("T")


def partition(items: Sequence[T], chunk_size: int) -> Iterator[list[T]]:
    """Yield consecutive slices of ``items`` holding at most ``chunk_size`` elements.

    Order is preserved and every element appears in exactly one chunk.

    Raises:
        ValueError: If ``chunk_size`` is not positive.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    for start in range(0, len(items), chunk_size):
        yield list(items[start:start + chunk_size])


def dedupe(items: Sequence[T], limit: int) -> list[T]:
    """Return unique items in first-seen order, keeping at most ``limit`` of them."""
    out: list[T] = []
    seen: set[T] = set()
    for item in items:
        if len(out) >= limit:
            break
        if item in seen:
            continue
        seen.add(item)
        out.append(item)
    return out
