"""Splitting of destination lists into request-sized batches."""

from __future__ import annotations

from typing import Sequence, TypeVar

T = TypeVar("T")


def make_batches(items: Sequence[T], batch_size: int) -> list[list[T]]:
    """Split ``items`` into contiguous batches of at most ``batch_size``, preserving order."""

    if batch_size < 1:
        raise ValueError("batch_size must be at least 1.")
    return [list(items[i : i + batch_size]) for i in range(0, len(items), batch_size)]
