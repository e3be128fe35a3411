"""Type-safe positional primitives for the record store.

A store file is a flat sequence of equally sized blocks, so a record's
index and its byte offset are interchangeable given the stride.
"""

from __future__ import annotations

from typing import NewType


RecordIndex = NewType("RecordIndex", int)
"""Zero-based position of a record within a store file."""

ByteOffset = NewType("ByteOffset", int)
"""Absolute byte position within a store file."""

START_OFFSET = ByteOffset(0)


def offset_of(index: int, stride: int) -> ByteOffset:
    """Return the byte offset of the record at ``index``.

    Raises:
        ValueError: If index is negative or stride is not positive.
    """
    if index < 0:
        raise ValueError(f"Record index must be non-negative, got {index}")
    if stride <= 0:
        raise ValueError(f"Stride must be positive, got {stride}")
    return ByteOffset(index * stride)


def index_of(offset: int, stride: int) -> RecordIndex:
    """Return the index of the record starting at or containing ``offset``."""
    if stride <= 0:
        raise ValueError(f"Stride must be positive, got {stride}")
    return RecordIndex(offset // stride)
