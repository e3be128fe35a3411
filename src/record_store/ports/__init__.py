"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are abstract interfaces (protocols) that define contracts. The
record store exposes a single inbound port; the filesystem is used
directly by the adapters.
"""

from record_store.ports.inbound import (
    EndOfDataError,
    RecordStore,
    RecordStoreError,
    StateError,
    StoreIOError,
)

__all__ = [
    "RecordStore",
    "RecordStoreError",
    "StateError",
    "StoreIOError",
    "EndOfDataError",
]
