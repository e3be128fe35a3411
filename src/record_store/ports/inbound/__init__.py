"""Inbound ports - APIs offered to record store clients."""

from record_store.ports.inbound.record_store import (
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
