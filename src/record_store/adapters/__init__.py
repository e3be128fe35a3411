"""Adapters layer - concrete implementations of port interfaces.

Outbound adapters implement record persistence on top of the local
filesystem.
"""

from record_store.adapters.outbound import (
    FileRecordStore,
    read_batch,
    write_batch,
)

__all__ = [
    # Outbound adapters
    "FileRecordStore",
    "read_batch",
    "write_batch",
]
