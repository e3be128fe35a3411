"""Outbound adapters - implementations backed by the filesystem.

These adapters own file handles and translate OS failures into the
record store error kinds.
"""

from record_store.adapters.outbound.batch_file import read_batch, write_batch
from record_store.adapters.outbound.file_record_store import FileRecordStore

__all__ = [
    "FileRecordStore",
    "read_batch",
    "write_batch",
]
