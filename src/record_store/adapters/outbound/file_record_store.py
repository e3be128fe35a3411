"""File-based Record Store implementation.

This adapter implements the RecordStore protocol over a single binary
file opened for combined reading and writing. Records are stored back to
back with no header, so record ``i`` always starts at ``i * stride``.

File Format:
    - No header, record count or magic number
    - Block i (offset i * stride): one encoded record

Cursors:
    Python file objects have a single position, so the store tracks the
    read and write cursors itself and seeks before every transfer. Reads
    never move the write cursor and writes never move the read cursor.

Thread Safety:
    None. A store exclusively owns its handle and is meant for one thread.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO, Generic, Iterator, TypeVar

from record_store.domain.entities import FixedRecord, Record
from record_store.domain.value_objects import (
    START_OFFSET,
    ByteOffset,
    StoreState,
    index_of,
    offset_of,
)
from record_store.infrastructure.config import Config, get_config
from record_store.infrastructure.logging import get_logger
from record_store.infrastructure.metrics import MetricsRegistry, get_metrics
from record_store.ports.inbound import (
    EndOfDataError,
    RecordStoreError,
    StateError,
    StoreIOError,
)

R = TypeVar("R", bound=FixedRecord)

_ERROR_KINDS: dict[type[RecordStoreError], str] = {
    StateError: "state",
    StoreIOError: "io",
    EndOfDataError: "end_of_data",
}


class FileRecordStore(Generic[R]):
    """File-based implementation of the RecordStore protocol.

    Attributes:
        path: Path to the store file.
        record_type: Record class stored in this file.
        record_size: Stride in bytes.

    Example:
        >>> with FileRecordStore("employee.bin", Record) as store:
        ...     store.write_record(Record(1, 100.0, "Ibrahim"))
        ...     store.read_record()
        Record(id=1, score=100.0, name='Ibrahim')
    """

    def __init__(
        self,
        file_path: str | Path | None = None,
        record_type: type[R] = Record,  # type: ignore[assignment]
        create: bool = True,
        config: Config | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            file_path: Path to the store file (default from config).
            record_type: Record class to store.
            create: If True, create or truncate the file and open the store.
                If False, the store starts CLOSED; call reopen_append() to
                open an existing file without truncating it.
            config: Configuration (default global config).
            metrics: Metrics registry (default global registry).

        Raises:
            StoreIOError: If create=True and the file cannot be created.
        """
        self._config = config or get_config()
        self._metrics = metrics or get_metrics()
        self._file_path = (
            Path(file_path) if file_path is not None else self._config.storage.default_path
        )
        self._record_type = record_type
        self._stride = record_type.record_size()

        self._file: BinaryIO | None = None
        self._state = StoreState.CLOSED
        self._read_pos = START_OFFSET
        self._write_pos = START_OFFSET

        self._log = get_logger(
            __name__,
            path=str(self._file_path),
            record_type=record_type.__name__,
        )

        if create:
            self.create_or_replace()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def path(self) -> Path:
        """Return the store file path."""
        return self._file_path

    @property
    def state(self) -> StoreState:
        """Return the current lifecycle state."""
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state.is_open()

    @property
    def record_type(self) -> type[R]:
        return self._record_type

    @property
    def record_size(self) -> int:
        """Return the stride in bytes."""
        return self._stride

    @property
    def read_cursor(self) -> ByteOffset:
        """Byte offset of the next sequential read."""
        return self._read_pos

    @property
    def write_cursor(self) -> ByteOffset:
        """Byte offset of the next sequential write."""
        return self._write_pos

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def create_or_replace(self) -> None:
        """Open the file for reading and writing, truncating any content.

        Raises:
            StateError: If the store is already open.
            StoreIOError: If the file cannot be created.
        """
        if self._state.is_open():
            raise self._error(StateError, "Store is already open", op="create_or_replace")

        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self._file_path, "w+b")
        except OSError as exc:
            raise self._error(
                StoreIOError, f"Cannot create store file: {exc}", op="create_or_replace"
            ) from exc

        self._enter_open(write_pos=START_OFFSET)
        self._log.info("store_opened", mode="truncate")

    def reopen_append(self) -> None:
        """Reopen a closed store without truncating the file.

        The read cursor starts at offset 0 and the write cursor at end of
        file, so sequential writes append after the existing records.

        Raises:
            StateError: If the store is already open.
            StoreIOError: If the file cannot be opened.
        """
        if self._state.is_open():
            raise self._error(StateError, "Store is already open", op="reopen_append")

        try:
            self._file = open(self._file_path, "r+b")
            end = self._file.seek(0, os.SEEK_END)
        except OSError as exc:
            if self._file is not None:
                self._file.close()
                self._file = None
            raise self._error(
                StoreIOError, f"Cannot reopen store file: {exc}", op="reopen_append"
            ) from exc

        self._enter_open(write_pos=ByteOffset(end))
        self._log.info("store_reopened", mode="append", write_cursor=end)

    def close(self) -> None:
        """Release the file handle.

        The store is CLOSED afterwards even if the final flush fails.

        Raises:
            StateError: If the store is already closed.
            StoreIOError: If flushing buffered writes fails.
        """
        if not self._state.is_open():
            raise self._error(StateError, "Store is already closed", op="close")

        try:
            self._release(sync=self._config.storage.fsync_on_close)
        except OSError as exc:
            raise self._error(StoreIOError, f"Close failed: {exc}", op="close") from exc

        self._log.info("store_closed")

    def sync(self) -> None:
        """Flush buffered writes and fsync them to stable storage.

        Raises:
            StateError: If the store is closed.
            StoreIOError: If the flush fails.
        """
        file = self._require_open("sync")
        try:
            file.flush()
            os.fsync(file.fileno())
        except OSError as exc:
            raise self._error(StoreIOError, f"Sync failed: {exc}", op="sync") from exc

    def _enter_open(self, write_pos: ByteOffset) -> None:
        self._state = StoreState.OPEN
        self._read_pos = START_OFFSET
        self._write_pos = write_pos
        self._metrics.stores_open.inc()

    def _release(self, sync: bool) -> None:
        file = self._file
        self._file = None
        self._state = StoreState.CLOSED
        self._metrics.stores_open.dec()
        if file is None:
            return

        try:
            file.flush()
            if sync:
                os.fsync(file.fileno())
        finally:
            file.close()

    # ------------------------------------------------------------------
    # Cursors
    # ------------------------------------------------------------------

    def reset_read_cursor(self) -> None:
        """Move the read cursor back to the first record.

        Raises:
            StateError: If the store is closed.
        """
        self._require_open("reset_read_cursor")
        self._read_pos = START_OFFSET

    def reset_write_cursor(self) -> None:
        """Move the write cursor back to the first record.

        Raises:
            StateError: If the store is closed.
        """
        self._require_open("reset_write_cursor")
        self._write_pos = START_OFFSET

    def seek_read(self, index: int) -> None:
        """Position the read cursor at record ``index``.

        Raises:
            StateError: If the store is closed.
            ValueError: If index is negative.
        """
        self._require_open("seek_read")
        self._read_pos = offset_of(index, self._stride)

    def seek_write(self, index: int) -> None:
        """Position the write cursor at record ``index``.

        Writing past the end of the file leaves zero-filled records in the
        gap.

        Raises:
            StateError: If the store is closed.
            ValueError: If index is negative.
        """
        self._require_open("seek_write")
        self._write_pos = offset_of(index, self._stride)

    # ------------------------------------------------------------------
    # Record I/O
    # ------------------------------------------------------------------

    def write_record(self, record: R) -> None:
        """Write a record at the write cursor and advance it by one stride.

        Raises:
            StateError: If the store is closed.
            TypeError: If record is not of the store's record type.
            ValueError: If the record cannot be encoded.
            StoreIOError: If the write does not complete.
        """
        self._write_block(self._write_pos, record, op="write_record")
        self._write_pos = ByteOffset(self._write_pos + self._stride)

    def read_record(self) -> R:
        """Read the record at the read cursor and advance it by one stride.

        On EndOfDataError the cursor is left where it was.

        Raises:
            StateError: If the store is closed.
            EndOfDataError: If less than one full record remains.
            StoreIOError: If the read fails.
        """
        record = self._read_block(self._read_pos, op="read_record")
        self._read_pos = ByteOffset(self._read_pos + self._stride)
        return record

    def write_record_at(self, index: int, record: R) -> None:
        """Write a record at position ``index`` without moving either cursor.

        Raises:
            StateError: If the store is closed.
            ValueError: If index is negative.
            StoreIOError: If the write does not complete.
        """
        self._require_open("write_record_at")
        self._write_block(offset_of(index, self._stride), record, op="write_record_at")

    def read_record_at(self, index: int) -> R:
        """Read the record at position ``index`` without moving either cursor.

        Raises:
            StateError: If the store is closed.
            ValueError: If index is negative.
            EndOfDataError: If no full record exists at that position.
        """
        self._require_open("read_record_at")
        return self._read_block(offset_of(index, self._stride), op="read_record_at")

    def record_count(self) -> int:
        """Return the number of complete records in the file.

        A trailing partial block is not counted.

        Raises:
            StateError: If the store is closed.
        """
        file = self._require_open("record_count")
        try:
            size = file.seek(0, os.SEEK_END)
        except OSError as exc:
            raise self._error(StoreIOError, f"Cannot size file: {exc}", op="record_count") from exc
        return size // self._stride

    def iter_records(self) -> Iterator[R]:
        """Iterate every complete record from the start of the file.

        The sequential cursors are not touched.

        Raises:
            StateError: If the store is closed.
        """
        count = self.record_count()
        return (self.read_record_at(index) for index in range(count))

    def __iter__(self) -> Iterator[R]:
        return self.iter_records()

    def _write_block(self, offset: ByteOffset, record: R, op: str) -> None:
        file = self._require_open(op)
        if not isinstance(record, self._record_type):
            raise TypeError(
                f"Store holds {self._record_type.__name__}, got {type(record).__name__}"
            )

        data = record.encode()
        try:
            file.seek(offset)
            written = file.write(data)
        except OSError as exc:
            raise self._error(
                StoreIOError, f"Write failed at offset {offset}: {exc}", op=op
            ) from exc

        if written != len(data):
            raise self._error(
                StoreIOError,
                f"Short write at offset {offset}: {written} of {len(data)} bytes",
                op=op,
            )

        self._metrics.records_written_total.labels(record_type=self._record_type.__name__).inc()
        self._metrics.bytes_written_total.inc(len(data))
        self._log.debug(
            "record_written",
            op=op,
            index=index_of(offset, self._stride),
            offset=offset,
            record_id=record.id,
        )

    def _read_block(self, offset: ByteOffset, op: str) -> R:
        file = self._require_open(op)
        try:
            file.seek(offset)
            data = file.read(self._stride)
        except OSError as exc:
            raise self._error(
                StoreIOError, f"Read failed at offset {offset}: {exc}", op=op
            ) from exc

        if len(data) < self._stride:
            raise self._error(
                EndOfDataError,
                f"End of data at offset {offset}: {len(data)} of {self._stride} bytes left",
                op=op,
            )

        record = self._record_type.decode(data)
        self._metrics.records_read_total.labels(record_type=self._record_type.__name__).inc()
        self._metrics.bytes_read_total.inc(len(data))
        self._log.debug(
            "record_read",
            op=op,
            index=index_of(offset, self._stride),
            offset=offset,
            record_id=record.id,
        )
        return record

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def _require_open(self, op: str) -> BinaryIO:
        if not self._state.is_open() or self._file is None:
            raise self._error(StateError, f"Cannot {op}: store is closed", op=op)
        return self._file

    def _error(
        self, error_cls: type[RecordStoreError], message: str, op: str
    ) -> RecordStoreError:
        """Log and count a store error, returning it for the caller to raise."""
        kind = _ERROR_KINDS[error_cls]
        self._metrics.store_errors_total.labels(kind=kind).inc()
        self._log.warning("store_error", kind=kind, op=op, error=message)
        return error_cls(message)

    # ------------------------------------------------------------------
    # Resource management
    # ------------------------------------------------------------------

    def __enter__(self) -> FileRecordStore[R]:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close if still open."""
        if self._state.is_open():
            self.close()

    def __del__(self) -> None:
        """Destructor - release a handle the caller never closed."""
        if getattr(self, "_file", None) is not None:
            self._release(sync=False)

    def __repr__(self) -> str:
        return (
            f"FileRecordStore(path={str(self._file_path)!r}, "
            f"record_type={self._record_type.__name__}, state={self._state.name})"
        )
