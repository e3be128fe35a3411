"""Record Store port for cursor-based record I/O.

This inbound port defines the contract offered to callers that persist
fixed-width records. A store owns exactly one file handle and keeps two
independent cursors: one for reads, one for writes. Both advance by the
record stride.

Error kinds are kept distinct so callers can tell a lifecycle mistake
(StateError) from a resource failure (StoreIOError) from exhausted input
(EndOfDataError).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Iterator, Protocol, TypeVar, runtime_checkable

from record_store.domain.entities import FixedRecord
from record_store.domain.value_objects import StoreState

R = TypeVar("R", bound=FixedRecord)


class RecordStoreError(Exception):
    """Base class for record store failures."""

    pass


class StateError(RecordStoreError):
    """Raised when an operation is invoked in the wrong lifecycle state.

    Always detected before the underlying file is touched.
    """

    pass


class StoreIOError(RecordStoreError):
    """Raised when the file cannot be opened or a transfer is incomplete."""

    pass


class EndOfDataError(RecordStoreError):
    """Raised when fewer than one full record remains to be read."""

    pass


@runtime_checkable
class RecordStore(Protocol[R]):
    """Protocol for fixed-stride record storage.

    Lifecycle:
        CLOSED -> create_or_replace() -> OPEN -> close() -> CLOSED
        CLOSED -> reopen_append() -> OPEN

    Every record-level method raises StateError while CLOSED.
    """

    @property
    @abstractmethod
    def state(self) -> StoreState:
        """Return the current lifecycle state."""
        ...

    @property
    @abstractmethod
    def record_size(self) -> int:
        """Return the stride in bytes."""
        ...

    @abstractmethod
    def create_or_replace(self) -> None:
        """Open the file for reading and writing, truncating it.

        Raises:
            StateError: If the store is already open.
            StoreIOError: If the file cannot be created.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Release the file handle.

        Raises:
            StateError: If the store is already closed.
        """
        ...

    @abstractmethod
    def reopen_append(self) -> None:
        """Reopen without truncation, write cursor at end of file.

        Raises:
            StateError: If the store is already open.
            StoreIOError: If the file cannot be opened.
        """
        ...

    @abstractmethod
    def reset_read_cursor(self) -> None:
        """Move the read cursor to offset 0."""
        ...

    @abstractmethod
    def reset_write_cursor(self) -> None:
        """Move the write cursor to offset 0."""
        ...

    @abstractmethod
    def write_record(self, record: R) -> None:
        """Write one record at the write cursor and advance it.

        Raises:
            StateError: If the store is closed.
            StoreIOError: If the write does not complete.
        """
        ...

    @abstractmethod
    def read_record(self) -> R:
        """Read one record at the read cursor and advance it.

        Raises:
            StateError: If the store is closed.
            EndOfDataError: If less than one record remains.
        """
        ...

    @abstractmethod
    def record_count(self) -> int:
        """Return the number of complete records in the file."""
        ...

    @abstractmethod
    def __iter__(self) -> Iterator[R]:
        """Iterate every complete record from the start of the file."""
        ...
