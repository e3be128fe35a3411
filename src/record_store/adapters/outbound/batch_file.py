"""Count-prefixed batch files.

A batch file stores a whole collection of records in one shot:

    [count: int32][record 0]...[record count-1]

Unlike a FileRecordStore file, the count is persisted, so a reader knows
how many records to expect without consulting the caller. Files are
opened, fully transferred and released within a single call.
"""

from __future__ import annotations

import struct
from pathlib import Path
from typing import BinaryIO, Sequence, TypeVar

from record_store.domain.entities import FixedRecord, Record
from record_store.infrastructure.logging import get_logger
from record_store.infrastructure.metrics import MetricsRegistry, get_metrics
from record_store.ports.inbound import EndOfDataError, StoreIOError

R = TypeVar("R", bound=FixedRecord)

COUNT_FORMAT = struct.Struct("=i")
COUNT_SIZE = COUNT_FORMAT.size

logger = get_logger(__name__)


def write_batch(
    file_path: str | Path,
    records: Sequence[R],
    record_type: type[R] = Record,  # type: ignore[assignment]
    metrics: MetricsRegistry | None = None,
) -> None:
    """Replace ``file_path`` with a batch of records.

    Every record is validated and encoded before the file is touched, so a
    bad record leaves any existing file intact.

    Args:
        file_path: Destination file (created or truncated).
        records: Records to store, in order.
        record_type: Record class of every element.
        metrics: Metrics registry (default global registry).

    Raises:
        TypeError: If a record is not of ``record_type``.
        ValueError: If a record cannot be encoded.
        StoreIOError: If the file cannot be written.
    """
    path = Path(file_path)
    metrics = metrics or get_metrics()

    for record in records:
        if not isinstance(record, record_type):
            raise TypeError(
                f"Batch holds {record_type.__name__}, got {type(record).__name__}"
            )
    payload = COUNT_FORMAT.pack(len(records)) + b"".join(r.encode() for r in records)

    try:
        with open(path, "wb") as file:
            file.write(payload)
    except OSError as exc:
        metrics.store_errors_total.labels(kind="io").inc()
        logger.warning("batch_write_failed", path=str(path), error=str(exc))
        raise StoreIOError(f"Cannot write batch file {path}: {exc}") from exc

    metrics.records_written_total.labels(record_type=record_type.__name__).inc(len(records))
    metrics.bytes_written_total.inc(len(payload))
    logger.info("batch_written", path=str(path), count=len(records))


def read_batch(
    file_path: str | Path,
    record_type: type[R] = Record,  # type: ignore[assignment]
    metrics: MetricsRegistry | None = None,
) -> list[R]:
    """Read every record of a batch file.

    Args:
        file_path: Batch file to read.
        record_type: Record class stored in the file.
        metrics: Metrics registry (default global registry).

    Returns:
        The records in file order.

    Raises:
        StoreIOError: If the file cannot be read or its count is negative.
        EndOfDataError: If the file is shorter than its declared count.
    """
    path = Path(file_path)
    metrics = metrics or get_metrics()

    try:
        with open(path, "rb") as file:
            records = _read_counted(file, record_type)
    except OSError as exc:
        metrics.store_errors_total.labels(kind="io").inc()
        logger.warning("batch_read_failed", path=str(path), error=str(exc))
        raise StoreIOError(f"Cannot read batch file {path}: {exc}") from exc
    except EndOfDataError as exc:
        metrics.store_errors_total.labels(kind="end_of_data").inc()
        logger.warning("batch_truncated", path=str(path), error=str(exc))
        raise
    except StoreIOError as exc:
        metrics.store_errors_total.labels(kind="io").inc()
        logger.warning("batch_corrupt", path=str(path), error=str(exc))
        raise

    stride = record_type.record_size()
    metrics.records_read_total.labels(record_type=record_type.__name__).inc(len(records))
    metrics.bytes_read_total.inc(COUNT_SIZE + stride * len(records))
    logger.info("batch_read", path=str(path), count=len(records))
    return records


def _read_counted(file: BinaryIO, record_type: type[R]) -> list[R]:
    header = file.read(COUNT_SIZE)
    if len(header) < COUNT_SIZE:
        raise EndOfDataError("Batch file has no record count")

    (count,) = COUNT_FORMAT.unpack(header)
    if count < 0:
        raise StoreIOError(f"Corrupt batch file: negative record count {count}")

    stride = record_type.record_size()
    records: list[R] = []
    for index in range(count):
        block = file.read(stride)
        if len(block) < stride:
            raise EndOfDataError(
                f"Batch file declares {count} records but ends after {index}"
            )
        records.append(record_type.decode(block))
    return records
