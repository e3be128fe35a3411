"""Value objects for the record store domain.

Exports:
    Identifiers:
        - RecordIndex: Zero-based record position
        - ByteOffset: Absolute byte position in a store file
        - START_OFFSET: Offset of the first record
        - offset_of, index_of: Conversions through the stride

    Store State:
        - StoreState: Store lifecycle (CLOSED, OPEN)
"""

from record_store.domain.value_objects.identifiers import (
    START_OFFSET,
    ByteOffset,
    RecordIndex,
    index_of,
    offset_of,
)
from record_store.domain.value_objects.store_state import StoreState

__all__ = [
    # Identifiers
    "RecordIndex",
    "ByteOffset",
    "START_OFFSET",
    "offset_of",
    "index_of",
    # Store state
    "StoreState",
]
