"""Domain entities for the record store.

Exports:
    Records:
        - FixedRecord: Base class with the shared fixed-width layout
        - Record: Generic (id, score, name) record
        - Employee: (id, salary, name) record
        - Student: (id, marks, name) record

    Text helpers:
        - TEXT_CAPACITY: On-disk bytes of the name field
        - pack_text, unpack_text: NUL-padded text conversion
"""

from record_store.domain.entities.record import (
    TEXT_CAPACITY,
    Employee,
    FixedRecord,
    Record,
    Student,
    pack_text,
    unpack_text,
)

__all__ = [
    # Records
    "FixedRecord",
    "Record",
    "Employee",
    "Student",
    # Text helpers
    "TEXT_CAPACITY",
    "pack_text",
    "unpack_text",
]
