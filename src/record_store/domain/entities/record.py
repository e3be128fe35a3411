"""Fixed-layout record entities.

Every record type shares one on-disk layout, encoded field by field:

    [id: int32][measurement: float64][name: 50 bytes, NUL padded]

The layout uses native byte order with standard sizes and no alignment
padding, so the encoded size (the store's stride) is identical for every
instance of a record type and never depends on in-memory representation.

The name field holds at most TEXT_CAPACITY - 1 bytes of UTF-8 followed by
at least one NUL terminator. Longer names are truncated silently on
encode; truncation never splits a multi-byte character.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar, TypeVar

R = TypeVar("R", bound="FixedRecord")


TEXT_CAPACITY = 50
"""Bytes reserved on disk for the name field, terminator included."""

TEXT_ENCODING = "utf-8"


def pack_text(text: str, capacity: int = TEXT_CAPACITY) -> bytes:
    """Encode text into a NUL-padded buffer of exactly ``capacity`` bytes.

    At most ``capacity - 1`` bytes of text are kept so the buffer always
    ends with a terminator.

    Raises:
        ValueError: If text is not a string.
    """
    if not isinstance(text, str):
        raise ValueError(f"Text field must be str, got {type(text).__name__}")
    raw = text.encode(TEXT_ENCODING)
    usable = capacity - 1
    if len(raw) > usable:
        # Drop a trailing partial character left by the byte cut
        raw = raw[:usable].decode(TEXT_ENCODING, errors="ignore").encode(TEXT_ENCODING)
    return raw.ljust(capacity, b"\x00")


def unpack_text(raw: bytes) -> str:
    """Decode a NUL-padded buffer up to its first terminator."""
    return raw.split(b"\x00", 1)[0].decode(TEXT_ENCODING, errors="replace")


class FixedRecord:
    """Base class for records with the shared fixed-width layout.

    Subclasses are dataclasses declaring ``id``, one float measurement
    and ``name``, and set MEASUREMENT_FIELD to the measurement's attribute
    name. Encoding order is always id, measurement, name.
    """

    LAYOUT_VERSION: ClassVar[int] = 1
    LAYOUT: ClassVar[struct.Struct] = struct.Struct(f"=id{TEXT_CAPACITY}s")
    MEASUREMENT_FIELD: ClassVar[str] = "score"

    id: int
    name: str

    @classmethod
    def record_size(cls) -> int:
        """Return the encoded size in bytes (the store stride)."""
        return cls.LAYOUT.size

    @property
    def measurement(self) -> float:
        """The record's floating-point field, whatever it is called."""
        return getattr(self, self.MEASUREMENT_FIELD)

    def encode(self) -> bytes:
        """Serialize the record to exactly ``record_size()`` bytes.

        Raises:
            ValueError: If id does not fit in 32 bits or the measurement
                is not a number, or name is not a string.
        """
        try:
            return self.LAYOUT.pack(
                self.id,
                self.measurement,
                pack_text(self.name),
            )
        except struct.error as exc:
            raise ValueError(f"Cannot encode {type(self).__name__}: {exc}") from exc

    @classmethod
    def decode(cls: type[R], data: bytes) -> R:
        """Deserialize a record from exactly ``record_size()`` bytes.

        Raises:
            ValueError: If data has the wrong length.
        """
        if len(data) != cls.LAYOUT.size:
            raise ValueError(
                f"{cls.__name__} requires {cls.LAYOUT.size} bytes, got {len(data)}"
            )

        record_id, measurement, raw_name = cls.LAYOUT.unpack(data)
        fields = {
            "id": record_id,
            cls.MEASUREMENT_FIELD: measurement,
            "name": unpack_text(raw_name),
        }
        return cls(**fields)

    def __str__(self) -> str:
        return f"{self.id} {self.measurement:g} {self.name}"


@dataclass
class Record(FixedRecord):
    """Generic scored record.

    Example:
        >>> r = Record(id=1, score=100.0, name="Ibrahim")
        >>> Record.decode(r.encode()) == r
        True
        >>> Record.record_size()
        62
    """

    MEASUREMENT_FIELD: ClassVar[str] = "score"

    id: int = 0
    score: float = 0.0
    name: str = ""


@dataclass
class Employee(FixedRecord):
    """Employee entry. An id of -1 marks an unassigned employee."""

    MEASUREMENT_FIELD: ClassVar[str] = "salary"

    id: int = -1
    salary: float = 0.0
    name: str = ""


@dataclass
class Student(FixedRecord):
    """Student entry with exam marks."""

    MEASUREMENT_FIELD: ClassVar[str] = "marks"

    id: int = 0
    marks: float = 0.0
    name: str = ""
