"""Unit tests for fixed-layout record entities."""

from __future__ import annotations

import pytest

from record_store.domain.entities import (
    TEXT_CAPACITY,
    Employee,
    Record,
    Student,
    pack_text,
    unpack_text,
)


@pytest.mark.unit
class TestTextField:
    """Tests for NUL-padded text conversion."""

    def test_short_text_is_padded(self) -> None:
        """Short text is padded with NULs to full capacity."""
        raw = pack_text("Alice")
        assert len(raw) == TEXT_CAPACITY
        assert raw.startswith(b"Alice\x00")
        assert raw[5:] == b"\x00" * (TEXT_CAPACITY - 5)

    def test_long_text_keeps_terminator(self) -> None:
        """Overlong text is cut to capacity - 1 bytes plus a terminator."""
        raw = pack_text("x" * 200)
        assert len(raw) == TEXT_CAPACITY
        assert raw[: TEXT_CAPACITY - 1] == b"x" * (TEXT_CAPACITY - 1)
        assert raw[-1:] == b"\x00"

    def test_truncation_does_not_split_characters(self) -> None:
        """A multi-byte character straddling the cut is dropped whole."""
        text = "a" * 48 + "é"  # 'é' is two bytes; only one byte of room left
        raw = pack_text(text)
        assert len(raw) == TEXT_CAPACITY
        assert unpack_text(raw) == "a" * 48

    def test_unpack_stops_at_first_terminator(self) -> None:
        """Bytes after the first NUL are ignored."""
        assert unpack_text(b"Bob\x00junk\x00\x00") == "Bob"

    def test_exact_usable_capacity_round_trips(self) -> None:
        """Text of exactly capacity - 1 bytes is kept whole."""
        text = "y" * (TEXT_CAPACITY - 1)
        assert unpack_text(pack_text(text)) == text

    @pytest.mark.parametrize("value", [None, 42, b"bytes"])
    def test_non_string_text(self, value: object) -> None:
        with pytest.raises(ValueError, match="must be str"):
            pack_text(value)  # type: ignore[arg-type]


@pytest.mark.unit
class TestRecordLayout:
    """Tests for the shared fixed-width layout."""

    def test_record_size(self) -> None:
        """int32 + float64 + 50-byte text = 62 bytes."""
        assert Record.record_size() == 62

    @pytest.mark.parametrize("record_type", [Record, Employee, Student])
    def test_all_types_share_stride(self, record_type: type) -> None:
        """Every shipped record type has the same stride."""
        assert record_type.record_size() == Record.record_size()

    def test_stride_independent_of_contents(self) -> None:
        """Encoded length does not depend on field values."""
        records = [
            Record(),
            Record(id=1, score=100.0, name="Ibrahim"),
            Record(id=-(2**31), score=-1e300, name="z" * 500),
            Record(id=2**31 - 1, score=0.5, name="ünïcödé"),
        ]
        sizes = {len(r.encode()) for r in records}
        assert sizes == {Record.record_size()}

    def test_field_order(self) -> None:
        """Layout is id, then measurement, then text."""
        data = Record(id=7, score=2.5, name="Q").encode()
        assert Record.LAYOUT.unpack(data)[:2] == (7, 2.5)
        assert data[12:14] == b"Q\x00"

    def test_layout_version(self) -> None:
        assert Record.LAYOUT_VERSION == 1


@pytest.mark.unit
class TestRecordRoundTrip:
    """Tests for encode/decode."""

    def test_round_trip(self) -> None:
        """Decoding an encoded record reproduces every field."""
        record = Record(id=1, score=100.0, name="Ibrahim")
        assert Record.decode(record.encode()) == record

    def test_employee_round_trip(self) -> None:
        employee = Employee(id=42, salary=1234.5, name="Maybe")
        restored = Employee.decode(employee.encode())
        assert restored == employee
        assert restored.salary == 1234.5

    def test_student_round_trip(self) -> None:
        student = Student(id=3, marks=92.5, name="Charlie")
        assert Student.decode(student.encode()) == student

    def test_unicode_round_trip(self) -> None:
        record = Record(id=5, score=1.0, name="Zoë Ñandú")
        assert Record.decode(record.encode()) == record

    def test_empty_name(self) -> None:
        record = Record(id=9, score=0.0, name="")
        assert Record.decode(record.encode()).name == ""

    def test_long_name_is_truncated_silently(self) -> None:
        """Overlong names lose their tail without raising."""
        name = "N" * 80
        restored = Record.decode(Record(id=1, score=1.0, name=name).encode())
        assert restored.name == name[: TEXT_CAPACITY - 1]
        assert restored.id == 1
        assert restored.score == 1.0

    def test_decode_wrong_length(self) -> None:
        """Decoding a block of the wrong size raises."""
        with pytest.raises(ValueError, match="requires 62 bytes"):
            Record.decode(b"\x00" * 10)

    def test_id_out_of_range(self) -> None:
        """Ids outside int32 cannot be encoded."""
        with pytest.raises(ValueError, match="Cannot encode Record"):
            Record(id=2**31, score=0.0, name="big").encode()

    def test_non_string_name(self) -> None:
        """A name that is not text raises ValueError, not AttributeError."""
        with pytest.raises(ValueError, match="must be str, got NoneType"):
            Record(id=1, score=1.0, name=None).encode()  # type: ignore[arg-type]

    def test_decode_returns_declared_type(self) -> None:
        """The same bytes decode into whichever type is asked for."""
        data = Employee(id=1, salary=10.0, name="E").encode()
        student = Student.decode(data)
        assert isinstance(student, Student)
        assert student.marks == 10.0


@pytest.mark.unit
class TestRecordDefaults:
    """Tests for constructor defaults and rendering."""

    def test_employee_defaults(self) -> None:
        employee = Employee()
        assert employee.id == -1
        assert employee.salary == 0.0
        assert employee.name == ""

    def test_record_defaults(self) -> None:
        assert Record() == Record(id=0, score=0.0, name="")

    def test_measurement_alias(self) -> None:
        """The measurement property reads the type-specific field."""
        assert Employee(salary=3.0).measurement == 3.0
        assert Student(marks=4.0).measurement == 4.0
        assert Record(score=5.0).measurement == 5.0

    def test_str(self) -> None:
        assert str(Employee(id=1, salary=100.0, name="Ibrahim")) == "1 100 Ibrahim"

    def test_types_are_not_equal(self) -> None:
        """Records of different types never compare equal."""
        assert Record(id=1, score=1.0, name="a") != Student(id=1, marks=1.0, name="a")
