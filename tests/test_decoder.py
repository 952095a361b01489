"""Tests for decoding section CSV blocks into records."""

import pytest

from roadtrip_parser.decoder import decode, decode_rows
from roadtrip_parser.exceptions import DecodeError, RowDecodeError
from roadtrip_parser.models import FuelRecord, TireRecord, VehicleRecord
from roadtrip_parser.observability import EventType, ObservabilityHook, ObservabilityManager
from roadtrip_parser.sections import RECORD_DEFS, SectionName

FUEL = RECORD_DEFS[SectionName.FUEL_RECORDS]
VEHICLE = RECORD_DEFS[SectionName.VEHICLE]
TIRES = RECORD_DEFS[SectionName.TIRE_LOG]


class RecordingHook(ObservabilityHook):
    def __init__(self):
        self.events = []
        self.metrics = []

    def on_event(self, event):
        self.events.append(event)

    def on_metric(self, metric):
        self.metrics.append(metric)


def test_decode_maps_columns_by_name():
    """Column order in the file does not matter."""
    data = b"Total Price,Date,Odometer (mi)\n40.00,2024-12-09 15:04,50120\n"

    records = decode(data, FUEL)

    assert records == [FuelRecord(odometer=50120.0, date="2024-12-09 15:04", total_price=40.0)]


def test_decode_preserves_row_order():
    """One record per data row, in file order."""
    data = b"Odometer (mi),Total Price\n100,40.00\n200,35.50\n300,10\n"

    records = decode(data, FUEL)

    assert [r.odometer for r in records] == [100.0, 200.0, 300.0]
    assert sum(r.total_price for r in records) == pytest.approx(85.50)


def test_decode_ignores_unknown_columns():
    """Columns the shape does not know about are skipped."""
    data = b"Name,Paint Color,Odometer\nRanger,blue,50000\n"

    records = decode(data, VEHICLE)

    assert records == [VehicleRecord(name="Ranger", odometer="50000")]


def test_decode_optional_columns_take_zero_values():
    """Optional fields absent from the header row get zero values."""
    data = b"Name\nRanger\n"

    (vehicle,) = decode(data, VEHICLE)

    assert vehicle.tank_capacity == 0.0
    assert vehicle.tank_1_type == ""
    assert vehicle.odometer == ""


def test_decode_empty_cells_and_short_rows():
    """Empty cells and cells missing from short rows get zero values."""
    data = b"Name,Start Odometer (mi.),Distance,ID\nSummer,,1200\n"

    (tire,) = decode(data, TIRES)

    assert tire == TireRecord(name="Summer", start_odometer=0, distance=1200, id=0)


def test_decode_quoted_values():
    """Double-quoted cells may hold commas and escaped quotes."""
    data = b'Name,Notes\n"Ranger, ""Blue""","line one, line two"\n'

    (vehicle,) = decode(data, VEHICLE)

    assert vehicle.name == 'Ranger, "Blue"'
    assert vehicle.notes == "line one, line two"


def test_decode_integer_accepts_decimal_text():
    """Integer fields accept a whole number written with a decimal point."""
    data = b"Name,Distance,ParentID\nSummer,1200.0,3\n"

    (tire,) = decode(data, TIRES)

    assert tire.distance == 1200
    assert tire.parent_id == 3


@pytest.mark.parametrize("data", [b"", b"\n\n", b"Odometer (mi),Total Price\n", b"Odometer (mi),Total Price\n\n"])
def test_decode_empty_section(data):
    """A section with no data rows decodes to an empty list."""
    assert decode(data, FUEL) == []


def test_decode_skips_blank_lines():
    """Blank separator lines inside a section are not rows."""
    data = b"Odometer (mi)\n\n100\n\n200\n\n"

    assert len(decode(data, FUEL)) == 2


def test_decode_strips_header_whitespace_and_bom():
    """Header names are matched after stripping whitespace and a BOM."""
    data = "\ufeff Name , Odometer\nRanger,50000\n".encode("utf-8")

    (vehicle,) = decode(data, VEHICLE)

    assert vehicle.name == "Ranger"
    assert vehicle.odometer == "50000"


def test_decode_missing_required_column():
    """A header row without a required column fails the section."""
    data = b"Date,Total Price\n2024-12-09,40.00\n"

    with pytest.raises(DecodeError) as exc_info:
        decode(data, FUEL)

    assert not isinstance(exc_info.value, RowDecodeError)
    assert exc_info.value.section == "FUEL RECORDS"
    assert "Odometer (mi)" in str(exc_info.value)


def test_decode_malformed_numeric_value():
    """A non-numeric odometer names the section, row and column."""
    data = b"Odometer (mi),Total Price\n100,40.00\nabc,35.50\n"

    with pytest.raises(RowDecodeError) as exc_info:
        decode(data, FUEL)

    err = exc_info.value
    assert err.section == "FUEL RECORDS"
    assert err.row == 2
    assert err.column == "Odometer (mi)"
    assert err.value == "abc"
    assert "FUEL RECORDS" in str(err)
    assert "row 2" in str(err)


def test_decode_rows_returns_dicts():
    """decode_rows gives field-name keyed dicts with typed values."""
    rows = decode_rows(b"Odometer (mi),Currency Code\n100,840\n", FUEL)

    assert rows[0]["odometer"] == 100.0
    assert rows[0]["currency_code"] == 840
    assert rows[0]["note"] == ""
    assert set(rows[0]) == {f.name for f in FUEL.fields}


def test_decode_rejects_undecodable_bytes():
    """Bytes that are not valid in the encoding fail the section."""
    with pytest.raises(DecodeError) as exc_info:
        decode(b"Name\n\xff\xfe\n", VEHICLE)
    assert exc_info.value.section == "VEHICLE"


def test_decode_reports_rows_to_observability():
    """A decoded section emits its row count as an event and a counter."""
    hook = RecordingHook()
    decode(b"Odometer (mi)\n100\n200\n", FUEL, observability=ObservabilityManager([hook]))

    assert [e.event_type for e in hook.events] == [EventType.SECTION_DECODED]
    assert hook.events[0].details == {"rows": 2}
    assert hook.metrics[0].name == "rows_decoded"
    assert hook.metrics[0].value == 2
    assert hook.metrics[0].tags == {"section": "FUEL RECORDS"}


def test_decode_reports_row_errors_to_observability():
    """A bad row emits ROW_ERROR before the exception propagates."""
    hook = RecordingHook()

    with pytest.raises(RowDecodeError):
        decode(b"Odometer (mi)\nabc\n", FUEL, observability=ObservabilityManager([hook]))

    assert [e.event_type for e in hook.events] == [EventType.ROW_ERROR]
    assert hook.events[0].details == {"row": 1, "column": "Odometer (mi)", "value": "abc"}


def test_decode_fractional_integer_rejected():
    """Integer fields do not silently truncate fractional values."""
    data = b"Name,Distance\nSummer,1200.5\n"

    with pytest.raises(RowDecodeError) as exc_info:
        decode(data, TIRES)
    assert exc_info.value.column == "Distance"
    assert exc_info.value.value == "1200.5"
