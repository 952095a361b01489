"""
Data models and structures for the Road Trip backup parser.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Tuple, Type

from roadtrip_parser.casting import parse_date


class FieldType(str, Enum):
    """Supported field data types."""
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    DATE = "date"  # date-string, kept verbatim; see parse_date


@dataclass(frozen=True)
class FieldDef:
    """Field definition: one CSV column bound to one record attribute."""
    name: str
    column: str
    type: FieldType = FieldType.STRING
    optional: bool = True


@dataclass(frozen=True)
class RecordDef:
    """Record definition: the shape of one section's rows."""
    section: str
    record_type: Type[Any]
    attribute: str
    fields: Tuple[FieldDef, ...] = ()

    @property
    def columns(self) -> List[str]:
        return [f.column for f in self.fields]

    @property
    def required_columns(self) -> List[str]:
        return [f.column for f in self.fields if not f.optional]


class SectionRange(NamedTuple):
    """Exclusive byte range of a section's content inside a document."""
    start: int
    end: int

    @property
    def size(self) -> int:
        return max(self.end - self.start, 0)


def _timestamp(text: str) -> Optional[datetime]:
    value, ok = parse_date(text)
    return value if ok else None


@dataclass(frozen=True)
class VehicleRecord:
    """The vehicle a backup file belongs to.

    A file is expected to hold a single row in its VEHICLE section.
    """
    name: str = ""
    odometer: str = ""
    units: str = ""
    notes: str = ""
    tank_capacity: float = 0.0
    tank_units: str = ""
    home_currency: str = ""
    flags: str = ""
    icon_id: str = ""
    fuel_units: str = ""
    trip_comp_units: str = ""
    trip_comp_speed: str = ""
    trip_comp_temperature: str = ""
    trip_comp_time_enabled: str = ""
    odometer_shift: str = ""
    tank_1_type: str = ""
    tank_2_type: str = ""
    tank_2_units: str = ""


@dataclass(frozen=True)
class FuelRecord:
    """A single fill-up from the FUEL RECORDS section."""
    odometer: float = 0.0
    trip_distance: float = 0.0
    date: str = ""
    fill_amount: float = 0.0
    fill_units: str = ""
    price_per_unit: float = 0.0
    total_price: float = 0.0
    partial_fill: str = ""
    mpg: float = 0.0
    note: str = ""
    octane: str = ""
    location: str = ""
    payment: str = ""
    conditions: str = ""
    reset: str = ""
    categories: str = ""
    flags: str = ""
    currency_code: int = 0
    currency_rate: float = 0.0
    latitude: float = 0.0
    longitude: float = 0.0
    id: int = 0
    fuel_economy: str = ""
    avg_speed: str = ""
    temperature: float = 0.0
    drive_time: str = ""
    tank_number: int = 0

    @property
    def primary_key(self) -> str:
        """Odometer reading as a zero-padded key.

        Two fuel records are the same fill-up when their odometers match;
        no other field is used to tell them apart.
        """
        return f"{int(self.odometer):07d}"

    @property
    def timestamp(self) -> Optional[datetime]:
        return _timestamp(self.date)


@dataclass(frozen=True)
class MaintenanceRecord:
    """A maintenance activity from the MAINTENANCE RECORDS section."""
    description: str = ""
    date: str = ""
    odometer: float = 0.0
    cost: float = 0.0
    note: str = ""
    location: str = ""
    type: str = ""
    subtype: str = ""
    payment: str = ""
    categories: str = ""
    reminder_interval: str = ""
    reminder_distance: str = ""
    flags: str = ""
    currency_code: int = 0
    currency_rate: float = 0.0
    latitude: float = 0.0
    longitude: float = 0.0
    id: int = 0
    notification_interval: str = ""
    notification_distance: str = ""

    @property
    def timestamp(self) -> Optional[datetime]:
        return _timestamp(self.date)


@dataclass(frozen=True)
class TripRecord:
    """A road trip, bounded by start/end dates and odometer readings."""
    name: str = ""
    start_date: str = ""
    start_odometer: float = 0.0
    end_date: str = ""
    end_odometer: float = 0.0
    note: str = ""
    distance: float = 0.0
    id: int = 0
    type: str = ""
    categories: str = ""
    flags: str = ""

    @property
    def start_timestamp(self) -> Optional[datetime]:
        return _timestamp(self.start_date)

    @property
    def end_timestamp(self) -> Optional[datetime]:
        return _timestamp(self.end_date)


@dataclass(frozen=True)
class TireRecord:
    """A set of tires installed on the vehicle, from the TIRE LOG section."""
    name: str = ""
    start_date: str = ""
    start_odometer: int = 0
    size: str = ""
    size_correction: str = ""
    distance: int = 0
    age: str = ""
    note: str = ""
    flags: str = ""
    id: int = 0
    parent_id: int = 0

    @property
    def start_timestamp(self) -> Optional[datetime]:
        return _timestamp(self.start_date)


@dataclass(frozen=True)
class ValuationRecord:
    """Market value of the vehicle at a given date and odometer reading."""
    type: str = ""
    date: str = ""
    odometer: int = 0
    price: str = ""
    notes: str = ""
    flags: str = ""

    @property
    def timestamp(self) -> Optional[datetime]:
        return _timestamp(self.date)


@dataclass(frozen=True)
class DocumentInfo:
    """Preamble values from the top of a backup file."""
    delimiters: str = ""
    version: Optional[int] = None
    language: Optional[str] = None


@dataclass(frozen=True)
class ParseResult:
    """Everything decoded from one backup file.

    Attributes:
        info: Preamble values (delimiters, version, language).
        filename: Source path, if the document came from a file.
        vehicles: VEHICLE rows; callers expect exactly one.
        fuel_records: FUEL RECORDS rows, in file order.
        maintenance_records: MAINTENANCE RECORDS rows.
        trips: ROAD TRIPS rows.
        tires: TIRE LOG rows.
        valuations: VALUATIONS rows.
        raw: The document bytes after the erroneous header strip.
    """
    info: DocumentInfo = field(default_factory=DocumentInfo)
    filename: Optional[str] = None
    vehicles: Tuple[VehicleRecord, ...] = ()
    fuel_records: Tuple[FuelRecord, ...] = ()
    maintenance_records: Tuple[MaintenanceRecord, ...] = ()
    trips: Tuple[TripRecord, ...] = ()
    tires: Tuple[TireRecord, ...] = ()
    valuations: Tuple[ValuationRecord, ...] = ()
    raw: bytes = field(default=b"", repr=False)

    @property
    def vehicle(self) -> Optional[VehicleRecord]:
        """The first VEHICLE row, or None when the section was empty."""
        return self.vehicles[0] if self.vehicles else None

    def records(self, section: str) -> Tuple[Any, ...]:
        """Return the decoded collection for a section name."""
        from roadtrip_parser.sections import get_record_def

        return getattr(self, get_record_def(section).attribute)

    def section_counts(self) -> Dict[str, int]:
        from roadtrip_parser.sections import RECORD_DEFS

        return {str(name): len(getattr(self, rd.attribute)) for name, rd in RECORD_DEFS.items()}
