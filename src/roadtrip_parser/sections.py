"""
Section names and record shapes for Road Trip data file version 1500 (en).

Each Road Trip "CSV" file is really several independent CSV blocks, each
introduced by an all-caps section header line. RECORD_DEFS maps every
section to the ordered list of columns its rows are decoded from; it is the
single source of truth for both locating sections and decoding them.
"""

from enum import Enum
from typing import Dict, Tuple, Union

from roadtrip_parser.models import (
    FieldDef,
    FieldType,
    FuelRecord,
    MaintenanceRecord,
    RecordDef,
    TireRecord,
    TripRecord,
    ValuationRecord,
    VehicleRecord,
)

# Road Trip data file version supported by this package.
SUPPORTED_VERSION = 1500

_STR = FieldType.STRING
_INT = FieldType.INT
_FLOAT = FieldType.FLOAT
_DATE = FieldType.DATE


class SectionName(str, Enum):
    """Section header strings, as they appear in the file."""
    VEHICLE = "VEHICLE"
    FUEL_RECORDS = "FUEL RECORDS"
    MAINTENANCE_RECORDS = "MAINTENANCE RECORDS"
    ROAD_TRIPS = "ROAD TRIPS"
    TIRE_LOG = "TIRE LOG"
    VALUATIONS = "VALUATIONS"

    def __str__(self) -> str:
        return self.value


def _fields(*specs: Tuple) -> Tuple[FieldDef, ...]:
    """Build FieldDefs from (name, column, type[, optional]) tuples."""
    return tuple(FieldDef(*spec) for spec in specs)


VEHICLE_FIELDS = _fields(
    ("name", "Name", _STR, False),
    ("odometer", "Odometer", _STR),
    ("units", "Units", _STR),
    ("notes", "Notes", _STR),
    ("tank_capacity", "Tank Capacity", _FLOAT),
    ("tank_units", "Tank Units", _STR),
    ("home_currency", "Home Currency", _STR),
    ("flags", "Flags", _STR),
    ("icon_id", "IconID", _STR),
    ("fuel_units", "FuelUnits", _STR),
    ("trip_comp_units", "TripComp Units", _STR),
    ("trip_comp_speed", "TripComp Speed", _STR),
    ("trip_comp_temperature", "TripComp Temperature", _STR),
    ("trip_comp_time_enabled", "TripComp Time Enabled", _STR),
    ("odometer_shift", "Odometer Shift", _STR),
    ("tank_1_type", "Tank 1 Type", _STR),
    ("tank_2_type", "Tank 2 Type", _STR),
    ("tank_2_units", "Tank 2 Units", _STR),
)

FUEL_FIELDS = _fields(
    ("odometer", "Odometer (mi)", _FLOAT, False),
    ("trip_distance", "Trip Distance", _FLOAT),
    ("date", "Date", _DATE),
    ("fill_amount", "Fill Amount", _FLOAT),
    ("fill_units", "Fill Units", _STR),
    ("price_per_unit", "Price per Unit", _FLOAT),
    ("total_price", "Total Price", _FLOAT),
    ("partial_fill", "Partial Fill", _STR),
    ("mpg", "MPG", _FLOAT),
    ("note", "Note", _STR),
    ("octane", "Octane", _STR),
    ("location", "Location", _STR),
    ("payment", "Payment", _STR),
    ("conditions", "Conditions", _STR),
    ("reset", "Reset", _STR),
    ("categories", "Categories", _STR),
    ("flags", "Flags", _STR),
    ("currency_code", "Currency Code", _INT),
    ("currency_rate", "Currency Rate", _FLOAT),
    ("latitude", "Latitude", _FLOAT),
    ("longitude", "Longitude", _FLOAT),
    ("id", "ID", _INT),
    ("fuel_economy", "Trip Comp Fuel Economy", _STR),
    ("avg_speed", "Trip Comp Avg. Speed", _STR),
    ("temperature", "Trip Comp Temperature", _FLOAT),
    ("drive_time", "Trip Comp Drive Time", _STR),
    ("tank_number", "Tank Number", _INT),
)

MAINTENANCE_FIELDS = _fields(
    ("description", "Description", _STR, False),
    ("date", "Date", _DATE),
    ("odometer", "Odometer (mi.)", _FLOAT),
    ("cost", "Cost", _FLOAT),
    ("note", "Note", _STR),
    ("location", "Location", _STR),
    ("type", "Type", _STR),
    ("subtype", "Subtype", _STR),
    ("payment", "Payment", _STR),
    ("categories", "Categories", _STR),
    ("reminder_interval", "Reminder Interval", _STR),
    ("reminder_distance", "Reminder Distance", _STR),
    ("flags", "Flags", _STR),
    ("currency_code", "Currency Code", _INT),
    ("currency_rate", "Currency Rate", _FLOAT),
    ("latitude", "Latitude", _FLOAT),
    ("longitude", "Longitude", _FLOAT),
    ("id", "ID", _INT),
    ("notification_interval", "Notification Interval", _STR),
    ("notification_distance", "Notification Distance", _STR),
)

TRIP_FIELDS = _fields(
    ("name", "Name", _STR, False),
    ("start_date", "Start Date", _DATE),
    ("start_odometer", "Start Odometer (mi.)", _FLOAT),
    ("end_date", "End Date", _DATE),
    ("end_odometer", "End Odometer", _FLOAT),
    ("note", "Note", _STR),
    ("distance", "Distance", _FLOAT),
    ("id", "ID", _INT),
    ("type", "Type", _STR),
    ("categories", "Categories", _STR),
    ("flags", "Flags", _STR),
)

TIRE_FIELDS = _fields(
    ("name", "Name", _STR, False),
    ("start_date", "Start Date", _DATE),
    ("start_odometer", "Start Odometer (mi.)", _INT),
    ("size", "Size", _STR),
    ("size_correction", "Size Correction", _STR),
    ("distance", "Distance", _INT),
    ("age", "Age", _STR),
    ("note", "Note", _STR),
    ("flags", "Flags", _STR),
    ("id", "ID", _INT),
    ("parent_id", "ParentID", _INT),
)

VALUATION_FIELDS = _fields(
    ("type", "Type", _STR),
    ("date", "Date", _DATE, False),
    ("odometer", "Odometer", _INT),
    ("price", "Price", _STR),
    ("notes", "Notes", _STR),
    ("flags", "Flags", _STR),
)

RECORD_DEFS: Dict[SectionName, RecordDef] = {
    SectionName.VEHICLE: RecordDef(SectionName.VEHICLE, VehicleRecord, "vehicles", VEHICLE_FIELDS),
    SectionName.FUEL_RECORDS: RecordDef(SectionName.FUEL_RECORDS, FuelRecord, "fuel_records", FUEL_FIELDS),
    SectionName.MAINTENANCE_RECORDS: RecordDef(
        SectionName.MAINTENANCE_RECORDS, MaintenanceRecord, "maintenance_records", MAINTENANCE_FIELDS
    ),
    SectionName.ROAD_TRIPS: RecordDef(SectionName.ROAD_TRIPS, TripRecord, "trips", TRIP_FIELDS),
    SectionName.TIRE_LOG: RecordDef(SectionName.TIRE_LOG, TireRecord, "tires", TIRE_FIELDS),
    SectionName.VALUATIONS: RecordDef(SectionName.VALUATIONS, ValuationRecord, "valuations", VALUATION_FIELDS),
}


def section_headers() -> Tuple[str, ...]:
    """Header strings for every known section, in table order."""
    return tuple(name.value for name in RECORD_DEFS)


def get_record_def(section: Union[str, SectionName]) -> RecordDef:
    """Look up the record shape for a section header string.

    Raises:
        KeyError: If the section is not one of the six known names.
    """
    try:
        return RECORD_DEFS[SectionName(section)]
    except ValueError:
        raise KeyError(f"Unknown section '{section}'") from None
