"""
Road Trip MPG backup file parser.
"""

__version__ = "1.0.0"

from roadtrip_parser.casting import cast_value, parse_date
from roadtrip_parser.config_models import LoaderConfig
from roadtrip_parser.decoder import decode
from roadtrip_parser.exceptions import (
    DecodeError,
    FileUnreadableError,
    RoadTripError,
    RowDecodeError,
    SectionMissingError,
    UnsupportedLanguageError,
)
from roadtrip_parser.loader import load_vehicle, parse_document
from roadtrip_parser.locator import extract, locate, section_range, strip_erroneous_headers
from roadtrip_parser.models import (
    DocumentInfo,
    FieldDef,
    FieldType,
    FuelRecord,
    MaintenanceRecord,
    ParseResult,
    RecordDef,
    SectionRange,
    TireRecord,
    TripRecord,
    ValuationRecord,
    VehicleRecord,
)
from roadtrip_parser.observability import LoggingHook, ObservabilityHook, ObservabilityManager
from roadtrip_parser.sections import RECORD_DEFS, SectionName
from roadtrip_parser.validators import validate_record_def, validate_record_defs

__all__ = [
    "load_vehicle",
    "parse_document",
    "locate",
    "extract",
    "section_range",
    "strip_erroneous_headers",
    "decode",
    "parse_date",
    "cast_value",
    "LoaderConfig",
    "SectionName",
    "RECORD_DEFS",
    "FieldDef",
    "FieldType",
    "RecordDef",
    "SectionRange",
    "DocumentInfo",
    "ParseResult",
    "VehicleRecord",
    "FuelRecord",
    "MaintenanceRecord",
    "TripRecord",
    "TireRecord",
    "ValuationRecord",
    "ObservabilityHook",
    "ObservabilityManager",
    "LoggingHook",
    "RoadTripError",
    "FileUnreadableError",
    "SectionMissingError",
    "UnsupportedLanguageError",
    "DecodeError",
    "RowDecodeError",
    "validate_record_def",
    "validate_record_defs",
]
