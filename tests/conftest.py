"""Pytest configuration and shared fixtures."""

from pathlib import Path
from typing import Dict, Optional, Sequence

import pytest

PREAMBLE = 'ROAD TRIP CSV ",."\nVersion,Language\n1500,en\n\n'

VEHICLE = (
    "VEHICLE\n"
    "Name,Odometer,Units,Notes,Tank Capacity,Tank Units,Home Currency,Flags,IconID,FuelUnits,"
    "TripComp Units,TripComp Speed,TripComp Temperature,TripComp Time Enabled,Odometer Shift"
    ",Tank 1 Type,Tank 2 Type,Tank 2 Units\n"
    'Ranger,50000,mi,"Blue, 4x4",19.5,gal,USD,0,3,gal,mpg,mph,F,1,0\n'
)

FUEL = (
    "FUEL RECORDS\n"
    "Odometer (mi),Trip Distance,Date,Fill Amount,Fill Units,Price per Unit,Total Price,"
    "Partial Fill,MPG,Note,Location,Currency Code,ID,Tank Number\n"
    "50120,300.5,2024-12-09 15:04,12.5,gal,3.20,40.00,,24.04,,Costco,840,1,1\n"
    "50420,300,2024-12-16 08:30,11.1,gal,3.198,35.50,,27.03,\"quoted, note\",Shell,840,2,1\n"
)

MAINTENANCE = (
    "MAINTENANCE RECORDS\n"
    "Description,Date,Odometer (mi.),Cost,Note,Location,Type\n"
    "Oil change,2024-11-02,49800,59.99,,Dealer,Service\n"
)

TRIPS = (
    "ROAD TRIPS\n"
    "Name,Start Date,Start Odometer (mi.),End Date,End Odometer,Note,Distance,ID\n"
    "Moab,2024-10-01,49000,2024-10-05,49900,,900,1\n"
)

TIRES = (
    "TIRE LOG\n"
    "Name,Start Date,Start Odometer (mi.),Size,Size Correction,Distance,Age,Note,Flags,ID,ParentID\n"
    "All-terrain,2023-5-1,40000,265/70R17,1.0,10000,1y,,,1,0\n"
)

VALUATIONS = (
    "VALUATIONS\n"
    "Type,Date,Odometer,Price,Notes,Flags\n"
    "Trade-in,2024-12-01,50000,$18000,,\n"
)

SECTIONS: Dict[str, str] = {
    "VEHICLE": VEHICLE,
    "FUEL RECORDS": FUEL,
    "MAINTENANCE RECORDS": MAINTENANCE,
    "ROAD TRIPS": TRIPS,
    "TIRE LOG": TIRES,
    "VALUATIONS": VALUATIONS,
}


def build_document(
    sections: Optional[Dict[str, str]] = None,
    order: Optional[Sequence[str]] = None,
    preamble: str = PREAMBLE,
) -> bytes:
    """Assemble a backup document from section blocks, blank-line separated."""
    sections = SECTIONS if sections is None else sections
    order = list(sections) if order is None else order
    return (preamble + "\n".join(sections[name] for name in order)).encode("utf-8")


def empty_section(name: str, header_row: str = "") -> str:
    """A section with a header line and optionally a CSV header row only."""
    return f"{name}\n{header_row}\n" if header_row else f"{name}\n"


@pytest.fixture
def document() -> bytes:
    """A complete backup document with every section populated."""
    return build_document()


@pytest.fixture
def backup_file(tmp_path, document) -> Path:
    """Write the complete document to disk."""
    path = tmp_path / "Ranger.csv"
    path.write_bytes(document)
    return path
