"""
Record decoder: turns one section's CSV block into typed records.

Each section is a standalone CSV document with its own header row. Columns
are bound to record fields by name, never by position.
"""

import csv
import io
import logging
from typing import Any, Dict, Iterator, List, Optional

from roadtrip_parser.casting import cast_value, zero_value
from roadtrip_parser.exceptions import DecodeError, RowDecodeError
from roadtrip_parser.models import RecordDef
from roadtrip_parser.observability import EventType, ObservabilityManager

logger = logging.getLogger(__name__)


def _rows(text: str) -> Iterator[List[str]]:
    """Yield CSV rows, skipping empty and all-blank lines."""
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=",", quotechar='"', doublequote=True)
    for csv_row in reader:
        if not csv_row or all(not cell or cell.strip() == "" for cell in csv_row):
            logger.debug(f"Skipping blank row at line {reader.line_num}")
            continue
        yield csv_row


def decode_rows(section_bytes: bytes, record_def: RecordDef, encoding: str = "utf-8") -> List[Dict[str, Any]]:
    """Decode a section into one dict of field name -> typed value per row.

    Raises:
        DecodeError: If a non-optional field's column is absent from the header row.
        RowDecodeError: If a cell does not cast to its field type.
    """
    section = record_def.section
    try:
        text = section_bytes.decode(encoding)
    except UnicodeDecodeError as e:
        raise DecodeError(section, f"cannot decode section text as {encoding}: {e}") from e
    text = text.lstrip("\ufeff")

    rows = _rows(text)
    header = next(rows, None)
    if header is None:
        logger.debug(f"Section '{section}' has no header row")
        return []

    header_idx = {}
    for i, name in enumerate(header):
        header_idx.setdefault(name.strip(), i)

    missing = [f.column for f in record_def.fields if not f.optional and f.column not in header_idx]
    if missing:
        raise DecodeError(section, f"missing required column(s): {', '.join(missing)}")

    # Pre-build the field -> column index map; None for absent optional columns
    field_map = [(fld, header_idx.get(fld.column)) for fld in record_def.fields]
    for fld, col_idx in field_map:
        if col_idx is None:
            logger.debug(f"Column '{fld.column}' absent from '{section}', using zero value")

    result = []
    for row_num, csv_row in enumerate(rows, 1):
        row = {}
        for fld, col_idx in field_map:
            if col_idx is None or col_idx >= len(csv_row):
                row[fld.name] = zero_value(fld.type)
                continue
            cell = csv_row[col_idx]
            try:
                row[fld.name] = cast_value(cell, fld.type)
            except ValueError as e:
                raise RowDecodeError(section, row_num, fld.column, cell, str(e)) from e
        result.append(row)

    return result


def decode(
    section_bytes: bytes,
    record_def: RecordDef,
    *,
    encoding: str = "utf-8",
    observability: Optional[ObservabilityManager] = None,
) -> List[Any]:
    """Decode a section's CSV block into records of ``record_def.record_type``.

    Args:
        section_bytes: Raw section content (header row + data rows)
        record_def: Record shape for the section
        encoding: Text encoding of the section
        observability: Optional manager to report row counts and failures to

    Returns:
        One record per data row, in row order. Empty for an empty section.

    Raises:
        DecodeError: If a non-optional field's column is absent from the header row.
        RowDecodeError: If a cell does not cast to its field type.
    """
    section = str(record_def.section)
    try:
        rows = decode_rows(section_bytes, record_def, encoding)
    except RowDecodeError as e:
        if observability is not None:
            observability.emit_event(
                EventType.ROW_ERROR,
                section=section,
                details={"row": e.row, "column": e.column, "value": e.value},
            )
        raise

    records = [record_def.record_type(**row) for row in rows]

    logger.debug(f"Decoded {len(records)} rows from '{section}'")
    if observability is not None:
        observability.emit_event(EventType.SECTION_DECODED, section=section, details={"rows": len(records)})
        observability.counter("rows_decoded", len(records), tags={"section": section})
    return records
