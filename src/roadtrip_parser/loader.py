"""
Loading logic for Road Trip backup files.

This module ties the locator and the decoder together: read the file once,
strip the known vendor defect, find every section and decode each one into
its record type. A load either fully succeeds or raises.
"""

import codecs
import logging
import time
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from roadtrip_parser.config_models import LoaderConfig
from roadtrip_parser.decoder import decode, decode_rows
from roadtrip_parser.exceptions import (
    FileUnreadableError,
    RoadTripError,
    SectionMissingError,
    UnsupportedLanguageError,
)
from roadtrip_parser.locator import extract, locate, preamble, strip_erroneous_headers
from roadtrip_parser.models import DocumentInfo, FieldDef, FieldType, ParseResult, RecordDef
from roadtrip_parser.observability import EventType, ObservabilityManager
from roadtrip_parser.sections import RECORD_DEFS, SectionName, section_headers
from roadtrip_parser.validators import validate_record_defs

logger = logging.getLogger(__name__)

MAGIC = b"ROAD TRIP CSV"

PREAMBLE_DEF = RecordDef(
    section="PREAMBLE",
    record_type=DocumentInfo,
    attribute="info",
    fields=(
        FieldDef("version", "Version", FieldType.INT),
        FieldDef("language", "Language", FieldType.STRING),
    ),
)


def _strip_bom(data: bytes) -> bytes:
    """Drop a leading UTF-8 byte order mark."""
    if data.startswith(codecs.BOM_UTF8):
        return data[len(codecs.BOM_UTF8):]
    return data


def parse_preamble(
    data: bytes,
    config: Optional[LoaderConfig] = None,
    observability: Optional[ObservabilityManager] = None,
    filename: Optional[str] = None,
) -> DocumentInfo:
    """Parse the text before the first section header.

    The preamble looks like::

        ROAD TRIP CSV ",."
        Version,Language
        1500,en

    Every part is optional; missing values are left as None.

    Raises:
        UnsupportedLanguageError: If the declared language is not supported.
        RowDecodeError: If the version is not a number.
    """
    config = config or LoaderConfig()

    delimiters = ""
    lines = _strip_bom(data).splitlines(keepends=True)
    while lines and not lines[0].strip():
        lines.pop(0)
    if lines and lines[0].startswith(MAGIC):
        magic_line = lines.pop(0)[len(MAGIC):].strip()
        delimiters = magic_line.decode(config.encoding, errors="replace").strip('"')

    rows = decode_rows(b"".join(lines), PREAMBLE_DEF, config.encoding)
    values = rows[0] if rows else {}
    info = DocumentInfo(
        delimiters=delimiters,
        version=values.get("version") or None,
        language=values.get("language") or None,
    )

    if info.language is not None and info.language not in config.supported_languages:
        raise UnsupportedLanguageError(info.language, config.supported_languages)

    if info.version is not None and info.version != config.supported_version:
        logger.debug(f"Data file version {info.version}, expected {config.supported_version}")
        if observability is not None:
            observability.emit_event(
                EventType.UNSUPPORTED_VERSION,
                filename=filename,
                details={"version": info.version, "supported": config.supported_version},
            )

    return info


def parse_document(
    data: bytes,
    *,
    filename: Optional[str] = None,
    config: Optional[LoaderConfig] = None,
    observability: Optional[ObservabilityManager] = None,
) -> ParseResult:
    """Parse the raw bytes of a Road Trip backup file.

    Args:
        data: Full file content
        filename: Source path, kept on the result for diagnostics
        config: Loader settings (defaults apply when None)
        observability: Manager to report progress to (no-op when None)

    Returns:
        ParseResult holding every section's records

    Raises:
        SectionMissingError: If a required section is absent.
        DecodeError: If a section's header row lacks a required column.
        RowDecodeError: If a row holds a value that does not fit its type.
        UnsupportedLanguageError: If the preamble declares another language.
        ValueError: If the built-in record shapes fail validation.
    """
    config = config or LoaderConfig()
    observability = observability or ObservabilityManager()

    errors = validate_record_defs(RECORD_DEFS)
    if errors:
        for error in errors:
            logger.debug(f"Record shape error: {error}")
        raise ValueError(f"Record shape validation failed with {len(errors)} error(s)")

    data = _strip_bom(data)
    if config.remove_erroneous_headers:
        data = strip_erroneous_headers(data, config.erroneous_headers)

    offsets = locate(data, section_headers())
    info = parse_preamble(preamble(data, offsets), config, observability, filename)

    required = {str(s) for s in config.required_sections}
    collections: Dict[str, Tuple] = {}
    for name, record_def in RECORD_DEFS.items():
        header = str(name)
        if offsets[header] is None:
            if header in required:
                raise SectionMissingError(header)
            logger.debug(f"Optional section '{header}' not found")
            observability.emit_event(EventType.SECTION_MISSING, filename=filename, section=header)
            collections[record_def.attribute] = ()
            continue

        section_bytes = extract(data, header, offsets, observability)
        records = decode(section_bytes, record_def, encoding=config.encoding, observability=observability)
        collections[record_def.attribute] = tuple(records)

    result = ParseResult(info=info, filename=filename, raw=data, **collections)

    if len(result.vehicles) != 1:
        observability.emit_event(
            EventType.VEHICLE_COUNT,
            filename=filename,
            section=SectionName.VEHICLE,
            details={"rows": len(result.vehicles), "expected": 1},
        )

    return result


def _read_file(path: Path, config: LoaderConfig) -> bytes:
    """Read the whole file, mapping OS errors onto FileUnreadableError."""
    try:
        if config.max_file_size is not None:
            size = path.stat().st_size
            if size > config.max_file_size:
                raise FileUnreadableError(
                    f"File {path} is {size} bytes, exceeds max_file_size {config.max_file_size}"
                )
        return path.read_bytes()
    except OSError as e:
        raise FileUnreadableError(f"Cannot read {path}: {e}") from e


def load_vehicle(
    path: Union[str, Path],
    config: Optional[LoaderConfig] = None,
    observability: Optional[ObservabilityManager] = None,
) -> ParseResult:
    """Load and parse a Road Trip backup file.

    Args:
        path: Path to the backup file
        config: Loader settings (defaults apply when None)
        observability: Manager to report progress to (no-op when None)

    Returns:
        ParseResult holding every section's records

    Raises:
        FileUnreadableError: If the file is missing, unreadable or too large.
        RoadTripError: Any section or decode failure; see parse_document.
    """
    path = Path(path)
    config = config or LoaderConfig()
    observability = observability or ObservabilityManager()
    filename = str(path)

    observability.emit_event(EventType.FILE_START, filename=filename)
    observability.start_timer("load_duration")
    start = time.time()

    try:
        data = _read_file(path, config)
        observability.gauge("document_bytes", len(data))
        result = parse_document(data, filename=filename, config=config, observability=observability)
    except RoadTripError as e:
        observability.end_timer("load_duration", tags={"status": "error"})
        observability.emit_event(
            EventType.FILE_ERROR,
            filename=filename,
            section=getattr(e, "section", None),
            details={"error": str(e), "type": type(e).__name__},
        )
        raise

    observability.end_timer("load_duration", tags={"status": "ok"})
    logger.info(f"Loaded Road Trip CSV {path.name} ({len(data):,} bytes) in {time.time() - start:.3f}s")
    observability.emit_event(
        EventType.FILE_LOADED,
        filename=filename,
        details={"bytes": len(data), **result.section_counts()},
    )
    return result
