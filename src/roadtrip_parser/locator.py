"""
Section locator for Road Trip backup files.

A backup file has no offsets or lengths: each CSV block starts on the line
after its all-caps header and runs until the next known header (or the end
of the document). Sections may appear in any order.

All offsets are byte offsets into the raw document. Ranges are recomputed on
every request; backup files are small and the document never changes.
"""

import logging
from typing import Dict, Iterable, Mapping, Optional

from roadtrip_parser.exceptions import SectionMissingError
from roadtrip_parser.models import SectionRange
from roadtrip_parser.observability import EventType, ObservabilityManager

logger = logging.getLogger(__name__)

# Extra VEHICLE header columns written by some app versions with no data
# behind them.
ERRONEOUS_HEADERS = ",Tank 1 Type,Tank 2 Type,Tank 2 Units"


def strip_erroneous_headers(document: bytes, marker: str = ERRONEOUS_HEADERS) -> bytes:
    """Remove the first occurrence of the erroneous VEHICLE header columns.

    Must run before locate(): it shifts every offset after it. Running it on
    already-stripped input is a no-op.
    """
    omit = marker.encode("utf-8")
    if not omit or omit not in document:
        return document
    logger.debug(f"Stripping erroneous headers '{marker}'")
    return document.replace(omit, b"", 1)


def _line_end(document: bytes, pos: int) -> Optional[int]:
    """Offset just past the line terminator at pos, or None if pos is mid-line."""
    if pos == len(document):
        return pos
    if document.startswith(b"\r\n", pos):
        return pos + 2
    if document.startswith(b"\n", pos):
        return pos + 1
    return None


def find_header(document: bytes, header: str) -> Optional[int]:
    """Offset of the first line consisting of exactly ``header``, or None."""
    needle = header.encode("utf-8")
    pos = document.find(needle)
    while pos != -1:
        at_line_start = pos == 0 or document[pos - 1:pos] == b"\n"
        if at_line_start and _line_end(document, pos + len(needle)) is not None:
            return pos
        pos = document.find(needle, pos + 1)
    return None


def locate(document: bytes, headers: Iterable[str]) -> Dict[str, Optional[int]]:
    """Find the start offset of every header in the document.

    Args:
        document: Raw backup file content
        headers: Header strings to look for

    Returns:
        Dict of header string to offset, None where the header is absent
    """
    offsets: Dict[str, Optional[int]] = {}
    for header in headers:
        offsets[str(header)] = find_header(document, str(header))
        logger.debug(f"Section start for '{header}': {offsets[str(header)]}")
    return offsets


def section_range(
    document: bytes,
    header: str,
    offsets: Mapping[str, Optional[int]],
    observability: Optional[ObservabilityManager] = None,
) -> SectionRange:
    """Compute the content range of one section.

    The range starts after the header line and ends at the nearest following
    header among all found headers, or at the end of the document.

    Raises:
        SectionMissingError: If the header was not found.
    """
    header = str(header)
    start = offsets.get(header)
    if start is None:
        raise SectionMissingError(header)

    end = len(document)
    for name, other in offsets.items():
        if name != header and other is not None and start < other < end:
            end = other

    content_start = start + len(header.encode("utf-8"))
    content_start = _line_end(document, content_start) or content_start
    result = SectionRange(min(content_start, end), end)

    logger.debug(f"Section range for '{header}': {result.start}-{result.end}")
    if observability is not None:
        observability.emit_event(
            EventType.SECTION_LOCATED,
            section=header,
            details={"start": result.start, "end": result.end, "bytes": result.size},
        )
    return result


def extract(
    document: bytes,
    header: str,
    offsets: Mapping[str, Optional[int]],
    observability: Optional[ObservabilityManager] = None,
) -> bytes:
    """Return the raw content of one section, without its header line."""
    start, end = section_range(document, header, offsets, observability)
    return document[start:end]


def preamble(document: bytes, offsets: Mapping[str, Optional[int]]) -> bytes:
    """Return everything before the first found section header."""
    found = [o for o in offsets.values() if o is not None]
    return document[:min(found)] if found else document
