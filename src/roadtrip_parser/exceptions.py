"""
Exception hierarchy for the Road Trip backup parser.

Every error raised by the core derives from RoadTripError, so callers can
catch one type. Decode errors always carry the section they came from.
"""

from typing import Iterable, Optional


class RoadTripError(Exception):
    """Base exception for all roadtrip-parser errors."""


class FileUnreadableError(RoadTripError):
    """Raised when the backup file is missing, unreadable or too large."""


class SectionMissingError(RoadTripError):
    """Raised when a required section header is not found in the document."""

    def __init__(self, section: str):
        self.section = str(section)
        super().__init__(f"Section '{self.section}' not found in document")


class UnsupportedLanguageError(RoadTripError):
    """Raised when the preamble declares a language we have no headers for."""

    def __init__(self, language: str, supported: Iterable[str] = ("en",)):
        self.language = language
        super().__init__(
            f"Unsupported language '{language}' (supported: {', '.join(supported)})"
        )


class DecodeError(RoadTripError):
    """Raised when a section cannot be decoded into its record shape.

    Typically the section's header row lacks a column that a non-optional
    field needs.
    """

    def __init__(self, section: str, message: str):
        self.section = str(section)
        super().__init__(f"{self.section}: {message}")


class RowDecodeError(DecodeError):
    """Raised when a data row holds a value that does not fit its field type."""

    def __init__(self, section: str, row: int, column: str, value: Optional[str], reason: str = ""):
        self.row = row
        self.column = column
        self.value = value
        message = f"row {row}, column '{column}': cannot decode {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(section, message)
