"""
Pydantic models for loader configuration.
"""

import json
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from roadtrip_parser.locator import ERRONEOUS_HEADERS
from roadtrip_parser.sections import SUPPORTED_VERSION, SectionName


class LoaderConfig(BaseModel):
    """Settings for loading a Road Trip backup file."""
    remove_erroneous_headers: bool = Field(
        True,
        description="Strip the extra VEHICLE header columns before parsing"
    )
    erroneous_headers: str = Field(
        ERRONEOUS_HEADERS,
        description="Text removed from the document when remove_erroneous_headers is set"
    )
    encoding: str = Field("utf-8", description="Text encoding of the backup file")
    required_sections: List[SectionName] = Field(
        default_factory=lambda: list(SectionName),
        description="Sections whose absence fails the load"
    )
    supported_version: int = Field(
        SUPPORTED_VERSION,
        description="Data file version this package was written against",
        gt=0
    )
    supported_languages: List[str] = Field(
        default_factory=lambda: ["en"],
        description="Preamble languages whose section headers we understand"
    )
    max_file_size: Optional[int] = Field(
        None,
        description="Maximum file size in bytes (None = no limit)",
        gt=0
    )

    @field_validator('required_sections')
    @classmethod
    def validate_unique_sections(cls, sections):
        """Ensure each section is listed once."""
        duplicates = [s.value for s in set(sections) if sections.count(s) > 1]
        if duplicates:
            raise ValueError(f"Duplicate required sections: {', '.join(sorted(duplicates))}")
        return sections

    @field_validator('encoding')
    @classmethod
    def validate_encoding(cls, encoding):
        """Ensure the encoding is one Python knows."""
        try:
            "".encode(encoding)
        except LookupError:
            raise ValueError(f"Unknown encoding: {encoding}")  # noqa: B904
        return encoding

    @classmethod
    def from_dict(cls, config_dict: dict) -> "LoaderConfig":
        """
        Create LoaderConfig from a dictionary.

        Raises:
            ValidationError: If configuration is invalid
        """
        return cls.model_validate(config_dict)

    @classmethod
    def from_json_file(cls, config_path: str) -> "LoaderConfig":
        """
        Load and validate configuration from a JSON file.

        Raises:
            ValidationError: If configuration is invalid
            FileNotFoundError: If file doesn't exist
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(path, encoding='utf-8') as f:
            config_dict = json.load(f)

        return cls.from_dict(config_dict)
