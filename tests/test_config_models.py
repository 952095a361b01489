"""
Tests for Pydantic-based loader configuration.
"""

import json

import pytest
from pydantic import ValidationError

from roadtrip_parser.config_models import LoaderConfig
from roadtrip_parser.locator import ERRONEOUS_HEADERS
from roadtrip_parser.sections import SectionName


class TestLoaderConfig:
    """Test configuration validation."""

    def test_defaults(self):
        config = LoaderConfig()
        assert config.remove_erroneous_headers is True
        assert config.erroneous_headers == ERRONEOUS_HEADERS
        assert config.encoding == "utf-8"
        assert config.required_sections == list(SectionName)
        assert config.supported_version == 1500
        assert config.supported_languages == ["en"]
        assert config.max_file_size is None

    def test_section_names_coerced(self):
        config = LoaderConfig.from_dict({"required_sections": ["VEHICLE", "FUEL RECORDS"]})
        assert config.required_sections == [SectionName.VEHICLE, SectionName.FUEL_RECORDS]

    def test_unknown_section_rejected(self):
        with pytest.raises(ValidationError):
            LoaderConfig.from_dict({"required_sections": ["ODOMETER LOG"]})

    def test_duplicate_sections_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            LoaderConfig.from_dict({"required_sections": ["VEHICLE", "VEHICLE"]})
        assert "duplicate" in str(exc_info.value).lower()

    def test_unknown_encoding_rejected(self):
        with pytest.raises(ValidationError):
            LoaderConfig.from_dict({"encoding": "no-such-codec"})

    @pytest.mark.parametrize("size", [0, -1])
    def test_max_file_size_positive(self, size):
        with pytest.raises(ValidationError):
            LoaderConfig.from_dict({"max_file_size": size})


class TestConfigFromFile:
    """Test loading configuration from JSON files."""

    def test_from_json_file(self, tmp_path):
        path = tmp_path / "loader.json"
        path.write_text(json.dumps({"remove_erroneous_headers": False, "encoding": "latin-1"}))

        config = LoaderConfig.from_json_file(str(path))

        assert config.remove_erroneous_headers is False
        assert config.encoding == "latin-1"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            LoaderConfig.from_json_file(str(tmp_path / "missing.json"))
