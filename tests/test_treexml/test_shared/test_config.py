"""Tests for the configuration system."""

import dataclasses
import json

import pytest

from treexml.shared.config import (
    DEFAULT_CHUNK_SIZE,
    ConfigError,
    ConfigValidationError,
    ReaderConfig,
    TreeXMLConfig,
    WriterConfig,
)


class TestReaderConfig:
    """Test suite for ReaderConfig."""

    def test_default_configuration(self) -> None:
        """Test default reader configuration values."""
        config = ReaderConfig()

        assert config.chunk_size == DEFAULT_CHUNK_SIZE
        assert config.whitespace_to_characters is False
        assert config.trim_whitespace is False
        assert config.cdata_to_characters is False

    @pytest.mark.parametrize("chunk_size", [0, -1])
    def test_invalid_chunk_size(self, chunk_size: int) -> None:
        """Test chunk size validation."""
        with pytest.raises(ConfigValidationError, match="chunk_size must be > 0") as exc_info:
            ReaderConfig(chunk_size=chunk_size)

        assert exc_info.value.field_name == "chunk_size"

    def test_config_is_immutable(self) -> None:
        """Test that configurations are frozen."""
        config = ReaderConfig()

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.chunk_size = 1  # type: ignore[misc]


class TestWriterConfig:
    """Test suite for WriterConfig."""

    def test_default_configuration(self) -> None:
        """Test default writer configuration values."""
        config = WriterConfig()

        assert config.write_document_declaration is True
        assert config.indent_string == "  "
        assert config.perform_indent is True
        assert config.pad_self_closing is True
        assert config.line_separator == "\n"

    def test_tab_indentation_is_valid(self) -> None:
        """Test that any whitespace works as indentation."""
        assert WriterConfig(indent_string="\t").indent_string == "\t"

    def test_non_whitespace_indent_rejected(self) -> None:
        """Test indentation validation."""
        with pytest.raises(ConfigValidationError, match="indent_string") as exc_info:
            WriterConfig(indent_string="--")

        assert exc_info.value.field_name == "indent_string"
        assert exc_info.value.suggestions

    def test_invalid_line_separator_rejected(self) -> None:
        """Test line separator validation."""
        with pytest.raises(ConfigValidationError, match="line_separator"):
            WriterConfig(line_separator="\r")


class TestTreeXMLConfig:
    """Test suite for the aggregate configuration."""

    def test_default_components(self) -> None:
        """Test default component configurations."""
        config = TreeXMLConfig()

        assert config.reader == ReaderConfig()
        assert config.writer == WriterConfig()

    def test_component_type_checked(self) -> None:
        """Test that components must have the right type."""
        with pytest.raises(ConfigValidationError, match="reader"):
            TreeXMLConfig(reader=WriterConfig())  # type: ignore[arg-type]

    def test_override_nested_fields(self) -> None:
        """Test override with component__field notation."""
        config = TreeXMLConfig().override(
            reader__trim_whitespace=True,
            writer__indent_string="\t",
        )

        assert config.reader.trim_whitespace is True
        assert config.writer.indent_string == "\t"
        assert config.writer.perform_indent is True

    def test_override_does_not_modify_original(self) -> None:
        """Test that override returns a new object."""
        original = TreeXMLConfig()
        original.override(writer__perform_indent=False)

        assert original.writer.perform_indent is True

    def test_override_validates_values(self) -> None:
        """Test that overridden values are validated."""
        with pytest.raises(ConfigValidationError):
            TreeXMLConfig().override(reader__chunk_size=0)

    def test_override_unknown_component(self) -> None:
        """Test unknown component key."""
        with pytest.raises(ConfigValidationError, match="Unknown configuration key"):
            TreeXMLConfig().override(parser__strict=True)

    def test_override_unknown_field(self) -> None:
        """Test unknown field within a known component."""
        with pytest.raises(ConfigValidationError, match="Unknown writer option") as exc_info:
            TreeXMLConfig().override(writer__colour=True)

        assert exc_info.value.field_name == "writer__colour"

    def test_to_dict(self) -> None:
        """Test dictionary conversion."""
        data = TreeXMLConfig().to_dict()

        assert data["reader"]["chunk_size"] == DEFAULT_CHUNK_SIZE
        assert data["writer"]["indent_string"] == "  "

    def test_dict_round_trip(self) -> None:
        """Test from_dict(to_dict()) equality."""
        config = TreeXMLConfig().override(
            reader__cdata_to_characters=True, writer__pad_self_closing=False
        )

        assert TreeXMLConfig.from_dict(config.to_dict()) == config

    def test_from_dict_partial(self) -> None:
        """Test that missing fields keep their defaults."""
        config = TreeXMLConfig.from_dict({"writer": {"perform_indent": False}})

        assert config.writer.perform_indent is False
        assert config.writer.indent_string == "  "
        assert config.reader == ReaderConfig()

    def test_json_round_trip(self) -> None:
        """Test JSON serialization."""
        config = TreeXMLConfig.fragment()
        json_str = config.to_json()

        assert json.loads(json_str)["writer"]["write_document_declaration"] is False
        assert TreeXMLConfig.from_json(json_str) == config

    def test_from_invalid_json(self) -> None:
        """Test invalid JSON input."""
        with pytest.raises(ConfigError, match="Invalid configuration JSON"):
            TreeXMLConfig.from_json("{not json")

    def test_presets(self) -> None:
        """Test preset factories."""
        assert TreeXMLConfig.condensed().writer.perform_indent is False
        assert TreeXMLConfig.fragment().writer.write_document_declaration is False
