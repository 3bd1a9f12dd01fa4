"""Configuration classes for treexml.

Reading and writing are configured separately: :class:`ReaderConfig` controls
how the event source reports character data, :class:`WriterConfig` controls
the textual form produced by the event sink. :class:`TreeXMLConfig` bundles
both and adds override and (de)serialization helpers.
"""

import json
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional

_XML_WHITESPACE = " \t\r\n"

DEFAULT_CHUNK_SIZE = 64 * 1024


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ReaderConfig:
    """Configuration for the XML event source."""

    chunk_size: int = DEFAULT_CHUNK_SIZE
    whitespace_to_characters: bool = False  # Report whitespace-only runs as text
    trim_whitespace: bool = False           # Strip text runs, drop empty ones
    cdata_to_characters: bool = False       # Fold CDATA into surrounding text

    def __post_init__(self) -> None:
        """Validate reader configuration."""
        if self.chunk_size <= 0:
            raise ConfigValidationError("chunk_size must be > 0", "chunk_size")


@dataclass(frozen=True)
class WriterConfig:
    """Configuration for the XML event sink."""

    write_document_declaration: bool = True
    indent_string: str = "  "
    perform_indent: bool = True
    pad_self_closing: bool = True
    line_separator: str = "\n"

    def __post_init__(self) -> None:
        """Validate writer configuration."""
        if self.indent_string.strip(_XML_WHITESPACE):
            raise ConfigValidationError(
                "indent_string must contain only whitespace",
                "indent_string",
                suggestions=["Use spaces or tabs for indentation"],
            )
        if self.line_separator not in ("\n", "\r\n"):
            raise ConfigValidationError(
                "line_separator must be '\\n' or '\\r\\n'", "line_separator"
            )


_COMPONENTS = ("reader", "writer")


@dataclass(frozen=True)
class TreeXMLConfig:
    """Aggregate configuration for parsing and writing documents.

    Immutable; use :meth:`override` to derive variants.
    """

    reader: ReaderConfig = field(default_factory=ReaderConfig)
    writer: WriterConfig = field(default_factory=WriterConfig)

    def __post_init__(self) -> None:
        """Validate component types."""
        if not isinstance(self.reader, ReaderConfig):
            raise ConfigValidationError("reader must be a ReaderConfig", "reader")
        if not isinstance(self.writer, WriterConfig):
            raise ConfigValidationError("writer must be a WriterConfig", "writer")

    def override(self, **kwargs: Any) -> "TreeXMLConfig":
        """Create a new configuration with specific overrides.

        Keys use ``component__field`` notation.

        Example:
            >>> config = TreeXMLConfig().override(
            ...     reader__trim_whitespace=True,
            ...     writer__indent_string="\\t",
            ... )
        """
        nested_overrides: Dict[str, Dict[str, Any]] = {}
        for key, value in kwargs.items():
            component, sep, field_name = key.partition("__")
            if not sep or component not in _COMPONENTS:
                raise ConfigValidationError(
                    f"Unknown configuration key: {key}",
                    key,
                    suggestions=[f"Prefix the field with one of {_COMPONENTS}"],
                )
            nested_overrides.setdefault(component, {})[field_name] = value

        new_fields = {}
        for component, overrides in nested_overrides.items():
            current_config = getattr(self, component)
            valid = {f.name for f in fields(current_config)}
            unknown = set(overrides) - valid
            if unknown:
                name = sorted(unknown)[0]
                raise ConfigValidationError(
                    f"Unknown {component} option: {name}", f"{component}__{name}"
                )
            new_fields[component] = replace(current_config, **overrides)

        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a nested dictionary."""
        return {
            component: {
                f.name: getattr(getattr(self, component), f.name)
                for f in fields(getattr(self, component))
            }
            for component in _COMPONENTS
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TreeXMLConfig":
        """Create configuration from a nested dictionary.

        Missing components and fields keep their defaults.
        """
        component_values: Dict[str, Any] = {}
        for component_field in fields(cls):
            if component_field.name not in data:
                continue
            target_class = component_field.type
            values = data[component_field.name]
            known = {f.name for f in fields(target_class)}
            component_values[component_field.name] = target_class(
                **{key: value for key, value in values.items() if key in known}
            )
        return cls(**component_values)

    @classmethod
    def from_json(cls, json_str: str) -> "TreeXMLConfig":
        """Create configuration from a JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def condensed(cls) -> "TreeXMLConfig":
        """Preset writing everything on a single line."""
        return cls(writer=WriterConfig(perform_indent=False))

    @classmethod
    def fragment(cls) -> "TreeXMLConfig":
        """Preset for embedding output inside a larger document."""
        return cls(writer=WriterConfig(write_document_declaration=False))
