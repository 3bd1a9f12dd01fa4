"""Shared configuration, error and logging utilities for treexml."""

from .config import (
    ConfigError,
    ConfigValidationError,
    ReaderConfig,
    TreeXMLConfig,
    WriterConfig,
)
from .errors import (
    ElementNotFoundError,
    ParseError,
    TreeXMLError,
    UnexpectedClosingTagError,
    ValueFromStrError,
    WriteError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "ReaderConfig",
    "TreeXMLConfig",
    "WriterConfig",
    "ElementNotFoundError",
    "ParseError",
    "TreeXMLError",
    "UnexpectedClosingTagError",
    "ValueFromStrError",
    "WriteError",
    "CorrelationLogger",
    "get_logger",
]
