"""treexml: an element-tree style XML library.

Parses XML into an ordered tree of elements (attributes, text, CDATA and
children kept in document order), writes trees back out as XML, and navigates
them with slash-separated path queries.

Examples:
    >>> import treexml
    >>> doc = treexml.parse_string("<root><a><b>42</b></a></root>")
    >>> doc.root.find_value("a/b", int)
    42
"""

__version__ = "0.1.0"
__author__ = "treexml developers"

from .api import parse, parse_file, parse_string
from .events import QName, XMLEvent, XMLEventReader, XMLEventWriter
from .shared import (
    ConfigError,
    ConfigValidationError,
    ElementNotFoundError,
    ParseError,
    ReaderConfig,
    TreeXMLConfig,
    TreeXMLError,
    UnexpectedClosingTagError,
    ValueFromStrError,
    WriteError,
    WriterConfig,
)
from .tree import Document, Element, TreeBuilder, TreeSerializer, XmlVersion

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Simple parsing functions
    "parse",
    "parse_file",
    "parse_string",

    # Tree
    "Document",
    "Element",
    "XmlVersion",
    "TreeBuilder",
    "TreeSerializer",

    # Events
    "QName",
    "XMLEvent",
    "XMLEventReader",
    "XMLEventWriter",

    # Configuration
    "ReaderConfig",
    "TreeXMLConfig",
    "WriterConfig",

    # Exceptions
    "ConfigError",
    "ConfigValidationError",
    "ElementNotFoundError",
    "ParseError",
    "TreeXMLError",
    "UnexpectedClosingTagError",
    "ValueFromStrError",
    "WriteError",
]
