"""Document container: XML declaration data plus a single root element."""

import io
import time
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, TextIO, Union

from treexml.events.reader import SourceType, XMLEventReader
from treexml.events.writer import XMLEventWriter
from treexml.shared import (
    ParseError,
    TreeXMLConfig,
    WriteError,
    WriterConfig,
    get_logger,
)
from treexml.tree.element import Element
from treexml.tree.serializer import TreeSerializer


class XmlVersion(Enum):
    """XML versions a document may declare."""

    VERSION_10 = "1.0"
    VERSION_11 = "1.1"

    @classmethod
    def from_string(cls, value: str) -> "XmlVersion":
        """Map a declared version string to the enum.

        Raises:
            ParseError: For versions other than 1.0 and 1.1
        """
        try:
            return cls(value)
        except ValueError:
            raise ParseError(f"Unsupported XML version: {value}") from None

    def __str__(self) -> str:
        return self.value


@dataclass
class Document:
    """An XML document.

    A default-constructed document has no root; a parsed document always has
    one. Equality is deep structural equality of version, encoding and root.

    Example:
        >>> doc = Document(root=Element("root", children=[Element("child")]))
        >>> print(doc)
        <?xml version="1.0" encoding="UTF-8"?>
        <root>
          <child />
        </root>
    """

    version: XmlVersion = XmlVersion.VERSION_10
    encoding: str = "UTF-8"
    root: Optional[Element] = None

    def __str__(self) -> str:
        return self.to_string()

    # Parsing

    @classmethod
    def parse(
        cls,
        source: SourceType,
        config: Optional[TreeXMLConfig] = None,
        correlation_id: Optional[str] = None
    ) -> "Document":
        """Parse a document from text, bytes or a file-like object.

        Raises:
            ParseError: If the input is malformed or has no root element
        """
        from treexml.tree.builder import TreeBuilder

        config = config or TreeXMLConfig()
        logger = get_logger(__name__, correlation_id, "document")
        reader = XMLEventReader(source, config.reader, correlation_id)
        try:
            return TreeBuilder(correlation_id).build_document(reader)
        except ParseError as e:
            logger.warning(
                "Document parsing failed",
                extra={"reason": str(e), "line": e.line, "column": e.column},
            )
            raise

    @classmethod
    def parse_file(
        cls,
        path: Union[str, Path],
        config: Optional[TreeXMLConfig] = None,
        correlation_id: Optional[str] = None
    ) -> "Document":
        """Parse a document from a file; encoding is detected by the parser."""
        with open(path, "rb") as handle:
            return cls.parse(handle, config, correlation_id)

    # Writing

    def write(
        self,
        out: TextIO,
        config: Optional[Union[TreeXMLConfig, WriterConfig]] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Write the document to a text stream.

        Args:
            out: Text stream receiving the XML
            config: Writer configuration, or a full TreeXMLConfig
            correlation_id: Optional correlation ID for request tracking

        Raises:
            WriteError: If the stream fails or the encoding cannot represent
                the content
        """
        if isinstance(config, TreeXMLConfig):
            config = config.writer
        config = config or WriterConfig()

        start_time = time.time()
        logger = get_logger(__name__, correlation_id, "document")
        writer = XMLEventWriter(out, config, correlation_id)
        try:
            TreeSerializer(correlation_id).emit_document(self, writer, config)
        except WriteError as e:
            logger.warning("Document writing failed", extra={"reason": str(e)})
            raise
        logger.debug(
            "Document written",
            extra={
                "element_count": sum(1 for _ in self.iter_elements()),
                "processing_time_ms": (time.time() - start_time) * 1000,
            }
        )

    def write_file(
        self,
        path: Union[str, Path],
        config: Optional[Union[TreeXMLConfig, WriterConfig]] = None
    ) -> None:
        """Write the document to ``path`` in its declared encoding.

        Raises:
            WriteError: If the file cannot be opened or encoded
        """
        try:
            handle = open(path, "w", encoding=self.encoding, newline="")
        except (OSError, LookupError) as e:
            raise WriteError(str(e)) from e
        with handle:
            self.write(handle, config)

    def to_string(
        self, config: Optional[Union[TreeXMLConfig, WriterConfig]] = None
    ) -> str:
        """Serialize the document to a string."""
        out = io.StringIO()
        self.write(out, config)
        return out.getvalue()

    # Navigation and conversion

    def iter_elements(self) -> Iterator[Element]:
        """Iterate over all elements in document order."""
        if self.root is None:
            return iter(())
        return self.root.iter()

    def copy(self) -> "Document":
        """Return a fully independent deep copy."""
        return replace(self, root=self.root.copy() if self.root else None)

    def __deepcopy__(self, memo: Dict[int, Any]) -> "Document":
        return self.copy()

    def to_dict(self) -> Dict[str, Any]:
        """Convert document to dictionary representation."""
        result: Dict[str, Any] = {
            "version": self.version.value,
            "encoding": self.encoding,
        }
        if self.root is not None:
            result["root"] = self.root.to_dict()
        return result
