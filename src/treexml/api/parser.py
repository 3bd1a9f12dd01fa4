"""Module-level entry points for parsing documents.

These functions are the shortest path from XML input to a
:class:`~treexml.tree.document.Document`; they add input-type routing and
logging around :meth:`Document.parse`.
"""

import time
from pathlib import Path
from typing import IO, Optional, Union

from treexml.shared import TreeXMLConfig, get_logger
from treexml.tree import Document

# Type definitions for input data
InputType = Union[str, bytes, IO[str], IO[bytes], Path]

MS_PER_SECOND = 1000


def parse(
    input_data: InputType,
    config: Optional[TreeXMLConfig] = None,
    correlation_id: Optional[str] = None
) -> Document:
    """Parse XML from a string, bytes, a file-like object or a Path.

    A ``str`` is always treated as XML content, never as a file name; pass a
    :class:`~pathlib.Path` or use :func:`parse_file` for files.

    Raises:
        ParseError: If the input is malformed or has no root element
        TypeError: If the input type is not supported

    Examples:
        >>> doc = parse('<root><item id="1">value</item></root>')
        >>> doc.root.find("item").get_attribute("id")
        '1'
    """
    if isinstance(input_data, Path):
        return parse_file(input_data, config, correlation_id)
    return _parse_with_logging(input_data, config, correlation_id, "parse")


def parse_string(
    xml_string: str,
    config: Optional[TreeXMLConfig] = None,
    correlation_id: Optional[str] = None
) -> Document:
    """Parse XML held in a string.

    Raises:
        ParseError: If the input is malformed or has no root element
    """
    if not isinstance(xml_string, str):
        raise TypeError("parse_string() expects a str")
    return _parse_with_logging(xml_string, config, correlation_id, "parse_string")


def parse_file(
    file_path: Union[str, Path],
    config: Optional[TreeXMLConfig] = None,
    correlation_id: Optional[str] = None
) -> Document:
    """Parse XML from a file; the encoding is taken from the document.

    Raises:
        ParseError: If the input is malformed or has no root element
        OSError: If the file cannot be opened
    """
    logger = get_logger(__name__, correlation_id, "parse_file")
    logger.info("Starting file parse operation", extra={"file_path": str(file_path)})
    with open(file_path, "rb") as handle:
        return _parse_with_logging(handle, config, correlation_id, "parse_file")


def _parse_with_logging(
    input_data: Union[str, bytes, IO[str], IO[bytes]],
    config: Optional[TreeXMLConfig],
    correlation_id: Optional[str],
    component: str
) -> Document:
    start_time = time.time()
    logger = get_logger(__name__, correlation_id, component)
    logger.debug(
        "Starting parse operation",
        extra={"input_type": type(input_data).__name__}
    )

    document = Document.parse(input_data, config, correlation_id)

    logger.info(
        "Parse operation completed",
        extra={
            "root": document.root.qualified_name if document.root else None,
            "processing_time_ms": (time.time() - start_time) * MS_PER_SECOND,
        }
    )
    return document
