"""Tree builder converting XML event streams into element trees.

The builder is handed a stream positioned just after a start tag and consumes
events up to and including the matching end tag. Nested start tags open child
elements, character data and CDATA accumulate into separate strings on the
innermost open element, and document-level or ignorable events (declaration,
comments, processing instructions, whitespace) carry no tree information and
are skipped.

Open elements are kept on an explicit stack rather than the call stack, so
document depth is bounded by memory instead of the interpreter's recursion
limit.
"""

import time
from typing import Dict, Iterable, Iterator, List, Optional

from treexml.events.events import Attribute, EventType, XMLEvent
from treexml.shared import ParseError, UnexpectedClosingTagError, get_logger
from treexml.tree.document import Document, XmlVersion
from treexml.tree.element import Element

_IGNORED_EVENTS = frozenset({
    EventType.START_DOCUMENT,
    EventType.END_DOCUMENT,
    EventType.PROCESSING_INSTRUCTION,
    EventType.COMMENT,
    EventType.WHITESPACE,
})


def attribute_key(attribute: Attribute) -> str:
    """Mapping key for an attribute: ``prefix:local`` or bare ``local``."""
    return str(attribute.name)


def element_from_start(event: XMLEvent) -> Element:
    """Create an empty element from a ``START_ELEMENT`` event."""
    if event.type != EventType.START_ELEMENT or event.name is None:
        raise ParseError(f"Expected a start element event, got {event.type.name}")
    attributes: Dict[str, str] = {}
    for attribute in event.attributes:
        attributes[attribute_key(attribute)] = attribute.value
    return Element(
        name=event.name.local_name,
        prefix=event.name.prefix,
        attributes=attributes,
    )


class TreeBuilder:
    """Builds elements and documents from event streams."""

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize tree builder.

        Args:
            correlation_id: Optional correlation ID for request tracking
        """
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "tree_builder")
        self.elements_created = 0
        self.max_depth = 0

    def build(self, start_event: XMLEvent, events: Iterator[XMLEvent]) -> Element:
        """Build the element opened by ``start_event``.

        Args:
            start_event: The already-read start tag of the element
            events: Live event stream positioned just after ``start_event``

        Returns:
            The completed element with all descendants

        Raises:
            UnexpectedClosingTagError: If an end tag does not match the
                innermost open element
            ParseError: If the stream ends before the element is closed
        """
        root = element_from_start(start_event)
        self.elements_created += 1
        stack: List[Element] = [root]

        for event in events:
            kind = event.type
            current = stack[-1]

            if kind == EventType.START_ELEMENT:
                child = element_from_start(event)
                self.elements_created += 1
                current.children.append(child)
                stack.append(child)
                self.max_depth = max(self.max_depth, len(stack) - 1)

            elif kind == EventType.END_ELEMENT:
                if event.name != current.qname:
                    line = event.position.line if event.position else None
                    column = event.position.column if event.position else None
                    raise UnexpectedClosingTagError(
                        current.qualified_name, str(event.name), line, column
                    )
                stack.pop()
                if not stack:
                    return root

            elif kind == EventType.CHARACTERS:
                current.text = (current.text or "") + (event.text or "")

            elif kind == EventType.CDATA:
                current.cdata = (current.cdata or "") + (event.text or "")

            elif kind not in _IGNORED_EVENTS:
                raise ParseError(f"Unsupported event type: {kind.name}")

        raise ParseError("Unexpected end of stream: still inside the root element")

    def build_document(self, events: Iterable[XMLEvent]) -> Document:
        """Build a document from a complete event stream.

        Raises:
            ParseError: If the stream holds no root element, more than one
                top-level element, or an unsupported XML version
        """
        start_time = time.time()
        self.elements_created = 0
        self.max_depth = 0

        document = Document()
        stream = iter(events)

        for event in stream:
            if event.type == EventType.START_DOCUMENT:
                document.version = XmlVersion.from_string(event.version or "1.0")
                document.encoding = event.encoding or document.encoding
            elif event.type == EventType.START_ELEMENT:
                if document.root is not None:
                    raise ParseError(
                        f"Unexpected element after the root element: {event.name}"
                    )
                document.root = self.build(event, stream)
            elif event.type == EventType.END_DOCUMENT:
                break

        if document.root is None:
            raise ParseError("Unexpected end of stream: no root element found")

        self.logger.info(
            "Tree building completed",
            extra={
                "element_count": self.elements_created,
                "max_depth": self.max_depth,
                "processing_time_ms": (time.time() - start_time) * 1000,
            }
        )
        return document
