"""Tree serializer: the structural inverse of the tree builder.

Walking an element produces, for every node, a start tag carrying its
attributes in stored order, its text, its CDATA, its children and finally the
end tag. Feeding the events back into :class:`~treexml.tree.builder.TreeBuilder`
reconstructs an equal tree.

Attribute keys are emitted verbatim: a key stored as ``xlink:href`` is written
back as that literal string rather than being re-split into prefix and name.
"""

from typing import TYPE_CHECKING, Iterator, List, Optional, Protocol, Tuple

from treexml.events.events import Attribute, QName, XMLEvent
from treexml.shared import WriterConfig, get_logger

if TYPE_CHECKING:
    from treexml.tree.document import Document
    from treexml.tree.element import Element


class EventSink(Protocol):
    """Anything accepting events one at a time."""

    def write(self, event: XMLEvent) -> None:
        ...


class TreeSerializer:
    """Walks element trees and re-emits them as event streams."""

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize tree serializer.

        Args:
            correlation_id: Optional correlation ID for request tracking
        """
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "tree_serializer")

    @staticmethod
    def _open(element: "Element") -> Iterator[XMLEvent]:
        yield XMLEvent.start_element(
            element.qname,
            [Attribute(QName(key), value) for key, value in element.attributes.items()],
        )
        if element.text is not None:
            yield XMLEvent.characters(element.text)
        if element.cdata is not None:
            yield XMLEvent.cdata(element.cdata)

    def iter_events(self, element: "Element") -> Iterator[XMLEvent]:
        """Yield the event sequence describing ``element`` and its subtree."""
        yield from self._open(element)
        # Explicit stack of (element, remaining children) instead of recursion
        stack: List[Tuple["Element", Iterator["Element"]]] = [
            (element, iter(element.children))
        ]
        while stack:
            current, children = stack[-1]
            child = next(children, None)
            if child is None:
                stack.pop()
                yield XMLEvent.end_element(current.qname)
                continue
            yield from self._open(child)
            stack.append((child, iter(child.children)))

    def emit(self, element: "Element", sink: EventSink) -> None:
        """Write the events of ``element`` to ``sink``."""
        for event in self.iter_events(element):
            sink.write(event)

    def iter_document_events(
        self, document: "Document", config: Optional[WriterConfig] = None
    ) -> Iterator[XMLEvent]:
        """Yield the event sequence for a whole document.

        The declaration event is produced only when the configuration asks
        for it.
        """
        config = config or WriterConfig()
        if config.write_document_declaration:
            yield XMLEvent.start_document(document.version.value, document.encoding)
        if document.root is not None:
            yield from self.iter_events(document.root)
        yield XMLEvent.end_document()

    def emit_document(
        self,
        document: "Document",
        sink: EventSink,
        config: Optional[WriterConfig] = None
    ) -> None:
        """Write a whole document to ``sink``."""
        self.logger.debug(
            "Serializing document",
            extra={
                "document_has_root": document.root is not None,
                "write_document_declaration": (config or WriterConfig()).write_document_declaration,
            }
        )
        for event in self.iter_document_events(document, config):
            sink.write(event)
