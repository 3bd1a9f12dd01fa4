"""XML event source backed by the standard library expat parser.

The reader turns raw XML (text, bytes or a file-like object) into a lazy
stream of :class:`~treexml.events.events.XMLEvent` objects. Well-formedness,
entity decoding and encoding detection are delegated to expat; this module
only normalizes expat's callbacks into the event vocabulary:

* a ``START_DOCUMENT`` event always comes first, with defaults when the input
  carries no XML declaration;
* adjacent character data callbacks are coalesced into a single run, which is
  classified as ``WHITESPACE`` or ``CHARACTERS``;
* expat errors are raised as :class:`~treexml.shared.errors.ParseError`.
"""

from typing import IO, Iterator, List, Optional, Tuple, Union
from xml.parsers import expat

from treexml.events.events import (
    Attribute,
    EventPosition,
    QName,
    XMLEvent,
)
from treexml.shared import ParseError, ReaderConfig, get_logger

SourceType = Union[str, bytes, IO[str], IO[bytes]]

DEFAULT_VERSION = "1.0"
DEFAULT_ENCODING = "UTF-8"

_XML_WHITESPACE = " \t\r\n"


class _EventCollector:
    """Receives expat callbacks and queues the corresponding events."""

    def __init__(self, parser: "expat.XMLParserType", config: ReaderConfig) -> None:
        self.parser = parser
        self.config = config
        self.events: List[XMLEvent] = []
        self._started = False
        self._declaration: Optional[Tuple[str, Optional[str], int]] = None
        self._text_buffer: List[str] = []
        self._cdata_buffer: List[str] = []
        self._in_cdata = False

        parser.ordered_attributes = True
        parser.XmlDeclHandler = self.xml_declaration
        parser.StartElementHandler = self.start_element
        parser.EndElementHandler = self.end_element
        parser.CharacterDataHandler = self.character_data
        parser.StartCdataSectionHandler = self.start_cdata
        parser.EndCdataSectionHandler = self.end_cdata
        parser.CommentHandler = self.comment
        parser.ProcessingInstructionHandler = self.processing_instruction

    def _position(self) -> EventPosition:
        return EventPosition(
            self.parser.CurrentLineNumber, self.parser.CurrentColumnNumber + 1
        )

    def ensure_started(self) -> None:
        if self._started:
            return
        self._started = True
        version, encoding, standalone = DEFAULT_VERSION, DEFAULT_ENCODING, -1
        if self._declaration is not None:
            version, declared_encoding, standalone = self._declaration
            encoding = declared_encoding or DEFAULT_ENCODING
        self.events.append(XMLEvent.start_document(
            version, encoding, None if standalone == -1 else bool(standalone)
        ))

    def flush_text(self) -> None:
        if not self._text_buffer:
            return
        text = "".join(self._text_buffer)
        self._text_buffer.clear()
        if self.config.trim_whitespace:
            text = text.strip(_XML_WHITESPACE)
            if not text:
                return
        if text.strip(_XML_WHITESPACE) or self.config.whitespace_to_characters:
            self.events.append(XMLEvent.characters(text))
        else:
            self.events.append(XMLEvent.whitespace(text))

    def _markup(self) -> None:
        self.ensure_started()
        self.flush_text()

    # expat callbacks

    def xml_declaration(
        self, version: Optional[str], encoding: Optional[str], standalone: int
    ) -> None:
        self._declaration = (version or DEFAULT_VERSION, encoding, standalone)

    def start_element(self, name: str, attributes: List[str]) -> None:
        self._markup()
        # ordered_attributes gives a flat [name, value, name, value, ...] list
        attrs = [
            Attribute(QName.parse(attributes[i]), attributes[i + 1])
            for i in range(0, len(attributes), 2)
        ]
        self.events.append(
            XMLEvent.start_element(QName.parse(name), attrs, self._position())
        )

    def end_element(self, name: str) -> None:
        self._markup()
        self.events.append(XMLEvent.end_element(QName.parse(name), self._position()))

    def character_data(self, data: str) -> None:
        self.ensure_started()
        if self._in_cdata and not self.config.cdata_to_characters:
            self._cdata_buffer.append(data)
        else:
            self._text_buffer.append(data)

    def start_cdata(self) -> None:
        self._in_cdata = True
        if not self.config.cdata_to_characters:
            self._markup()
            self._cdata_buffer.clear()

    def end_cdata(self) -> None:
        self._in_cdata = False
        if not self.config.cdata_to_characters:
            self.events.append(XMLEvent.cdata("".join(self._cdata_buffer)))
            self._cdata_buffer.clear()

    def comment(self, data: str) -> None:
        self._markup()
        self.events.append(XMLEvent.comment(data))

    def processing_instruction(self, target: str, data: str) -> None:
        self._markup()
        self.events.append(XMLEvent.processing_instruction(target, data))

    def finish(self) -> None:
        self._markup()
        self.events.append(XMLEvent.end_document())

    def drain(self) -> List[XMLEvent]:
        events, self.events = self.events, []
        return events


class XMLEventReader:
    """Lazy XML event source.

    Example:
        >>> reader = XMLEventReader('<root a="1">text</root>')
        >>> [event.type.name for event in reader]
        ['START_DOCUMENT', 'START_ELEMENT', 'CHARACTERS', 'END_ELEMENT', 'END_DOCUMENT']
    """

    def __init__(
        self,
        source: SourceType,
        config: Optional[ReaderConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the event reader.

        Args:
            source: XML content as str or bytes, or a text/binary file-like object
            config: Optional reader configuration
            correlation_id: Optional correlation ID for request tracking
        """
        if not isinstance(source, (str, bytes)) and not hasattr(source, "read"):
            raise TypeError(
                f"Unsupported XML source type: {type(source).__name__}"
            )
        self.source = source
        self.config = config or ReaderConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "event_reader")

    def _chunks(self) -> Iterator[Union[str, bytes]]:
        size = self.config.chunk_size
        if isinstance(self.source, (str, bytes)):
            for start in range(0, len(self.source), size):
                yield self.source[start:start + size]
            return
        while True:
            chunk = self.source.read(size)
            if not chunk:
                return
            yield chunk

    def __iter__(self) -> Iterator[XMLEvent]:
        parser = expat.ParserCreate()
        collector = _EventCollector(parser, self.config)
        event_count = 0

        for chunk in self._chunks():
            self._feed(parser, chunk, final=False)
            for event in collector.drain():
                event_count += 1
                yield event

        self._feed(parser, b"", final=True)
        collector.finish()
        for event in collector.drain():
            event_count += 1
            yield event

        self.logger.debug(
            "Event source exhausted", extra={"event_count": event_count}
        )

    def _feed(
        self, parser: "expat.XMLParserType", chunk: Union[str, bytes], final: bool
    ) -> None:
        try:
            parser.Parse(chunk, final)
        except expat.ExpatError as e:
            message = expat.ErrorString(e.code) if e.code else str(e)
            self.logger.debug(
                "Event source rejected input",
                extra={"line": e.lineno, "column": e.offset + 1, "reason": message},
            )
            raise ParseError(message, e.lineno, e.offset + 1) from e


def iter_events(
    source: SourceType,
    config: Optional[ReaderConfig] = None,
    correlation_id: Optional[str] = None
) -> Iterator[XMLEvent]:
    """Iterate over the events of ``source``."""
    return iter(XMLEventReader(source, config, correlation_id))
