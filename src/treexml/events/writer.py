"""XML event sink writing events as text.

The writer owns escaping, self-closing of empty elements and indentation.
Pretty printing never touches mixed content: once an element has received
text or CDATA, nothing is indented inside it any more, so re-reading the
output yields the same character data.
"""

from dataclasses import dataclass
from typing import List, Optional, TextIO

from treexml.events.events import Attribute, EventType, XMLEvent
from treexml.shared import WriteError, WriterConfig, get_logger

_TEXT_ESCAPES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "\r": "&#xD;",
})

_ATTRIBUTE_ESCAPES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
    "\t": "&#x9;",
    "\n": "&#xA;",
    "\r": "&#xD;",
})


def escape_text(text: str) -> str:
    """Escape character data."""
    return text.translate(_TEXT_ESCAPES)


def escape_attribute(value: str) -> str:
    """Escape an attribute value for use inside double quotes."""
    return value.translate(_ATTRIBUTE_ESCAPES)


def format_cdata(text: str) -> str:
    """Render CDATA, splitting sections around any ``]]>`` in the content."""
    return "<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>"


@dataclass
class _OpenElement:
    name: str
    has_markup: bool = False
    has_text: bool = False


class XMLEventWriter:
    """Streaming XML event sink.

    Example:
        >>> out = io.StringIO()
        >>> writer = XMLEventWriter(out, WriterConfig(write_document_declaration=False))
        >>> writer.write(XMLEvent.start_element(QName("root")))
        >>> writer.write(XMLEvent.end_element(QName("root")))
        >>> out.getvalue()
        '<root />'
    """

    def __init__(
        self,
        out: TextIO,
        config: Optional[WriterConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the event writer.

        Args:
            out: Text stream receiving the output
            config: Optional writer configuration
            correlation_id: Optional correlation ID for request tracking
        """
        self.out = out
        self.config = config or WriterConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "event_writer")

        self._stack: List[_OpenElement] = []
        self._wrote_anything = False
        self._wrote_declaration = False
        self._root_closed = False
        self._start_tag_open = False

    @property
    def depth(self) -> int:
        """Number of currently open elements."""
        return len(self._stack)

    def write(self, event: XMLEvent) -> None:
        """Write a single event.

        Raises:
            WriteError: If the event is out of place or the stream fails
        """
        try:
            self._dispatch(event)
        except (OSError, UnicodeError) as e:
            raise WriteError(str(e)) from e

    def _dispatch(self, event: XMLEvent) -> None:
        kind = event.type
        if kind == EventType.START_DOCUMENT:
            self._write_declaration(
                event.version or "1.0", event.encoding, event.standalone
            )
        elif kind == EventType.START_ELEMENT:
            if event.name is None:
                raise WriteError("Start element event has no name")
            self._write_start_element(str(event.name), event.attributes)
        elif kind == EventType.END_ELEMENT:
            self._write_end_element()
        elif kind in (EventType.CHARACTERS, EventType.WHITESPACE):
            self._write_text(escape_text(event.text or ""), event)
        elif kind == EventType.CDATA:
            self._write_text(format_cdata(event.text or ""), event)
        elif kind == EventType.COMMENT:
            self._write_markup(f"<!--{event.text or ''}-->")
        elif kind == EventType.PROCESSING_INSTRUCTION:
            data = f" {event.text}" if event.text else ""
            self._write_markup(f"<?{event.target}{data}?>")
        elif kind == EventType.END_DOCUMENT:
            if self._stack:
                raise WriteError(
                    f"Document ended with {len(self._stack)} unclosed element(s)"
                )
            self.out.flush()
            self.logger.debug(
                "Event sink finished",
                extra={"wrote_declaration": self._wrote_declaration},
            )

    def _emit(self, data: str) -> None:
        self.out.write(data)
        self._wrote_anything = True

    def _newline_and_indent(self, level: int) -> None:
        if self.config.perform_indent and self._wrote_anything:
            self._emit(self.config.line_separator + self.config.indent_string * level)

    def _close_start_tag(self) -> None:
        if self._start_tag_open:
            self._emit(">")
            self._start_tag_open = False

    def _write_declaration(
        self, version: str, encoding: Optional[str], standalone: Optional[bool]
    ) -> None:
        if self._wrote_anything:
            raise WriteError("XML declaration must be the first thing written")
        declaration = f'<?xml version="{version}"'
        if encoding:
            declaration += f' encoding="{encoding}"'
        if standalone is not None:
            declaration += f' standalone="{"yes" if standalone else "no"}"'
        self._emit(declaration + "?>")
        self._wrote_declaration = True

    def _before_markup(self) -> None:
        if (
            not self._wrote_anything
            and self.config.write_document_declaration
            and not self._wrote_declaration
        ):
            self._write_declaration("1.0", "UTF-8", None)
        self._close_start_tag()
        parent = self._stack[-1] if self._stack else None
        if parent is not None:
            parent.has_markup = True
        if parent is None or not parent.has_text:
            self._newline_and_indent(len(self._stack))

    def _write_markup(self, markup: str) -> None:
        self._before_markup()
        self._emit(markup)

    def _write_start_element(self, name: str, attributes: List[Attribute]) -> None:
        if self._root_closed:
            raise WriteError(f"Cannot start element '{name}' after the root element")
        self._before_markup()
        parts = [name]
        parts.extend(
            f'{attribute.name}="{escape_attribute(attribute.value)}"'
            for attribute in attributes
        )
        self._emit("<" + " ".join(parts))
        self._stack.append(_OpenElement(name))
        self._start_tag_open = True

    def _write_end_element(self) -> None:
        if not self._stack:
            raise WriteError("End element event without an open element")
        element = self._stack.pop()
        if self._start_tag_open:
            self._emit(" />" if self.config.pad_self_closing else "/>")
            self._start_tag_open = False
        else:
            if element.has_markup and not element.has_text:
                self._newline_and_indent(len(self._stack))
            self._emit(f"</{element.name}>")
        if not self._stack:
            self._root_closed = True

    def _write_text(self, data: str, event: XMLEvent) -> None:
        if not self._stack:
            if event.type == EventType.WHITESPACE:
                return
            raise WriteError("Character data outside of the root element")
        self._close_start_tag()
        self._stack[-1].has_text = True
        self._emit(data)
