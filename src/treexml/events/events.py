"""Event vocabulary shared by the XML event source and sink."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional


class EventType(Enum):
    """Kinds of events exchanged with the event source and sink."""

    START_DOCUMENT = auto()          # XML declaration (version, encoding)
    END_DOCUMENT = auto()            # End of input
    START_ELEMENT = auto()           # Start tag with attributes
    END_ELEMENT = auto()             # End tag
    CHARACTERS = auto()              # Character data run
    CDATA = auto()                   # CDATA section content
    WHITESPACE = auto()              # Whitespace-only character data run
    COMMENT = auto()                 # <!-- ... -->
    PROCESSING_INSTRUCTION = auto()  # <?target data?>


@dataclass(frozen=True)
class QName:
    """A possibly prefixed XML name, compared case-sensitively."""

    local_name: str
    prefix: Optional[str] = None

    @classmethod
    def parse(cls, raw: str) -> "QName":
        """Split ``prefix:local`` on the first colon."""
        prefix, sep, local_name = raw.partition(":")
        if sep and prefix and local_name:
            return cls(local_name, prefix)
        return cls(raw)

    def __str__(self) -> str:
        if self.prefix:
            return f"{self.prefix}:{self.local_name}"
        return self.local_name


@dataclass(frozen=True)
class Attribute:
    """A single attribute of a start tag."""

    name: QName
    value: str


@dataclass(frozen=True)
class EventPosition:
    """1-based source position of an event."""

    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")


@dataclass
class XMLEvent:
    """A single XML event.

    Only the fields relevant to ``type`` are populated. Use the named
    constructors rather than building events by hand.
    """

    type: EventType
    name: Optional[QName] = None
    attributes: List[Attribute] = field(default_factory=list)
    text: Optional[str] = None
    target: Optional[str] = None
    version: Optional[str] = None
    encoding: Optional[str] = None
    standalone: Optional[bool] = None
    position: Optional[EventPosition] = None

    @classmethod
    def start_document(
        cls,
        version: str = "1.0",
        encoding: str = "UTF-8",
        standalone: Optional[bool] = None
    ) -> "XMLEvent":
        return cls(
            EventType.START_DOCUMENT,
            version=version,
            encoding=encoding,
            standalone=standalone,
        )

    @classmethod
    def end_document(cls) -> "XMLEvent":
        return cls(EventType.END_DOCUMENT)

    @classmethod
    def start_element(
        cls,
        name: QName,
        attributes: Optional[List[Attribute]] = None,
        position: Optional[EventPosition] = None
    ) -> "XMLEvent":
        return cls(
            EventType.START_ELEMENT,
            name=name,
            attributes=list(attributes or []),
            position=position,
        )

    @classmethod
    def end_element(
        cls, name: QName, position: Optional[EventPosition] = None
    ) -> "XMLEvent":
        return cls(EventType.END_ELEMENT, name=name, position=position)

    @classmethod
    def characters(cls, text: str) -> "XMLEvent":
        return cls(EventType.CHARACTERS, text=text)

    @classmethod
    def cdata(cls, text: str) -> "XMLEvent":
        return cls(EventType.CDATA, text=text)

    @classmethod
    def whitespace(cls, text: str) -> "XMLEvent":
        return cls(EventType.WHITESPACE, text=text)

    @classmethod
    def comment(cls, text: str) -> "XMLEvent":
        return cls(EventType.COMMENT, text=text)

    @classmethod
    def processing_instruction(cls, target: str, data: str = "") -> "XMLEvent":
        return cls(EventType.PROCESSING_INSTRUCTION, target=target, text=data)
