"""XML event vocabulary, event source and event sink.

Key Components:
    XMLEvent: A single event, tagged by EventType
    XMLEventReader: Event source over the expat parser
    XMLEventWriter: Event sink producing XML text
"""

from .events import (
    Attribute,
    EventPosition,
    EventType,
    QName,
    XMLEvent,
)
from .reader import XMLEventReader, iter_events
from .writer import XMLEventWriter, escape_attribute, escape_text

__all__ = [
    "Attribute",
    "EventPosition",
    "EventType",
    "QName",
    "XMLEvent",
    "XMLEventReader",
    "XMLEventWriter",
    "escape_attribute",
    "escape_text",
    "iter_events",
]
