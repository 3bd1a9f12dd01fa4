"""Tests for walking element trees back into events."""

from typing import List

import pytest

from treexml import Document, Element, TreeSerializer, WriterConfig, parse_string
from treexml.events import EventType, QName, XMLEvent
from treexml.tree import TreeBuilder


class _RecordingSink:
    def __init__(self) -> None:
        self.events: List[XMLEvent] = []

    def write(self, event: XMLEvent) -> None:
        self.events.append(event)


def _rebuild(element: Element) -> Element:
    events = TreeSerializer().iter_events(element)
    start = next(events)
    return TreeBuilder().build(start, events)


class TestIterEvents:
    """Test the produced event sequence."""

    def test_event_order(self) -> None:
        """Test start, text, cdata, children, end."""
        element = Element(
            "root", attributes={"b": "2", "a": "1"}, text="t", cdata="c",
            children=[Element("child")],
        )

        events = list(TreeSerializer().iter_events(element))

        assert [event.type for event in events] == [
            EventType.START_ELEMENT,
            EventType.CHARACTERS,
            EventType.CDATA,
            EventType.START_ELEMENT,
            EventType.END_ELEMENT,
            EventType.END_ELEMENT,
        ]
        assert [str(attribute.name) for attribute in events[0].attributes] == ["b", "a"]
        assert events[1].text == "t"
        assert events[2].text == "c"
        assert events[-1].name == QName("root")

    def test_prefixed_names(self) -> None:
        """Test that the element prefix is carried on start and end tags."""
        events = list(TreeSerializer().iter_events(Element("r", prefix="x")))

        assert events[0].name == QName("r", "x")
        assert events[1].name == QName("r", "x")

    def test_emit_to_sink(self) -> None:
        """Test writing to any object with a write method."""
        sink = _RecordingSink()

        TreeSerializer().emit(Element("r"), sink)

        assert [event.type for event in sink.events] == [
            EventType.START_ELEMENT, EventType.END_ELEMENT,
        ]

    def test_document_events(self) -> None:
        """Test declaration and end-of-document events."""
        document = Document(root=Element("r"))
        serializer = TreeSerializer()

        with_declaration = list(serializer.iter_document_events(document))
        without = list(serializer.iter_document_events(
            document, WriterConfig(write_document_declaration=False)
        ))

        assert with_declaration[0].type == EventType.START_DOCUMENT
        assert with_declaration[0].version == "1.0"
        assert with_declaration[-1].type == EventType.END_DOCUMENT
        assert without[0].type == EventType.START_ELEMENT


class TestRoundTrip:
    """Test that serialization and building are inverses."""

    @pytest.mark.parametrize("element", [
        Element("r"),
        Element("r", text="1 < 2 & 3 > 0"),
        Element("r", cdata="a]]>b"),
        Element("r", text="t", cdata="c"),
        Element("r", attributes={"a": 'x"y', "b": "line\nbreak\ttab"}),
        Element("r", prefix="x", attributes={"xlink:href": "#id"}),
        Element("r", children=[
            Element("a", text="1"),
            Element("b", children=[Element("c", attributes={"k": "v"})]),
        ]),
    ])
    def test_event_round_trip(self, element: Element) -> None:
        """Test rebuilding from the serializer's events."""
        assert _rebuild(element) == element

    @pytest.mark.parametrize("element", [
        Element("r", text="1 < 2 & 3 > 0"),
        Element("r", cdata="a]]>b"),
        Element("r", attributes={"a": 'x"y', "b": "line\nbreak\ttab"}),
        Element("r", prefix="x", attributes={"xmlns:x": "urn:x", "x:k": "v"}),
        Element("r", children=[Element("a", text="1"), Element("b", children=[Element("c")])]),
    ])
    def test_text_round_trip(self, element: Element) -> None:
        """Test writing to XML text and parsing it back."""
        document = Document(root=element)

        assert parse_string(document.to_string()) == document

    @pytest.mark.parametrize("text", ["x\ry", "line\r\nbreak", "\rlead"])
    def test_carriage_return_round_trip(self, text: str) -> None:
        """Test that carriage returns in text survive writing and parsing."""
        element = Element("a", text=text)

        parsed = parse_string(element.to_string()).root

        assert parsed == element

    @pytest.mark.parametrize("text", ["", "  \n\t"])
    def test_empty_and_whitespace_text_read_back_as_none(self, text: str) -> None:
        """Test the text values that do not survive writing and parsing."""
        element = Element("a", text=text)

        parsed = parse_string(element.to_string()).root

        assert parsed == Element("a")

    def test_deep_tree(self) -> None:
        """Test a tree deeper than the recursion limit."""
        root = Element("n")
        current = root
        for _ in range(3000):
            current = current.append(Element("n"))

        assert _rebuild(root) == root
