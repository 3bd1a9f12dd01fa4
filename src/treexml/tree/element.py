"""The element node of the document tree."""

import io
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, TypeVar

from treexml.events.events import QName
from treexml.events.writer import XMLEventWriter
from treexml.shared import WriterConfig
from treexml.tree import query
from treexml.tree.serializer import TreeSerializer

T = TypeVar("T")


@dataclass(eq=False)
class Element:
    """A single XML element.

    An element owns its children outright: there are no parent links, so a
    tree can never contain cycles. Two elements are equal when prefix, name,
    attributes (ignoring order), children (in order), text and CDATA match.

    Two text values do not survive writing and parsing back: whitespace-only
    text is reported as ignorable whitespace and dropped, and an empty string
    writes as ``<a></a>``, which reads back with ``text`` set to None.

    Example:
        >>> root = Element("root", attributes={"id": "1"})
        >>> _ = root.append(Element("child", text="hello"))
        >>> root.find("child").text
        'hello'
    """

    name: str
    prefix: Optional[str] = None
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["Element"] = field(default_factory=list)
    text: Optional[str] = None
    cdata: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the element name and normalize empty containers."""
        if not self.name:
            raise ValueError("Element name cannot be empty")
        if self.attributes is None:
            self.attributes = {}
        if self.children is None:
            self.children = []

    __hash__ = None  # type: ignore[assignment]

    def _same_node(self, other: "Element") -> bool:
        return (
            self.name == other.name
            and self.prefix == other.prefix
            and self.attributes == other.attributes
            and self.text == other.text
            and self.cdata == other.cdata
            and len(self.children) == len(other.children)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        # Explicit stack: deep trees must not hit the recursion limit
        pending = [(self, other)]
        while pending:
            left, right = pending.pop()
            if left is right:
                continue
            if not left._same_node(right):
                return False
            pending.extend(zip(left.children, right.children))
        return True

    def __repr__(self) -> str:
        qualified = self.qualified_name
        if self.children:
            return f"Element({qualified!r}, children={len(self.children)})"
        return f"Element({qualified!r}, text={self.text!r})"

    def __str__(self) -> str:
        return self.to_string()

    @property
    def qname(self) -> QName:
        """Name and prefix as a :class:`QName`."""
        return QName(self.name, self.prefix)

    @property
    def qualified_name(self) -> str:
        """Tag as written in XML, ``prefix:name`` or ``name``."""
        return str(self.qname)

    # Attributes

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get attribute value with optional default."""
        return self.attributes.get(name, default)

    def set_attribute(self, name: str, value: str) -> None:
        """Set attribute value; an existing key keeps its position."""
        if not isinstance(name, str) or not isinstance(value, str):
            raise TypeError("Attribute name and value must be strings")
        self.attributes[name] = value

    def has_attribute(self, name: str) -> bool:
        """Check if element has specific attribute."""
        return name in self.attributes

    # Children

    def append(self, child: "Element") -> "Element":
        """Append ``child`` and return it."""
        if not isinstance(child, Element):
            raise TypeError("Child must be an Element instance")
        self.children.append(child)
        return child

    def extend(self, children: Iterable["Element"]) -> None:
        """Append every element of ``children`` in order."""
        for child in children:
            self.append(child)

    def find_child(self, predicate: Callable[["Element"], bool]) -> Optional["Element"]:
        """Return the first direct child matching ``predicate``, or None.

        The result is the live child, so it can be modified in place.
        """
        return query.find_child(self, predicate)

    def filter_children(
        self, predicate: Callable[["Element"], bool]
    ) -> Iterator["Element"]:
        """Lazily yield the direct children matching ``predicate``."""
        return query.filter_children(self, predicate)

    def find(self, path: query.PathType) -> "Element":
        """Traverse using a slash-separated path such as ``"a/b/c"``.

        Raises:
            ElementNotFoundError: If the path does not resolve
        """
        return query.find(self, path)

    def find_value(
        self,
        path: query.PathType,
        value_type: Callable[[str], T] = str  # type: ignore[assignment]
    ) -> Optional[T]:
        """Resolve ``path`` and convert the matched element's text.

        Raises:
            ElementNotFoundError: If the path does not resolve
            ValueFromStrError: If the text cannot be converted
        """
        return query.find_value(self, path, value_type)

    def iter(self) -> Iterator["Element"]:
        """Iterate over this element and its descendants in document order."""
        stack = [self]
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(element.children))

    # Copying and conversion

    def copy(self) -> "Element":
        """Return a fully independent deep copy."""
        clone = replace(self, attributes=dict(self.attributes), children=[])
        stack = [(self, clone)]
        while stack:
            source, target = stack.pop()
            for child in source.children:
                child_clone = replace(
                    child, attributes=dict(child.attributes), children=[]
                )
                target.children.append(child_clone)
                stack.append((child, child_clone))
        return clone

    def __copy__(self) -> "Element":
        return self.copy()

    def __deepcopy__(self, memo: Dict[int, Any]) -> "Element":
        return self.copy()

    def to_dict(self) -> Dict[str, Any]:
        """Convert element to dictionary representation."""
        result: Dict[str, Any] = {"name": self.name}
        if self.prefix is not None:
            result["prefix"] = self.prefix
        if self.attributes:
            result["attributes"] = dict(self.attributes)
        if self.text is not None:
            result["text"] = self.text
        if self.cdata is not None:
            result["cdata"] = self.cdata
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result

    def to_string(self, config: Optional[WriterConfig] = None) -> str:
        """Serialize this element without an XML declaration.

        Args:
            config: Writer configuration; the declaration flag is ignored
        """
        config = replace(config or WriterConfig(), write_document_declaration=False)
        out = io.StringIO()
        TreeSerializer().emit(self, XMLEventWriter(out, config))
        return out.getvalue()
