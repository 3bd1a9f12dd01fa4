"""In-memory document tree for treexml.

Key Components:
    Element: Tree node with attributes, text, CDATA and ordered children
    Document: XML declaration data plus a single root element
    TreeBuilder: Builds elements and documents from event streams
    TreeSerializer: Walks elements and re-emits event streams
"""

from .element import Element
from .document import Document, XmlVersion
from .builder import TreeBuilder
from .serializer import TreeSerializer

__all__ = [
    "Document",
    "Element",
    "TreeBuilder",
    "TreeSerializer",
    "XmlVersion",
]
