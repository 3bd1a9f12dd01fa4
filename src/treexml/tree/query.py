"""Path queries and predicate search over an element tree.

Paths are slash-separated tag names resolved one level at a time: at each
step the first direct child whose ``name`` equals the segment is taken.
Splitting is naive, so empty segments produced by leading, trailing or
doubled slashes are looked up as literal empty names and never match.
"""

from decimal import Decimal
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Iterator,
    Optional,
    Sequence,
    TypeVar,
    Union,
)

from treexml.shared import ElementNotFoundError, ValueFromStrError

if TYPE_CHECKING:
    from treexml.tree.element import Element

T = TypeVar("T")

PathType = Union[str, Sequence[str]]
Predicate = Callable[["Element"], bool]

_BOOL_VALUES = {"true": True, "false": False}

# Converted only from text without padding or digit separators
_STRICT_NUMERIC_TYPES = (int, float, Decimal)


def split_path(path: PathType) -> Sequence[str]:
    """Split a path into its segments."""
    if isinstance(path, str):
        return path.split("/")
    return path


def find_child(element: "Element", predicate: Predicate) -> Optional["Element"]:
    """Return the first direct child matching ``predicate``, or None."""
    return next((child for child in element.children if predicate(child)), None)


def filter_children(element: "Element", predicate: Predicate) -> Iterator["Element"]:
    """Lazily yield the direct children matching ``predicate`` in order."""
    return (child for child in element.children if predicate(child))


def find(element: "Element", path: PathType) -> "Element":
    """Resolve ``path`` below ``element``.

    Args:
        element: Element to start from
        path: Slash-separated string, or a sequence of segments. An empty
            sequence resolves to ``element`` itself.

    Returns:
        The matched descendant

    Raises:
        ElementNotFoundError: If any segment has no matching child; carries
            the full original path
    """
    current = element
    for segment in split_path(path):
        match = find_child(current, lambda child, name=segment: child.name == name)
        if match is None:
            original = path if isinstance(path, str) else "/".join(path)
            raise ElementNotFoundError(original)
        current = match
    return current


def _convert(text: str, value_type: Callable[[str], Any]) -> Any:
    if value_type is bool:
        if text not in _BOOL_VALUES:
            raise ValueError(f"not a boolean: {text!r}")
        return _BOOL_VALUES[text]
    if isinstance(value_type, type) and issubclass(value_type, _STRICT_NUMERIC_TYPES):
        if text != text.strip() or "_" in text:
            raise ValueError(f"not a plain number: {text!r}")
    return value_type(text)


def find_value(
    element: "Element",
    path: PathType,
    value_type: Callable[[str], T] = str  # type: ignore[assignment]
) -> Optional[T]:
    """Resolve ``path`` and convert the matched element's text.

    Args:
        element: Element to start from
        path: Path as accepted by :func:`find`
        value_type: Callable converting a string, such as ``int`` or
            ``float``. ``bool`` accepts only ``"true"`` and ``"false"``;
            ``int``, ``float`` and ``Decimal`` reject surrounding
            whitespace and ``_`` digit separators.

    Returns:
        The converted text, or None when the matched element has no text

    Raises:
        ElementNotFoundError: If the path does not resolve
        ValueFromStrError: If the text cannot be converted
    """
    target = find(element, path)
    if target.text is None:
        return None
    try:
        return _convert(target.text, value_type)
    except (ValueError, TypeError, ArithmeticError) as e:
        raise ValueFromStrError(target.text) from e
