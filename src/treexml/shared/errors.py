"""Exception taxonomy for treexml.

Every failure surfaced by the library derives from :class:`TreeXMLError`.
Errors raised by the underlying XML parser or output stream are wrapped and
chained so the original cause stays available on ``__cause__``.
"""

from typing import Optional


class TreeXMLError(Exception):
    """Base exception for all treexml errors."""


class ParseError(TreeXMLError):
    """Raised when the event source reports a lexical or structural problem."""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def __str__(self) -> str:
        if self.line is None:
            return f"Parse error: {self.message}"
        return f"Parse error: {self.message} (line {self.line}, column {self.column})"


class UnexpectedClosingTagError(ParseError):
    """Raised when an end tag does not match the element being built."""

    def __init__(
        self,
        expected: str,
        found: str,
        line: Optional[int] = None,
        column: Optional[int] = None
    ) -> None:
        super().__init__(
            f"Unexpected closing tag: {found}, expected {expected}", line, column
        )
        self.expected = expected
        self.found = found


class WriteError(TreeXMLError):
    """Raised when the event sink cannot write an event."""

    def __str__(self) -> str:
        return f"Write error: {super().__str__()}"


class ElementNotFoundError(TreeXMLError):
    """Raised when a path query matches no element."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Element not found: '{path}'")
        self.path = path


class ValueFromStrError(TreeXMLError):
    """Raised when element text cannot be converted to the requested type."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Value could not be parsed: '{text}'")
        self.text = text
