"""Public parsing entry points."""

from .parser import parse, parse_file, parse_string

__all__ = [
    "parse",
    "parse_file",
    "parse_string",
]
