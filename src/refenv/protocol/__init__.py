#
# src/refenv/protocol/__init__.py
#
"""
Parser for the tag-delimited test output protocol.
"""
from .parser import (
    ParseFailure,
    ParseResult,
    ParseSuccess,
    case_from_fields,
    parse_lines,
    parse_output,
)
from .tags import DONE_TAG, FIELD_NAMES, FIELD_TAGS, SIZE_TAG, START_TAG

__all__ = [
    "DONE_TAG",
    "FIELD_NAMES",
    "FIELD_TAGS",
    "SIZE_TAG",
    "START_TAG",
    "ParseFailure",
    "ParseResult",
    "ParseSuccess",
    "case_from_fields",
    "parse_lines",
    "parse_output",
]

# 🔼⚙️
