"""
Patching — Pure functions for SEARCH/REPLACE edits.

No MCP awareness, no storage calls, no logging. Text in, text out.
Easily testable with literal strings.
"""

from .engine import (
    apply_diff,
    parse_patch,
    ParseState,
    SEARCH_MARKER,
    SEPARATOR,
    REPLACE_MARKER,
)
from .resolver import resolve_match, find_exact, find_trimmed
from .text import (
    normalize_newlines,
    split_lines,
    lines_match_trimmed,
    offset_to_line,
    line_to_offset,
)

__all__ = [
    "apply_diff",
    "parse_patch",
    "ParseState",
    "SEARCH_MARKER",
    "SEPARATOR",
    "REPLACE_MARKER",
    "resolve_match",
    "find_exact",
    "find_trimmed",
    "normalize_newlines",
    "split_lines",
    "lines_match_trimmed",
    "offset_to_line",
    "line_to_offset",
]
