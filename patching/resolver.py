"""
Match resolution for SEARCH blocks.

Tried in order, first success wins:
1. Exact substring search from the cursor.
2. Line-by-line comparison with surrounding whitespace stripped.

An empty SEARCH block matches the whole document.
"""

from models import MatchRange, NoMatchError

from .text import (
    line_to_offset,
    lines_match_trimmed,
    offset_to_line,
    search_lines,
    split_lines,
)

# How much of an unmatched SEARCH block to echo back in error details
PREVIEW_CHARS = 200


def find_exact(original: str, search_text: str, last_idx: int) -> MatchRange | None:
    """Literal substring match at or after `last_idx`."""
    index = original.find(search_text, last_idx)
    if index == -1:
        return None
    return MatchRange(index, index + len(search_text), "exact")


def find_trimmed(original: str, search_text: str, last_idx: int) -> MatchRange | None:
    """
    Whitespace-relaxed match, line by line.

    Every SEARCH line must equal the candidate document line after both
    are stripped. The returned range covers whole physical lines of the
    original document, including anything the stripped comparison ignored.
    """
    doc_lines = split_lines(original)
    wanted = search_lines(search_text)
    if not wanted:
        return None

    first_candidate = offset_to_line(doc_lines, last_idx)
    last_candidate = len(doc_lines) - len(wanted)

    for start_line in range(first_candidate, last_candidate + 1):
        if all(
            lines_match_trimmed(doc_lines[start_line + k], wanted[k])
            for k in range(len(wanted))
        ):
            start = line_to_offset(doc_lines, start_line)
            end = line_to_offset(doc_lines, start_line + len(wanted))
            # Last document line has no newline of its own
            return MatchRange(start, min(end, len(original)), "trimmed")

    return None


def resolve_match(
    original: str,
    search_text: str,
    last_idx: int,
    block: int | None = None,
) -> MatchRange:
    """
    Resolve a SEARCH block to a range of the original document.

    Args:
        original: Document text (already newline-normalized)
        search_text: Accumulated SEARCH lines, each followed by "\n"
        last_idx: Cursor; nothing before it may match
        block: 1-based block number, for error context

    Raises:
        NoMatchError: Neither exact nor trimmed matching found the block
    """
    if not search_text:
        return MatchRange(0, len(original), "full")

    match = find_exact(original, search_text, last_idx)
    if match is None:
        match = find_trimmed(original, search_text, last_idx)
    if match is not None:
        return match

    label = f"SEARCH block {block}" if block is not None else "SEARCH block"
    preview = search_text[:PREVIEW_CHARS]
    raise NoMatchError(
        f"Could not find a match for {label} in the file.",
        details={"block": block, "search_preview": preview, "cursor": last_idx},
    )
