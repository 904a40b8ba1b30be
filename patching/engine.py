"""
SEARCH/REPLACE patch application.

Patch format (markers must be whole lines):

    <<<<<<< SEARCH
    [lines to find; empty means "whole document"]
    =======
    [replacement lines]
    >>>>>>> REPLACE

Blocks apply in order. Each SEARCH is resolved when its separator is
reached, against the original document from the end of the previous
match, and replacement lines are written out as they are read.
"""

from enum import Enum
from typing import Iterator

from models import MalformedPatchError, MatchRange, PatchBlock

from .resolver import resolve_match
from .text import normalize_newlines, split_lines

SEARCH_MARKER = "<<<<<<< SEARCH"
SEPARATOR = "======="
REPLACE_MARKER = ">>>>>>> REPLACE"


class ParseState(Enum):
    IDLE = "idle"
    IN_SEARCH = "in_search"
    IN_REPLACE = "in_replace"


class Token(Enum):
    OPEN = "open"
    SEPARATOR = "separator"
    CLOSE = "close"
    SEARCH_LINE = "search_line"
    REPLACE_LINE = "replace_line"


def _tokenize(diff: str) -> Iterator[tuple[Token, str]]:
    """
    Walk the patch line by line, yielding structural tokens.

    Lines outside any block are skipped. The separator only counts as a
    marker inside a SEARCH section; anywhere else it is an ordinary line.

    Raises:
        MalformedPatchError: nested SEARCH, REPLACE end without separator,
            unterminated block, or no blocks at all
    """
    state = ParseState.IDLE
    blocks = 0

    for line_no, line in enumerate(split_lines(diff), start=1):
        if line == SEARCH_MARKER:
            if state is not ParseState.IDLE:
                raise MalformedPatchError(
                    f"Unexpected '{SEARCH_MARKER}' on line {line_no}: "
                    f"block {blocks} is still open",
                    details={"line": line_no, "block": blocks},
                )
            state = ParseState.IN_SEARCH
            blocks += 1
            yield Token.OPEN, line
            continue

        if line == SEPARATOR and state is ParseState.IN_SEARCH:
            state = ParseState.IN_REPLACE
            yield Token.SEPARATOR, line
            continue

        if line == REPLACE_MARKER:
            if state is not ParseState.IN_REPLACE:
                raise MalformedPatchError(
                    f"Unexpected '{REPLACE_MARKER}' on line {line_no}: "
                    f"no preceding '{SEPARATOR}'",
                    details={"line": line_no, "block": blocks},
                )
            state = ParseState.IDLE
            yield Token.CLOSE, line
            continue

        if state is ParseState.IN_SEARCH:
            yield Token.SEARCH_LINE, line
        elif state is ParseState.IN_REPLACE:
            yield Token.REPLACE_LINE, line

    if state is not ParseState.IDLE:
        expected = SEPARATOR if state is ParseState.IN_SEARCH else REPLACE_MARKER
        raise MalformedPatchError(
            f"Block {blocks} is not terminated: expected '{expected}'",
            details={"block": blocks},
        )
    if blocks == 0:
        raise MalformedPatchError("No SEARCH/REPLACE blocks found in diff")


def parse_patch(diff: str) -> list[PatchBlock]:
    """Split a patch into ordered blocks without touching any document."""
    blocks: list[PatchBlock] = []
    for token, line in _tokenize(normalize_newlines(diff)):
        if token is Token.OPEN:
            blocks.append(PatchBlock())
        elif token is Token.SEARCH_LINE:
            blocks[-1].search.append(line)
        elif token is Token.REPLACE_LINE:
            blocks[-1].replace.append(line)
    return blocks


def apply_diff(diff: str, original: str, is_final: bool = True) -> str:
    """
    Apply SEARCH/REPLACE blocks to `original` and return the new text.

    Args:
        diff: Patch text with one or more blocks
        original: Current document text
        is_final: Append document content left after the last match.
            A chunked caller passes False for every chunk but the last.

    Raises:
        MalformedPatchError: Patch structure is broken
        NoMatchError: A SEARCH block was not found from the cursor onward

    Nothing is returned on failure; callers must not write back.
    """
    diff = normalize_newlines(diff)
    original = normalize_newlines(original)

    output: list[str] = []
    last_idx = 0
    block = 0
    search: list[str] = []
    match: MatchRange | None = None

    for token, line in _tokenize(diff):
        if token is Token.OPEN:
            block += 1
            search = []
        elif token is Token.SEARCH_LINE:
            search.append(line)
        elif token is Token.SEPARATOR:
            search_text = "".join(f"{s}\n" for s in search)
            match = resolve_match(original, search_text, last_idx, block=block)
            output.append(original[last_idx:match.start])
        elif token is Token.REPLACE_LINE:
            if match is not None:
                output.append(f"{line}\n")
        elif token is Token.CLOSE:
            if match is not None:
                last_idx = max(last_idx, match.end)
            search = []
            match = None

    if is_final and last_idx < len(original):
        output.append(original[last_idx:])

    return "".join(output)
