"""
Text helpers for the patch engine.

Line splitting is always on "\n" only. Each line is counted as its length
plus one newline character, so offsets stay exact whatever else the
document carries (stray "\r", form feeds, unicode line separators).
"""


def normalize_newlines(content: str) -> str:
    """
    Replace the two-character escape backslash-n with a real line break.

    Patches that travel as JSON string literals sometimes arrive with
    their newlines escaped. Both the patch and the document go through
    this so they are compared in the same form.
    """
    return content.replace("\\n", "\n")


def split_lines(text: str) -> list[str]:
    """Split on "\n". A trailing newline yields a trailing empty line."""
    return text.split("\n")


def search_lines(search_text: str) -> list[str]:
    """
    Lines of an accumulated SEARCH block.

    Accumulation appends "\n" after every line, so the split always ends
    in an empty string; that one is dropped.
    """
    lines = split_lines(search_text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def lines_match_trimmed(document_line: str, search_line: str) -> bool:
    """Equal once leading/trailing whitespace is stripped from both."""
    return document_line.strip() == search_line.strip()


def offset_to_line(lines: list[str], offset: int) -> int:
    """
    First line number whose start offset is at or after `offset`.

    A cursor that falls inside a line moves to the next one, so content
    before the cursor can never be matched again.
    """
    line_num = 0
    position = 0
    while position < offset and line_num < len(lines):
        position += len(lines[line_num]) + 1
        line_num += 1
    return line_num


def line_to_offset(lines: list[str], line_num: int) -> int:
    """Character offset of the start of `line_num` (one newline per line)."""
    return sum(len(line) + 1 for line in lines[:line_num])
