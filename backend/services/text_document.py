"""
Text Document helpers - Positions, offsets and batch edit application
"""

from __future__ import annotations

from dataclasses import dataclass

from models.edit import Position, TextEdit

from .errors import InvalidRangeError, OverlappingEditsError


@dataclass(frozen=True)
class OffsetEdit:
    """An edit expressed in absolute character offsets"""

    offset: int
    length: int
    content: str


def split_lines(text: str) -> list[str]:
    """Split text on "\\n", keeping the terminators. A trailing newline adds no empty line."""
    lines = text.split("\n")
    result = [line + "\n" for line in lines[:-1]]
    if lines[-1]:
        result.append(lines[-1])
    return result


def position_to_offset(text: str, position: Position) -> int:
    """Convert a line/character position into an absolute offset in text.

    The character is counted in UTF-16 code units, as editors report it.
    """
    line_start = 0
    for _ in range(position.line):
        newline = text.find("\n", line_start)
        if newline == -1:
            line_count = text.count("\n") + 1
            raise InvalidRangeError(
                f"Line {position.line} is out of bounds (document has {line_count} lines)"
            )
        line_start = newline + 1

    line_end = text.find("\n", line_start)
    if line_end == -1:
        line_end = len(text)
    return line_start + utf16_column_to_index(text[line_start:line_end], position)


def utf16_length(text: str) -> int:
    return sum(2 if ord(char) > 0xFFFF else 1 for char in text)


def utf16_column_to_index(line: str, position: Position) -> int:
    """Index into line of a column counted in UTF-16 code units"""
    units = 0
    for index, char in enumerate(line):
        if units >= position.character:
            break
        units += 2 if ord(char) > 0xFFFF else 1
    else:
        index = len(line)

    if units < position.character:
        raise InvalidRangeError(
            f"Character {position.character} is out of bounds on line {position.line} "
            f"(line has {utf16_length(line)} characters)"
        )
    if units > position.character:
        raise InvalidRangeError(
            f"Character {position.character} on line {position.line} splits a surrogate pair"
        )
    return index


def to_offset_edit(text: str, edit: TextEdit) -> OffsetEdit:
    """Resolve a range-based edit against the original text"""
    start = position_to_offset(text, edit.range.start)
    end = position_to_offset(text, edit.range.end)
    if end < start:
        raise InvalidRangeError(f"Range end {end} precedes range start {start}")
    return OffsetEdit(offset=start, length=end - start, content=edit.new_text)


def apply_edits(text: str, edits: list[OffsetEdit]) -> str:
    """Apply all edits at once. Offsets refer to the original text.

    Insertions at the same offset keep their listed order. Overlapping edits
    are rejected with OverlappingEditsError.
    """
    # sorted() is stable, so same-offset insertions keep their order
    ordered = sorted(edits, key=lambda e: (e.offset, e.length))

    parts = []
    last_end = 0
    for edit in ordered:
        if edit.offset < last_end:
            raise OverlappingEditsError(
                f"Edit at offset {edit.offset} overlaps a previous edit ending at {last_end}"
            )
        parts.append(text[last_end:edit.offset])
        parts.append(edit.content)
        last_end = edit.offset + edit.length
    parts.append(text[last_end:])
    return "".join(parts)
