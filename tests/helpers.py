"""Test helpers for building edits and applying patches"""

from unidiff import PatchSet

from models.edit import Position, Range, WorkspaceEdit


def text_range(start_line: int, start_char: int, end_line: int, end_char: int) -> Range:
    return Range(
        start=Position(line=start_line, character=start_char),
        end=Position(line=end_line, character=end_char),
    )


def replace(uri: str, rng: Range, new_text: str) -> WorkspaceEdit:
    return WorkspaceEdit().replace(uri, rng, new_text)


def apply_patch(original: str, patch_text: str) -> str:
    """Apply a single-file unified diff to text ending in a newline"""
    patched_file = PatchSet.from_string(patch_text)[0]
    source = original.splitlines(keepends=True)
    result = []
    pos = 0
    for hunk in patched_file:
        start = hunk.source_start if hunk.source_length == 0 else hunk.source_start - 1
        result.extend(source[pos:start])
        result.extend(line.value for line in hunk if not line.is_removed)
        pos = start + hunk.source_length
    result.extend(source[pos:])
    return "".join(result)
