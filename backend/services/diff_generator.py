"""
Diff Generator Service - Generate unified diffs for edited files
"""

from __future__ import annotations

from difflib import SequenceMatcher

from models.diff import DiffHunk, FileDiff, HunkRange

from .text_document import split_lines

NO_NEWLINE_MARKER = "\\ No newline at end of file"
DEFAULT_CONTEXT_LINES = 4


class DiffGenerator:
    """Generate unified diffs and structured hunks from old and new content"""

    def __init__(self, context_lines: int = DEFAULT_CONTEXT_LINES):
        self.context_lines = context_lines

    def generate_diff(
        self,
        original_content: str,
        new_content: str,
        file_identity: str,
        file_path: str,
    ) -> FileDiff:
        """Generate structured diff from original and new content"""
        original_lines = split_lines(original_content)
        new_lines = split_lines(new_content)

        hunks = self._extract_hunks(original_lines, new_lines)

        return FileDiff(
            old_path=file_identity,
            new_path=file_identity,
            hunks=hunks,
            patch=self.format_patch(f"a/{file_path}", f"b/{file_path}", hunks),
        )

    def _extract_hunks(
        self,
        original: list[str],
        modified: list[str],
    ) -> list[DiffHunk]:
        """Group line changes into hunks with surrounding context"""
        matcher = SequenceMatcher(None, original, modified, autojunk=False)
        hunks = []

        for group in matcher.get_grouped_opcodes(self.context_lines):
            first, last = group[0], group[-1]
            old_range = _hunk_range(first[1], last[2])
            new_range = _hunk_range(first[3], last[4])

            body: list[str] = []
            for tag, i1, i2, j1, j2 in group:
                if tag == "equal":
                    body.extend(_prefixed(" ", original[i1:i2]))
                    continue
                if tag in ("replace", "delete"):
                    body.extend(_prefixed("-", original[i1:i2]))
                if tag in ("replace", "insert"):
                    body.extend(_prefixed("+", modified[j1:j2]))

            hunks.append(DiffHunk(old_range=old_range, new_range=new_range, body="\n".join(body)))

        return hunks

    @staticmethod
    def format_patch(from_file: str, to_file: str, hunks: list[DiffHunk]) -> str:
        """Render hunks as unified diff text. Empty when there are no hunks."""
        if not hunks:
            return ""

        result = [f"--- {from_file}\n", f"+++ {to_file}\n"]
        for hunk in hunks:
            result.append(
                f"@@ -{_format_range(hunk.old_range)} +{_format_range(hunk.new_range)} @@\n"
            )
            result.append(hunk.body + "\n")
        return "".join(result)


def _hunk_range(start: int, stop: int) -> HunkRange:
    """Hunk range for the 0-indexed half-open line slice [start, stop)"""
    length = stop - start
    # Empty ranges point at the line before them
    start_line = start if length == 0 else start + 1
    return HunkRange(start_line=start_line, lines=length)


def _format_range(hunk_range: HunkRange) -> str:
    if hunk_range.lines == 1:
        return str(hunk_range.start_line)
    return f"{hunk_range.start_line},{hunk_range.lines}"


def _prefixed(marker: str, lines: list[str]) -> list[str]:
    result = []
    for line in lines:
        if line.endswith("\n"):
            result.append(marker + line[:-1])
        else:
            result.append(marker + line)
            result.append(NO_NEWLINE_MARKER)
    return result
