"""
Diff Stat - Count added, changed and deleted lines of file diffs
"""

from __future__ import annotations

from models.diff import DiffHunk, DiffStat, FileDiff

CHANGE_MARKERS = ("+", "-")


def hunk_diff_stat(hunk: DiffHunk) -> DiffStat:
    """Classify the lines of one hunk.

    A "+" or "-" line directly next to a line with the opposite marker is
    counted as changed, other "+" lines as added and "-" lines as deleted.
    This is a line adjacency heuristic, not a semantic diff.
    """
    markers = [line[:1] for line in hunk.body.split("\n") if not line.startswith("\\")]
    added = changed = deleted = 0

    for i, marker in enumerate(markers):
        if marker not in CHANGE_MARKERS:
            continue
        prev_marker = markers[i - 1] if i > 0 else None
        next_marker = markers[i + 1] if i < len(markers) - 1 else None
        if _pairs_with(marker, prev_marker) or _pairs_with(marker, next_marker):
            changed += 1
        elif marker == "+":
            added += 1
        else:
            deleted += 1

    return DiffStat(added=added, changed=changed, deleted=deleted)


def compute_diff_stat(file_diffs: list[FileDiff]) -> DiffStat:
    """Sum the line stats of every hunk of every file diff"""
    stat = DiffStat()
    for file_diff in file_diffs:
        for hunk in file_diff.hunks:
            stat += hunk_diff_stat(hunk)
    return stat


def _pairs_with(marker: str, neighbor: str | None) -> bool:
    return neighbor in CHANGE_MARKERS and neighbor != marker
