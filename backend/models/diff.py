"""Diff-related data models"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .edit import ActionInvocation, WorkspaceEdit


class HunkRange(BaseModel):
    """Line range covered by a hunk on one side of the diff"""

    start_line: int  # 1-indexed, line before the range when empty
    lines: int


class DiffHunk(BaseModel):
    """A single change hunk in a diff"""

    old_range: HunkRange
    new_range: HunkRange
    body: str  # " ", "+" and "-" prefixed lines joined by "\n"


class FileDiff(BaseModel):
    """Complete diff result for a file"""

    old_path: str
    new_path: str
    hunks: list[DiffHunk]
    patch: str  # Standard unified diff format


class DiffStat(BaseModel):
    """Line counts of a diff"""

    added: int = Field(default=0, ge=0)
    changed: int = Field(default=0, ge=0)
    deleted: int = Field(default=0, ge=0)

    def __add__(self, other: DiffStat) -> DiffStat:
        return DiffStat(
            added=self.added + other.added,
            changed=self.changed + other.changed,
            deleted=self.deleted + other.deleted,
        )


class DiffPreview(BaseModel):
    """File diffs of a batch of edits with their combined stat and patch"""

    file_diffs: list[FileDiff]
    diff_stat: DiffStat
    patch: str


class DiffEditsRequest(BaseModel):
    """Request to diff a batch of workspace edits"""

    edits: list[WorkspaceEdit]


class DiffActionsRequest(BaseModel):
    """Request to diff the edits produced by action invocations"""

    invocations: list[ActionInvocation]


class DiffStatRequest(BaseModel):
    """Request to aggregate the stat of already computed file diffs"""

    file_diffs: list[FileDiff]
