"""Models module - Pydantic data models"""

from .edit import (
    ActionInvocation,
    Diagnostic,
    EditCommand,
    Position,
    Range,
    TextEdit,
    WorkspaceEdit,
    WorkspaceEditEntry,
)
from .diff import (
    DiffActionsRequest,
    DiffEditsRequest,
    DiffHunk,
    DiffPreview,
    DiffStat,
    DiffStatRequest,
    FileDiff,
    HunkRange,
)

__all__ = [
    # Edit models
    "ActionInvocation",
    "Diagnostic",
    "EditCommand",
    "Position",
    "Range",
    "TextEdit",
    "WorkspaceEdit",
    "WorkspaceEditEntry",
    # Diff models
    "DiffActionsRequest",
    "DiffEditsRequest",
    "DiffHunk",
    "DiffPreview",
    "DiffStat",
    "DiffStatRequest",
    "FileDiff",
    "HunkRange",
]
