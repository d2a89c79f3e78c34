"""Errors raised while turning edits into diffs"""

from __future__ import annotations


class DiffError(Exception):
    """Base class for diff computation errors"""


class CommandExecutionError(DiffError):
    """The extension host failed to execute an action edit command"""


class InvalidRangeError(DiffError, ValueError):
    """An edit range lies outside the document or ends before it starts"""


class OverlappingEditsError(DiffError):
    """Two edits to the same file cover overlapping text"""


class InvalidFileIdentityError(DiffError, ValueError):
    """A file identity can't be mapped to a repository path"""
