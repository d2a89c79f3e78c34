"""
Diff Computer - Turn action invocations and workspace edits into file diffs
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from models.diff import DiffStat, FileDiff
from models.edit import ActionInvocation, Diagnostic, EditCommand, TextEdit, WorkspaceEdit

from .diff_generator import DEFAULT_CONTEXT_LINES, DiffGenerator
from .diff_stat import compute_diff_stat
from .errors import InvalidRangeError, OverlappingEditsError
from .repo_uri import parse_file_path
from .text_document import apply_edits, to_offset_edit

logger = logging.getLogger(__name__)

T = TypeVar("T")

ExecuteActionEditCommand = Callable[[Diagnostic | None, EditCommand], Awaitable[dict[str, Any] | None]]
ReadFile = Callable[[str], Awaitable[str]]
ParseFilePath = Callable[[str], str]


async def gather_all(awaitables: list[Awaitable[T]]) -> list[T]:
    """Run awaitables concurrently and return their results in order.

    The first failure cancels the remaining tasks and is re-raised as is.
    """
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(_wait(aw)) for aw in awaitables]
    except BaseExceptionGroup as eg:
        raise eg.exceptions[0] from None
    return [task.result() for task in tasks]


async def _wait(awaitable: Awaitable[T]) -> T:
    return await awaitable


def group_edits_by_uri(workspace_edits: list[WorkspaceEdit]) -> dict[str, list[TextEdit]]:
    """Flatten workspace edits into uri -> edits, preserving encounter order.

    Edits to the same file from different workspace edits are concatenated,
    never reconciled.
    """
    edits_by_uri: dict[str, list[TextEdit]] = {}
    for workspace_edit in workspace_edits:
        for uri, edits in workspace_edit.text_edits():
            edits_by_uri.setdefault(str(uri), []).extend(edits)
    return edits_by_uri


class DiffComputer:
    """Compute the combined diff of applying a batch of edits"""

    def __init__(
        self,
        execute_action_edit_command: ExecuteActionEditCommand,
        read_file: ReadFile,
        parse_file_path: ParseFilePath = parse_file_path,
        context_lines: int = DEFAULT_CONTEXT_LINES,
    ):
        self.execute_action_edit_command = execute_action_edit_command
        self.read_file = read_file
        self.parse_file_path = parse_file_path
        self.diff_generator = DiffGenerator(context_lines=context_lines)

    async def compute_diff(self, invocations: list[ActionInvocation]) -> list[FileDiff]:
        """Computes the combined diff from applying all invocations' workspace edits"""
        edits = await gather_all([self._resolve_edit(invocation) for invocation in invocations])
        resolved = [edit for edit in edits if edit is not None]
        logger.debug("Resolved %d of %d action invocations to edits", len(resolved), len(invocations))
        return await self.compute_diff_from_edits(resolved)

    async def _resolve_edit(self, invocation: ActionInvocation) -> WorkspaceEdit | None:
        edit = await self.execute_action_edit_command(
            invocation.diagnostic, invocation.action_edit_command
        )
        return WorkspaceEdit.from_json(edit) if edit is not None else None

    async def compute_diff_from_edits(self, workspace_edits: list[WorkspaceEdit]) -> list[FileDiff]:
        """Apply workspace edits to current file contents and diff each file"""
        edits_by_uri = group_edits_by_uri(workspace_edits)
        if not edits_by_uri:
            return []

        uris = list(edits_by_uri)
        old_texts = await gather_all([self.read_file(uri) for uri in uris])

        file_diffs = [
            self._diff_file(uri, old_text, edits_by_uri[uri])
            for uri, old_text in zip(uris, old_texts)
        ]
        logger.info("Computed diffs for %d files", len(file_diffs))
        return file_diffs

    def _diff_file(self, uri: str, old_text: str, edits: list[TextEdit]) -> FileDiff:
        try:
            # All offsets are resolved against the unmodified text
            offset_edits = [to_offset_edit(old_text, edit) for edit in edits]
            new_text = apply_edits(old_text, offset_edits)
        except (InvalidRangeError, OverlappingEditsError) as e:
            raise type(e)(f"{uri}: {e}") from e
        return self.diff_generator.generate_diff(old_text, new_text, uri, self.parse_file_path(uri))

    @staticmethod
    def compute_diff_stat(file_diffs: list[FileDiff]) -> DiffStat:
        return compute_diff_stat(file_diffs)
