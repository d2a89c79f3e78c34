"""Diff preview API endpoints"""

from __future__ import annotations

import aiohttp
from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from models.diff import (
    DiffActionsRequest,
    DiffEditsRequest,
    DiffPreview,
    DiffStat,
    DiffStatRequest,
    FileDiff,
)
from services.config_manager import ConfigManager
from services.diff_computer import DiffComputer
from services.diff_stat import compute_diff_stat
from services.errors import (
    CommandExecutionError,
    InvalidFileIdentityError,
    InvalidRangeError,
    OverlappingEditsError,
)
from services.extension_host import ExtensionHostClient
from services.file_reader import WorkspaceFileReader

router = APIRouter()


def get_diff_computer() -> DiffComputer:
    """Build a diff computer wired to the configured extension host and workspace"""
    config = ConfigManager.get_instance().get_config()
    extension_host = ExtensionHostClient(config)
    file_reader = WorkspaceFileReader.from_config(config)

    return DiffComputer(
        execute_action_edit_command=extension_host.execute_action_edit_command,
        read_file=file_reader.read_file,
        context_lines=config.get("diff", {}).get("contextLines", 4),
    )


def build_preview(file_diffs: list[FileDiff]) -> DiffPreview:
    return DiffPreview(
        file_diffs=file_diffs,
        diff_stat=compute_diff_stat(file_diffs),
        patch="".join(file_diff.patch for file_diff in file_diffs),
    )


def to_http_error(e: Exception) -> HTTPException:
    """Map diff computation failures to HTTP errors"""
    if isinstance(e, (InvalidRangeError, OverlappingEditsError, InvalidFileIdentityError)):
        return HTTPException(status_code=422, detail=str(e))
    if isinstance(e, UnicodeDecodeError):
        return HTTPException(status_code=422, detail=f"File is not valid UTF-8: {e}")
    if isinstance(e, FileNotFoundError):
        return HTTPException(status_code=404, detail=f"File not found: {e.filename}")
    if isinstance(e, ValidationError):
        return HTTPException(status_code=502, detail=f"Malformed edit from extension host: {e}")
    if isinstance(e, (CommandExecutionError, aiohttp.ClientError, TimeoutError)):
        return HTTPException(status_code=502, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))


@router.post("/edits", response_model=DiffPreview)
async def diff_edits(request: DiffEditsRequest) -> DiffPreview:
    """Preview the diff of applying workspace edits"""
    diff_computer = get_diff_computer()
    try:
        file_diffs = await diff_computer.compute_diff_from_edits(request.edits)
    except (
        InvalidRangeError,
        OverlappingEditsError,
        InvalidFileIdentityError,
        UnicodeDecodeError,
        OSError,
    ) as e:
        raise to_http_error(e)
    return build_preview(file_diffs)


@router.post("/actions", response_model=DiffPreview)
async def diff_actions(request: DiffActionsRequest) -> DiffPreview:
    """Preview the diff of the edits produced by action invocations"""
    diff_computer = get_diff_computer()
    try:
        file_diffs = await diff_computer.compute_diff(request.invocations)
    except (
        CommandExecutionError,
        aiohttp.ClientError,
        TimeoutError,
        ValidationError,
        InvalidRangeError,
        OverlappingEditsError,
        InvalidFileIdentityError,
        UnicodeDecodeError,
        OSError,
    ) as e:
        raise to_http_error(e)
    return build_preview(file_diffs)


@router.post("/stat", response_model=DiffStat)
async def diff_stat(request: DiffStatRequest) -> DiffStat:
    """Aggregate the line stat of file diffs"""
    return compute_diff_stat(request.file_diffs)
