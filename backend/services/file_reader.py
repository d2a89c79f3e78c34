"""
Workspace File Reader - Read current file contents from the local workspace
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from .errors import InvalidFileIdentityError
from .repo_uri import parse_file_path


class WorkspaceFileReader:
    """Read files addressed by repository identities under a workspace root"""

    def __init__(self, root: str | Path):
        self.root = Path(root).resolve()

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "WorkspaceFileReader":
        return cls(config.get("workspace", {}).get("root", "."))

    def resolve(self, uri: str) -> Path:
        """Local path of a file identity. Raises if it escapes the workspace root."""
        path = (self.root / parse_file_path(uri)).resolve()
        if not path.is_relative_to(self.root):
            raise InvalidFileIdentityError(f"{uri!r} resolves outside the workspace root")
        return path

    async def read_file(self, uri: str) -> str:
        path = self.resolve(uri)
        return await asyncio.to_thread(self._read, path)

    @staticmethod
    def _read(path: Path) -> str:
        # newline="" keeps line endings as they are on disk
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
