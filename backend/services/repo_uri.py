"""
Repository URI parsing - Map file identities to repository-relative paths
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import unquote, urlsplit

from .errors import InvalidFileIdentityError


@dataclass(frozen=True)
class RepoURI:
    """Components of a repository file identity"""

    repo_name: str
    rev: str | None
    file_path: str


def parse_repo_uri(uri: str) -> RepoURI:
    """Parse a file identity into its repository components.

    Supported forms:
        git://github.com/owner/repo?rev#path/to/file
        path/to/file  (plain repository-relative path)
    """
    parts = urlsplit(uri)
    if not parts.scheme:
        file_path = uri.lstrip("/")
        if not file_path:
            raise InvalidFileIdentityError(f"No file path in {uri!r}")
        return RepoURI(repo_name="", rev=None, file_path=file_path)

    if parts.scheme == "file":
        raise InvalidFileIdentityError(f"file URIs have no repository path: {uri!r}")

    repo_name = (parts.netloc + parts.path).strip("/")
    if not repo_name:
        raise InvalidFileIdentityError(f"No repository in {uri!r}")

    file_path = unquote(parts.fragment).lstrip("/")
    if not file_path:
        raise InvalidFileIdentityError(f"No file path in {uri!r}")

    return RepoURI(repo_name=repo_name, rev=unquote(parts.query) or None, file_path=file_path)


def parse_file_path(uri: str) -> str:
    """Repository-relative path of a file identity"""
    return parse_repo_uri(uri).file_path
