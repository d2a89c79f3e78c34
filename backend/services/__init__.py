"""Services module - Business logic layer"""

from .config_manager import ConfigManager
from .diff_computer import DiffComputer, group_edits_by_uri
from .diff_generator import DiffGenerator
from .diff_stat import compute_diff_stat
from .extension_host import ExtensionHostClient
from .file_reader import WorkspaceFileReader

__all__ = [
    "ConfigManager",
    "DiffComputer",
    "group_edits_by_uri",
    "DiffGenerator",
    "compute_diff_stat",
    "ExtensionHostClient",
    "WorkspaceFileReader",
]
