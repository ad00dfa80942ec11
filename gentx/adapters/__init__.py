"""Adapters — bindings to storage and version control.

Public re-exports for convenient access.
"""

from gentx.adapters.storage import FilesystemStorage, MemoryStorage, Storage
from gentx.adapters.vcs import GitWorkingCopy, StaticWorkingCopy, WorkingCopyStatus

__all__ = [
    "FilesystemStorage",
    "GitWorkingCopy",
    "MemoryStorage",
    "StaticWorkingCopy",
    "Storage",
    "WorkingCopyStatus",
]
