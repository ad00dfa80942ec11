"""Working-copy status sources.

Public re-exports for convenient access.
"""

from gentx.adapters.vcs.base import WorkingCopyReport, WorkingCopyStatus
from gentx.adapters.vcs.git import GitWorkingCopy
from gentx.adapters.vcs.static import StaticWorkingCopy

__all__ = [
    "GitWorkingCopy",
    "StaticWorkingCopy",
    "WorkingCopyReport",
    "WorkingCopyStatus",
]
