"""
Static working copy — fixed status, for tests and for projects that
opt out of the cleanliness check.
"""

from __future__ import annotations

from gentx.adapters.vcs.base import WorkingCopyReport, WorkingCopyStatus


class StaticWorkingCopy(WorkingCopyStatus):
    """Returns a configured status and counts how often it was asked."""

    def __init__(self, clean: bool = True, paths: list[str] | None = None):
        self._clean = clean
        self._paths = paths or []
        self._calls = 0

    @property
    def name(self) -> str:
        return "static"

    @property
    def call_count(self) -> int:
        return self._calls

    def is_available(self) -> bool:
        return True

    def status(self) -> WorkingCopyReport:
        self._calls += 1
        return WorkingCopyReport(clean=self._clean, paths=list(self._paths))
