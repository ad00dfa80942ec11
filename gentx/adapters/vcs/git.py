"""
Git working copy — cleanliness via ``git status --porcelain``.

Uses the git CLI, never a library binding. Paths gentx itself writes
outside a generator run (the audit ledger) can be excluded, so the
ledger never makes the next run look dirty.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from gentx.adapters.vcs.base import WorkingCopyReport, WorkingCopyStatus

logger = logging.getLogger(__name__)


class GitWorkingCopy(WorkingCopyStatus):
    """Working-copy status of the git repository containing ``root``.

    Tracked changes and untracked files both count as dirty. Untracked
    directories are listed file by file, so an excluded file does not
    hide its siblings.

    Args:
        root: Project directory; git runs here.
        timeout: Seconds before ``git status`` is abandoned.
        exclude: Paths relative to ``root`` that never count as dirty.
    """

    def __init__(
        self,
        root: Path,
        timeout: int = 15,
        exclude: list[str] | None = None,
    ):
        self._root = root
        self._timeout = timeout
        self._exclude = list(exclude or [])

    @property
    def name(self) -> str:
        return "git"

    @property
    def root(self) -> Path:
        return self._root

    @property
    def exclude(self) -> list[str]:
        return list(self._exclude)

    def is_available(self) -> bool:
        return shutil.which("git") is not None

    def status(self) -> WorkingCopyReport:
        if not self.is_available():
            return WorkingCopyReport(clean=False, error="git executable not found")

        try:
            result = self._git(self._status_args())
        except subprocess.TimeoutExpired:
            return WorkingCopyReport(
                clean=False,
                error=f"git status timed out after {self._timeout}s",
            )
        except OSError as e:
            return WorkingCopyReport(clean=False, error=f"Git error: {e}")

        if result.returncode != 0:
            return WorkingCopyReport(
                clean=False,
                error=result.stderr.strip() or "git status failed",
            )

        paths = [line.rstrip() for line in result.stdout.splitlines() if line.strip()]
        logger.debug("git status in %s: %d changed paths", self._root, len(paths))
        return WorkingCopyReport(clean=not paths, paths=paths)

    # ── Helpers ─────────────────────────────────────────────────

    def _status_args(self) -> list[str]:
        args = ["status", "--porcelain", "--untracked-files=all"]
        if self._exclude:
            # ":/" keeps the whole repository in scope; exclusions are
            # resolved relative to root, where git runs.
            args += ["--", ":/", *(f":(exclude){p}" for p in self._exclude)]
        return args

    def _git(self, args: list[str]) -> subprocess.CompletedProcess[str]:
        """Run a git command in the project root."""
        return subprocess.run(
            ["git", *args],
            cwd=str(self._root),
            capture_output=True,
            text=True,
            timeout=self._timeout,
        )
