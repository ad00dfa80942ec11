"""
Result models — the structured output of gate, detector, commit and pipeline.

The engine never prints. Everything a reporting surface needs to
render a run (what changed, what was skipped, what failed) is in
these models.
"""

from __future__ import annotations

import difflib
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from gentx.core.errors import GentxError
from gentx.core.models.change import ChangeKind, ChangeRecord

# Max diff lines kept in a summary
_DIFF_LIMIT = 50


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class Outcome(str, Enum):
    """Terminal state of a pipeline run."""

    APPLIED = "applied"
    SKIPPED = "skipped"
    PREVIEWED = "previewed"
    ABORTED = "aborted"


class ChangeStatus(str, Enum):
    """What happened to one record."""

    PROPOSED = "proposed"          # dry-run, never committed
    APPLIED = "applied"
    FAILED = "failed"
    NOT_ATTEMPTED = "not_attempted"


class ChangeSummary(BaseModel):
    """A reportable view of one ChangeRecord."""

    path: str
    kind: ChangeKind
    status: ChangeStatus
    size: int = 0
    lines_added: int = 0
    lines_removed: int = 0
    diff: str = ""

    @classmethod
    def from_record(
        cls,
        record: ChangeRecord,
        status: ChangeStatus,
        previous: str | None = None,
    ) -> ChangeSummary:
        """Summarize a record, diffing against the content it replaces.

        Args:
            record: The staged record.
            status: Its fate in this run.
            previous: Content on disk before the run (None if absent).
        """
        new_content = record.content or ""
        old_lines = (previous or "").splitlines()
        new_lines = new_content.splitlines()

        diff_lines = list(difflib.unified_diff(
            old_lines,
            new_lines,
            fromfile=f"a/{record.path}",
            tofile=f"b/{record.path}",
            lineterm="",
        ))
        added = sum(1 for l in diff_lines if l.startswith("+") and not l.startswith("+++"))
        removed = sum(1 for l in diff_lines if l.startswith("-") and not l.startswith("---"))

        diff_text = "\n".join(diff_lines[:_DIFF_LIMIT])
        if len(diff_lines) > _DIFF_LIMIT:
            diff_text += f"\n... ({len(diff_lines) - _DIFF_LIMIT} more lines)"

        return cls(
            path=record.path,
            kind=record.kind,
            status=status,
            size=len(new_content),
            lines_added=added,
            lines_removed=removed,
            diff=diff_text,
        )


class ErrorDescriptor(BaseModel):
    """A failure reported in a result."""

    code: str
    message: str
    path: str | None = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> ErrorDescriptor:
        """Build a descriptor from an engine error or any other exception."""
        if isinstance(exc, GentxError):
            return cls(code=exc.code, message=exc.message or str(exc), path=exc.path)
        return cls(code="GeneratorFailed", message=f"{type(exc).__name__}: {exc}")


class ProbeResult(BaseModel):
    """Outcome of one idempotency probe."""

    probe: str           # human-readable description
    passed: bool


class GateResult(BaseModel):
    """Decision of the precondition gate."""

    clean: bool
    bypassed: bool = False
    details: list[str] = Field(default_factory=list)


class CommitResult(BaseModel):
    """Outcome of applying a tree's staged records.

    On success ``failed`` is None and ``not_attempted`` is empty.
    On a mid-apply failure, the first failing record is in ``failed``
    with ``error``, and every later record is in ``not_attempted``.
    """

    applied: list[ChangeRecord] = Field(default_factory=list)
    failed: ChangeRecord | None = None
    not_attempted: list[ChangeRecord] = Field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.failed is None


class ExecutionResult(BaseModel):
    """Outcome of one pipeline run."""

    generator: str = ""
    operation_id: str = ""
    outcome: Outcome = Outcome.ABORTED
    message: str = ""              # skip reason or abort summary

    changes: list[ChangeSummary] = Field(default_factory=list)
    errors: list[ErrorDescriptor] = Field(default_factory=list)
    probes: list[ProbeResult] = Field(default_factory=list)
    gate: GateResult | None = None

    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = ""
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        """Whether the run ended in a non-failure state."""
        return self.outcome is not Outcome.ABORTED

    def _paths(self, kind: ChangeKind) -> list[str]:
        return [c.path for c in self.changes if c.kind is kind]

    @property
    def created(self) -> list[str]:
        return self._paths(ChangeKind.CREATE)

    @property
    def modified(self) -> list[str]:
        return self._paths(ChangeKind.MODIFY)

    @property
    def deleted(self) -> list[str]:
        return self._paths(ChangeKind.DELETE)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
