"""
Audit ledger — append-only record of generator runs.

Every run through the generate use case writes one entry to an NDJSON
(newline-delimited JSON) file: which generator ran, how it ended, and
which paths it touched. Entries are never modified or deleted.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from gentx.core.models.result import ExecutionResult

logger = logging.getLogger(__name__)

DEFAULT_AUDIT_PATH = ".gentx/audit.ndjson"


class AuditEntry(BaseModel):
    """A single audit log entry."""

    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    operation_id: str = ""
    generator: str = ""

    # Invocation
    dry_run: bool = False
    force: bool = False

    # Results
    outcome: str = ""              # applied, skipped, previewed, aborted
    created: list[str] = Field(default_factory=list)
    modified: list[str] = Field(default_factory=list)
    deleted: list[str] = Field(default_factory=list)
    duration_ms: int = 0

    # Errors (if any)
    errors: list[str] = Field(default_factory=list)

    # Skip or abort message, gate decision, probe outcomes
    context: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_result(
        cls,
        result: ExecutionResult,
        dry_run: bool = False,
        force: bool = False,
    ) -> AuditEntry:
        return cls(
            operation_id=result.operation_id,
            generator=result.generator,
            dry_run=dry_run,
            force=force,
            outcome=result.outcome.value,
            created=result.created,
            modified=result.modified,
            deleted=result.deleted,
            duration_ms=result.duration_ms,
            errors=[f"{e.code}: {e.message}" for e in result.errors],
            context=_context(result),
        )


def _context(result: ExecutionResult) -> dict[str, Any]:
    """Why a run ended the way it did, plus gate and probe outcomes."""
    context: dict[str, Any] = {}
    if result.message:
        context["message"] = result.message
    if result.gate is not None:
        if result.gate.bypassed:
            context["gate"] = "bypassed"
        elif result.gate.details:
            context["gate"] = result.gate.details
    if result.probes:
        context["probes"] = {p.probe: p.passed for p in result.probes}
    return context


class AuditWriter:
    """Append-only audit ledger writer.

    Each call to write() appends a single JSON line to the ledger file.
    The file is created if it doesn't exist.
    """

    def __init__(self, path: Path | None = None, project_root: Path | None = None):
        if path is not None:
            self._path = path
        elif project_root is not None:
            self._path = project_root / DEFAULT_AUDIT_PATH
        else:
            self._path = Path(DEFAULT_AUDIT_PATH)

    @property
    def path(self) -> Path:
        return self._path

    def write(self, entry: AuditEntry) -> None:
        """Append an entry. Failures are logged, never raised."""
        line = json.dumps(entry.model_dump(mode="json"), ensure_ascii=False) + "\n"

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as f:
                f.write(line)
            logger.debug("Audit entry written: %s/%s", entry.generator, entry.operation_id)
        except OSError as e:
            logger.error("Failed to write audit entry: %s", e)

    def read_all(self) -> list[AuditEntry]:
        """Read all entries from the ledger, oldest first."""
        if not self._path.is_file():
            return []

        entries = []
        try:
            with self._path.open("r", encoding="utf-8") as f:
                for line_num, line in enumerate(f, start=1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        entries.append(AuditEntry.model_validate(json.loads(line)))
                    except (json.JSONDecodeError, ValidationError) as e:
                        logger.warning("Skipping corrupt audit entry at line %d: %s", line_num, e)
        except OSError as e:
            logger.error("Failed to read audit ledger: %s", e)

        return entries

    def read_recent(self, n: int = 20) -> list[AuditEntry]:
        """Read the most recent N entries."""
        return self.read_all()[-n:]

    def entry_count(self) -> int:
        """Count entries without parsing them."""
        if not self._path.is_file():
            return 0
        try:
            with self._path.open("r", encoding="utf-8") as f:
                return sum(1 for line in f if line.strip())
        except OSError:
            return 0
