"""
Generator execution pipeline — one end-to-end, all-or-nothing run.

Flow:
    gate → detect → stage (generator fn) → preview | commit → ExecutionResult

The pipeline is the only caller of the Commit Engine, so every
generator gets the same skip / force / dry-run behaviour. Engine
errors never escape ``run``: each one ends the run in a terminal
outcome with a structured error descriptor.
"""

from __future__ import annotations

import logging
import time
import uuid
from datetime import UTC, datetime
from pathlib import Path

from gentx.adapters.storage.base import Storage
from gentx.adapters.storage.filesystem import FilesystemStorage
from gentx.adapters.vcs.base import WorkingCopyStatus
from gentx.adapters.vcs.git import GitWorkingCopy
from gentx.core.engine.commit import commit_or_raise
from gentx.core.engine.detector import detect
from gentx.core.engine.gate import PreconditionGate
from gentx.core.engine.tree import VirtualTree
from gentx.core.errors import (
    AlreadyInstalled,
    GeneratorFailed,
    GentxError,
    PartialCommitFailure,
    PreconditionFailed,
    UnreadableFile,
)
from gentx.core.models.change import ChangeRecord
from gentx.core.models.generator import Generator
from gentx.core.models.options import GeneratorOptions
from gentx.core.models.result import (
    ChangeStatus,
    ChangeSummary,
    ErrorDescriptor,
    ExecutionResult,
    Outcome,
)

logger = logging.getLogger(__name__)


def generate_operation_id() -> str:
    """Generate a unique operation ID."""
    now = datetime.now(UTC).strftime("%Y%m%d-%H%M%S")
    short = uuid.uuid4().hex[:6]
    return f"gen-{now}-{short}"


class Pipeline:
    """Runs generators against one project directory.

    Args:
        base_dir: Project root every staged path is relative to.
        storage: Storage backend (default: local filesystem).
        status: Working-copy status source (default: git in base_dir).
    """

    def __init__(
        self,
        base_dir: Path,
        storage: Storage | None = None,
        status: WorkingCopyStatus | None = None,
    ):
        self._base_dir = Path(base_dir)
        self._storage = storage if storage is not None else FilesystemStorage()
        self._gate = PreconditionGate(
            status if status is not None else GitWorkingCopy(self._base_dir)
        )

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def run(
        self,
        generator: Generator,
        options: GeneratorOptions | None = None,
    ) -> ExecutionResult:
        """Run ``generator`` once and return the structured outcome."""
        options = options or GeneratorOptions()
        result = ExecutionResult(
            generator=generator.name,
            operation_id=generate_operation_id(),
        )
        tree = VirtualTree(self._base_dir, self._storage)
        start = time.monotonic()

        try:
            self._execute(generator, options, tree, result)
        except AlreadyInstalled as e:
            result.outcome = Outcome.SKIPPED
            result.message = e.message
        except GentxError as e:
            result.outcome = Outcome.ABORTED
            result.message = e.message
            result.errors.append(ErrorDescriptor.from_exception(e))
        finally:
            tree.discard()
            result.ended_at = datetime.now(UTC).isoformat()
            result.duration_ms = int((time.monotonic() - start) * 1000)

        logger.info(
            "%s %s → %s (%d changes, %dms)",
            result.operation_id,
            generator.name,
            result.outcome.value,
            len(result.changes),
            result.duration_ms,
        )
        return result

    # ── States ──────────────────────────────────────────────────

    def _execute(
        self,
        generator: Generator,
        options: GeneratorOptions,
        tree: VirtualTree,
        result: ExecutionResult,
    ) -> None:
        # Start → Gated
        gate = self._gate.check(options)
        result.gate = gate
        if not gate.clean:
            raise PreconditionFailed(
                "Working copy is not clean; commit or stash first, "
                "or re-run with --allow-dirty / --force",
                details=gate.details,
            )

        # Gated → Detected
        detection = detect(tree, generator.probes)
        result.probes = detection.probes
        if detection.installed:
            if not options.bypass_skip:
                raise AlreadyInstalled(
                    f"Already installed: all {len(detection.probes)} probes matched"
                )
            logger.info("%s already installed, forcing re-run", generator.name)

        # Detected → Staged
        self._stage(generator, options, tree)
        records = tree.list_changes()
        previous = {r.path: _previous_content(tree, r) for r in records}

        # Staged → PreviewedOnly
        if options.dry_run:
            result.changes = [
                ChangeSummary.from_record(r, ChangeStatus.PROPOSED, previous[r.path])
                for r in records
            ]
            result.outcome = Outcome.PREVIEWED
            return

        # Staged → Applied | Aborted
        try:
            committed = commit_or_raise(tree)
        except PartialCommitFailure as e:
            result.changes = _partial_summaries(e, previous)
            raise

        result.changes = [
            ChangeSummary.from_record(r, ChangeStatus.APPLIED, previous[r.path])
            for r in committed.applied
        ]
        result.outcome = Outcome.APPLIED

    def _stage(
        self,
        generator: Generator,
        options: GeneratorOptions,
        tree: VirtualTree,
    ) -> None:
        """Invoke the generator function, normalizing its failures."""
        try:
            ok = generator(tree, options)
        except GentxError:
            raise
        except Exception as e:
            logger.debug("Generator %s raised", generator.name, exc_info=True)
            raise GeneratorFailed(f"{type(e).__name__}: {e}") from e

        if ok is False:
            raise GeneratorFailed(f"Generator {generator.name!r} reported failure")


def _previous_content(tree: VirtualTree, record: ChangeRecord) -> str | None:
    """Content a record replaces, for diffing. None when there is nothing to diff."""
    try:
        return tree.disk_content(record.path)
    except UnreadableFile:
        logger.debug("No diff for %s: existing file is not text", record.path)
        return None


def _partial_summaries(
    error: PartialCommitFailure,
    previous: dict[str, str | None],
) -> list[ChangeSummary]:
    """Per-record statuses for a commit that stopped midway."""
    partial = error.result
    ordered: list[tuple[ChangeRecord, ChangeStatus]] = [
        *((r, ChangeStatus.APPLIED) for r in partial.applied),
    ]
    if partial.failed is not None:
        ordered.append((partial.failed, ChangeStatus.FAILED))
    ordered.extend((r, ChangeStatus.NOT_ATTEMPTED) for r in partial.not_attempted)
    return [
        ChangeSummary.from_record(r, status, previous.get(r.path))
        for r, status in ordered
    ]
