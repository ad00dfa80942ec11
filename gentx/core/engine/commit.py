"""
Commit engine — apply a tree's staged records to storage.

Flow:
    snapshot → validate (no mutation) → creates/modifies by path → deletes by path

Validation rejects any path that would land outside the tree's base
directory before a single byte is written. The apply phase stops at
the first failing record and reports what was applied, what failed,
and what was never attempted. Applied records are not undone: the
guarantee is validated, ordered, all-in-memory-first application, not
crash-proof atomicity.
"""

from __future__ import annotations

import logging
from pathlib import Path

from gentx.core.engine.tree import VirtualTree
from gentx.core.errors import PartialCommitFailure
from gentx.core.models.change import ChangeRecord
from gentx.core.models.result import CommitResult

logger = logging.getLogger(__name__)


def validate(records: list[ChangeRecord], tree: VirtualTree) -> list[tuple[ChangeRecord, Path]]:
    """Resolve every record to its storage path.

    Returns:
        ``(record, absolute_path)`` pairs in apply order: creates and
        modifies sorted by path, then deletes sorted by path.

    Raises:
        SecurityError: If any record escapes the base directory.
    """
    writes = sorted((r for r in records if not r.is_delete), key=lambda r: r.path)
    deletes = sorted((r for r in records if r.is_delete), key=lambda r: r.path)
    return [(record, tree.resolve(record.path)) for record in [*writes, *deletes]]


def commit(tree: VirtualTree) -> CommitResult:
    """Apply every staged record of ``tree`` through its storage.

    An empty tree is a legal no-op and never touches storage. On full
    success the tree's overlay is cleared.

    Raises:
        SecurityError: From validation; nothing has been written.
    """
    records = tree.list_changes()
    if not records:
        logger.debug("Nothing staged — empty commit")
        return CommitResult()

    plan = validate(records, tree)
    storage = tree.storage
    result = CommitResult()

    for index, (record, target) in enumerate(plan):
        try:
            if record.is_delete:
                storage.delete_file(target)
            else:
                storage.write_text(target, record.content or "")
        except Exception as e:
            result.failed = record
            result.error = f"{type(e).__name__}: {e}"
            result.not_attempted = [r for r, _ in plan[index + 1:]]
            logger.warning(
                "✗ %s %s failed: %s (%d applied, %d not attempted)",
                record.kind.value,
                record.path,
                result.error,
                len(result.applied),
                len(result.not_attempted),
            )
            return result

        result.applied.append(record)
        logger.info("✓ %s %s", record.kind.value, record.path)

    tree.discard()
    return result


def commit_or_raise(tree: VirtualTree) -> CommitResult:
    """Like :func:`commit`, but a partial failure raises.

    Raises:
        SecurityError: From validation.
        PartialCommitFailure: Carrying the partial CommitResult.
    """
    result = commit(tree)
    failed = result.failed
    if failed is not None:
        raise PartialCommitFailure(
            f"Commit stopped at {failed.path}: {result.error}",
            result=result,
        )
    return result
