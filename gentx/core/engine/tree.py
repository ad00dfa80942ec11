"""
Virtual tree — an in-memory overlay over the project's storage.

Generators read and write through the tree. Writes and deletes only
touch the overlay; reads merge the overlay with what is on disk, so a
read is indistinguishable from "disk after all staged changes" while
disk itself stays untouched until the Commit Engine applies the batch.

The overlay holds at most one ChangeRecord per path. A later stage
replaces the earlier one; deleting a path that was created in the same
run drops the entry entirely.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from gentx.adapters.storage.base import Storage
from gentx.adapters.storage.filesystem import FilesystemStorage
from gentx.core.errors import NotFound, SecurityError
from gentx.core.models.change import ChangeKind, ChangeRecord, normalize_path

logger = logging.getLogger(__name__)

Transform = Callable[[str], str]


class VirtualTree:
    """Run-scoped staging area rooted at ``base_dir``.

    Owned by exactly one pipeline run; never share an instance
    between runs.
    """

    def __init__(self, base_dir: Path, storage: Storage | None = None):
        self._base_dir = Path(base_dir)
        self._storage = storage if storage is not None else FilesystemStorage()
        self._overlay: dict[str, ChangeRecord] = {}

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    @property
    def storage(self) -> Storage:
        return self._storage

    # ── Path resolution ─────────────────────────────────────────

    def resolve(self, path: str) -> Path:
        """Resolve a project-relative path to an absolute storage path.

        Raises:
            SecurityError: If the path is absolute or resolves outside
                ``base_dir`` (``..`` traversal or a symlink escape).
        """
        key = normalize_path(path)
        if Path(key).is_absolute():
            raise SecurityError(f"Absolute path not allowed: {key}", path=key)

        base = self._base_dir.resolve()
        target = (base / key).resolve()
        if target == base:
            raise SecurityError(f"Path resolves to the base directory: {key}", path=key)
        if not target.is_relative_to(base):
            raise SecurityError(f"Path escapes base directory: {key}", path=key)
        return target

    def _on_disk(self, key: str) -> bool:
        """Whether ``key`` exists in storage, ignoring the overlay."""
        try:
            return self._storage.exists(self.resolve(key))
        except SecurityError:
            return False

    def disk_content(self, path: str) -> str | None:
        """Content in storage before any staged change, or None."""
        try:
            return self._storage.read_text(self.resolve(path))
        except SecurityError:
            return None

    # ── Reads ───────────────────────────────────────────────────

    def read(self, path: str) -> str | None:
        """Effective content of ``path``, or None if it does not exist."""
        key = normalize_path(path)
        record = self._overlay.get(key)
        if record is not None:
            return None if record.is_delete else record.content
        return self._storage.read_text(self.resolve(key))

    def exists(self, path: str) -> bool:
        """Whether ``path`` exists once staged changes are applied."""
        key = normalize_path(path)
        record = self._overlay.get(key)
        if record is not None:
            return not record.is_delete
        return self._storage.exists(self.resolve(key))

    # ── Staging ─────────────────────────────────────────────────

    def _stage(self, key: str, content: str) -> ChangeRecord:
        current = self._overlay.get(key)
        if current is not None and current.is_create:
            kind = ChangeKind.CREATE
        elif self._on_disk(key):
            kind = ChangeKind.MODIFY
        else:
            kind = ChangeKind.CREATE

        record = ChangeRecord(path=key, kind=kind, content=content)
        self._overlay[key] = record
        logger.debug("Staged %s %s", kind.value, key)
        return record

    def write(self, path: str, content: str) -> ChangeRecord:
        """Stage a create (new path) or modify (existing path).

        Replaces any earlier stage for the same path, including a
        staged delete.
        """
        return self._stage(normalize_path(path), content)

    def modify(self, path: str, transform: Transform) -> str:
        """Stage ``transform(current_content)`` as the new content.

        The transform is opaque to the tree. It is called exactly once,
        with the effective content before this call.

        Raises:
            NotFound: If ``path`` has no effective content.
        """
        key = normalize_path(path)
        current = self.read(key)
        if current is None:
            raise NotFound(f"Cannot modify missing file: {key}", path=key)

        updated = transform(current)
        self._stage(key, updated)
        return updated

    def delete(self, path: str) -> None:
        """Stage a delete.

        A path created earlier in this run is simply unstaged; anything
        else gets a delete record for the Commit Engine.
        """
        key = normalize_path(path)
        current = self._overlay.get(key)
        if current is not None and current.is_create:
            del self._overlay[key]
            logger.debug("Unstaged create %s (deleted in same run)", key)
            return

        self._overlay[key] = ChangeRecord.delete(key)
        logger.debug("Staged delete %s", key)

    # ── Inspection ──────────────────────────────────────────────

    def list_changes(self) -> list[ChangeRecord]:
        """All staged records, sorted by path."""
        return sorted(self._overlay.values(), key=lambda r: r.path)

    def discard(self) -> None:
        """Drop every staged change. Storage is not touched."""
        if self._overlay:
            logger.debug("Discarding %d staged changes", len(self._overlay))
        self._overlay.clear()

    def __len__(self) -> int:
        return len(self._overlay)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        return normalize_path(path) in self._overlay

    def __repr__(self) -> str:
        return f"<VirtualTree base_dir={str(self._base_dir)!r} staged={len(self._overlay)}>"
