"""
ChangeRecord — one staged mutation of the project tree.

Records are values: the Virtual Tree creates them, the Commit Engine
consumes them. Two records are equal when they target the same path,
since a run holds at most one record per path.
"""

from __future__ import annotations

import posixpath
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class ChangeKind(str, Enum):
    """What a record does to its path."""

    CREATE = "create"
    MODIFY = "modify"
    DELETE = "delete"


def normalize_path(path: str) -> str:
    """Normalize a project-relative path to a single POSIX spelling.

    ``./src//x.ts`` and ``src/x.ts`` map to the same key. Escaping
    segments (``..``) and absolute paths are preserved so the tree
    can reject them.
    """
    raw = str(path).replace("\\", "/").strip()
    if not raw:
        raise ValueError("Empty path")
    normalized = posixpath.normpath(raw)
    if normalized == ".":
        raise ValueError(f"Path refers to the base directory itself: {path!r}")
    return normalized


class ChangeRecord(BaseModel):
    """A single create, modify, or delete against ``path``."""

    model_config = ConfigDict(frozen=True)

    path: str
    kind: ChangeKind
    content: str | None = None

    @field_validator("path")
    @classmethod
    def _normalize(cls, value: str) -> str:
        return normalize_path(value)

    # ── Constructors ────────────────────────────────────────────

    @classmethod
    def create(cls, path: str, content: str) -> ChangeRecord:
        return cls(path=path, kind=ChangeKind.CREATE, content=content)

    @classmethod
    def modify(cls, path: str, content: str) -> ChangeRecord:
        return cls(path=path, kind=ChangeKind.MODIFY, content=content)

    @classmethod
    def delete(cls, path: str) -> ChangeRecord:
        return cls(path=path, kind=ChangeKind.DELETE)

    # ── Classification ──────────────────────────────────────────

    @property
    def is_create(self) -> bool:
        return self.kind is ChangeKind.CREATE

    @property
    def is_modify(self) -> bool:
        return self.kind is ChangeKind.MODIFY

    @property
    def is_delete(self) -> bool:
        return self.kind is ChangeKind.DELETE

    # ── Identity ────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChangeRecord):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def __repr__(self) -> str:
        size = len(self.content) if self.content is not None else 0
        return f"<ChangeRecord {self.kind.value} {self.path!r} ({size} chars)>"
