"""
Memory storage — dict-backed test double for the storage primitives.

Used in tests to run the engine without touching disk. Can be
configured to fail specific writes or deletes, and records every
mutating call so tests can assert on apply order.
"""

from __future__ import annotations

from pathlib import Path

from gentx.adapters.storage.base import Storage


class MemoryStorage(Storage):
    """In-memory storage backend.

    By default every operation succeeds. ``set_failure`` makes a
    write or delete of one path raise ``OSError``.
    """

    def __init__(self, files: dict[str | Path, str] | None = None):
        self._files: dict[Path, str] = {
            Path(p): content for p, content in (files or {}).items()
        }
        self._failures: dict[Path, str] = {}
        self._call_log: list[tuple[str, Path]] = []

    @property
    def name(self) -> str:
        return "memory"

    @property
    def files(self) -> dict[Path, str]:
        """Current contents, keyed by absolute path."""
        return dict(self._files)

    @property
    def call_log(self) -> list[tuple[str, Path]]:
        """Every write/delete received, as ``(operation, path)``."""
        return self._call_log

    @property
    def call_count(self) -> int:
        """Number of mutating calls received."""
        return len(self._call_log)

    def set_failure(self, path: str | Path, error: str = "Mock failure") -> None:
        """Configure writes and deletes of ``path`` to raise OSError."""
        self._failures[Path(path)] = error

    def exists(self, path: Path) -> bool:
        return path in self._files

    def read_text(self, path: Path) -> str | None:
        return self._files.get(path)

    def write_text(self, path: Path, content: str) -> None:
        self._call_log.append(("write", path))
        if path in self._failures:
            raise OSError(self._failures[path])
        self._files[path] = content

    def delete_file(self, path: Path) -> None:
        self._call_log.append(("delete", path))
        if path in self._failures:
            raise OSError(self._failures[path])
        self._files.pop(path, None)

    def reset(self) -> None:
        """Clear call log and configured failures."""
        self._call_log.clear()
        self._failures.clear()
