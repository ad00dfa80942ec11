"""
Storage base — the four primitives the engine needs from a backend.

The Virtual Tree reads through this interface and the Commit Engine
writes through it. Nothing else in the engine touches storage.

Unlike the working-copy adapters, storage primitives raise on failure
(``OSError`` for real I/O problems): the Commit Engine must be able to
stop at the first failing record.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class Storage(ABC):
    """Abstract storage backend addressed by absolute paths.

    To create a new backend:
        1. Subclass Storage
        2. Implement name, exists, read_text, write_text, delete_file
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The backend identifier (e.g., 'filesystem', 'memory')."""

    def is_available(self) -> bool:
        """Whether the backend can be used. Should be fast and never raise."""
        return True

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Whether a file exists at ``path``."""

    @abstractmethod
    def read_text(self, path: Path) -> str | None:
        """Return the file content, or None if there is no file.

        Raises:
            UnreadableFile: If the file is not UTF-8 text.
        """

    @abstractmethod
    def write_text(self, path: Path, content: str) -> None:
        """Write ``content`` to ``path``, creating parent directories."""

    @abstractmethod
    def delete_file(self, path: Path) -> None:
        """Delete the file at ``path``. Deleting a missing file is a no-op.

        Raises:
            OSError: If ``path`` is a directory or cannot be removed.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
