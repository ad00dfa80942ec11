"""
Filesystem storage — UTF-8 text files on local disk.
"""

from __future__ import annotations

import logging
from pathlib import Path

from gentx.adapters.storage.base import Storage
from gentx.core.errors import UnreadableFile

logger = logging.getLogger(__name__)


class FilesystemStorage(Storage):
    """Local disk backend.

    Paths are absolute; the Virtual Tree resolves project-relative
    paths against its base directory before calling in.
    """

    @property
    def name(self) -> str:
        return "filesystem"

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def read_text(self, path: Path) -> str | None:
        if not path.is_file():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise UnreadableFile(
                f"Not a UTF-8 text file: {path} ({e.reason} at byte {e.start})",
                path=str(path),
            ) from e

    def write_text(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        logger.debug("Written %d bytes to %s", len(content), path)

    def delete_file(self, path: Path) -> None:
        if path.is_dir():
            raise IsADirectoryError(f"Refusing to delete directory: {path}")
        path.unlink(missing_ok=True)
        logger.debug("Deleted %s", path)
