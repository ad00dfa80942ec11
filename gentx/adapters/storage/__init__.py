"""Storage backends — read/write/exists/delete primitives.

Public re-exports for convenient access.
"""

from gentx.adapters.storage.base import Storage
from gentx.adapters.storage.filesystem import FilesystemStorage
from gentx.adapters.storage.memory import MemoryStorage

__all__ = [
    "FilesystemStorage",
    "MemoryStorage",
    "Storage",
]
