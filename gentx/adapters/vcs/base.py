"""
Working-copy status — the protocol consumed by the precondition gate.

Implementations NEVER raise: a status that cannot be determined is
reported as not clean, with the reason in ``error``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field


class WorkingCopyReport(BaseModel):
    """Snapshot of the working copy.

    Attributes:
        clean: True when there are no modified or untracked paths.
        paths: Human-readable list of modified/untracked entries.
        error: Why the status could not be determined (implies not clean).
    """

    clean: bool
    paths: list[str] = Field(default_factory=list)
    error: str | None = None

    @property
    def details(self) -> list[str]:
        """Lines to show a user when the working copy is not clean."""
        if self.error:
            return [self.error, *self.paths]
        return list(self.paths)


class WorkingCopyStatus(ABC):
    """Abstract working-copy status source."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The source identifier (e.g., 'git', 'static')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the underlying tool exists. Fast, never raises."""

    @abstractmethod
    def status(self) -> WorkingCopyReport:
        """Report whether the working copy is clean. Never raises."""

    def is_clean(self) -> bool:
        return self.status().clean

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
