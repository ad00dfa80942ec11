"""
Error taxonomy — every failure the engine can report.

Each exception carries a stable ``code`` that ends up in
``ErrorDescriptor.code`` when the pipeline turns it into a result.
The pipeline never lets these escape ``Pipeline.run``; they are
raised by the tree, the commit engine, and generator functions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gentx.core.models.result import CommitResult


class GentxError(Exception):
    """Base class for all engine errors."""

    code = "GentxError"

    def __init__(self, message: str = "", path: str | None = None):
        super().__init__(message)
        self.message = message
        self.path = path


class PreconditionFailed(GentxError):
    """Working copy is not clean and no override was given."""

    code = "PreconditionFailed"

    def __init__(self, message: str = "", details: list[str] | None = None):
        super().__init__(message)
        self.details = details or []


class AlreadyInstalled(GentxError):
    """The generator's probes all matched. A skip, not a failure."""

    code = "AlreadyInstalled"


class NotFound(GentxError):
    """A ``modify`` targeted a path with no effective content."""

    code = "NotFound"


class SecurityError(GentxError):
    """A staged path resolves outside the base directory."""

    code = "SecurityError"


class UnreadableFile(GentxError):
    """A file in storage is not valid UTF-8 text."""

    code = "UnreadableFile"


class GeneratorFailed(GentxError):
    """A generator function raised or reported failure."""

    code = "GeneratorFailed"


class PartialCommitFailure(GentxError):
    """A storage write or delete failed mid-apply.

    ``result`` enumerates which records were applied, which one
    failed, and which were never attempted.
    """

    code = "PartialCommitFailure"

    def __init__(self, message: str, result: CommitResult):
        failed = result.failed.path if result.failed is not None else None
        super().__init__(message, path=failed)
        self.result = result


class ConfigError(GentxError):
    """Raised when gentx.yml is invalid or unreadable."""

    code = "ConfigError"
