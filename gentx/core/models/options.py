"""
GeneratorOptions — per-run flags recognized by the pipeline.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratorOptions(BaseModel):
    """Invocation options for one pipeline run.

    Attributes:
        dry_run:     Report the staged changes, never write.
        force:       Bypass both the idempotency skip and the
                     precondition gate, overwriting installed files.
        allow_dirty: Bypass only the precondition gate. An installed
                     generator is still skipped.
    """

    dry_run: bool = False
    force: bool = False
    allow_dirty: bool = False

    @property
    def bypass_gate(self) -> bool:
        """Whether the working-copy check should be skipped."""
        return self.force or self.allow_dirty

    @property
    def bypass_skip(self) -> bool:
        """Whether an already-installed generator should run anyway."""
        return self.force
