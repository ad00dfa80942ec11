"""
GentxConfig — project-level settings loaded from gentx.yml.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from gentx.core.models.options import GeneratorOptions


class AuditConfig(BaseModel):
    """Where (and whether) runs are appended to the audit ledger."""

    enabled: bool = True
    path: str = ".gentx/audit.ndjson"   # relative to project root


class GentxConfig(BaseModel):
    """Root configuration.

    An absent gentx.yml is equivalent to ``GentxConfig()``.
    """

    defaults: GeneratorOptions = Field(default_factory=GeneratorOptions)
    audit: AuditConfig = Field(default_factory=AuditConfig)
    require_clean: bool = True   # false → never consult git status

    def resolve_options(
        self,
        dry_run: bool | None = None,
        force: bool | None = None,
        allow_dirty: bool | None = None,
    ) -> GeneratorOptions:
        """Merge explicit flags over the configured defaults.

        ``None`` means "not given"; the default from gentx.yml applies.
        """
        base = self.defaults
        return GeneratorOptions(
            dry_run=base.dry_run if dry_run is None else dry_run,
            force=base.force if force is None else force,
            allow_dirty=(
                (base.allow_dirty if allow_dirty is None else allow_dirty)
                or not self.require_clean
            ),
        )
