"""
Generate use case — run a named generator against the project.

This is the top-level orchestrator: it loads gentx.yml, resolves the
generator, merges CLI flags over configured defaults, runs the
pipeline, and appends the outcome to the audit ledger.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from gentx.adapters.storage.base import Storage
from gentx.adapters.vcs.base import WorkingCopyStatus
from gentx.adapters.vcs.git import GitWorkingCopy
from gentx.core.config.loader import find_config_file, load_config, project_root
from gentx.core.engine.detector import DetectionReport, detect
from gentx.core.engine.pipeline import Pipeline
from gentx.core.engine.registry import GeneratorRegistry, default_registry
from gentx.core.engine.tree import VirtualTree
from gentx.core.errors import ConfigError, GentxError
from gentx.core.models.config import GentxConfig
from gentx.core.models.generator import Generator
from gentx.core.models.result import ExecutionResult
from gentx.core.persistence.audit import AuditEntry, AuditWriter

logger = logging.getLogger(__name__)


@dataclass
class GenerateResult:
    """Result of the generate use case."""

    result: ExecutionResult | None = None
    project_root: Path | None = None
    audit_path: Path | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.result is not None and self.result.ok

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        data: dict = {"project_root": str(self.project_root)}
        if self.result is not None:
            data["result"] = self.result.to_dict()
        if self.audit_path is not None:
            data["audit_path"] = str(self.audit_path)
        return data


@dataclass
class CheckResult:
    """Result of probing a generator without running it."""

    generator: str = ""
    report: DetectionReport = field(default_factory=DetectionReport)
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "generator": self.generator,
            "installed": self.report.installed,
            "probes": [p.model_dump() for p in self.report.probes],
        }


def _load(config_path: Path | None) -> tuple[GentxConfig, Path]:
    if config_path is None:
        config_path = find_config_file()
    config = load_config(config_path)
    return config, project_root(config_path)


def _ledger_exclusions(config: GentxConfig) -> list[str]:
    """Ledger paths the working-copy check must ignore."""
    if not config.audit.enabled or Path(config.audit.path).is_absolute():
        return []
    return [config.audit.path]


def _resolve(name: str, registry: GeneratorRegistry | None) -> Generator:
    registry = registry or default_registry()
    generator = registry.get(name)
    if generator is None:
        available = ", ".join(registry.list_generators()) or "(none)"
        raise ConfigError(f"Unknown generator '{name}'. Available: {available}")
    return generator


def run_generator(
    name: str,
    config_path: Path | None = None,
    dry_run: bool | None = None,
    force: bool | None = None,
    allow_dirty: bool | None = None,
    registry: GeneratorRegistry | None = None,
    storage: Storage | None = None,
    status: WorkingCopyStatus | None = None,
) -> GenerateResult:
    """Run one generator end to end.

    Args:
        name: Registered generator name.
        config_path: Optional explicit path to gentx.yml.
        dry_run / force / allow_dirty: Explicit flags; None = config default.
        registry: Generator registry (default: built-ins).
        storage: Storage backend (default: local filesystem).
        status: Working-copy status (default: git in the project root,
            ignoring the audit ledger).

    Returns:
        GenerateResult wrapping the pipeline's ExecutionResult.
    """
    out = GenerateResult()

    try:
        config, root = _load(config_path)
        generator = _resolve(name, registry)
    except ConfigError as e:
        out.error = str(e)
        return out

    out.project_root = root
    options = config.resolve_options(dry_run=dry_run, force=force, allow_dirty=allow_dirty)

    if status is None:
        status = GitWorkingCopy(root, exclude=_ledger_exclusions(config))
    pipeline = Pipeline(root, storage=storage, status=status)
    out.result = pipeline.run(generator, options)

    if config.audit.enabled and not options.dry_run:
        writer = AuditWriter(path=root / config.audit.path)
        writer.write(AuditEntry.from_result(out.result, dry_run=options.dry_run, force=options.force))
        out.audit_path = writer.path

    return out


def check_generator(
    name: str,
    config_path: Path | None = None,
    registry: GeneratorRegistry | None = None,
    storage: Storage | None = None,
) -> CheckResult:
    """Report a generator's probes against the project, without staging."""
    out = CheckResult(generator=name)

    try:
        _config, root = _load(config_path)
        generator = _resolve(name, registry)
        out.report = detect(VirtualTree(root, storage), generator.probes)
    except GentxError as e:
        out.error = str(e)

    return out


def list_generators(registry: GeneratorRegistry | None = None) -> list[Generator]:
    """All registered generators, sorted by name."""
    registry = registry or default_registry()
    return [g for n in registry.list_generators() if (g := registry.get(n)) is not None]
