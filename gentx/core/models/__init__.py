"""
Domain models — records, options, and results for generator runs.

All models are re-exported here for convenient access:

    from gentx.core.models import ChangeRecord, GeneratorOptions, ExecutionResult
"""

from gentx.core.models.change import ChangeKind, ChangeRecord, normalize_path
from gentx.core.models.config import AuditConfig, GentxConfig
from gentx.core.models.generator import Generator
from gentx.core.models.options import GeneratorOptions
from gentx.core.models.result import (
    ChangeStatus,
    ChangeSummary,
    CommitResult,
    ErrorDescriptor,
    ExecutionResult,
    GateResult,
    Outcome,
    ProbeResult,
)

__all__ = [
    # config.py
    "AuditConfig",
    # change.py
    "ChangeKind",
    "ChangeRecord",
    # result.py
    "ChangeStatus",
    "ChangeSummary",
    "CommitResult",
    "ErrorDescriptor",
    "ExecutionResult",
    "GateResult",
    "GentxConfig",
    # generator.py
    "Generator",
    # options.py
    "GeneratorOptions",
    "Outcome",
    "ProbeResult",
    "normalize_path",
]
