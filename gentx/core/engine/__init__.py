"""Engine — staging tree, gate, detector, commit and pipeline.

Public re-exports for convenient access.
"""

from gentx.core.engine.commit import commit, commit_or_raise
from gentx.core.engine.detector import (
    ContentProbe,
    DetectionReport,
    ManifestProbe,
    PathProbe,
    Probe,
    detect,
    is_installed,
)
from gentx.core.engine.gate import PreconditionGate
from gentx.core.engine.pipeline import Pipeline
from gentx.core.engine.registry import GeneratorRegistry, default_registry
from gentx.core.engine.tree import VirtualTree

__all__ = [
    "ContentProbe",
    "DetectionReport",
    "GeneratorRegistry",
    "ManifestProbe",
    "PathProbe",
    "Pipeline",
    "PreconditionGate",
    "Probe",
    "VirtualTree",
    "commit",
    "commit_or_raise",
    "default_registry",
    "detect",
    "is_installed",
]
