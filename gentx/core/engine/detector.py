"""
Installation detector — has a generator's output already been applied?

A generator declares probes. Detection is all-or-nothing: the feature
counts as installed only when every probe passes against the tree's
effective state. The per-probe results are kept for display; there is
no partial-installation diagnosis beyond that.

Detection must run before the generator stages anything, or it would
see its own in-flight output.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from gentx.core.engine.tree import VirtualTree
from gentx.core.errors import UnreadableFile
from gentx.core.models.result import ProbeResult

logger = logging.getLogger(__name__)


def _read_text(tree: VirtualTree, path: str) -> str | None:
    """Effective content of ``path``, or None if absent or not text."""
    try:
        return tree.read(path)
    except UnreadableFile as e:
        logger.debug("Probe target %s is not text: %s", path, e)
        return None


# ── Probes ──────────────────────────────────────────────────────────


class Probe(BaseModel, ABC):
    """A single installation marker."""

    @abstractmethod
    def check(self, tree: VirtualTree) -> bool:
        """Whether the marker is present in the tree."""

    @abstractmethod
    def describe(self) -> str:
        """Human-readable description for reports."""


class PathProbe(Probe):
    """Passes when ``path`` exists."""

    path: str

    def check(self, tree: VirtualTree) -> bool:
        return tree.exists(self.path)

    def describe(self) -> str:
        return f"exists: {self.path}"


class ContentProbe(Probe):
    """Passes when ``path`` is a text file containing ``needle``."""

    path: str
    needle: str

    def check(self, tree: VirtualTree) -> bool:
        content = _read_text(tree, self.path)
        return content is not None and self.needle in content

    def describe(self) -> str:
        return f"contains: {self.path} ∋ {self.needle!r}"


class ManifestProbe(Probe):
    """Passes when a JSON manifest lists ``package`` as a dependency.

    The manifest is read through the tree, so entries staged earlier
    in the run are visible. A manifest that is missing or is not JSON
    text fails the probe rather than the run.
    """

    package: str
    manifest: str = "package.json"
    sections: list[str] = Field(
        default_factory=lambda: ["dependencies", "devDependencies"],
    )

    def check(self, tree: VirtualTree) -> bool:
        raw = _read_text(tree, self.manifest)
        if raw is None:
            return False
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.debug("Unreadable manifest %s: %s", self.manifest, e)
            return False
        if not isinstance(data, dict):
            return False

        for section in self.sections:
            entries = data.get(section)
            if isinstance(entries, dict) and self.package in entries:
                return True
        return False

    def describe(self) -> str:
        return f"manifest: {self.manifest} → {self.package}"


# ── Detection ───────────────────────────────────────────────────────


@dataclass
class DetectionReport:
    """Result of running a generator's probes."""

    probes: list[ProbeResult] = field(default_factory=list)

    @property
    def installed(self) -> bool:
        """True only if there is at least one probe and all passed."""
        return bool(self.probes) and all(p.passed for p in self.probes)

    @property
    def passed(self) -> list[ProbeResult]:
        return [p for p in self.probes if p.passed]

    @property
    def failed(self) -> list[ProbeResult]:
        return [p for p in self.probes if not p.passed]


def detect(tree: VirtualTree, probes: list[Probe]) -> DetectionReport:
    """Run every probe against the tree and report each outcome.

    All probes run even after one fails, so the report is complete.
    An empty probe list is never "installed".
    """
    report = DetectionReport()
    for probe in probes:
        passed = probe.check(tree)
        report.probes.append(ProbeResult(probe=probe.describe(), passed=passed))
        logger.debug("Probe %s → %s", probe.describe(), "pass" if passed else "fail")
    return report


def is_installed(tree: VirtualTree, probes: list[Probe]) -> bool:
    """Whether every probe passes against the tree."""
    return detect(tree, probes).installed
