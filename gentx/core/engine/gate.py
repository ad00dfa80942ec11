"""
Precondition gate — is it safe to mutate the project?
"""

from __future__ import annotations

import logging

from gentx.adapters.vcs.base import WorkingCopyStatus
from gentx.core.models.options import GeneratorOptions
from gentx.core.models.result import GateResult

logger = logging.getLogger(__name__)


class PreconditionGate:
    """Decides whether a mutating run may proceed.

    With ``force`` or ``allow_dirty`` the working copy is never
    consulted and the gate reports clean. Pure: no staged state,
    no mutation.
    """

    def __init__(self, status: WorkingCopyStatus):
        self._status = status

    def check(self, options: GeneratorOptions) -> GateResult:
        if options.bypass_gate:
            logger.debug("Precondition gate bypassed (force=%s, allow_dirty=%s)",
                         options.force, options.allow_dirty)
            return GateResult(clean=True, bypassed=True)

        report = self._status.status()
        if not report.clean:
            logger.warning("Working copy not clean (%s): %d entries",
                           self._status.name, len(report.details))
        return GateResult(clean=report.clean, details=report.details)
