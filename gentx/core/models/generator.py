"""
Generator contract — what the pipeline needs from a code generator.

A generator is a named function that stages changes on a VirtualTree,
plus the probes that tell whether its output is already installed.
The function never commits; it returns ``False`` (or raises) to fail
the run, anything else counts as success.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from gentx.core.engine.detector import Probe
    from gentx.core.engine.tree import VirtualTree
    from gentx.core.models.options import GeneratorOptions

GeneratorFn = Callable[["VirtualTree", "GeneratorOptions"], "bool | None"]


@dataclass
class Generator:
    """A registered generator.

    Attributes:
        name:        Unique identifier (e.g. 'dockerignore').
        fn:          Staging function ``(tree, options) -> bool | None``.
        probes:      Idempotency probes; all must pass to skip.
        description: One line shown by ``gentx generate list``.
    """

    name: str
    fn: GeneratorFn
    probes: list[Probe] = field(default_factory=list)
    description: str = ""

    def __call__(self, tree: VirtualTree, options: GeneratorOptions) -> bool | None:
        return self.fn(tree, options)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "probes": [p.describe() for p in self.probes],
        }
