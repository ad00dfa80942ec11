"""
Generators — built-in routines that stage files on a VirtualTree.

Each generator module exposes a ``GENERATOR`` describing its staging
function and idempotency probes.
"""

from gentx.core.services.generators.dockerignore import GENERATOR as DOCKERIGNORE
from gentx.core.services.generators.editorconfig import GENERATOR as EDITORCONFIG
from gentx.core.services.generators.gitignore import GENERATOR as GITIGNORE

BUILTIN_GENERATORS = [DOCKERIGNORE, EDITORCONFIG, GITIGNORE]

__all__ = [
    "BUILTIN_GENERATORS",
    "DOCKERIGNORE",
    "EDITORCONFIG",
    "GITIGNORE",
]
