"""
.dockerignore generator — base exclusions plus blocks for detected stacks.

Stacks are detected from marker files read through the tree, so a
marker staged earlier in the same run counts.
"""

from __future__ import annotations

import logging

from gentx.core.engine.detector import PathProbe
from gentx.core.engine.tree import VirtualTree
from gentx.core.models.generator import Generator
from gentx.core.models.options import GeneratorOptions

logger = logging.getLogger(__name__)

TARGET = ".dockerignore"

_BASE_IGNORE = """\
# ── Version control ─────────────────────────────────────────────
.git
.gitignore

# ── Editors / OS ────────────────────────────────────────────────
.vscode
.idea
*.swp
.DS_Store

# ── Generator ledger ────────────────────────────────────────────
.gentx/
"""

# Marker files → stack name (first match wins per stack)
_STACK_MARKERS: dict[str, tuple[str, ...]] = {
    "python": ("pyproject.toml", "setup.py", "requirements.txt"),
    "node": ("package.json",),
    "go": ("go.mod",),
    "rust": ("Cargo.toml",),
    "java": ("pom.xml", "build.gradle"),
}

_STACK_PATTERNS: dict[str, str] = {
    "python": """\
# ── Python ──────────────────────────────────────────────────────
__pycache__
*.pyc
.pytest_cache
.venv
*.egg-info
dist
build
""",
    "node": """\
# ── Node.js ─────────────────────────────────────────────────────
node_modules
npm-debug.log*
dist
coverage
""",
    "go": """\
# ── Go ──────────────────────────────────────────────────────────
vendor/
*.test
""",
    "rust": """\
# ── Rust ────────────────────────────────────────────────────────
target/
""",
    "java": """\
# ── Java ────────────────────────────────────────────────────────
target/
build/
*.class
.gradle
""",
}


def detect_stacks(tree: VirtualTree) -> list[str]:
    """Stack names whose marker files exist in the tree, in a fixed order."""
    return [
        stack
        for stack, markers in _STACK_MARKERS.items()
        if any(tree.exists(marker) for marker in markers)
    ]


def render_dockerignore(stack_names: list[str]) -> str:
    """Combine the base block with one block per known stack."""
    parts = [_BASE_IGNORE.rstrip()]
    for name in stack_names:
        if name in _STACK_PATTERNS:
            parts.append(_STACK_PATTERNS[name].rstrip())
    return "\n\n".join(parts) + "\n"


def stage_dockerignore(tree: VirtualTree, options: GeneratorOptions) -> None:
    stacks = detect_stacks(tree)
    logger.debug("dockerignore: detected stacks %s", stacks or "(none)")
    tree.write(TARGET, render_dockerignore(stacks))


GENERATOR = Generator(
    name="dockerignore",
    fn=stage_dockerignore,
    probes=[PathProbe(path=TARGET)],
    description="Write a .dockerignore tailored to the detected stacks",
)
