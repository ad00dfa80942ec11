"""
.gitignore entry generator — keep the gentx ledger out of version control.

Appends the ledger directory to an existing .gitignore through
``modify``, falling back to creating the file when there is none.
"""

from __future__ import annotations

from gentx.core.engine.detector import ContentProbe
from gentx.core.engine.tree import VirtualTree
from gentx.core.errors import NotFound
from gentx.core.models.generator import Generator
from gentx.core.models.options import GeneratorOptions

TARGET = ".gitignore"
ENTRY = ".gentx/"
_BLOCK = f"# gentx audit ledger\n{ENTRY}\n"


def append_entry(content: str) -> str:
    """Append the ledger block unless the entry is already listed."""
    if any(line.strip() == ENTRY for line in content.splitlines()):
        return content
    if content and not content.endswith("\n"):
        content += "\n"
    separator = "\n" if content else ""
    return f"{content}{separator}{_BLOCK}"


def stage_gitignore(tree: VirtualTree, options: GeneratorOptions) -> None:
    try:
        tree.modify(TARGET, append_entry)
    except NotFound:
        tree.write(TARGET, _BLOCK)


GENERATOR = Generator(
    name="gitignore-gentx",
    fn=stage_gitignore,
    probes=[ContentProbe(path=TARGET, needle=ENTRY)],
    description="Add the .gentx/ ledger directory to .gitignore",
)
