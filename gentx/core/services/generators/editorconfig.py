"""
.editorconfig generator.
"""

from __future__ import annotations

from gentx.core.engine.detector import PathProbe
from gentx.core.engine.tree import VirtualTree
from gentx.core.models.generator import Generator
from gentx.core.models.options import GeneratorOptions

TARGET = ".editorconfig"

_EDITORCONFIG = """\
root = true

[*]
charset = utf-8
end_of_line = lf
insert_final_newline = true
trim_trailing_whitespace = true
indent_style = space
indent_size = 4

[*.{js,jsx,ts,tsx,json,yml,yaml}]
indent_size = 2

[Makefile]
indent_style = tab

[*.md]
trim_trailing_whitespace = false
"""


def stage_editorconfig(tree: VirtualTree, options: GeneratorOptions) -> None:
    tree.write(TARGET, _EDITORCONFIG)


GENERATOR = Generator(
    name="editorconfig",
    fn=stage_editorconfig,
    probes=[PathProbe(path=TARGET)],
    description="Write a baseline .editorconfig",
)
