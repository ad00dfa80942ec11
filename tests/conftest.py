"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from gentx.adapters.storage.filesystem import FilesystemStorage
from gentx.adapters.storage.memory import MemoryStorage
from gentx.adapters.vcs.static import StaticWorkingCopy
from gentx.core.engine.detector import PathProbe
from gentx.core.engine.pipeline import Pipeline
from gentx.core.engine.tree import VirtualTree
from gentx.core.models.generator import Generator

MEMORY_ROOT = Path("/project")


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """An empty project directory on disk."""
    root = tmp_path / "project"
    root.mkdir()
    return root.resolve()


@pytest.fixture
def tree(project: Path) -> VirtualTree:
    """A VirtualTree over the on-disk project."""
    return VirtualTree(project, FilesystemStorage())


@pytest.fixture
def memory() -> MemoryStorage:
    """An empty in-memory storage."""
    return MemoryStorage()


@pytest.fixture
def memory_tree(memory: MemoryStorage) -> VirtualTree:
    """A VirtualTree over in-memory storage rooted at /project."""
    return VirtualTree(MEMORY_ROOT, memory)


@pytest.fixture
def clean_pipeline(project: Path) -> Pipeline:
    """A pipeline over the on-disk project whose working copy is clean."""
    return Pipeline(project, status=StaticWorkingCopy(clean=True))


@pytest.fixture
def readme_generator() -> Generator:
    """Creates README.md and docs/index.md; installed when README.md exists."""

    def stage(tree, options):
        tree.write("README.md", "# Project\n")
        tree.write("docs/index.md", "Welcome\n")

    return Generator(
        name="readme",
        fn=stage,
        probes=[PathProbe(path="README.md")],
        description="Write a README",
    )
