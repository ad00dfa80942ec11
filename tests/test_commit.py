"""
Tests for the commit engine — validation, ordering, and partial failure.
"""

from pathlib import Path

import pytest

from gentx.adapters.storage.memory import MemoryStorage
from gentx.core.engine.commit import commit, commit_or_raise, validate
from gentx.core.engine.tree import VirtualTree
from gentx.core.errors import PartialCommitFailure, SecurityError

MEMORY_ROOT = Path("/project")


class TestEmptyCommit:
    def test_no_changes_is_ok_and_touches_nothing(self):
        storage = MemoryStorage()
        tree = VirtualTree(MEMORY_ROOT, storage)
        result = commit(tree)
        assert result.ok
        assert result.applied == []
        assert storage.call_count == 0


class TestApply:
    def test_writes_files_and_creates_parents(self, project: Path, tree: VirtualTree):
        tree.write("a/b/file.txt", "content")
        result = commit(tree)
        assert result.ok
        assert (project / "a" / "b" / "file.txt").read_text() == "content"

    def test_create_before_delete(self, project: Path, tree: VirtualTree):
        (project / "a").mkdir()
        (project / "a" / "old.txt").write_text("old")

        tree.delete("a/old.txt")
        tree.write("a/b/file.txt", "new")
        result = commit(tree)

        assert result.ok
        assert [r.path for r in result.applied] == ["a/b/file.txt", "a/old.txt"]
        assert (project / "a" / "b" / "file.txt").read_text() == "new"
        assert not (project / "a" / "old.txt").exists()

    def test_apply_order_is_writes_then_deletes_by_path(self):
        storage = MemoryStorage({
            MEMORY_ROOT / "b.txt": "b",
            MEMORY_ROOT / "y.txt": "y",
        })
        tree = VirtualTree(MEMORY_ROOT, storage)
        tree.delete("y.txt")
        tree.write("z.txt", "z")
        tree.delete("b.txt")
        tree.write("a.txt", "a")

        commit(tree)

        assert storage.call_log == [
            ("write", MEMORY_ROOT / "a.txt"),
            ("write", MEMORY_ROOT / "z.txt"),
            ("delete", MEMORY_ROOT / "b.txt"),
            ("delete", MEMORY_ROOT / "y.txt"),
        ]

    def test_delete_of_absent_path_is_noop(self):
        storage = MemoryStorage()
        tree = VirtualTree(MEMORY_ROOT, storage)
        tree.delete("ghost.txt")
        result = commit(tree)
        assert result.ok
        assert len(result.applied) == 1
        assert storage.call_log == [("delete", MEMORY_ROOT / "ghost.txt")]
        assert storage.files == {}

    def test_delete_of_absent_file_on_disk(self, project: Path, tree: VirtualTree):
        tree.delete("ghost.txt")
        assert commit(tree).ok
        assert not (project / "ghost.txt").exists()

    def test_delete_of_directory_fails(self, project: Path, tree: VirtualTree):
        (project / "assets").mkdir()
        (project / "assets" / "keep.txt").write_text("keep")
        tree.write("a.txt", "a")
        tree.delete("assets")

        result = commit(tree)

        assert not result.ok
        assert result.failed is not None and result.failed.path == "assets"
        assert "IsADirectoryError" in result.error
        assert [r.path for r in result.applied] == ["a.txt"]
        assert (project / "assets" / "keep.txt").read_text() == "keep"

    def test_success_clears_overlay(self, tree: VirtualTree):
        tree.write("a.txt", "x")
        commit(tree)
        assert len(tree) == 0

    def test_modify_overwrites(self, project: Path, tree: VirtualTree):
        (project / "a.txt").write_text("old")
        tree.modify("a.txt", lambda s: s + " new")
        commit(tree)
        assert (project / "a.txt").read_text() == "old new"


class TestValidation:
    def test_escape_rejected_before_any_write(self):
        storage = MemoryStorage()
        tree = VirtualTree(MEMORY_ROOT, storage)
        tree.write("a.txt", "fine")
        tree.write("../escape.txt", "bad")

        with pytest.raises(SecurityError):
            commit(tree)

        assert storage.call_count == 0
        assert len(tree) == 2

    def test_validate_orders_plan(self, tree: VirtualTree, project: Path):
        (project / "d.txt").write_text("x")
        tree.delete("d.txt")
        tree.write("c.txt", "c")
        plan = validate(tree.list_changes(), tree)
        assert [r.path for r, _ in plan] == ["c.txt", "d.txt"]
        assert plan[0][1] == project / "c.txt"


class TestPartialFailure:
    def _tree(self) -> tuple[VirtualTree, MemoryStorage]:
        storage = MemoryStorage({MEMORY_ROOT / "old.txt": "old"})
        tree = VirtualTree(MEMORY_ROOT, storage)
        tree.write("a.txt", "a")
        tree.write("b.txt", "b")
        tree.write("c.txt", "c")
        tree.delete("old.txt")
        storage.set_failure(MEMORY_ROOT / "b.txt", "permission denied")
        return tree, storage

    def test_stops_at_first_failure(self):
        tree, storage = self._tree()
        result = commit(tree)

        assert not result.ok
        assert [r.path for r in result.applied] == ["a.txt"]
        assert result.failed is not None and result.failed.path == "b.txt"
        assert "permission denied" in result.error
        assert [r.path for r in result.not_attempted] == ["c.txt", "old.txt"]

        # Not undone, not continued
        assert storage.files[MEMORY_ROOT / "a.txt"] == "a"
        assert MEMORY_ROOT / "c.txt" not in storage.files
        assert MEMORY_ROOT / "old.txt" in storage.files

    def test_failed_commit_keeps_overlay(self):
        tree, _ = self._tree()
        commit(tree)
        assert len(tree) == 4

    def test_commit_or_raise(self):
        tree, _ = self._tree()
        with pytest.raises(PartialCommitFailure) as exc:
            commit_or_raise(tree)
        assert exc.value.path == "b.txt"
        assert exc.value.result.failed.path == "b.txt"

    def test_real_filesystem_failure(self, project: Path, tree: VirtualTree):
        # A directory where a file should go makes the write fail
        (project / "blocked.txt").mkdir()
        tree.write("a.txt", "a")
        tree.write("blocked.txt", "x")
        tree.write("c.txt", "c")

        result = commit(tree)

        assert not result.ok
        assert result.failed.path == "blocked.txt"
        assert (project / "a.txt").is_file()
        assert not (project / "c.txt").exists()
