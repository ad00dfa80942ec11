"""
Tests for the virtual tree — staging, read-through, and isolation.
"""

import os
from pathlib import Path

import pytest

from gentx.adapters.storage.memory import MemoryStorage
from gentx.core.engine.tree import VirtualTree
from gentx.core.errors import NotFound, SecurityError
from gentx.core.models.change import ChangeKind

MEMORY_ROOT = Path("/project")


def _snapshot(root: Path) -> dict[str, str]:
    return {
        str(p.relative_to(root)): p.read_text()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


# ── Reads ────────────────────────────────────────────────────────────


class TestRead:
    def test_reads_through_to_disk(self, project: Path, tree: VirtualTree):
        (project / "a.txt").write_text("disk")
        assert tree.read("a.txt") == "disk"
        assert tree.exists("a.txt")

    def test_missing_is_none(self, tree: VirtualTree):
        assert tree.read("nope.txt") is None
        assert not tree.exists("nope.txt")

    def test_read_after_write_new_file(self, tree: VirtualTree):
        tree.write("src/new.py", "print(1)\n")
        assert tree.read("src/new.py") == "print(1)\n"
        assert tree.exists("src/new.py")

    def test_read_after_write_shadows_disk(self, project: Path, tree: VirtualTree):
        (project / "a.txt").write_text("disk")
        tree.write("a.txt", "staged")
        assert tree.read("a.txt") == "staged"

    def test_staged_delete_hides_disk(self, project: Path, tree: VirtualTree):
        (project / "a.txt").write_text("disk")
        tree.delete("a.txt")
        assert tree.read("a.txt") is None
        assert not tree.exists("a.txt")

    def test_path_spellings_share_a_key(self, tree: VirtualTree):
        tree.write("./src//x.ts", "A")
        assert tree.read("src/x.ts") == "A"
        assert len(tree) == 1

    def test_read_outside_base_rejected(self, tree: VirtualTree):
        with pytest.raises(SecurityError):
            tree.read("../outside.txt")


# ── Staging ──────────────────────────────────────────────────────────


class TestWrite:
    def test_new_path_is_create(self, tree: VirtualTree):
        record = tree.write("a.txt", "x")
        assert record.kind is ChangeKind.CREATE

    def test_existing_path_is_modify(self, project: Path, tree: VirtualTree):
        (project / "a.txt").write_text("old")
        record = tree.write("a.txt", "new")
        assert record.kind is ChangeKind.MODIFY

    def test_rewrite_of_staged_create_stays_create(self, tree: VirtualTree):
        tree.write("a.txt", "1")
        record = tree.write("a.txt", "2")
        assert record.kind is ChangeKind.CREATE
        assert tree.read("a.txt") == "2"
        assert len(tree) == 1

    def test_write_replaces_staged_delete(self, project: Path, tree: VirtualTree):
        (project / "a.txt").write_text("old")
        tree.delete("a.txt")
        tree.write("a.txt", "back")
        [record] = tree.list_changes()
        assert record.kind is ChangeKind.MODIFY
        assert record.content == "back"

    def test_escaping_write_is_staged_not_rejected(self, tree: VirtualTree):
        record = tree.write("../evil.txt", "x")
        assert record.kind is ChangeKind.CREATE
        assert "../evil.txt" in tree


class TestModify:
    def test_transform_applied_to_disk_content(self, project: Path, tree: VirtualTree):
        (project / "a.txt").write_text("hello")
        result = tree.modify("a.txt", lambda s: s.upper())
        assert result == "HELLO"
        assert tree.read("a.txt") == "HELLO"
        assert tree.list_changes()[0].kind is ChangeKind.MODIFY

    def test_missing_raises_not_found(self, tree: VirtualTree):
        with pytest.raises(NotFound) as exc:
            tree.modify("missing.txt", lambda s: s)
        assert exc.value.path == "missing.txt"

    def test_modify_after_delete_raises(self, project: Path, tree: VirtualTree):
        (project / "a.txt").write_text("x")
        tree.delete("a.txt")
        with pytest.raises(NotFound):
            tree.modify("a.txt", lambda s: s)

    def test_transform_called_once_with_current_content(self, tree: VirtualTree):
        tree.write("a.txt", "A")
        calls = []

        def transform(content):
            calls.append(content)
            return content + "B"

        tree.modify("a.txt", transform)
        assert calls == ["A"]

    def test_write_then_modify_composes(self, tree: VirtualTree):
        tree.write("src/x.ts", "A")
        tree.modify("src/x.ts", lambda s: s + "B")
        [record] = tree.list_changes()
        assert record.content == "AB"
        assert record.kind is ChangeKind.CREATE


class TestDelete:
    def test_delete_cancels_create(self, tree: VirtualTree):
        tree.write("a.txt", "x")
        tree.delete("a.txt")
        assert tree.list_changes() == []
        assert "a.txt" not in tree

    def test_delete_of_disk_file_recorded(self, project: Path, tree: VirtualTree):
        (project / "a.txt").write_text("x")
        tree.delete("a.txt")
        [record] = tree.list_changes()
        assert record.is_delete

    def test_delete_replaces_staged_modify(self, project: Path, tree: VirtualTree):
        (project / "a.txt").write_text("x")
        tree.write("a.txt", "y")
        tree.delete("a.txt")
        [record] = tree.list_changes()
        assert record.is_delete

    def test_delete_of_absent_path_still_staged(self, tree: VirtualTree):
        tree.delete("ghost.txt")
        [record] = tree.list_changes()
        assert record.is_delete


# ── Inspection ───────────────────────────────────────────────────────


class TestInspection:
    def test_list_changes_sorted_by_path(self, tree: VirtualTree):
        tree.write("z.txt", "z")
        tree.write("a/b.txt", "b")
        tree.write("m.txt", "m")
        assert [r.path for r in tree.list_changes()] == ["a/b.txt", "m.txt", "z.txt"]

    def test_discard_clears_overlay(self, project: Path, tree: VirtualTree):
        (project / "a.txt").write_text("disk")
        tree.write("a.txt", "staged")
        tree.write("b.txt", "new")
        tree.discard()
        assert len(tree) == 0
        assert tree.read("a.txt") == "disk"
        assert not tree.exists("b.txt")


class TestStagingIsolation:
    def test_disk_unchanged_without_commit(self, project: Path, tree: VirtualTree):
        (project / "keep.txt").write_text("keep")
        (project / "gone.txt").write_text("gone")
        before = _snapshot(project)

        tree.write("new/file.txt", "new")
        tree.write("keep.txt", "changed")
        tree.modify("keep.txt", lambda s: s + "!")
        tree.delete("gone.txt")
        tree.write("tmp.txt", "t")
        tree.delete("tmp.txt")

        assert _snapshot(project) == before
        assert not (project / "new").exists()

    def test_memory_storage_untouched(self):
        storage = MemoryStorage({MEMORY_ROOT / "a.txt": "x"})
        tree = VirtualTree(MEMORY_ROOT, storage)
        tree.write("b.txt", "y")
        tree.delete("a.txt")
        assert storage.call_count == 0
        assert storage.files == {MEMORY_ROOT / "a.txt": "x"}


class TestResolve:
    def test_inside(self, project: Path, tree: VirtualTree):
        assert tree.resolve("src/a.py") == project / "src" / "a.py"

    @pytest.mark.parametrize("path", ["../x", "a/../../x", "/etc/passwd"])
    def test_escapes_rejected(self, tree: VirtualTree, path: str):
        with pytest.raises(SecurityError):
            tree.resolve(path)

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_symlink_escape_rejected(self, tmp_path: Path, project: Path, tree: VirtualTree):
        outside = tmp_path / "outside"
        outside.mkdir()
        (project / "link").symlink_to(outside, target_is_directory=True)
        with pytest.raises(SecurityError):
            tree.resolve("link/file.txt")
