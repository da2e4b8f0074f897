"""Tests for DirectoryHandle."""

from __future__ import annotations

from pathlib import Path

import pytest

from iofs.fs.directory import DirectoryHandle
from iofs.fs.entry import Attributes
from iofs.fs.file import FileHandle


def names(paths: list[str]) -> list[str]:
    return sorted(Path(p).name for p in paths)


class TestListing:
    """Tests for child listings."""

    def test_file_paths(self, sample_tree: Path) -> None:
        handle = DirectoryHandle.open(sample_tree)
        assert names(handle.file_paths()) == [".hidden", "a.txt"]

    def test_directory_paths(self, sample_tree: Path) -> None:
        handle = DirectoryHandle.open(sample_tree)
        assert handle.directory_paths() == [f"{sample_tree}/sub"]

    def test_children_paths(self, sample_tree: Path) -> None:
        handle = DirectoryHandle.open(sample_tree)
        assert names(handle.children_paths()) == [".hidden", "a.txt", "sub"]

    def test_children_kinds(self, sample_tree: Path) -> None:
        """Test children carry the kind found on disk."""
        kinds = {child.name(): child.kind for child in DirectoryHandle.open(sample_tree).children()}
        assert kinds["sub"] is Attributes.DIRECTORY
        assert kinds["a.txt"] is Attributes.FILE

    def test_files_and_directories_handles(self, sample_tree: Path) -> None:
        handle = DirectoryHandle.open(sample_tree / "sub")
        assert [f.name() for f in handle.files()] == ["b.bin"]
        assert all(isinstance(f, FileHandle) for f in handle.files())
        assert [d.name() for d in handle.directories()] == ["deep"]

    def test_missing_directory_lists_empty(self, tmp_path: Path) -> None:
        assert DirectoryHandle.open(tmp_path / "missing").children_paths() == []

    def test_unreadable_entry_skipped(self, tmp_path: Path) -> None:
        """Test an entry whose metadata cannot be read is left out."""
        root = tmp_path / "d"
        root.mkdir()
        (root / "f").write_bytes(b"x")
        (root / "dangling").symlink_to(tmp_path / "nowhere")
        handle = DirectoryHandle.open(root)
        assert handle.children_paths() == [f"{root}/f"]
        assert [c.name() for c in handle.children()] == ["f"]

    def test_contains(self, sample_tree: Path) -> None:
        handle = DirectoryHandle.open(sample_tree)
        assert handle.contains("a.txt")
        assert handle.contains("sub")
        assert not handle.contains("zzz")


class TestCreate:
    """Tests for open_or_create and attributes."""

    def test_open_or_create(self, tmp_path: Path) -> None:
        handle = DirectoryHandle.open_or_create(tmp_path / "x" / "y")
        assert handle.exists()
        assert handle.attributes() is Attributes.DIRECTORY

    def test_create(self, tmp_path: Path) -> None:
        handle = DirectoryHandle.open(tmp_path / "later")
        assert handle.attributes() is Attributes.NONE
        handle.create()
        assert handle.exists()

    def test_file_is_not_directory(self, sample_tree: Path) -> None:
        assert not DirectoryHandle.open(sample_tree / "a.txt").exists()


class TestSize:
    """Tests for recursive size."""

    def test_size_is_sum_of_files(self, sample_tree: Path) -> None:
        """Test size equals the sum of every file below the directory."""
        expected = sum(p.stat().st_size for p in sample_tree.rglob("*") if p.is_file())
        assert DirectoryHandle.open(sample_tree).size_bytes() == expected == 14

    def test_missing_directory_size(self, tmp_path: Path) -> None:
        assert DirectoryHandle.open(tmp_path / "missing").size_bytes() == 0


class TestCopyMoveDelete:
    """Tests for tree copy, move and delete."""

    def test_copy_new_mirrors_tree(self, sample_tree: Path, tmp_path: Path) -> None:
        source = DirectoryHandle.open(sample_tree)
        target = tmp_path / "copy"
        source.copy_new(target)
        assert (target / "sub" / "deep" / "c.md").read_bytes() == b"# c\n"
        assert (target / ".hidden").exists()
        assert source.structurally_equal(DirectoryHandle.open(target))
        assert sample_tree.exists()

    def test_copy_to(self, sample_tree: Path, tmp_path: Path) -> None:
        dest = tmp_path / "dest"
        dest.mkdir()
        DirectoryHandle.open(sample_tree).copy_to(dest)
        assert (dest / "tree" / "a.txt").exists()

    def test_copy_into_itself(self, sample_tree: Path) -> None:
        with pytest.raises(ValueError, match="into itself"):
            DirectoryHandle.open(sample_tree).copy_new(sample_tree / "sub" / "inner")

    def test_copy_conflicting_file(self, sample_tree: Path, tmp_path: Path) -> None:
        target = tmp_path / "copy"
        target.mkdir()
        (target / "a.txt").write_bytes(b"other")
        with pytest.raises(FileExistsError):
            DirectoryHandle.open(sample_tree).copy_new(target)

    def test_move_new_repoints(self, sample_tree: Path, tmp_path: Path) -> None:
        """Test the handle follows the moved tree."""
        handle = DirectoryHandle.open(sample_tree)
        target = tmp_path / "moved"
        handle.move_new(target)
        assert not sample_tree.exists()
        assert handle.full_name() == str(target)
        assert (target / "sub" / "b.bin").read_bytes() == b"\x00\x01\x02"

    def test_cover_new_replaces_existing(self, sample_tree: Path, tmp_path: Path) -> None:
        target = tmp_path / "old"
        target.mkdir()
        (target / "stale.txt").write_bytes(b"x")
        DirectoryHandle.open(sample_tree).cover_new(target, is_move=False)
        assert not (target / "stale.txt").exists()
        assert (target / "a.txt").exists()

    def test_cover_new_into_itself_keeps_target(self, sample_tree: Path) -> None:
        """Test replacing a subdirectory with its own parent is refused untouched."""
        with pytest.raises(ValueError, match="into itself"):
            DirectoryHandle.open(sample_tree).cover_new(sample_tree / "sub", is_move=False)
        assert (sample_tree / "sub" / "deep" / "c.md").read_bytes() == b"# c\n"

    def test_cover_new_over_ancestor_keeps_source(self, sample_tree: Path) -> None:
        """Test replacing a directory that contains the source is refused untouched."""
        handle = DirectoryHandle.open(sample_tree / "sub")
        with pytest.raises(ValueError, match="contains"):
            handle.cover_new(sample_tree, is_move=True)
        assert (sample_tree / "sub" / "b.bin").exists()
        assert (sample_tree / "a.txt").exists()

    def test_delete(self, sample_tree: Path) -> None:
        DirectoryHandle.open(sample_tree).delete()
        assert not sample_tree.exists()


class TestStructuralEquality:
    """Tests for recursive tree comparison."""

    @pytest.fixture
    def copy(self, sample_tree: Path, tmp_path: Path) -> Path:
        target = tmp_path / "copy"
        DirectoryHandle.open(sample_tree).copy_new(target)
        return target

    def test_same_handle(self, tmp_path: Path) -> None:
        """Test a handle equals itself, even when nothing is on disk."""
        handle = DirectoryHandle.open(tmp_path / "missing")
        assert handle.structurally_equal(handle)

    def test_nested_content_difference(self, sample_tree: Path, copy: Path) -> None:
        """Test a change two levels down is detected."""
        (copy / "sub" / "deep" / "c.md").write_bytes(b"# C\n")
        assert not DirectoryHandle.open(sample_tree).structurally_equal(DirectoryHandle.open(copy))

    def test_extra_file(self, sample_tree: Path, copy: Path) -> None:
        (copy / "sub" / "extra").write_bytes(b"")
        assert not DirectoryHandle.open(sample_tree).structurally_equal(DirectoryHandle.open(copy))

    def test_renamed_file(self, sample_tree: Path, copy: Path) -> None:
        (copy / "a.txt").rename(copy / "b.txt")
        assert not DirectoryHandle.open(sample_tree).structurally_equal(DirectoryHandle.open(copy))

    def test_extra_empty_directory(self, sample_tree: Path, copy: Path) -> None:
        (copy / "sub" / "deep" / "empty").mkdir()
        assert not DirectoryHandle.open(sample_tree).structurally_equal(DirectoryHandle.open(copy))

    def test_equal_copy(self, sample_tree: Path, copy: Path) -> None:
        assert DirectoryHandle.open(copy).structurally_equal(DirectoryHandle.open(sample_tree))
