"""Tests for the recursive tree comparison."""

import os
from pathlib import Path

import pytest

from dirdiff.compare.engine import CompareError, compare
from dirdiff.compare.ignore import IgnoreMatcher
from dirdiff.compare.models import DiffStatus
from dirdiff.compare.tree import TreeComparator, root_name
from dirdiff.config.schema import DirDiffConfig


def _no_moves() -> DirDiffConfig:
    cfg = DirDiffConfig()
    cfg.compare.detect_moves = False
    return cfg


class TestStatuses:
    def test_identical(self, make_trees, run_compare):
        left, right = make_trees({"file.txt": "content"}, {"file.txt": "content"})
        result = run_compare(left, right)
        assert result.tree.root.status == DiffStatus.IDENTICAL
        assert result.tree.find("file.txt").status == DiffStatus.IDENTICAL
        assert result.identical is True

    def test_modified(self, make_trees, run_compare):
        left, right = make_trees({"file.txt": "old"}, {"file.txt": "new"})
        result = run_compare(left, right)
        node = result.tree.find("file.txt")
        assert node.status == DiffStatus.MODIFIED
        assert node.modified == 1
        assert node.percentage == 100.0
        assert result.tree.root.status == DiffStatus.MODIFIED
        assert result.identical is False

    def test_added(self, make_trees, run_compare):
        left, right = make_trees({}, {"new.txt": "a\nb\n"})
        result = run_compare(left, right)
        node = result.tree.find("new.txt")
        assert node.status == DiffStatus.ADDED
        assert node.added == 2
        assert node.percentage == 100.0
        assert result.tree.root.status == DiffStatus.MODIFIED

    def test_removed(self, make_trees, run_compare):
        left, right = make_trees({"old.txt": "content"}, {})
        result = run_compare(left, right)
        node = result.tree.find("old.txt")
        assert node.status == DiffStatus.REMOVED
        assert node.removed == 1
        assert result.tree.root.status == DiffStatus.MODIFIED

    def test_identical_file_has_zero_counts(self, make_trees, run_compare):
        left, right = make_trees({"f.txt": "x\ny\n"}, {"f.txt": "x\ny\n"})
        node = run_compare(left, right).tree.find("f.txt")
        assert (node.added, node.removed, node.modified, node.percentage) == (0, 0, 0, 0.0)


class TestStructure:
    def test_nested(self, make_trees, run_compare):
        left, right = make_trees(
            {"dir/file.txt": "content"},
            {"dir/file.txt": "content", "dir/new.txt": "new"},
        )
        tree = run_compare(left, right).tree
        d = tree.find("dir")
        assert d.is_directory is True
        assert d.status == DiffStatus.MODIFIED
        assert [c.name for c in tree.children(d)] == ["file.txt", "new.txt"]
        assert tree.find("dir/file.txt").status == DiffStatus.IDENTICAL
        assert tree.find("dir/new.txt").status == DiffStatus.ADDED

    def test_deep_change_propagates_up(self, make_trees, run_compare):
        left, right = make_trees(
            {"a/b/c/file.txt": "old", "a/same.txt": "s"},
            {"a/b/c/file.txt": "new", "a/same.txt": "s"},
        )
        tree = run_compare(left, right).tree
        for path in ("a/b/c/file.txt", "a/b/c", "a/b", "a", ""):
            assert tree.find(path).status == DiffStatus.MODIFIED, path
        assert tree.find("a/same.txt").status == DiffStatus.IDENTICAL

    def test_relative_paths(self, make_trees, run_compare):
        left, right = make_trees({"a/b/c/file.txt": "x"}, {"a/b/c/file.txt": "x"})
        tree = run_compare(left, right).tree
        assert tree.root.relative_path == ""
        assert tree.find("a/b/c/file.txt").relative_path == "a/b/c/file.txt"

    def test_children_sorted(self, make_trees, run_compare):
        left, right = make_trees({"b.txt": "1", "c.txt": "1"}, {"a.txt": "1", "c.txt": "1"})
        tree = run_compare(left, right).tree
        assert [c.name for c in tree.children(tree.root)] == ["a.txt", "b.txt", "c.txt"]

    def test_one_sided_directory_keeps_status(self, make_trees, run_compare):
        left, right = make_trees({"keep.txt": "k"}, {"keep.txt": "k", "newdir/x.txt": "x"})
        tree = run_compare(left, right).tree
        newdir = tree.find("newdir")
        assert newdir.status == DiffStatus.ADDED
        assert tree.find("newdir/x.txt").status == DiffStatus.ADDED

    def test_empty_directories_are_identical(self, make_trees, run_compare):
        left, right = make_trees({"empty/": None}, {"empty/": None})
        tree = run_compare(left, right).tree
        assert tree.find("empty").status == DiffStatus.IDENTICAL
        assert tree.root.status == DiffStatus.IDENTICAL

    def test_file_against_directory_is_directory(self, make_trees, run_compare):
        left, right = make_trees({"x": "file"}, {"x/inner.txt": "i"})
        tree = run_compare(left, right).tree
        x = tree.find("x")
        assert x.is_directory is True
        assert x.status == DiffStatus.MODIFIED
        assert tree.find("x/inner.txt").status == DiffStatus.ADDED

    def test_root_named_after_right(self, make_trees, run_compare):
        left, right = make_trees({}, {})
        assert run_compare(left, right).tree.root.name == "right"

    def test_root_name_fallbacks(self):
        assert root_name(Path("/a/left"), None) == "left"
        assert root_name(None, None) == "root"

    def test_missing_left_root_marks_everything_added(self, tmp_path: Path, make_trees):
        _, right = make_trees({}, {"d/f.txt": "x"})
        tree = TreeComparator().compare_directories(tmp_path / "absent", right)
        assert all(n.status == DiffStatus.ADDED for n in tree.walk())


class TestProperties:
    def test_self_compare_is_identical(self, make_trees, run_compare):
        root, _ = make_trees({"a/x.txt": "1", "b/y.txt": "2", "z.txt": "3"}, {})
        result = run_compare(root, root)
        assert all(n.status == DiffStatus.IDENTICAL for n in result.tree.walk())

    def test_swapping_sides_mirrors_statuses(self, make_trees, run_compare):
        left, right = make_trees(
            {"gone.txt": "g", "d/same.txt": "s", "d/changed.txt": "1"},
            {"new.txt": "n", "d/same.txt": "s", "d/changed.txt": "2"},
        )
        forward = run_compare(left, right, _no_moves()).tree
        backward = run_compare(right, left, _no_moves()).tree
        mirror = {DiffStatus.ADDED: DiffStatus.REMOVED, DiffStatus.REMOVED: DiffStatus.ADDED}
        for node in forward.walk():
            other = backward.find(node.relative_path)
            assert other is not None
            assert other.status == mirror.get(node.status, node.status)

    def test_node_count(self, make_trees, run_compare):
        left, right = make_trees({"a/x.txt": "1"}, {"a/x.txt": "1", "b.txt": "2"})
        # root, a, a/x.txt, b.txt
        assert len(run_compare(left, right).tree) == 4


class TestIgnore:
    def test_default_ignores(self, make_trees, run_compare):
        left, right = make_trees(
            {"src/a.txt": "a", "target/out.class": "x", ".git/HEAD": "ref"},
            {"src/a.txt": "a", "node_modules/pkg/index.js": "y", "build/": None},
        )
        result = run_compare(left, right)
        names = {n.name for n in result.tree.walk()}
        assert names.isdisjoint({"target", ".git", "node_modules", "build"})
        assert result.identical is True

    def test_ignore_file_in_working_directory(self, tmp_path: Path, make_trees, run_compare):
        (tmp_path / ".dirdiff-ignore").write_text("# compiled\n*.class\n.DS_Store\n")
        left, right = make_trees(
            {"Main.java": "class Main {}", "Main.class": "cafebabe", ".DS_Store": "1"},
            {"Main.java": "class Main {}", "Main.class": "changed", ".DS_Store": "2"},
        )
        tree = run_compare(left, right).tree
        assert tree.find("Main.class") is None
        assert tree.find(".DS_Store") is None
        assert tree.root.status == DiffStatus.IDENTICAL

    def test_ignored_subtree_is_not_descended(self, make_trees):
        left, right = make_trees({"gen/deep/a.txt": "1"}, {"gen/deep/a.txt": "2"})
        tree = TreeComparator(IgnoreMatcher(["gen"])).compare_directories(left, right)
        assert len(tree) == 1
        assert tree.root.status == DiffStatus.IDENTICAL

    def test_extra_patterns_from_config(self, make_trees, run_compare):
        cfg = DirDiffConfig()
        cfg.ignore.patterns = ["*.log"]
        left, right = make_trees({"run.log": "a"}, {"run.log": "b"})
        assert run_compare(left, right, cfg).identical is True

    def test_malformed_ignore_pattern_raises_compare_error(self, make_trees, tmp_path: Path):
        cfg = DirDiffConfig()
        cfg.ignore.patterns = ["file[z-a].log"]
        left, right = make_trees({}, {})
        with pytest.raises(CompareError, match=r"file\[z-a\]\.log"):
            compare(left, right, cfg, base_dir=tmp_path)


class TestRepeatedRuns:
    def test_same_size_rewrite_is_seen(self, make_trees):
        left, right = make_trees({"f.txt": "aaaa"}, {"f.txt": "aaaa"})
        comparator = TreeComparator()
        assert comparator.compare_directories(left, right).root.status == DiffStatus.IDENTICAL

        target = right / "f.txt"
        stat = target.stat()
        target.write_bytes(b"bbbb")
        os.utime(target, ns=(stat.st_atime_ns, stat.st_mtime_ns))

        tree = comparator.compare_directories(left, right)
        assert tree.find("f.txt").status == DiffStatus.MODIFIED
