"""Tests for flattening a diff tree into rows."""

from dirdiff.compare.flatten import flatten
from dirdiff.compare.models import DiffStatus, DiffTree


def _small_tree() -> DiffTree:
    tree = DiffTree()
    root = tree.add("root", is_directory=True, status=DiffStatus.MODIFIED, relative_path="")
    a = tree.add("a", is_directory=True, status=DiffStatus.MODIFIED, relative_path="a", parent=root)
    x = tree.add("x.txt", is_directory=False, status=DiffStatus.ADDED, relative_path="a/x.txt", parent=a)
    b = tree.add("b.txt", is_directory=False, status=DiffStatus.IDENTICAL, relative_path="b.txt", parent=root)
    tree.update(a, child_ids=(x,))
    tree.update(root, child_ids=(a, b))
    tree.update(x, added=3, percentage=100.0)
    return tree


class TestFlatten:
    def test_preorder_root_first(self):
        entries = flatten(_small_tree())
        assert [e.path for e in entries] == ["root", "root/a", "root/a/x.txt", "root/b.txt"]
        assert [e.relative_path for e in entries] == ["", "a", "a/x.txt", "b.txt"]

    def test_fields_copied(self):
        x = flatten(_small_tree())[2]
        assert x.is_directory is False
        assert x.status == DiffStatus.ADDED
        assert x.added == 3
        assert x.percentage == 100.0
        assert x.source_path is None

    def test_count_matches_tree(self):
        tree = _small_tree()
        assert len(flatten(tree)) == len(tree) == 4

    def test_detached_nodes_skipped(self):
        tree = _small_tree()
        tree.detach(tree.find("a").index)
        assert [e.relative_path for e in flatten(tree)] == ["", "b.txt"]
        assert tree.is_attached(tree.root.index) is True

    def test_repeatable(self):
        tree = _small_tree()
        assert flatten(tree) == flatten(tree)

    def test_empty_tree(self):
        assert flatten(DiffTree()) == []

    def test_pipeline_entries(self, make_trees, run_compare):
        left, right = make_trees({"d/f.txt": "1"}, {"d/f.txt": "2"})
        result = run_compare(left, right)
        entries = result.entries
        assert entries[0].path == "right"
        assert entries[0].relative_path == ""
        assert [e.path for e in entries] == ["right", "right/d", "right/d/f.txt"]
