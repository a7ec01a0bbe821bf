"""Flatten a DiffTree into an ordered list of DiffEntry rows."""

from __future__ import annotations

from typing import List

from dirdiff.compare.models import DiffEntry, DiffNode, DiffTree


def flatten(tree: DiffTree) -> List[DiffEntry]:
    """Pre-order, root first. ``path`` starts at the root's name."""
    entries: List[DiffEntry] = []
    if tree.empty:
        return entries
    _flatten(tree, tree.root, "", entries)
    return entries


def _flatten(tree: DiffTree, node: DiffNode, parent_path: str, entries: List[DiffEntry]) -> None:
    path = f"{parent_path}/{node.name}" if parent_path else node.name
    entries.append(
        DiffEntry(
            path=path,
            is_directory=node.is_directory,
            status=node.status,
            relative_path=node.relative_path,
            added=node.added,
            removed=node.removed,
            modified=node.modified,
            percentage=node.percentage,
            source_path=node.source_path,
        )
    )
    for child in tree.children(node):
        _flatten(tree, child, path, entries)
