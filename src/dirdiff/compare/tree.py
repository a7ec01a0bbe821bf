"""Recursive union of two directory trees into a DiffTree."""

from __future__ import annotations

import filecmp
import logging
import os
from pathlib import Path
from typing import List, Optional, Set

from dirdiff.compare.files import FileComparator
from dirdiff.compare.ignore import IgnoreMatcher
from dirdiff.compare.models import DiffStatus, DiffTree, derive_directory_status

logger = logging.getLogger(__name__)


def root_name(left: Optional[Path], right: Optional[Path]) -> str:
    """Name shown for the root: right side first, then left, then 'root'."""
    for side in (right, left):
        if side is not None and side.name:
            return side.name
    return "root"


def _present(path: Optional[Path]) -> Optional[Path]:
    return path if path is not None and path.exists() else None


class TreeComparator:
    """Build a DiffTree from two optional directory roots.

    Usage::

        comparator = TreeComparator(IgnoreMatcher(), FileComparator())
        tree = comparator.compare_directories(Path("old"), Path("new"))
    """

    def __init__(
        self,
        matcher: Optional[IgnoreMatcher] = None,
        file_comparator: Optional[FileComparator] = None,
    ) -> None:
        self.matcher = matcher or IgnoreMatcher()
        self.file_comparator = file_comparator or FileComparator()

    def compare_directories(self, left: Optional[Path], right: Optional[Path]) -> DiffTree:
        # filecmp caches results by path and stat signature; start each run cold
        filecmp.clear_cache()
        tree = DiffTree()
        self.compare(tree, root_name(left, right), _present(left), _present(right), "")
        return tree

    def compare(
        self,
        tree: DiffTree,
        name: str,
        left: Optional[Path],
        right: Optional[Path],
        relative_path: str,
        parent: Optional[int] = None,
    ) -> int:
        """Compare one entry (and everything under it). Returns its node index."""
        is_dir = any(side is not None and side.is_dir() for side in (left, right))

        if left is None:
            status = DiffStatus.ADDED
        elif right is None:
            status = DiffStatus.REMOVED
        elif is_dir:
            status = DiffStatus.IDENTICAL  # revised once children are known
        elif filecmp.cmp(left, right, shallow=False):
            status = DiffStatus.IDENTICAL
        else:
            status = DiffStatus.MODIFIED

        index = tree.add(
            name,
            is_directory=is_dir,
            status=status,
            relative_path=relative_path,
            parent=parent,
        )

        if is_dir:
            child_ids: List[int] = []
            for child_name in self._child_names(left, right):
                child_left = _present(left / child_name) if left is not None else None
                child_right = _present(right / child_name) if right is not None else None
                if child_left is None and child_right is None:
                    continue  # vanished since listing
                child_rel = f"{relative_path}/{child_name}" if relative_path else child_name
                child_ids.append(
                    self.compare(tree, child_name, child_left, child_right, child_rel, index)
                )
            tree.update(index, child_ids=tuple(child_ids))
            tree.update(index, status=derive_directory_status(status, tree.children(index)))
        elif status != DiffStatus.IDENTICAL:
            diff = self.file_comparator.compare_files(left, right)
            tree.update(
                index,
                added=diff.added,
                removed=diff.removed,
                modified=diff.modified,
                percentage=diff.percentage,
            )

        return index

    def _child_names(self, left: Optional[Path], right: Optional[Path]) -> List[str]:
        """Sorted union of the non-ignored entry names on both sides."""
        names: Set[str] = set()
        for side in (left, right):
            if side is None or not side.is_dir():
                continue
            with os.scandir(side) as it:
                for entry in it:
                    if self.matcher.is_ignored(entry.path):
                        logger.debug("Ignoring %s", entry.path)
                        continue
                    names.add(entry.name)
        return sorted(names)
