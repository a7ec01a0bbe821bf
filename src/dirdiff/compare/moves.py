"""Move detection — second pass over a finished DiffTree.

A REMOVED file and an ADDED file with the same base name are taken to be
one file that was relocated. When a namespace extractor applies to the file
name, the declared namespaces must match as well; files in different
packages are different files even if they share a name.

Pairing policy when several ADDED files qualify for one REMOVED file:
  - REMOVED files are paired in pre-order.
  - The candidate whose parent directories share the longest leading run
    with the REMOVED file's wins.
  - Remaining ties go to the candidate seen first in pre-order.
  - An ADDED file is paired at most once.

A REMOVED directory emptied by moves is dropped along with the file.
"""

from __future__ import annotations

import filecmp
import logging
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

from dirdiff.compare.files import FileComparator
from dirdiff.compare.models import DiffNode, DiffStatus, DiffTree
from dirdiff.namespaces.registry import ExtractorRegistry

logger = logging.getLogger(__name__)

# (file name, extractor id, declared namespace)
MoveKey = Tuple[str, Optional[str], Optional[str]]


@dataclass(frozen=True)
class Move:
    """Audit record of one inferred move."""

    source: str  # relative path of the removed file
    destination: str  # relative path of the added file
    status: DiffStatus  # MOVED or MOVED_MODIFIED


def _parent_parts(relative_path: str) -> List[str]:
    return relative_path.split("/")[:-1]


def shared_prefix(a: str, b: str) -> int:
    """Number of leading parent directories two relative paths have in common."""
    count = 0
    for x, y in zip(_parent_parts(a), _parent_parts(b)):
        if x != y:
            break
        count += 1
    return count


def _depth(node: DiffNode) -> int:
    return 0 if not node.relative_path else node.relative_path.count("/") + 1


class MoveDetector:
    """Pair ADDED and REMOVED leaves of a DiffTree and rewrite them as moves."""

    def __init__(
        self,
        left_root: Optional[Path],
        right_root: Optional[Path],
        file_comparator: Optional[FileComparator] = None,
        extractors: Optional[ExtractorRegistry] = None,
    ) -> None:
        self.left_root = left_root
        self.right_root = right_root
        self.file_comparator = file_comparator or FileComparator()
        self.extractors = extractors

    def detect(self, tree: DiffTree) -> List[Move]:
        """Rewrite *tree* in place. Returns the moves that were applied."""
        filecmp.clear_cache()
        added: List[DiffNode] = []
        removed: List[DiffNode] = []
        for node in tree.walk():
            if node.is_directory:
                continue
            if node.status == DiffStatus.ADDED:
                added.append(node)
            elif node.status == DiffStatus.REMOVED:
                removed.append(node)

        if not added or not removed:
            return []

        shared_names = {n.name for n in added} & {n.name for n in removed}
        position = {n.index: i for i, n in enumerate(added)}

        buckets: Dict[MoveKey, List[DiffNode]] = defaultdict(list)
        for a in added:
            if a.name in shared_names:
                buckets[self._key(a, self._right_path(a))].append(a)

        used: Set[int] = set()
        moves: List[Move] = []
        touched: Set[int] = set()

        for r in removed:
            if r.name not in shared_names:
                continue
            candidates = [
                a for a in buckets.get(self._key(r, self._left_path(r)), [])
                if a.index not in used
            ]
            if not candidates:
                continue
            target = min(
                candidates,
                key=lambda a: (-shared_prefix(r.relative_path, a.relative_path), position[a.index]),
            )
            used.add(target.index)
            moves.append(self._apply(tree, r, target))
            parent = self._prune(tree, tree.detach(r.index))
            if parent is not None:
                touched.add(parent)
            if target.parent is not None:
                touched.add(target.parent)

        self._rederive(tree, touched)
        return moves

    # ---- helpers ----

    def _left_path(self, node: DiffNode) -> Path:
        assert self.left_root is not None
        return self.left_root / node.relative_path

    def _right_path(self, node: DiffNode) -> Path:
        assert self.right_root is not None
        return self.right_root / node.relative_path

    def _key(self, node: DiffNode, path: Path) -> MoveKey:
        extractor = self.extractors.for_file(node.name) if self.extractors else None
        if extractor is None:
            return (node.name, None, None)
        text = self.file_comparator.decode(path.read_bytes())
        return (node.name, extractor.id, extractor.extract(text))

    def _apply(self, tree: DiffTree, removed: DiffNode, added: DiffNode) -> Move:
        source = self._left_path(removed)
        destination = self._right_path(added)

        if filecmp.cmp(source, destination, shallow=False):
            status = DiffStatus.MOVED
            tree.update(
                added.index,
                status=status,
                added=0,
                removed=0,
                modified=0,
                percentage=0.0,
                source_path=removed.relative_path,
            )
        else:
            status = DiffStatus.MOVED_MODIFIED
            diff = self.file_comparator.compare_files(source, destination)
            tree.update(
                added.index,
                status=status,
                added=diff.added,
                removed=diff.removed,
                modified=diff.modified,
                percentage=diff.percentage,
                source_path=removed.relative_path,
            )

        logger.info("Move: %s -> %s (%s)", removed.relative_path, added.relative_path, status.value)
        return Move(source=removed.relative_path, destination=added.relative_path, status=status)

    @staticmethod
    def _prune(tree: DiffTree, index: Optional[int]) -> Optional[int]:
        """Detach REMOVED directories left empty by a move. Returns the first survivor."""
        while index is not None:
            node = tree.node(index)
            if node.parent is None or node.status != DiffStatus.REMOVED or node.child_ids:
                return index
            index = tree.detach(index)
        return None

    @staticmethod
    def _rederive(tree: DiffTree, touched: Set[int]) -> None:
        """Re-derive directory statuses bottom-up along every touched path."""
        pending: Dict[int, DiffNode] = {}
        for index in touched:
            node = tree.node(index)
            pending[node.index] = node
            for ancestor in tree.ancestors(node):
                pending[ancestor.index] = ancestor
        for node in sorted(pending.values(), key=_depth, reverse=True):
            tree.rederive_status(node.index)
